"""Denormalized, read-only view of a report and its related documents.

Built from raw Appwrite documents on every generation request and
never persisted.
"""

from decimal import Decimal
from enum import Enum
from typing import Any, Literal, Optional, Union

from mycad_core.models.validators import to_decimal, to_nonnegative_int
from pydantic import BaseModel, Field

Document = dict[str, Any]

PLACEHOLDER = "-"


class ReportType(str, Enum):
    SERVICE = "service"
    REPAIR = "repair"


DOCUMENT_TITLES = {
    ReportType.SERVICE: "Reporte de Servicio",
    ReportType.REPAIR: "Reporte de Reparación",
}


def _str(v: Any) -> Optional[str]:
    if v is None or v == "":
        return None
    return str(v)


class Profile(BaseModel):
    first_name: str = ""
    last_name: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @classmethod
    def from_document(cls, doc: Optional[Document]) -> Optional["Profile"]:
        if not doc:
            return None
        return cls(
            first_name=doc.get("firstName") or "",
            last_name=doc.get("lastName") or "",
        )


class Vehicle(BaseModel):
    type_name: Optional[str] = None
    brand_name: Optional[str] = None
    model_name: Optional[str] = None
    model_year: Optional[str] = None
    plate: Optional[str] = None
    economic_number: Optional[str] = None
    serial_number: Optional[str] = None
    color: Optional[str] = None

    @classmethod
    def from_documents(
        cls,
        vehicle: Document,
        type_: Optional[Document] = None,
        brand: Optional[Document] = None,
        model: Optional[Document] = None,
    ) -> "Vehicle":
        return cls(
            type_name=_str((type_ or {}).get("name")),
            brand_name=_str((brand or {}).get("name")),
            model_name=_str((model or {}).get("name")),
            model_year=_str((model or {}).get("year")),
            plate=_str(vehicle.get("plate")),
            economic_number=_str(vehicle.get("economicNumber")),
            serial_number=_str(vehicle.get("serialNumber")),
            color=_str(vehicle.get("color")),
        )

    @property
    def brand_model(self) -> str:
        return f"{self.brand_name or PLACEHOLDER} {self.model_name or PLACEHOLDER}"


class Group(BaseModel):
    id: str
    name: str = ""
    logo_file_id: Optional[str] = None
    logo: Optional[bytes] = Field(None, repr=False)

    @classmethod
    def from_document(cls, doc: Document, logo: Optional[bytes] = None) -> "Group":
        return cls(
            id=doc.get("$id", ""),
            name=doc.get("name") or "",
            logo_file_id=_str(doc.get("logoFileId")),
            logo=logo,
        )


class PartLineItem(BaseModel):
    name: str = ""
    quantity: int = Field(0, ge=0)
    unit_cost: Decimal = Field(Decimal(0), ge=0)

    @property
    def subtotal(self) -> Decimal:
        return self.quantity * self.unit_cost

    @classmethod
    def from_document(cls, doc: Document) -> "PartLineItem":
        return cls(
            name=doc.get("name") or "",
            quantity=to_nonnegative_int(doc.get("quantity")),
            unit_cost=max(to_decimal(doc.get("unitCost")), Decimal(0)),
        )


class ServiceDetails(BaseModel):
    kind: Literal["service"] = "service"
    service_date: Optional[str] = None
    service_type: Optional[str] = None
    odometer: Optional[Decimal] = None
    vendor_name: Optional[str] = None
    workshop_address: Optional[str] = None
    workshop_phone: Optional[str] = None
    description: Optional[str] = None
    labor_cost: Decimal = Decimal(0)

    @classmethod
    def from_document(cls, doc: Document) -> "ServiceDetails":
        odometer = to_decimal(doc.get("odometer"))
        return cls(
            service_date=_str(doc.get("serviceDate")),
            service_type=_str(doc.get("serviceType")),
            odometer=odometer or None,
            vendor_name=_str(doc.get("vendorName")),
            workshop_address=_str(doc.get("workshopAddress")),
            workshop_phone=_str(doc.get("workshopPhone")),
            description=_str(doc.get("description")),
            labor_cost=to_decimal(doc.get("laborCost")),
        )


class RepairDetails(BaseModel):
    kind: Literal["repair"] = "repair"
    report_date: Optional[str] = None
    damage_type: Optional[str] = None
    workshop_name: Optional[str] = None
    damage_description: Optional[str] = None
    labor_cost: Decimal = Decimal(0)
    parts_cost: Decimal = Decimal(0)
    final_cost: Decimal = Decimal(0)

    @classmethod
    def from_document(cls, doc: Document) -> "RepairDetails":
        return cls(
            report_date=_str(doc.get("reportDate")),
            damage_type=_str(doc.get("damageType")),
            workshop_name=_str(doc.get("workshopName")),
            damage_description=_str(doc.get("damageDescription")),
            labor_cost=to_decimal(doc.get("laborCost")),
            parts_cost=to_decimal(doc.get("partsCost")),
            final_cost=to_decimal(doc.get("finalCost")),
        )


class CostSummary(BaseModel):
    labor: Decimal
    parts: Decimal
    total: Decimal


class ReportViewModel(BaseModel):
    report_type: ReportType
    id: str
    title: str = ""
    status: Optional[str] = None
    created_at: Optional[str] = None
    finalized_at: Optional[str] = None
    report_file_id: Optional[str] = None
    created_by: Optional[Profile] = None
    finalized_by: Optional[Profile] = None
    vehicle: Vehicle
    group: Group
    parts: list[PartLineItem] = Field(default_factory=list)
    details: Union[ServiceDetails, RepairDetails] = Field(..., discriminator="kind")

    @property
    def document_title(self) -> str:
        return f"{DOCUMENT_TITLES[self.report_type]} - {self.title}"

    @property
    def is_finalized(self) -> bool:
        return bool(self.finalized_at)

    def costs(self) -> CostSummary:
        """Computes the cost summary shown at the bottom of the report.

        Service reports add the labor cost to the sum of the part subtotals.
        Repair reports use the reported costs, where a missing (or zero)
        final cost falls back to labor + parts.
        """
        d = self.details
        if isinstance(d, ServiceDetails):
            parts = sum((p.subtotal for p in self.parts), Decimal(0))
            return CostSummary(labor=d.labor_cost, parts=parts, total=d.labor_cost + parts)
        total = d.final_cost or (d.labor_cost + d.parts_cost)
        return CostSummary(labor=d.labor_cost, parts=d.parts_cost, total=total)

    @classmethod
    def from_documents(
        cls,
        report_type: ReportType,
        report: Document,
        vehicle: Vehicle,
        group: Group,
        parts: list[Document],
        created_by: Optional[Document] = None,
        finalized_by: Optional[Document] = None,
    ) -> "ReportViewModel":
        details: Union[ServiceDetails, RepairDetails]
        if report_type == ReportType.SERVICE:
            details = ServiceDetails.from_document(report)
        else:
            details = RepairDetails.from_document(report)
        return cls(
            report_type=report_type,
            id=report.get("$id", ""),
            title=report.get("title") or "",
            status=_str(report.get("status")),
            created_at=_str(report.get("$createdAt")),
            finalized_at=_str(report.get("finalizedAt")),
            report_file_id=_str(report.get("reportFileId")),
            created_by=Profile.from_document(created_by),
            finalized_by=Profile.from_document(finalized_by),
            vehicle=vehicle,
            group=group,
            parts=[PartLineItem.from_document(p) for p in parts],
            details=details,
        )
