import asyncio
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from io import BytesIO
from typing import Final, Optional

from loguru import logger
from mycad_core.utils.time import format_long_date, utcnow
from PIL import Image
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen.canvas import Canvas

from ...viewmodel import (
    PLACEHOLDER,
    Profile,
    RepairDetails,
    ReportType,
    ReportViewModel,
    ServiceDetails,
)
from .cursor import DocumentCursor
from .styles import (
    ACCENT,
    APP_NAME,
    AUTHOR,
    BACKGROUND,
    BORDER,
    CREATOR,
    FONT,
    FONT_BOLD,
    PAGE_FOOTER,
    PAGE_SIZE,
    PRIMARY,
    PRIMARY_DARK,
    SECONDARY,
    TEXT,
    TEXT_LIGHT,
    WHITE,
)

SUBTITLES: Final = {
    ReportType.SERVICE: "REPORTE DE SERVICIO",
    ReportType.REPAIR: "REPORTE DE REPARACIÓN",
}
SUBJECTS: Final = {
    ReportType.SERVICE: "Reporte de Servicio de Vehículo",
    ReportType.REPAIR: "Reporte de Reparación de Vehículo",
}
PARTS_TITLES: Final = {
    ReportType.SERVICE: "Refacciones Reemplazadas",
    ReportType.REPAIR: "Partes Reparadas",
}
UNTITLED: Final = "Sin título"
SYSTEM_USER: Final = "Sistema"

HEADER_HEIGHT: Final[float] = 70
LOGO_TEXT_X: Final[float] = 120
SECTION_GAP: Final[float] = 15

# Two-column layout used by the vehicle box and the detail sections
COL1: Final[float] = 70
COL2: Final[float] = 320

# Parts table columns: (x, width, alignment)
TABLE_COLUMNS: Final = (
    ("Descripción", 60, 240, "left"),
    ("Cant.", 310, 70, "center"),
    ("P. Unit.", 380, 90, "right"),
    ("Total", 470, 90, "right"),
)
TABLE_HEADER_HEIGHT: Final[float] = 20
TABLE_ROW_HEIGHT: Final[float] = 18

CENTS = Decimal("0.01")
# Amounts from here on are shown in exponent notation
EXPONENT_THRESHOLD = Decimal("1e21")


def format_money(value: Decimal) -> str:
    """Formats an amount as `$` followed by exactly two decimals.

    >>> format_money(Decimal("330"))
    '$330.00'
    >>> format_money(Decimal("1e30"))
    '$1.00e+30'
    """
    if abs(value) >= EXPONENT_THRESHOLD:
        return f"${value:.2e}"
    return f"${value.quantize(CENTS, rounding=ROUND_HALF_UP)}"


def format_odometer(value: Optional[Decimal]) -> str:
    if value is None:
        return PLACEHOLDER
    return f"{format(value.normalize(), ',f')} km"


def or_placeholder(value: Optional[str]) -> str:
    return value if value else PLACEHOLDER


def draw_page_footer(cursor: DocumentCursor) -> None:
    cursor.text(
        PAGE_FOOTER,
        cursor.left,
        cursor.height - 40,
        size=8,
        color=TEXT_LIGHT,
        align="center",
        width=cursor.content_width,
    )


async def create_document(
    view: ReportViewModel, generated_at: Optional[datetime] = None
) -> bytes:
    """Renders the report PDF in a worker thread."""
    loop = asyncio.get_event_loop()
    return await loop.run_in_executor(None, render, view, generated_at)


def render(view: ReportViewModel, generated_at: Optional[datetime] = None) -> bytes:
    """NOTE: blocking"""
    return ReportDocument(view, generated_at).generate_pdf()


class ReportDocument:
    view: ReportViewModel
    canvas: Canvas
    cursor: DocumentCursor

    def __init__(
        self, view: ReportViewModel, generated_at: Optional[datetime] = None
    ) -> None:
        self.view = view
        self.generated_at = generated_at or utcnow()
        self.buffer = BytesIO()
        self.canvas = Canvas(self.buffer, pagesize=PAGE_SIZE)
        self.cursor = DocumentCursor(self.canvas, on_page_end=draw_page_footer)
        self._set_metadata()

    def _set_metadata(self) -> None:
        self.canvas.setTitle(self.view.document_title)
        self.canvas.setAuthor(AUTHOR)
        self.canvas.setSubject(SUBJECTS[self.view.report_type])
        self.canvas.setCreator(CREATOR)

    @property
    def width(self) -> float:
        return self.cursor.width

    def generate_pdf(self) -> bytes:
        logger.debug(f"Rendering PDF for {self.view.report_type.value} report {self.view.id}")
        self.add_header()
        self.add_status_badge()
        self.add_title()
        self.add_vehicle_info()
        if isinstance(self.view.details, ServiceDetails):
            self.add_service_details(self.view.details)
        else:
            self.add_repair_details(self.view.details)
        if self.view.parts:
            self.add_parts_table()
        self.add_cost_summary()
        self.add_audit_info()
        self.cursor.end_page()
        self.canvas.save()
        return self.buffer.getvalue()

    # Header

    def add_header(self) -> None:
        c = self.cursor
        c.rect(0, 0, self.width, HEADER_HEIGHT, fill=PRIMARY)
        subtitle = SUBTITLES[self.view.report_type]
        if self._draw_logo():
            # name and subtitle move right of the logo
            c.text(APP_NAME, LOGO_TEXT_X, 20, size=14, font=FONT_BOLD, color=WHITE)
            c.text(subtitle, LOGO_TEXT_X, 42, size=9, color=WHITE)
        else:
            c.text(APP_NAME, c.left, 20, size=16, font=FONT_BOLD, color=WHITE)
            c.text(subtitle, c.left, 45, size=9, color=WHITE)
        c.text(
            f"Generado: {format_long_date(self.generated_at)}",
            self.width - 200,
            45,
            size=8,
            color=WHITE,
            align="right",
            width=150,
        )

    def _draw_logo(self) -> bool:
        """Draws the group logo in the header. Returns False if there is none."""
        logo = self.view.group.logo
        if not logo:
            return False
        try:
            with Image.open(BytesIO(logo)) as img:
                img.load()
                image = ImageReader(img.convert("RGBA"))
            self.cursor.image(image, self.cursor.left, 15, 60, 40)
        except (OSError, ValueError) as e:
            logger.warning(f"Unable to draw logo of group {self.view.group.id}: {e}")
            return False
        return True

    def add_status_badge(self) -> None:
        c = self.cursor
        finalized = self.view.is_finalized
        x, y = self.width - 140, 25
        c.rect(x, y, 90, 20, fill=ACCENT if finalized else SECONDARY, radius=3)
        c.text(
            "FINALIZADO" if finalized else "BORRADOR",
            x,
            y + 6,
            size=8,
            font=FONT_BOLD,
            color=WHITE,
            align="center",
            width=90,
        )

    def add_title(self) -> None:
        c = self.cursor
        c.y = HEADER_HEIGHT + 20
        c.paragraph(
            self.view.title or UNTITLED,
            c.left,
            c.content_width,
            size=18,
            font=FONT_BOLD,
            color=TEXT,
            leading=25,
            justify=False,
        )
        c.advance(SECTION_GAP)

    # Sections

    def _section_title(self, title: str, needed: float = 0) -> None:
        c = self.cursor
        c.ensure_space(18 + needed)
        c.text(title, c.left, size=12, font=FONT_BOLD, color=PRIMARY)
        c.advance(18)

    def _field(
        self, label: str, value: str, x: float, value_offset: float, width: float
    ) -> None:
        c = self.cursor
        c.text(label, x, size=9, font=FONT_BOLD, color=TEXT_LIGHT)
        c.text(value, x + value_offset, size=9, color=TEXT, width=width)

    def add_vehicle_info(self) -> None:
        c = self.cursor
        v = self.view.vehicle
        self._section_title("INFORMACIÓN DEL VEHÍCULO", needed=95)
        top = c.y
        c.rect(c.left, top, c.content_width, 90, fill=BACKGROUND, stroke=BORDER, radius=5)
        left = [
            ("Tipo:", or_placeholder(v.type_name)),
            ("Marca/Modelo:", v.brand_model),
            ("Placas:", or_placeholder(v.plate)),
            ("Año:", or_placeholder(v.model_year)),
        ]
        right = [
            ("N° Económico:", or_placeholder(v.economic_number)),
            ("Serial/VIN:", or_placeholder(v.serial_number)),
            ("Color:", or_placeholder(v.color)),
        ]
        c.y = top + 12
        for label, value in left:
            self._field(label, value, COL1, 90, 150)
            c.advance(16)
        c.y = top + 12
        for label, value in right:
            self._field(label, value, COL2, 90, c.right - COL2 - 100)
            c.advance(16)
        c.y = top + 95 + SECTION_GAP

    def _description(self, label: str, text: Optional[str]) -> None:
        c = self.cursor
        c.ensure_space(24)
        c.text(label, COL1, size=9, font=FONT_BOLD, color=TEXT_LIGHT)
        c.advance(12)
        c.paragraph(
            or_placeholder(text),
            COL1,
            c.right - COL1 - 20,
            size=8,
            color=TEXT,
            leading=10,
        )

    def add_service_details(self, d: ServiceDetails) -> None:
        c = self.cursor
        col2_width = c.right - COL2 - 100
        self._section_title("DETALLES DEL SERVICIO", needed=30)
        self._field("Fecha de Servicio:", format_long_date(d.service_date), COL1, 100, 140)
        self._field("Tipo de Servicio:", or_placeholder(d.service_type), COL2, 100, col2_width)
        c.advance(15)
        if d.odometer is not None or d.vendor_name:
            c.ensure_space(15)
            if d.odometer is not None:
                self._field("Odómetro:", format_odometer(d.odometer), COL1, 100, 140)
            if d.vendor_name:
                self._field("Taller:", d.vendor_name, COL2, 100, col2_width)
            c.advance(15)
        if d.workshop_address:
            c.ensure_space(15)
            c.text("Dirección:", COL1, size=9, font=FONT_BOLD, color=TEXT_LIGHT)
            c.paragraph(
                d.workshop_address,
                COL1 + 100,
                c.right - COL1 - 100,
                size=9,
                leading=12,
                justify=False,
            )
            c.advance(3)
        if d.workshop_phone:
            c.ensure_space(15)
            self._field("Teléfono:", d.workshop_phone, COL1, 100, 140)
            c.advance(15)
        if d.description:
            self._description("Descripción:", d.description)
        c.advance(SECTION_GAP)

    def add_repair_details(self, d: RepairDetails) -> None:
        c = self.cursor
        col2_width = c.right - COL2 - 100
        self._section_title("DETALLES DE LA REPARACIÓN", needed=30)
        self._field("Fecha de Reporte:", format_long_date(d.report_date), COL1, 110, 130)
        self._field("Tipo de Daño:", or_placeholder(d.damage_type), COL2, 100, col2_width)
        c.advance(15)
        if d.workshop_name:
            c.ensure_space(15)
            self._field("Taller:", d.workshop_name, COL1, 110, c.right - COL1 - 110)
            c.advance(15)
        if d.damage_description:
            self._description("Descripción del Daño:", d.damage_description)
        c.advance(SECTION_GAP)

    # Parts table

    def _table_header(self) -> None:
        c = self.cursor
        c.rect(c.left, c.y, c.content_width, TABLE_HEADER_HEIGHT, fill=PRIMARY)
        for label, x, width, align in TABLE_COLUMNS:
            c.text(
                label,
                x,
                c.y + 6,
                size=9,
                font=FONT_BOLD,
                color=WHITE,
                align=align,
                width=width,
            )
        c.advance(TABLE_HEADER_HEIGHT)

    def _table_border(self, top: float) -> None:
        c = self.cursor
        c.rect(c.left, top, c.content_width, c.y - top, stroke=BORDER)

    def add_parts_table(self) -> None:
        c = self.cursor
        self._section_title(
            PARTS_TITLES[self.view.report_type],
            needed=TABLE_HEADER_HEIGHT + TABLE_ROW_HEIGHT,
        )
        top = c.y
        self._table_header()
        for i, part in enumerate(self.view.parts):
            if c.y + TABLE_ROW_HEIGHT > c.bottom:
                self._table_border(top)
                c.new_page()
                top = c.y
                self._table_header()
            if i % 2:
                c.rect(c.left, c.y, c.content_width, TABLE_ROW_HEIGHT, fill=BACKGROUND)
            cells = (
                part.name or PLACEHOLDER,
                str(part.quantity),
                format_money(part.unit_cost),
                format_money(part.subtotal),
            )
            for value, (_, x, width, align) in zip(cells, TABLE_COLUMNS):
                c.text(value, x, c.y + 5, size=8, color=TEXT, align=align, width=width)
            c.advance(TABLE_ROW_HEIGHT)
        self._table_border(top)
        c.advance(SECTION_GAP)

    # Totals and audit trail

    def add_cost_summary(self) -> None:
        c = self.cursor
        costs = self.view.costs()
        parts_label = (
            "Refacciones:" if self.view.report_type == ReportType.SERVICE else "Partes:"
        )
        self._section_title("RESUMEN DE COSTOS", needed=60)
        label_x = self.width - 300
        value_x = c.right - 120
        for label, amount in (("Mano de Obra:", costs.labor), (parts_label, costs.parts)):
            c.text(label, label_x, size=10, color=TEXT_LIGHT)
            c.text(format_money(amount), value_x, size=10, color=TEXT, align="right", width=120)
            c.advance(15)
        c.advance(3)
        c.rect(label_x, c.y, c.right - label_x, 1, fill=PRIMARY_DARK)
        c.advance(6)
        c.text("TOTAL:", label_x, size=12, font=FONT_BOLD, color=PRIMARY)
        c.text(
            format_money(costs.total),
            value_x,
            size=12,
            font=FONT_BOLD,
            color=PRIMARY,
            align="right",
            width=120,
        )
        c.advance(20 + SECTION_GAP)

    def add_audit_info(self) -> None:
        c = self.cursor
        view = self.view
        lines = [
            f"Creado por: {_display_name(view.created_by)} - "
            f"{format_long_date(view.created_at)}"
        ]
        if view.is_finalized and view.finalized_by:
            lines.append(
                f"Finalizado por: {_display_name(view.finalized_by)} - "
                f"{format_long_date(view.finalized_at)}"
            )
        c.ensure_space(12 * len(lines))
        for line in lines:
            c.text(line, c.left, size=8, color=TEXT_LIGHT, width=c.content_width)
            c.advance(12)


def _display_name(profile: Optional[Profile]) -> str:
    if profile and profile.full_name:
        return profile.full_name
    return SYSTEM_USER
