from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .viewmodel import ReportType


class GenerateReportRequest(BaseModel):
    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "reportType": "service",
                "reportId": "65f1c2a3b4d5e6f7a8b9",
                "regenerate": False,
            }
        },
    )

    report_type: ReportType = Field(..., alias="reportType")
    report_id: str = Field(..., alias="reportId", min_length=1)
    regenerate: bool = False

    @field_validator("report_id")
    @classmethod
    def strip_report_id(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("reportId is required")
        return v


class GenerateReportResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    message: str
    file_id: str = Field(..., alias="fileId")
    file_name: Optional[str] = Field(None, alias="fileName")


class ErrorResponse(BaseModel):
    success: bool = False
    error: str
