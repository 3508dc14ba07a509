from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from starlette.datastructures import URL


class ServiceStatusCode(Enum):
    OK = "OK"
    WARNING = "WARNING"
    ERROR = "ERROR"
    DOWN = "DOWN"


class ServiceStatus(BaseModel):
    model_config = ConfigDict(
        extra="allow",
        json_schema_extra={
            "example": {
                "status": "OK",
                "message": "Service is running",
                "url": "http://localhost:5000",
            }
        },
    )

    status: ServiceStatusCode = Field(..., description="The status of the service.")
    message: Optional[str] = Field(
        None, description="Additional information about the status."
    )
    url: str = Field(..., description="URL of the service.")

    @field_validator("url", mode="before")
    @classmethod
    def coerce_url_str(cls, v: Union[str, URL]) -> str:
        if isinstance(v, str):
            return v
        return str(v)
