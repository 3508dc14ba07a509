"""Request and response bodies of the provisioning endpoints.

Request values are coerced leniently: missing and falsy values become
empty strings and text is stripped, so validation only has to check
for empty strings.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from .exceptions import ProvisioningValidationError

Document = dict[str, Any]


def to_text(v: Any) -> str:
    return str(v).strip() if v else ""


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ProfileRequest(_CamelModel):
    """Profile fields shared by both endpoints."""

    email: str = ""
    name: str = ""
    phone: str = ""
    first_name: str = ""
    last_name: str = ""
    username: str = ""
    avatar_file_id: str = ""
    is_platform_admin: bool = False
    status: str = "ACTIVE"
    enabled: bool = True

    @field_validator(
        "email",
        "name",
        "phone",
        "first_name",
        "last_name",
        "username",
        "avatar_file_id",
        mode="before",
    )
    @classmethod
    def coerce_text(cls, v: Any) -> str:
        return to_text(v)

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, v: str) -> str:
        return v.lower()

    @field_validator("is_platform_admin", mode="before")
    @classmethod
    def only_true_is_admin(cls, v: Any) -> bool:
        return v is True

    @field_validator("status", mode="before")
    @classmethod
    def default_status(cls, v: Any) -> str:
        return str(v) if v else "ACTIVE"

    @field_validator("enabled", mode="before")
    @classmethod
    def enabled_unless_given(cls, v: Any) -> Any:
        return True if v is None else v

    @classmethod
    def parse(cls, payload: dict[str, Any]):
        """Validates a request body.

        Raises
        ------
        `ProvisioningValidationError`
            If a value can't be coerced (e.g. a non-boolean `enabled`).
        """
        try:
            return cls.model_validate(payload)
        except ValidationError as e:
            err = e.errors()[0]
            field = ".".join(str(p) for p in err["loc"])
            raise ProvisioningValidationError(f"{field}: {err['msg']}") from e


class CreateUserRequest(ProfileRequest):
    password: str = ""
    group_id: str = ""
    role: str = ""
    role_id: str = ""
    notes: str = ""

    @field_validator("group_id", mode="before")
    @classmethod
    def coerce_group_id(cls, v: Any) -> str:
        return to_text(v)

    @field_validator("password", "role", "role_id", "notes", mode="before")
    @classmethod
    def coerce_verbatim(cls, v: Any) -> str:
        return str(v) if v else ""


class EnsureProfileRequest(ProfileRequest):
    user_auth_id: str = ""

    @field_validator("user_auth_id", mode="before")
    @classmethod
    def coerce_user_auth_id(cls, v: Any) -> str:
        return to_text(v)


class ProvisionedUser(_CamelModel):
    ok: bool = True
    user: Document
    profile: Document
    group_member: Optional[Document] = None
    user_role: Optional[Document] = None


class EnsuredProfile(_CamelModel):
    ok: bool = True
    created: bool
    profile: Document
