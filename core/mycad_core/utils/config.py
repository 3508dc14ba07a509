"""Helpers for loading service configuration from the environment."""

from typing import TypeVar

from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..exceptions import MissingConfigError


class EnvSettings(BaseSettings):
    """Base class for all service configs.

    Fields declare their environment variable through `alias`.
    Empty variables are treated as undefined, so `FOO=` counts as missing.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=False,
        extra="ignore",
    )


SettingsT = TypeVar("SettingsT", bound=BaseSettings)


def load_config(cls: type[SettingsT]) -> SettingsT:
    """Instantiates a settings class, failing fast with the names of every
    missing environment variable.

    Raises
    ------
    `MissingConfigError`
        If one or more required environment variables are not defined.
    `pydantic.ValidationError`
        If a variable is defined but holds an invalid value.
    """
    try:
        return cls()
    except ValidationError as e:
        missing = [
            ".".join(str(p) for p in err["loc"])
            for err in e.errors()
            if err["type"] == "missing"
        ]
        if missing:
            raise MissingConfigError(missing) from e
        raise
