from .base import MyCADError


class MissingConfigError(MyCADError):
    """Raised when one or more required environment variables are not defined."""

    def __init__(self, keys: list[str]) -> None:
        self.keys = keys
        super().__init__("Missing env var: {}".format(", ".join(keys)))
