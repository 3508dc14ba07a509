import json
from typing import Any, Union

QueryValue = Union[str, int, float, bool]


class Query:
    """Builds query strings understood by the Appwrite REST API (1.5+).

    Example:
        >>> Query.equal("enabled", True)
        '{"method": "equal", "attribute": "enabled", "values": [true]}'
    """

    @staticmethod
    def _build(method: str, attribute: Any = None, values: Any = None) -> str:
        q: dict[str, Any] = {"method": method}
        if attribute is not None:
            q["attribute"] = attribute
        if values is not None:
            q["values"] = values if isinstance(values, list) else [values]
        return json.dumps(q)

    @staticmethod
    def equal(attribute: str, value: Union[QueryValue, list[QueryValue]]) -> str:
        return Query._build("equal", attribute, value)

    @staticmethod
    def limit(limit: int) -> str:
        return Query._build("limit", values=limit)

    @staticmethod
    def cursor_after(document_id: str) -> str:
        return Query._build("cursorAfter", values=document_id)
