import json
from typing import Any

from fastapi import Request


async def read_payload(request: Request) -> dict[str, Any]:
    """Parses the JSON body. Anything but a JSON object counts as empty."""
    body = await request.body()
    if not body:
        return {}
    try:
        payload = json.loads(body)
    except ValueError:
        return {}
    return payload if isinstance(payload, dict) else {}
