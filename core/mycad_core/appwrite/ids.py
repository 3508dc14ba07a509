import secrets
from datetime import datetime
from typing import Optional

_HEX = "0123456789abcdef"


def unique_id(padding: int = 7, now: Optional[datetime] = None) -> str:
    """Generates an Appwrite-compatible unique ID.

    The ID is a hex encoded timestamp (seconds + sub-millisecond part)
    followed by `padding` random hex characters, 20 characters by default.
    """
    now = now or datetime.now()
    sec = int(now.timestamp())
    usec = now.microsecond % 1000
    random_part = "".join(secrets.choice(_HEX) for _ in range(padding))
    return f"{sec:08x}{usec:05x}{random_part}"
