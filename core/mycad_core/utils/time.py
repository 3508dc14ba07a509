from datetime import datetime, timedelta, timezone
from typing import Optional, Union

MONTHS = {
    "es": [
        "enero",
        "febrero",
        "marzo",
        "abril",
        "mayo",
        "junio",
        "julio",
        "agosto",
        "septiembre",
        "octubre",
        "noviembre",
        "diciembre",
    ],
    "en": [
        "January",
        "February",
        "March",
        "April",
        "May",
        "June",
        "July",
        "August",
        "September",
        "October",
        "November",
        "December",
    ],
}

DateLike = Union[str, datetime, None]


def parse_datetime(value: DateLike) -> Optional[datetime]:
    """Parses an ISO 8601 timestamp as stored by Appwrite.

    Aware timestamps are converted to UTC. Returns None if the value
    can't be parsed.
    """
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, str) and value.strip():
        try:
            dt = datetime.fromisoformat(value.strip())
        except ValueError:
            return None
    else:
        return None
    if dt.tzinfo:
        dt = dt.astimezone(timezone.utc)
    return dt


def format_long_date(value: DateLike, lang: str = "es") -> str:
    """Formats a date with the long month name of the given language.

    Example:
        >>> format_long_date("2025-03-24T15:00:00.000+00:00")
        '24 de marzo de 2025'
        >>> format_long_date("2025-03-24", lang="en")
        'March 24, 2025'

    Empty values are rendered as "-", unparseable strings are returned verbatim.
    """
    if value is None or value == "":
        return "-"
    dt = parse_datetime(value)
    if dt is None:
        return str(value)
    if lang == "en":
        return f"{MONTHS['en'][dt.month - 1]} {dt.day}, {dt.year}"
    return f"{dt.day} de {MONTHS['es'][dt.month - 1]} de {dt.year}"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def isoformat_utc(dt: Optional[datetime] = None) -> str:
    """ISO 8601 in UTC with milliseconds and a `Z` suffix (now if no datetime is given)."""
    dt = (dt or utcnow()).astimezone(timezone.utc)
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def epoch_ms(dt: Optional[datetime] = None) -> int:
    """Milliseconds since the epoch (now if no datetime is given)."""
    dt = dt or utcnow()
    return int(dt.timestamp() * 1000)


def hours_ago(hours: float, now: Optional[datetime] = None) -> datetime:
    return (now or utcnow()) - timedelta(hours=hours)


def is_older_than(value: DateLike, threshold: datetime) -> bool:
    """Whether a timestamp lies before `threshold`. Unparseable values never do."""
    dt = parse_datetime(value)
    if dt is None:
        return False
    if not dt.tzinfo:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt < threshold
