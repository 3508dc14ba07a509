from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest
from hypothesis import given
from hypothesis import strategies as st
from mycad_core.appwrite import AppwriteConfig, unique_id
from mycad_core.exceptions import MissingConfigError
from mycad_core.models.validators import to_decimal, to_nonnegative_int
from mycad_core.utils.config import load_config
from mycad_core.utils.time import (
    epoch_ms,
    format_long_date,
    hours_ago,
    is_older_than,
    isoformat_utc,
    parse_datetime,
)


def test_format_long_date() -> None:
    assert format_long_date("2025-03-24T15:00:00.000+00:00") == "24 de marzo de 2025"
    assert format_long_date("2025-03-24", lang="en") == "March 24, 2025"
    assert format_long_date("") == "-"
    assert format_long_date(None) == "-"
    assert format_long_date("mañana") == "mañana"


def test_format_long_date_uses_utc() -> None:
    assert format_long_date("2025-03-24T23:30:00-06:00") == "25 de marzo de 2025"


def test_parse_datetime() -> None:
    dt = parse_datetime("2025-03-24T15:00:00.000+02:00")
    assert dt == datetime(2025, 3, 24, 13, 0, tzinfo=timezone.utc)
    assert parse_datetime("yesterday") is None
    assert parse_datetime(None) is None


def test_is_older_than() -> None:
    now = datetime(2025, 3, 24, tzinfo=timezone.utc)
    threshold = hours_ago(24, now)
    assert threshold == now - timedelta(hours=24)
    assert is_older_than("2025-03-22T00:00:00+00:00", threshold)
    assert is_older_than("2025-03-22T00:00:00", threshold)
    assert not is_older_than("2025-03-23T12:00:00+00:00", threshold)
    assert not is_older_than("garbage", threshold)


def test_epoch_ms() -> None:
    assert epoch_ms(datetime(1970, 1, 1, 0, 0, 1, tzinfo=timezone.utc)) == 1000


def test_isoformat_utc() -> None:
    cdmx = timezone(timedelta(hours=-6))
    dt = datetime(2025, 3, 24, 9, 30, 15, 123456, tzinfo=cdmx)
    assert isoformat_utc(dt) == "2025-03-24T15:30:15.123Z"
    assert isoformat_utc().endswith("Z")


def test_unique_id() -> None:
    now = datetime(2025, 3, 24, 12, 0, 0, 123456)
    uid = unique_id(now=now)
    assert len(uid) == 20
    assert uid[:8] == f"{int(now.timestamp()):08x}"
    assert int(uid, 16) >= 0
    assert unique_id() != unique_id()


def test_to_decimal() -> None:
    assert to_decimal("12.50") == Decimal("12.50")
    assert to_decimal(3) == Decimal(3)
    assert to_decimal(None) == Decimal(0)
    assert to_decimal(True) == Decimal(0)
    assert to_decimal("abc") == Decimal(0)
    assert to_decimal("Infinity") == Decimal(0)
    assert to_nonnegative_int("-3") == 0
    assert to_nonnegative_int("2.7") == 2


@given(st.one_of(st.none(), st.booleans(), st.integers(), st.floats(), st.text()))
def test_to_decimal_is_finite(v) -> None:
    assert to_decimal(v).is_finite()


def test_load_config_missing(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in ("APPWRITE_FUNCTION_PROJECT_ID", "APPWRITE_PROJECT_ID", "APPWRITE_API_KEY"):
        monkeypatch.delenv(key, raising=False)
    with pytest.raises(MissingConfigError) as exc_info:
        load_config(AppwriteConfig)
    assert "APPWRITE_API_KEY" in str(exc_info.value)
    assert str(exc_info.value).startswith("Missing env var: ")


def test_load_config_project_id_alias(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("APPWRITE_FUNCTION_PROJECT_ID", raising=False)
    monkeypatch.delenv("APPWRITE_ENDPOINT", raising=False)
    monkeypatch.setenv("APPWRITE_PROJECT_ID", "p1")
    monkeypatch.setenv("APPWRITE_API_KEY", "k1")
    config = load_config(AppwriteConfig)
    assert config.appwrite_project_id == "p1"
    assert config.appwrite_endpoint == "https://appwrite.racoondevs.com/v1"
    assert config.appwrite_timeout == 30.0
