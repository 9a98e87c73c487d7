from datetime import datetime, timezone

import pytest

from storefront_admin.app.ui.formatters import (
    format_count,
    format_datetime,
    format_money,
    format_status_text,
    nested,
    parse_datetime,
    parse_percentage,
    status_tone,
    text_or_na,
)


def test_format_datetime_uses_short_local_format() -> None:
    assert format_datetime("2024-03-05T14:07:00") == "03/05/24, 14:07"


def test_format_datetime_converts_utc_to_local_time() -> None:
    expected = datetime(2024, 3, 5, 14, 7, tzinfo=timezone.utc).astimezone().strftime("%m/%d/%y, %H:%M")

    assert format_datetime("2024-03-05T14:07:00Z") == expected


def test_format_datetime_invalid_values_are_not_available() -> None:
    assert format_datetime(None) == "N/A"
    assert format_datetime("") == "N/A"
    assert format_datetime("yesterday") == "N/A"


def test_parse_datetime_accepts_datetime_instances() -> None:
    value = datetime(2024, 1, 1, 8, 30)

    assert parse_datetime(value) is value


def test_status_text_spells_out_admin_cancellation() -> None:
    assert format_status_text("CancelledByAdmin") == "Cancelled by Admin"
    assert format_status_text("Delivered") == "Delivered"
    assert format_status_text(None) == "N/A"


def test_format_money() -> None:
    assert format_money(9) == "9.00"
    assert format_money("12.345") == "12.35"
    assert format_money(None) == "0.00"
    assert format_money("abc") == "0.00"


def test_text_or_na_and_nested_lookup() -> None:
    row = {"user": {"name": "Ann"}, "blank": "  "}

    assert nested(row, "user", "name") == "Ann"
    assert nested(row, "user", "email") is None
    assert nested({"user": None}, "user", "name") is None
    assert text_or_na(row["blank"]) == "N/A"
    assert text_or_na(0) == "0"


def test_status_tones() -> None:
    assert status_tone("order", "Pending") == "warning"
    assert status_tone("order", "Confirmed") == "info"
    assert status_tone("order", "Delivered") == "success"
    assert status_tone("order", "CancelledByAdmin") == "danger"
    assert status_tone("payment", "Paid") == "success"
    assert status_tone("payment", "Unpaid") == "danger"
    assert status_tone("payment", "Failed") == "attention"
    assert status_tone("payment", "Refunded") == "neutral"
    assert status_tone("order", None) == "neutral"


@pytest.mark.parametrize(
    ("value", "expected"),
    [(1234.5, "1,234.5"), (1000000, "1,000,000"), ("12.3456", "12.346"), (0, "0"), (None, "0"), ("abc", "0"), (True, "0")],
)
def test_format_count(value, expected: str) -> None:
    assert format_count(value) == expected


@pytest.mark.parametrize(
    ("value", "expected"),
    [("12.50%", 12.5), ("-3%", -3.0), (" +7 ", 7.0), (".5%", 0.5), (4, 4.0), ("n/a", 0.0), (None, 0.0), ("", 0.0)],
)
def test_parse_percentage(value, expected: float) -> None:
    assert parse_percentage(value) == expected
