from __future__ import annotations

import re
from datetime import datetime
from typing import Any

NOT_AVAILABLE = "N/A"
_LEADING_NUMBER = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+))")

_ORDER_STATUS_TONES = {
    "pending": "warning",
    "confirmed": "info",
    "delivered": "success",
    "cancelled": "danger",
    "cancelledbyadmin": "danger",
}

_PAYMENT_STATUS_TONES = {
    "paid": "success",
    "unpaid": "danger",
    "failed": "attention",
}


def parse_datetime(value: Any) -> datetime | None:
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    raw = value.strip()
    if raw.endswith("Z"):
        raw = f"{raw[:-1]}+00:00"
    try:
        return datetime.fromisoformat(raw)
    except ValueError:
        return None


def format_datetime(value: Any) -> str:
    """``MM/DD/YY, HH:MM`` in local time."""
    parsed = parse_datetime(value)
    if parsed is None:
        return NOT_AVAILABLE
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone()
    return parsed.strftime("%m/%d/%y, %H:%M")


def format_status_text(status: str | None) -> str:
    if not status:
        return NOT_AVAILABLE
    if status.lower() == "cancelledbyadmin":
        return "Cancelled by Admin"
    return status


def format_money(value: Any, default: str = "0.00") -> str:
    if value is None or isinstance(value, bool):
        return default
    try:
        return f"{float(value):.2f}"
    except (TypeError, ValueError):
        return default


def text_or_na(value: Any) -> str:
    if value is None:
        return NOT_AVAILABLE
    text = str(value).strip()
    return text or NOT_AVAILABLE


def nested(row: dict[str, Any], *path: str) -> Any:
    value: Any = row
    for key in path:
        if not isinstance(value, dict):
            return None
        value = value.get(key)
    return value


def status_tone(kind: str, status: str | None) -> str:
    tones = _PAYMENT_STATUS_TONES if kind == "payment" else _ORDER_STATUS_TONES
    return tones.get((status or "").lower(), "neutral")


def format_count(value: Any) -> str:
    """Thousands separators, at most three decimals: ``1234.5`` -> ``1,234.5``."""
    if value is None or isinstance(value, bool):
        return "0"
    try:
        number = float(value)
    except (TypeError, ValueError):
        return "0"
    return f"{number:,.3f}".rstrip("0").rstrip(".")


def parse_percentage(value: Any) -> float:
    """Leading number of a value such as ``"12.50%"``; 0.0 when there is none."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    match = _LEADING_NUMBER.match(str(value or ""))
    return float(match.group(1)) if match else 0.0
