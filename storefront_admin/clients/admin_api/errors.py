from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import httpx

TRACE_HEADERS = ("X-Trace-ID", "X-Request-ID")


@dataclass
class ApiError(Exception):
    """Admin API failure.

    ``message`` is always displayable. ``server_message`` is only set when the
    response body carried its own ``message``; screens prefer it over their
    generic fallback text.
    """

    code: str
    message: str
    details: dict[str, Any] | list[Any] | str | None = None
    trace_id: str | None = None
    status_code: int | None = None
    server_message: str | None = None

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404

    @classmethod
    def from_http_response(cls, response: httpx.Response) -> "ApiError":
        trace_id = next((response.headers[name] for name in TRACE_HEADERS if name in response.headers), None)
        fallback = f"HTTP {response.status_code}"
        if _has_request(response):
            fallback = f"{fallback} from {response.request.url.path}"
        try:
            payload = response.json()
        except ValueError:
            payload = None

        if not isinstance(payload, dict):
            return cls(
                code="HTTP_ERROR",
                message=response.text.strip() or fallback,
                details=payload,
                trace_id=trace_id,
                status_code=response.status_code,
            )

        server_message = payload.get("message")
        server_message = str(server_message).strip() if server_message else None
        return cls(
            code=str(payload.get("code") or "HTTP_ERROR"),
            message=server_message or fallback,
            details=payload.get("details") or payload.get("errors"),
            trace_id=payload.get("trace_id") or trace_id,
            status_code=response.status_code,
            server_message=server_message,
        )


def _has_request(response: httpx.Response) -> bool:
    try:
        response.request
    except RuntimeError:
        return False
    return True
