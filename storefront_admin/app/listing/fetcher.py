from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from storefront_admin.app.infrastructure.errors.error_mapper import ErrorMapper
from storefront_admin.app.infrastructure.logging.logger import get_logger, log_action
from storefront_admin.app.listing.outcome import EmptyNotFound, Failure, FetchOutcome, ListResult, Success
from storefront_admin.app.listing.query import ListQuery
from storefront_admin.clients.admin_api.errors import ApiError
from storefront_admin.clients.admin_api.http_client import HttpClient
from storefront_admin.clients.admin_api.models import ListEnvelope


class ListFetcher:
    """Runs one list request and classifies the result as a ``FetchOutcome``.

    Errors never leave ``fetch``. The fetcher does not notify anyone: whoever
    applies the outcome decides whether a ``Failure`` is still worth showing.
    """

    def __init__(
        self,
        http: HttpClient,
        endpoint: str,
        *,
        entity: str = "items",
        logger: logging.Logger | None = None,
    ) -> None:
        self.http = http
        self.endpoint = endpoint
        self.entity = entity
        self.logger = logger or get_logger("storefront_admin.listing")

    @property
    def fallback_message(self) -> str:
        return f"Failed to fetch {self.entity}"

    def __call__(self, query: ListQuery) -> FetchOutcome:
        return self.fetch(query)

    def fetch(self, query: ListQuery) -> FetchOutcome:
        params = query.to_params()
        try:
            payload = self.http.get(self.endpoint, params=params)
        except ApiError as error:
            if error.is_not_found:
                log_action(self.logger, self.entity, "list.fetch", "empty_not_found", trace_id=error.trace_id, params=params)
                return EmptyNotFound()
            return self._fail(error, params)
        except Exception as error:  # noqa: BLE001
            return self._fail(error, params)

        try:
            envelope = ListEnvelope.model_validate(payload)
        except ValidationError as error:
            return self._fail_malformed(self.fallback_message, params, details=str(error))

        if not envelope.is_success():
            return self._fail_malformed(envelope.message or self.fallback_message, params)

        pagination = envelope.pagination
        result = ListResult(
            items=list(envelope.data or []),
            total_items=(pagination.total_items if pagination else None) or 0,
            total_pages=(pagination.total_pages if pagination else None) or 1,
        )
        log_action(
            self.logger,
            self.entity,
            "list.fetch",
            "success",
            params=params,
            rows=len(result.items),
            total_items=result.total_items,
        )
        return Success(result)

    def _fail(self, error: Exception, params: dict[str, Any]) -> Failure:
        payload = ErrorMapper.to_payload(error)
        server_message = payload["server_message"]
        log_action(
            self.logger,
            self.entity,
            "list.fetch",
            "failure",
            trace_id=payload["trace_id"],
            level=logging.WARNING,
            code=payload["code"],
            status_code=payload["status_code"],
            server_message=server_message,
            params=params,
        )
        return Failure(
            message=server_message or self.fallback_message,
            trace_id=payload["trace_id"],
            status_code=payload["status_code"],
            code=payload["code"],
            suggestion=payload["suggestion"],
        )

    def _fail_malformed(self, message: str, params: dict[str, Any], details: str | None = None) -> Failure:
        payload = ErrorMapper.to_payload(ApiError(code="MALFORMED_RESPONSE", message=message, details=details))
        log_action(
            self.logger,
            self.entity,
            "list.fetch",
            "malformed_envelope",
            level=logging.WARNING,
            params=params,
            message=message,
        )
        return Failure(message=message, code=payload["code"], suggestion=payload["suggestion"])
