from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from storefront_admin.clients.admin_api.errors import ApiError
from storefront_admin.clients.admin_api.http_client import HttpClient
from storefront_admin.clients.admin_api.models import UserDetail


class AdminUsersClient:
    def __init__(self, http_client: HttpClient) -> None:
        self.http_client = http_client

    def get_user(self, user_id: str) -> UserDetail:
        payload = self.http_client.get(f"/admin/users/{user_id}")
        data = payload.get("data")
        if not isinstance(data, dict):
            raise ApiError(code="MALFORMED_RESPONSE", message="User payload is missing")
        try:
            return UserDetail.model_validate(data)
        except ValidationError as error:
            raise ApiError(code="MALFORMED_RESPONSE", message="User payload is invalid", details=str(error)) from error

    def update_user(self, user_id: str, changes: dict[str, Any]) -> dict[str, Any]:
        payload = self.http_client.put(f"/admin/users/update/{user_id}", json_body=changes)
        if payload.get("status") != "success":
            raise ApiError(code="MALFORMED_RESPONSE", message="Unexpected response from server")
        return payload
