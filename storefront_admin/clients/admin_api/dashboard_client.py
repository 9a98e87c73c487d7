from __future__ import annotations

from pydantic import ValidationError

from storefront_admin.clients.admin_api.errors import ApiError
from storefront_admin.clients.admin_api.http_client import HttpClient
from storefront_admin.clients.admin_api.models import OrderTotals, RevenueTotals, UserTotals


class DashboardClient:
    def __init__(self, http_client: HttpClient) -> None:
        self.http_client = http_client

    def revenue_totals(self) -> RevenueTotals:
        return _parse(RevenueTotals, self.http_client.get("/admin/total"))

    def order_totals(self) -> OrderTotals:
        return _parse(OrderTotals, self.http_client.get("/admin/totalOrders"))

    def user_totals(self) -> UserTotals:
        return _parse(UserTotals, self.http_client.get("/admin/totalUsers"))


def _parse(model, payload: dict):
    try:
        return model.model_validate(payload)
    except ValidationError as error:
        raise ApiError(code="MALFORMED_RESPONSE", message="Dashboard totals are invalid", details=str(error)) from error
