from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable

from storefront_admin.app.infrastructure.logging.logger import get_logger, log_action
from storefront_admin.app.ui.formatters import format_count, parse_percentage
from storefront_admin.clients.admin_api.dashboard_client import DashboardClient
from storefront_admin.clients.admin_api.errors import ApiError
from storefront_admin.clients.admin_api.http_client import HttpClient
from storefront_admin.clients.admin_api.models import OrderTotals, RevenueTotals, UserTotals

MODULE = "dashboard"


@dataclass(frozen=True)
class SummaryCard:
    title: str
    value: str
    change: float

    @property
    def trend(self) -> str:
        return "up" if self.change >= 0 else "down"

    @property
    def change_text(self) -> str:
        arrow = "▲" if self.change >= 0 else "▼"
        return f"{arrow} {abs(self.change):g}%"

    def render(self) -> dict[str, Any]:
        return {"title": self.title, "value": self.value, "trend": self.trend, "change": self.change_text}


class DashboardScreen:
    """Month-over-month totals for revenue, orders and new users.

    The three totals load independently; one that fails keeps its zero defaults
    and is only logged.
    """

    def __init__(self, http: HttpClient, *, logger: logging.Logger | None = None) -> None:
        self.client = DashboardClient(http)
        self.logger = logger or get_logger("storefront_admin.screens.dashboard")
        self.revenue = RevenueTotals()
        self.orders = OrderTotals()
        self.users = UserTotals()
        self.loading = False
        self.failed: dict[str, str] = {}

    def load(self) -> None:
        self.loading = True
        self.failed = {}
        loaders: dict[str, Callable[[], Any]] = {
            "revenue": self.client.revenue_totals,
            "orders": self.client.order_totals,
            "users": self.client.user_totals,
        }
        for name, loader in loaders.items():
            try:
                setattr(self, name, loader())
            except ApiError as error:
                self.failed[name] = error.message
                log_action(
                    self.logger,
                    MODULE,
                    f"totals.{name}",
                    "failure",
                    trace_id=error.trace_id,
                    level=logging.WARNING,
                    code=error.code,
                )
        self.loading = False

    def cards(self) -> list[SummaryCard]:
        users = self.users.total_users
        return [
            SummaryCard(
                "REVENUES THIS MONTH",
                f"${format_count(self.revenue.current_month)}",
                parse_percentage(self.revenue.percentage_change),
            ),
            SummaryCard(
                "ORDERS THIS MONTH",
                format_count(self.orders.current_month),
                parse_percentage(self.orders.percentage_change),
            ),
            SummaryCard(
                "USERS JOINED THIS MONTH",
                format_count(users.current_month),
                parse_percentage(users.percentage_change),
            ),
        ]

    def render(self) -> dict[str, Any]:
        return {
            "title": "Dashboard",
            "loading": self.loading,
            "cards": [card.render() for card in self.cards()],
            "failed": sorted(self.failed),
        }
