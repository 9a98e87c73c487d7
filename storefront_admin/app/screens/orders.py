from __future__ import annotations

from typing import Any

from storefront_admin.app.export.csv_exporter import ExportColumn
from storefront_admin.app.listing.query import FilterSpec
from storefront_admin.app.screens.base import ColumnDef, ScreenConfig
from storefront_admin.app.ui.formatters import format_datetime, format_money, format_status_text, nested, status_tone

ORDER_STATUSES = ("Pending", "Confirmed", "Delivered", "Cancelled", "CancelledByAdmin")
PAYMENT_METHODS = ("cod", "momo")
PAYING_STATUSES = ("Paid", "Unpaid")


def _order_status(row: dict[str, Any]) -> str:
    return format_status_text(row.get("status"))


def _created_at(row: dict[str, Any]) -> str:
    return format_datetime(row.get("createdAt"))


ORDERS_SCREEN = ScreenConfig(
    module="orders",
    entity="orders",
    title="Orders",
    endpoint="/admin/allOrders",
    search_placeholder="Search by User Name or Order ID",
    columns=(
        ColumnDef("_id", "Order ID"),
        ColumnDef("user", "User", render=lambda row: nested(row, "user", "name")),
        ColumnDef("totalPrice", "Total Price", render=lambda row: f"${format_money(row.get('totalPrice'))}"),
        ColumnDef("status", "Status", render=_order_status, tone=lambda row: status_tone("order", row.get("status"))),
        ColumnDef("payingStatus", "Payment", tone=lambda row: status_tone("payment", row.get("payingStatus"))),
        ColumnDef("PaymentMethod", "Payment Method"),
        ColumnDef("createdAt", "Created At", render=_created_at),
    ),
    filter_specs=(
        FilterSpec(
            key="status",
            label="All statuses",
            options=ORDER_STATUSES,
            option_labels={"CancelledByAdmin": "Cancelled by admin"},
        ),
        FilterSpec(
            key="PaymentMethod",
            label="All payment methods",
            options=PAYMENT_METHODS,
            option_labels={"cod": "COD", "momo": "MoMo"},
        ),
        FilterSpec(key="payingStatus", label="All paying statuses", options=PAYING_STATUSES),
    ),
    export_columns=(
        ExportColumn("Order ID", lambda row: row.get("_id")),
        ExportColumn("User", lambda row: nested(row, "user", "name")),
        ExportColumn("Total Price", lambda row: format_money(row.get("totalPrice"))),
        ExportColumn("Status", _order_status),
        ExportColumn("Payment Status", lambda row: row.get("payingStatus")),
        ExportColumn("Payment Method", lambda row: row.get("PaymentMethod")),
        ExportColumn("Created At", _created_at),
    ),
)
