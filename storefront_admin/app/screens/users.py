from __future__ import annotations

from storefront_admin.app.export.csv_exporter import ExportColumn
from storefront_admin.app.listing.query import FilterSpec
from storefront_admin.app.screens.base import ColumnDef, ScreenConfig
from storefront_admin.app.ui.formatters import format_datetime

USERS_SCREEN = ScreenConfig(
    module="users",
    entity="users",
    title="Users",
    endpoint="/admin/users",
    search_placeholder="Search by Name or Email",
    columns=(
        ColumnDef("user_id", "User ID"),
        ColumnDef("name", "User"),
        ColumnDef("role", "Role"),
        ColumnDef("email", "Email"),
        ColumnDef("createdAt", "Joined At", render=lambda row: format_datetime(row.get("createdAt"))),
    ),
    # role choices come from the rows on the loaded page
    filter_specs=(FilterSpec(key="role", label="All roles"),),
    export_columns=(
        ExportColumn("User ID", lambda row: row.get("user_id")),
        ExportColumn("Name", lambda row: row.get("name")),
        ExportColumn("Role", lambda row: row.get("role")),
        ExportColumn("Email", lambda row: row.get("email")),
        ExportColumn("Joined At", lambda row: format_datetime(row.get("createdAt"))),
    ),
    edit_path=lambda row: f"/admin/users/edit/{row.get('user_id')}",
)
