from __future__ import annotations

import logging
from dataclasses import fields, replace
from typing import Any

from storefront_admin.app.infrastructure.logging.logger import get_logger, log_action
from storefront_admin.app.ui.forms import FormStatus, UserEditForm, validate_user_edit_form
from storefront_admin.app.ui.notification_center import NotificationCenter
from storefront_admin.clients.admin_api.errors import ApiError
from storefront_admin.clients.admin_api.http_client import HttpClient
from storefront_admin.clients.admin_api.users_client import AdminUsersClient

MODULE = "user_edit"
USERS_LIST_PATH = "/admin/users"
_FORM_FIELDS = frozenset(field.name for field in fields(UserEditForm))


class UserEditScreen:
    """Edit one user: load the record, change fields, submit the update."""

    def __init__(
        self,
        http: HttpClient,
        user_id: str,
        *,
        notifications: NotificationCenter | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.user_id = user_id
        self.client = AdminUsersClient(http)
        self.notifications = notifications or NotificationCenter()
        self.logger = logger or get_logger("storefront_admin.screens.user_edit")
        self.form = UserEditForm()
        self.status = FormStatus.IDLE
        self.field_errors: dict[str, str] = {}

    @property
    def path(self) -> str:
        return f"{USERS_LIST_PATH}/edit/{self.user_id}"

    def load(self) -> bool:
        self.status = FormStatus.LOADING
        try:
            user = self.client.get_user(self.user_id)
        except ApiError as error:
            self.status = FormStatus.ERROR
            self._report("user.load", error, f"Failed to fetch user data: {error.message}")
            return False
        self.form = UserEditForm.from_user(user)
        self.field_errors = {}
        self.status = FormStatus.IDLE
        log_action(self.logger, MODULE, "user.load", "success", user_id=self.user_id)
        return True

    def update(self, **changes: Any) -> None:
        unknown = sorted(set(changes) - _FORM_FIELDS)
        if unknown:
            raise ValueError(f"Unknown user fields: {', '.join(unknown)}")
        self.form = replace(self.form, **changes)
        self.status = FormStatus.DIRTY

    def submit(self) -> bool:
        result = validate_user_edit_form(self.form)
        self.field_errors = dict(result.field_errors)
        if not result.is_valid:
            self.status = FormStatus.ERROR
            log_action(self.logger, MODULE, "user.update", "invalid", user_id=self.user_id, field=result.first_invalid_field)
            return False

        self.status = FormStatus.SUBMITTING
        try:
            self.client.update_user(self.user_id, result.values)
        except ApiError as error:
            self.status = FormStatus.ERROR
            self._report("user.update", error, f"Failed to update user: {error.message}")
            return False

        self.status = FormStatus.SUCCESS
        self.form = replace(self.form, password="")
        self.notifications.push(source=MODULE, level="success", title="Success", message="User updated successfully!")
        log_action(self.logger, MODULE, "user.update", "success", user_id=self.user_id)
        return True

    def render(self) -> dict[str, Any]:
        form = self.form
        return {
            "title": "Edit Customer",
            "path": self.path,
            "back_path": USERS_LIST_PATH,
            "status": self.status.value,
            "form": {
                "first_name": form.first_name,
                "last_name": form.last_name,
                "email": form.email,
                "avatar": form.avatar,
                "email_verified": form.email_verified,
                "role": form.role,
            },
            "field_errors": dict(self.field_errors),
            "submit_enabled": self.status not in {FormStatus.LOADING, FormStatus.SUBMITTING},
            "notifications": self.notifications.render(MODULE),
        }

    def _report(self, action: str, error: ApiError, message: str) -> None:
        log_action(
            self.logger,
            MODULE,
            action,
            "failure",
            trace_id=error.trace_id,
            level=logging.WARNING,
            code=error.code,
            status_code=error.status_code,
            user_id=self.user_id,
        )
        self.notifications.push(
            source=MODULE,
            level="error",
            title="Error",
            message=message,
            details={"code": error.code, "trace_id": error.trace_id},
        )
