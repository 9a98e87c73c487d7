from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any

from storefront_admin.clients.admin_api.models import UserDetail

EMAIL_REGEX = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
USER_ROLES = ("customer", "admin")


class FormStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    DIRTY = "dirty"
    SUBMITTING = "submitting"
    SUCCESS = "success"
    ERROR = "error"


@dataclass
class FormResult:
    values: dict[str, Any]
    field_errors: dict[str, str]

    @property
    def first_invalid_field(self) -> str | None:
        return next(iter(self.field_errors), None)

    @property
    def is_valid(self) -> bool:
        return len(self.field_errors) == 0


@dataclass
class UserEditForm:
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    avatar: str = ""
    password: str = ""
    email_verified: bool = False
    role: str = "customer"

    @classmethod
    def from_user(cls, user: UserDetail) -> "UserEditForm":
        # first word is the first name, the rest is the last name
        parts = (user.name or "").split(" ")
        return cls(
            first_name=parts[0],
            last_name=" ".join(parts[1:]),
            email=user.email or "",
            avatar=user.avatar or "",
            email_verified=bool(user.is_verified),
            role=user.role or "customer",
        )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


def validate_user_edit_form(form: UserEditForm) -> FormResult:
    """Validate the edit form and build the update body; an empty password is left out."""
    email = form.email.strip()
    field_errors: dict[str, str] = {}
    if not email:
        field_errors["email"] = "Email is required."
    elif not EMAIL_REGEX.match(email):
        field_errors["email"] = "Email is not valid."
    if form.role not in USER_ROLES:
        field_errors["role"] = f"Role must be one of {', '.join(USER_ROLES)}."

    values: dict[str, Any] = {
        "name": form.full_name,
        "email": email,
        "avatar": form.avatar,
        "emailVerified": form.email_verified,
        "role": form.role,
    }
    if form.password:
        values["password"] = form.password
    return FormResult(values=values, field_errors=field_errors)
