from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class PaginationMeta(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    total_items: int | None = Field(default=None, alias="totalItems")
    total_pages: int | None = Field(default=None, alias="totalPages")


class ListEnvelope(BaseModel):
    """List response; the orders API flags ``success: true``, the users API ``status: "success"``."""

    model_config = ConfigDict(extra="allow")

    success: bool | None = None
    status: str | None = None
    message: str | None = None
    data: list[dict[str, Any]] | None = None
    pagination: PaginationMeta | None = None

    def is_success(self) -> bool:
        return self.success is True or self.status == "success"


class UserDetail(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    name: str | None = None
    email: str | None = None
    avatar: str | None = None
    is_verified: bool | None = Field(default=None, alias="isVerified")
    role: str | None = None


class RevenueTotals(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    current_month: float = Field(default=0, alias="currentMonthRevenue")
    previous_month: float = Field(default=0, alias="previousMonthRevenue")
    percentage_change: float | str = Field(default="0.00%", alias="percentageChange")


class OrderTotals(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    current_month: int = Field(default=0, alias="currentMonthOrders")
    previous_month: int = Field(default=0, alias="previousMonthOrders")
    percentage_change: float | str = Field(default="0.00%", alias="percentageChange")


class MonthlyUserCounts(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    current_month: int = Field(default=0, alias="currentMonth")
    previous_month: int = Field(default=0, alias="previousMonth")
    percentage_change: float | str = Field(default="0", alias="percentageChange")


class UserTotals(BaseModel):
    """The users endpoint nests its counts under ``totalUsers``."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    total_users: MonthlyUserCounts = Field(default_factory=MonthlyUserCounts, alias="totalUsers")
