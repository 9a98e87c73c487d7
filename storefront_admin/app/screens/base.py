from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable

from storefront_admin.app.export.csv_exporter import ExportColumn, encode_rows, export_current_view
from storefront_admin.app.infrastructure.logging.logger import get_logger, log_action
from storefront_admin.app.listing.controller import ListController
from storefront_admin.app.listing.dispatch import Dispatcher, ImmediateDispatcher
from storefront_admin.app.listing.fetcher import ListFetcher
from storefront_admin.app.listing.outcome import Failure
from storefront_admin.app.listing.query import FilterSpec
from storefront_admin.app.ui.formatters import text_or_na
from storefront_admin.app.ui.notification_center import NotificationCenter
from storefront_admin.app.ui.pagination import PaginationWindow, max_visible_for_width, render_pagination_window
from storefront_admin.app.ui.theme import ThemeContext
from storefront_admin.app.ui.view_state import ViewState, resolve_state
from storefront_admin.clients.admin_api.http_client import HttpClient


@dataclass(frozen=True)
class ColumnDef:
    key: str
    label: str
    render: Callable[[dict[str, Any]], Any] | None = None
    tone: Callable[[dict[str, Any]], str] | None = None

    def display(self, row: dict[str, Any]) -> str:
        value = self.render(row) if self.render else row.get(self.key)
        return text_or_na(value)


@dataclass(frozen=True)
class ScreenConfig:
    module: str
    entity: str
    title: str
    endpoint: str
    columns: tuple[ColumnDef, ...]
    filter_specs: tuple[FilterSpec, ...]
    export_columns: tuple[ExportColumn, ...]
    search_placeholder: str = "Search"
    edit_path: Callable[[dict[str, Any]], str] | None = None

    def filter_spec(self, key: str) -> FilterSpec:
        for spec in self.filter_specs:
            if spec.key == key:
                return spec
        raise ValueError(f"Unknown filter {key!r} for {self.module}")


class ListScreen:
    """One list screen: query controller, fetcher, notifications and export wired together."""

    def __init__(
        self,
        config: ScreenConfig,
        http: HttpClient,
        *,
        dispatcher: Dispatcher | None = None,
        theme: ThemeContext | None = None,
        notifications: NotificationCenter | None = None,
        page_size: int = 10,
        logger: logging.Logger | None = None,
    ) -> None:
        self.config = config
        self.dispatcher = dispatcher or ImmediateDispatcher()
        self.theme = theme or ThemeContext()
        self.notifications = notifications or NotificationCenter()
        self.logger = logger or get_logger(f"storefront_admin.screens.{config.module}")
        self.fetcher = ListFetcher(http, config.endpoint, entity=config.entity, logger=self.logger)
        self.controller = ListController(
            self.fetcher,
            filter_keys=[spec.key for spec in config.filter_specs],
            page_size=page_size,
            dispatcher=self.dispatcher,
            module=config.module,
            logger=self.logger,
            on_failure=self._show_failure,
        )
        self.mounted = False

    def mount(self) -> None:
        self.mounted = True
        self.controller.start()

    def unmount(self) -> None:
        self.mounted = False
        self.controller.close()
        self.notifications.clear(self.config.module)

    def filter_choices(self, key: str) -> list[tuple[str, str]]:
        """``(value, label)`` pairs; filters without fixed options offer the values on the loaded page."""
        spec = self.config.filter_spec(key)
        if spec.options:
            values = list(spec.options)
        else:
            values = []
            for row in self.controller.items:
                value = row.get(key)
                if value not in (None, "") and str(value) not in values:
                    values.append(str(value))
            selected = self.controller.query.filters.get(key)
            if selected and selected not in values:
                values.append(selected)
        return [(value, spec.label_for(value)) for value in values]

    def pagination(self, viewport_width: int | None = None, sibling_count: int = 1) -> PaginationWindow:
        return render_pagination_window(
            self.controller.page,
            self.controller.total_pages,
            max_visible_for_width(viewport_width),
            sibling_count=sibling_count,
        )

    def view_state(self) -> ViewState:
        outcome = self.controller.outcome
        return resolve_state(
            is_loading=self.controller.is_loading,
            error=self.controller.error,
            has_data=bool(self.controller.items),
            entity=self.config.entity,
            trace_id=outcome.trace_id if isinstance(outcome, Failure) else None,
        )

    def table_rows(self) -> list[dict[str, str]]:
        return [{column.label: column.display(row) for column in self.config.columns} for row in self.controller.items]

    def badges(self, row: dict[str, Any]) -> dict[str, str]:
        return {
            column.label: self.theme.badge_classes(column.tone(row))
            for column in self.config.columns
            if column.tone is not None
        }

    def showing_text(self) -> str:
        start, end, total = self.controller.showing_range()
        return f"Showing {start} to {end} of {total} entries"

    def export_text(self) -> str:
        return encode_rows(self.controller.items, self.config.export_columns)

    def export(self, output_dir: str = "out/exports") -> Path:
        rows = self.controller.items
        path = export_current_view(
            module=self.config.module,
            rows=rows,
            columns=self.config.export_columns,
            output_dir=output_dir,
        )
        log_action(self.logger, self.config.module, "list.export", "success", rows=len(rows), path=str(path))
        return path

    def render(self, viewport_width: int | None = None) -> dict[str, Any]:
        controller = self.controller
        state = self.view_state()
        return {
            "title": self.config.title,
            "search_placeholder": self.config.search_placeholder,
            "view_state": state.render(),
            "query": {
                "page": controller.page,
                "page_size": controller.query.page_size,
                "search": controller.query.search,
                "filters": dict(controller.query.filters),
            },
            "page_input": controller.page_input,
            "filters": {spec.key: self.filter_choices(spec.key) for spec in self.config.filter_specs},
            "headers": [column.label for column in self.config.columns],
            "rows": self.table_rows(),
            "badges": [self.badges(row) for row in controller.items],
            "edit_links": [self.config.edit_path(row) for row in controller.items] if self.config.edit_path else [],
            "pagination": self.pagination(viewport_width).render(),
            "showing": self.showing_text(),
            "notifications": self.notifications.render(self.config.module),
            "dark_mode": self.theme.dark,
        }

    def _show_failure(self, failure: Failure) -> None:
        # called from the controller on the UI thread, only for the outcome on screen
        self.notifications.push(
            source=self.config.module,
            level="error",
            title=self.fetcher.fallback_message,
            message=failure.message,
            details={"code": failure.code, "trace_id": failure.trace_id, "suggestion": failure.suggestion},
        )
