from __future__ import annotations

import argparse
import sys

from storefront_admin.app.config import PAGE_SIZE_OPTIONS, AdminConfig, parse_bool
from storefront_admin.app.screens.base import ListScreen, ScreenConfig
from storefront_admin.app.screens.dashboard import DashboardScreen
from storefront_admin.app.screens.orders import ORDERS_SCREEN
from storefront_admin.app.screens.user_edit import UserEditScreen
from storefront_admin.app.screens.users import USERS_SCREEN
from storefront_admin.app.ui.table_printer import print_table
from storefront_admin.clients.admin_api.http_client import HttpClient

SCREENS: dict[str, ScreenConfig] = {
    ORDERS_SCREEN.module: ORDERS_SCREEN,
    USERS_SCREEN.module: USERS_SCREEN,
}
COMMANDS = (*sorted(SCREENS), "dashboard", "edit-user")


def _parse_pair(raw: str) -> tuple[str, str]:
    if "=" not in raw:
        raise argparse.ArgumentTypeError(f"expected key=value, got {raw!r}")
    key, value = raw.split("=", 1)
    return key.strip(), value.strip()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Storefront admin: list orders or users, show totals, edit a user.")
    parser.add_argument("screen", choices=COMMANDS)
    parser.add_argument("--page", default="1", help="page number to open")
    parser.add_argument("--limit", type=int, choices=PAGE_SIZE_OPTIONS, default=None)
    parser.add_argument("--search", default="")
    parser.add_argument("--filter", dest="filters", action="append", type=_parse_pair, default=[], metavar="KEY=VALUE")
    parser.add_argument("--width", type=int, default=None, help="viewport width in pixels, narrows the pager")
    parser.add_argument("--export", dest="export_dir", nargs="?", const="", default=None, metavar="DIR")
    parser.add_argument("--user-id", help="user to edit")
    parser.add_argument("--set", dest="changes", action="append", type=_parse_pair, default=[], metavar="FIELD=VALUE")
    parser.add_argument("--env-file", default=".env")
    return parser


def run(argv: list[str] | None = None, http: HttpClient | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    config = AdminConfig.from_env(args.env_file)
    owned = http is None
    client = http or HttpClient(config=config)
    try:
        if args.screen == "dashboard":
            return _run_dashboard(client)
        if args.screen == "edit-user":
            if not args.user_id:
                parser.error("edit-user requires --user-id")
            return _run_edit_user(client, args.user_id, args.changes)
        return _run_list(args, config, client)
    finally:
        if owned:
            client.close()


def _run_list(args: argparse.Namespace, config: AdminConfig, http: HttpClient) -> int:
    screen = ListScreen(SCREENS[args.screen], http, page_size=args.limit or config.default_page_size)
    controller = screen.controller

    if args.search:
        controller.set_search(args.search)
    for key, value in args.filters:
        try:
            controller.set_filter(key, value)
        except ValueError as error:
            print(f"[ERROR] {error}", file=sys.stderr)
            return 2
    screen.mount()
    if args.page != "1" and not controller.go_to_page(args.page):
        print(f"[WARN] page {args.page!r} is outside 1..{controller.total_pages}; showing page {controller.page}")

    state = screen.view_state()
    if state.message and state.status.value in {"fatal_error", "partial_error"}:
        print(f"[ERROR] {state.message} (trace_id={state.trace_id or 'n/a'})", file=sys.stderr)
    print_table(
        screen.config.title,
        screen.table_rows(),
        [column.label for column in screen.config.columns],
        empty_message=f"No {screen.config.entity} found",
    )
    window = screen.pagination(args.width)
    print(" ".join(f"[{entry.label}]" if entry.is_current else entry.label for entry in window.entries))
    print(screen.showing_text())

    if args.export_dir is not None:
        path = screen.export(args.export_dir or config.export_dir)
        print(f"Exported {len(controller.items)} rows to {path}")

    screen.unmount()
    return 1 if state.status.value == "fatal_error" else 0


def _run_dashboard(http: HttpClient) -> int:
    screen = DashboardScreen(http)
    screen.load()
    rows = [{"Card": card.title, "Value": card.value, "vs last month": card.change_text} for card in screen.cards()]
    print_table("Dashboard", rows, ["Card", "Value", "vs last month"])
    for name in sorted(screen.failed):
        print(f"[WARN] {name} totals unavailable: {screen.failed[name]}", file=sys.stderr)
    return 0


def _run_edit_user(http: HttpClient, user_id: str, changes: list[tuple[str, str]]) -> int:
    screen = UserEditScreen(http, user_id)
    if not screen.load():
        _print_notices(screen)
        return 1
    updates: dict[str, object] = {}
    for key, value in changes:
        updates[key] = parse_bool(value, default=False) if key == "email_verified" else value
    try:
        screen.update(**updates)
    except ValueError as error:
        print(f"[ERROR] {error}", file=sys.stderr)
        return 2
    ok = screen.submit()
    for field, message in screen.field_errors.items():
        print(f"[ERROR] {field}: {message}", file=sys.stderr)
    _print_notices(screen)
    return 0 if ok else 1


def _print_notices(screen: UserEditScreen) -> None:
    for notice in screen.notifications.notices():
        stream = sys.stderr if notice.level == "error" else sys.stdout
        print(f"[{notice.level.upper()}] {notice.title}: {notice.message}", file=stream)


if __name__ == "__main__":
    raise SystemExit(run())
