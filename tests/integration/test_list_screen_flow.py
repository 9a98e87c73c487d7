import httpx

from storefront_admin.app.config import AdminConfig
from storefront_admin.app.screens.base import ListScreen
from storefront_admin.app.screens.orders import ORDERS_SCREEN
from storefront_admin.app.screens.users import USERS_SCREEN
from storefront_admin.app.ui.notification_center import NotificationCenter
from storefront_admin.app.ui.theme import ThemeContext
from storefront_admin.clients.admin_api.http_client import HttpClient

ORDERS = [
    {
        "_id": f"order-{idx}",
        "user": {"name": f"Customer {idx}"},
        "totalPrice": 10 * idx,
        "status": "Pending" if idx % 2 else "Delivered",
        "payingStatus": "Paid" if idx % 2 else "Unpaid",
        "PaymentMethod": "cod",
        "createdAt": "2024-03-05T14:07:00",
    }
    for idx in range(1, 24)
]

USERS = [
    {"user_id": "u1", "name": "Ann", "role": "admin", "email": "ann@example.com"},
    {"user_id": "u2", "name": "Ben", "role": "customer", "email": "ben@example.com"},
    {"user_id": "u3", "name": "Cy", "role": "customer", "email": "cy@example.com"},
]


class _OrdersApi:
    def __init__(self) -> None:
        self.requests: list[dict[str, str]] = []
        self.fail_next = False

    def __call__(self, request: httpx.Request) -> httpx.Response:
        params = dict(request.url.params)
        self.requests.append(params)
        if self.fail_next:
            self.fail_next = False
            return httpx.Response(500, json={"code": "INTERNAL_ERROR", "message": "db down", "trace_id": "trace-9"})

        rows = ORDERS
        search = params.get("search", "").lower()
        if search:
            rows = [row for row in rows if search in row["_id"] or search in row["user"]["name"].lower()]
        if params.get("status"):
            rows = [row for row in rows if row["status"] == params["status"]]
        if not rows:
            return httpx.Response(404, json={"success": False, "message": "No orders found"})

        page, limit = int(params["page"]), int(params["limit"])
        total_pages = (len(rows) + limit - 1) // limit
        return httpx.Response(
            200,
            json={
                "success": True,
                "data": rows[(page - 1) * limit : page * limit],
                "pagination": {"totalItems": len(rows), "totalPages": total_pages},
            },
        )


def _http(handler) -> HttpClient:
    return HttpClient(
        config=AdminConfig(
            base_url="http://admin.test",
            timeout_seconds=5,
            verify_ssl=True,
            retry_max_attempts=1,
            retry_backoff_ms=0,
        ),
        client=httpx.Client(base_url="http://admin.test", transport=httpx.MockTransport(handler)),
    )


def test_orders_screen_pages_filters_and_exports(tmp_path) -> None:
    api = _OrdersApi()
    screen = ListScreen(ORDERS_SCREEN, _http(api))
    screen.mount()

    assert api.requests == [{"page": "1", "limit": "10"}]
    assert screen.showing_text() == "Showing 1 to 10 of 23 entries"
    assert screen.pagination(1280).labels() == ["1", "2", "3"]
    assert screen.table_rows()[0]["Total Price"] == "$10.00"
    assert screen.table_rows()[0]["Created At"] == "03/05/24, 14:07"

    screen.controller.next_page()
    screen.controller.next_page()
    assert screen.showing_text() == "Showing 21 to 23 of 23 entries"
    assert screen.controller.has_next is False

    screen.controller.set_filter("status", "Pending")
    assert api.requests[-1] == {"page": "1", "limit": "10", "status": "Pending"}
    assert screen.controller.total_items == 12

    path = screen.export(str(tmp_path))
    lines = path.read_text(encoding="utf-8").split("\n")
    assert path.name == "orders_export.csv"
    assert lines[0] == "Order ID,User,Total Price,Status,Payment Status,Payment Method,Created At"
    assert lines[1].startswith("order-1,Customer 1,10.00,Pending,Paid,cod,")
    assert len(lines) == 11

    screen.unmount()


def test_orders_search_without_matches_shows_empty_state() -> None:
    api = _OrdersApi()
    screen = ListScreen(ORDERS_SCREEN, _http(api))
    screen.mount()

    screen.controller.set_search("nobody")

    state = screen.view_state()
    assert state.status.value == "empty"
    assert state.message == "No orders found"
    assert screen.showing_text() == "Showing 0 to 0 of 0 entries"
    assert screen.pagination().labels() == ["1"]
    assert screen.notifications.render()["count"] == 0


def test_server_error_keeps_rows_and_notifies_once() -> None:
    api = _OrdersApi()
    screen = ListScreen(ORDERS_SCREEN, _http(api))
    screen.mount()

    api.fail_next = True
    screen.controller.next_page()

    state = screen.view_state()
    assert state.status.value == "partial_error"
    assert state.trace_id == "trace-9"
    assert screen.table_rows()[0]["Order ID"] == "order-1"
    notices = screen.notifications.render()
    assert notices["count"] == 1
    assert notices["messages"][0]["title"] == "Failed to fetch orders"
    assert notices["messages"][0]["message"] == "db down"
    assert notices["messages"][0]["details"]["trace_id"] == "trace-9"

    screen.controller.retry()
    assert screen.view_state().status.value == "success"
    assert screen.table_rows()[0]["Order ID"] == "order-11"


def test_orders_render_exposes_badges_and_no_edit_links() -> None:
    theme = ThemeContext(dark=True)
    screen = ListScreen(ORDERS_SCREEN, _http(_OrdersApi()), theme=theme)
    screen.mount()

    view = screen.render(viewport_width=375)

    assert view["edit_links"] == []
    assert view["search_placeholder"] == "Search by User Name or Order ID"
    assert view["badges"][0] == {"Status": theme.badge_classes("warning"), "Payment": theme.badge_classes("success")}
    assert [entry["label"] for entry in view["pagination"]["entries"]] == ["1", "2", "3"]
    assert view["filters"]["PaymentMethod"] == [("cod", "COD"), ("momo", "MoMo")]
    assert view["dark_mode"] is True


def test_users_screen_role_choices_come_from_loaded_rows() -> None:
    requests: list[dict[str, str]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        params = dict(request.url.params)
        requests.append(params)
        rows = [row for row in USERS if not params.get("role") or row["role"] == params["role"]]
        return httpx.Response(
            200,
            json={"status": "success", "data": rows, "pagination": {"totalItems": len(rows), "totalPages": 1}},
        )

    screen = ListScreen(USERS_SCREEN, _http(handler), page_size=25)
    screen.mount()

    assert screen.filter_choices("role") == [("admin", "admin"), ("customer", "customer")]

    screen.controller.set_filter("role", "admin")
    assert requests[-1] == {"page": "1", "limit": "25", "role": "admin"}
    assert screen.filter_choices("role") == [("admin", "admin")]
    assert screen.table_rows() == [
        {"User ID": "u1", "User": "Ann", "Role": "admin", "Email": "ann@example.com", "Joined At": "N/A"}
    ]

    screen.controller.clear_filters()
    assert requests[-1] == {"page": "1", "limit": "25"}
    assert len(screen.controller.items) == 3


class _DeferredDispatcher:
    def __init__(self) -> None:
        self.pending: list[tuple] = []

    def submit(self, work, deliver, cancelled=None) -> None:
        self.pending.append((work, deliver))

    def complete(self, index: int) -> None:
        work, deliver = self.pending[index]
        deliver(work())


def _search_api(request: httpx.Request) -> httpx.Response:
    search = request.url.params.get("search", "")
    if search == "a":
        return httpx.Response(500, json={"code": "INTERNAL_ERROR", "message": "db down", "trace_id": "trace-a"})
    rows = [{"_id": f"order-{search or 'all'}", "user": {"name": "Bea"}, "totalPrice": 5}]
    return httpx.Response(200, json={"success": True, "data": rows, "pagination": {"totalItems": 1, "totalPages": 1}})


def test_superseded_failed_fetch_raises_no_toast() -> None:
    dispatcher = _DeferredDispatcher()
    screen = ListScreen(ORDERS_SCREEN, _http(_search_api), dispatcher=dispatcher)
    screen.mount()
    dispatcher.complete(0)

    screen.controller.set_search("a")
    screen.controller.set_search("b")
    dispatcher.complete(2)
    dispatcher.complete(1)

    assert screen.notifications.render()["count"] == 0
    assert screen.view_state().status.value == "success"
    assert screen.table_rows()[0]["Order ID"] == "order-b"


def test_current_failed_fetch_raises_one_toast() -> None:
    dispatcher = _DeferredDispatcher()
    screen = ListScreen(ORDERS_SCREEN, _http(_search_api), dispatcher=dispatcher)
    screen.mount()
    dispatcher.complete(0)

    screen.controller.set_search("a")
    dispatcher.complete(1)

    notices = screen.notifications.render("orders")
    assert notices["count"] == 1
    assert notices["messages"][0]["message"] == "db down"
    assert notices["messages"][0]["details"]["code"] == "INTERNAL_ERROR"


def test_unmounted_screen_ignores_late_failures() -> None:
    dispatcher = _DeferredDispatcher()
    screen = ListScreen(ORDERS_SCREEN, _http(_search_api), dispatcher=dispatcher)
    screen.mount()
    dispatcher.complete(0)
    screen.controller.set_search("a")

    screen.unmount()
    dispatcher.complete(1)

    assert screen.notifications.render()["count"] == 0


def test_unmount_clears_only_its_own_notifications() -> None:
    api = _OrdersApi()
    shared = NotificationCenter()
    shared.push(source="users", level="error", title="Failed to fetch users", message="db down")
    screen = ListScreen(ORDERS_SCREEN, _http(api), notifications=shared)
    screen.mount()
    api.fail_next = True
    screen.controller.next_page()
    assert shared.render("orders")["count"] == 1

    screen.unmount()

    assert shared.render("orders")["count"] == 0
    assert shared.render("users")["count"] == 1


def test_users_render_links_each_row_to_its_edit_screen() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json={"status": "success", "data": USERS, "pagination": {"totalItems": 3, "totalPages": 1}},
        )

    screen = ListScreen(USERS_SCREEN, _http(handler))
    screen.mount()

    view = screen.render()

    assert view["edit_links"] == ["/admin/users/edit/u1", "/admin/users/edit/u2", "/admin/users/edit/u3"]
    assert view["search_placeholder"] == "Search by Name or Email"
