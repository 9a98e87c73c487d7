import httpx

from storefront_admin.app.config import AdminConfig
from storefront_admin.app.screens.dashboard import DashboardScreen, SummaryCard
from storefront_admin.clients.admin_api.http_client import HttpClient

TOTALS = {
    "/admin/total": {"currentMonthRevenue": 1234.5, "previousMonthRevenue": 1000, "percentageChange": "23.45%"},
    "/admin/totalOrders": {"currentMonthOrders": 42, "previousMonthOrders": 50, "percentageChange": "-16.00%"},
    "/admin/totalUsers": {"totalUsers": {"currentMonth": 7, "previousMonth": 7, "percentageChange": "0"}},
}


def _http(routes: dict) -> HttpClient:
    def handler(request: httpx.Request) -> httpx.Response:
        route = routes.get(request.url.path)
        if route is None:
            return httpx.Response(500, json={"code": "INTERNAL_ERROR", "message": "aggregation failed"})
        return httpx.Response(200, json=route)

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


def test_cards_show_month_totals_and_trend() -> None:
    screen = DashboardScreen(_http(TOTALS))

    screen.load()

    assert [card.render() for card in screen.cards()] == [
        {"title": "REVENUES THIS MONTH", "value": "$1,234.5", "trend": "up", "change": "▲ 23.45%"},
        {"title": "ORDERS THIS MONTH", "value": "42", "trend": "down", "change": "▼ 16%"},
        {"title": "USERS JOINED THIS MONTH", "value": "7", "trend": "up", "change": "▲ 0%"},
    ]
    assert screen.failed == {}
    assert screen.render()["loading"] is False


def test_failed_endpoint_keeps_zero_defaults_for_that_card_only() -> None:
    routes = {path: body for path, body in TOTALS.items() if path != "/admin/totalOrders"}
    screen = DashboardScreen(_http(routes))

    screen.load()

    cards = {card.title: card for card in screen.cards()}
    assert cards["ORDERS THIS MONTH"].value == "0"
    assert cards["ORDERS THIS MONTH"].change == 0.0
    assert cards["REVENUES THIS MONTH"].value == "$1,234.5"
    assert screen.failed == {"orders": "aggregation failed"}
    assert screen.render()["failed"] == ["orders"]


def test_unparseable_percentage_reads_as_zero() -> None:
    routes = dict(TOTALS)
    routes["/admin/total"] = {"currentMonthRevenue": 0, "percentageChange": "n/a"}
    screen = DashboardScreen(_http(routes))

    screen.load()

    assert screen.cards()[0].render() == {
        "title": "REVENUES THIS MONTH",
        "value": "$0",
        "trend": "up",
        "change": "▲ 0%",
    }


def test_malformed_totals_are_recorded_as_failures() -> None:
    routes = dict(TOTALS)
    routes["/admin/totalUsers"] = {"totalUsers": "many"}
    screen = DashboardScreen(_http(routes))

    screen.load()

    assert screen.failed == {"users": "Dashboard totals are invalid"}
    assert screen.cards()[2].value == "0"


def test_summary_card_formats_negative_change() -> None:
    card = SummaryCard("ORDERS THIS MONTH", "3", -2.5)

    assert card.trend == "down"
    assert card.change_text == "▼ 2.5%"
