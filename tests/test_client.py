import json
from pathlib import Path
from typing import Any, Dict, List

import httpx
import pytest

from househunt.client import ApiError, HouseHuntClient, TokenStore

AUTH = {
    "user": {"id": 1, "email": "jane@x.com", "role": "TENANT"},
    "token": "access-1",
    "refreshToken": "refresh-1",
}


class FakeServer:
    """Records requests and answers them from a route table."""

    def __init__(self, routes: Dict[str, httpx.Response]) -> None:
        self.routes = routes
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = f"{request.method} {request.url.path}"
        if key not in self.routes:
            return httpx.Response(404, json={"success": False, "error": "Route not found"})
        return self.routes[key]


def ok(data: Any, status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code, json={"success": True, "data": data})


def make_client(server: FakeServer, **kwargs: Any) -> HouseHuntClient:
    return HouseHuntClient(
        base_url="http://api.test/api",
        transport=httpx.MockTransport(server),
        **kwargs,
    )


def test_login_stores_tokens_and_sends_bearer() -> None:
    server = FakeServer(
        {
            "POST /api/auth/login": ok(AUTH),
            "GET /api/auth/me": ok(AUTH["user"]),
        },
    )
    client = make_client(server)

    client.login("jane@x.com", "secret1")
    me = client.me()

    assert me["email"] == "jane@x.com"
    assert client.store.token == "access-1"
    assert client.store.refresh_token == "refresh-1"
    assert "authorization" not in server.requests[0].headers
    assert server.requests[1].headers["authorization"] == "Bearer access-1"


def test_unauthorized_clears_session() -> None:
    calls: List[str] = []
    server = FakeServer(
        {
            "GET /api/auth/me": httpx.Response(
                401, json={"success": False, "error": "Invalid or expired token"},
            ),
        },
    )
    store = TokenStore()
    store.save("stale", "stale-refresh")
    client = make_client(server, store=store, on_unauthorized=lambda: calls.append("login"))

    with pytest.raises(ApiError) as exc_info:
        client.me()

    assert exc_info.value.status_code == 401
    assert exc_info.value.message == "Invalid or expired token"
    assert calls == ["login"]
    assert store.token is None
    assert store.refresh_token is None


def test_error_envelope_raises() -> None:
    server = FakeServer(
        {
            "POST /api/houses": httpx.Response(
                403, json={"success": False, "error": "Only landlords can create listings"},
            ),
        },
    )
    client = make_client(server)

    with pytest.raises(ApiError, match="Only landlords can create listings"):
        client.create_house(title="Hut")


def test_list_houses_sends_paging_and_filters() -> None:
    page = {"data": [], "page": 2, "pageSize": 5, "total": 0, "totalPages": 0}
    server = FakeServer({"GET /api/houses": ok(page)})
    client = make_client(server)

    result = client.list_houses(2, 5, city="Nairobi", min_price=1000)

    assert result == page
    params = server.requests[0].url.params
    assert params["page"] == "2"
    assert params["pageSize"] == "5"
    assert params["city"] == "Nairobi"
    assert params["minPrice"] == "1000"
    assert "maxPrice" not in params


def test_status_update_body() -> None:
    server = FakeServer({"PATCH /api/houses/3/status": ok({"id": 3, "status": "OCCUPIED"})})
    client = make_client(server)

    client.update_house_status(3, "OCCUPIED")

    assert json.loads(server.requests[0].content) == {"status": "OCCUPIED"}


def test_refresh_keeps_refresh_token() -> None:
    server = FakeServer({"POST /api/auth/refresh": ok({"token": "access-2"})})
    store = TokenStore()
    store.save("access-1", "refresh-1")
    client = make_client(server, store=store)

    assert client.refresh() == "access-2"
    assert json.loads(server.requests[0].content) == {"refreshToken": "refresh-1"}
    assert store.token == "access-2"
    assert store.refresh_token == "refresh-1"


def test_logout_clears_even_on_failure() -> None:
    server = FakeServer({})
    store = TokenStore()
    store.save("access-1", "refresh-1")
    client = make_client(server, store=store)

    with pytest.raises(ApiError):
        client.logout()

    assert not store.is_authenticated


def test_token_store_persists(tmp_path: Path) -> None:
    path = tmp_path / "session.json"
    TokenStore(path).save("access-1", "refresh-1")

    reloaded = TokenStore(path)

    assert reloaded.token == "access-1"
    assert reloaded.refresh_token == "refresh-1"
    reloaded.clear()
    assert not path.exists()
    assert TokenStore(path).token is None


def test_token_store_ignores_corrupt_file(tmp_path: Path) -> None:
    path = tmp_path / "session.json"
    path.write_text("{not json", encoding="utf-8")

    assert TokenStore(path).token is None
