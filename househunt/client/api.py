from typing import Any, Callable, Dict, Optional

import httpx
from loguru import logger

from househunt.client.store import TokenStore

DEFAULT_BASE_URL = "http://localhost:8000/api"
DEFAULT_TIMEOUT = 10.0


class ApiError(Exception):
    """A failed call: non-2xx status or a `success: false` envelope."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class HouseHuntClient:
    """
    Thin synchronous wrapper over the HouseHunt REST API.

    The bearer token from `store` is attached to every request. Any 401
    wipes the store and calls `on_unauthorized`, so callers can send the
    user back to the login screen.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        store: Optional[TokenStore] = None,
        on_unauthorized: Optional[Callable[[], None]] = None,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.store = store or TokenStore()
        self.on_unauthorized = on_unauthorized
        self._http = httpx.Client(
            base_url=base_url,
            timeout=timeout,
            headers={"Content-Type": "application/json"},
            transport=transport,
        )

    def __enter__(self) -> "HouseHuntClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        self._http.close()

    # ---- plumbing ----
    def _request(self, method: str, path: str, **kwargs: Any) -> Dict[str, Any]:
        headers = kwargs.pop("headers", {})
        if self.store.token:
            headers["Authorization"] = f"Bearer {self.store.token}"
        response = self._http.request(method, path, headers=headers, **kwargs)

        if response.status_code == httpx.codes.UNAUTHORIZED:
            logger.info("Session rejected by the server, clearing tokens")
            self.store.clear()
            if self.on_unauthorized is not None:
                self.on_unauthorized()

        try:
            body = response.json()
        except ValueError:
            raise ApiError(response.status_code, response.text or response.reason_phrase)
        if response.is_error or not body.get("success", False):
            raise ApiError(response.status_code, body.get("error") or "API Error")
        return body

    def _data(self, method: str, path: str, **kwargs: Any) -> Any:
        return self._request(method, path, **kwargs).get("data")

    @staticmethod
    def _page_params(page: int, page_size: int, **filters: Any) -> Dict[str, Any]:
        params = {"page": page, "pageSize": page_size}
        params.update({key: value for key, value in filters.items() if value is not None})
        return params

    def _remember(self, auth: Dict[str, Any]) -> Dict[str, Any]:
        self.store.save(auth["token"], auth["refreshToken"])
        return auth

    # ---- auth ----
    def signup_tenant(self, **fields: Any) -> Dict[str, Any]:
        return self._remember(self._data("POST", "/auth/signup/tenant", json=fields))

    def signup_landlord(self, **fields: Any) -> Dict[str, Any]:
        return self._remember(self._data("POST", "/auth/signup/landlord", json=fields))

    def login(self, email: str, password: str) -> Dict[str, Any]:
        auth = self._data("POST", "/auth/login", json={"email": email, "password": password})
        return self._remember(auth)

    def refresh(self) -> str:
        """Swap the stored refresh token for a new access token."""
        data = self._data(
            "POST", "/auth/refresh", json={"refreshToken": self.store.refresh_token},
        )
        self.store.save(data["token"])
        return data["token"]

    def logout(self) -> None:
        try:
            self._request("POST", "/auth/logout")
        finally:
            self.store.clear()

    def me(self) -> Dict[str, Any]:
        return self._data("GET", "/auth/me")

    # ---- houses ----
    def list_houses(
        self,
        page: int = 1,
        page_size: int = 20,
        *,
        city: Optional[str] = None,
        estate: Optional[str] = None,
        min_price: Optional[float] = None,
        max_price: Optional[float] = None,
        amenity: Optional[str] = None,
    ) -> Dict[str, Any]:
        params = self._page_params(
            page,
            page_size,
            city=city,
            estate=estate,
            minPrice=min_price,
            maxPrice=max_price,
            amenity=amenity,
        )
        return self._data("GET", "/houses", params=params)

    def get_house(self, house_id: int) -> Dict[str, Any]:
        return self._data("GET", f"/houses/{house_id}")

    def create_house(self, **fields: Any) -> Dict[str, Any]:
        return self._data("POST", "/houses", json=fields)

    def update_house(self, house_id: int, **fields: Any) -> Dict[str, Any]:
        return self._data("PUT", f"/houses/{house_id}", json=fields)

    def delete_house(self, house_id: int) -> Dict[str, Any]:
        return self._data("DELETE", f"/houses/{house_id}")

    def update_house_status(self, house_id: int, status: str) -> Dict[str, Any]:
        return self._data("PATCH", f"/houses/{house_id}/status", json={"status": status})

    def my_houses(self, page: int = 1, page_size: int = 20) -> Dict[str, Any]:
        return self._data("GET", "/my-houses", params=self._page_params(page, page_size))

    def landlord_houses(
        self, landlord_id: int, page: int = 1, page_size: int = 20,
    ) -> Dict[str, Any]:
        return self._data(
            "GET",
            f"/landlords/{landlord_id}/houses",
            params=self._page_params(page, page_size),
        )
