"""Python client for the HouseHunt API."""
from househunt.client.api import ApiError, HouseHuntClient
from househunt.client.store import TokenStore

__all__ = ["ApiError", "HouseHuntClient", "TokenStore"]
