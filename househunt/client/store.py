import json
from pathlib import Path
from typing import Optional, Union

from loguru import logger


class TokenStore:
    """
    Holds the access/refresh pair of the signed-in user.

    With a `path`, the pair is also written to a small JSON file so it
    survives restarts.
    """

    def __init__(self, path: Optional[Union[str, Path]] = None) -> None:
        self.path = Path(path) if path is not None else None
        self.token: Optional[str] = None
        self.refresh_token: Optional[str] = None
        self._load()

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None

    def save(self, token: Optional[str], refresh_token: Optional[str] = None) -> None:
        self.token = token
        if refresh_token is not None:
            self.refresh_token = refresh_token
        self._dump()

    def clear(self) -> None:
        self.token = None
        self.refresh_token = None
        if self.path is not None and self.path.exists():
            self.path.unlink()

    def _load(self) -> None:
        if self.path is None or not self.path.exists():
            return
        try:
            stored = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            logger.warning("Ignoring unreadable token file {}", self.path)
            return
        self.token = stored.get("token")
        self.refresh_token = stored.get("refreshToken")

    def _dump(self) -> None:
        if self.path is None:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(
            json.dumps({"token": self.token, "refreshToken": self.refresh_token}),
            encoding="utf-8",
        )
