"""The current user's account information."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from .request import Core, HTTPResponse


@dataclass
class User:
    """A user of the API."""

    user_id: str = ""
    user_name: str = ""
    nick_name: str = ""
    avatar_url: str = ""
    http_response: HTTPResponse | None = field(default=None, compare=False, repr=False)

    @classmethod
    def from_dict(
        cls, data: Mapping[str, Any] | None, http_response: HTTPResponse | None = None
    ) -> "User":
        data = data or {}
        return cls(
            user_id=str(data.get("user_id") or ""),
            user_name=str(data.get("user_name") or ""),
            nick_name=str(data.get("nick_name") or ""),
            avatar_url=str(data.get("avatar_url") or ""),
            http_response=http_response,
        )

    @property
    def log_id(self) -> str:
        return self.http_response.log_id if self.http_response is not None else ""


class Users:
    """Operations on users."""

    def __init__(self, core: Core) -> None:
        self._core = core

    def me(self) -> User:
        """Return the user the access token belongs to."""
        payload, http_response = self._core.request("GET", "/v1/users/me")
        return User.from_dict(payload.get("data"), http_response)