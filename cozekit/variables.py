"""Reading and updating user variables."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from .request import Core, HTTPResponse


@dataclass
class VariableValue:
    """One variable: its keyword and value."""

    keyword: str
    value: str
    update_time: int = 0
    create_time: int = 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "VariableValue":
        return cls(
            keyword=str(data.get("keyword") or ""),
            value=str(data.get("value") or ""),
            update_time=int(data.get("update_time") or 0),
            create_time=int(data.get("create_time") or 0),
        )

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"keyword": self.keyword, "value": self.value}
        if self.update_time:
            body["update_time"] = self.update_time
        if self.create_time:
            body["create_time"] = self.create_time
        return body


def _add_filters(target: Any, app_id, bot_id, connector_id) -> None:
    for key, value in (("app_id", app_id), ("bot_id", bot_id), ("connector_id", connector_id)):
        if value is not None:
            target.append((key, value)) if isinstance(target, list) else target.update(
                {key: value}
            )


@dataclass
class RetrieveVariablesRequest:
    """Which variables to read."""

    connector_uid: str
    keywords: list[str] = field(default_factory=list)
    app_id: str | None = None
    bot_id: str | None = None
    connector_id: str | None = None

    def to_params(self) -> list[tuple[str, str]]:
        params = [
            ("connector_uid", self.connector_uid),
            ("keywords", ",".join(self.keywords)),
        ]
        _add_filters(params, self.app_id, self.bot_id, self.connector_id)
        return params


@dataclass
class RetrieveVariablesResult:
    """Variables that matched a retrieve request."""

    items: list[VariableValue] = field(default_factory=list)
    http_response: HTTPResponse | None = field(default=None, compare=False, repr=False)

    @property
    def log_id(self) -> str:
        return self.http_response.log_id if self.http_response is not None else ""


@dataclass
class UpdateVariablesRequest:
    """New values for a set of variables."""

    connector_uid: str
    data: list[VariableValue] = field(default_factory=list)
    app_id: str | None = None
    bot_id: str | None = None
    connector_id: str | None = None

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {
            "connector_uid": self.connector_uid,
            "data": [item.to_dict() for item in self.data],
        }
        _add_filters(body, self.app_id, self.bot_id, self.connector_id)
        return body


@dataclass
class UpdateVariablesResult:
    """Outcome of an update request."""

    http_response: HTTPResponse | None = field(default=None, compare=False, repr=False)

    @property
    def log_id(self) -> str:
        return self.http_response.log_id if self.http_response is not None else ""


class Variables:
    """Operations on variables."""

    def __init__(self, core: Core) -> None:
        self._core = core

    def retrieve(self, req: RetrieveVariablesRequest | None) -> RetrieveVariablesResult:
        """Return the variables matching ``req``."""
        if req is None:
            raise ValueError("invalid req")
        payload, http_response = self._core.request(
            "GET", "/v1/variables", params=req.to_params()
        )
        data = payload.get("data") or {}
        items = [VariableValue.from_dict(item) for item in data.get("items") or [] if item]
        return RetrieveVariablesResult(items=items, http_response=http_response)

    def update(self, req: UpdateVariablesRequest | None) -> UpdateVariablesResult:
        """Store the values in ``req``."""
        if req is None:
            raise ValueError("invalid req")
        _, http_response = self._core.request("PUT", "/v1/variables", req.to_dict())
        return UpdateVariablesResult(http_response=http_response)