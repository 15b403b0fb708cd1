"""Duplicating templates into a workspace."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

from .request import Core, HTTPResponse


class TemplateEntityType(str, Enum):
    """Kind of entity a template produces."""

    AGENT = "agent"


@dataclass
class DuplicateTemplateRequest:
    """Where to put the copy and, optionally, what to call it."""

    workspace_id: str
    name: str | None = None

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"workspace_id": self.workspace_id}
        if self.name is not None:
            body["name"] = self.name
        return body


@dataclass
class TemplateDuplicateResult:
    """The entity created from a template."""

    entity_id: str = ""
    entity_type: Union[TemplateEntityType, str] = ""
    http_response: HTTPResponse | None = field(default=None, compare=False, repr=False)

    @classmethod
    def from_dict(
        cls, data: Mapping[str, Any] | None, http_response: HTTPResponse | None = None
    ) -> "TemplateDuplicateResult":
        data = data or {}
        raw_type = str(data.get("entity_type") or "")
        try:
            entity_type: Union[TemplateEntityType, str] = TemplateEntityType(raw_type)
        except ValueError:
            entity_type = raw_type
        return cls(
            entity_id=str(data.get("entity_id") or ""),
            entity_type=entity_type,
            http_response=http_response,
        )

    @property
    def log_id(self) -> str:
        return self.http_response.log_id if self.http_response is not None else ""


class Templates:
    """Operations on templates."""

    def __init__(self, core: Core) -> None:
        self._core = core

    def duplicate(
        self, template_id: str, req: DuplicateTemplateRequest
    ) -> TemplateDuplicateResult:
        """Create a copy of the template ``template_id``."""
        payload, http_response = self._core.request(
            "POST", f"/v1/templates/{template_id}/duplicate", req.to_dict()
        )
        return TemplateDuplicateResult.from_dict(payload.get("data"), http_response)