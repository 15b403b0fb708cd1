"""Entry point that groups every API area behind one client."""

from __future__ import annotations

from typing import Callable

import httpx

from .request import DEFAULT_TIMEOUT, Core
from .templates import Templates
from .users import Users
from .variables import Variables
from .workflow_runs import WorkflowRuns


class Workflows:
    """Workflow-related operations."""

    def __init__(self, core: Core) -> None:
        self.runs = WorkflowRuns(core)


class CozeAPI:
    """Client for the API.

    Authenticate with a fixed ``token`` or with ``token_provider``, a callable
    asked for a fresh access token before each request.
    """

    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        *,
        token_provider: Callable[[], str] | None = None,
        http_client: httpx.Client | None = None,
    ) -> None:
        if token is not None and token_provider is not None:
            raise ValueError("give either token or token_provider, not both")
        if token is not None:
            fixed_token = token
            token_provider = lambda: fixed_token  # noqa: E731
        self._owns_client = http_client is None
        client = http_client if http_client is not None else httpx.Client(timeout=DEFAULT_TIMEOUT)
        self.core = Core(base_url.rstrip("/"), http_client=client, token_provider=token_provider)
        self.users = Users(self.core)
        self.templates = Templates(self.core)
        self.variables = Variables(self.core)
        self.workflows = Workflows(self.core)

    def close(self) -> None:
        """Release the HTTP client if this object created it."""
        if self._owns_client:
            self.core.client.close()

    def __enter__(self) -> "CozeAPI":
        return self

    def __exit__(self, *args) -> None:
        self.close()