"""HTTP plumbing: sending requests, decoding responses and raising API errors."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, BinaryIO, Union

import httpx

from .user_agent import CLIENT_USER_AGENT, USER_AGENT

logger = logging.getLogger(__name__)

LOG_ID_HEADER = "X-Tt-Logid"
DEFAULT_TIMEOUT = 5.0

Params = Union[Mapping[str, Any], list, None]
Headers = Union[Mapping[str, str], None]


@dataclass(frozen=True)
class HTTPResponse:
    """Status and headers of a response from the API."""

    headers: httpx.Headers = field(default_factory=httpx.Headers)
    status_code: int = 200

    def __post_init__(self) -> None:
        object.__setattr__(self, "headers", httpx.Headers(self.headers))

    @classmethod
    def from_response(cls, response: httpx.Response) -> "HTTPResponse":
        return cls(headers=response.headers, status_code=response.status_code)

    @property
    def log_id(self) -> str:
        return self.headers.get(LOG_ID_HEADER, "")


class CozeError(Exception):
    """The API answered with a non-zero business code."""

    def __init__(self, code: int, message: str, log_id: str = "") -> None:
        super().__init__(f"code={code}, message={message}, logid={log_id}")
        self.code = code
        self.message = message
        self.log_id = log_id


class CozeAuthError(Exception):
    """The API rejected the request with an authentication-style error body."""

    def __init__(
        self,
        error_code: str,
        error_message: str,
        http_code: int,
        log_id: str = "",
        error: str = "",
    ) -> None:
        super().__init__(
            f"http_code={http_code}, error_code={error_code}, "
            f"error_message={error_message}, logid={log_id}"
        )
        self.error_code = error_code
        self.error_message = error_message
        self.http_code = http_code
        self.log_id = log_id
        self.error = error


def _is_json(response: httpx.Response) -> bool:
    return "application/json" in response.headers.get("Content-Type", "")


def check_http_response(response: httpx.Response) -> None:
    """Raise when the response status is not 200 OK."""
    if response.status_code == 200:
        return
    log_id = response.headers.get(LOG_ID_HEADER, "")
    body = response.read()
    try:
        payload = json.loads(body)
    except ValueError:
        payload = None
    if not isinstance(payload, Mapping):
        text = body.decode("utf-8", errors="replace")
        logger.error("unmarshal response body: %s", text)
        raise httpx.HTTPStatusError(
            f"{text} log_id: {log_id}", request=response.request, response=response
        )
    raise CozeAuthError(
        error_code=str(payload.get("error_code") or ""),
        error_message=str(payload.get("error_message") or ""),
        http_code=response.status_code,
        log_id=log_id,
        error=str(payload.get("error") or ""),
    )


def check_business_code(payload: Any, http_response: HTTPResponse) -> None:
    """Raise :class:`CozeError` when the decoded body carries a non-zero code."""
    if not isinstance(payload, Mapping):
        return
    code = payload.get("code") or 0
    if code != 0:
        logger.warning(
            "request failed, body=%s, log_id=%s",
            json.dumps(payload, ensure_ascii=False),
            http_response.log_id,
        )
        raise CozeError(code, str(payload.get("msg") or ""), http_response.log_id)


class Core:
    """Sends requests to the API and decodes what comes back."""

    def __init__(
        self,
        base_url: str,
        http_client: httpx.Client | None = None,
        token_provider: Callable[[], str] | None = None,
    ) -> None:
        self.base_url = base_url
        self.client = (
            http_client if http_client is not None else httpx.Client(timeout=DEFAULT_TIMEOUT)
        )
        self.token_provider = token_provider

    def _common_headers(self) -> dict[str, str]:
        headers = {
            "User-Agent": USER_AGENT,
            "X-Coze-Client-User-Agent": CLIENT_USER_AGENT,
        }
        if self.token_provider is not None:
            try:
                access_token = self.token_provider()
            except Exception:
                logger.exception("failed to get access_token")
                raise
            headers["Authorization"] = f"Bearer {access_token}"
        return headers

    def _send(
        self,
        method: str,
        path: str,
        body: Any,
        params: Params,
        headers: Headers,
        stream: bool,
    ) -> httpx.Response:
        content = None
        if body is not None:
            content = json.dumps(body, separators=(",", ":"), ensure_ascii=False).encode()
        merged = httpx.Headers({"Content-Type": "application/json"})
        merged.update(headers or {})
        merged.update(self._common_headers())
        request = self.client.build_request(
            method, f"{self.base_url}{path}", content=content, params=params, headers=merged
        )
        response = self.client.send(request, stream=stream)
        check_http_response(response)
        return response

    @staticmethod
    def _pack(response: httpx.Response) -> tuple[Any, HTTPResponse]:
        check_http_response(response)
        body = response.read()
        http_response = HTTPResponse.from_response(response)
        try:
            payload = json.loads(body)
        except ValueError:
            logger.error("unmarshal response body: %s", body.decode("utf-8", errors="replace"))
            raise
        check_business_code(payload, http_response)
        return payload, http_response

    def request(
        self,
        method: str,
        path: str,
        body: Any = None,
        params: Params = None,
        headers: Headers = None,
    ) -> tuple[Any, HTTPResponse]:
        """Send a JSON request and return the decoded body with its response metadata."""
        response = self._send(method, path, body, params, headers, stream=False)
        return self._pack(response)

    def upload_file(
        self,
        path: str,
        file: Union[bytes, BinaryIO],
        file_name: str,
        fields: Mapping[str, str] | None = None,
        headers: Headers = None,
    ) -> tuple[Any, HTTPResponse]:
        """POST a multipart form holding ``file`` and ``fields``."""
        merged = httpx.Headers(headers or {})
        merged.update(self._common_headers())
        request = self.client.build_request(
            "POST",
            f"{self.base_url}{path}",
            files={"file": (file_name, file)},
            data=dict(fields or {}),
            headers=merged,
        )
        response = self.client.send(request)
        return self._pack(response)

    def raw_request(
        self,
        method: str,
        path: str,
        body: Any = None,
        params: Params = None,
        headers: Headers = None,
    ) -> httpx.Response:
        """Send a JSON request and return the undecoded response after the status check."""
        return self._send(method, path, body, params, headers, stream=False)

    def stream_request(
        self,
        method: str,
        path: str,
        body: Any = None,
        params: Params = None,
        headers: Headers = None,
    ) -> httpx.Response:
        """Send a request whose answer is read incrementally.

        A JSON answer instead of an event stream is checked for a business error.
        """
        response = self._send(method, path, body, params, headers, stream=True)
        if _is_json(response):
            response.read()
            self._pack(response)
        return response