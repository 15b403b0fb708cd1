"""Reading server-sent event streams one event at a time."""

from __future__ import annotations

import json
from collections.abc import Callable, Iterator
from typing import Generic, TypeVar

import httpx

from .request import HTTPResponse, _is_json, check_business_code

T = TypeVar("T")

EventProcessor = Callable[[str, Iterator[str]], "tuple[T | None, bool]"]


class Stream(Generic[T]):
    """Events decoded from a streamed response.

    ``processor`` receives each non-empty line together with the iterator of the
    remaining lines, so it may consume the lines that belong to the same event.
    It returns the decoded event (or ``None`` to skip) and whether the stream is done.
    """

    def __init__(
        self,
        response: httpx.Response,
        processor: Callable[[str, Iterator[str]], tuple[T | None, bool]],
        http_response: HTTPResponse | None = None,
    ) -> None:
        self._response = response
        self._processor = processor
        self.http_response = (
            http_response if http_response is not None else HTTPResponse.from_response(response)
        )
        self.finished = False
        self._lines: Iterator[str] | None = None

    def _check_error(self) -> None:
        if not _is_json(self._response):
            return
        body = self._response.read()
        payload = json.loads(body) if body.strip() else {}
        check_business_code(payload, self.http_response)
        self._lines = iter(())

    def _line_iter(self) -> Iterator[str]:
        if self._lines is None:
            self._check_error()
        if self._lines is None:
            self._lines = self._response.iter_lines()
        return self._lines

    def recv(self) -> T | None:
        """Return the next event, or ``None`` once the stream is exhausted."""
        lines = self._line_iter()
        for line in lines:
            if not line:
                continue
            event, done = self._processor(line, lines)
            self.finished = done
            if event is not None:
                return event
        self.finished = True
        return None

    def close(self) -> None:
        self._response.close()

    def __iter__(self) -> Iterator[T]:
        while (event := self.recv()) is not None:
            yield event

    def __enter__(self) -> "Stream[T]":
        return self

    def __exit__(self, *args) -> None:
        self.close()