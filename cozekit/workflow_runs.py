"""Running workflows and reading the events they stream back."""

from __future__ import annotations

import json
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable

from .request import Core, HTTPResponse
from .stream_reader import Stream
from .workflow_histories import WorkflowRunHistories


class WorkflowEventType(str, Enum):
    """Kind of event in a workflow stream."""

    MESSAGE = "Message"
    ERROR = "Error"
    DONE = "Done"
    INTERRUPT = "Interrupt"


def _load_object(data: str) -> Mapping[str, Any]:
    payload = json.loads(data)
    if payload is None:
        return {}
    if not isinstance(payload, Mapping):
        raise ValueError(f"expected a JSON object, got: {data}")
    return payload


@dataclass
class WorkflowEventMessage:
    """Output streamed from a workflow node."""

    content: str = ""
    node_title: str = ""
    node_seq_id: str = ""
    node_is_finish: bool = False
    ext: dict[str, Any] | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "WorkflowEventMessage":
        ext = data.get("ext")
        return cls(
            content=str(data.get("content") or ""),
            node_title=str(data.get("node_title") or ""),
            node_seq_id=str(data.get("node_seq_id") or ""),
            node_is_finish=bool(data.get("node_is_finish")),
            ext=dict(ext) if isinstance(ext, Mapping) else None,
        )


@dataclass
class WorkflowEventInterruptData:
    """Identifies an interruption; both values are passed back when resuming."""

    event_id: str = ""
    type: int = 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "WorkflowEventInterruptData":
        return cls(event_id=str(data.get("event_id") or ""), type=int(data.get("type") or 0))


@dataclass
class WorkflowEventInterrupt:
    """The workflow stopped and waits for input."""

    interrupt_data: WorkflowEventInterruptData | None = None
    node_title: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "WorkflowEventInterrupt":
        raw = data.get("interrupt_data")
        return cls(
            interrupt_data=(
                WorkflowEventInterruptData.from_dict(raw) if isinstance(raw, Mapping) else None
            ),
            node_title=str(data.get("node_title") or ""),
        )


@dataclass
class WorkflowEventError:
    """An error reported inside the stream."""

    error_code: int = 0
    error_message: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "WorkflowEventError":
        return cls(
            error_code=int(data.get("error_code") or 0),
            error_message=str(data.get("error_message") or ""),
        )


@dataclass
class WorkflowEventDebugURL:
    """Debug page reported when the workflow finishes."""

    url: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "WorkflowEventDebugURL":
        return cls(url=str(data.get("debug_url") or ""))


@dataclass
class WorkflowEvent:
    """One event of a workflow stream."""

    id: int = 0
    event: WorkflowEventType = WorkflowEventType.MESSAGE
    message: WorkflowEventMessage | None = None
    interrupt: WorkflowEventInterrupt | None = None
    error: WorkflowEventError | None = None
    debug_url: WorkflowEventDebugURL | None = None

    def is_done(self) -> bool:
        return self.event == WorkflowEventType.DONE


def _message_event(event_id: int, payload: Mapping[str, Any]) -> WorkflowEvent:
    return WorkflowEvent(
        id=event_id,
        event=WorkflowEventType.MESSAGE,
        message=WorkflowEventMessage.from_dict(payload),
    )


def _interrupt_event(event_id: int, payload: Mapping[str, Any]) -> WorkflowEvent:
    return WorkflowEvent(
        id=event_id,
        event=WorkflowEventType.INTERRUPT,
        interrupt=WorkflowEventInterrupt.from_dict(payload),
    )


def _error_event(event_id: int, payload: Mapping[str, Any]) -> WorkflowEvent:
    return WorkflowEvent(
        id=event_id,
        event=WorkflowEventType.ERROR,
        error=WorkflowEventError.from_dict(payload),
    )


def _done_event(event_id: int, payload: Mapping[str, Any]) -> WorkflowEvent:
    return WorkflowEvent(
        id=event_id,
        event=WorkflowEventType.DONE,
        debug_url=WorkflowEventDebugURL.from_dict(payload),
    )


_BUILDERS: dict[WorkflowEventType, Callable[[int, Mapping[str, Any]], WorkflowEvent]] = {
    WorkflowEventType.MESSAGE: _message_event,
    WorkflowEventType.INTERRUPT: _interrupt_event,
    WorkflowEventType.ERROR: _error_event,
    WorkflowEventType.DONE: _done_event,
}


def _parse_id(raw: str) -> int:
    try:
        return int(raw)
    except ValueError:
        return 0


def _build_event(raw_id: str, raw_event: str, data: str) -> WorkflowEvent:
    try:
        event_type = WorkflowEventType(raw_event)
    except ValueError:
        event_type = WorkflowEventType.MESSAGE
    return _BUILDERS[event_type](_parse_id(raw_id), _load_object(data))


def parse_workflow_event(
    line: str, lines: Iterator[str]
) -> tuple[WorkflowEvent | None, bool]:
    """Decode the event that starts at ``line``, reading its event and data lines from ``lines``.

    Lines that do not start an event are skipped with ``(None, False)``.
    """
    if not line.startswith("id:"):
        return None, False
    raw_id = line[3:].strip()
    try:
        event_line = next(lines)
        data_line = next(lines)
    except StopIteration:
        raise EOFError("unexpected end of workflow event stream") from None
    event = _build_event(raw_id, event_line[6:].strip(), data_line[5:].strip())
    return event, event.is_done()


def parse_workflow_event_error(data: str) -> WorkflowEventError:
    """Decode the JSON body of an error event."""
    return WorkflowEventError.from_dict(_load_object(data))


def parse_workflow_event_interrupt(data: str) -> WorkflowEventInterrupt:
    """Decode the JSON body of an interrupt event."""
    return WorkflowEventInterrupt.from_dict(_load_object(data))


@dataclass
class RunWorkflowsRequest:
    """Which published workflow to run, and with what input."""

    workflow_id: str
    parameters: dict[str, Any] | None = None
    bot_id: str = ""
    ext: dict[str, str] | None = None
    is_async: bool = False
    app_id: str = ""

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"workflow_id": self.workflow_id}
        if self.parameters:
            body["parameters"] = self.parameters
        if self.bot_id:
            body["bot_id"] = self.bot_id
        if self.ext:
            body["ext"] = self.ext
        if self.is_async:
            body["is_async"] = True
        if self.app_id:
            body["app_id"] = self.app_id
        return body


@dataclass
class ResumeRunWorkflowsRequest:
    """Answer to an interruption, used to resume a workflow run."""

    workflow_id: str
    event_id: str
    resume_data: str
    interrupt_type: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "workflow_id": self.workflow_id,
            "event_id": self.event_id,
            "resume_data": self.resume_data,
            "interrupt_type": self.interrupt_type,
        }


@dataclass
class RunWorkflowsResult:
    """Result of a non-streamed workflow run."""

    execute_id: str = ""
    data: str = ""
    debug_url: str = ""
    token: int = 0
    cost: str = ""
    http_response: HTTPResponse | None = field(default=None, compare=False, repr=False)

    @classmethod
    def from_dict(
        cls, data: Mapping[str, Any], http_response: HTTPResponse | None = None
    ) -> "RunWorkflowsResult":
        return cls(
            execute_id=str(data.get("execute_id") or ""),
            data=str(data.get("data") or ""),
            debug_url=str(data.get("debug_url") or ""),
            token=int(data.get("token") or 0),
            cost=str(data.get("cost") or ""),
            http_response=http_response,
        )

    @property
    def log_id(self) -> str:
        return self.http_response.log_id if self.http_response is not None else ""


class WorkflowRuns:
    """Operations that run workflows."""

    def __init__(self, core: Core) -> None:
        self._core = core
        self.histories = WorkflowRunHistories(core)

    def create(self, req: RunWorkflowsRequest) -> RunWorkflowsResult:
        """Run a workflow and wait for its result."""
        payload, http_response = self._core.request("POST", "/v1/workflow/run", req.to_dict())
        return RunWorkflowsResult.from_dict(payload, http_response)

    def _stream(self, path: str, body: dict[str, Any]) -> Stream[WorkflowEvent]:
        response = self._core.stream_request("POST", path, body)
        return Stream(response, parse_workflow_event)

    def stream(self, req: RunWorkflowsRequest) -> Stream[WorkflowEvent]:
        """Run a workflow and stream its events."""
        return self._stream("/v1/workflow/stream_run", req.to_dict())

    def resume(self, req: ResumeRunWorkflowsRequest) -> Stream[WorkflowEvent]:
        """Resume an interrupted workflow run and stream its events."""
        return self._stream("/v1/workflow/stream_resume", req.to_dict())