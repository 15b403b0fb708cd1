# cozekit

A small, synchronous client for the Coze open API, built on `httpx`.

## Installation

```
pip install cozekit
```

## Getting started

Everything hangs off one `CozeAPI` object (in `cozekit.client`). Give it the
base URL of the API and either a fixed access token or a `token_provider`,
a callable asked for a fresh token before each request. An `httpx.Client` of
your own can be passed as `http_client`; otherwise one with a 5-second timeout
is created and released by `CozeAPI.close()`. `CozeAPI` is a context manager.

```python
from cozekit.client import CozeAPI
from cozekit.variables import RetrieveVariablesRequest

with CozeAPI("https://api.example.com", token="token") as api:
    me = api.users.me()
    print(me.user_name, me.log_id)

    result = api.variables.retrieve(
        RetrieveVariablesRequest(connector_uid="user-1", keywords=["key1", "key2"])
    )
    for item in result.items:
        print(item.keyword, item.value)
```

Giving both `token` and `token_provider` raises `ValueError`.

## What the client covers

- `api.users.me()` – the `User` the access token belongs to.
- `api.templates.duplicate(template_id, DuplicateTemplateRequest(...))` – copies
  a template into a workspace and returns a `TemplateDuplicateResult` with the
  new entity's id and `TemplateEntityType`.
- `api.variables.retrieve(RetrieveVariablesRequest(...))` and
  `api.variables.update(UpdateVariablesRequest(...))` – read and write
  `VariableValue`s for a connector user, optionally filtered by `app_id`,
  `bot_id` or `connector_id`. Passing `None` raises `ValueError("invalid req")`.
- `api.workflows.runs.create(RunWorkflowsRequest(...))` – runs a published
  workflow and returns a `RunWorkflowsResult` (`execute_id`, `data`,
  `debug_url`, `token`, `cost`).
- `api.workflows.runs.stream(RunWorkflowsRequest(...))` – runs a workflow and
  returns a `Stream` of `WorkflowEvent`s.
- `api.workflows.runs.resume(ResumeRunWorkflowsRequest(...))` – continues an
  interrupted run, also as a `Stream`.
- `api.workflows.runs.histories.retrieve(workflow_id, execute_id)` – a
  `RunHistoriesResult` holding `WorkflowRunHistory` records, each with its
  `WorkflowExecuteStatus` and `WorkflowRunMode`.

Every result object has a `log_id` property taken from the response headers,
useful when reporting a problem to the service team.

## Streaming

`Stream` (in `cozekit.stream_reader`) decodes events one at a time. Iterate over
it, or call `recv()`, which returns `None` once the stream is exhausted. Used as
a context manager it closes the response when the block ends:

```python
with api.workflows.runs.stream(RunWorkflowsRequest(workflow_id="wf-1")) as events:
    for event in events:
        if event.event is WorkflowEventType.MESSAGE:
            print(event.message.content)
        elif event.event is WorkflowEventType.INTERRUPT:
            data = event.interrupt.interrupt_data
            print("waiting on", data.event_id, data.type)
        elif event.is_done():
            print("debug page:", event.debug_url.url)
```

A `WorkflowEvent` carries `message`, `interrupt`, `error` or `debug_url`
according to its `WorkflowEventType`; unknown event types are read as messages.
The interrupt's `event_id` and `type` are what `ResumeRunWorkflowsRequest`
needs.

`parse_workflow_event(line, lines)` decodes one `id:`/`event:`/`data:` block,
and `parse_workflow_event_error(data)` and
`parse_workflow_event_interrupt(data)` turn a stored JSON payload into a
`WorkflowEventError` or `WorkflowEventInterrupt`.

## Errors

Failures are raised (classes in `cozekit.request`):

- `CozeAuthError` – a non-200 status with a JSON error body; it holds
  `error_code`, `error_message`, `http_code` and `log_id`.
- `httpx.HTTPStatusError` – a non-200 status whose body is not a JSON object.
- `CozeError` – a 200 response whose body carries a non-zero `code`; it holds
  `code`, `message` and `log_id`. A streaming call that gets a JSON answer
  instead of an event stream is checked the same way.

## Lower level

`Core` sends the requests the areas above are built on: `request`,
`raw_request`, `stream_request` and `upload_file` (multipart upload of a file
with extra form fields). Every request carries a `User-Agent` and an
`X-Coze-Client-User-Agent` header, built by `cozekit.user_agent`.
`cozekit.utils` has `generate_random_string`, `bytes_to_hex` and
`must_to_json`.

## What it does not do

The client is synchronous only and covers just the areas listed above: there
are no chat or conversation calls, no file or knowledge-base management, and
no OAuth or JWT token flows — authentication is a bearer token you supply. There
is no command-line tool.

## Running the tests

```
pip install "cozekit[test]"
pytest
```