import httpx
import pytest

from cozekit.request import LOG_ID_HEADER, CozeAuthError, Core
from cozekit.workflow_histories import (
    WorkflowExecuteStatus,
    WorkflowRunHistories,
    WorkflowRunHistory,
    WorkflowRunMode,
)


def make_histories(handler):
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return WorkflowRunHistories(Core("https://api.coze.com", http_client=client))


def test_retrieve_success():
    seen = {}

    def handler(request):
        seen["method"] = request.method
        seen["path"] = request.url.path
        return httpx.Response(
            200,
            json={
                "code": 0,
                "msg": "",
                "data": [
                    {
                        "execute_id": "exec1",
                        "execute_status": "Success",
                        "bot_id": "bot1",
                        "connector_id": "1024",
                        "connector_uid": "user1",
                        "run_mode": 1,
                        "logid": "log1",
                        "create_time": 1234567890,
                        "update_time": 1234567891,
                        "output": '{"result": "success"}',
                        "error_code": "0",
                        "error_message": "",
                        "debug_url": "https://debug.example.com",
                    }
                ],
            },
            headers={LOG_ID_HEADER: "test_log_id"},
        )

    resp = make_histories(handler).retrieve("workflow1", "exec1")

    assert seen == {"method": "GET", "path": "/v1/workflows/workflow1/run_histories/exec1"}
    assert resp.log_id == "test_log_id"
    assert len(resp.histories) == 1
    history = resp.histories[0]
    assert history.execute_id == "exec1"
    assert history.execute_status is WorkflowExecuteStatus.SUCCESS
    assert history.bot_id == "bot1"
    assert history.connector_id == "1024"
    assert history.connector_uid == "user1"
    assert history.run_mode is WorkflowRunMode.STREAMING
    assert history.log_id == "log1"
    assert history.create_time == 1234567890
    assert history.update_time == 1234567891
    assert history.output == '{"result": "success"}'
    assert history.error_code == "0"
    assert history.error_message == ""
    assert history.debug_url == "https://debug.example.com"


def test_retrieve_error():
    def handler(request):
        return httpx.Response(400, json={"code": 0, "msg": ""})

    with pytest.raises(CozeAuthError) as info:
        make_histories(handler).retrieve("invalid_workflow", "invalid_exec")
    assert info.value.http_code == 400


def test_run_mode_constants():
    assert WorkflowRunMode(0) is WorkflowRunMode.SYNCHRONOUS
    assert WorkflowRunMode(1) is WorkflowRunMode.STREAMING
    assert WorkflowRunMode(2) is WorkflowRunMode.ASYNCHRONOUS


def test_execute_status_constants():
    assert WorkflowExecuteStatus("Success") is WorkflowExecuteStatus.SUCCESS
    assert WorkflowExecuteStatus("Running") is WorkflowExecuteStatus.RUNNING
    assert WorkflowExecuteStatus("Fail") is WorkflowExecuteStatus.FAIL


def test_unknown_status_and_mode_are_kept():
    history = WorkflowRunHistory.from_dict({"execute_status": "Paused", "run_mode": 9})
    assert history.execute_status == "Paused"
    assert history.run_mode == 9
    assert history.execute_id == ""