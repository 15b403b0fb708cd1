import httpx
import pytest

from cozekit.request import LOG_ID_HEADER, CozeError, HTTPResponse
from cozekit.stream_reader import Stream


def processor(line, lines):
    done = line == "done"
    return {"event": "Done" if done else "Message", "content": line}, done


def make_response(events):
    return httpx.Response(200, content="\n".join(events).encode())


def log_response():
    return HTTPResponse(headers={LOG_ID_HEADER: "test_log_id"})


def test_successful_event_processing():
    with Stream(make_response(["first", "second", "done"]), processor, log_response()) as stream:
        event = stream.recv()
        assert event == {"event": "Message", "content": "first"}
        assert stream.finished is False

        event = stream.recv()
        assert event == {"event": "Message", "content": "second"}
        assert stream.finished is False

        event = stream.recv()
        assert event["event"] == "Done"
        assert stream.finished is True

        assert stream.recv() is None


def test_empty_lines_are_skipped():
    stream = Stream(make_response(["", "test", "", "done"]), processor)
    first = stream.recv()
    assert first == {"event": "Message", "content": "test"}
    second = stream.recv()
    assert second["event"] == "Done"


def test_error_response_without_code_yields_nothing():
    response = httpx.Response(
        400,
        headers={"Content-Type": "application/json"},
        content=b'{"log_id": "error_log_id", "error": {"code": 400, "message": "Bad Request"}}',
    )
    stream = Stream(response, processor, log_response())
    assert stream.recv() is None
    assert stream.finished is True


def test_json_response_with_code_raises():
    response = httpx.Response(200, json={"code": 4000, "msg": "bad request"})
    stream = Stream(response, processor, log_response())
    with pytest.raises(CozeError) as info:
        stream.recv()
    assert info.value.code == 4000
    assert info.value.log_id == "test_log_id"


def test_log_id():
    stream = Stream(make_response([]), processor, log_response())
    assert stream.http_response.log_id == "test_log_id"


def test_log_id_from_response_headers():
    response = httpx.Response(200, content=b"", headers={LOG_ID_HEADER: "from-header"})
    assert Stream(response, processor).http_response.log_id == "from-header"


def test_iteration_collects_all_events():
    stream = Stream(make_response(["a", "b", "done"]), processor)
    assert [event["content"] for event in stream] == ["a", "b", "done"]


def test_processor_can_consume_following_lines():
    def paired(line, lines):
        if not line.startswith("id:"):
            return None, False
        return (line[3:], next(lines)), False

    stream = Stream(make_response(["id:1", "one", "noise", "id:2", "two"]), paired)
    assert list(stream) == [("1", "one"), ("2", "two")]


def test_processor_errors_propagate():
    def broken(line, lines):
        raise ValueError("bad line")

    stream = Stream(make_response(["x"]), broken)
    with pytest.raises(ValueError, match="bad line"):
        stream.recv()


def test_context_manager_closes_response():
    response = make_response(["done"])
    with Stream(response, processor) as stream:
        assert stream.recv()["content"] == "done"
    assert response.is_closed is True