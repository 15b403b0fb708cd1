import json
import platform

from cozekit.user_agent import (
    CLIENT_USER_AGENT,
    USER_AGENT,
    VERSION,
    build_client_user_agent,
    build_user_agent,
)


def test_user_agent_has_three_parts(monkeypatch):
    monkeypatch.setenv("OSVERSION", "test-os")
    parts = build_user_agent().split(" ")
    assert len(parts) == 3
    assert parts[0] == f"cozekit/{VERSION}"
    assert parts[1] == f"python/{platform.python_version()}"
    assert parts[2].endswith("/test-os")


def test_user_agent_without_os_version(monkeypatch):
    monkeypatch.delenv("OSVERSION", raising=False)
    assert build_user_agent().endswith("/")


def test_client_user_agent_fields(monkeypatch):
    monkeypatch.setenv("OSVERSION", "test-os")
    info = json.loads(build_client_user_agent())
    assert set(info) == {"version", "lang", "lang_version", "os_name", "os_version"}
    assert info["version"] == VERSION
    assert info["lang_version"] == platform.python_version()
    assert info["os_version"] == "test-os"
    assert info["os_name"] == platform.system().lower()


def test_client_user_agent_lang_matches_user_agent_prefix():
    info = json.loads(CLIENT_USER_AGENT)
    assert USER_AGENT.startswith(f"{info['lang']}/{info['version']} ")


def test_client_user_agent_is_compact():
    assert " " not in build_client_user_agent().replace(platform.python_version(), "")