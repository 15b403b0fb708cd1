"""User-agent strings sent with every request."""

from __future__ import annotations

import json
import os
import platform

VERSION = "0.1.0"
SDK_NAME = "cozekit"
LANG = "python"


def _os_name() -> str:
    return platform.system().lower()


def _os_version() -> str:
    return os.environ.get("OSVERSION", "")


def build_user_agent() -> str:
    """Return the ``User-Agent`` header value."""
    return (
        f"{SDK_NAME}/{VERSION} {LANG}/{platform.python_version()} "
        f"{_os_name()}/{_os_version()}"
    )


def build_client_user_agent() -> str:
    """Return the JSON document sent in the ``X-Coze-Client-User-Agent`` header."""
    info = {
        "version": VERSION,
        "lang": SDK_NAME,
        "lang_version": platform.python_version(),
        "os_name": _os_name(),
        "os_version": _os_version(),
    }
    return json.dumps(info, separators=(",", ":"))


USER_AGENT = build_user_agent()
CLIENT_USER_AGENT = build_client_user_agent()