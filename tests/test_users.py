import httpx
import pytest

from cozekit.request import LOG_ID_HEADER, CozeAuthError, CozeError, Core
from cozekit.users import User, Users

BASE_URL = "https://api.coze.com"


def make_users(handler):
    client = httpx.Client(transport=httpx.MockTransport(handler))
    core = Core(BASE_URL, http_client=client, token_provider=lambda: "token")
    return Users(core)


def test_me_returns_user():
    seen = {}

    def handler(request):
        seen["method"] = request.method
        seen["path"] = request.url.path
        seen["auth"] = request.headers.get("Authorization")
        return httpx.Response(
            200,
            json={
                "code": 0,
                "msg": "",
                "data": {
                    "user_id": "test_user_id",
                    "user_name": "test_user",
                    "nick_name": "Test User",
                    "avatar_url": "https://example.com/avatar.jpg",
                },
            },
            headers={LOG_ID_HEADER: "test_log_id"},
        )

    user = make_users(handler).me()
    assert user.user_id == "test_user_id"
    assert user.user_name == "test_user"
    assert user.nick_name == "Test User"
    assert user.avatar_url == "https://example.com/avatar.jpg"
    assert user.log_id == "test_log_id"
    assert seen == {"method": "GET", "path": "/v1/users/me", "auth": "Bearer token"}


def test_me_business_error():
    def handler(request):
        return httpx.Response(200, json={"code": 4100, "msg": "bad token"})

    with pytest.raises(CozeError) as info:
        make_users(handler).me()
    assert info.value.code == 4100
    assert info.value.message == "bad token"


def test_me_auth_error():
    def handler(request):
        return httpx.Response(
            401, json={"error_code": "invalid_token", "error_message": "Token is invalid"}
        )

    with pytest.raises(CozeAuthError) as info:
        make_users(handler).me()
    assert info.value.error_code == "invalid_token"
    assert info.value.http_code == 401


def test_user_from_dict_missing_fields():
    user = User.from_dict({"user_id": "u1"})
    assert user == User(user_id="u1")
    assert user.log_id == ""