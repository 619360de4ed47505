import logging

import pytest

from rocketchat_rest.rest import Client, create_client
from rocketchat_rest.domain.exceptions import ValidationError
from rocketchat_rest.domain.models import UserCredentials


class SettingsStub:
    server_url = "https://chat.example.com"
    user_id = None
    auth_token = None
    username = None
    password = None
    http_timeout = 1.0
    debug = False


def install_fake_http(monkeypatch, responses):
    """responses: endpoint 名称 -> 返回的 JSON。"""

    calls = []

    class Resp:
        status_code = 200
        text = ""

        def __init__(self, payload):
            self._payload = payload

        def json(self):
            return self._payload

    class FakeClient:
        def __init__(self, *a, **kw):
            pass

        def __enter__(self):
            return self

        def __exit__(self, *a):
            return False

        def post(self, url, json=None, headers=None):
            api = url.rsplit("/", 1)[-1]
            calls.append({"api": api, "json": json, "headers": headers})
            return Resp(responses[api])

    monkeypatch.setattr("httpx.Client", FakeClient)
    return calls


LOGIN_OK = {"status": "success", "data": {"userId": "aobEdbYhXfu5hkeqG", "authToken": "9HqLlyZOugoStsXCUfD_0YdwnNnunAJF8V47U3QHXSq", "me": {"username": "john"}}}


def test_login_with_password_sets_auth(monkeypatch):
    calls = install_fake_http(monkeypatch, {"login": LOGIN_OK, "logout": {"status": "success", "data": {"message": "You've been logged out!"}}})
    client = Client(SettingsStub())

    res = client.login(UserCredentials(email="john@example.com", password="secret"))

    assert calls[0]["json"] == {"user": "john@example.com", "password": "secret"}
    assert "X-Auth-Token" not in calls[0]["headers"]
    assert res.user_id == "aobEdbYhXfu5hkeqG"
    assert res.me == {"username": "john"}
    assert client.authenticated

    client.logout()
    assert calls[1]["api"] == "logout"
    assert calls[1]["headers"]["X-User-Id"] == "aobEdbYhXfu5hkeqG"
    assert not client.authenticated


def test_login_with_resume_token(monkeypatch):
    calls = install_fake_http(monkeypatch, {"login": LOGIN_OK})
    client = Client(SettingsStub())

    client.login(UserCredentials(token="resume-token"))

    assert calls[0]["json"] == {"resume": "resume-token"}


def test_login_requires_credentials(monkeypatch):
    calls = install_fake_http(monkeypatch, {})
    client = Client(SettingsStub())

    with pytest.raises(ValidationError) as exc:
        client.login(UserCredentials(name="john"))
    assert exc.value.code == "MISSING_CREDENTIALS"
    assert calls == []


def test_login_skipped_when_already_authenticated(monkeypatch):
    calls = install_fake_http(monkeypatch, {})

    class TokenSettings(SettingsStub):
        user_id = "uid"
        auth_token = "tok"

    client = Client(TokenSettings())
    res = client.login(UserCredentials(name="john", password="secret"))

    assert res.user_id == "uid"
    assert calls == []


def test_logout_when_not_authenticated(monkeypatch):
    calls = install_fake_http(monkeypatch, {})
    client = Client(SettingsStub())

    assert client.logout().success is True
    assert calls == []


def test_create_token(monkeypatch):
    calls = install_fake_http(monkeypatch, {"users.createToken": {"success": True, "data": {"userId": "u2", "authToken": "t2"}}})

    class TokenSettings(SettingsStub):
        user_id = "admin"
        auth_token = "admin-token"

    client = Client(TokenSettings())
    res = client.create_token("u2", "bot")

    assert calls[0]["json"] == {"userId": "u2", "username": "bot"}
    assert res.auth_token == "t2"
    # 为其他用户创建 token 不影响当前会话
    assert calls[0]["headers"]["X-User-Id"] == "admin"


def test_create_client_logs_in_with_password(monkeypatch):
    calls = install_fake_http(monkeypatch, {"login": LOGIN_OK})

    class PasswordSettings(SettingsStub):
        username = "john"
        password = "secret"

    client = create_client(PasswordSettings())

    assert isinstance(client, Client)
    assert calls[0]["json"] == {"user": "john", "password": "secret"}
    assert client.authenticated


def test_create_client_with_token_does_not_login(monkeypatch):
    calls = install_fake_http(monkeypatch, {})

    class TokenSettings(SettingsStub):
        user_id = "uid"
        auth_token = "tok"
        username = "john"
        password = "secret"

    client = create_client(TokenSettings())

    assert client.authenticated
    assert calls == []


def test_debug_log_masks_password(monkeypatch, caplog):
    install_fake_http(monkeypatch, {"login": LOGIN_OK})

    class DebugSettings(SettingsStub):
        debug = True

    caplog.set_level(logging.INFO, logger="rocketchat_rest")
    Client(DebugSettings()).login(UserCredentials(name="john", password="hunter2"))

    bodies = [r.extra["body"] for r in caplog.records if r.getMessage() == "rest.request"]
    assert bodies == [{"user": "john", "password": "***"}]
    assert not any("hunter2" in str(getattr(r, "extra", "")) for r in caplog.records)


def test_debug_log_masks_resume_token(monkeypatch, caplog):
    install_fake_http(monkeypatch, {"login": LOGIN_OK})

    class DebugSettings(SettingsStub):
        debug = True

    caplog.set_level(logging.INFO, logger="rocketchat_rest")
    Client(DebugSettings()).login(UserCredentials(token="resume-token"))

    bodies = [r.extra["body"] for r in caplog.records if r.getMessage() == "rest.request"]
    assert bodies == [{"resume": "***"}]


def test_auth_exposed_after_login(monkeypatch):
    install_fake_http(monkeypatch, {"login": LOGIN_OK})
    client = Client(SettingsStub())

    client.login(UserCredentials(name="john", password="secret"))

    assert client.user_id == "aobEdbYhXfu5hkeqG"
    assert client.auth_token == "9HqLlyZOugoStsXCUfD_0YdwnNnunAJF8V47U3QHXSq"
