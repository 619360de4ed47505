import pytest

from rocketchat_rest.rest import Client
from rocketchat_rest.domain.exceptions import ValidationError
from rocketchat_rest.domain.models import Channel


class SettingsStub:
    server_url = "https://chat.example.com"
    user_id = "uid"
    auth_token = "tok"
    http_timeout = 1.0
    debug = False


def install_fake_http(monkeypatch, payload):
    calls = []

    class Resp:
        status_code = 200
        text = ""

        def json(self):
            return payload

    class FakeClient:
        def __init__(self, *a, **kw):
            pass

        def __enter__(self):
            return self

        def __exit__(self, *a):
            return False

        def get(self, url, params=None, headers=None):
            calls.append(("GET", url, params))
            return Resp()

        def post(self, url, json=None, headers=None):
            calls.append(("POST", url, json))
            return Resp()

    monkeypatch.setattr("httpx.Client", FakeClient)
    return calls


GENERAL = {
    "_id": "GENERAL",
    "name": "general",
    "t": "c",
    "msgs": 12,
    "ro": False,
    "default": True,
    "u": {"_id": "admin", "username": "admin"},
    "_updatedAt": "2018-01-21T21:05:03.234Z",
}


def test_get_public_channels(monkeypatch):
    calls = install_fake_http(monkeypatch, {"success": True, "channels": [GENERAL], "count": 1, "offset": 0, "total": 1})
    client = Client(SettingsStub())

    res = client.get_public_channels()

    assert calls == [("GET", "https://chat.example.com/api/v1/channels.list", None)]
    assert res.page.total == 1
    ch = res.channels[0]
    assert (ch.id, ch.name, ch.type, ch.msgs, ch.default) == ("GENERAL", "general", "c", 12, True)
    assert ch.user.username == "admin"


def test_get_joined_channels_passes_params(monkeypatch):
    calls = install_fake_http(monkeypatch, {"success": True, "channels": []})
    client = Client(SettingsStub())

    res = client.get_joined_channels({"count": 10})

    assert calls[0][1].endswith("/channels.list.joined")
    assert calls[0][2] == {"count": 10}
    assert res.channels == []


def test_get_channel_info(monkeypatch):
    calls = install_fake_http(monkeypatch, {"success": True, "channel": GENERAL})
    client = Client(SettingsStub())

    ch = client.get_channel_info(Channel(id="GENERAL"))

    assert calls[0][2] == {"roomId": "GENERAL"}
    assert ch.name == "general"
    assert ch.updated_at.year == 2018


def test_leave_channel(monkeypatch):
    calls = install_fake_http(monkeypatch, {"success": True, "channel": GENERAL})
    client = Client(SettingsStub())

    client.leave_channel(Channel(id="GENERAL"))

    assert calls[0] == ("POST", "https://chat.example.com/api/v1/channels.leave", {"roomId": "GENERAL"})


def test_channel_id_required(monkeypatch):
    install_fake_http(monkeypatch, {"success": True})
    client = Client(SettingsStub())

    with pytest.raises(ValidationError):
        client.leave_channel(Channel(name="general"))
    with pytest.raises(ValidationError):
        client.get_channel_info(Channel(name="general"))
