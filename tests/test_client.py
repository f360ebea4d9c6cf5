# test the command-line client and its session stores
import json
import os

import pytest
import requests

from bloglist import client as cli
from bloglist.session import SESSION_KEY, FileSessionStore, MemorySessionStore

BASE_URL = "http://bloglist.test"

class _FlaskResponse:
    # just the parts of requests.Response the client reads
    def __init__(self, resp):
        self.status_code = resp.status_code
        self.text = resp.get_data(as_text=True)
        self._json = resp.get_json(silent=True)

    def json(self):
        if self._json is None:
            raise ValueError("no JSON body")
        return self._json

@pytest.fixture
def api(client, monkeypatch):
    # route every outgoing request to the Flask test client
    calls = []

    def fake_request(method, url, headers=None, timeout=None, **kwargs):
        assert url.startswith(BASE_URL)
        calls.append((method, url, dict(headers or {})))
        resp = client.open(url[len(BASE_URL):], method=method.upper(),
                           headers=headers, json=kwargs.get("json"))
        return _FlaskResponse(resp)

    monkeypatch.setattr("bloglist.client.requests.request", fake_request)
    return calls

def _run(store, *argv):
    return cli.main(["--base-url", BASE_URL, *argv], store=store)

### session stores

def test_memory_store_get_set_clear():
    store = MemorySessionStore()
    assert store.get() is None
    store.set({"token": "t", "username": "root", "name": "Superuser"})
    assert store.get()["username"] == "root"
    store.clear()
    assert store.get() is None

def test_file_store_persists_under_session_key(tmp_path):
    path = tmp_path / "nested" / "session.json"
    store = FileSessionStore(path)
    assert store.get() is None

    store.set({"token": "t", "username": "root", "name": "Superuser"})
    with open(path) as f:
        assert json.load(f)[SESSION_KEY]["token"] == "t"
    assert oct(os.stat(path).st_mode & 0o777) == oct(0o600)

    # a new store on the same file sees the session
    assert FileSessionStore(path).get()["name"] == "Superuser"

    store.clear()
    assert FileSessionStore(path).get() is None

def test_file_store_ignores_corrupt_file(tmp_path):
    path = tmp_path / "session.json"
    path.write_text("{not json")
    assert FileSessionStore(path).get() is None

### client flows

def test_signup_login_add_and_list(api, capsys):
    store = MemorySessionStore()
    assert _run(store, "signup", "mluukkai", "--name", "Matti", "--password", "salainen") == 0
    assert _run(store, "login", "mluukkai", "--password", "salainen") == 0

    session = store.get()
    assert session["username"] == "mluukkai"
    assert session["name"] == "Matti"
    assert session["token"]

    assert _run(store, "add", "My first blog", "https://example.com", "--author", "Matti") == 0
    capsys.readouterr()
    assert _run(store, "list") == 0
    out = capsys.readouterr().out
    assert "My first blog by Matti (0 likes)" in out
    assert "added by mluukkai" in out

def test_stored_token_is_attached_to_requests(api):
    store = MemorySessionStore()
    _run(store, "signup", "root", "--password", "sekret")
    _run(store, "login", "root", "--password", "sekret")
    _run(store, "add", "Blog", "https://example.com")

    method, _url, headers = api[-1]
    assert method == "post"
    assert headers["Authorization"] == f"Bearer {store.get()['token']}"

def test_wrong_credentials_are_reported(api, capsys):
    store = MemorySessionStore()
    _run(store, "signup", "root", "--password", "sekret")
    assert _run(store, "login", "root", "--password", "wrong") == 1
    assert "[error] Wrong credentials" in capsys.readouterr().out
    assert store.get() is None

def test_logout_clears_session(api, capsys):
    store = MemorySessionStore()
    _run(store, "signup", "root", "--password", "sekret")
    _run(store, "login", "root", "--password", "sekret")
    assert _run(store, "logout") == 0
    assert store.get() is None

    capsys.readouterr()
    assert _run(store, "add", "Blog", "https://example.com") == 1
    assert "You need to login first." in capsys.readouterr().out

def test_like_and_delete(api, capsys):
    store = MemorySessionStore()
    _run(store, "signup", "root", "--password", "sekret")
    _run(store, "login", "root", "--password", "sekret")
    _run(store, "add", "Blog", "https://example.com", "--likes", "2")

    assert _run(store, "like", "1") == 0
    assert "now has 3 likes" in capsys.readouterr().out

    assert _run(store, "delete", "1") == 0
    assert _run(store, "delete", "1") == 1
    assert "(404) blog not found" in capsys.readouterr().out

def test_server_error_message_is_shown(api, capsys):
    store = MemorySessionStore()
    _run(store, "signup", "root", "--password", "sekret")
    _run(store, "login", "root", "--password", "sekret")
    assert _run(store, "add", "", "https://example.com") == 1
    assert "(400) title is required" in capsys.readouterr().out

def test_stats_command(api, capsys):
    store = MemorySessionStore()
    _run(store, "signup", "root", "--password", "sekret")
    _run(store, "login", "root", "--password", "sekret")
    _run(store, "add", "A", "https://a.example", "--author", "ann", "--likes", "4")
    _run(store, "add", "B", "https://b.example", "--author", "bob", "--likes", "1")
    _run(store, "add", "C", "https://c.example", "--author", "bob", "--likes", "1")
    capsys.readouterr()

    assert _run(store, "stats") == 0
    out = capsys.readouterr().out
    assert "Total likes: 6" in out
    assert "Most blogs: bob (2)" in out
    assert "Most likes: ann (4)" in out

def test_unreachable_server(monkeypatch, capsys):
    def boom(*_args, **_kwargs):
        raise requests.ConnectionError("connection refused")

    monkeypatch.setattr("bloglist.client.requests.request", boom)
    assert _run(MemorySessionStore(), "list") == 1
    assert "request failed" in capsys.readouterr().out
