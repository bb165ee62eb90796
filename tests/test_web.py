# tests/test_web.py
from __future__ import annotations

import threading
import time

import pytest

import app as scribe_app
from scribe.session import Session


@pytest.fixture
def session():
    return Session("sys")


@pytest.fixture
def client(registry, session):
    def generate(messages):
        return f'Listing.\n```tool listDir\n{{"path": "."}}\n```\n(you said {messages[-1]["content"]})'

    flask_app = scribe_app.create_app(registry=registry, generate=generate, session=session)
    flask_app.config["TESTING"] = True
    return flask_app.test_client()


def test_ping(client):
    assert client.get("/api/ping").get_json() == {"status": "ok", "tools": 8}


def test_chat_round_trip(workdir, client, session):
    (workdir / "hello.txt").write_text("hi")

    resp = client.post("/api/chat", json={"message": "what's here?"})

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["status"] == "ok"
    assert "hello.txt" in body["reply"]
    assert body["results"][0]["tool"] == "listDir"
    assert session.tool_calls == 1


def test_chat_requires_message(client):
    resp = client.post("/api/chat", json={"message": "   "})
    assert resp.status_code == 400
    assert resp.get_json()["status"] == "error"


def test_tools_catalogue(client):
    tools = client.get("/api/tools").get_json()["tools"]
    assert tools[0].startswith("createFile(path: string, content?: string):")
    assert tools[-1].startswith("bash(command: string, timeout?: number, cwd?: string):")


def test_run_tools_directly(workdir, client):
    text = '```tool:createFile\n{"path": "note.txt", "content": "abc"}\n```'

    body = client.post("/api/tools/run", json={"text": text}).get_json()

    assert body["results"][0]["success"] is True
    assert "3 bytes written" in body["text"]
    assert (workdir / "note.txt").read_text() == "abc"


def test_session_summary(workdir, client):
    client.post("/api/chat", json={"message": "hi"})
    summary = client.get("/api/session").get_json()
    assert summary["user_messages"] == 1
    assert summary["tool_usage"] == {"listDir": 1}


def test_concurrent_chats_run_one_at_a_time(registry, monkeypatch):
    monkeypatch.delenv("SCRIBE_HISTORY_LIMIT", raising=False)
    guard = threading.Lock()
    active = []
    peak = []

    def generate(messages):
        with guard:
            active.append(1)
            peak.append(len(active))
        time.sleep(0.05)
        with guard:
            active.pop()
        return f"echo {messages[-1]['content']}"

    session = Session("sys")
    flask_app = scribe_app.create_app(registry=registry, generate=generate, session=session)

    def post(i):
        flask_app.test_client().post("/api/chat", json={"message": f"m{i}"})

    threads = [threading.Thread(target=post, args=(i,)) for i in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert max(peak) == 1
    history = session.messages[1:]
    assert [m["role"] for m in history] == ["user", "assistant"] * 4
    for question, answer in zip(history[::2], history[1::2]):
        assert answer["content"] == f"echo {question['content']}"
