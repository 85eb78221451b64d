"""
Tests for the AI assistant pass-through.
"""
import json
from functools import partial

import httpx

from app.core.config import settings
from app.services import ai_service


def _mock_upstream(monkeypatch, handler):
    real_client = httpx.AsyncClient
    monkeypatch.setattr(
        ai_service.httpx, "AsyncClient",
        partial(real_client, transport=httpx.MockTransport(handler))
    )


def test_chat_unconfigured(client, auth_headers, monkeypatch):
    monkeypatch.setattr(settings, "OPENAI_API_KEY", "")
    response = client.post("/api/ai/chat", headers=auth_headers, json={"message": "hi"})
    assert response.status_code == 503


def test_chat_forwards_message(client, auth_headers, monkeypatch):
    monkeypatch.setattr(settings, "OPENAI_API_KEY", "test-key")
    seen = {}

    def handler(request):
        seen["auth"] = request.headers["Authorization"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"choices": [{"message": {"content": " Save 10% first. "}}]})

    _mock_upstream(monkeypatch, handler)
    response = client.post("/api/ai/chat", headers=auth_headers, json={
        "message": "How do I save?",
        "history": [{"role": "user", "content": "Hello"}, {"role": "system", "content": "ignored"}]
    })
    assert response.status_code == 200
    assert response.json() == {"reply": "Save 10% first."}
    assert seen["auth"] == "Bearer test-key"
    roles = [message["role"] for message in seen["body"]["messages"]]
    assert roles == ["system", "user", "user"]
    assert seen["body"]["messages"][-1]["content"] == "How do I save?"


def test_chat_upstream_failure(client, auth_headers, monkeypatch):
    monkeypatch.setattr(settings, "OPENAI_API_KEY", "test-key")
    _mock_upstream(monkeypatch, lambda request: httpx.Response(500, json={"error": "boom"}))
    response = client.post("/api/ai/chat", headers=auth_headers, json={"message": "hi"})
    assert response.status_code == 502


def test_chat_requires_auth(client):
    assert client.post("/api/ai/chat", json={"message": "hi"}).status_code == 401
