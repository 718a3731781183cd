import pytest

from claimtracker import create_app
from claimtracker.errors import UpstreamError


class FakeLLM:
    """Stands in for the OpenAI client; records every request it receives."""

    def __init__(self):
        self.calls = []
        self.replies = []
        self.fail = False

    def complete(self, messages, *, max_tokens=None, temperature=None):
        self.calls.append({"messages": list(messages), "max_tokens": max_tokens})
        if self.fail:
            raise UpstreamError("Language model request failed: APIConnectionError")
        if self.replies:
            return self.replies.pop(0)
        return f"reply {len(self.calls)}"


@pytest.fixture()
def app():
    app = create_app("testing")
    app.extensions["llm"] = FakeLLM()
    yield app


@pytest.fixture()
def fake_llm(app):
    return app.extensions["llm"]


@pytest.fixture()
def client(app):
    return app.test_client()


def register(client, username="alice", password="pw123"):
    return client.post("/api/auth/register", json={"username": username, "password": password})


@pytest.fixture()
def auth_headers(client):
    resp = register(client)
    assert resp.status_code == 201
    return {"Authorization": f"Bearer {resp.get_json()['token']}"}


@pytest.fixture()
def create_claim(client, auth_headers):
    def _create(**overrides):
        body = {
            "claim_title": "Test",
            "description": "d",
            "published_url": "http://x",
            "category": "Research",
            "date_published": "2024-01-01",
        }
        body.update(overrides)
        resp = client.post("/api/claims", json=body, headers=auth_headers)
        assert resp.status_code == 201, resp.get_json()
        return resp.get_json()

    return _create
