import json

import pytest

from main import create_app


class FakeClient:
    """Stands in for OpenAIClient; records prompts and replays a canned reply."""

    def __init__(self, reply=None, error=None):
        self.reply = reply if reply is not None else {"files": []}
        self.error = error
        self.calls = []

    def ask_json(self, system, user):
        self.calls.append((system, user))
        if self.error is not None:
            raise self.error
        if isinstance(self.reply, str):
            return self.reply
        return json.dumps(self.reply)


@pytest.fixture
def user_request_payload():
    return {
        "entityName": "User",
        "fields": [{"name": "email", "type": "email"}],
        "framework": "nodejs-express",
        "includeDocker": True,
        "includeCICD": False,
        "includeSwagger": True,
    }


@pytest.fixture
def model_reply():
    return {
        "files": [
            {"path": "models/User.ts", "content": "export interface User { email: string }", "language": "typescript"},
            {"path": "index.ts", "content": "import express from 'express';", "language": "typescript"},
            {"path": "Dockerfile", "content": "FROM node:18-alpine"},
        ]
    }


@pytest.fixture
def fake_client(model_reply):
    return FakeClient(reply=model_reply)


@pytest.fixture
def app(fake_client):
    app = create_app(client=fake_client)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_client():
    return FakeClient
