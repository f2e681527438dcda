import json

import pytest

from crudgen.core.generator import (
    GenerationError,
    generate_backend_code,
    generate_project,
    parse_model_reply,
)
from crudgen.core.schema import GeneratedFile, SchemaValidationError, validate_request


@pytest.fixture
def gen_request(user_request_payload):
    return validate_request(user_request_payload)


def test_returns_files_from_reply(gen_request, fake_client):
    files = generate_backend_code(gen_request, fake_client)
    assert [f.path for f in files] == ["models/User.ts", "index.ts", "Dockerfile"]
    assert all(isinstance(f, GeneratedFile) for f in files)


def test_sends_system_and_framework_prompt(gen_request, fake_client):
    generate_backend_code(gen_request, fake_client)
    system, user = fake_client.calls[0]
    assert "expert backend developer" in system
    assert "models/User.ts" in user
    assert "Node.js/Express" in user


def test_reply_without_files_key_is_empty_list(gen_request, make_client):
    assert generate_backend_code(gen_request, make_client(reply={"note": "nothing"})) == []


def test_missing_language_is_guessed(gen_request, fake_client):
    files = generate_backend_code(gen_request, fake_client)
    assert files[-1].language == "dockerfile"
    assert files[0].language == "typescript"


def test_transport_failure_becomes_generation_error(gen_request, make_client):
    boom = ConnectionError("network down")
    with pytest.raises(GenerationError, match="Failed to generate code with AI") as exc:
        generate_backend_code(gen_request, make_client(error=boom))
    assert exc.value.__cause__ is boom


def test_unparseable_reply_becomes_generation_error(gen_request, make_client):
    with pytest.raises(GenerationError) as exc:
        generate_backend_code(gen_request, make_client(reply="not json at all"))
    assert isinstance(exc.value.__cause__, json.JSONDecodeError)


def test_structurally_invalid_reply_becomes_generation_error(gen_request, make_client):
    reply = {"files": [{"path": "index.ts"}]}
    with pytest.raises(GenerationError) as exc:
        generate_backend_code(gen_request, make_client(reply=reply))
    assert isinstance(exc.value.__cause__, SchemaValidationError)


def test_traversal_path_in_reply_is_rejected(gen_request, make_client):
    reply = {"files": [{"path": "../../.bashrc", "content": "rm -rf ~", "language": "bash"}]}
    with pytest.raises(GenerationError):
        generate_backend_code(gen_request, make_client(reply=reply))


def test_parse_model_reply_treats_empty_text_as_empty_object():
    assert parse_model_reply("") == []


def test_parse_model_reply_rejects_non_object():
    with pytest.raises(SchemaValidationError):
        parse_model_reply("[1, 2]")


def test_generate_project_wraps_envelope(gen_request, fake_client):
    result = generate_project(gen_request, fake_client)
    assert result.project_name == "user-nodejs-express"
    assert result.framework == "nodejs-express"
    body = result.to_dict()
    assert body["projectName"] == "user-nodejs-express"
    assert body["files"][0] == {
        "path": "models/User.ts",
        "content": "export interface User { email: string }",
        "language": "typescript",
    }
