import json
import logging
from typing import List

from crudgen.agents import get_agent
from crudgen.core.packager import guess_language
from crudgen.core.schema import (
    MODEL_REPLY_SCHEMA,
    CodeGenerationRequest,
    CodeGenerationResponse,
    GeneratedFile,
    SchemaValidationError,
    collect_errors,
    path_errors,
    project_name_for,
)

logger = logging.getLogger(__name__)


class GenerationError(RuntimeError):
    pass


def parse_model_reply(text: str) -> List[GeneratedFile]:
    """
    Parses the model's JSON envelope into GeneratedFile objects.

    A reply without a ``files`` key yields an empty list. Files without a
    ``language`` get one guessed from their extension.
    """
    reply = json.loads(text or "{}")
    errors = collect_errors(reply, MODEL_REPLY_SCHEMA)
    if not errors and isinstance(reply, dict):
        errors = path_errors(reply.get("files"), prefix=["files"])
    if errors:
        raise SchemaValidationError("Malformed model reply", errors)

    out: List[GeneratedFile] = []
    for f in reply.get("files") or []:
        language = f.get("language") or guess_language(f["path"])
        out.append(GeneratedFile(path=f["path"], content=f["content"], language=language))
    return out


def generate_backend_code(request: CodeGenerationRequest, client) -> List[GeneratedFile]:
    """Asks the model for the files of a CRUD backend.

    ``client`` is anything with ``ask_json(system, user) -> str``. Every
    failure is re-raised as a single GenerationError.
    """
    agent = get_agent(request.framework)
    system = agent.system_prompt()
    user = agent.build_prompt(request)
    try:
        text = client.ask_json(system, user)
        return parse_model_reply(text)
    except Exception as e:
        logger.exception("OpenAI generation error for %s (%s)", request.entity_name, request.framework)
        raise GenerationError("Failed to generate code with AI") from e


def generate_project(request: CodeGenerationRequest, client) -> CodeGenerationResponse:
    files = generate_backend_code(request, client)
    response = CodeGenerationResponse(
        files=tuple(files),
        project_name=project_name_for(request),
        framework=request.framework,
    )
    logger.info("Generated %d files for %s", len(files), response.project_name)
    return response
