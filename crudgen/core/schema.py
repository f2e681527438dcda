import os
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

import jsonschema


FIELD_TYPES: Tuple[str, ...] = (
    "string",
    "number",
    "boolean",
    "date",
    "email",
    "password",
    "text",
    "integer",
    "float",
    "array",
)

FRAMEWORKS: Tuple[str, ...] = ("nodejs-express", "spring-boot")

REQUEST_DEFAULTS: Dict[str, bool] = {
    "includeDocker": False,
    "includeCICD": False,
    "includeSwagger": True,
}


ENTITY_FIELD_SCHEMA = {
    "type": "object",
    "required": ["name", "type"],
    "properties": {
        "name": {"type": "string", "minLength": 1},
        "type": {"type": "string", "enum": list(FIELD_TYPES)},
    },
}

CODE_GENERATION_REQUEST_SCHEMA = {
    "type": "object",
    "required": ["entityName", "fields", "framework"],
    "properties": {
        "entityName": {"type": "string", "minLength": 1},
        "fields": {"type": "array", "minItems": 1, "items": ENTITY_FIELD_SCHEMA},
        "framework": {"type": "string", "enum": list(FRAMEWORKS)},
        "includeDocker": {"type": "boolean"},
        "includeCICD": {"type": "boolean"},
        "includeSwagger": {"type": "boolean"},
    },
}

GENERATED_FILE_SCHEMA = {
    "type": "object",
    "required": ["path", "content", "language"],
    "properties": {
        "path": {"type": "string"},
        "content": {"type": "string"},
        "language": {"type": "string"},
    },
}

CODE_GENERATION_RESPONSE_SCHEMA = {
    "type": "object",
    "required": ["files", "projectName", "framework"],
    "properties": {
        "files": {"type": "array", "items": GENERATED_FILE_SCHEMA},
        "projectName": {"type": "string"},
        "framework": {"type": "string", "enum": list(FRAMEWORKS)},
    },
}

# Envelope the model is asked to return; "files" may be absent.
MODEL_REPLY_SCHEMA = {
    "type": "object",
    "properties": {
        "files": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["path", "content"],
                "properties": {
                    "path": {"type": "string"},
                    "content": {"type": "string"},
                    "language": {"type": "string"},
                },
            },
        },
    },
}


class SchemaValidationError(ValueError):
    """Raised when a payload does not match its contract.

    ``details`` is a list of ``{"path", "message", "code"}`` dicts, one per
    violation, ordered by path.
    """

    def __init__(self, message: str, details: List[Dict[str, Any]]):
        super().__init__(message)
        self.details = details


@dataclass(frozen=True)
class EntityField:
    name: str
    type: str

    def to_dict(self) -> Dict[str, str]:
        return {"name": self.name, "type": self.type}


@dataclass(frozen=True)
class CodeGenerationRequest:
    entity_name: str
    fields: Tuple[EntityField, ...]
    framework: str
    include_docker: bool = False
    include_cicd: bool = False
    include_swagger: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "entityName": self.entity_name,
            "fields": [f.to_dict() for f in self.fields],
            "framework": self.framework,
            "includeDocker": self.include_docker,
            "includeCICD": self.include_cicd,
            "includeSwagger": self.include_swagger,
        }


@dataclass(frozen=True)
class GeneratedFile:
    path: str
    content: str
    language: str

    def to_dict(self) -> Dict[str, str]:
        return {"path": self.path, "content": self.content, "language": self.language}


@dataclass(frozen=True)
class CodeGenerationResponse:
    files: Tuple[GeneratedFile, ...]
    project_name: str
    framework: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "files": [f.to_dict() for f in self.files],
            "projectName": self.project_name,
            "framework": self.framework,
        }


def normalize_path(path: str) -> str:
    """Folds backslashes to ``/`` and drops leading ``./`` segments."""
    p = path.replace("\\", "/")
    while p.startswith("./"):
        p = p[2:]
    return p


def is_safe_path(path: str) -> bool:
    """True for a relative file path with no empty, ``.`` or ``..`` segment.

    Directory-like paths (``a/``) and paths that are empty once normalised
    (``./``, ``.``) are not file paths and are rejected too.
    """
    if not isinstance(path, str) or not path.strip():
        return False
    p = normalize_path(path)
    if p.startswith("/") or os.path.isabs(p):
        return False
    # Windows drive letters (C:/...) are absolute as well
    if len(p) > 1 and p[1] == ":":
        return False
    return all(seg not in ("", ".", "..") for seg in p.split("/"))


def _path_sort_key(err: jsonschema.ValidationError) -> List[Tuple[int, Any]]:
    # Array indices compare numerically, so fields/2 sorts before fields/10.
    return [(0, p) if isinstance(p, int) else (1, str(p)) for p in err.absolute_path]


def _error_detail(err: jsonschema.ValidationError) -> Dict[str, Any]:
    return {"path": list(err.absolute_path), "message": err.message, "code": err.validator}


def collect_errors(payload: Any, schema: Dict[str, Any]) -> List[Dict[str, Any]]:
    validator = jsonschema.Draft7Validator(schema)
    errors = sorted(validator.iter_errors(payload), key=_path_sort_key)
    return [_error_detail(e) for e in errors]


def path_errors(files: Any, prefix: Optional[List[Any]] = None) -> List[Dict[str, Any]]:
    """Field-level errors for every unsafe ``path`` in a list of file dicts."""
    out: List[Dict[str, Any]] = []
    if not isinstance(files, list):
        return out
    base = list(prefix or [])
    for i, f in enumerate(files):
        if not isinstance(f, dict) or not isinstance(f.get("path"), str):
            continue
        if not is_safe_path(f["path"]):
            out.append({
                "path": base + [i, "path"],
                "message": f"Unsafe file path: {f['path']!r}",
                "code": "safePath",
            })
    return out


def validate_request(payload: Any) -> CodeGenerationRequest:
    errors = collect_errors(payload, CODE_GENERATION_REQUEST_SCHEMA)
    if errors:
        raise SchemaValidationError("Invalid request", errors)

    data = dict(REQUEST_DEFAULTS)
    data.update({k: payload[k] for k in REQUEST_DEFAULTS if k in payload})
    return CodeGenerationRequest(
        entity_name=payload["entityName"],
        fields=tuple(EntityField(name=f["name"], type=f["type"]) for f in payload["fields"]),
        framework=payload["framework"],
        include_docker=data["includeDocker"],
        include_cicd=data["includeCICD"],
        include_swagger=data["includeSwagger"],
    )


def validate_response(payload: Any) -> CodeGenerationResponse:
    errors = collect_errors(payload, CODE_GENERATION_RESPONSE_SCHEMA)
    if not errors:
        errors = path_errors(payload["files"], prefix=["files"])
    if errors:
        raise SchemaValidationError("Invalid code response", errors)

    return CodeGenerationResponse(
        files=tuple(
            GeneratedFile(path=f["path"], content=f["content"], language=f["language"])
            for f in payload["files"]
        ),
        project_name=payload["projectName"],
        framework=payload["framework"],
    )


def project_name_for(request: CodeGenerationRequest) -> str:
    return f"{request.entity_name.lower()}-{request.framework}"
