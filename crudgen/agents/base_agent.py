import json
from abc import ABC, abstractmethod
from dataclasses import dataclass
from textwrap import dedent
from typing import List

from crudgen.core.schema import CodeGenerationRequest


SYSTEM_PROMPT = dedent("""\
    You are an expert backend developer. Generate clean, production-ready code based on the specifications provided.
    Always return valid JSON in the exact format specified. Do not include any markdown formatting or code blocks in your response.""")


@dataclass(frozen=True)
class FileSpec:
    """One file the model is asked to write."""

    path: str
    language: str
    instructions: str
    placeholder: str


class FrameworkAgent(ABC):
    """Prompt template for one target framework.

    Subclasses list the files to generate for a request; the numbered
    instructions and the JSON envelope are rendered from that list, so the
    prompt always names exactly the files implied by the request flags.
    """

    framework: str = ""

    def __init__(self, name: str, description: str, specialty: str):
        self.name = name
        self.description = description
        self.specialty = specialty

    @abstractmethod
    def file_specs(self, request: CodeGenerationRequest) -> List[FileSpec]:
        raise NotImplementedError

    def closing_rules(self) -> str:
        return (
            'CRITICAL: Generate COMPLETE, WORKING CODE for each file. Do NOT use placeholders like "// code here". '
            "Write the ACTUAL implementation."
        )

    def expected_files(self, request: CodeGenerationRequest) -> List[tuple]:
        return [(s.path, s.language) for s in self.file_specs(request)]

    def system_prompt(self) -> str:
        return SYSTEM_PROMPT

    def build_prompt(self, request: CodeGenerationRequest) -> str:
        specs = self.file_specs(request)
        fields_list = "\n".join(f"- {f.name}: {f.type}" for f in request.fields)
        numbered = "\n\n".join(f"{i}. {s.path} - {s.instructions}" for i, s in enumerate(specs, start=1))
        envelope = ",\n".join(
            "    " + json.dumps({"path": s.path, "content": s.placeholder, "language": s.language})
            for s in specs
        )
        return (
            f"You are an expert {self.specialty} developer. "
            "Generate COMPLETE, PRODUCTION-READY, WORKING CODE for a CRUD API.\n\n"
            f"Entity Name: {request.entity_name}\n"
            f"Fields:\n{fields_list}\n\n"
            "Generate the following files with FULL, COMPILABLE CODE (not placeholders):\n\n"
            f"{numbered}\n\n"
            f"{self.closing_rules()}\n\n"
            "Return ONLY a JSON object with this structure:\n"
            "{\n"
            '  "files": [\n'
            f"{envelope}\n"
            "  ]\n"
            "}"
        )
