from textwrap import dedent
from typing import List

from crudgen.agents.base_agent import FileSpec, FrameworkAgent
from crudgen.core.schema import CodeGenerationRequest


class ExpressAgent(FrameworkAgent):
    framework = "nodejs-express"

    def __init__(self):
        super().__init__(
            "Node.js / Express",
            "Modern JavaScript backend with Express.js",
            "Node.js/Express",
        )

    def file_specs(self, request: CodeGenerationRequest) -> List[FileSpec]:
        e = request.entity_name
        ts = "<COMPLETE_TYPESCRIPT_CODE>"
        specs = [
            FileSpec(
                f"models/{e}.ts",
                "typescript",
                f"Complete TypeScript interface for the {e} entity with all fields listed above",
                ts,
            ),
            FileSpec(
                f"controllers/{e}Controller.ts",
                "typescript",
                dedent(f"""\
                    Complete controller with FULL implementations of:
                       - create{e}(req, res) - handles POST requests
                       - getAll{e}s(req, res) - handles GET all
                       - get{e}ById(req, res) - handles GET by ID
                       - update{e}(req, res) - handles PUT/PATCH
                       - delete{e}(req, res) - handles DELETE
                       Use in-memory storage array, proper error handling, and async/await."""),
                ts,
            ),
            FileSpec(
                f"routes/{e}Routes.ts",
                "typescript",
                "Complete Express Router setup with all CRUD routes properly connected to controller methods",
                ts,
            ),
            FileSpec(
                "index.ts",
                "typescript",
                dedent(f"""\
                    Complete Express server setup that:
                       - Imports express and required middleware
                       - Sets up JSON parsing
                       - Mounts the {e} routes at /api/{e.lower()}s
                       - Starts server on port 3000
                       - Includes error handling middleware"""),
                ts,
            ),
        ]
        if request.include_swagger:
            specs.append(FileSpec(
                "swagger.yaml",
                "yaml",
                "Complete OpenAPI 3.0 specification with all CRUD endpoints documented, "
                f"including request/response schemas for {e}",
                "<COMPLETE_YAML>",
            ))
        if request.include_docker:
            specs.append(FileSpec(
                "Dockerfile",
                "dockerfile",
                dedent("""\
                    Complete, working Dockerfile for Node.js app with:
                       - Node 18 Alpine base image
                       - Working directory setup
                       - Package installation
                       - Proper EXPOSE and CMD"""),
                "<COMPLETE_DOCKERFILE>",
            ))
        if request.include_cicd:
            specs.append(FileSpec(
                ".github/workflows/ci.yml",
                "yaml",
                dedent("""\
                    Complete GitHub Actions workflow with:
                       - Node.js setup
                       - npm install and test steps
                       - Runs on push and pull requests"""),
                "<COMPLETE_YAML>",
            ))
        return specs
