# main.py: HTTP layer for the CRUD backend generator

import logging
import os

from dotenv import load_dotenv
from flask import Flask, current_app, jsonify, request, send_file
from flask_cors import CORS
from werkzeug.utils import secure_filename

load_dotenv()

from crudgen.agents import AGENTS
from crudgen.core.generator import generate_project
from crudgen.core.openai_client import OpenAIClient
from crudgen.core.packager import build_zip
from crudgen.core.schema import (
    FIELD_TYPES,
    REQUEST_DEFAULTS,
    SchemaValidationError,
    validate_request,
    validate_response,
)

HOST = os.getenv("FLASK_HOST", "127.0.0.1")
PORT = int(os.getenv("FLASK_PORT", "5000"))
DEBUG = os.getenv("DEBUG", "False").lower() in ("1", "true", "yes")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

logger = logging.getLogger(__name__)


def get_client():
    """Generation client for this app, built from the environment on first use."""
    client = current_app.config.get("CODEGEN_CLIENT")
    if client is None:
        client = OpenAIClient()
        current_app.config["CODEGEN_CLIENT"] = client
    return client


def create_app(client=None) -> Flask:
    app = Flask(__name__)
    app.config["CODEGEN_CLIENT"] = client

    CORS(
        app,
        origins=CORS_ORIGINS,
        allow_headers=["Content-Type"],
        expose_headers=["Content-Disposition"],
        methods=["GET", "POST", "OPTIONS"],
        max_age=86400,
    )

    @app.route("/api/generate", methods=["POST"])
    def generate():
        try:
            gen_request = validate_request(request.get_json(silent=True))
        except SchemaValidationError as e:
            return jsonify({"error": "Invalid request", "details": e.details}), 400

        try:
            result = generate_project(gen_request, get_client())
            return jsonify(result.to_dict()), 200
        except Exception as e:
            logger.error("Code generation error: %s", e)
            return jsonify({"error": "Failed to generate code", "message": str(e)}), 500

    @app.route("/api/download", methods=["POST"])
    def download():
        try:
            code_response = validate_response(request.get_json(silent=True))
        except SchemaValidationError as e:
            return jsonify({"error": "Invalid code response", "details": e.details}), 400

        try:
            memzip = build_zip(code_response.files)
        except Exception as e:
            logger.exception("ZIP generation error")
            return jsonify({"error": "Failed to create ZIP file", "message": str(e)}), 500

        filename = f"{secure_filename(code_response.project_name) or 'project'}.zip"
        response = send_file(memzip, mimetype="application/zip", as_attachment=True, download_name=filename)
        response.headers["Content-Disposition"] = f'attachment; filename="{filename}"'
        return response

    @app.route("/api/options", methods=["GET"])
    def options():
        return jsonify({
            "fieldTypes": list(FIELD_TYPES),
            "frameworks": [
                {"id": agent.framework, "name": agent.name, "description": agent.description}
                for agent in AGENTS.values()
            ],
            "defaults": dict(REQUEST_DEFAULTS),
        }), 200

    @app.route("/health", methods=["GET"])
    def health():
        return jsonify({"status": "ok"}), 200

    return app


app = create_app()


if __name__ == "__main__":
    logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    # Fail fast on a missing credential.
    app.config["CODEGEN_CLIENT"] = OpenAIClient()
    app.run(host=HOST, port=PORT, debug=DEBUG)
