#!/usr/bin/env python3
"""
Flask REST API for the count resolver.

Exposes the resolution engine behind one HTTP operation plus sheet
alignment. The engine is stateless, so one instance serves all requests.
"""
import os
import sys
import logging
from pathlib import Path
from flask import Flask, request, jsonify
from pydantic import ValidationError as SchemaValidationError
from dotenv import load_dotenv

# Add service to path (src/ is next to this file)
sys.path.insert(0, str(Path(__file__).parent / "src"))

from count_resolver import ResolutionEngine, InvalidRequestError, align_items, load_config_from_env
from count_resolver.schemas import ResolveCommandInput, AlignItemsInput
from count_resolver.security import InputValidator, ValidationError

# Load environment variables
load_dotenv()

app = Flask(__name__)

# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[logging.StreamHandler()]
)
logger = logging.getLogger(__name__)

# Global instances
config = load_config_from_env()
engine = ResolutionEngine(config)


def _schema_error(e: SchemaValidationError) -> str:
    first = e.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    return f"{location}: {first.get('msg')}" if location else first.get("msg", "Invalid request")


@app.route("/health")
def health():
    """Liveness probe."""
    return jsonify({"status": "ok"})


@app.route("/live-count/resolve", methods=["POST"])
def resolve_command():
    """Resolve one spoken count command."""
    try:
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            return jsonify({"error": "Request body must be a JSON object"}), 400

        try:
            payload = ResolveCommandInput.model_validate(data)
        except SchemaValidationError as e:
            logger.warning(f"Resolve request rejected: {_schema_error(e)}")
            return jsonify({"error": _schema_error(e)}), 400

        try:
            payload.transcript = InputValidator.sanitize_transcript(
                payload.transcript, config.max_transcript_length
            )
            payload.alternatives = InputValidator.sanitize_alternatives(
                payload.alternatives, config.max_transcript_length
            )
        except ValidationError as e:
            logger.warning(f"Input validation failed: {str(e)}")
            return jsonify({"error": str(e)}), 400

        logger.info(
            f"Resolve - transcript: '{payload.transcript}', "
            f"{len(payload.canonical_items)} items, {len(payload.alias_table)} alias keys"
        )

        try:
            decision = engine.resolve(payload.to_request(config.allow_alias_auto_save))
        except InvalidRequestError as e:
            return jsonify({"error": str(e)}), 400

        return jsonify(decision.to_dict())

    except Exception as e:
        logger.error(f"Resolve endpoint error: {str(e)}", exc_info=True)
        return jsonify({"error": str(e)}), 500


@app.route("/live-count/align", methods=["POST"])
def align():
    """Align scanned sheet item names with the master list."""
    try:
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            return jsonify({"error": "Request body must be a JSON object"}), 400

        try:
            payload = AlignItemsInput.model_validate(data)
        except SchemaValidationError as e:
            return jsonify({"error": _schema_error(e)}), 400

        report = align_items(payload.scanned_items, payload.master_list, config)
        return jsonify(report.to_dict())

    except Exception as e:
        logger.error(f"Align endpoint error: {str(e)}", exc_info=True)
        return jsonify({"error": str(e)}), 500


if __name__ == "__main__":
    port = int(os.getenv("PORT", 3000))
    app.run(host="0.0.0.0", port=port, debug=False)
