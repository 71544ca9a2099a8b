#!/usr/bin/env python3
"""
PRNG Lab HTTP API
==================

Routes:
  POST /generate          - Generate a congruential or middle-square sequence
  POST /validate          - Check period theorem conditions
  POST /statistical-test  - Chi-square / Kolmogorov-Smirnov uniformity test
  POST /random-variables  - Acceptance-rejection sampling
  GET  /methods           - Generation methods and their parameters
  GET  /distributions     - Densities available to the sampler
  GET  /health            - Liveness check

Failures are returned as {"detail": "...", "error": "<kind>"}.
"""

import logging
from typing import Optional

from flask import Flask, jsonify, request
from pydantic import ValidationError
from werkzeug.exceptions import HTTPException

from . import service
from .config import EngineSettings, load_settings
from .errors import InvalidParameterError, InvalidTestInputError, PrngLabError
from .models import GenerationRequest, RandomVariableRequest, StatisticalTestRequest

logger = logging.getLogger(__name__)


def _json_body() -> dict:
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        raise InvalidParameterError("Request body must be a JSON object")
    return payload


def _parse(model, payload: dict, error=InvalidParameterError):
    try:
        return model(**payload)
    except ValidationError as e:
        raise error(service.describe_validation_error(e))


def create_app(settings: Optional[EngineSettings] = None) -> Flask:
    """Build the Flask app bound to one EngineSettings instance."""
    settings = settings or load_settings()
    app = Flask(__name__)
    app.config["ENGINE_SETTINGS"] = settings

    # ------------------------------------------------------------------
    # Error handling
    # ------------------------------------------------------------------

    @app.errorhandler(PrngLabError)
    def handle_engine_error(error: PrngLabError):
        logger.warning(f"{request.method} {request.path} rejected: {error.kind}: {error.message}")
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(error: HTTPException):
        return jsonify({"detail": error.description, "error": error.name}), error.code

    @app.after_request
    def add_cors_headers(response):
        response.headers["Access-Control-Allow-Origin"] = settings.cors_origin
        response.headers["Access-Control-Allow-Headers"] = "Content-Type"
        response.headers["Access-Control-Allow-Methods"] = "GET, POST, OPTIONS"
        return response

    # ------------------------------------------------------------------
    # Routes
    # ------------------------------------------------------------------

    @app.route('/health')
    def health():
        return jsonify(service.health())

    @app.route('/methods')
    def methods():
        return jsonify(service.list_methods())

    @app.route('/distributions')
    def distributions():
        return jsonify(service.list_distributions())

    @app.route('/generate', methods=['POST'])
    def generate():
        body = _parse(GenerationRequest, _json_body())
        result = service.generate(body.method, body.parameters, settings)
        return jsonify(result.model_dump(mode="json"))

    @app.route('/validate', methods=['POST'])
    def validate():
        body = _parse(GenerationRequest, _json_body())
        result = service.validate(body.method, body.parameters, settings)
        return jsonify(result.model_dump(mode="json"))

    @app.route('/statistical-test', methods=['POST'])
    def statistical_test():
        payload = _json_body()
        body = _parse(StatisticalTestRequest, payload, InvalidTestInputError)
        result = service.statistical_test(body.numbers, body.test_type, body.parameters, settings)
        return jsonify(result.model_dump(mode="json"))

    @app.route('/random-variables', methods=['POST'])
    def random_variables():
        body = _parse(RandomVariableRequest, _json_body())
        result = service.random_variables(body.count, body.distribution, body.seed, settings)
        return jsonify(result.model_dump(mode="json"))

    return app


def run_server(settings: Optional[EngineSettings] = None, debug: bool = False):
    settings = settings or load_settings()
    app = create_app(settings)
    logger.info(f"PRNG Lab API listening on http://{settings.host}:{settings.port}")
    app.run(host=settings.host, port=settings.port, debug=debug)
