"""HTTP routes for the Flask API."""

import logging
from http import HTTPStatus
from typing import Any

from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError

from backend.core.presets import (
    DEFAULT_INPUTS,
    UnknownStrategyError,
    inputs_from_prefill,
    merge_with_defaults,
    strategy_rates,
    suggest_monthly_budget,
)
from backend.core.projection import project
from backend.core.validation import invalid_fields
from backend.schemas.health import HealthResponse
from backend.schemas.projection import (
    BudgetSuggestionRequest,
    BudgetSuggestionResponse,
    PrefillPayload,
)

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__)


@api_bp.errorhandler(ValidationError)
def _handle_validation_error(exc: ValidationError):
    """Convert Pydantic validation errors into JSON responses."""
    return jsonify({"detail": exc.errors(include_url=False)}), HTTPStatus.BAD_REQUEST


@api_bp.errorhandler(UnknownStrategyError)
def _handle_unknown_strategy(exc: UnknownStrategyError):
    return jsonify({"detail": str(exc)}), HTTPStatus.NOT_FOUND


def _json_body() -> Any:
    return request.get_json(force=True, silent=False)


@api_bp.get("/health")
def health() -> Any:
    """Health-check endpoint."""
    response = HealthResponse(status="ok", service=current_app.config["SERVICE_NAME"])
    return jsonify(response.model_dump())


@api_bp.get("/defaults")
def defaults() -> Any:
    return jsonify(DEFAULT_INPUTS.model_dump(mode="json"))


@api_bp.post("/projection")
def projection() -> Any:
    """Project both savings paths; missing fields fall back to the defaults."""
    payload = _json_body()
    if not isinstance(payload, dict):
        return jsonify({"detail": "request body must be a JSON object"}), HTTPStatus.BAD_REQUEST

    inputs = merge_with_defaults(payload)
    result = project(inputs)
    if result is None:
        bad_fields = invalid_fields(inputs)
        logger.info("Rejected projection request, invalid fields: %s", bad_fields)
        return (
            jsonify(
                {
                    "detail": "required inputs are missing or not numeric",
                    "invalidFields": bad_fields,
                }
            ),
            HTTPStatus.UNPROCESSABLE_ENTITY,
        )
    # pydantic writes NaN/inf as null, keeping the body strict JSON
    return current_app.response_class(result.model_dump_json(), mimetype="application/json")


@api_bp.post("/prefill")
def prefill() -> Any:
    payload = PrefillPayload.model_validate(_json_body())
    return jsonify(inputs_from_prefill(payload).model_dump(mode="json"))


@api_bp.post("/budget-suggestion")
def budget_suggestion() -> Any:
    payload = BudgetSuggestionRequest.model_validate(_json_body())
    budget = suggest_monthly_budget(payload.annualIncome)
    if budget is None:
        return (
            jsonify({"detail": "annualIncome is not numeric", "invalidFields": ["annualIncome"]}),
            HTTPStatus.UNPROCESSABLE_ENTITY,
        )
    return jsonify(BudgetSuggestionResponse(monthlyBudget=budget).model_dump())


@api_bp.get("/strategies/<name>")
def strategy(name: str) -> Any:
    return jsonify(strategy_rates(name).model_dump())
