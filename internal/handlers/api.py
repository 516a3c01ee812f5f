"""HTTP handlers for the replication advisor API.

Endpoints:
  GET  /health                         Health check
  POST /api/recommendations            Recommend a topology for the given requirements
  POST /api/evaluations                Ranked candidate evaluations for the requirements
  GET  /api/topologies                 Topology catalogue
  GET  /api/topologies/<name>          A single topology profile
  GET  /api/gates                      Gate rules with their penalties and warnings
  GET  /api/options                    Allowed values for every requirement field
"""

import logging

from flask import Blueprint, request, jsonify

from internal.advisor.advisor import explain, evaluate_candidates, rank_candidates
from internal.config.settings import settings_store
from internal.models.types import (
    AvailabilityPriority, ConflictTolerance, Consistency, DataLossTolerance,
    InvalidRequirementError, Regions, ReplicationRequirements, Workload,
)
from internal.policy.gates import list_gate_rules
from internal.policy.topologies import get_profile, list_profiles

logger = logging.getLogger(__name__)

advisor_bp = Blueprint("advisor", __name__)

_OPTIONS = {
    "workload": Workload,
    "regions": Regions,
    "consistency": Consistency,
    "availabilityPriority": AvailabilityPriority,
    "dataLossTolerance": DataLossTolerance,
    "conflictTolerance": ConflictTolerance,
}


def _parse_requirements():
    """Return (requirements, None) or (None, error response)."""
    body = request.get_json(silent=True)
    if body is None:
        return None, (jsonify({"error": "Request body must be valid JSON"}), 400)

    try:
        req = ReplicationRequirements.from_dict(body)
    except InvalidRequirementError as e:
        logger.warning("Rejected requirements: %s", e)
        return None, (jsonify({
            "error": "Validation failed",
            "field": e.field,
            "details": [str(e)],
        }), 400)
    return req, None


@advisor_bp.route("/health", methods=["GET"])
def health():
    """Health check endpoint."""
    return jsonify({"status": "ok", "service": "replication-advisor"}), 200


@advisor_bp.route("/api/recommendations", methods=["POST"])
def create_recommendation():
    """Recommend a replication topology and its operational policies."""
    req, error = _parse_requirements()
    if error:
        return error

    report = explain(req)
    response = {
        "requirements": req.to_dict(),
        "recommendation": report.recommendation.to_dict(),
    }
    if settings_store.get("api", "include_candidates", True):
        response["candidates"] = report.to_dict()["candidates"]
    return jsonify(response), 200


@advisor_bp.route("/api/evaluations", methods=["POST"])
def create_evaluation():
    """Evaluate all topologies without building a recommendation."""
    req, error = _parse_requirements()
    if error:
        return error

    ranking = rank_candidates(evaluate_candidates(req))
    return jsonify({
        "requirements": req.to_dict(),
        "selected": ranking[0].topology.value,
        "ranking": [{"rank": i + 1, **c.to_dict()} for i, c in enumerate(ranking)],
    }), 200


@advisor_bp.route("/api/topologies", methods=["GET"])
def get_topologies():
    """List the topology catalogue."""
    return jsonify({"topologies": [p.to_dict() for p in list_profiles()]}), 200


@advisor_bp.route("/api/topologies/<name>", methods=["GET"])
def get_topology(name: str):
    profile = get_profile(name)
    if profile is None:
        return jsonify({
            "error": f"Unknown topology: '{name}'",
            "available": [p.topology.value for p in list_profiles()],
        }), 404
    return jsonify(profile.to_dict()), 200


@advisor_bp.route("/api/gates", methods=["GET"])
def get_gates():
    """List the gate rules applied before axis scoring."""
    return jsonify({"gates": [r.to_dict() for r in list_gate_rules()]}), 200


@advisor_bp.route("/api/options", methods=["GET"])
def get_options():
    """Allowed values for every requirement field."""
    options = {key: [m.value for m in enum_cls] for key, enum_cls in _OPTIONS.items()}
    return jsonify({
        "options": options,
        "required": [k for k in options if k != "workload"],
        "optional": ["workload", "latencyTargetMsP99"],
    }), 200
