"""Axis scorers. Each maps (topology, requirements) to an integer fitness score."""

from internal.models.types import (
    AXIS_AVAILABILITY, AXIS_CONFLICT, AXIS_CONSISTENCY, AXIS_LATENCY,
    Consistency, ReplicationRequirements, Topology,
)
from internal.policy.weights import (
    AVAILABILITY_ADJUSTMENT, AVAILABILITY_BASE, CONFLICT_RISK, CONSISTENCY_FIT,
    DEFAULT_LATENCY_TARGET_MS, LATENCY_FIT, TIGHT_LATENCY_MS,
)


def effective_latency_target(req: ReplicationRequirements) -> int:
    """The p99 target used for scoring; unconstrained maps to the default."""
    if req.latency_target_ms_p99 is None:
        return DEFAULT_LATENCY_TARGET_MS
    return req.latency_target_ms_p99


def score_consistency_fit(topology: Topology, req: ReplicationRequirements) -> int:
    return CONSISTENCY_FIT[req.consistency][topology]


def score_availability_fit(topology: Topology, req: ReplicationRequirements) -> int:
    return AVAILABILITY_BASE[topology] + AVAILABILITY_ADJUSTMENT[req.availability_priority][topology]


def score_latency_fit(topology: Topology, req: ReplicationRequirements) -> int:
    tight = effective_latency_target(req) <= TIGHT_LATENCY_MS
    strong = req.consistency == Consistency.STRONG
    return LATENCY_FIT[req.regions][topology][(strong, tight)]


def score_conflict_risk(topology: Topology, req: ReplicationRequirements) -> int:
    """Higher is safer: fewer concurrent writers means fewer conflicts."""
    return CONFLICT_RISK[topology][req.conflict_tolerance]


# Evaluation order is the insertion order of CandidateEvaluation.axis_scores.
AXIS_SCORERS = (
    (AXIS_CONSISTENCY, score_consistency_fit),
    (AXIS_AVAILABILITY, score_availability_fit),
    (AXIS_LATENCY, score_latency_fit),
    (AXIS_CONFLICT, score_conflict_risk),
)


def score_axes(topology: Topology, req: ReplicationRequirements) -> dict:
    """Return {axis name: score} for all four axes, in evaluation order."""
    return {name: scorer(topology, req) for name, scorer in AXIS_SCORERS}
