"""Replication advisor: gate evaluation, axis scoring, candidate ranking and
topology selection.

Flow:
  1. Reject malformed requirements before anything is scored.
  2. For every topology, apply the gate rules (penalties, warnings, reasons).
  3. Score the four axes: consistency, availability, latency, conflict risk.
  4. Sum gate penalty and axis scores into the candidate's total score.
  5. Rank candidates by total score; ties go to the simpler topology.
  6. Map the winner to replication mode, read/write policy and quorum, and
     compile warnings, trade-offs and the explanation.

Every call is a pure function of its input; nothing is cached or shared.
"""

import logging

from internal.advisor.axes import score_axes
from internal.advisor.gates import evaluate_gates
from internal.advisor.recommendation import build_recommendation
from internal.models.types import (
    AdvisoryReport, CandidateEvaluation, ReplicationRecommendation,
    ReplicationRequirements, Topology,
)
from internal.policy.topologies import TOPOLOGIES
from internal.policy.weights import STRENGTH_THRESHOLD, WEAKNESS_THRESHOLD

logger = logging.getLogger(__name__)

AXIS_LABELS = {
    "consistencyFit": "consistency fit",
    "availabilityFit": "availability fit",
    "latencyFit": "latency fit",
    "conflictRisk": "conflict safety",
}


def _axis_highlights(axis_scores: dict) -> list:
    highlights = []
    for axis, score in axis_scores.items():
        label = AXIS_LABELS.get(axis, axis)
        if score >= STRENGTH_THRESHOLD:
            highlights.append(f"Strong {label} ({score})")
        elif score <= WEAKNESS_THRESHOLD:
            highlights.append(f"Weak {label} ({score})")
    return highlights


def evaluate_candidate(topology: Topology, req: ReplicationRequirements) -> CandidateEvaluation:
    """Evaluate one topology: gates first, then all four axes regardless of gates."""
    outcome = evaluate_gates(topology, req)
    axis_scores = score_axes(topology, req)
    total = outcome.penalty + sum(axis_scores.values())

    return CandidateEvaluation(
        topology=topology,
        total_score=total,
        axis_scores=axis_scores,
        gate_penalty=outcome.penalty,
        gates_fired=outcome.gates,
        warnings=outcome.warnings,
        key_reasons=outcome.reasons + tuple(_axis_highlights(axis_scores)),
    )


def evaluate_candidates(req: ReplicationRequirements) -> list:
    """Evaluate every topology. Raises InvalidRequirementError before scoring."""
    req.ensure_complete()
    evaluations = [evaluate_candidate(t, req) for t in Topology]
    for e in evaluations:
        logger.debug(
            "Candidate %s: total=%d gate_penalty=%d axes=%s gates=%s",
            e.topology.value, e.total_score, e.gate_penalty, e.axis_scores, list(e.gates_fired),
        )
    return evaluations


def _rank_key(evaluation: CandidateEvaluation):
    return (-evaluation.total_score, TOPOLOGIES[evaluation.topology].complexity_rank)


def rank_candidates(evaluations) -> list:
    """Sort candidates best first: score descending, then ascending complexity."""
    return sorted(evaluations, key=_rank_key)


def select_candidate(evaluations) -> CandidateEvaluation:
    """Return the winning candidate.

    Raises:
        ValueError: If there is nothing to select from.
    """
    if not evaluations:
        raise ValueError("No candidate evaluations to select from")
    return min(evaluations, key=_rank_key)


def explain(req: ReplicationRequirements) -> AdvisoryReport:
    """Run the full pipeline and return the recommendation with its ranking."""
    evaluations = evaluate_candidates(req)
    winner = select_candidate(evaluations)
    ranking = rank_candidates(evaluations)
    recommendation = build_recommendation(winner, ranking, req)

    logger.info(
        "Recommended %s (score %d); ranking: %s",
        winner.topology.value,
        winner.total_score,
        ", ".join(f"{c.topology.value}={c.total_score}" for c in ranking),
    )
    return AdvisoryReport(recommendation=recommendation, ranking=tuple(ranking))


def advise(req: ReplicationRequirements) -> ReplicationRecommendation:
    """Recommend a replication topology and its policies for the requirements.

    Raises:
        InvalidRequirementError: If a required field is missing or malformed.
    """
    return explain(req).recommendation
