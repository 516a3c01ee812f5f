"""Recommendation builder: maps the winning candidate to operational policies
and compiles warnings, trade-offs and the explanation."""

from internal.models.types import (
    CandidateEvaluation, Consistency, DataLossTolerance, Quorum,
    ReplicationRecommendation, ReplicationRequirements,
)
from internal.policy.topologies import TOPOLOGIES

DEFAULT_REPLICA_COUNT = 3


def majority(n: int) -> int:
    return n // 2 + 1


def compute_quorum(req: ReplicationRequirements, replicas: int = DEFAULT_REPLICA_COUNT) -> Quorum:
    """Majority read and write quorums; zero data loss waits for every replica on write."""
    w = majority(replicas)
    if req.data_loss_tolerance == DataLossTolerance.ZERO:
        w = replicas
    return Quorum(n=replicas, r=majority(replicas), w=w)


def _dedupe(items) -> tuple:
    return tuple(dict.fromkeys(items))


def _axis_tradeoffs(winner: CandidateEvaluation, ranking) -> list:
    lines = []
    for other in ranking:
        if other.topology == winner.topology:
            continue
        for axis, score in winner.axis_scores.items():
            theirs = other.axis_scores.get(axis, score)
            if theirs > score:
                lines.append(
                    f"Gives up {axis} to {other.topology.value} ({score} vs {theirs})"
                )
    return lines


def _explanation(winner: CandidateEvaluation, ranking) -> str:
    axes = ", ".join(f"{k}={v}" for k, v in winner.axis_scores.items())
    parts = [
        f"Recommended {winner.topology.value} with total score {winner.total_score} "
        f"(gate penalty {winner.gate_penalty}; {axes})."
    ]
    parts.extend(f"{reason}." for reason in winner.key_reasons)
    parts.append(
        "Ranking: " + " > ".join(f"{c.topology.value} ({c.total_score})" for c in ranking) + "."
    )
    for other in ranking:
        if other.topology == winner.topology or not other.gates_fired:
            continue
        gate_reasons = [r for r in other.key_reasons if r.startswith("Gate penalties applied")]
        parts.append(f"{other.topology.value}: {'; '.join(gate_reasons)}.")
    return " ".join(parts)


def build_recommendation(
    winner: CandidateEvaluation,
    ranking,
    req: ReplicationRequirements,
) -> ReplicationRecommendation:
    """Build the recommendation for the winning candidate.

    Args:
        winner: The selected candidate.
        ranking: All candidates, best first (used for trade-offs and explanation).
        req: The requirements the candidates were evaluated against.
    """
    profile = TOPOLOGIES[winner.topology]

    read_policy = profile.read_policy
    if req.consistency == Consistency.STRONG:
        read_policy = profile.strong_read_policy

    quorum = compute_quorum(req) if profile.uses_quorum else None

    return ReplicationRecommendation(
        topology=winner.topology,
        replication_mode=profile.replication_mode,
        read_policy=read_policy,
        write_policy=profile.write_policy,
        quorum=quorum,
        warnings=_dedupe(winner.warnings),
        tradeoffs=_dedupe(list(profile.tradeoffs) + _axis_tradeoffs(winner, ranking)),
        failure_behaviour=profile.failure_behaviour,
        explanation=_explanation(winner, ranking),
    )
