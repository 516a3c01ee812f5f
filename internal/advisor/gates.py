"""Gate evaluation: apply every gate rule to one topology."""

from dataclasses import dataclass

from internal.models.types import ReplicationRequirements, Topology
from internal.policy.gates import GATE_RULES


@dataclass(frozen=True)
class GateOutcome:
    """Penalty and records produced by the gate rules for one topology."""
    penalty: int
    gates: tuple
    warnings: tuple
    reasons: tuple


def evaluate_gates(topology: Topology, req: ReplicationRequirements, rules=GATE_RULES) -> GateOutcome:
    """Apply the gate rules to a topology and sum their penalties.

    A rule records its gate id only on the topologies it penalises, but its
    warning may be emitted for every topology since it describes the
    requirement combination.
    """
    penalty = 0
    gates = []
    warnings = []
    fired = []

    for rule in rules:
        if not rule.applies(req):
            continue
        rule_penalty = rule.penalty_for(topology)
        if rule_penalty:
            penalty += rule_penalty
            gates.append(rule.gate_id)
            fired.append(f"{rule.gate_id} ({rule_penalty})")
        warning = rule.warning_for(topology)
        if warning:
            warnings.append(warning)

    reasons = []
    if fired:
        reasons.append("Gate penalties applied: " + "; ".join(fired))

    return GateOutcome(
        penalty=penalty,
        gates=tuple(gates),
        warnings=tuple(warnings),
        reasons=tuple(reasons),
    )
