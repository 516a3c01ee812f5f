"""Gate rules: penalties for topologies that clash with a requirement combination.

Each rule defines:
  - A stable gate id, recorded on every topology the rule penalises
  - A predicate over the requirements
  - Per-topology penalties (topologies not listed are not penalised)
  - A warning: a single string describes the requirement combination and is
    emitted for every topology; a dict scopes warnings to specific topologies

Rules are independent and cumulative.
"""

from dataclasses import dataclass
from typing import Callable, Union

from internal.models.types import (
    ConflictTolerance, Consistency, DataLossTolerance, Regions, Topology,
)

BIG_PENALTY = -60
MED_PENALTY = -30
SMALL_PENALTY = -15

# p99 targets at or below this are unrealistic with strong cross-region consistency
UNREALISTIC_LATENCY_MS = 50


@dataclass(frozen=True)
class GateRule:
    """Immutable gate definition."""
    gate_id: str
    applies: Callable  # (ReplicationRequirements) -> bool
    penalties: dict    # Topology -> int (<= 0)
    warning: Union[str, dict]
    description: str = ""

    def penalty_for(self, topology: Topology) -> int:
        return self.penalties.get(topology, 0)

    def warning_for(self, topology: Topology):
        """Return the warning this rule emits for a topology, or None."""
        if isinstance(self.warning, dict):
            return self.warning.get(topology)
        return self.warning

    def to_dict(self) -> dict:
        if isinstance(self.warning, dict):
            warning = {t.value: w for t, w in self.warning.items()}
        else:
            warning = self.warning
        return {
            "gateId": self.gate_id,
            "description": self.description,
            "penalties": {t.value: p for t, p in self.penalties.items()},
            "warning": warning,
        }


def _multi_write(req) -> bool:
    return req.regions == Regions.MULTI_WRITE


def _multi_write_no_conflicts(req) -> bool:
    return req.regions == Regions.MULTI_WRITE and req.conflict_tolerance == ConflictTolerance.NONE


def _zero_data_loss(req) -> bool:
    return req.data_loss_tolerance == DataLossTolerance.ZERO


def _strong_cross_region(req) -> bool:
    return req.consistency == Consistency.STRONG and req.regions != Regions.SINGLE


def _unrealistic_p99(req) -> bool:
    latency = req.latency_target_ms_p99
    return latency is not None and latency <= UNREALISTIC_LATENCY_MS and _strong_cross_region(req)


GATE_RULES = (
    GateRule(
        gate_id="MULTI_WRITE_SINGLE_LEADER",
        applies=_multi_write,
        penalties={Topology.LEADER_FOLLOWER: BIG_PENALTY},
        warning={
            Topology.LEADER_FOLLOWER: (
                "Multi-region writes are difficult with leader-follower unless "
                "writes are centralised in one region."
            ),
        },
        description="Leader-follower assumes a single write region.",
    ),
    GateRule(
        gate_id="CONFLICT_NONE_MULTI_WRITE",
        applies=_multi_write_no_conflicts,
        penalties={Topology.MULTI_LEADER: BIG_PENALTY, Topology.LEADERLESS: MED_PENALTY},
        warning={
            Topology.MULTI_LEADER: (
                "Multi-leader with multi-region writes can create conflicts; a conflict-free "
                "data model or centralised writes may be required."
            ),
            Topology.LEADERLESS: (
                "Leaderless setups need conflict resolution (versioning/read repair). If conflicts "
                "are unacceptable, consider centralising writes."
            ),
        },
        description="Concurrent writers conflict when conflicts are not tolerated.",
    ),
    GateRule(
        gate_id="ZERO_DATA_LOSS",
        applies=_zero_data_loss,
        penalties={Topology.MULTI_LEADER: SMALL_PENALTY, Topology.LEADERLESS: SMALL_PENALTY},
        warning=(
            "Zero data loss tolerance typically requires synchronous/majority acknowledgement; "
            "async replication increases risk under failures."
        ),
        description="Asynchronous convergence risks losing acknowledged writes.",
    ),
    GateRule(
        gate_id="STRONG_CROSS_REGION",
        applies=_strong_cross_region,
        penalties={Topology.MULTI_LEADER: MED_PENALTY, Topology.LEADERLESS: SMALL_PENALTY},
        warning=(
            "Strong consistency across regions increases write latency and/or reduces "
            "availability under partitions."
        ),
        description="Strong consistency across regions needs cross-region coordination.",
    ),
    GateRule(
        gate_id="UNREALISTIC_P99",
        applies=_unrealistic_p99,
        penalties={t: SMALL_PENALTY for t in Topology},
        warning=(
            f"P99 <= {UNREALISTIC_LATENCY_MS}ms with strong consistency across multiple regions "
            "is usually unrealistic without relaxing constraints."
        ),
        description="The latency target cannot be met by any topology.",
    ),
)


def list_gate_rules() -> list:
    return list(GATE_RULES)
