"""Axis scoring tables.

Every table is keyed by enum members and covers every combination, so the
scorers in internal.advisor.axes are plain lookups. Scores sit roughly on a
0-10 scale; higher is a better fit.
"""

from internal.models.types import (
    AvailabilityPriority, ConflictTolerance, Consistency, Regions, Topology,
)

LF = Topology.LEADER_FOLLOWER
ML = Topology.MULTI_LEADER
LL = Topology.LEADERLESS

# Latency target assumed when the caller leaves it unconstrained.
DEFAULT_LATENCY_TARGET_MS = 150
# A p99 target at or below this is "tight".
TIGHT_LATENCY_MS = 80

# ── Consistency fit: (consistency, topology) ─────────────────────────────────

CONSISTENCY_FIT = {
    Consistency.STRONG: {LF: 10, ML: 3, LL: 6},
    Consistency.SESSION: {LF: 8, ML: 6, LL: 7},
    Consistency.EVENTUAL: {LF: 6, ML: 8, LL: 9},
}

# ── Availability fit: base per topology, adjusted by priority ────────────────

AVAILABILITY_BASE = {LF: 6, ML: 8, LL: 9}

AVAILABILITY_ADJUSTMENT = {
    AvailabilityPriority.HIGH: {LF: -2, ML: 1, LL: 1},
    AvailabilityPriority.MED: {LF: 0, ML: 0, LL: 0},
    AvailabilityPriority.LOW: {LF: -1, ML: -1, LL: -1},
}

# ── Latency fit: regions -> topology -> (strong, tight) ──────────────────────


def _flat(score: int) -> dict:
    return {(strong, tight): score for strong in (True, False) for tight in (True, False)}


def _by_tight(tight_score: int, loose_score: int) -> dict:
    return {
        (strong, tight): tight_score if tight else loose_score
        for strong in (True, False) for tight in (True, False)
    }


# Leader-follower across regions: every write crosses to the leader's region.
_LF_CROSS_REGION = {
    (True, True): 4,
    (True, False): 5,
    (False, True): 5,
    (False, False): 6,
}

LATENCY_FIT = {
    Regions.SINGLE: {LF: _by_tight(9, 8), ML: _flat(7), LL: _by_tight(7, 8)},
    Regions.MULTI_READ: {LF: dict(_LF_CROSS_REGION), ML: _flat(7), LL: _flat(7)},
    Regions.MULTI_WRITE: {LF: dict(_LF_CROSS_REGION), ML: _flat(8), LL: _flat(7)},
}

# ── Conflict risk (higher = safer): (topology, conflict tolerance) ───────────

CONFLICT_RISK = {
    LF: {ConflictTolerance.NONE: 10, ConflictTolerance.LOW: 10, ConflictTolerance.HIGH: 10},
    ML: {ConflictTolerance.NONE: 2, ConflictTolerance.LOW: 4, ConflictTolerance.HIGH: 6},
    LL: {ConflictTolerance.NONE: 4, ConflictTolerance.LOW: 6, ConflictTolerance.HIGH: 7},
}

# ── Key-reason highlights ────────────────────────────────────────────────────

STRENGTH_THRESHOLD = 9
WEAKNESS_THRESHOLD = 4
