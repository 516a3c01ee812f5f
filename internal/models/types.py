"""Data types for the replication topology advisor."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class Topology(str, Enum):
    LEADER_FOLLOWER = "LEADER_FOLLOWER"
    MULTI_LEADER = "MULTI_LEADER"
    LEADERLESS = "LEADERLESS"


class Regions(str, Enum):
    SINGLE = "SINGLE"
    MULTI_READ = "MULTI_READ"    # many read regions, one write region
    MULTI_WRITE = "MULTI_WRITE"


class Consistency(str, Enum):
    STRONG = "STRONG"
    SESSION = "SESSION"
    EVENTUAL = "EVENTUAL"


class AvailabilityPriority(str, Enum):
    HIGH = "HIGH"
    MED = "MED"
    LOW = "LOW"


class DataLossTolerance(str, Enum):
    ZERO = "ZERO"
    LOW = "LOW"
    HIGH = "HIGH"


class ConflictTolerance(str, Enum):
    NONE = "NONE"
    LOW = "LOW"
    HIGH = "HIGH"


class Workload(str, Enum):
    READ_HEAVY = "READ_HEAVY"
    WRITE_HEAVY = "WRITE_HEAVY"
    MIXED = "MIXED"


class ReplicationMode(str, Enum):
    PRIMARY_BACKUP = "primary-backup"
    MULTI_PRIMARY = "multi-primary"
    QUORUM = "quorum"


class ReadPolicy(str, Enum):
    LEADER_READ = "leader-read"
    REPLICA_READ_ALLOWED = "replica-read-allowed"
    LOCAL_READ = "local-read"
    QUORUM_READ = "quorum-read"


class WritePolicy(str, Enum):
    SINGLE_WRITER = "single-writer"
    MULTI_WRITER = "multi-writer"
    QUORUM_WRITE = "quorum-write"


# Axis names, in evaluation order.
AXIS_CONSISTENCY = "consistencyFit"
AXIS_AVAILABILITY = "availabilityFit"
AXIS_LATENCY = "latencyFit"
AXIS_CONFLICT = "conflictRisk"
AXES = (AXIS_CONSISTENCY, AXIS_AVAILABILITY, AXIS_LATENCY, AXIS_CONFLICT)


class InvalidRequirementError(ValueError):
    """Raised when requirements are malformed (missing or unknown enum value)."""

    def __init__(self, field_name: str, message: str = ""):
        self.field = field_name
        super().__init__(message or f"{field_name} is required")


# ── Requirements ─────────────────────────────────────────────────────────────

# (attribute, wire key, enum) for every required enum field, in check order
_REQUIRED_FIELDS = (
    ("regions", "regions", Regions),
    ("consistency", "consistency", Consistency),
    ("availability_priority", "availabilityPriority", AvailabilityPriority),
    ("data_loss_tolerance", "dataLossTolerance", DataLossTolerance),
    ("conflict_tolerance", "conflictTolerance", ConflictTolerance),
)


def _parse_enum(enum_cls, wire_key: str, raw):
    if isinstance(raw, enum_cls):
        return raw
    if isinstance(raw, str):
        try:
            return enum_cls(raw.strip().upper())
        except ValueError:
            pass
    allowed = ", ".join(m.value for m in enum_cls)
    raise InvalidRequirementError(wire_key, f"{wire_key} must be one of {allowed} (got {raw!r})")


@dataclass(frozen=True)
class ReplicationRequirements:
    """Workload and reliability requirements for a replicated database.

    ``workload`` is carried for forward compatibility; no scoring rule reads it.
    A ``latency_target_ms_p99`` of None means the latency target is unconstrained.
    """
    regions: Regions
    consistency: Consistency
    availability_priority: AvailabilityPriority
    data_loss_tolerance: DataLossTolerance
    conflict_tolerance: ConflictTolerance
    latency_target_ms_p99: Optional[int] = None
    workload: Optional[Workload] = None

    def validate(self) -> list:
        """Return a list of validation errors (empty if valid)."""
        errors = []
        for attr, wire_key, enum_cls in _REQUIRED_FIELDS:
            value = getattr(self, attr)
            if value is None:
                errors.append(f"{wire_key} is required")
            elif not isinstance(value, enum_cls):
                errors.append(f"{wire_key} must be one of {tuple(m.value for m in enum_cls)}")
        latency = self.latency_target_ms_p99
        if latency is not None and (isinstance(latency, bool) or not isinstance(latency, int)):
            errors.append("latencyTargetMsP99 must be an integer number of milliseconds")
        if self.workload is not None and not isinstance(self.workload, Workload):
            errors.append(f"workload must be one of {tuple(m.value for m in Workload)}")
        return errors

    def ensure_complete(self):
        """Raise InvalidRequirementError naming the first missing or malformed field."""
        for attr, wire_key, enum_cls in _REQUIRED_FIELDS:
            value = getattr(self, attr)
            if value is None:
                raise InvalidRequirementError(wire_key)
            if not isinstance(value, enum_cls):
                raise InvalidRequirementError(
                    wire_key, f"{wire_key} must be a {enum_cls.__name__} (got {value!r})",
                )
        latency = self.latency_target_ms_p99
        if latency is not None and (isinstance(latency, bool) or not isinstance(latency, int)):
            raise InvalidRequirementError(
                "latencyTargetMsP99",
                f"latencyTargetMsP99 must be an integer number of milliseconds (got {latency!r})",
            )
        if self.workload is not None and not isinstance(self.workload, Workload):
            raise InvalidRequirementError(
                "workload", f"workload must be a Workload (got {self.workload!r})",
            )

    @classmethod
    def from_dict(cls, body: dict) -> "ReplicationRequirements":
        """Build requirements from a camelCase request document.

        Enum values are matched case-insensitively. Raises InvalidRequirementError
        on the first missing or unrecognised field.
        """
        if not isinstance(body, dict):
            raise InvalidRequirementError("body", "requirements must be a JSON/YAML object")

        values = {}
        for attr, wire_key, enum_cls in _REQUIRED_FIELDS:
            raw = body.get(wire_key)
            if raw is None:
                raise InvalidRequirementError(wire_key)
            values[attr] = _parse_enum(enum_cls, wire_key, raw)

        latency = body.get("latencyTargetMsP99")
        if latency is not None and (isinstance(latency, bool) or not isinstance(latency, int)):
            raise InvalidRequirementError(
                "latencyTargetMsP99", "latencyTargetMsP99 must be an integer number of milliseconds",
            )

        workload = body.get("workload")
        if workload is not None:
            workload = _parse_enum(Workload, "workload", workload)

        return cls(latency_target_ms_p99=latency, workload=workload, **values)

    def to_dict(self) -> dict:
        return {
            "workload": self.workload.value if self.workload else None,
            "regions": self.regions.value,
            "consistency": self.consistency.value,
            "availabilityPriority": self.availability_priority.value,
            "latencyTargetMsP99": self.latency_target_ms_p99,
            "dataLossTolerance": self.data_loss_tolerance.value,
            "conflictTolerance": self.conflict_tolerance.value,
        }


# ── Evaluation and recommendation ────────────────────────────────────────────

@dataclass(frozen=True)
class CandidateEvaluation:
    """Score breakdown for a single topology after gate and axis evaluation."""
    topology: Topology
    total_score: int
    axis_scores: dict  # axis name -> int, insertion order = AXES
    gate_penalty: int = 0
    gates_fired: tuple = ()
    warnings: tuple = ()
    key_reasons: tuple = ()

    def to_dict(self) -> dict:
        return {
            "topology": self.topology.value,
            "totalScore": self.total_score,
            "gatePenalty": self.gate_penalty,
            "axisScores": dict(self.axis_scores),
            "gatesFired": list(self.gates_fired),
            "warnings": list(self.warnings),
            "keyReasons": list(self.key_reasons),
        }


@dataclass(frozen=True)
class Quorum:
    n: int
    r: int
    w: int

    def to_dict(self) -> dict:
        return {"n": self.n, "r": self.r, "w": self.w}


@dataclass(frozen=True)
class ReplicationRecommendation:
    """The advised topology with its operational policies."""
    topology: Topology
    replication_mode: ReplicationMode
    read_policy: ReadPolicy
    write_policy: WritePolicy
    quorum: Optional[Quorum] = None  # only for LEADERLESS
    warnings: tuple = ()
    tradeoffs: tuple = ()
    failure_behaviour: str = ""
    explanation: str = ""

    def to_dict(self) -> dict:
        return {
            "topology": self.topology.value,
            "replicationMode": self.replication_mode.value,
            "readPolicy": self.read_policy.value,
            "writePolicy": self.write_policy.value,
            "quorum": self.quorum.to_dict() if self.quorum else None,
            "warnings": list(self.warnings),
            "tradeoffs": list(self.tradeoffs),
            "failureBehaviour": self.failure_behaviour,
            "explanation": self.explanation,
        }


@dataclass(frozen=True)
class AdvisoryReport:
    """A recommendation together with the ranked candidates it was chosen from."""
    recommendation: ReplicationRecommendation
    ranking: tuple = field(default_factory=tuple)  # CandidateEvaluation, best first

    def to_dict(self) -> dict:
        return {
            "recommendation": self.recommendation.to_dict(),
            "candidates": [
                {"rank": i + 1, **c.to_dict()} for i, c in enumerate(self.ranking)
            ],
        }
