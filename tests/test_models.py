"""Tests for the requirement model and result types."""

import os
import sys

import pytest

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from internal.models.types import (
    AXES, AdvisoryReport, AvailabilityPriority, CandidateEvaluation, ConflictTolerance,
    Consistency, DataLossTolerance, InvalidRequirementError, Quorum, ReadPolicy, Regions,
    ReplicationMode, ReplicationRecommendation, ReplicationRequirements, Topology,
    Workload, WritePolicy,
)


def _make_requirements(**overrides) -> ReplicationRequirements:
    defaults = {
        "regions": Regions.SINGLE,
        "consistency": Consistency.STRONG,
        "availability_priority": AvailabilityPriority.MED,
        "data_loss_tolerance": DataLossTolerance.ZERO,
        "conflict_tolerance": ConflictTolerance.NONE,
        "latency_target_ms_p99": 30,
    }
    defaults.update(overrides)
    return ReplicationRequirements(**defaults)


def _valid_body(**overrides) -> dict:
    body = {
        "workload": "READ_HEAVY",
        "regions": "MULTI_WRITE",
        "consistency": "EVENTUAL",
        "availabilityPriority": "HIGH",
        "latencyTargetMsP99": 120,
        "dataLossTolerance": "LOW",
        "conflictTolerance": "HIGH",
    }
    body.update(overrides)
    return body


# ── validate ─────────────────────────────────────────────────────────────────

def test_valid_requirements_have_no_errors():
    assert _make_requirements().validate() == []


def test_latency_target_is_optional():
    assert _make_requirements(latency_target_ms_p99=None).validate() == []


def test_missing_regions():
    errors = _make_requirements(regions=None).validate()
    assert any("regions" in e for e in errors)


def test_validate_reports_every_missing_field():
    req = _make_requirements(consistency=None, conflict_tolerance=None)
    errors = req.validate()
    assert len(errors) == 2
    assert any("consistency" in e for e in errors)
    assert any("conflictTolerance" in e for e in errors)


def test_plain_string_is_not_an_enum_member():
    errors = _make_requirements(consistency="STRONG-ish").validate()
    assert any("consistency" in e for e in errors)


def test_non_integer_latency():
    errors = _make_requirements(latency_target_ms_p99="fast").validate()
    assert any("latencyTargetMsP99" in e for e in errors)


# ── ensure_complete ──────────────────────────────────────────────────────────

def test_ensure_complete_names_first_missing_field():
    req = _make_requirements(availability_priority=None, data_loss_tolerance=None)
    with pytest.raises(InvalidRequirementError) as exc:
        req.ensure_complete()
    assert exc.value.field == "availabilityPriority"


def test_invalid_requirement_error_is_a_value_error():
    with pytest.raises(ValueError, match="conflictTolerance"):
        _make_requirements(conflict_tolerance=None).ensure_complete()


# ── from_dict ────────────────────────────────────────────────────────────────

def test_from_dict_parses_all_fields():
    req = ReplicationRequirements.from_dict(_valid_body())
    assert req.workload == Workload.READ_HEAVY
    assert req.regions == Regions.MULTI_WRITE
    assert req.consistency == Consistency.EVENTUAL
    assert req.availability_priority == AvailabilityPriority.HIGH
    assert req.latency_target_ms_p99 == 120
    assert req.data_loss_tolerance == DataLossTolerance.LOW
    assert req.conflict_tolerance == ConflictTolerance.HIGH


def test_from_dict_is_case_insensitive():
    req = ReplicationRequirements.from_dict(_valid_body(regions="multi_read", consistency=" session "))
    assert req.regions == Regions.MULTI_READ
    assert req.consistency == Consistency.SESSION


def test_from_dict_optional_fields_default_to_none():
    body = _valid_body()
    del body["workload"]
    del body["latencyTargetMsP99"]
    req = ReplicationRequirements.from_dict(body)
    assert req.workload is None
    assert req.latency_target_ms_p99 is None


def test_from_dict_missing_field():
    body = _valid_body()
    del body["dataLossTolerance"]
    with pytest.raises(InvalidRequirementError) as exc:
        ReplicationRequirements.from_dict(body)
    assert exc.value.field == "dataLossTolerance"


def test_from_dict_unknown_value_lists_allowed_values():
    with pytest.raises(InvalidRequirementError) as exc:
        ReplicationRequirements.from_dict(_valid_body(availabilityPriority="EXTREME"))
    assert exc.value.field == "availabilityPriority"
    assert "HIGH, MED, LOW" in str(exc.value)


def test_from_dict_rejects_boolean_latency():
    with pytest.raises(InvalidRequirementError) as exc:
        ReplicationRequirements.from_dict(_valid_body(latencyTargetMsP99=True))
    assert exc.value.field == "latencyTargetMsP99"


def test_from_dict_rejects_non_mapping():
    with pytest.raises(InvalidRequirementError):
        ReplicationRequirements.from_dict(["regions", "SINGLE"])


def test_requirements_round_trip_through_wire_format():
    body = _valid_body()
    assert ReplicationRequirements.from_dict(body).to_dict() == body


def test_requirements_are_immutable():
    req = _make_requirements()
    with pytest.raises(Exception):
        req.regions = Regions.MULTI_WRITE


# ── Result types ─────────────────────────────────────────────────────────────

def test_axes_are_in_evaluation_order():
    assert AXES == ("consistencyFit", "availabilityFit", "latencyFit", "conflictRisk")


def test_recommendation_to_dict():
    rec = ReplicationRecommendation(
        topology=Topology.LEADERLESS,
        replication_mode=ReplicationMode.QUORUM,
        read_policy=ReadPolicy.QUORUM_READ,
        write_policy=WritePolicy.QUORUM_WRITE,
        quorum=Quorum(n=3, r=2, w=2),
        warnings=("w1",),
        tradeoffs=("t1", "t2"),
        failure_behaviour="fb",
        explanation="why",
    )
    data = rec.to_dict()
    assert data["topology"] == "LEADERLESS"
    assert data["replicationMode"] == "quorum"
    assert data["readPolicy"] == "quorum-read"
    assert data["writePolicy"] == "quorum-write"
    assert data["quorum"] == {"n": 3, "r": 2, "w": 2}
    assert data["tradeoffs"] == ["t1", "t2"]
    assert data["failureBehaviour"] == "fb"


def test_report_ranks_candidates_from_one():
    rec = ReplicationRecommendation(
        topology=Topology.LEADER_FOLLOWER,
        replication_mode=ReplicationMode.PRIMARY_BACKUP,
        read_policy=ReadPolicy.LEADER_READ,
        write_policy=WritePolicy.SINGLE_WRITER,
    )
    evaluation = CandidateEvaluation(
        topology=Topology.LEADER_FOLLOWER,
        total_score=35,
        axis_scores={"consistencyFit": 10, "availabilityFit": 6, "latencyFit": 9, "conflictRisk": 10},
    )
    data = AdvisoryReport(recommendation=rec, ranking=(evaluation,)).to_dict()
    assert data["recommendation"]["quorum"] is None
    assert data["candidates"][0]["rank"] == 1
    assert data["candidates"][0]["totalScore"] == 35
    assert data["candidates"][0]["gatesFired"] == []
