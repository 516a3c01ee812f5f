"""Tests for the four axis scorers."""

import itertools
import os
import sys

import pytest

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from internal.advisor.axes import (
    effective_latency_target, score_availability_fit, score_axes, score_conflict_risk,
    score_consistency_fit, score_latency_fit,
)
from internal.models.types import (
    AXES, AvailabilityPriority, ConflictTolerance, Consistency, DataLossTolerance,
    Regions, ReplicationRequirements, Topology,
)

LF = Topology.LEADER_FOLLOWER
ML = Topology.MULTI_LEADER
LL = Topology.LEADERLESS


def _make_requirements(**overrides) -> ReplicationRequirements:
    defaults = {
        "regions": Regions.SINGLE,
        "consistency": Consistency.SESSION,
        "availability_priority": AvailabilityPriority.MED,
        "data_loss_tolerance": DataLossTolerance.LOW,
        "conflict_tolerance": ConflictTolerance.LOW,
        "latency_target_ms_p99": None,
    }
    defaults.update(overrides)
    return ReplicationRequirements(**defaults)


# ── Consistency fit ──────────────────────────────────────────────────────────

@pytest.mark.parametrize("consistency,expected", [
    (Consistency.STRONG, {LF: 10, ML: 3, LL: 6}),
    (Consistency.SESSION, {LF: 8, ML: 6, LL: 7}),
    (Consistency.EVENTUAL, {LF: 6, ML: 8, LL: 9}),
])
def test_consistency_fit(consistency, expected):
    req = _make_requirements(consistency=consistency)
    assert {t: score_consistency_fit(t, req) for t in Topology} == expected


def test_strong_consistency_favours_leader_follower():
    req = _make_requirements(consistency=Consistency.STRONG)
    assert score_consistency_fit(LF, req) > score_consistency_fit(LL, req) > score_consistency_fit(ML, req)


# ── Availability fit ─────────────────────────────────────────────────────────

@pytest.mark.parametrize("priority,expected", [
    (AvailabilityPriority.HIGH, {LF: 4, ML: 9, LL: 10}),
    (AvailabilityPriority.MED, {LF: 6, ML: 8, LL: 9}),
    (AvailabilityPriority.LOW, {LF: 5, ML: 7, LL: 8}),
])
def test_availability_fit(priority, expected):
    req = _make_requirements(availability_priority=priority)
    assert {t: score_availability_fit(t, req) for t in Topology} == expected


# ── Latency fit ──────────────────────────────────────────────────────────────

def test_unconstrained_latency_uses_default_target():
    assert effective_latency_target(_make_requirements(latency_target_ms_p99=None)) == 150
    assert effective_latency_target(_make_requirements(latency_target_ms_p99=40)) == 40


@pytest.mark.parametrize("latency,expected", [
    (80, {LF: 9, ML: 7, LL: 7}),    # tight
    (81, {LF: 8, ML: 7, LL: 8}),    # loose
    (None, {LF: 8, ML: 7, LL: 8}),  # unconstrained is loose
])
def test_latency_fit_single_region(latency, expected):
    req = _make_requirements(regions=Regions.SINGLE, latency_target_ms_p99=latency)
    assert {t: score_latency_fit(t, req) for t in Topology} == expected


@pytest.mark.parametrize("consistency,latency,expected", [
    (Consistency.STRONG, 50, 4),
    (Consistency.STRONG, 200, 5),
    (Consistency.EVENTUAL, 50, 5),
    (Consistency.SESSION, None, 6),
])
def test_latency_fit_leader_follower_cross_region(consistency, latency, expected):
    for regions in (Regions.MULTI_READ, Regions.MULTI_WRITE):
        req = _make_requirements(regions=regions, consistency=consistency, latency_target_ms_p99=latency)
        assert score_latency_fit(LF, req) == expected


def test_latency_fit_multi_leader_prefers_multi_write():
    multi_write = _make_requirements(regions=Regions.MULTI_WRITE)
    multi_read = _make_requirements(regions=Regions.MULTI_READ)
    assert score_latency_fit(ML, multi_write) == 8
    assert score_latency_fit(ML, multi_read) == 7


def test_latency_fit_leaderless_is_flat_across_regions():
    for regions, latency in itertools.product((Regions.MULTI_READ, Regions.MULTI_WRITE), (10, None)):
        req = _make_requirements(regions=regions, latency_target_ms_p99=latency)
        assert score_latency_fit(LL, req) == 7


# ── Conflict risk ────────────────────────────────────────────────────────────

@pytest.mark.parametrize("tolerance,expected", [
    (ConflictTolerance.NONE, {LF: 10, ML: 2, LL: 4}),
    (ConflictTolerance.LOW, {LF: 10, ML: 4, LL: 6}),
    (ConflictTolerance.HIGH, {LF: 10, ML: 6, LL: 7}),
])
def test_conflict_risk(tolerance, expected):
    req = _make_requirements(conflict_tolerance=tolerance)
    assert {t: score_conflict_risk(t, req) for t in Topology} == expected


# ── Totality ─────────────────────────────────────────────────────────────────

def test_every_combination_scores_all_axes():
    for regions, consistency, priority, conflict, latency, topology in itertools.product(
        Regions, Consistency, AvailabilityPriority, ConflictTolerance, (None, 10, 80, 81), Topology,
    ):
        req = _make_requirements(
            regions=regions,
            consistency=consistency,
            availability_priority=priority,
            conflict_tolerance=conflict,
            latency_target_ms_p99=latency,
        )
        scores = score_axes(topology, req)
        assert tuple(scores) == AXES
        assert all(isinstance(v, int) for v in scores.values())
