from __future__ import annotations

from itertools import product

import pytest

from staffing.coverage import (
    CoverageStatus,
    compute_coverage,
    split_top_level_shortfall,
)
from staffing.requirements import StaffingRequirement
from staffing.seniority import Seniority
from staffing.workers import Worker


def _req(**counts: int) -> list[dict]:
    return [{"seniority": s, "count": c} for s, c in counts.items()]


def _workers(*tiers: str | None) -> list[Worker]:
    return [Worker(id=f"w{i}", seniority=t) for i, t in enumerate(tiers)]


def test_no_requirements_is_trivially_covered() -> None:
    for reqs in (None, [], _req(junior=0, senior=0)):
        res = compute_coverage(reqs, _workers("senior"))
        assert res.status == CoverageStatus.FULL
        assert res.missing == []
        assert res.coverage == []
        assert res.required == 0
        assert res.filled == 0
        assert res.not_required is True


def test_single_junior_with_nobody_assigned() -> None:
    res = compute_coverage(_req(junior=1), [])

    assert res.status == CoverageStatus.NONE
    assert res.missing == ["junior"]
    assert res.filled == 0
    assert res.required == 1


def test_two_seniors_fully_covered() -> None:
    res = compute_coverage(_req(senior=2), _workers("senior", "senior"))

    assert res.status == CoverageStatus.FULL
    assert res.missing == []
    assert res.filled == 2
    [tier] = res.coverage
    assert tier.seniority == Seniority.SENIOR
    assert (tier.required, tier.assigned, tier.covered, tier.missing) == (2, 2, 2, 0)
    assert tier.status == CoverageStatus.FULL


def test_specialista_can_fill_either_top_slot() -> None:
    res = compute_coverage(_req(senior=1, specialista=1), _workers("specialista"))

    assert res.filled == 1
    assert res.missing == ["senior"]
    assert res.status == CoverageStatus.PARTIAL
    by_tier = {c.seniority: c for c in res.coverage}
    assert [c.seniority for c in res.coverage] == [
        Seniority.SPECIALISTA,
        Seniority.SENIOR,
    ]
    assert by_tier[Seniority.SPECIALISTA].status == CoverageStatus.FULL
    assert by_tier[Seniority.SENIOR].covered == 0
    assert by_tier[Seniority.SENIOR].status == CoverageStatus.NONE


def test_senior_surplus_flows_down_to_medior_only() -> None:
    res = compute_coverage(_req(junior=1, medior=1), _workers("senior"))

    assert res.filled == 1
    assert res.missing == ["junior"]
    assert res.status == CoverageStatus.PARTIAL


def test_surplus_flows_through_every_lower_level() -> None:
    res = compute_coverage(
        _req(junior=1, medior=1, senior=1),
        _workers("specialista", "specialista", "senior"),
    )
    assert res.status == CoverageStatus.FULL
    assert res.filled == 3


def test_lower_tier_never_fills_higher_slot() -> None:
    res = compute_coverage(_req(senior=1), _workers("junior", "medior"))

    assert res.filled == 0
    assert res.missing == ["senior"]
    assert res.status == CoverageStatus.COMPOSITION


def test_composition_when_headcount_matches_but_tiers_do_not() -> None:
    res = compute_coverage(_req(senior=1, medior=1), _workers("junior", "junior"))

    assert res.status == CoverageStatus.COMPOSITION
    assert res.filled == 0
    assert res.assigned == 2
    assert res.missing == ["senior", "medior"]


def test_composition_with_some_positions_filled() -> None:
    res = compute_coverage(_req(medior=2), _workers("medior", "junior"))

    assert res.status == CoverageStatus.COMPOSITION
    assert res.filled == 1
    assert res.missing == ["medior"]
    [tier] = res.coverage
    assert tier.status == CoverageStatus.PARTIAL


def test_duplicate_requirements_match_merged_equivalent() -> None:
    workers = _workers("senior")
    duplicated = compute_coverage(
        [{"seniority": "senior", "count": 1}, {"seniority": "senior", "count": 1}],
        workers,
    )
    merged = compute_coverage(_req(senior=2), workers)

    assert duplicated == merged
    assert duplicated.required == 2
    assert duplicated.coverage[0].required == 2


def test_workers_without_seniority_fill_no_slot() -> None:
    res = compute_coverage(_req(junior=1), _workers(None, ""))

    assert res.filled == 0
    assert res.missing == ["junior"]
    # they still count as bodies on site
    assert res.assigned == 2
    assert res.status == CoverageStatus.COMPOSITION


def test_accepts_mappings_strings_and_requirement_objects() -> None:
    reqs = [
        StaffingRequirement(Seniority.MEDIOR, 1),
        {"seniority": "Junior", "count": 1},
    ]
    res = compute_coverage(reqs, [{"seniority": "medior"}, "junior"])
    assert res.status == CoverageStatus.FULL


def test_negative_requirement_counts_are_clamped() -> None:
    res = compute_coverage(_req(junior=-3), [])
    assert res.not_required is True
    assert res.status == CoverageStatus.FULL


def test_to_dict_matches_external_shape() -> None:
    out = compute_coverage(_req(senior=1, junior=1), _workers("senior")).to_dict()

    assert set(out) == {"status", "filled", "required", "missing", "coverage"}
    assert out["status"] == "partial"
    assert out["missing"] == ["junior"]
    assert out["coverage"][0] == {
        "seniority": "senior",
        "required": 1,
        "assigned": 1,
        "covered": 1,
        "missing": 0,
        "status": "full",
    }


@pytest.mark.parametrize(
    "missing, senior_req, specialista_req, expected",
    [
        (0, 2, 2, (0, 0)),
        (1, 1, 1, (1, 0)),  # 0.5 rounds up to senior
        (3, 2, 1, (2, 1)),
        (1, 1, 3, (0, 1)),
        (5, 1, 1, (3, 2)),
        (2, 0, 0, (2, 0)),
        (2, 0, 4, (0, 2)),
    ],
)
def test_split_top_level_shortfall(missing, senior_req, specialista_req, expected):
    assert split_top_level_shortfall(missing, senior_req, specialista_req) == expected


def test_filled_never_exceeds_required_and_matches_breakdown() -> None:
    tiers = ["junior", "medior", "senior", "specialista"]
    for req_counts in product(range(3), repeat=4):
        reqs = [{"seniority": s, "count": c} for s, c in zip(tiers, req_counts)]
        for assigned_counts in [(0, 0, 0, 0), (1, 0, 0, 2), (2, 1, 1, 0), (0, 3, 0, 1)]:
            workers = [s for s, c in zip(tiers, assigned_counts) for _ in range(c)]
            res = compute_coverage(reqs, workers)
            if res.required == 0:
                assert res.status == CoverageStatus.FULL
                assert res.missing == []
                continue
            assert res.filled <= res.required
            assert sum(c.covered for c in res.coverage) == res.filled
            assert len(res.missing) == res.required - res.filled


def test_adding_specialista_never_hurts() -> None:
    tiers = ["junior", "medior", "senior", "specialista"]
    top = {"senior", "specialista"}
    for req_counts in product(range(3), repeat=4):
        reqs = [{"seniority": s, "count": c} for s, c in zip(tiers, req_counts)]
        workers = ["junior", "senior"]
        before = compute_coverage(reqs, workers)
        after = compute_coverage(reqs, workers + ["specialista"])

        assert after.filled >= before.filled
        top_before = sum(1 for m in before.missing if m in top)
        top_after = sum(1 for m in after.missing if m in top)
        assert top_after <= top_before
