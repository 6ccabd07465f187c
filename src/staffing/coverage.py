from __future__ import annotations

import math
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Mapping, Optional

from staffing.requirements import RequirementLike, merge_requirements
from staffing.seniority import (
    EFFECTIVE_LEVEL_COUNT,
    EFFECTIVE_LEVELS,
    SENIORITY_HIERARCHY,
    TOP_LEVEL,
    Seniority,
    normalize_seniority,
)

# Order used for the per-tier breakdown (highest tier first).
DETAIL_ORDER: tuple[Seniority, ...] = (
    Seniority.SPECIALISTA,
    Seniority.SENIOR,
    Seniority.MEDIOR,
    Seniority.JUNIOR,
)


class CoverageStatus(str, Enum):
    FULL = "full"
    COMPOSITION = "composition"
    PARTIAL = "partial"
    NONE = "none"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class TierCoverage:
    """Breakdown for one seniority tier that the project actually requires."""

    seniority: Seniority
    required: int
    assigned: int
    covered: int
    missing: int
    status: CoverageStatus

    def to_dict(self) -> dict[str, Any]:
        return {
            "seniority": self.seniority.value,
            "required": self.required,
            "assigned": self.assigned,
            "covered": self.covered,
            "missing": self.missing,
            "status": self.status.value,
        }


@dataclass(frozen=True)
class CoverageResult:
    """
    Derived view of how a project's required staffing is covered.

    `filled` counts required positions that are filled, so it never exceeds
    `required`. `assigned` is the number of workers assigned to the project,
    including those without a recorded seniority. `missing` holds one tier
    name per unfilled slot.
    """

    status: CoverageStatus
    filled: int
    required: int
    assigned: int
    missing: list[str] = field(default_factory=list)
    coverage: list[TierCoverage] = field(default_factory=list)
    not_required: bool = False

    @property
    def missing_by_tier(self) -> dict[str, int]:
        return dict(Counter(self.missing))

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status.value,
            "filled": self.filled,
            "required": self.required,
            "missing": list(self.missing),
            "coverage": [c.to_dict() for c in self.coverage],
        }


def _round_half_up(x: float) -> int:
    # Python's round() is banker's rounding; 0.5 must go up here.
    return int(math.floor(x + 0.5))


def _worker_tier(worker: Any) -> Optional[Seniority]:
    if worker is None:
        return None
    if isinstance(worker, (str, Seniority)):
        return normalize_seniority(worker)
    if isinstance(worker, Mapping):
        return normalize_seniority(worker.get("seniority"))
    return normalize_seniority(getattr(worker, "seniority", None))


def _tier_counts_from_requirements(
    requirements: Iterable[RequirementLike] | None,
) -> dict[Seniority, int]:
    counts = {s: 0 for s in SENIORITY_HIERARCHY}
    for req in merge_requirements(requirements):
        counts[req.seniority] += req.count
    return counts


def _tier_counts_from_workers(workers: Iterable[Any]) -> dict[Seniority, int]:
    counts = {s: 0 for s in SENIORITY_HIERARCHY}
    for worker in workers:
        tier = _worker_tier(worker)
        if tier is None:
            continue
        counts[tier] += 1
    return counts


def split_top_level_shortfall(
    missing: int, senior_required: int, specialista_required: int
) -> tuple[int, int]:
    """
    Attribute a shortfall at the senior/specialista level back to the two tiers.

    The split is proportional to the original requirement counts, rounded
    half-up. If rounding leaves the parts off by one from `missing`, the tier
    with the larger original requirement absorbs the difference (specialista
    on a tie). With no requirement on either tier, everything goes to senior.

    Returns (missing_senior, missing_specialista).
    """
    if missing <= 0:
        return 0, 0

    total = senior_required + specialista_required
    if total <= 0:
        return missing, 0

    missing_senior = _round_half_up(senior_required / total * missing)
    missing_specialista = missing - missing_senior
    missing_senior = max(0, missing_senior)
    missing_specialista = max(0, missing_specialista)

    diff = missing_senior + missing_specialista - missing
    if diff != 0:
        step = -1 if diff > 0 else 1
        if senior_required > specialista_required:
            missing_senior += step
        else:
            missing_specialista += step

    return max(0, missing_senior), max(0, missing_specialista)


def _tier_status(covered: int, missing: int) -> CoverageStatus:
    if missing == 0:
        return CoverageStatus.FULL
    if covered > 0:
        return CoverageStatus.PARTIAL
    return CoverageStatus.NONE


def _not_required_result(assigned: int) -> CoverageResult:
    return CoverageResult(
        status=CoverageStatus.FULL,
        filled=0,
        required=0,
        assigned=assigned,
        missing=[],
        coverage=[],
        not_required=True,
    )


def compute_coverage(
    requirements: Iterable[RequirementLike] | None,
    assigned_workers: Iterable[Any] | None,
) -> CoverageResult:
    """
    Reconcile a project's required staffing with the workers assigned to it.

    Rationale
    ---------
    Requirements are stated per seniority tier, but a more senior worker can
    stand in for a more junior one. The four tiers collapse onto three
    effective levels (junior=0, medior=1, senior/specialista=2) and the levels
    are processed from the top down. Workers left over at one level form a
    surplus that is carried down and may fill slots on the next level. Surplus
    never flows upwards, so a junior can never fill a senior slot.

    For every level:
        available = assigned_at_level + incoming_surplus
        covered   = min(available, required_at_level)
        missing   = max(0, required_at_level - available)
        surplus   = available - covered

    A shortfall on the top level is split between "senior" and "specialista"
    with `split_top_level_shortfall`.

    Status
    ------
    full:        every required position is filled.
    composition: enough workers are assigned in total, but the tier mix is
                 wrong so some slot is still missing.
    partial:     some positions are filled, fewer workers than required.
    none:        no position is filled.

    Example
    -------
    Requiring one junior and one medior while a single senior is assigned:
    the senior surplus from level 2 fills the medior slot, the junior slot
    stays open. Result: filled=1, missing=["junior"], status "partial".
    """
    workers = list(assigned_workers or [])
    total_assigned = len(workers)

    required_by_tier = _tier_counts_from_requirements(requirements)
    total_required = sum(required_by_tier.values())
    if total_required == 0:
        return _not_required_result(total_assigned)

    assigned_by_tier = _tier_counts_from_workers(workers)

    required_by_level = [0] * EFFECTIVE_LEVEL_COUNT
    assigned_by_level = [0] * EFFECTIVE_LEVEL_COUNT
    for tier in SENIORITY_HIERARCHY:
        level = EFFECTIVE_LEVELS[tier]
        required_by_level[level] += required_by_tier[tier]
        assigned_by_level[level] += assigned_by_tier[tier]

    surplus = 0
    filled = 0
    missing: list[str] = []

    for level in range(EFFECTIVE_LEVEL_COUNT - 1, -1, -1):
        required = required_by_level[level]
        available = assigned_by_level[level] + surplus

        covered = min(available, required)
        short = max(0, required - available)
        filled += covered
        surplus = max(0, available - covered)

        if short == 0:
            continue
        if level == TOP_LEVEL:
            missing_senior, missing_specialista = split_top_level_shortfall(
                short,
                required_by_tier[Seniority.SENIOR],
                required_by_tier[Seniority.SPECIALISTA],
            )
            missing.extend([Seniority.SENIOR.value] * missing_senior)
            missing.extend([Seniority.SPECIALISTA.value] * missing_specialista)
        else:
            tier = SENIORITY_HIERARCHY[level]
            missing.extend([tier.value] * short)

    missing_counts = Counter(missing)
    detail: list[TierCoverage] = []
    for tier in DETAIL_ORDER:
        required = required_by_tier[tier]
        if required <= 0:
            continue
        tier_missing = missing_counts.get(tier.value, 0)
        tier_covered = max(0, required - tier_missing)
        detail.append(
            TierCoverage(
                seniority=tier,
                required=required,
                assigned=assigned_by_tier[tier],
                covered=tier_covered,
                missing=tier_missing,
                status=_tier_status(tier_covered, tier_missing),
            )
        )

    if filled >= total_required and not missing:
        status = CoverageStatus.FULL
    elif total_assigned >= total_required and missing:
        status = CoverageStatus.COMPOSITION
    elif filled > 0:
        status = CoverageStatus.PARTIAL
    else:
        status = CoverageStatus.NONE

    return CoverageResult(
        status=status,
        filled=filled,
        required=total_required,
        assigned=total_assigned,
        missing=missing,
        coverage=detail,
    )
