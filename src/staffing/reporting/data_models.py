from __future__ import annotations

from dataclasses import dataclass, field

from staffing.coverage import TierCoverage


@dataclass(frozen=True)
class CoverageBadge:
    """What a project card shows next to its worker/vehicle heading."""

    status: str  # full | composition | partial | none
    label: str
    details: str  # "(filled/required)", empty when nothing is required
    tooltip: str
    coverage: list[TierCoverage] = field(default_factory=list)


@dataclass(frozen=True)
class ProjectCoverageRow:
    """One row of the portfolio summary."""

    project_id: str
    project_number: str
    name: str
    project_status: str
    required: int
    filled: int
    assigned: int
    missing: str
    coverage_status: str
    label: str
    vehicles_required: int
    vehicles_assigned: int
    conflicts: int
