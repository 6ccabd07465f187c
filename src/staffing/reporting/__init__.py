from __future__ import annotations

from .data_models import CoverageBadge, ProjectCoverageRow
from .reporter import Reporter
from .status import count_badge, coverage_badge

__all__ = [
    "Reporter",
    "CoverageBadge",
    "ProjectCoverageRow",
    "coverage_badge",
    "count_badge",
]
