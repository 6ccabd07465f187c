from __future__ import annotations

from typing import Iterable

from staffing.coverage import CoverageResult, CoverageStatus, TierCoverage
from staffing.seniority import seniority_label

from .data_models import CoverageBadge

NOT_REQUIRED_LABEL = "Není požadováno"


def _missing_text(missing: Iterable[str]) -> str:
    return ", ".join(seniority_label(s) for s in missing)


def coverage_badge(result: CoverageResult) -> CoverageBadge:
    """Czech label/tooltip for a worker coverage result."""
    if result.not_required or result.required == 0:
        return CoverageBadge(
            status=CoverageStatus.FULL.value,
            label=NOT_REQUIRED_LABEL,
            details="",
            tooltip="Pro tento projekt nejsou požadováni žádní pracovníci.",
        )

    details = f"({result.filled}/{result.required})"
    missing = _missing_text(result.missing)

    if result.status == CoverageStatus.FULL:
        label = "Pokryto"
        tooltip = "Všechny pozice jsou správně pokryty."
    elif result.status == CoverageStatus.COMPOSITION:
        label = "Složení"
        tooltip = (
            f"Počet pracovníků je správný ({result.assigned}/{result.required}), "
            f"ale chybí správná seniorita: {missing}"
        )
    elif result.status == CoverageStatus.PARTIAL:
        label = "Částečně"
        tooltip = f"Chybí pracovníci: {missing}"
    else:
        label = "Nepokryto"
        tooltip = f"Chybí všichni pracovníci: {missing}"

    return CoverageBadge(
        status=result.status.value,
        label=label,
        details=details,
        tooltip=tooltip,
        coverage=list(result.coverage),
    )


def count_badge(required: int, assigned: int) -> CoverageBadge:
    """Count-only badge, used for vehicles."""
    if required <= 0:
        return CoverageBadge(
            status=CoverageStatus.FULL.value,
            label=NOT_REQUIRED_LABEL,
            details="",
            tooltip="Pro tento projekt nejsou požadovány žádné zdroje.",
        )
    details = f"({assigned}/{required})"
    if assigned >= required:
        return CoverageBadge(
            CoverageStatus.FULL.value,
            "Pokryto",
            details,
            "Požadovaný počet je pokryt.",
        )
    if assigned > 0:
        return CoverageBadge(
            CoverageStatus.PARTIAL.value,
            "Částečně pokryto",
            details,
            "Částečné pokrytí.",
        )
    return CoverageBadge(
        CoverageStatus.NONE.value,
        "Nepokryto",
        details,
        "Požadované zdroje nejsou pokryty.",
    )


def tier_detail_lines(coverage: Iterable[TierCoverage]) -> list[str]:
    """'Senior: 1/2 (chybí 1)' style lines for the detailed breakdown."""
    lines = []
    for item in coverage:
        line = f"{seniority_label(item.seniority)}: {item.assigned}/{item.required}"
        if item.missing > 0:
            line += f" (chybí {item.missing})"
        lines.append(line)
    return lines
