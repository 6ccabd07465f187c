from __future__ import annotations

from datetime import date
from io import StringIO
from pathlib import Path
from typing import Any, Optional

import pandas as pd

from staffing.input_data import InputData
from staffing.requirements import format_requirements

from .status import count_badge, coverage_badge, tier_detail_lines
from .summary import (
    conflict_frame,
    project_coverage,
    project_coverage_frame,
    tier_shortfall_frame,
)

_STATUS_ICONS = {"full": "✅", "composition": "⚠️", "partial": "⚠️", "none": "❌"}


class ReportDocument:
    """Collects printed report lines and writes them to a UTF-8 text file."""

    def __init__(self, path: Path) -> None:
        self.path = path
        self.lines: list[str] = []

    def add_text(self, text: str) -> None:
        self.lines.append(text)

    def write(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        body = "\n".join(self.lines) if self.lines else "Report contains no data."
        self.path.write_text(body + "\n", encoding="utf-8")


_ACTIVE_REPORT: Optional[ReportDocument] = None


def set_active_report(doc: Optional[ReportDocument]) -> None:
    global _ACTIVE_REPORT
    _ACTIVE_REPORT = doc


def get_active_report() -> Optional[ReportDocument]:
    return _ACTIVE_REPORT


def _log_print(*args, **kwargs) -> None:
    buf = StringIO()
    kwargs_copy = kwargs.copy()
    kwargs_copy["file"] = buf
    print(*args, **kwargs_copy)
    print(*args, **kwargs)
    if _ACTIVE_REPORT is not None:
        _ACTIVE_REPORT.add_text(buf.getvalue().rstrip("\n"))


def format_date(value: date, fmt: Optional[str] = None) -> str:
    """Czech short date (3.2.25) unless an explicit strftime format is given."""
    if fmt:
        return value.strftime(fmt)
    return f"{value.day}.{value.month}.{value:%y}"


def _fmt_pct(x: Any) -> str:
    if x is None or pd.isna(x):
        return "-"
    return f"{100 * float(x):.0f}%"


def render_text_report(cfg: Any, data: InputData) -> None:
    """Print portfolio coverage, per-project breakdown and double bookings."""
    n_rows = int(getattr(cfg, "NUM_PRINT_EXAMPLES", 10))
    ignore_paused = bool(getattr(cfg, "IGNORE_PAUSED_PROJECTS", True))
    date_fmt = getattr(cfg, "DATE_FORMAT", None)

    _log_print("\nStaffing coverage report\n")
    if not data.projects:
        _log_print("No projects to report.")
        return

    df = project_coverage_frame(data, ignore_paused=ignore_paused)
    counts = df["coverage_status"].value_counts()
    _log_print(
        f"Projects: {len(df)} | "
        + " | ".join(
            f"{status}={int(counts.get(status, 0))}"
            for status in ("full", "composition", "partial", "none")
        )
    )
    _log_print(
        f"Positions filled: {int(df['filled'].sum())} / {int(df['required'].sum())} "
        f"| workers assigned: {int(df['assigned'].sum())}"
    )

    _log_print("\nPer-project coverage:")
    for project in data.projects:
        result = project_coverage(data, project)
        badge = coverage_badge(result)
        icon = _STATUS_ICONS.get(badge.status, "")
        period = (
            f"{format_date(project.start_date, date_fmt)} - "
            f"{format_date(project.end_date, date_fmt)}"
        )
        _log_print(
            f"{icon} {project.name} [{project.status.value}, {period}] "
            f"— {badge.label} {badge.details}".rstrip()
        )
        _log_print(f"    required: {format_requirements(project.required_workers)}")
        if result.missing:
            _log_print(f"    {badge.tooltip}")
        for line in tier_detail_lines(badge.coverage):
            _log_print(f"      {line}")
        if project.required_vehicles:
            vehicles = count_badge(
                project.required_vehicles, len(data.vehicles_for_project(project.id))
            )
            _log_print(f"    vozidla: {vehicles.label} {vehicles.details}")

    shortfall = tier_shortfall_frame(data)
    shortfall = shortfall[shortfall["missing"] > 0]
    if shortfall.empty:
        _log_print("\nNo missing positions across projects.")
    else:
        _log_print("\nMissing positions by seniority:")
        _log_print(shortfall.to_string(index=False))

    worst = df[df["required"] > 0].sort_values(["fill_ratio", "required"])
    if not worst.empty:
        _log_print(f"\nLowest fill ratio (top {n_rows}):")
        view = worst.head(n_rows)[["name", "filled", "required", "fill_ratio"]].copy()
        view["fill_ratio"] = view["fill_ratio"].map(_fmt_pct)
        _log_print(view.to_string(index=False))

    conflicts = conflict_frame(data, ignore_paused=ignore_paused)
    if conflicts.empty:
        _log_print("\nNo double bookings found.")
        return

    _log_print(f"\n⚠️ Double bookings ({len(conflicts)}):")
    for row in conflicts.head(n_rows).itertuples(index=False):
        _log_print(
            f"  - {row.resource}: {row.project} "
            f"({format_date(row.start_date, date_fmt)} - {format_date(row.end_date, date_fmt)}) "
            f"overlaps {row.conflict_project} "
            f"({format_date(row.conflict_start, date_fmt)} - "
            f"{format_date(row.conflict_end, date_fmt)})"
        )
    if len(conflicts) > n_rows:
        _log_print(f"  … {len(conflicts) - n_rows} more")
