from __future__ import annotations

from dataclasses import asdict

import numpy as np
import pandas as pd

from staffing.conflicts import find_conflicts
from staffing.coverage import CoverageResult, compute_coverage
from staffing.input_data import InputData
from staffing.projects import Assignment, Project
from staffing.seniority import SENIORITY_HIERARCHY

from .data_models import ProjectCoverageRow
from .status import coverage_badge

COVERAGE_COLUMNS = [
    "project_id",
    "project_number",
    "name",
    "project_status",
    "required",
    "filled",
    "assigned",
    "missing",
    "coverage_status",
    "label",
    "vehicles_required",
    "vehicles_assigned",
    "conflicts",
    "fill_ratio",
]


def project_coverage(data: InputData, project: Project) -> CoverageResult:
    return compute_coverage(
        project.required_workers, data.workers_for_project(project.id)
    )


def _resource_label(data: InputData, assignment: Assignment) -> str:
    if assignment.worker_id is not None:
        worker = data.worker(assignment.worker_id)
        return worker.full_name if worker else "Neznámý montážník"
    vehicle = data.vehicle(str(assignment.vehicle_id))
    return vehicle.display_name if vehicle else "Neznámé vozidlo"


def _project_label(data: InputData, project_id: str) -> str:
    project = data.project(project_id)
    return project.name if project else f"Neznámý projekt (ID: {project_id})"


def project_coverage_frame(
    data: InputData, *, ignore_paused: bool = True
) -> pd.DataFrame:
    """One row per project with worker coverage, vehicles and conflict counts."""
    rows: list[ProjectCoverageRow] = []
    projects = data.projects_by_id
    for project in data.projects:
        result = project_coverage(data, project)
        badge = coverage_badge(result)
        assignments = data.assignments_for_project(project.id)
        n_conflicts = sum(
            1
            for a in assignments
            if find_conflicts(a, data.assignments, projects, ignore_paused=ignore_paused)
        )
        rows.append(
            ProjectCoverageRow(
                project_id=project.id,
                project_number=project.project_number,
                name=project.name,
                project_status=project.status.value,
                required=result.required,
                filled=result.filled,
                assigned=result.assigned,
                missing=", ".join(result.missing),
                coverage_status=result.status.value,
                label=badge.label,
                vehicles_required=project.required_vehicles,
                vehicles_assigned=len(data.vehicles_for_project(project.id)),
                conflicts=n_conflicts,
            )
        )

    if not rows:
        return pd.DataFrame(columns=COVERAGE_COLUMNS)

    df = pd.DataFrame([asdict(r) for r in rows])
    required = df["required"].to_numpy(dtype=float)
    filled = df["filled"].to_numpy(dtype=float)
    # NaN where the project requires nobody
    df["fill_ratio"] = np.divide(
        filled,
        required,
        out=np.full_like(filled, np.nan),
        where=required > 0,
    )
    return df[COVERAGE_COLUMNS]


def tier_shortfall_frame(data: InputData) -> pd.DataFrame:
    """Missing slots per seniority tier across all projects."""
    totals = {tier.value: 0 for tier in SENIORITY_HIERARCHY}
    required = {tier.value: 0 for tier in SENIORITY_HIERARCHY}
    for project in data.projects:
        for req in project.required_workers:
            required[req.seniority.value] += req.count
        for tier, n in project_coverage(data, project).missing_by_tier.items():
            totals[tier] += n

    return pd.DataFrame(
        {
            "seniority": list(totals.keys()),
            "required": list(required.values()),
            "missing": list(totals.values()),
        }
    )


def conflict_frame(data: InputData, *, ignore_paused: bool = True) -> pd.DataFrame:
    """Every double booking, one row per (assignment, conflicting assignment)."""
    columns = [
        "resource",
        "assignment_id",
        "project",
        "start_date",
        "end_date",
        "conflict_id",
        "conflict_project",
        "conflict_start",
        "conflict_end",
    ]
    projects = data.projects_by_id
    rows = []
    for a in data.assignments:
        for other in find_conflicts(
            a, data.assignments, projects, ignore_paused=ignore_paused
        ):
            rows.append(
                {
                    "resource": _resource_label(data, a),
                    "assignment_id": a.id,
                    "project": _project_label(data, a.project_id),
                    "start_date": a.start_date,
                    "end_date": a.end_date,
                    "conflict_id": other.id,
                    "conflict_project": _project_label(data, other.project_id),
                    "conflict_start": other.start_date,
                    "conflict_end": other.end_date,
                }
            )
    return pd.DataFrame(rows, columns=columns)
