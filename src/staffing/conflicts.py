from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, Literal, Mapping, Optional, Sequence

from staffing.projects import Assignment, Project, to_date

ResourceKind = Literal["worker", "vehicle"]


class AssignmentOutOfRangeError(ValueError):
    """Assignment dates fall outside the dates of its project."""

    def __init__(self, assignment: Assignment, project: Project) -> None:
        self.assignment = assignment
        self.project = project
        super().__init__(
            f"Assignment {assignment.id} ({assignment.start_date} - "
            f"{assignment.end_date}) must lie within project '{project.name}' "
            f"({project.start_date} - {project.end_date})."
        )


@dataclass(frozen=True)
class ResourceAvailability:
    resource_id: str
    kind: ResourceKind
    conflicts: list[Assignment] = field(default_factory=list)

    @property
    def is_conflicting(self) -> bool:
        return bool(self.conflicts)


def ranges_overlap(start_a: date, end_a: date, start_b: date, end_b: date) -> bool:
    """Whole-day ranges, both ends inclusive."""
    return start_a <= end_b and end_a >= start_b


def assignments_overlap(a: Assignment, b: Assignment) -> bool:
    return ranges_overlap(a.start_date, a.end_date, b.start_date, b.end_date)


def _project_index(
    projects: Iterable[Project] | Mapping[str, Project] | None,
) -> dict[str, Project]:
    if projects is None:
        return {}
    if isinstance(projects, Mapping):
        return dict(projects)
    return {p.id: p for p in projects}


def _on_paused_project(assignment: Assignment, projects: Mapping[str, Project]) -> bool:
    project = projects.get(assignment.project_id)
    return project is not None and project.is_paused


def _matches_resource(
    assignment: Assignment, kind: ResourceKind, resource_id: str
) -> bool:
    if kind == "worker":
        return assignment.worker_id == resource_id
    return assignment.vehicle_id == resource_id


def _conflicts_for_range(
    kind: ResourceKind,
    resource_id: str,
    start: date,
    end: date,
    all_assignments: Sequence[Assignment],
    projects: Mapping[str, Project],
    exclude_assignment_id: Optional[str],
    ignore_paused: bool,
) -> list[Assignment]:
    out: list[Assignment] = []
    for other in all_assignments:
        if exclude_assignment_id is not None and other.id == exclude_assignment_id:
            continue
        if not _matches_resource(other, kind, resource_id):
            continue
        if ignore_paused and _on_paused_project(other, projects):
            continue
        if ranges_overlap(start, end, other.start_date, other.end_date):
            out.append(other)
    return out


def find_conflicts(
    assignment: Assignment,
    all_assignments: Iterable[Assignment],
    projects: Iterable[Project] | Mapping[str, Project] | None = None,
    *,
    ignore_paused: bool = True,
) -> list[Assignment]:
    """
    Other bookings of the same worker/vehicle whose dates overlap `assignment`.

    The assignment itself (matched by id) is never reported. Bookings on
    paused projects are skipped unless `ignore_paused` is False.
    """
    kind, resource_id = assignment.resource_key
    return _conflicts_for_range(
        kind,  # type: ignore[arg-type]
        resource_id,
        assignment.start_date,
        assignment.end_date,
        list(all_assignments),
        _project_index(projects),
        exclude_assignment_id=assignment.id,
        ignore_paused=ignore_paused,
    )


def resource_availability(
    resource_ids: Iterable[str],
    kind: ResourceKind,
    start: date | str,
    end: date | str,
    all_assignments: Iterable[Assignment],
    projects: Iterable[Project] | Mapping[str, Project] | None = None,
    *,
    exclude_assignment_id: Optional[str] = None,
    ignore_paused: bool = True,
) -> list[ResourceAvailability]:
    """
    For a proposed booking window, report which resources are already busy.

    Used when picking a worker or vehicle for a new (or edited) assignment;
    pass the edited assignment's id as `exclude_assignment_id`.
    """
    if kind not in ("worker", "vehicle"):
        raise ValueError("kind must be 'worker' or 'vehicle'")
    start_d = to_date(start, "start")
    end_d = to_date(end, "end")
    if end_d < start_d:
        raise ValueError(f"end {end_d} is before start {start_d}.")

    assignments = list(all_assignments)
    index = _project_index(projects)
    return [
        ResourceAvailability(
            resource_id=str(rid),
            kind=kind,
            conflicts=_conflicts_for_range(
                kind,
                str(rid),
                start_d,
                end_d,
                assignments,
                index,
                exclude_assignment_id=exclude_assignment_id,
                ignore_paused=ignore_paused,
            ),
        )
        for rid in resource_ids
    ]


def check_assignment_in_project(assignment: Assignment, project: Project) -> None:
    if (
        assignment.start_date < project.start_date
        or assignment.end_date > project.end_date
    ):
        raise AssignmentOutOfRangeError(assignment, project)
