from __future__ import annotations

from datetime import date

import pytest

from staffing.conflicts import (
    AssignmentOutOfRangeError,
    assignments_overlap,
    check_assignment_in_project,
    find_conflicts,
    resource_availability,
)
from staffing.projects import Assignment, Project


def _project(pid: str, status: str = "in_progress") -> Project:
    return Project(
        id=pid,
        name=f"Project {pid}",
        start_date=date(2025, 3, 1),
        end_date=date(2025, 3, 31),
        status=status,  # type: ignore[arg-type]
    )


def _booking(aid: str, pid: str, start: int, end: int, **resource: str) -> Assignment:
    return Assignment(
        id=aid,
        project_id=pid,
        start_date=date(2025, 3, start),
        end_date=date(2025, 3, end),
        **resource,
    )


def test_overlap_is_inclusive_on_whole_days() -> None:
    a = _booking("a", "p1", 1, 10, worker_id="w1")
    touching = _booking("b", "p2", 10, 12, worker_id="w1")
    after = _booking("c", "p2", 11, 12, worker_id="w1")

    assert assignments_overlap(a, touching)
    assert not assignments_overlap(a, after)


def test_find_conflicts_same_resource_only() -> None:
    target = _booking("a1", "p1", 1, 10, worker_id="w1")
    others = [
        target,
        _booking("a2", "p2", 5, 15, worker_id="w1"),
        _booking("a3", "p2", 5, 15, worker_id="w2"),
        _booking("a4", "p2", 5, 15, vehicle_id="w1"),
        _booking("a5", "p2", 20, 25, worker_id="w1"),
    ]
    conflicts = find_conflicts(target, others, [_project("p1"), _project("p2")])

    assert [c.id for c in conflicts] == ["a2"]


def test_find_conflicts_skips_paused_projects() -> None:
    target = _booking("a1", "p1", 1, 10, vehicle_id="v1")
    paused = _booking("a2", "p2", 1, 10, vehicle_id="v1")
    projects = [_project("p1"), _project("p2", status="paused")]

    assert find_conflicts(target, [paused], projects) == []
    assert find_conflicts(target, [paused], projects, ignore_paused=False) == [paused]


def test_resource_availability_for_new_booking() -> None:
    bookings = [
        _booking("a1", "p1", 1, 10, worker_id="w1"),
        _booking("a2", "p1", 20, 25, worker_id="w2"),
    ]
    result = resource_availability(
        ["w1", "w2", "w3"], "worker", "2025-03-05", "2025-03-08", bookings
    )

    assert [r.is_conflicting for r in result] == [True, False, False]
    assert result[0].conflicts[0].id == "a1"


def test_resource_availability_excludes_edited_assignment() -> None:
    bookings = [_booking("a1", "p1", 1, 10, worker_id="w1")]
    [avail] = resource_availability(
        ["w1"],
        "worker",
        date(2025, 3, 1),
        date(2025, 3, 12),
        bookings,
        exclude_assignment_id="a1",
    )
    assert not avail.is_conflicting


def test_resource_availability_validates_arguments() -> None:
    with pytest.raises(ValueError):
        resource_availability(["w1"], "crane", "2025-03-01", "2025-03-02", [])  # type: ignore[arg-type]
    with pytest.raises(ValueError):
        resource_availability(["w1"], "worker", "2025-03-02", "2025-03-01", [])


def test_assignment_must_lie_within_project() -> None:
    project = _project("p1")
    inside = _booking("a1", "p1", 1, 31, worker_id="w1")
    check_assignment_in_project(inside, project)

    outside = Assignment(
        "a2", "p1", date(2025, 2, 27), date(2025, 3, 3), worker_id="w1"
    )
    with pytest.raises(AssignmentOutOfRangeError) as excinfo:
        check_assignment_in_project(outside, project)
    assert isinstance(excinfo.value, ValueError)
    assert excinfo.value.project is project
