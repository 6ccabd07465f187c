from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Optional

from staffing.requirements import (
    RequirementLike,
    StaffingRequirement,
    merge_requirements,
    total_required,
)


class ProjectStatus(str, Enum):
    PREPARING = "preparing"
    IN_PROGRESS = "in_progress"
    PAUSED = "paused"
    COMPLETED = "completed"

    def __str__(self) -> str:
        return self.value


def to_date(value: Any, field_name: str = "date") -> date:
    """Accept date, datetime or ISO string; return a plain date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.strip()).date()
        except ValueError as exc:
            raise ValueError(f"Invalid date string for '{field_name}': {value!r}") from exc
    raise TypeError(
        f"'{field_name}' must be an ISO string or date/datetime, got {type(value)!r}"
    )


@dataclass
class Project:
    id: str
    name: str
    start_date: date
    end_date: date
    status: ProjectStatus = ProjectStatus.PREPARING
    required_workers: list[StaffingRequirement] = field(default_factory=list)
    required_vehicles: int = 0
    project_number: str = ""

    def __post_init__(self) -> None:
        self.id = str(self.id)
        self.status = ProjectStatus(self.status)
        self.start_date = to_date(self.start_date, "start_date")
        self.end_date = to_date(self.end_date, "end_date")
        if self.end_date < self.start_date:
            raise ValueError(
                f"Project {self.id}: end_date {self.end_date} is before "
                f"start_date {self.start_date}."
            )
        raw: list[RequirementLike] = list(self.required_workers or [])
        self.required_workers = merge_requirements(raw)
        self.required_vehicles = max(0, int(self.required_vehicles or 0))

    @property
    def total_required_workers(self) -> int:
        return total_required(self.required_workers)

    @property
    def is_paused(self) -> bool:
        return self.status == ProjectStatus.PAUSED


@dataclass
class Assignment:
    """A worker or a vehicle booked on a project for an inclusive date range."""

    id: str
    project_id: str
    start_date: date
    end_date: date
    worker_id: Optional[str] = None
    vehicle_id: Optional[str] = None
    role: str = ""
    hourly_rate: Optional[float] = None
    notes: str = ""

    def __post_init__(self) -> None:
        self.id = str(self.id)
        self.project_id = str(self.project_id)
        self.worker_id = str(self.worker_id) if self.worker_id else None
        self.vehicle_id = str(self.vehicle_id) if self.vehicle_id else None
        if (self.worker_id is None) == (self.vehicle_id is None):
            raise ValueError(
                f"Assignment {self.id} must reference exactly one of worker_id "
                "or vehicle_id."
            )
        self.start_date = to_date(self.start_date, "start_date")
        self.end_date = to_date(self.end_date, "end_date")
        if self.end_date < self.start_date:
            raise ValueError(
                f"Assignment {self.id}: end_date {self.end_date} is before "
                f"start_date {self.start_date}."
            )

    @property
    def resource_key(self) -> tuple[str, str]:
        if self.worker_id is not None:
            return ("worker", self.worker_id)
        return ("vehicle", str(self.vehicle_id))
