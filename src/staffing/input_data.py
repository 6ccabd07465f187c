from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Sequence

from staffing.projects import Assignment, Project
from staffing.requirements import requirements_from_records
from staffing.workers import Vehicle, Worker

DEFAULT_INPUT_JSON = Path(__file__).resolve().parents[1] / "example_data.json"


@dataclass
class InputData:
    projects: list[Project] = field(default_factory=list)
    workers: list[Worker] = field(default_factory=list)
    vehicles: list[Vehicle] = field(default_factory=list)
    assignments: list[Assignment] = field(default_factory=list)

    def __post_init__(self) -> None:
        self._projects_by_id = {p.id: p for p in self.projects}
        self._workers_by_id = {w.id: w for w in self.workers}
        self._vehicles_by_id = {v.id: v for v in self.vehicles}

    def project(self, project_id: str) -> Project | None:
        return self._projects_by_id.get(str(project_id))

    def worker(self, worker_id: str) -> Worker | None:
        return self._workers_by_id.get(str(worker_id))

    def vehicle(self, vehicle_id: str) -> Vehicle | None:
        return self._vehicles_by_id.get(str(vehicle_id))

    @property
    def projects_by_id(self) -> dict[str, Project]:
        return dict(self._projects_by_id)

    def assignments_for_project(self, project_id: str) -> list[Assignment]:
        return [a for a in self.assignments if a.project_id == str(project_id)]

    def workers_for_project(self, project_id: str) -> list[Worker]:
        """Workers booked on the project; bookings of unknown workers are dropped."""
        out: list[Worker] = []
        for a in self.assignments_for_project(project_id):
            if a.worker_id is None:
                continue
            worker = self.worker(a.worker_id)
            if worker is not None:
                out.append(worker)
        return out

    def vehicles_for_project(self, project_id: str) -> list[Vehicle]:
        out: list[Vehicle] = []
        for a in self.assignments_for_project(project_id):
            if a.vehicle_id is None:
                continue
            vehicle = self.vehicle(a.vehicle_id)
            if vehicle is not None:
                out.append(vehicle)
        return out


def input_from_json(path: str | Path | None = None) -> InputData:
    """
    Load projects, workers, vehicles and assignments from a JSON file.

    If `path` is omitted, the loader reads from `src/example_data.json`. The
    document must be an object with any of the `projects`, `workers`,
    `vehicles` and `assignments` arrays; missing arrays are treated as empty.
    """
    file_path = Path(path) if path is not None else DEFAULT_INPUT_JSON
    file_path = file_path.expanduser()

    if file_path.suffix.lower() != ".json":
        raise ValueError("input_from_json expects a path to a .json file.")
    if not file_path.exists():
        raise FileNotFoundError(f"Input JSON file not found: {file_path}")

    try:
        data = json.loads(file_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {file_path}") from exc

    if not isinstance(data, Mapping):
        raise TypeError("JSON file must contain an object at the top level.")

    return InputData(
        projects=[_project(raw) for raw in _entries(data, "projects")],
        workers=[_worker(raw) for raw in _entries(data, "workers")],
        vehicles=[_vehicle(raw) for raw in _entries(data, "vehicles")],
        assignments=[_assignment(raw) for raw in _entries(data, "assignments")],
    )


def _entries(data: Mapping[str, Any], key: str) -> list[Mapping[str, Any]]:
    raw = data.get(key)
    if raw is None:
        return []
    if isinstance(raw, (str, bytes, bytearray)) or not isinstance(raw, Sequence):
        raise TypeError(f"'{key}' must be a list of objects.")
    for entry in raw:
        if not isinstance(entry, Mapping):
            raise TypeError(f"Each '{key}' entry must be an object/dict.")
    return list(raw)


def _require(raw: Mapping[str, Any], key: str, kind: str) -> Any:
    value = raw.get(key)
    if value in (None, ""):
        raise ValueError(f"{kind} entry missing '{key}'.")
    return value


def _optional_float(value: Any, key: str) -> float | None:
    if value in (None, ""):
        return None
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid number for '{key}': {value!r}") from exc


def _project(raw: Mapping[str, Any]) -> Project:
    return Project(
        id=_require(raw, "id", "Project"),
        name=str(raw.get("name", "")),
        status=raw.get("status") or "preparing",
        start_date=_require(raw, "start_date", "Project"),
        end_date=_require(raw, "end_date", "Project"),
        required_workers=requirements_from_records(raw.get("required_workers")),
        required_vehicles=int(raw.get("required_vehicles") or 0),
        project_number=str(raw.get("project_number", "")),
    )


def _worker(raw: Mapping[str, Any]) -> Worker:
    return Worker(
        id=_require(raw, "id", "Worker"),
        first_name=str(raw.get("first_name", "")),
        last_name=str(raw.get("last_name", "")),
        seniority=raw.get("seniority"),
        hourly_rate=_optional_float(raw.get("hourly_rate"), "hourly_rate"),
    )


def _vehicle(raw: Mapping[str, Any]) -> Vehicle:
    return Vehicle(
        id=_require(raw, "id", "Vehicle"),
        brand_model=str(raw.get("brand_model", "")),
        license_plate=str(raw.get("license_plate", "")),
    )


def _assignment(raw: Mapping[str, Any]) -> Assignment:
    return Assignment(
        id=_require(raw, "id", "Assignment"),
        project_id=_require(raw, "project_id", "Assignment"),
        start_date=_require(raw, "start_date", "Assignment"),
        end_date=_require(raw, "end_date", "Assignment"),
        worker_id=raw.get("worker_id"),
        vehicle_id=raw.get("vehicle_id"),
        role=str(raw.get("role") or ""),
        hourly_rate=_optional_float(raw.get("hourly_rate"), "hourly_rate"),
        notes=str(raw.get("notes") or ""),
    )
