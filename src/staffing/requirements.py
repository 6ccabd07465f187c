from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Mapping

from staffing.seniority import Seniority, normalize_seniority


@dataclass(frozen=True)
class StaffingRequirement:
    """How many workers of one seniority tier a project needs."""

    seniority: Seniority
    count: int

    def __post_init__(self) -> None:
        tier = normalize_seniority(self.seniority)
        if tier is None:
            raise ValueError("StaffingRequirement needs a seniority tier.")
        if isinstance(self.count, bool) or not isinstance(self.count, int):
            raise TypeError(
                f"Requirement count must be an int, got {type(self.count)!r}"
            )
        object.__setattr__(self, "seniority", tier)
        # negative counts are treated as "nothing required"
        object.__setattr__(self, "count", max(0, self.count))

    def to_dict(self) -> dict[str, Any]:
        return {"seniority": self.seniority.value, "count": self.count}


RequirementLike = StaffingRequirement | Mapping[str, Any]


def as_requirement(item: RequirementLike) -> StaffingRequirement:
    if isinstance(item, StaffingRequirement):
        return item
    if isinstance(item, Mapping):
        if "seniority" not in item:
            raise ValueError(f"Requirement entry missing 'seniority': {item!r}")
        return StaffingRequirement(
            seniority=item["seniority"],
            count=item.get("count", 0),
        )
    raise TypeError(
        "Requirements must be StaffingRequirement instances or mappings; "
        f"got {type(item)!r}"
    )


def merge_requirements(
    requirements: Iterable[RequirementLike] | None,
) -> list[StaffingRequirement]:
    """Sum duplicate tiers into one entry each, keeping first-seen order."""
    merged: dict[Seniority, int] = {}
    for item in requirements or []:
        req = as_requirement(item)
        merged[req.seniority] = merged.get(req.seniority, 0) + req.count
    return [StaffingRequirement(seniority=s, count=c) for s, c in merged.items()]


def requirements_from_records(
    records: Iterable[Mapping[str, Any]] | None,
) -> list[StaffingRequirement]:
    """Build merged requirements from stored `{seniority, count}` records."""
    out: list[StaffingRequirement] = []
    for raw in records or []:
        if not isinstance(raw, Mapping):
            raise TypeError("Each required-worker entry must be an object/dict.")
        count = raw.get("count", 0)
        try:
            count = int(count)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Invalid requirement count: {count!r}") from exc
        out.append(StaffingRequirement(seniority=raw.get("seniority"), count=count))
    return merge_requirements(out)


def total_required(requirements: Iterable[RequirementLike] | None) -> int:
    return sum(as_requirement(r).count for r in requirements or [])


def format_requirements(requirements: Iterable[RequirementLike] | None) -> str:
    """Short summary such as '2x senior, 1x junior' ('N/A' when empty)."""
    parts = [f"{r.count}x {r.seniority.value}" for r in merge_requirements(requirements)]
    return ", ".join(parts) if parts else "N/A"
