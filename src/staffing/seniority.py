from __future__ import annotations

from enum import Enum
from typing import Optional


class Seniority(str, Enum):
    """Worker seniority tiers, listed from lowest to highest."""

    JUNIOR = "junior"
    MEDIOR = "medior"
    SENIOR = "senior"
    SPECIALISTA = "specialista"

    def __str__(self) -> str:
        return self.value


SENIORITY_HIERARCHY: tuple[Seniority, ...] = (
    Seniority.JUNIOR,
    Seniority.MEDIOR,
    Seniority.SENIOR,
    Seniority.SPECIALISTA,
)

# senior and specialista share the top level
EFFECTIVE_LEVELS: dict[Seniority, int] = {
    Seniority.JUNIOR: 0,
    Seniority.MEDIOR: 1,
    Seniority.SENIOR: 2,
    Seniority.SPECIALISTA: 2,
}
EFFECTIVE_LEVEL_COUNT = 3
TOP_LEVEL = EFFECTIVE_LEVEL_COUNT - 1

SENIORITY_LABELS: dict[Seniority, str] = {
    Seniority.JUNIOR: "Junior",
    Seniority.MEDIOR: "Medior",
    Seniority.SENIOR: "Senior",
    Seniority.SPECIALISTA: "Specialista",
}

# Older project records stored these spellings for the top tier.
LEGACY_ALIASES: dict[str, Seniority] = {
    "specialist": Seniority.SPECIALISTA,
    "expert": Seniority.SPECIALISTA,
}


def normalize_seniority(value: object) -> Optional[Seniority]:
    """
    Coerce a raw seniority value into a `Seniority` member.

    `None` and blank strings mean "not recorded" and return None. Strings are
    matched case-insensitively and legacy aliases are resolved. Anything else
    raises ValueError (unknown tier) or TypeError (wrong type).
    """
    if value is None:
        return None
    if isinstance(value, Seniority):
        return value
    if not isinstance(value, str):
        raise TypeError(f"Seniority must be a string, got {type(value)!r}")

    key = value.strip().lower()
    if not key:
        return None
    if key in LEGACY_ALIASES:
        return LEGACY_ALIASES[key]
    try:
        return Seniority(key)
    except ValueError as exc:
        raise ValueError(f"Unknown seniority tier: {value!r}") from exc


def effective_level(seniority: Seniority) -> int:
    return EFFECTIVE_LEVELS[seniority]


def seniority_label(seniority: Seniority | str) -> str:
    tier = normalize_seniority(seniority)
    if tier is None:
        return ""
    return SENIORITY_LABELS[tier]
