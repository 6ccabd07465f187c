from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from staffing.seniority import Seniority, normalize_seniority


@dataclass(slots=True)
class Worker:
    """
    An installer ("montážník") as far as staffing is concerned.

    Workers with no recorded seniority can still be assigned to projects, but
    they do not fill any seniority slot.
    """

    id: str
    first_name: str = ""
    last_name: str = ""
    seniority: Optional[Seniority] = None
    hourly_rate: Optional[float] = None

    def __post_init__(self) -> None:
        self.id = str(self.id)
        self.first_name = (self.first_name or "").strip()
        self.last_name = (self.last_name or "").strip()
        self.seniority = normalize_seniority(self.seniority)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def initials(self) -> str:
        initials = f"{self.first_name[:1]}{self.last_name[:1]}".upper()
        return initials or "??"

    def __repr__(self) -> str:
        tier = self.seniority.value if self.seniority is not None else "-"
        return f"Worker(id='{self.id}', name='{self.full_name}', seniority={tier})"


@dataclass(slots=True)
class Vehicle:
    id: str
    brand_model: str = ""
    license_plate: str = ""

    def __post_init__(self) -> None:
        self.id = str(self.id)

    @property
    def display_name(self) -> str:
        if self.license_plate:
            return f"{self.brand_model} ({self.license_plate})"
        return self.brand_model
