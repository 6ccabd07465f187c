from .config import Config, cfg
from .coverage import CoverageResult, CoverageStatus, TierCoverage, compute_coverage
from .input_data import InputData, input_from_json
from .main import run_report
from .requirements import StaffingRequirement, merge_requirements
from .seniority import Seniority

__all__ = [
    "Config",
    "cfg",
    "CoverageResult",
    "CoverageStatus",
    "TierCoverage",
    "compute_coverage",
    "InputData",
    "input_from_json",
    "run_report",
    "StaffingRequirement",
    "merge_requirements",
    "Seniority",
]
