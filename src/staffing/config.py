from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass
class Config:

    ### DISPLAY ###

    # strftime format for dates in report lines; None = Czech short style (3.2.25)
    DATE_FORMAT: Optional[str] = None

    # Rows printed per table in the text report
    NUM_PRINT_EXAMPLES: int = 10

    ### CONFLICTS ###

    # Bookings on paused projects do not block a worker or vehicle
    IGNORE_PAUSED_PROJECTS: bool = True

    ### OUTPUT ###

    OUTPUT_DIR: Path = Path("outputs")
    ENABLE_PLOTS: bool = True
    WRITE_REPORT_FILE: bool = True

    def __post_init__(self) -> None:
        self.OUTPUT_DIR = Path(self.OUTPUT_DIR)

    def validate(self):
        """
        Validate the Config object has sensible values before reporting.
        """
        if self.DATE_FORMAT is not None and not self.DATE_FORMAT.strip():
            raise ValueError("DATE_FORMAT must be a non-empty strftime format.")
        if self.NUM_PRINT_EXAMPLES <= 0:
            raise ValueError("NUM_PRINT_EXAMPLES must be > 0.")
        if not str(self.OUTPUT_DIR).strip():
            raise ValueError("OUTPUT_DIR must not be empty.")


cfg = Config()
