from __future__ import annotations

from typing import Any

import pandas as pd

from staffing.input_data import InputData
from staffing.reporting.plots import show_coverage_chart
from staffing.reporting.summary import conflict_frame, project_coverage_frame
from staffing.reporting.text_report import (
    ReportDocument,
    render_text_report,
    set_active_report,
)


class Reporter:
    """High-level orchestrator: prints the report, exports tables and charts."""

    def __init__(self, cfg: Any, enable_plots: bool | None = None) -> None:
        """
        cfg must expose:
          - OUTPUT_DIR
          - NUM_PRINT_EXAMPLES / DATE_FORMAT / IGNORE_PAUSED_PROJECTS
        """
        self.cfg = cfg
        self.enable_plots = (
            bool(getattr(cfg, "ENABLE_PLOTS", True))
            if enable_plots is None
            else enable_plots
        )

    def render_text_report(self, data: InputData) -> None:
        """Public entry point for callers that want text reporting only."""
        render_text_report(self.cfg, data)

    def report(self, data: InputData) -> pd.DataFrame:
        """Render the text report, write CSV exports and (optionally) the chart."""
        out_dir = self.cfg.OUTPUT_DIR
        report_doc = None
        if getattr(self.cfg, "WRITE_REPORT_FILE", True):
            report_doc = ReportDocument(out_dir / "report.txt")
        set_active_report(report_doc)
        try:
            self.render_text_report(data)
        finally:
            set_active_report(None)
            if report_doc is not None:
                report_doc.write()

        ignore_paused = bool(getattr(self.cfg, "IGNORE_PAUSED_PROJECTS", True))
        frame = project_coverage_frame(data, ignore_paused=ignore_paused)
        out_dir.mkdir(parents=True, exist_ok=True)
        frame.to_csv(out_dir / "project_coverage.csv", index=False)
        conflict_frame(data, ignore_paused=ignore_paused).to_csv(
            out_dir / "conflicts.csv", index=False
        )

        show_coverage_chart(self.cfg, frame, enable_plot=self.enable_plots)
        return frame
