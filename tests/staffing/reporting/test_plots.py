from __future__ import annotations

from pathlib import Path

import matplotlib

matplotlib.use("Agg", force=True)
from staffing.config import Config
from staffing.input_data import input_from_json
from staffing.reporting.plots import show_coverage_chart
from staffing.reporting.summary import project_coverage_frame


def test_coverage_chart_saves(monkeypatch, example_json: Path) -> None:
    saved = {}

    def fake_save(fig, name, out_dir):
        saved["name"] = name
        saved["out_dir"] = out_dir

    monkeypatch.setattr("staffing.reporting.plots._save_and_show", fake_save)
    frame = project_coverage_frame(input_from_json(example_json))

    show_coverage_chart(Config(OUTPUT_DIR=Path("charts")), frame)
    assert saved["name"] == "coverage_by_project.png"
    assert saved["out_dir"] == Path("charts")


def test_coverage_chart_skipped_when_disabled(monkeypatch, example_json: Path) -> None:
    called = []
    monkeypatch.setattr(
        "staffing.reporting.plots._save_and_show", lambda *a: called.append(a)
    )
    frame = project_coverage_frame(input_from_json(example_json))

    show_coverage_chart(Config(), frame, enable_plot=False)
    show_coverage_chart(Config(), frame.iloc[0:0])
    assert called == []


def test_coverage_chart_writes_png(tmp_path: Path, example_json: Path) -> None:
    frame = project_coverage_frame(input_from_json(example_json))
    show_coverage_chart(Config(OUTPUT_DIR=tmp_path), frame)
    assert (tmp_path / "coverage_by_project.png").exists()
