"""Tests for the YAML run report."""

from __future__ import annotations

from typing import TYPE_CHECKING

import yaml

from smartcopy.copying.report import write_report
from smartcopy.types import CopyOutcome, CopyStatus, RunSummary

if TYPE_CHECKING:
    from pathlib import Path


class TestWriteReport:
    def test_writes_summary_fields(self, tmp_path: Path) -> None:
        summary = RunSummary(copied=3, failed=1, cycles=["/src/a/loop"])
        report_path = tmp_path / "reports" / "run.yaml"

        write_report(summary, report_path)

        data = yaml.safe_load(report_path.read_text(encoding="utf-8"))
        assert data["copied"] == 3
        assert data["failed"] == 1
        assert data["cycles"] == ["/src/a/loop"]
        assert data["skipped_up_to_date"] == 0

    def test_leaves_no_temp_file(self, tmp_path: Path) -> None:
        write_report(RunSummary(), tmp_path / "run.yaml")
        assert [p.name for p in tmp_path.iterdir()] == ["run.yaml"]

    def test_overwrites_previous_report(self, tmp_path: Path) -> None:
        report_path = tmp_path / "run.yaml"
        write_report(RunSummary(copied=1), report_path)
        write_report(RunSummary(copied=7), report_path)
        assert yaml.safe_load(report_path.read_text(encoding="utf-8"))["copied"] == 7


class TestRunSummary:
    def test_record_counts_by_status(self, tmp_path: Path) -> None:
        summary = RunSummary()
        for status in (CopyStatus.COPIED, CopyStatus.COPIED, CopyStatus.FAILED, CopyStatus.SKIPPED_USER_DECLINED):
            summary.record(CopyOutcome(status=status, source=tmp_path, target=tmp_path))

        assert summary.copied == 2
        assert summary.failed == 1
        assert summary.skipped_user_declined == 1
        assert summary.skipped_up_to_date == 0
