"""Write the run summary as YAML."""

from __future__ import annotations

from typing import TYPE_CHECKING

import yaml

if TYPE_CHECKING:
    from pathlib import Path

    from smartcopy.types import RunSummary


def write_report(summary: RunSummary, report_path: Path) -> None:
    """Atomically write ``summary`` to ``report_path``."""
    report_path.parent.mkdir(parents=True, exist_ok=True)

    content = yaml.safe_dump(summary.model_dump(mode="json"), sort_keys=True)

    # Write to temp file then atomic rename so a crash never leaves half a report
    tmp_path = report_path.with_name(report_path.name + ".tmp")
    tmp_path.write_text(content, encoding="utf-8")
    tmp_path.replace(report_path)
