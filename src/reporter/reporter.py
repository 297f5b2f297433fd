"""Report generation orchestration."""

from __future__ import annotations

import logging
import time
from pathlib import Path

from src.models.config import InspectorConfig
from src.models.inspection import InspectionSnapshot
from src.models.test_plan import TestPlan
from src.utils.slugify import slugify

from .json_report import generate_json_report, generate_snapshot_json
from .markdown_report import render_test_plan

logger = logging.getLogger(__name__)


class Reporter:
    """Writes a test plan (and optionally its snapshot) to disk."""

    def __init__(self, config: InspectorConfig):
        self.config = config

    def generate_reports(
        self,
        plan: TestPlan,
        snapshot: InspectionSnapshot | None = None,
        output_dir: Path | None = None,
    ) -> dict[str, str]:
        """Generate all configured report formats. Returns format -> file path."""
        out_dir = output_dir or Path(self.config.report_output_dir)
        out_dir.mkdir(parents=True, exist_ok=True)
        stem = f"plan_{slugify(plan.application_title)}_{time.strftime('%Y%m%d_%H%M%S')}"
        generated = {}
        logger.debug("Report output directory: %s", out_dir)

        if "markdown" in self.config.report_formats:
            path = out_dir / f"{stem}.md"
            path.write_text(render_test_plan(plan), encoding="utf-8")
            generated["markdown"] = str(path)
            logger.info("Markdown report: %s", path)

        if "json" in self.config.report_formats:
            path = out_dir / f"{stem}.json"
            generate_json_report(plan, path)
            generated["json"] = str(path)
            logger.info("JSON report: %s", path)

        if snapshot is not None and self.config.save_snapshot:
            path = out_dir / f"{stem}.snapshot.json"
            generate_snapshot_json(snapshot, path)
            generated["snapshot"] = str(path)
            logger.info("Snapshot: %s", path)

        return generated
