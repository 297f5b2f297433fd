"""Pipeline orchestrator — coordinates inspect, plan, and report stages."""

from __future__ import annotations

import asyncio
import logging
import time
from pathlib import Path

from src.inspector.inspector import ApplicationInspector
from src.models.config import InspectorConfig
from src.models.inspection import InspectionSnapshot
from src.models.test_plan import TestPlan
from src.planner.planner import build_test_plan
from src.reporter.json_report import load_snapshot_json
from src.reporter.reporter import Reporter
from src.tools.playwright_executor import PlaywrightToolExecutor
from src.tools.types import ToolExecutor

logger = logging.getLogger(__name__)


class Orchestrator:
    """Coordinates the inspection → plan → report pipeline."""

    def __init__(self, config: InspectorConfig, tools: ToolExecutor | None = None):
        self.config = config
        self.tools = tools

    def run_full_pipeline(self, url: str | None = None) -> dict:
        """Inspect the page, build the plan, and write reports."""
        return asyncio.run(self._run_pipeline(url or self.config.target_url))

    async def _run_pipeline(self, url: str) -> dict:
        if not url:
            raise ValueError("No target URL given")
        start = time.time()
        logger.info("=== Starting test planning pipeline for %s ===", url)

        # Stage 1: Inspect
        logger.info("--- Stage 1: Inspect ---")
        stage_start = time.time()
        snapshot = await self._inspect(url)
        logger.info("--- Stage 1 complete: %d forms, %d console errors in %.1fs ---",
                    len(snapshot.dom.forms), len(snapshot.console.errors),
                    time.time() - stage_start)

        # Stage 2: Plan
        logger.info("--- Stage 2: Plan ---")
        plan = self._plan(snapshot)
        logger.info("--- Stage 2 complete: %d test cases generated ---",
                    len(plan.recommended_tests))

        # Stage 3: Report
        logger.info("--- Stage 3: Report ---")
        reports = self._report(plan, snapshot)

        duration = time.time() - start
        logger.info("=== Pipeline complete in %.1fs ===", duration)
        return {
            "snapshot": snapshot,
            "plan": plan,
            "reports": reports,
            "duration": round(duration, 2),
        }

    async def _inspect(self, url: str) -> InspectionSnapshot:
        if self.tools is not None:
            return await self._inspector(self.tools).inspect(url)

        executor = PlaywrightToolExecutor(self.config.browser)
        try:
            await executor.connect()
            return await self._inspector(executor).inspect(url)
        finally:
            try:
                await executor.close()
            except Exception as e:
                logger.debug("Ignoring executor close error: %s", e)

    def _inspector(self, tools: ToolExecutor) -> ApplicationInspector:
        return ApplicationInspector(tools, navigation_timeout_ms=self.config.navigation_timeout_ms)

    def run_inspect_only(self, url: str | None = None) -> InspectionSnapshot:
        """Run only the inspection stage."""
        return asyncio.run(self._inspect(url or self.config.target_url))

    def _plan(self, snapshot: InspectionSnapshot) -> TestPlan:
        return build_test_plan(snapshot)

    def run_plan_only(self, snapshot_path: str | Path) -> TestPlan:
        """Rebuild a plan from a previously saved snapshot."""
        snapshot = load_snapshot_json(snapshot_path)
        return self._plan(snapshot)

    def _report(self, plan: TestPlan, snapshot: InspectionSnapshot | None = None) -> dict[str, str]:
        reporter = Reporter(self.config)
        return reporter.generate_reports(
            plan, snapshot, output_dir=Path(self.config.report_output_dir)
        )
