"""Application inspector — drives the tool executor and builds a snapshot."""

from __future__ import annotations

import logging
import time
from datetime import datetime, timezone

from src.models.inspection import InspectionSnapshot
from src.tools.types import ToolExecutor

from .dom_script import DOM_EXTRACTION_FUNCTION
from .snapshot_parser import parse_console_summary, parse_dom_snapshot

logger = logging.getLogger(__name__)

DEFAULT_NAVIGATION_TIMEOUT_MS = 60_000


class ApplicationInspector:
    """Captures DOM and console state of one page through browser tools."""

    def __init__(self, tools: ToolExecutor, navigation_timeout_ms: int = DEFAULT_NAVIGATION_TIMEOUT_MS):
        self.tools = tools
        self.navigation_timeout_ms = navigation_timeout_ms

    async def inspect(self, url: str) -> InspectionSnapshot:
        start = time.time()
        logger.info("Inspecting %s", url)
        await self.tools.call_tool(
            "navigate_page", {"url": url, "timeout": self.navigation_timeout_ms}
        )
        dom_result = await self.tools.call_tool(
            "evaluate_script", {"function": DOM_EXTRACTION_FUNCTION}
        )
        console_result = await self.tools.call_tool("list_console_messages")

        snapshot = InspectionSnapshot(
            url=url,
            captured_at=datetime.now(timezone.utc).isoformat(),
            dom=parse_dom_snapshot(dom_result.text),
            console=parse_console_summary(console_result.text),
        )
        logger.info("Inspection of %s complete in %.1fs", url, time.time() - start)
        return snapshot
