"""Playwright-backed tool executor — answers browser tool calls with text responses."""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

from playwright.async_api import Browser, Page, Playwright, async_playwright
from playwright.async_api import Error as PlaywrightError

from src.models.config import BrowserConfig

from .types import ToolCallResult, ToolContent, ToolError, tool_text_content

logger = logging.getLogger(__name__)

NO_CONSOLE_MESSAGES = "<no console messages found>"


class PlaywrightToolExecutor:
    """Runs navigate/evaluate/console tools against a single Chromium page.

    Responses are rendered as Markdown-ish text in the same shape a browser
    tool server would return, so the snapshot parser stays transport-agnostic.
    """

    def __init__(self, config: BrowserConfig | None = None):
        self.config = config or BrowserConfig()
        self._playwright: Playwright | None = None
        self._browser: Browser | None = None
        self._page: Page | None = None
        self.console_messages: list[str] = []

    async def __aenter__(self) -> "PlaywrightToolExecutor":
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    @property
    def connected(self) -> bool:
        return self._page is not None

    async def connect(self) -> None:
        if self.connected:
            return
        logger.debug("Launching Chromium (headless=%s)", self.config.headless)
        self._playwright = await async_playwright().start()
        self._browser = await self._playwright.chromium.launch(headless=self.config.headless)
        context = await self._browser.new_context(
            viewport=self.config.viewport.model_dump(),
            user_agent=self.config.user_agent,
        )
        self._page = await context.new_page()
        self.attach_listeners(self._page)

    def attach_listeners(self, page: Page) -> None:
        """Record console output and uncaught page errors as tagged lines."""
        page.on("console", lambda msg: self._record(msg.type.capitalize(), msg.text))
        page.on("pageerror", lambda err: self._record("Error", str(err)))

    def _record(self, severity: str, text: str) -> None:
        # The console listing is parsed one message per line.
        flattened = " ".join(part.strip() for part in text.splitlines() if part.strip())
        self.console_messages.append(f"{severity}> {flattened}")

    async def close(self) -> None:
        if self._browser:
            await self._browser.close()
            self._browser = None
        if self._playwright:
            await self._playwright.stop()
            self._playwright = None
        self._page = None

    async def call_tool(
        self, name: str, args: Optional[dict[str, Any]] = None
    ) -> ToolCallResult:
        if self._page is None:
            raise ToolError("PlaywrightToolExecutor is not connected. Call connect() first.")

        args = args or {}
        logger.debug("Calling tool %s", name)
        result = await self._dispatch(self._page, name, args)
        if result.is_error:
            raise ToolError(result.text or f"Tool {name} reported an error.")
        return result

    async def _dispatch(self, page: Page, name: str, args: dict[str, Any]) -> ToolCallResult:
        try:
            if name == "navigate_page":
                return await self._navigate(page, args)
            if name == "evaluate_script":
                return await self._evaluate(page, args)
            if name == "list_console_messages":
                return self._list_console_messages()
        except PlaywrightError as e:
            logger.warning("Tool %s failed: %s", name, e)
            return _text_result(name, f"# {name} response\n{e}", is_error=True)
        return _text_result(name, f"Unknown tool: {name}", is_error=True)

    async def _navigate(self, page: Page, args: dict[str, Any]) -> ToolCallResult:
        url = args.get("url")
        if not url:
            return _text_result("navigate_page", "navigate_page requires a url", is_error=True)
        self.console_messages.clear()
        await page.goto(url, timeout=args.get("timeout", 60_000), wait_until="load")
        return _text_result("navigate_page", f"# navigate_page response\nNavigated to {url}.")

    async def _evaluate(self, page: Page, args: dict[str, Any]) -> ToolCallResult:
        function = args.get("function")
        if not function:
            return _text_result("evaluate_script", "evaluate_script requires a function", is_error=True)
        value = await page.evaluate(function)
        text = (
            "# evaluate_script response\n"
            "Script ran on page and returned:\n"
            f"```json\n{json.dumps(value, indent=2)}\n```"
        )
        result = _text_result("evaluate_script", text)
        result.structured_content = value
        return result

    def _list_console_messages(self) -> ToolCallResult:
        lines = self.console_messages or [NO_CONSOLE_MESSAGES]
        text = "# list_console_messages response\n## Console messages\n" + "\n".join(lines)
        return _text_result("list_console_messages", text)


def _text_result(name: str, text: str, is_error: bool = False) -> ToolCallResult:
    content = [ToolContent(type="text", text=text)]
    return ToolCallResult(
        name=name,
        text=tool_text_content(content),
        is_error=is_error,
        content=content,
    )
