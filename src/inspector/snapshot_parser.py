"""Snapshot parsing — turns raw tool response text into snapshot models.

A missing JSON payload is fatal (``ExtractionError``); every individual
field is coerced to a safe default instead of failing the whole snapshot.
"""

from __future__ import annotations

import json
import logging
import math
import re
from typing import Any, Optional

from src.models.inspection import (
    ButtonSummary,
    ConsoleSummary,
    DomSnapshot,
    FormFieldSummary,
    FormSummary,
    HeadingSummary,
    LinkSummary,
)

logger = logging.getLogger(__name__)

CONSOLE_MARKER = "## Console messages"
NO_MESSAGES_PLACEHOLDER = "<no console messages found>"
MAX_LINKS = 50

_JSON_FENCE = re.compile(r"```json\s*(.*?)```", re.DOTALL)
_MARKDOWN_HEADING = re.compile(r"^#{1,6}\s")

# Checked in order, first match wins; anything else is a plain log line.
CONSOLE_PREFIXES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("error>", "exception>"), "errors"),
    (("warning>",), "warnings"),
    (("info>",), "info"),
)


class ExtractionError(ValueError):
    """Raised when a script response carries no fenced JSON payload."""


def extract_json_payload(text: str) -> Any:
    """Return the decoded content of the first ```json fenced block.

    Raises ExtractionError when no block exists; json.JSONDecodeError from a
    malformed block is left to propagate.
    """
    match = _JSON_FENCE.search(text or "")
    if not match:
        raise ExtractionError("Unable to find JSON payload in evaluate_script response.")
    return json.loads(match.group(1))


def to_string_or_none(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, bool):
        text = "true" if value else "false"
    elif isinstance(value, float) and math.isfinite(value) and value.is_integer():
        text = str(int(value))
    else:
        text = str(value).strip()
    return text or None


def _as_dict(raw: Any) -> dict:
    return raw if isinstance(raw, dict) else {}


def _as_list(raw: Any) -> list:
    return raw if isinstance(raw, list) else []


def _count(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    if not math.isfinite(value):
        return 0
    return max(int(value), 0)


def map_button(raw: Any) -> ButtonSummary:
    raw = _as_dict(raw)
    classes = [c for c in (to_string_or_none(item) for item in _as_list(raw.get("classes"))) if c]
    return ButtonSummary(
        text=to_string_or_none(raw.get("text")),
        type=to_string_or_none(raw.get("type")) or "button",
        role=to_string_or_none(raw.get("role")) or "button",
        classes=classes,
        data_test_id=to_string_or_none(raw.get("dataTestId")),
    )


def map_form_field(raw: Any) -> FormFieldSummary:
    raw = _as_dict(raw)
    placeholder = to_string_or_none(raw.get("placeholder"))
    return FormFieldSummary(
        name=to_string_or_none(raw.get("name")),
        type=to_string_or_none(raw.get("type")) or "input",
        required=bool(raw.get("required")),
        label=to_string_or_none(raw.get("label")) or placeholder,
        placeholder=placeholder,
    )


def map_form(raw: Any) -> FormSummary:
    raw = _as_dict(raw)
    return FormSummary(
        id=to_string_or_none(raw.get("id")),
        name=to_string_or_none(raw.get("name")),
        action=to_string_or_none(raw.get("action")),
        method=(to_string_or_none(raw.get("method")) or "get").lower(),
        textual_context=to_string_or_none(raw.get("textualContext")),
        fields=[map_form_field(f) for f in _as_list(raw.get("fields"))],
        buttons=[map_button(b) for b in _as_list(raw.get("buttons"))],
    )


def map_heading(raw: Any) -> HeadingSummary:
    raw = _as_dict(raw)
    return HeadingSummary(
        level=to_string_or_none(raw.get("level")) or "h1",
        text=to_string_or_none(raw.get("text")) or "",
    )


def map_link(raw: Any) -> LinkSummary:
    raw = _as_dict(raw)
    return LinkSummary(
        text=to_string_or_none(raw.get("text")),
        href=to_string_or_none(raw.get("href")) or "",
    )


def parse_dom_snapshot(text: str) -> DomSnapshot:
    """Parse an evaluate_script response into a DomSnapshot."""
    payload = _as_dict(extract_json_payload(text))

    primary_buttons = [map_button(b) for b in _as_list(payload.get("primaryButtons"))]
    interactive_elements = [map_button(b) for b in _as_list(payload.get("interactiveElements"))]
    for button in primary_buttons:
        if button not in interactive_elements:
            interactive_elements.append(button)

    data_test_ids: list[str] = []
    for item in _as_list(payload.get("dataTestIds")):
        test_id = to_string_or_none(item)
        if test_id and test_id not in data_test_ids:
            data_test_ids.append(test_id)

    dom = DomSnapshot(
        title=to_string_or_none(payload.get("title")) or "Untitled",
        meta_description=to_string_or_none(payload.get("metaDescription")),
        headings=[map_heading(h) for h in _as_list(payload.get("headings"))],
        forms=[map_form(f) for f in _as_list(payload.get("forms"))],
        primary_buttons=primary_buttons,
        interactive_elements=interactive_elements,
        links=[map_link(link) for link in _as_list(payload.get("links"))[:MAX_LINKS]],
        images_missing_alt=_count(payload.get("imagesMissingAlt")),
        data_test_ids=data_test_ids,
    )
    logger.debug(
        "Parsed DOM snapshot '%s': %d forms, %d interactive elements, %d links",
        dom.title, len(dom.forms), len(dom.interactive_elements), len(dom.links),
    )
    return dom


def parse_console_section(text: str) -> list[str]:
    """Return the trimmed, non-blank lines under the console messages heading."""
    lines = (text or "").splitlines()
    try:
        start = next(i for i, line in enumerate(lines) if line.strip() == CONSOLE_MARKER)
    except StopIteration:
        logger.debug("No console section found in tool response")
        return []

    messages = []
    for line in lines[start + 1:]:
        if _MARKDOWN_HEADING.match(line):
            break
        line = line.strip()
        if line:
            messages.append(line)
    return messages


def classify_console_message(message: str) -> str:
    """Return the ConsoleSummary bucket name for one message line."""
    normalized = message.lower()
    for prefixes, bucket in CONSOLE_PREFIXES:
        if normalized.startswith(prefixes):
            return bucket
    return "logs"


def parse_console_summary(text: str) -> ConsoleSummary:
    """Parse a list_console_messages response into severity buckets."""
    buckets: dict[str, list[str]] = {"errors": [], "warnings": [], "info": [], "logs": []}
    for message in parse_console_section(text):
        if message.lower() == NO_MESSAGES_PLACEHOLDER:
            continue
        buckets[classify_console_message(message)].append(message)

    logger.debug(
        "Console summary: %d errors, %d warnings, %d info, %d logs",
        len(buckets["errors"]), len(buckets["warnings"]),
        len(buckets["info"]), len(buckets["logs"]),
    )
    return ConsoleSummary(**buckets)
