"""Pytest configuration and shared fixtures."""

import json
from unittest.mock import AsyncMock

import pytest
from playwright.async_api import Page

from src.models.config import InspectorConfig
from src.models.inspection import (
    ButtonSummary,
    ConsoleSummary,
    DomSnapshot,
    FormFieldSummary,
    FormSummary,
    HeadingSummary,
    InspectionSnapshot,
    LinkSummary,
)
from src.tools.types import ToolCallResult, ToolContent


# ============================================================================
# Raw Tool Response Fixtures
# ============================================================================


def script_response(payload) -> str:
    """Wrap a payload the way an evaluate_script tool response does."""
    return "\n".join([
        "# evaluate_script response",
        "Script ran on page and returned:",
        "```json",
        json.dumps(payload),
        "```",
        "## Pages",
        "0: https://demo.example [selected]",
    ])


def tool_result(name: str, text: str) -> ToolCallResult:
    return ToolCallResult(
        name=name,
        text=text,
        content=[ToolContent(type="text", text=text)],
    )


@pytest.fixture
def dom_payload() -> dict:
    """A raw in-page extraction payload."""
    return {
        "title": "Demo",
        "metaDescription": "Demo page",
        "headings": [{"level": "h1", "text": "Demo"}],
        "forms": [
            {
                "id": "login",
                "name": None,
                "action": "/session",
                "method": "POST",
                "textualContext": "  Sign in to your account  ",
                "fields": [
                    {"name": "email", "type": "email", "required": True, "label": "Email"},
                    {"name": "password", "type": "password", "required": 1, "label": None,
                     "placeholder": "Password"},
                ],
                "buttons": [
                    {"text": "Sign in", "type": "submit", "role": "button",
                     "classes": ["btn", "btn-primary"], "dataTestId": "login-submit"},
                ],
            }
        ],
        "primaryButtons": [
            {"text": "Get started", "type": "button", "role": "button",
             "classes": ["cta"], "dataTestId": "cta-btn"},
        ],
        "interactiveElements": [
            {"text": "Get started", "type": "button", "role": "button",
             "classes": ["cta"], "dataTestId": "cta-btn"},
            {"text": "Menu", "type": "button", "role": "button", "classes": [], "dataTestId": None},
        ],
        "links": [{"text": "Docs", "href": "https://demo.example/docs"}],
        "imagesMissingAlt": 1,
        "dataTestIds": ["cta-btn", "login-submit", "cta-btn", ""],
    }


@pytest.fixture
def console_text() -> str:
    return "\n".join([
        "# list_console_messages response",
        "## Console messages",
        "Error> main.js:10: ReferenceError: foo is not defined",
        "Warning> app.js:100: Deprecated API used",
        "Log> analytics.js:1: Event fired",
    ])


# ============================================================================
# Snapshot Fixtures
# ============================================================================


@pytest.fixture
def contact_form() -> FormSummary:
    return FormSummary(
        id="contact-form",
        name="Contact",
        action="/contact",
        method="post",
        textual_context="Contact our team",
        fields=[
            FormFieldSummary(name="email", type="email", required=True, label="Email address"),
            FormFieldSummary(name="message", type="textarea", required=True, label="Message"),
        ],
        buttons=[
            ButtonSummary(text="Send message", type="submit",
                          classes=["btn", "btn-primary"], data_test_id="submit-contact"),
        ],
    )


@pytest.fixture
def login_form() -> FormSummary:
    return FormSummary(
        id="login-form",
        action="/login",
        method="post",
        textual_context="Sign in to your account",
        fields=[
            FormFieldSummary(name="username", type="text", required=True, label="Username"),
            FormFieldSummary(name="password", type="password", required=True, label="Password"),
        ],
        buttons=[ButtonSummary(text="Sign in", type="submit", classes=["btn-primary"])],
    )


@pytest.fixture
def sample_snapshot(contact_form: FormSummary, login_form: FormSummary) -> InspectionSnapshot:
    """A realistic snapshot with forms, CTAs, and console noise."""
    get_started = ButtonSummary(
        text="Get started", classes=["btn", "btn-primary"], data_test_id="get-started"
    )
    return InspectionSnapshot(
        url="https://example.com",
        captured_at="2025-01-01T00:00:00.000Z",
        dom=DomSnapshot(
            title="Example App",
            meta_description="Example application for testing",
            headings=[
                HeadingSummary(level="h1", text="Welcome to Example App"),
                HeadingSummary(level="h2", text="Contact us"),
            ],
            forms=[contact_form, login_form],
            primary_buttons=[get_started],
            interactive_elements=[
                get_started,
                ButtonSummary(text="View pricing", classes=["btn-secondary"]),
            ],
            links=[
                LinkSummary(text="Pricing", href="https://example.com/pricing"),
                LinkSummary(text="Docs", href="https://example.com/docs"),
            ],
            images_missing_alt=2,
            data_test_ids=["submit-contact", "get-started"],
        ),
        console=ConsoleSummary(
            errors=["Error> main.js:10: ReferenceError: foo is not defined"],
            warnings=["Warning> app.js:100: Deprecated API used"],
        ),
    )


@pytest.fixture
def contact_only_snapshot(contact_form: FormSummary) -> InspectionSnapshot:
    """One contact form, clean console, no accessibility gaps."""
    return InspectionSnapshot(
        url="https://example.com/contact",
        captured_at="2025-01-01T00:00:00.000Z",
        dom=DomSnapshot(title="Contact", forms=[contact_form]),
    )


@pytest.fixture
def empty_snapshot() -> InspectionSnapshot:
    return InspectionSnapshot(url="https://example.com", captured_at="2025-01-01T00:00:00Z")


# ============================================================================
# Config / Browser Fixtures
# ============================================================================


@pytest.fixture
def inspector_config(tmp_path) -> InspectorConfig:
    return InspectorConfig(
        target_url="https://example.com",
        navigation_timeout_ms=5000,
        report_output_dir=str(tmp_path / "reports"),
    )


@pytest.fixture
def mock_page() -> AsyncMock:
    """Create a mock Playwright page."""
    page = AsyncMock(spec=Page)
    page.url = "https://example.com"
    page.goto = AsyncMock()
    page.evaluate = AsyncMock()
    return page


@pytest.fixture
def mock_tools(dom_payload, console_text) -> AsyncMock:
    """A tool executor answering the three inspection tools."""
    responses = {
        "navigate_page": tool_result("navigate_page", "Navigated."),
        "evaluate_script": tool_result("evaluate_script", script_response(dom_payload)),
        "list_console_messages": tool_result("list_console_messages", console_text),
    }
    tools = AsyncMock()
    tools.call_tool = AsyncMock(side_effect=lambda name, args=None: responses[name])
    return tools
