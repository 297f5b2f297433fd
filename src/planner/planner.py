"""Heuristic test plan generation from an inspection snapshot.

Every function here is pure: the same snapshot always yields the same plan.
The order of checks and of emitted test cases is part of the output contract.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from src.models.inspection import (
    ButtonSummary,
    FormFieldSummary,
    FormSummary,
    InspectionSnapshot,
)
from src.models.test_plan import PlanNotes, TestCase, TestCaseRisk, TestPlan
from src.utils.slugify import create_unique_id

from .schema_validator import validate_test_plan

logger = logging.getLogger(__name__)

MAX_CTA_TESTS = 2
MAX_FORM_TESTS = 3
MAX_FIELD_STEPS = 6
MAX_RELATED_TEST_IDS = 5

# Keyword vocabularies (matched as lower-case substrings)
COMMERCE_RISK_KEYWORDS = ("payment", "checkout", "billing", "subscribe", "purchase", "confirm")
AUTH_RISK_KEYWORDS = ("sign in", "login", "password", "register", "profile")
AUTH_JOURNEY_KEYWORDS = ("login", "sign in", "account")
COMMERCE_JOURNEY_KEYWORDS = ("checkout", "cart", "payment", "billing", "pricing")
SEARCH_JOURNEY_KEYWORDS = ("search", "find")
SUBMIT_KEYWORDS = ("submit", "save", "continue", "sign in", "sign up")

AUTH_INSIGHT = "Authentication flow detected (login/sign-in elements present)."
COMMERCE_INSIGHT = "Commerce flow indicators found (checkout or payment wording)."
SEARCH_INSIGHT = "On-site search capability detected (search input present)."
NO_JOURNEY_INSIGHT = (
    "No specific business-critical journey detected; focus on core smoke coverage."
)


def has_keyword_match(target: Optional[str], keywords: Iterable[str]) -> bool:
    if not target:
        return False
    lower = target.lower()
    return any(keyword in lower for keyword in keywords)


def describe_form(form: FormSummary, index: int) -> str:
    """Human-readable name for a form: name, id, leading text, or its position."""
    if form.name:
        return form.name
    if form.id:
        return form.id
    if form.textual_context:
        return form.textual_context[:50]
    return f"Form {index + 1}"


def choose_risk(form: FormSummary) -> TestCaseRisk:
    """Commerce and auth wording force high risk; otherwise required fields decide."""
    button_text = " ".join(btn.text or "" for btn in form.buttons)
    text_blob = f"{form.textual_context or ''} {button_text}".lower()
    if has_keyword_match(text_blob, COMMERCE_RISK_KEYWORDS):
        return "high"
    if has_keyword_match(text_blob, AUTH_RISK_KEYWORDS):
        return "high"
    return "medium" if any(f.required for f in form.fields) else "low"


def field_label(field: FormFieldSummary) -> str:
    return field.label or field.placeholder or field.name or field.type


def build_field_step(field: FormFieldSummary) -> str:
    return f"Enter representative {field.type} data into '{field_label(field)}'."


def find_primary_heading(snapshot: InspectionSnapshot) -> Optional[str]:
    """Text of the first h1, else of the first heading of any level."""
    headings = snapshot.dom.headings
    heading = next((h for h in headings if h.level == "h1"), None)
    if heading is None and headings:
        heading = headings[0]
    return heading.text if heading and heading.text else None


def detect_journeys(snapshot: InspectionSnapshot) -> list[str]:
    """Independent journey checks in fixed order, with a smoke-focus fallback."""
    forms = snapshot.dom.forms
    journeys = []

    if any(
        any("password" in f.type for f in form.fields)
        or has_keyword_match(form.textual_context, AUTH_JOURNEY_KEYWORDS)
        for form in forms
    ):
        journeys.append(AUTH_INSIGHT)

    if any(
        has_keyword_match(form.textual_context, COMMERCE_JOURNEY_KEYWORDS) for form in forms
    ) or any(
        has_keyword_match(btn.text, COMMERCE_JOURNEY_KEYWORDS)
        for btn in snapshot.dom.primary_buttons
    ):
        journeys.append(COMMERCE_INSIGHT)

    if any(
        has_keyword_match(f.label, SEARCH_JOURNEY_KEYWORDS) or f.type == "search"
        for form in forms
        for f in form.fields
    ):
        journeys.append(SEARCH_INSIGHT)

    if not journeys:
        journeys.append(NO_JOURNEY_INSIGHT)
    return journeys


def _form_related_elements(form: FormSummary) -> list[str]:
    return [value for value in (form.id, form.name) if value]


def build_smoke_test(snapshot: InspectionSnapshot, used_ids: set[str]) -> TestCase:
    heading = find_primary_heading(snapshot)
    return TestCase(
        id=create_unique_id("smoke-page-load", used_ids),
        title="Smoke: primary content renders without console issues",
        type="functional",
        risk="medium",
        objective=f"Verify that {snapshot.dom.title} loads successfully and key content is visible.",
        steps=[
            f"Navigate to {snapshot.url}.",
            f"Verify heading '{heading}' is rendered within the viewport."
            if heading else "Verify key hero content is visible.",
            "Capture a screenshot for regression tracking.",
        ],
        assertions=[
            "Initial load completes without console errors.",
            f"Primary heading '{heading}' is displayed and readable."
            if heading else "Primary hero section is displayed.",
        ],
        related_elements=[heading] if heading else [],
    )


def build_cta_test(
    button: ButtonSummary, snapshot: InspectionSnapshot, used_ids: set[str]
) -> TestCase:
    label = button.text or "primary action"
    return TestCase(
        id=create_unique_id(f"cta-{label}", used_ids),
        title=f"CTA: {label} directs the user correctly",
        type="functional",
        risk="medium",
        objective=(
            f"Verify that the prominent '{label}' call-to-action on {snapshot.dom.title} "
            "leads to the expected workflow or page."
        ),
        steps=[
            f"Navigate to {snapshot.url}.",
            f"Ensure the '{label}' action is visible and enabled.",
            "Activate the control and follow the resulting navigation or modal flow.",
        ],
        assertions=[
            "User is taken to the expected destination or sees the correct confirmation.",
            "No blocking console errors or uncaught exceptions occur during the interaction.",
        ],
        related_elements=[button.data_test_id] if button.data_test_id else list(button.classes),
    )


def build_form_happy_path_test(
    form: FormSummary, index: int, snapshot: InspectionSnapshot, used_ids: set[str]
) -> TestCase:
    form_name = describe_form(form, index)
    submit = next((b for b in form.buttons if has_keyword_match(b.text, SUBMIT_KEYWORDS)), None)
    if submit:
        submit_step = f"Submit the form via the '{submit.text or submit.type}' control."
    else:
        submit_step = "Submit the form using the primary available control."

    return TestCase(
        id=create_unique_id(f"submit-{form_name}", used_ids),
        title=f"Submit '{form_name}' with valid data",
        type="functional",
        risk=choose_risk(form),
        objective=(
            f"Confirm that the '{form_name}' form accepts valid input "
            "and produces the expected success outcome."
        ),
        steps=[
            f"Navigate to {snapshot.url}.",
            f"Locate the '{form_name}' form.",
            *(build_field_step(f) for f in form.fields[:MAX_FIELD_STEPS]),
            submit_step,
        ],
        assertions=[
            "The form submission succeeds (e.g., success message, navigation, or state update).",
            "No validation errors appear for fields populated with valid values.",
            "Network calls triggered by the submission return successful statuses.",
        ],
        related_elements=_form_related_elements(form),
    )


def build_form_validation_test(
    form: FormSummary, index: int, snapshot: InspectionSnapshot, used_ids: set[str]
) -> TestCase:
    form_name = describe_form(form, index)
    required = [f.label or f.name or f.type for f in form.fields if f.required]
    return TestCase(
        id=create_unique_id(f"validation-{form_name}", used_ids),
        title=f"Validation: '{form_name}' blocks incomplete submissions",
        type="functional",
        risk=choose_risk(form),
        objective=(
            f"Ensure the '{form_name}' form enforces mandatory fields "
            "and provides actionable feedback."
        ),
        steps=[
            f"Navigate to {snapshot.url}.",
            f"Locate the '{form_name}' form.",
            "Leave required fields blank or provide invalid values.",
            "Attempt to submit the form.",
        ],
        assertions=[
            "Validation prevents submission until the following fields are completed: "
            f"{', '.join(required)}.",
            "Error messaging is visible, accessible, and clearly references each failing field.",
        ],
        related_elements=_form_related_elements(form),
    )


def build_console_test(snapshot: InspectionSnapshot, used_ids: set[str]) -> TestCase:
    console = snapshot.console
    if console.errors:
        sample = console.errors[0]
    elif console.warnings:
        sample = console.warnings[0]
    else:
        sample = "Console noise detected"
    return TestCase(
        id=create_unique_id("monitor-console", used_ids),
        title="Regression guard: console remains clean on load",
        type="regression",
        risk="high" if console.errors else "medium",
        objective=(
            f"Prevent regressions by ensuring known issues such as '{sample}' "
            "are resolved and stay fixed."
        ),
        steps=[
            f"Launch {snapshot.url} with the browser console open.",
            "Reload multiple times and interact with critical UI flows.",
            "Capture stack traces or network failures for any console noise.",
        ],
        assertions=[
            "No errors or uncaught exceptions remain in the console.",
            "Warnings are either eliminated or documented with mitigation.",
        ],
        related_elements=[],
    )


def build_accessibility_test(snapshot: InspectionSnapshot, used_ids: set[str]) -> TestCase:
    missing_alt = snapshot.dom.images_missing_alt
    if missing_alt > 0:
        alt_assertion = (
            f"{missing_alt} image(s) receive descriptive alt text "
            "or are explicitly marked as decorative."
        )
    else:
        alt_assertion = (
            "All meaningful imagery has descriptive alt text "
            "or is marked decorative as appropriate."
        )
    return TestCase(
        id=create_unique_id("accessibility-review", used_ids),
        title="Accessibility review: media alternatives and semantics",
        type="accessibility",
        risk="high" if missing_alt > 0 else "medium",
        objective=(
            "Assess critical accessibility requirements on the page, "
            "focusing on images, landmarks, and focus management."
        ),
        steps=[
            f"Open {snapshot.url} and inspect the DOM using accessibility tooling "
            "(axe, Lighthouse, or equivalent).",
            "Evaluate images, interactive controls, and headings for proper semantic structure.",
            "Review keyboard navigation and focus indicators across primary interactions.",
        ],
        assertions=[
            alt_assertion,
            "Interactive elements expose accessible names and roles.",
            "No critical WCAG AA violations are reported.",
        ],
        related_elements=snapshot.dom.data_test_ids[:MAX_RELATED_TEST_IDS],
    )


def build_summary(snapshot: InspectionSnapshot) -> str:
    dom, console = snapshot.dom, snapshot.console
    parts = [
        f"{dom.title} contains {len(dom.forms)} form(s) and "
        f"{len(dom.interactive_elements)} interactive control(s)."
    ]
    if console.errors or console.warnings:
        parts.append(
            f"Console captured {len(console.errors)} error(s) and "
            f"{len(console.warnings)} warning(s) during inspection."
        )
    else:
        parts.append("No console errors were observed during inspection.")
    parts.append(
        f"Accessibility scan flagged {dom.images_missing_alt} image(s) without alt text."
    )
    return " ".join(parts)


def build_key_insights(snapshot: InspectionSnapshot) -> list[str]:
    insights = detect_journeys(snapshot)
    if snapshot.dom.images_missing_alt > 0:
        insights.append(f"{snapshot.dom.images_missing_alt} image(s) are missing alt text.")
    if snapshot.console.errors:
        insights.append(
            f"Console surfaced {len(snapshot.console.errors)} error(s) that require investigation."
        )
    return insights


def build_test_plan(snapshot: InspectionSnapshot) -> TestPlan:
    """Derive a prioritized test plan from a page snapshot."""
    logger.info("Building test plan for %s", snapshot.url)
    used_ids: set[str] = set()
    tests = [build_smoke_test(snapshot, used_ids)]

    for button in snapshot.dom.primary_buttons[:MAX_CTA_TESTS]:
        tests.append(build_cta_test(button, snapshot, used_ids))

    for index, form in enumerate(snapshot.dom.forms[:MAX_FORM_TESTS]):
        tests.append(build_form_happy_path_test(form, index, snapshot, used_ids))
        if any(f.required for f in form.fields):
            tests.append(build_form_validation_test(form, index, snapshot, used_ids))

    if snapshot.console.errors or snapshot.console.warnings:
        tests.append(build_console_test(snapshot, used_ids))

    tests.append(build_accessibility_test(snapshot, used_ids))

    missing_alt = snapshot.dom.images_missing_alt
    plan = TestPlan(
        url=snapshot.url,
        application_title=snapshot.dom.title,
        summary=build_summary(snapshot),
        generated_at=snapshot.captured_at,
        key_insights=build_key_insights(snapshot),
        recommended_tests=tests,
        notes=PlanNotes(
            console_errors=list(snapshot.console.errors),
            console_warnings=list(snapshot.console.warnings),
            accessibility_gaps=(
                [f"{missing_alt} image(s) missing alt attributes."] if missing_alt > 0 else []
            ),
        ),
    )

    errors = validate_test_plan(plan)
    if errors:
        logger.warning("Plan validation warnings: %s", errors)
    logger.info("Generated plan with %d test cases", len(plan.recommended_tests))
    return plan
