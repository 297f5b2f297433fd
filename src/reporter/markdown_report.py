"""Markdown rendering of a test plan."""

from __future__ import annotations

from src.models.test_plan import TestCase, TestPlan


def _render_test_case(test: TestCase, index: int) -> str:
    lines = [
        f"### {index + 1}. {test.title}",
        f"- **Type:** {test.type}",
        f"- **Risk:** {test.risk}",
        f"- **Objective:** {test.objective}",
    ]
    if test.steps:
        lines.append("\n#### Steps")
        lines.extend(f"{i}. {step}" for i, step in enumerate(test.steps, 1))
    if test.assertions:
        lines.append("\n#### Assertions")
        lines.extend(f"- {assertion}" for assertion in test.assertions)
    if test.related_elements:
        lines.append("\n#### Related elements")
        lines.append(", ".join(f"`{el}`" for el in test.related_elements))
    lines.append("")
    return "\n".join(lines)


def render_test_plan(plan: TestPlan) -> str:
    """Render the plan as a Markdown document."""
    sections = [
        f"# Test plan for {plan.application_title}",
        f"- **URL:** {plan.url}",
        f"- **Generated:** {plan.generated_at}",
        "",
        "## Summary",
        plan.summary,
        "",
        "## Key insights",
    ]
    sections.extend(f"- {insight}" for insight in plan.key_insights)
    sections.append("")
    sections.append("## Recommended tests")
    sections.extend(
        _render_test_case(test, i) for i, test in enumerate(plan.recommended_tests)
    )

    notes = plan.notes
    sections.append("## Notes")
    if notes.console_errors:
        sections.append("**Console errors:**")
        sections.extend(f"- {error}" for error in notes.console_errors)
    else:
        sections.append("**Console errors:** none observed.")
    if notes.console_warnings:
        sections.append("\n**Console warnings:**")
        sections.extend(f"- {warning}" for warning in notes.console_warnings)
    if notes.accessibility_gaps:
        sections.append("\n**Accessibility gaps:**")
        sections.extend(f"- {gap}" for gap in notes.accessibility_gaps)
    sections.append("")
    return "\n".join(sections)
