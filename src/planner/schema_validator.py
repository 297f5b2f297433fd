"""Test plan sanity checks."""

from __future__ import annotations

import logging

from src.models.test_plan import TestPlan

logger = logging.getLogger(__name__)

VALID_TYPES = {"functional", "accessibility", "regression", "performance", "exploratory"}
VALID_RISKS = {"high", "medium", "low"}


def validate_test_plan(plan: TestPlan) -> list[str]:
    """Validate a test plan and return a list of error messages."""
    errors = []

    if not plan.recommended_tests:
        errors.append("Test plan has no test cases")
        return errors

    seen_ids = set()
    for tc in plan.recommended_tests:
        # Unique IDs
        if tc.id in seen_ids:
            errors.append(f"Duplicate test id: {tc.id}")
        seen_ids.add(tc.id)

        if tc.type not in VALID_TYPES:
            errors.append(f"{tc.id}: invalid type '{tc.type}'")

        if tc.risk not in VALID_RISKS:
            errors.append(f"{tc.id}: invalid risk '{tc.risk}'")

        if not tc.steps:
            errors.append(f"{tc.id}: no steps defined")

        if not tc.assertions:
            errors.append(f"{tc.id}: no assertions defined")

    types = [tc.type for tc in plan.recommended_tests]
    if types[-1] != "accessibility" or types.count("accessibility") != 1:
        errors.append("Plan must end with exactly one accessibility test")

    return errors
