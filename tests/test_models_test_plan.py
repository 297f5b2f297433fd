"""Tests for test plan data structures."""

import pytest
from pydantic import ValidationError

from src.models.test_plan import PlanNotes, TestCase as TestCaseModel, TestPlan as TestPlanModel


class TestTestCase:
    """Tests for TestCase model."""

    def test_minimal_test_case(self):
        """Test TestCase with minimal required fields."""
        tc = TestCaseModel(id="smoke-page-load", title="Smoke")
        assert tc.type == "functional"
        assert tc.risk == "medium"
        assert tc.steps == []
        assert tc.assertions == []
        assert tc.related_elements == []

    def test_invalid_type_rejected(self):
        """Test unknown test case types are rejected."""
        with pytest.raises(ValidationError):
            TestCaseModel(id="x", title="x", type="visual")

    def test_invalid_risk_rejected(self):
        """Test unknown risk levels are rejected."""
        with pytest.raises(ValidationError):
            TestCaseModel(id="x", title="x", risk="critical")


class TestTestPlan:
    """Tests for TestPlan model."""

    def test_minimal_plan(self):
        """Test TestPlan defaults notes and insights to empty."""
        plan = TestPlanModel(
            url="https://example.com",
            application_title="Example",
            generated_at="2025-01-01T00:00:00Z",
        )
        assert plan.recommended_tests == []
        assert plan.key_insights == []
        assert plan.notes == PlanNotes()

    def test_serialization(self):
        """Test TestPlan dumps snake_case keys."""
        plan = TestPlanModel(
            url="https://example.com",
            application_title="Example",
            generated_at="2025-01-01T00:00:00Z",
            recommended_tests=[TestCaseModel(id="a", title="A", related_elements=["x"])],
        )
        data = plan.model_dump()
        assert data["recommended_tests"][0]["related_elements"] == ["x"]
        assert set(data["notes"]) == {"console_errors", "console_warnings", "accessibility_gaps"}
