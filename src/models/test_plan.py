"""Test plan data structures produced by the planner."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

TestCaseType = Literal["functional", "accessibility", "regression", "performance", "exploratory"]
TestCaseRisk = Literal["high", "medium", "low"]


class TestCase(BaseModel):
    id: str
    title: str
    type: TestCaseType = "functional"
    risk: TestCaseRisk = "medium"
    objective: str = ""
    steps: list[str] = Field(default_factory=list)
    assertions: list[str] = Field(default_factory=list)
    related_elements: list[str] = Field(default_factory=list)


class PlanNotes(BaseModel):
    console_errors: list[str] = Field(default_factory=list)
    console_warnings: list[str] = Field(default_factory=list)
    accessibility_gaps: list[str] = Field(default_factory=list)


class TestPlan(BaseModel):
    url: str
    application_title: str
    summary: str = ""
    generated_at: str
    key_insights: list[str] = Field(default_factory=list)
    recommended_tests: list[TestCase] = Field(default_factory=list)
    notes: PlanNotes = Field(default_factory=PlanNotes)
