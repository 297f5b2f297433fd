"""Inspection snapshot data structures produced by the snapshot parser."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class HeadingSummary(_Frozen):
    level: str = "h1"  # h1, h2, h3
    text: str = ""


class LinkSummary(_Frozen):
    text: Optional[str] = None
    href: str = ""


class ButtonSummary(_Frozen):
    text: Optional[str] = None
    type: str = "button"
    role: str = "button"
    classes: list[str] = Field(default_factory=list)
    data_test_id: Optional[str] = None


class FormFieldSummary(_Frozen):
    name: Optional[str] = None
    type: str = "input"
    required: bool = False
    label: Optional[str] = None  # label element, aria attributes, then placeholder
    placeholder: Optional[str] = None


class FormSummary(_Frozen):
    id: Optional[str] = None
    name: Optional[str] = None
    action: Optional[str] = None
    method: str = "get"
    textual_context: Optional[str] = None
    fields: list[FormFieldSummary] = Field(default_factory=list)
    buttons: list[ButtonSummary] = Field(default_factory=list)


class DomSnapshot(_Frozen):
    title: str = "Untitled"
    meta_description: Optional[str] = None
    headings: list[HeadingSummary] = Field(default_factory=list)
    forms: list[FormSummary] = Field(default_factory=list)
    primary_buttons: list[ButtonSummary] = Field(default_factory=list)
    interactive_elements: list[ButtonSummary] = Field(default_factory=list)
    links: list[LinkSummary] = Field(default_factory=list)
    images_missing_alt: int = 0
    data_test_ids: list[str] = Field(default_factory=list)


class ConsoleSummary(_Frozen):
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    info: list[str] = Field(default_factory=list)
    logs: list[str] = Field(default_factory=list)


class InspectionSnapshot(_Frozen):
    url: str
    captured_at: str
    dom: DomSnapshot = Field(default_factory=DomSnapshot)
    console: ConsoleSummary = Field(default_factory=ConsoleSummary)
