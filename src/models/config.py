"""Configuration models for the page test planner."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

SUPPORTED_REPORT_FORMATS = ("markdown", "json")


class ViewportConfig(BaseModel):
    width: int = 1280
    height: int = 720


class BrowserConfig(BaseModel):
    headless: bool = True
    viewport: ViewportConfig = Field(default_factory=ViewportConfig)
    user_agent: Optional[str] = None


class InspectorConfig(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    # Target
    target_url: str = ""

    # Browser settings
    navigation_timeout_ms: int = 60_000
    browser: BrowserConfig = Field(default_factory=BrowserConfig)

    # Reporting
    report_formats: list[str] = Field(default_factory=lambda: ["markdown", "json"])
    report_output_dir: str = "./qa-reports"
    save_snapshot: bool = True

    @field_validator("navigation_timeout_ms")
    @classmethod
    def check_timeout(cls, v: int) -> int:
        if v <= 0:
            raise ValueError(f"navigation_timeout_ms must be positive, got {v}")
        return v

    @field_validator("report_formats")
    @classmethod
    def check_report_formats(cls, v: list[str]) -> list[str]:
        unknown = [fmt for fmt in v if fmt not in SUPPORTED_REPORT_FORMATS]
        if unknown:
            raise ValueError(f"Unsupported report format(s): {', '.join(unknown)}")
        return v

    @classmethod
    def load(cls, path: str | Path) -> "InspectorConfig":
        """Load config from a JSON file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        with open(path) as f:
            data = json.load(f)
        return cls(**data)

    def save(self, path: str | Path) -> None:
        """Save config to a JSON file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(self.model_dump(), f, indent=2)
