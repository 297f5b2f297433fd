"""JSON output for plans and snapshots."""

from __future__ import annotations

import json
from pathlib import Path

from src.models.inspection import InspectionSnapshot
from src.models.test_plan import TestPlan


def generate_json_report(plan: TestPlan, output_path: Path) -> None:
    """Write a machine-readable JSON test plan."""
    with open(output_path, "w") as f:
        json.dump(plan.model_dump(), f, indent=2, default=str)


def generate_snapshot_json(snapshot: InspectionSnapshot, output_path: Path) -> None:
    """Persist the parsed snapshot so the plan can be rebuilt offline."""
    with open(output_path, "w") as f:
        json.dump(snapshot.model_dump(), f, indent=2, default=str)


def load_snapshot_json(path: str | Path) -> InspectionSnapshot:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Snapshot file not found: {path}")
    with open(path) as f:
        data = json.load(f)
    return InspectionSnapshot.model_validate(data)
