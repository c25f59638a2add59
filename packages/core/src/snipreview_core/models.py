"""Finding model shared by the validator, the providers and the CLI.

Kept free of any store knowledge: the CLI maps a Finding to a FindingRecord
before persisting it.
"""

from __future__ import annotations

from dataclasses import dataclass

FINDING_TYPES = ("bug", "optimization", "standard")
SEVERITIES = ("low", "medium", "high")


@dataclass(frozen=True)
class Finding:
    """One issue reported by the model for a submitted snippet."""

    type: str  # "bug" | "optimization" | "standard"
    severity: str  # "low" | "medium" | "high"
    message: str
    suggestion: str | None = None
    line: int | None = None
