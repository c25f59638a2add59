"""Review history data models.

Decoupled from snipreview_core so the store layer can be used independently
and snipreview_core has no knowledge of persistence concerns.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class FindingRecord:
    """A single finding persisted as part of a review."""

    type: str
    severity: str
    message: str
    suggestion: str | None = None
    line: int | None = None


@dataclass(frozen=True)
class ReviewRecord:
    """A completed snippet review persisted to the store.

    Created by the CLI layer after run_review() returns a ReviewResult.
    The CLI maps ReviewResult → ReviewRecord before calling store.add().
    """

    id: str
    code: str
    language: str
    created_at: str  # ISO-8601 UTC timestamp
    findings: list[FindingRecord] = field(default_factory=list)


def record_to_dict(record: ReviewRecord) -> dict:
    return {
        "id": record.id,
        "code": record.code,
        "language": record.language,
        "createdAt": record.created_at,
        "insights": [_finding_to_dict(f) for f in record.findings],
    }


def record_from_dict(d: dict) -> ReviewRecord:
    return ReviewRecord(
        id=d["id"],
        code=d.get("code", ""),
        language=d.get("language", ""),
        created_at=d.get("createdAt", ""),
        findings=[
            FindingRecord(
                type=f["type"],
                severity=f["severity"],
                message=f["message"],
                suggestion=f.get("suggestion"),
                line=f.get("line"),
            )
            for f in d.get("insights", [])
        ],
    )


def _finding_to_dict(finding: FindingRecord) -> dict:
    d = {"type": finding.type, "severity": finding.severity, "message": finding.message}
    if finding.suggestion is not None:
        d["suggestion"] = finding.suggestion
    if finding.line is not None:
        d["line"] = finding.line
    return d
