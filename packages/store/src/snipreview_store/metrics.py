"""Summary statistics derived from the review history.

Nothing here is persisted: every call recomputes from the history it is
given, and none of the functions touch the store.
"""

from __future__ import annotations

import math
from collections import Counter
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from snipreview_store.models import ReviewRecord

NO_ISSUE_TYPE = "N/A"


@dataclass(frozen=True)
class Metrics:
    total_reviews: int
    average_issues_per_review: float
    most_common_issue_type: str  # a finding type, or "N/A"
    improvement_trend: int  # percent; positive means fewer issues recently


EMPTY_METRICS = Metrics(
    total_reviews=0,
    average_issues_per_review=0.0,
    most_common_issue_type=NO_ISSUE_TYPE,
    improvement_trend=0,
)


def aggregate(history: list[ReviewRecord]) -> Metrics:
    """Compute the metrics snapshot for a newest-first history.

    Ties for the most common type go to the type seen first when walking
    the history newest-first.
    """
    if not history:
        return EMPTY_METRICS

    total_reviews = len(history)
    total_findings = sum(len(r.findings) for r in history)
    type_counts = type_breakdown(history)

    return Metrics(
        total_reviews=total_reviews,
        average_issues_per_review=total_findings / total_reviews,
        most_common_issue_type=_most_common(type_counts),
        improvement_trend=improvement_trend(history),
    )


def improvement_trend(history: list[ReviewRecord]) -> int:
    """Percentage drop in findings-per-review from the older half to the recent half.

    The history is split at len // 2; with an odd length the older half gets
    the extra review. Returns 0 when the older half averages zero findings.
    """
    mid = len(history) // 2
    recent_avg = _mean_findings(history[:mid])
    older_avg = _mean_findings(history[mid:])
    if older_avg == 0:
        return 0
    return _round_half_up((older_avg - recent_avg) / older_avg * 100)


def type_breakdown(history: list[ReviewRecord]) -> Counter[str]:
    return Counter(f.type for r in history for f in r.findings)


def severity_breakdown(history: list[ReviewRecord]) -> Counter[str]:
    return Counter(f.severity for r in history for f in r.findings)


def _most_common(counts: Counter[str]) -> str:
    if not counts:
        return NO_ISSUE_TYPE
    # max() keeps the first maximal key, and Counter preserves insertion order.
    return max(counts, key=counts.__getitem__)


def _mean_findings(reviews: list[ReviewRecord]) -> float:
    if not reviews:
        return 0.0
    return sum(len(r.findings) for r in reviews) / len(reviews)


def _round_half_up(value: float) -> int:
    # round() would bank 12.5 down to 12.
    return math.floor(value + 0.5)
