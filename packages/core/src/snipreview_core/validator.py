"""Turn the model's raw text into a clean list of findings.

The model is a best-effort generator, not a trusted peer: individual
malformed insights are dropped rather than failing the batch, but a payload
with nothing usable left in it is still an analysis failure.
"""

from __future__ import annotations

import json
import logging
import re

from snipreview_core.errors import EmptyResultError, MalformedPayloadError, MissingFieldError
from snipreview_core.models import FINDING_TYPES, SEVERITIES, Finding

logger = logging.getLogger(__name__)

_OPENING_FENCE = re.compile(r"^```[\w+.-]*\s*")
_CLOSING_FENCE = re.compile(r"\s*```$")


def strip_code_fence(raw: str) -> str:
    """Remove the outer ```lang ... ``` wrapper, leaving inner backticks alone."""
    cleaned = _OPENING_FENCE.sub("", raw.strip())
    return _CLOSING_FENCE.sub("", cleaned.strip())


def validate(raw: str) -> list[Finding]:
    """Parse and sanitize a raw model response.

    Raises MalformedPayloadError, MissingFieldError or EmptyResultError.
    """
    cleaned = strip_code_fence(raw)
    try:
        payload = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise MalformedPayloadError(f"response is not valid JSON: {e}") from e
    except RecursionError as e:
        raise MalformedPayloadError("response JSON is nested too deeply to decode") from e

    if not isinstance(payload, dict):
        raise MalformedPayloadError(f"expected a JSON object, got {type(payload).__name__}")

    insights = payload.get("insights")
    if not isinstance(insights, list):
        raise MissingFieldError("response has no 'insights' array")

    findings = []
    for index, item in enumerate(insights):
        finding = _to_finding(item)
        if finding is None:
            logger.debug("Dropping invalid insight at index %d: %r", index, item)
            continue
        findings.append(finding)

    if not findings:
        raise EmptyResultError(f"none of the {len(insights)} insights were valid")
    return findings


def _to_finding(item: object) -> Finding | None:
    if not isinstance(item, dict):
        return None
    if item.get("type") not in FINDING_TYPES or item.get("severity") not in SEVERITIES:
        return None

    message = item.get("message")
    suggestion = item.get("suggestion")
    if not isinstance(message, str) or not isinstance(suggestion, str):
        return None

    message = message.strip()
    if not message:
        return None

    return Finding(
        type=item["type"],
        severity=item["severity"],
        message=message,
        suggestion=suggestion.strip() or None,
        line=_line_number(item.get("line")),
    )


def _line_number(value: object) -> int | None:
    # bool is an int subclass; JSON true must not become line 1.
    if isinstance(value, int) and not isinstance(value, bool) and value > 0:
        return value
    return None
