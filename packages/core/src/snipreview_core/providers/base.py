"""Base reviewer implementing the Template Method pattern.

All providers share the same review algorithm:
    analyze() → _build_system_prompt() + build_prompt()
              → _call_api()            ← only this differs per provider
              → validate()

Subclasses implement two things only:
  - __init__: validate and store the SDK client
  - _call_api: make one raw API call and return the text response

A submission gets exactly one API call. Any exception from the SDK is
classified into a ReviewError subclass so callers never see SDK types.
"""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod

from snipreview_core.errors import (
    InputRejectedError,
    InvalidCredentialError,
    ProviderError,
    QuotaExceededError,
    ResponseFormatError,
    ReviewError,
)
from snipreview_core.models import Finding
from snipreview_core.validator import validate

logger = logging.getLogger(__name__)

_MAX_TOKENS = 2048

# Checked in order; the first matching pattern wins. Gemini-style status
# names are kept alongside the Anthropic/OpenAI error types so the same
# classifier works for any provider that surfaces them in the message.
# Credentials come first: OpenAI tags a bad key as invalid_request_error too.
_ERROR_PATTERNS: list[tuple[re.Pattern, type[ReviewError]]] = [
    (
        re.compile(r"PERMISSION_DENIED|authentication_error|permission_error|invalid.{0,10}api.key|invalid x-api-key", re.I),
        InvalidCredentialError,
    ),
    (
        re.compile(r"INVALID_ARGUMENT|invalid_request_error|too large|context.length|maximum context", re.I),
        InputRejectedError,
    ),
    (
        re.compile(r"RESOURCE_EXHAUSTED|rate_limit_error|insufficient_quota|quota", re.I),
        QuotaExceededError,
    ),
]

_STATUS_CODES: dict[int, type[ReviewError]] = {
    400: InputRejectedError,
    413: InputRejectedError,
    401: InvalidCredentialError,
    403: InvalidCredentialError,
    429: QuotaExceededError,
}


def classify_provider_error(exc: Exception) -> ReviewError:
    """Map an SDK exception onto the submission error taxonomy.

    The HTTP status code wins when the SDK exposes one; the message text is
    only consulted for errors without a recognised status.
    """
    text = str(exc)
    status = getattr(exc, "status_code", None)
    if isinstance(status, int) and status in _STATUS_CODES:
        return _STATUS_CODES[status](text)

    for pattern, error_cls in _ERROR_PATTERNS:
        if pattern.search(text):
            return error_cls(text)

    return ProviderError(text)


def build_prompt(code: str, language: str) -> str:
    """Build the user prompt for one snippet.

    The JSON shape and enumerations here are the contract the validator
    enforces; change both together.
    """
    return f"""Analyze the provided code and return ONLY a JSON response in the specified format.

Code to analyze ({language}):
```
{code}
```

You must respond with a JSON object that follows this exact structure:
{{
  "insights": [
    {{
      "type": "bug",
      "severity": "high",
      "message": "Description of a critical bug",
      "suggestion": "How to fix the bug"
    }},
    {{
      "type": "optimization",
      "severity": "medium",
      "message": "Performance improvement opportunity",
      "suggestion": "How to optimize"
    }},
    {{
      "type": "standard",
      "severity": "low",
      "message": "Code style or best practice issue",
      "suggestion": "How to improve"
    }}
  ]
}}

Requirements:
1. The response must be valid JSON
2. Each insight must have all fields: type, severity, message, and suggestion
3. Type must be one of: "bug", "optimization", "standard"
4. Severity must be one of: "low", "medium", "high"
5. Message and suggestion must be clear and actionable
6. Provide 2-4 meaningful insights
7. DO NOT include any text outside the JSON structure
8. DO NOT include any explanations or markdown"""


class BaseReviewer(ABC):
    MAX_TOKENS: int = _MAX_TOKENS

    # ------------------------------------------------------------------ #
    # Public interface                                                     #
    # ------------------------------------------------------------------ #

    def analyze(self, code: str, language: str) -> list[Finding]:
        """Review one snippet and return its validated findings.

        Raises a ReviewError subclass on any failure; never returns a
        partial or empty list.
        """
        system = self._build_system_prompt()
        user = build_prompt(code, language)
        try:
            raw = self._call_api(system, user)
        except Exception as e:
            error = classify_provider_error(e)
            logger.error(
                "%s API call failed (%s): %s",
                self.__class__.__name__,
                type(error).__name__,
                e,
            )
            raise error from e

        try:
            return validate(raw or "")
        except ResponseFormatError as e:
            logger.warning(
                "%s: unusable response (%s): %s; raw: %s",
                self.__class__.__name__,
                type(e).__name__,
                e,
                (raw or "")[:200],
            )
            raise

    # ------------------------------------------------------------------ #
    # Abstract: implement in each provider                                #
    # ------------------------------------------------------------------ #

    @abstractmethod
    def _call_api(self, system_prompt: str, user_prompt: str) -> str:
        """Make a single API call and return the raw text response.

        Should raise on failure — analyze() classifies the exception.
        """

    # ------------------------------------------------------------------ #
    # Shared implementations                                               #
    # ------------------------------------------------------------------ #

    def _build_system_prompt(self) -> str:
        return (
            "You are a code review expert. You report bugs, optimization opportunities "
            "and coding-standard issues in the code you are given, and you answer with "
            "JSON only, with no additional text or explanation."
        )
