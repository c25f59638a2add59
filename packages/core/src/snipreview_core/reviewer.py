"""Core snippet review orchestration."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone

from rich.console import Console

from snipreview_core.config import api_key_env_var, api_key_for, is_valid_api_key
from snipreview_core.errors import EmptyInputError, InvalidCredentialError
from snipreview_core.models import Finding
from snipreview_core.providers.anthropic import AnthropicReviewer
from snipreview_core.providers.base import BaseReviewer
from snipreview_core.providers.openai import OpenAIReviewer

console = Console()
logger = logging.getLogger(__name__)


@dataclass
class ReviewResult:
    """Result returned by run_review — carries enough data for the CLI to persist history.

    Decoupled from snipreview_store so snipreview_core has no dependency on the store layer.
    The CLI converts this to a ReviewRecord before persisting.
    """

    code: str
    language: str
    model: str
    findings: list[Finding] = field(default_factory=list)
    reviewed_at: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())


def _get_reviewer(config: dict, api_key: str) -> BaseReviewer:
    model = config["model"]
    if model == "anthropic":
        return AnthropicReviewer(api_key=api_key)
    if model == "openai":
        return OpenAIReviewer(api_key=api_key)
    raise ValueError(f"Unknown model provider: {model!r}. Choose 'anthropic' or 'openai'.")


def run_review(
    code: str,
    language: str,
    config: dict,
    reviewer: BaseReviewer | None = None,
) -> ReviewResult:
    """Review one snippet with the configured provider.

    Credentials and input are checked before any network call. Every failure
    is raised as a ReviewError subclass; there is no partial result.
    """
    model = config["model"]
    api_key = api_key_for(config)
    if not is_valid_api_key(api_key):
        raise InvalidCredentialError(f"{api_key_env_var(model)} is missing or still set to a placeholder")

    if not code.strip():
        raise EmptyInputError("submitted code is empty")

    if reviewer is None:
        reviewer = _get_reviewer(config, api_key)

    line_count = len(code.splitlines())
    console.print(f"[dim]Reviewing {line_count} line(s) of {language} with {model}...[/dim]")
    logger.debug("Submitting %d chars of %s to %s", len(code), language, reviewer.__class__.__name__)

    findings = reviewer.analyze(code, language)
    logger.info("Review returned %d finding(s)", len(findings))

    return ReviewResult(code=code, language=language, model=model, findings=findings)
