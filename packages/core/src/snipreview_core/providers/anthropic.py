from __future__ import annotations

import logging

from snipreview_core.providers.base import BaseReviewer

logger = logging.getLogger(__name__)

# The Messages API has no JSON mode. Starting the assistant turn with the
# opening brace makes the model continue an object instead of greeting.
_PREFILL = "{"


class AnthropicReviewer(BaseReviewer):
    MODEL = "claude-sonnet-4-20250514"
    # Findings are graded against fixed enumerations, so phrasing variety buys
    # nothing here; 0.2 matches the OpenAI provider and keeps repeat reviews of
    # the same snippet comparable in the history stats.
    TEMPERATURE = 0.2

    def __init__(self, api_key: str):
        try:
            from anthropic import Anthropic
        except ImportError:
            raise ImportError(
                "The 'anthropic' package is required for this provider. "
                "Install it with: pip install 'snipreview[anthropic]'"
            )
        self.client = Anthropic(api_key=api_key)

    def _call_api(self, system_prompt: str, user_prompt: str) -> str:
        # Optional dependency; __init__ has already imported it once.
        from anthropic.types import TextBlock

        response = self.client.messages.create(
            model=self.MODEL,
            system=system_prompt,
            messages=[
                {"role": "user", "content": user_prompt},
                {"role": "assistant", "content": _PREFILL},
            ],
            temperature=self.TEMPERATURE,
            max_tokens=self.MAX_TOKENS,
        )
        if response.stop_reason == "max_tokens":
            logger.warning("Anthropic response hit max_tokens=%d; JSON is likely truncated", self.MAX_TOKENS)

        text = "".join(block.text for block in response.content if isinstance(block, TextBlock)).strip()
        return _PREFILL + text if text else ""
