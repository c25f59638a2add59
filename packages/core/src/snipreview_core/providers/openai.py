from __future__ import annotations

import logging

try:
    from openai import OpenAI as _OpenAI
except ImportError:
    _OpenAI = None  # type: ignore[assignment,misc]

from snipreview_core.providers.base import BaseReviewer

logger = logging.getLogger(__name__)


class OpenAIReviewer(BaseReviewer):
    MODEL = "gpt-4o"
    # json_object mode guarantees syntax but not the insight shape; a low
    # temperature keeps the model on the example structure in the prompt.
    TEMPERATURE = 0.2

    def __init__(self, api_key: str):
        if _OpenAI is None:
            raise ImportError(
                "The 'openai' package is required for this provider. "
                "Install it with: pip install 'snipreview[openai]'"
            )
        self.client = _OpenAI(api_key=api_key)

    def _call_api(self, system_prompt: str, user_prompt: str) -> str:
        response = self.client.chat.completions.create(
            model=self.MODEL,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            temperature=self.TEMPERATURE,
            max_tokens=self.MAX_TOKENS,
            response_format={"type": "json_object"},
        )
        choice = response.choices[0]
        if choice.finish_reason == "length":
            logger.warning("OpenAI response hit max_tokens=%d; JSON is likely truncated", self.MAX_TOKENS)
        # A refusal comes back with content=None.
        return choice.message.content or ""
