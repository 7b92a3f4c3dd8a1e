"""
Text summarization through Gemini, plus an in-memory stand-in for tests.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Protocol

from google import genai
from google.genai import types

logger = logging.getLogger(__name__)

SUMMARY_PROMPT_TEMPLATE = "Summarize this task in under 10 words: {text}"


class GeminiInvalidResponseException(Exception):
    pass


def make_summary_prompt(text: str) -> str:
    return SUMMARY_PROMPT_TEMPLATE.format(text=text)


class Summarizer(Protocol):
    def summarize(self, text: str) -> str:
        ...


@dataclass
class InMemorySummarizer:
    """Returns a canned reply and records every prompt it was given."""

    reply: str = "Summary unavailable offline"
    prompts: list[str] = field(default_factory=list)

    def summarize(self, text: str) -> str:
        self.prompts.append(make_summary_prompt(text))
        return self.reply


@dataclass
class GeminiSummarizer:
    api_key: str
    model: str = "gemini-3-flash-preview"

    def __post_init__(self):
        self._client = genai.Client(api_key=self.api_key)

    def summarize(self, text: str) -> str:
        """
        Sends the summary prompt as a single user message.

        Returns:
            str: The model output, unmodified. No length limit is applied.
        """
        prompt = make_summary_prompt(text)
        start_time = time.time()
        truncated_prompt = (prompt[:200] + "...") if len(prompt) > 200 else prompt
        logger.info("Calling Gemini to summarize, prompt: '%s'", truncated_prompt)

        response = self._client.models.generate_content(
            model=self.model,
            contents=[
                types.Content(role="user", parts=[types.Part.from_text(text=prompt)])
            ],
        )
        logger.info("Gemini summarize call took: %.2fs", time.time() - start_time)

        if response.text is None:
            raise GeminiInvalidResponseException()
        return response.text
