"""Patch-generation collaborator.

The pipeline only depends on the ``PatchGenerator`` protocol; its output is
untrusted text that is always parsed and scope-validated.
"""

from __future__ import annotations

import logging
from typing import Optional, Protocol

from openai import OpenAI, OpenAIError

from ..config import GeneratorConfig
from ..exceptions import PatchGenerationError

logger = logging.getLogger(__name__)


class PatchGenerator(Protocol):
    def generate(self, prompt: str) -> str: ...


class OpenAIPatchGenerator:
    """Chat-completions client for any OpenAI-compatible endpoint.

    The default GeneratorConfig points at Gemini's OpenAI-compatible API.
    """

    def __init__(self, config: GeneratorConfig, client: Optional[OpenAI] = None) -> None:
        self.config = config
        if client is None:
            if not config.is_configured:
                raise PatchGenerationError("no API key configured")
            client = OpenAI(
                api_key=config.api_key,
                base_url=config.base_url,
                timeout=config.timeout_seconds,
            )
        self._client = client

    def generate(self, prompt: str) -> str:
        """Send ``prompt`` and return the raw response text.

        Raises:
            PatchGenerationError: On transport/API errors or an empty response
        """
        logger.debug(f"Requesting patch from {self.config.model}")
        try:
            response = self._client.chat.completions.create(
                model=self.config.model,
                messages=[{"role": "user", "content": prompt}],
                temperature=self.config.temperature,
                max_tokens=self.config.max_output_tokens,
            )
        except OpenAIError as e:
            raise PatchGenerationError(str(e)) from e

        if not response.choices:
            raise PatchGenerationError("empty response")
        content = response.choices[0].message.content
        if not content:
            raise PatchGenerationError("empty response")
        return content
