from __future__ import annotations

import logging

import groq
from groq import Groq

from .config import DEFAULT_LLM_CONFIG, LLMConfig

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a food recommendation assistant. "
    "You follow the user's filtering rules exactly and reply with JSON only."
)


class OracleUnavailableError(RuntimeError):
    """The model could not be reached, timed out, or rejected the request."""


class GroqOracle:
    """
    Text generation backed by the Groq chat completions API.

    The client is built with retries disabled: a failed call surfaces
    immediately as ``OracleUnavailableError``.
    """

    def __init__(self, config: LLMConfig = DEFAULT_LLM_CONFIG):
        self.config = config
        self._client: Groq | None = None

    @property
    def configured(self) -> bool:
        return self.config.is_configured

    def _get_client(self) -> Groq:
        if self._client is None:
            self._client = Groq(
                api_key=self.config.api_key,
                timeout=self.config.timeout,
                max_retries=0,
            )
        return self._client

    def generate(self, instruction: str) -> str:
        try:
            response = self._get_client().chat.completions.create(
                model=self.config.model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": instruction},
                ],
                max_tokens=self.config.max_tokens,
                temperature=self.config.temperature,
            )
        except groq.APIError as exc:
            raise OracleUnavailableError(str(exc)) from exc

        if not response.choices:
            return ""
        return response.choices[0].message.content or ""
