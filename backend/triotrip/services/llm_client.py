"""Unified LLM client — tries OpenAI first, falls back to Anthropic."""

import json
import logging
from dataclasses import dataclass
from typing import Any, Literal

import anthropic
import openai
from openai import AsyncOpenAI

from triotrip.config import settings

logger = logging.getLogger(__name__)


class AIError(RuntimeError):
    """Completion failed or came back empty."""


class AIDisabledError(AIError):
    pass


class AIConfigError(AIError):
    pass


class AIRateLimitError(AIError):
    pass


@dataclass(frozen=True)
class AIPayload:
    """Model output: parsed JSON when possible, otherwise the raw text."""
    kind: Literal["parsed", "raw"]
    value: Any

    @property
    def parsed(self) -> bool:
        return self.kind == "parsed"

    def as_response(self) -> Any:
        return self.value if self.parsed else {"raw": self.value}


def strip_code_fences(raw: str) -> str:
    text = raw.strip()
    if text.startswith("```"):
        lines = [line for line in text.split("\n") if not line.strip().startswith("```")]
        text = "\n".join(lines).strip()
    return text


def parse_ai_payload(raw: str) -> AIPayload:
    try:
        return AIPayload("parsed", json.loads(strip_code_fences(raw)))
    except json.JSONDecodeError:
        return AIPayload("raw", raw)


class LLMClient:
    """Async LLM client with OpenAI primary + Anthropic fallback."""

    def __init__(self, config=settings):
        self.config = config
        self._openai = None
        self._anthropic = None

        if config.openai_api_key:
            self._openai = AsyncOpenAI(api_key=config.openai_api_key)
        if config.anthropic_api_key:
            self._anthropic = anthropic.AsyncAnthropic(api_key=config.anthropic_api_key)

    @property
    def configured(self) -> bool:
        return bool(self._openai or self._anthropic)

    async def complete(self, prompt: str, system: str | None = None, max_tokens: int = 2000) -> str:
        """Get a completion from the best available LLM.

        Raises:
            AIDisabledError if the AI features are switched off.
            AIConfigError if no provider key is configured.
            AIRateLimitError if every provider tried was rate-limited.
            AIError if every provider failed or returned nothing.
        """
        if not self.config.ai_enabled:
            raise AIDisabledError("AI features are disabled")
        if not self.configured:
            raise AIConfigError("No AI provider configured; set OPENAI_API_KEY or ANTHROPIC_API_KEY")

        system = system or self.config.ai_system_message
        errors = []
        rate_limited = []

        if self._openai:
            try:
                response = await self._openai.chat.completions.create(
                    model=self.config.openai_model,
                    messages=[
                        {"role": "system", "content": system},
                        {"role": "user", "content": prompt},
                    ],
                )
                content = response.choices[0].message.content if response.choices else None
                if content:
                    return content.strip()
                errors.append("OpenAI: empty response")
            except openai.RateLimitError as e:
                rate_limited.append("OpenAI")
                errors.append(f"OpenAI: {e}")
                logger.warning(f"OpenAI rate-limited, trying Anthropic: {e}")
            except openai.OpenAIError as e:
                errors.append(f"OpenAI: {e}")
                logger.warning(f"OpenAI failed, trying Anthropic: {e}")

        if self._anthropic:
            try:
                response = await self._anthropic.messages.create(
                    model=self.config.anthropic_model,
                    max_tokens=max_tokens,
                    system=system,
                    messages=[{"role": "user", "content": prompt}],
                )
                text = "".join(
                    block.text for block in response.content if getattr(block, "type", "") == "text"
                )
                if text.strip():
                    return text.strip()
                errors.append("Anthropic: empty response")
            except anthropic.RateLimitError as e:
                rate_limited.append("Anthropic")
                errors.append(f"Anthropic: {e}")
                logger.warning(f"Anthropic rate-limited: {e}")
            except anthropic.AnthropicError as e:
                errors.append(f"Anthropic: {e}")
                logger.warning(f"Anthropic also failed: {e}")

        tried = [name for name, client in (("OpenAI", self._openai), ("Anthropic", self._anthropic)) if client]
        if rate_limited and len(rate_limited) == len(tried):
            raise AIRateLimitError("AI provider rate limit reached; please try again shortly")
        raise AIError(f"All LLM providers failed: {'; '.join(errors)}")


# Singleton
llm_client = LLMClient()
