"""Generation invoker — sends a compiled prompt to the LLM provider.

The invoker makes exactly one SDK call per request. Transient-failure
retries belong to the SDK client itself, which is configured with
``settings.llm.max_retries`` (at most one).

Usage:
    invoker = GenerationInvoker()
    compiled = compile_prompt(article_settings)
    text = invoker.invoke(compiled.text, compiled.token_budget)
"""

from __future__ import annotations

import logging

import anthropic
import openai

from src.common.config import Settings, get_anthropic_api_key, get_openai_api_key
from src.common.errors import GenerationError, GenerationErrorKind

from .models import LLMProvider, WriterConfig
from .prompts import SYSTEM_PROMPT

logger = logging.getLogger(__name__)

# Anthropic reports an overloaded API with this non-standard status
_ANTHROPIC_OVERLOADED_STATUS = 529


def classify_error(exc: Exception) -> GenerationErrorKind:
    """Map an SDK exception onto a GenerationErrorKind."""
    if isinstance(exc, (openai.AuthenticationError, openai.PermissionDeniedError)):
        return GenerationErrorKind.UNAUTHORIZED
    if isinstance(exc, (anthropic.AuthenticationError, anthropic.PermissionDeniedError)):
        return GenerationErrorKind.UNAUTHORIZED

    if isinstance(exc, (openai.RateLimitError, anthropic.RateLimitError)):
        return GenerationErrorKind.QUOTA_EXCEEDED
    if getattr(exc, "code", None) == "insufficient_quota":
        return GenerationErrorKind.QUOTA_EXCEEDED
    if (
        isinstance(exc, anthropic.APIStatusError)
        and exc.status_code == _ANTHROPIC_OVERLOADED_STATUS
    ):
        return GenerationErrorKind.QUOTA_EXCEEDED

    if isinstance(exc, (openai.BadRequestError, openai.UnprocessableEntityError)):
        return GenerationErrorKind.INVALID_REQUEST
    if isinstance(exc, (anthropic.BadRequestError, anthropic.UnprocessableEntityError)):
        return GenerationErrorKind.INVALID_REQUEST

    return GenerationErrorKind.UNKNOWN


class GenerationInvoker:
    """Calls the configured text generation service for one article.

    Sampling parameters come from ``settings.llm`` and are identical for
    every request; only the token budget varies.
    """

    def __init__(self, config: WriterConfig | None = None, app_settings: Settings | None = None):
        self.config = config or WriterConfig()
        self.settings = app_settings or Settings.load()
        self._client = None

    @property
    def model(self) -> str:
        if self.config.model:
            return self.config.model
        if self.config.provider == LLMProvider.OPENAI:
            return self.settings.llm.openai_model
        return self.settings.llm.anthropic_model

    def invoke(self, instruction_text: str, token_budget: int) -> str:
        """Generate article text for a compiled prompt.

        Args:
            instruction_text: Compiled user prompt
            token_budget: Hard ceiling on generated tokens

        Returns:
            Generated article text (never empty)

        Raises:
            GenerationError: If the service fails or returns no text
        """
        try:
            client = self._get_client()
        except ValueError as e:
            logger.error("LLM provider not configured: %s", e)
            raise GenerationError(GenerationErrorKind.UNAUTHORIZED) from e

        logger.info(
            "Requesting article from %s (%s), max_tokens=%d",
            self.config.provider.value, self.model, token_budget,
        )

        try:
            if self.config.provider == LLMProvider.OPENAI:
                text = self._call_openai(client, instruction_text, token_budget)
            else:
                text = self._call_anthropic(client, instruction_text, token_budget)
        except (openai.OpenAIError, anthropic.AnthropicError) as e:
            kind = classify_error(e)
            logger.error("LLM request failed (%s): %s", kind.value, e)
            raise GenerationError(kind) from e

        if not text or not text.strip():
            logger.error("No content generated by %s", self.config.provider.value)
            raise GenerationError(GenerationErrorKind.EMPTY_OUTPUT)

        logger.info("Generated %d characters", len(text))
        return text

    # --- Provider clients ---

    def _get_client(self):
        """Lazy-initialize the provider client."""
        if self._client is not None:
            return self._client

        if self.config.provider == LLMProvider.OPENAI:
            self._client = openai.OpenAI(
                api_key=get_openai_api_key(),
                max_retries=self.settings.llm.max_retries,
            )
        else:
            self._client = anthropic.Anthropic(
                api_key=get_anthropic_api_key(),
                max_retries=self.settings.llm.max_retries,
            )
        return self._client

    def _call_openai(self, client, instruction_text: str, token_budget: int) -> str:
        """Call OpenAI chat completions."""
        llm = self.settings.llm
        response = client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": instruction_text},
            ],
            temperature=llm.temperature,
            max_tokens=token_budget,
            top_p=llm.top_p,
            frequency_penalty=llm.frequency_penalty,
            presence_penalty=llm.presence_penalty,
        )
        if not response.choices:
            return ""
        return response.choices[0].message.content or ""

    def _call_anthropic(self, client, instruction_text: str, token_budget: int) -> str:
        """Call Anthropic messages API.

        The messages API has no repetition penalties; temperature alone
        carries the sampling configuration.
        """
        response = client.messages.create(
            model=self.model,
            max_tokens=token_budget,
            system=SYSTEM_PROMPT,
            messages=[
                {"role": "user", "content": instruction_text},
            ],
            temperature=self.settings.llm.temperature,
        )
        return "".join(
            block.text for block in response.content if getattr(block, "type", "") == "text"
        )
