# Article Writer — settings → prompt → generated article
"""
Article writer module for generating long-form SEO articles.

Article settings are compiled into one instruction prompt which the
invoker sends to the configured LLM (GPT or Claude). The request surface
lives in ``service`` and is imported from there directly.
"""

from .invoker import GenerationInvoker, classify_error
from .models import (
    AICleaning,
    ArticleSettings,
    ArticleSize,
    ArticleType,
    CompiledPrompt,
    LLMProvider,
    PointOfView,
    Readability,
    StructureOptions,
    Tone,
    WriterConfig,
)
from .prompts import SYSTEM_PROMPT, build_article_prompt, compile_prompt, token_budget_for

__all__ = [
    "AICleaning",
    "ArticleSettings",
    "ArticleSize",
    "ArticleType",
    "CompiledPrompt",
    "GenerationInvoker",
    "LLMProvider",
    "PointOfView",
    "Readability",
    "StructureOptions",
    "Tone",
    "WriterConfig",
    "SYSTEM_PROMPT",
    "build_article_prompt",
    "classify_error",
    "compile_prompt",
    "token_budget_for",
]
