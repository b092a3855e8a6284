"""System prompt and article prompt compilation.

``compile_prompt`` turns an ``ArticleSettings`` into the full instruction
text sent to the text generation service, plus the output token budget.
It is pure: the same settings always produce byte-identical text.

All option → clause tables are module-level read-only mappings.
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Any, Optional

from pydantic import ValidationError

from src.common.languages import language_name

from .models import (
    NEUTRAL,
    SIZE_REQUIREMENTS,
    AICleaning,
    ArticleSettings,
    ArticleSize,
    ArticleType,
    CompiledPrompt,
    PointOfView,
    Readability,
    StructureOptions,
    Tone,
)

SYSTEM_PROMPT = (
    "You are an expert SEO content writer who creates high-quality, engaging "
    "articles that rank well in search engines. Always follow the specific "
    "requirements provided in each prompt."
)

TOKEN_BUDGETS = MappingProxyType({
    ArticleSize.X_SMALL: 2000,
    ArticleSize.SMALL: 4000,
    ArticleSize.MEDIUM: 6000,
    ArticleSize.LARGE: 8000,
})
DEFAULT_TOKEN_BUDGET = 4000

TONE_CLAUSES = MappingProxyType({
    Tone.FRIENDLY: "Use a warm, approachable, and conversational tone",
    Tone.PROFESSIONAL: "Maintain a formal, business-appropriate tone",
    Tone.INFORMATIONAL: "Focus on providing clear, educational information",
    Tone.TRANSACTIONAL: "Include clear calls-to-action and conversion-focused language",
    Tone.INSPIRATIONAL: "Use motivational and uplifting language",
    Tone.NEUTRAL: "Maintain an objective and unbiased tone",
    Tone.WITTY: "Include clever humor and wordplay where appropriate",
    Tone.CASUAL: "Use informal, relaxed language",
    Tone.AUTHORITATIVE: "Demonstrate expertise and confidence",
    Tone.ENCOURAGING: "Use supportive and motivating language",
    Tone.PERSUASIVE: "Focus on convincing the reader of your viewpoint",
    Tone.POETIC: "Use literary and expressive language",
})

POINT_OF_VIEW_CLAUSES = MappingProxyType({
    PointOfView.FIRST_PERSON_SINGULAR: 'Write from "I", "me", "my", "mine" perspective',
    PointOfView.FIRST_PERSON_PLURAL: 'Write from "we", "us", "our", "ours" perspective',
    PointOfView.SECOND_PERSON: 'Write from "you", "your", "yours" perspective',
    PointOfView.THIRD_PERSON: 'Write from "he", "she", "it", "they" perspective',
})

READABILITY_CLAUSES = MappingProxyType({
    Readability.GRADE_5: "Use simple vocabulary and short sentences (11-year-old reading level)",
    Readability.GRADE_6: "Use conversational language with moderate complexity",
    Readability.GRADE_7: "Use fairly easy to read language with some complexity",
    Readability.GRADE_8_9: "Use easily understood language with moderate complexity",
    Readability.GRADE_10_12: "Use fairly difficult language with complex sentences",
    Readability.COLLEGE: "Use difficult language with academic vocabulary",
    Readability.COLLEGE_GRADUATE: "Use very difficult language with sophisticated vocabulary",
    Readability.PROFESSIONAL: "Use extremely difficult language specific to the industry",
})

AI_CLEANING_CLAUSES = MappingProxyType({
    AICleaning.BASIC: (
        'Avoid common AI phrases like "in conclusion", "furthermore", '
        '"moreover", "in addition", etc.'
    ),
    AICleaning.EXTENDED: (
        "Eliminate all detectable AI patterns and phrases. "
        "Write like a human expert would naturally write."
    ),
})

# Keyed by StructureOptions field name; iteration follows the model's field order
STRUCTURE_LABELS = MappingProxyType({
    "conclusion": "Conclusion section",
    "faq_section": "FAQ section",
    "tables": "Data tables",
    "h3_headings": "H3 subheadings within sections",
    "lists": "Bulleted or numbered lists",
    "italics": "Italic text for emphasis",
    "bold": "Bold text for emphasis",
    "quotes": "Relevant quotes",
    "key_takeaways": "Key takeaways section",
})

CONTENT_GUIDELINES = """\
CONTENT GUIDELINES:
1. Create a compelling, SEO-friendly title that includes the main keywords
2. Write an engaging introduction that hooks the reader and includes the primary keywords
3. Develop {h2} well-structured H2 sections with relevant content
4. Naturally incorporate the keywords throughout the content ({language} language)
5. Ensure proper heading hierarchy (H1 > H2 > H3)
6. Include meta descriptions and SEO best practices
7. Write unique, valuable content that provides real insights
8. Use proper grammar, spelling, and punctuation in {language}
9. Ensure the content flows logically and is easy to read
10. Include internal/external linking opportunities where relevant"""

SEO_REQUIREMENTS = """\
SEO REQUIREMENTS:
- Keyword density: 1-2% for main keywords
- Include LSI (Latent Semantic Indexing) keywords naturally
- Use semantic HTML5 structure
- Include meta title (50-60 characters) and description (150-160 characters)
- Ensure mobile readability
- Include relevant entities and concepts"""

CLOSING_INSTRUCTION = (
    "Please write the complete article now. Start with the title, followed by "
    "the meta description, then the full article content. Make sure to follow "
    "all the specified requirements and create high-quality, engaging content "
    "that ranks well in search engines."
)


def token_budget_for(article_size: Any) -> int:
    """Return the output token ceiling for an article size.

    Unknown sizes fall back to DEFAULT_TOKEN_BUDGET instead of failing.
    """
    try:
        size = ArticleSize(article_size)
    except ValueError:
        return DEFAULT_TOKEN_BUDGET
    return TOKEN_BUDGETS.get(size, DEFAULT_TOKEN_BUDGET)


def _coerce(
    enum_cls: type[Enum],
    value: Any,
    field_name: str,
    optional: bool = True,
) -> Optional[Enum]:
    """Re-check an enumerated value that may have skipped model validation.

    Only optional axes accept None or the "None" wire value.
    """
    if optional and (value is None or value == NEUTRAL):
        return None
    try:
        return enum_cls(value)
    except ValueError:
        raise ValueError(f"Unknown {field_name} value: {value!r}") from None


def _clause(table: MappingProxyType, value: Enum) -> str:
    return table.get(value, value.value)


def _coerce_structure(structure: Any) -> StructureOptions:
    if isinstance(structure, StructureOptions):
        return structure
    try:
        return StructureOptions.model_validate(structure)
    except ValidationError:
        raise ValueError(f"Unknown structure value: {structure!r}") from None


def build_structure_line(structure: StructureOptions) -> str:
    """Return the "- Include: ..." line, or "" when no element is enabled."""
    structure = _coerce_structure(structure)
    labels = [STRUCTURE_LABELS[name] for name in structure.enabled()]
    if not labels:
        return ""
    return f"- Include: {', '.join(labels)}"


def build_article_prompt(settings: ArticleSettings) -> str:
    """Build the full user prompt for an article.

    Args:
        settings: Validated article settings.

    Returns:
        Instruction text for the generation service.

    Raises:
        ValueError: If an enumerated field holds a value outside its options.
    """
    article_size = _coerce(ArticleSize, settings.article_size, "articleSize", optional=False)
    article_type = _coerce(ArticleType, settings.article_type, "articleType")
    tone = _coerce(Tone, settings.tone, "tone")
    point_of_view = _coerce(PointOfView, settings.point_of_view, "pointOfView")
    readability = _coerce(Readability, settings.readability, "readability")
    ai_cleaning = _coerce(AICleaning, settings.ai_cleaning, "aiCleaning", optional=False)

    target_language = language_name(settings.language)
    size_req = SIZE_REQUIREMENTS[article_size]

    lines = [
        "You are an expert SEO content writer. Write a comprehensive, "
        f"SEO-optimized article in {target_language} based on the following specifications:",
        "",
        f"TITLE: {settings.title}",
        f"KEYWORDS: {settings.keywords}",
        "",
        "ARTICLE REQUIREMENTS:",
        f"- Target Language: {target_language}",
        f"- Word Count: {size_req.words} words",
        f"- H2 Headings: {size_req.h2} sections",
        f"- Main Keywords: {settings.keywords}",
    ]

    if article_type is not None:
        lines.append(f"- Article Type: {article_type.value}")
    if tone is not None:
        lines.append(f"- Tone: {_clause(TONE_CLAUSES, tone)}")
    if point_of_view is not None:
        lines.append(f"- Point of View: {_clause(POINT_OF_VIEW_CLAUSES, point_of_view)}")
    if readability is not None:
        lines.append(f"- Readability Level: {_clause(READABILITY_CLAUSES, readability)}")
    if ai_cleaning != AICleaning.NONE:
        lines.append(f"- Content Style: {_clause(AI_CLEANING_CLAUSES, ai_cleaning)}")

    lines += ["", "STRUCTURE REQUIREMENTS:"]
    structure_line = build_structure_line(settings.structure)
    if structure_line:
        lines.append(structure_line)

    lines += [
        "",
        CONTENT_GUIDELINES.format(h2=size_req.h2, language=target_language),
        "",
        SEO_REQUIREMENTS,
        "",
        CLOSING_INSTRUCTION,
    ]
    return "\n".join(lines)


def compile_prompt(settings: ArticleSettings) -> CompiledPrompt:
    """Compile settings into instruction text and a token budget."""
    return CompiledPrompt(
        text=build_article_prompt(settings),
        token_budget=token_budget_for(settings.article_size),
    )
