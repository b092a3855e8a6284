"""Data models for the article writer module.

``ArticleSettings`` is the validated request for one article. Wire payloads
use camelCase keys (``articleType``, ``pointOfView`` ...) and the string
"None" for an unset stylistic axis; in Python the axes are plain optional
fields.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

# Wire value for an unset optional axis
NEUTRAL = "None"


class LLMProvider(str, Enum):
    """Supported LLM providers."""
    OPENAI = "openai"
    ANTHROPIC = "anthropic"


class ArticleType(str, Enum):
    """Kind of article to write."""
    HOW_TO_GUIDE = "How-to guide"
    LISTICLE = "Listicle"
    PRODUCT_REVIEW = "Product review"
    NEWS = "News"
    COMPARISON = "Comparison"
    CASE_STUDY = "Case study"
    OPINION_PIECE = "Opinion piece"
    TUTORIAL = "Tutorial"
    ROUNDUP_POST = "Roundup post"
    QA_PAGE = "Q&A page"


class ArticleSize(str, Enum):
    """Article length class."""
    X_SMALL = "X-Small"
    SMALL = "Small"
    MEDIUM = "Medium"
    LARGE = "Large"

    @property
    def description(self) -> str:
        """Label with the word range, e.g. "Medium (2400-3600 words)"."""
        return f"{self.value} ({SIZE_REQUIREMENTS[self].words} words)"


@dataclass(frozen=True)
class SizeRequirement:
    """Word range and H2 heading range for an article size."""
    words: str
    h2: str


SIZE_REQUIREMENTS = MappingProxyType({
    ArticleSize.X_SMALL: SizeRequirement(words="600-1200", h2="2-5"),
    ArticleSize.SMALL: SizeRequirement(words="1200-2400", h2="5-8"),
    ArticleSize.MEDIUM: SizeRequirement(words="2400-3600", h2="9-12"),
    ArticleSize.LARGE: SizeRequirement(words="3600-5200", h2="13-16"),
})


class Tone(str, Enum):
    """Writing tone."""
    FRIENDLY = "Friendly"
    PROFESSIONAL = "Professional"
    INFORMATIONAL = "Informational"
    TRANSACTIONAL = "Transactional"
    INSPIRATIONAL = "Inspirational"
    NEUTRAL = "Neutral"
    WITTY = "Witty"
    CASUAL = "Casual"
    AUTHORITATIVE = "Authoritative"
    ENCOURAGING = "Encouraging"
    PERSUASIVE = "Persuasive"
    POETIC = "Poetic"


class PointOfView(str, Enum):
    """Grammatical person the article is written in."""
    FIRST_PERSON_SINGULAR = "First person singular"
    FIRST_PERSON_PLURAL = "First person plural"
    SECOND_PERSON = "Second person"
    THIRD_PERSON = "Third person"


class Readability(str, Enum):
    """Target reading level."""
    GRADE_5 = "5th grade"
    GRADE_6 = "6th grade"
    GRADE_7 = "7th grade"
    GRADE_8_9 = "8th & 9th grade"
    GRADE_10_12 = "10th to 12th grade"
    COLLEGE = "College"
    COLLEGE_GRADUATE = "College graduate"
    PROFESSIONAL = "Professional"


class AICleaning(str, Enum):
    """How aggressively typical AI phrasing is suppressed."""
    NONE = "No AI Words Removal"
    BASIC = "Basic AI Words Removal"
    EXTENDED = "Extended AI Words Removal"


class StructureOptions(BaseModel):
    """Structural elements requested in the article.

    Field order is significant: the prompt lists the enabled elements in
    exactly this order.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    conclusion: bool = False
    faq_section: bool = False
    tables: bool = False
    h3_headings: bool = False
    lists: bool = False
    italics: bool = False
    bold: bool = False
    quotes: bool = False
    key_takeaways: bool = False

    def enabled(self) -> list[str]:
        """Names of enabled elements, in declared order."""
        return [name for name in type(self).model_fields if getattr(self, name)]


# Defaults offered by the generator form
DEFAULT_STRUCTURE = StructureOptions(
    conclusion=True,
    h3_headings=True,
    lists=True,
    italics=True,
    bold=True,
)


class ArticleSettings(BaseModel):
    """Validated, immutable configuration for one article generation."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    title: str = Field(min_length=1, max_length=200)
    keywords: str = Field(min_length=1, max_length=500)
    article_type: Optional[ArticleType] = None
    article_size: ArticleSize = ArticleSize.MEDIUM
    tone: Optional[Tone] = None
    point_of_view: Optional[PointOfView] = None
    readability: Optional[Readability] = None
    ai_cleaning: AICleaning = AICleaning.NONE
    structure: StructureOptions = Field(default_factory=StructureOptions)
    language: str = Field(default="en", min_length=1)

    @field_validator("article_type", "tone", "point_of_view", "readability", mode="before")
    @classmethod
    def _neutral_to_none(cls, value: Any) -> Any:
        if value == NEUTRAL:
            return None
        return value

    def to_payload(self) -> dict:
        """Serialize to the camelCase wire shape ("None" for unset axes)."""
        data = self.model_dump(mode="json", by_alias=True)
        for key in ("articleType", "tone", "pointOfView", "readability"):
            if data[key] is None:
                data[key] = NEUTRAL
        return data


@dataclass
class WriterConfig:
    """Configuration for the generation invoker."""
    provider: LLMProvider = LLMProvider.OPENAI
    model: str = ""  # Empty = use default from settings


@dataclass(frozen=True)
class CompiledPrompt:
    """Instruction text plus the output ceiling for the generation service."""
    text: str
    token_budget: int
