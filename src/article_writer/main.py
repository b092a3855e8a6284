"""CLI entry point for article generation and history.

The --user flag (or ARTICLE_USER_ID) stands in for the signed-in user.

Usage:
    python -m src.article_writer.main generate --title "Best Coffee" --keywords "coffee,brew" \
        --type Listicle --size Small --tone Friendly --structure lists,conclusion
    python -m src.article_writer.main generate --title "Best Coffee" --keywords coffee --dry-run
    python -m src.article_writer.main list --search coffee --sort articleSize --order asc
    python -m src.article_writer.main show <article-id>
    python -m src.article_writer.main export <article-id> --output data/exports/
    python -m src.article_writer.main delete <article-id>
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path

from src.article_store.query import ALL_TYPES, SortField, SortOrder
from src.article_store.store import ArticleStore
from src.common.config import DATA_EXPORTS_DIR, settings
from src.common.errors import ArticleEngineError
from src.common.logging import setup_logging

from .invoker import GenerationInvoker
from .models import (
    AICleaning,
    ArticleSize,
    ArticleType,
    DEFAULT_STRUCTURE,
    LLMProvider,
    NEUTRAL,
    PointOfView,
    Readability,
    Tone,
    WriterConfig,
)
from .prompts import compile_prompt
from .service import ArticleService, UserContext, parse_settings

# Module loggers under src.* all report through the package handler
setup_logging()
logger = logging.getLogger("src.article_writer.main")


def _choices(enum_cls, neutral: bool = True) -> list[str]:
    values = [m.value for m in enum_cls]
    return [NEUTRAL] + values if neutral else values


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate and manage SEO articles")
    parser.add_argument(
        "--user",
        default=os.getenv("ARTICLE_USER_ID", ""),
        help="Signed-in user id (default: $ARTICLE_USER_ID)",
    )
    parser.add_argument("--db", help="SQLite database path (default from settings)")
    sub = parser.add_subparsers(dest="command", required=True)

    gen = sub.add_parser("generate", help="Generate and save a new article")
    gen.add_argument("--title", required=True)
    gen.add_argument("--keywords", required=True, help="Comma-separated keywords")
    gen.add_argument("--type", default=NEUTRAL, choices=_choices(ArticleType))
    gen.add_argument("--size", default=ArticleSize.MEDIUM.value, choices=_choices(ArticleSize, False))
    gen.add_argument("--tone", default=NEUTRAL, choices=_choices(Tone))
    gen.add_argument("--pov", default=NEUTRAL, choices=_choices(PointOfView))
    gen.add_argument("--readability", default=NEUTRAL, choices=_choices(Readability))
    gen.add_argument(
        "--ai-cleaning",
        default=AICleaning.NONE.value,
        choices=_choices(AICleaning, False),
    )
    gen.add_argument(
        "--structure",
        default=",".join(DEFAULT_STRUCTURE.enabled()),
        help="Comma-separated structure elements, e.g. conclusion,faqSection,lists",
    )
    gen.add_argument("--language", default=settings.default_language)
    gen.add_argument(
        "--provider",
        choices=[p.value for p in LLMProvider],
        default=settings.llm.provider,
        help="LLM provider (default from settings)",
    )
    gen.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the compiled prompt and token budget without calling the LLM",
    )

    lst = sub.add_parser("list", help="List saved articles")
    lst.add_argument("--search", default="")
    lst.add_argument("--type", default=ALL_TYPES)
    lst.add_argument("--sort", default=SortField.CREATED_AT.value, choices=[f.value for f in SortField])
    lst.add_argument("--order", default=SortOrder.DESC.value, choices=[o.value for o in SortOrder])

    show = sub.add_parser("show", help="Print one article as JSON")
    show.add_argument("article_id")

    export = sub.add_parser("export", help="Write article content to a .txt file")
    export.add_argument("article_id")
    export.add_argument("--output", type=Path, help="Output file or directory")

    delete = sub.add_parser("delete", help="Delete an article")
    delete.add_argument("article_id")

    return parser


def _structure_flags(raw: str) -> dict[str, bool]:
    """Parse "lists, conclusion" into {"lists": True, "conclusion": True}."""
    names = (name.strip() for name in raw.split(","))
    return {name: True for name in names if name}


def _settings_payload(args: argparse.Namespace) -> dict:
    return {
        "title": args.title,
        "keywords": args.keywords,
        "articleType": args.type,
        "articleSize": args.size,
        "tone": args.tone,
        "pointOfView": args.pov,
        "readability": args.readability,
        "aiCleaning": args.ai_cleaning,
        "structure": _structure_flags(args.structure),
        "language": args.language,
    }


def _make_service(args: argparse.Namespace) -> ArticleService:
    invoker = None
    if getattr(args, "provider", None):
        invoker = GenerationInvoker(config=WriterConfig(provider=LLMProvider(args.provider)))
    return ArticleService(store=ArticleStore(args.db), invoker=invoker)


def run(args: argparse.Namespace) -> int:
    if args.command == "generate" and args.dry_run:
        compiled = compile_prompt(parse_settings(_settings_payload(args)))
        print(compiled.text)
        print(f"\n[token budget: {compiled.token_budget}]")
        return 0

    user = UserContext(user_id=args.user or None, is_authenticated=bool(args.user))
    service = _make_service(args)

    if args.command == "generate":
        result = service.generate(user, _settings_payload(args))
        logger.info("Article generated: %s", result.article_id)
        print(result.content)
        print(f"\nSaved as article {result.article_id}")

    elif args.command == "list":
        summaries = service.list_articles(user, args.search, args.type, args.sort, args.order)
        for s in summaries:
            print(
                f"{s.id}  {s.created_at:%Y-%m-%d}  {ArticleSize(s.article_size).description:<26} "
                f"{s.language_name:<10} {s.word_count:>5}w  {s.title}"
            )
        print(f"\n{len(summaries)} total")

    elif args.command == "show":
        article = service.get_article(user, args.article_id)
        print(json.dumps(article.to_dict(), ensure_ascii=False, indent=2))

    elif args.command == "export":
        article = service.get_article(user, args.article_id)
        output = args.output or DATA_EXPORTS_DIR
        if output.is_dir() or output.suffix == "":
            output = output / article.export_filename
        output.parent.mkdir(parents=True, exist_ok=True)
        with open(output, "w", encoding="utf-8") as f:
            f.write(article.content)
        logger.info("Article written to: %s", output)

    elif args.command == "delete":
        service.delete_article(user, args.article_id)
        print(f"Deleted article {args.article_id}")

    return 0


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    try:
        code = run(args)
    except ArticleEngineError as e:
        logger.error("%s (%s)", e.message, e.kind)
        details = getattr(e, "details", None)
        if details:
            for d in details:
                logger.error("  %s: %s", d["field"], d["message"])
        sys.exit(1)
    sys.exit(code)


if __name__ == "__main__":
    main()
