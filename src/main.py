# src/main.py — v1
"""CLI entry point: score, match, paragraphs, batch-requests, build-cache commands.

Usage:
    bialign score <original> <source_text> --collection <id>
    bialign match --sentences <s> [<s> ...] --target <translated paragraph>
    bialign paragraphs <text.txt> [--language hebrew|english] [--id-prefix lecture_12]
    bialign batch-requests <paragraphs.jsonl> [-o <requests.jsonl>]
    bialign build-cache <requests.jsonl> <batch_output.jsonl>
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from bialign.version import __version__

logger = logging.getLogger(__name__)

EXIT_TRANSLATION_ERROR = 2


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    from bialign.config.settings import ConfigurationError, load_settings

    try:
        settings = load_settings()
    except ConfigurationError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 1
    _setup_logging(settings, args.verbose)

    try:
        return asyncio.run(args.func(args, settings))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except Exception as exc:
        logger.error("Fatal error: %s", exc, exc_info=args.verbose)
        return 1


def cli() -> None:
    """Console-script wrapper."""
    sys.exit(main())


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="bialign",
        description=f"bialign v{__version__}: bilingual alignment scoring",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command")

    # --- score ---
    p_score = subparsers.add_parser(
        "score", help="Score an original paragraph against a source-language paragraph",
    )
    p_score.add_argument("original", help="Original (target-language) paragraph")
    p_score.add_argument("source_text", help="Source-language paragraph to translate")
    p_score.add_argument(
        "-c", "--collection", required=True,
        help="Collection id whose cache scope to use (e.g. lecture number)",
    )
    p_score.add_argument(
        "--flush", action="store_true",
        help="Persist the cache scope afterwards if it was not loaded from disk",
    )
    p_score.set_defaults(func=_cmd_score)

    # --- match ---
    p_match = subparsers.add_parser(
        "match", help="Match source sentences to sentences of a translated paragraph",
    )
    p_match.add_argument(
        "-s", "--sentences", nargs="+", required=True, help="Source sentences, in order",
    )
    p_match.add_argument(
        "-t", "--target", required=True, help="Translated target paragraph",
    )
    p_match.set_defaults(func=_cmd_match)

    # --- paragraphs ---
    p_para = subparsers.add_parser(
        "paragraphs", help="Split a plain-text file into paragraph JSONL for batch-requests",
    )
    p_para.add_argument(
        "text", type=Path, help="UTF-8 text file, paragraphs separated by blank lines",
    )
    p_para.add_argument(
        "-l", "--language", choices=("hebrew", "english"), default="hebrew",
        help="hebrew canonicalizes punctuation; english drops German-only paragraphs",
    )
    p_para.add_argument(
        "-p", "--id-prefix", default=None,
        help="request_id prefix, e.g. lecture_12 (collection 12)",
    )
    p_para.add_argument(
        "-o", "--output", type=Path, default=None,
        help="Output path (default: <text>_paragraphs.jsonl)",
    )
    p_para.set_defaults(func=_cmd_paragraphs)

    # --- batch-requests ---
    p_batch = subparsers.add_parser(
        "batch-requests", help="Convert paragraph JSONL into OpenAI batch requests",
    )
    p_batch.add_argument("input", type=Path, help="JSONL with 'paragraph' and 'request_id'")
    p_batch.add_argument(
        "-o", "--output", type=Path, default=None,
        help="Output path (default: <input>_openai_batch.jsonl)",
    )
    p_batch.set_defaults(func=_cmd_batch_requests)

    # --- build-cache ---
    p_cache = subparsers.add_parser(
        "build-cache", help="Write per-collection caches from batch translations",
    )
    p_cache.add_argument("requests", type=Path, help="Batch request JSONL")
    p_cache.add_argument("responses", type=Path, help="Batch output JSONL")
    p_cache.add_argument(
        "--cache-root", type=Path, default=None,
        help="Cache directory (default: CACHE_ROOT setting)",
    )
    p_cache.set_defaults(func=_cmd_build_cache)

    return parser


async def _cmd_score(args: argparse.Namespace, settings) -> int:
    from bialign.api.facade import AlignmentEngine
    from bialign.core.models import TranslationError

    engine = AlignmentEngine.from_settings(settings)
    await engine.load_cache(args.collection)
    outcome = await engine.score_pair(args.original, args.source_text, args.collection)
    if args.flush:
        await engine.flush_cache()

    if isinstance(outcome, TranslationError):
        print(json.dumps({"error": outcome.reason}, ensure_ascii=False))
        return EXIT_TRANSLATION_ERROR
    print(outcome.model_dump_json())
    return 0


async def _cmd_match(args: argparse.Namespace, settings) -> int:
    from bialign.embeddings.shared import get_shared_embedder
    from bialign.scoring.matcher import SentenceMatcher
    from bialign.scoring.scorer import SimilarityScorer
    from bialign.text.sentence_splitter import split_sentences

    # No translation involved, so no LLM client is built
    matcher = SentenceMatcher(SimilarityScorer(get_shared_embedder(settings.embedding_model)))
    matches = await matcher.match(args.sentences, split_sentences(args.target))
    print(json.dumps([m.model_dump() for m in matches]))
    return 0


async def _cmd_paragraphs(args: argparse.Namespace, settings) -> int:
    from bialign.translation.batch import write_paragraph_jsonl

    text_path: Path = args.text
    output_path: Path = args.output or text_path.with_name(f"{text_path.stem}_paragraphs.jsonl")
    count = write_paragraph_jsonl(
        text_path, output_path, language=args.language, id_prefix=args.id_prefix,
    )
    print(f"Wrote {count} paragraphs to {output_path}")
    return 0


async def _cmd_batch_requests(args: argparse.Namespace, settings) -> int:
    from bialign.translation.batch import build_batch_requests

    input_path: Path = args.input
    output_path: Path = args.output or input_path.with_name(
        f"{input_path.stem}_openai_batch.jsonl"
    )
    count = build_batch_requests(
        input_path,
        output_path,
        model=settings.llm_model,
        source_language=settings.translation_source_language,
        target_language=settings.translation_target_language,
    )
    print(f"Wrote {count} requests to {output_path}")
    return 0


async def _cmd_build_cache(args: argparse.Namespace, settings) -> int:
    from bialign.cache.jsonl_store import JsonlCacheStore
    from bialign.translation.batch import build_caches_from_batch

    store = JsonlCacheStore(args.cache_root or settings.cache_root)
    written = build_caches_from_batch(args.requests, args.responses, store)
    for collection_id, count in written.items():
        print(f"Collection {collection_id}: {count} records -> {store.path_for(collection_id)}")
    return 0


def _setup_logging(settings, verbose: bool) -> None:
    """Configure logging for CLI usage."""
    from bialign.logging.logger import setup_logging

    setup_logging(
        level="DEBUG" if verbose else settings.log_level,
        log_format=settings.log_format,
        log_file=settings.log_file,
        rotation=settings.log_rotation,
        retention=settings.log_retention,
    )
    # Quiet noisy libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


if __name__ == "__main__":
    sys.exit(main())
