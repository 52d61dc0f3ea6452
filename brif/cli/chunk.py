"""
Command-line interface for splitting a document into model-sized sections.

Nothing is sent to the model; this shows how a document would be divided
for a given budget.

Usage:
    python -m brif chunk
    python -m brif chunk --file book.txt --budget 3000 --preview
    python -m brif chunk --target-size 500 --output outputs/sections.json
"""

import argparse
import sys
from typing import Any

from brif.chunk import analyze_sections, preview_sections, split_into_sections, validate_sections
from brif.config import Config
from brif.exceptions import BrifError, ValidationError
from brif.logging_config import get_logger, setup_logging
from brif.summarization import compute_input_budget
from brif.tokens import TokenCounter

from .common import add_source_arguments, load_source, print_summary_stats, save_json_output


logger = get_logger(__name__)


def chunk_document(
    config: Config,
    url: str | None = None,
    file: str | None = None,
    gutenberg: bool = False,
    budget: int | None = None,
    output_path: str | None = None,
    preview: bool = False,
) -> dict[str, Any]:
    """
    Split a document into sections and report statistics.

    Args:
        config: Validated run configuration
        url: Gutenberg URL to download (defaults to ``config.source_url``)
        file: Local file to read instead of downloading
        gutenberg: Whether to strip Gutenberg markers from a local file
        budget: Section budget in tokens (default: the model's input budget)
        output_path: Optional JSON file for the sections
        preview: Whether to print section previews

    Returns:
        Dict with "sections" and "stats"

    Raises:
        ValidationError: If the sections do not preserve the document content
    """
    text = load_source(url, file, config.source_url, gutenberg=gutenberg)
    token_counter = TokenCounter.for_model(config.model)

    if budget is None:
        budget = compute_input_budget(config.resolved_context_size(), config.target_summary_size, token_counter)
    print(f"✂️  Splitting on {config.delimiter!r} with a budget of {budget} tokens")

    sections = split_into_sections(text, budget, config.delimiter, token_counter, config.target_summary_size)

    if not validate_sections(text, sections, config.delimiter):
        raise ValidationError("Content validation failed: sections do not preserve original text")

    stats = analyze_sections(sections, token_counter=token_counter, delimiter=config.delimiter)
    stats["budget"] = budget
    print_summary_stats(stats)

    if preview:
        print("\n👀 Preview:")
        for line in preview_sections(sections):
            print(f"  {line}")

    result = {"sections": sections, "stats": stats}
    if output_path:
        save_json_output(result, output_path)
    return result


def main() -> None:
    """Main CLI entry point for chunking."""
    parser = argparse.ArgumentParser(
        description="Split a document into model-sized sections without summarizing",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    add_source_arguments(parser)

    parser.add_argument("--model", "-m", help="Model whose tokenizer and context size to use")
    parser.add_argument("--context-size", type=int, help="Override the model context window in tokens")
    parser.add_argument("--target-size", "-t", type=int, help="Target summary size in tokens (default: 1000)")
    parser.add_argument("--budget", "-b", type=int, help="Section budget in tokens (default: computed input budget)")
    parser.add_argument("--delimiter", "-d", help="Boundary delimiter for splitting (default: '.')")
    parser.add_argument("--output", "-o", help="Output file path (JSON format)")
    parser.add_argument("--preview", action="store_true", help="Show section previews")
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging with timestamps and module names",
    )

    args = parser.parse_args()

    try:
        config = Config.from_env()
        for field_name, value in (("model", args.model), ("context_size", args.context_size),
                                  ("target_summary_size", args.target_size), ("delimiter", args.delimiter)):
            if value is not None:
                setattr(config, field_name, value)
        config.validate()
        setup_logging(
            log_level="DEBUG" if args.verbose else config.effective_log_level(),
            verbose=args.verbose or config.is_dev,
        )

        chunk_document(
            config,
            url=args.url,
            file=args.file,
            gutenberg=args.gutenberg,
            budget=args.budget,
            output_path=args.output,
            preview=args.preview,
        )

    except BrifError as e:
        logger.error(f"Chunking failed: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        logger.warning("Chunking interrupted by user")
        sys.exit(1)


if __name__ == "__main__":
    main()
