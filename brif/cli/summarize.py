"""
Command-line interface for summarizing a book.

Usage:
    python -m brif summarize
    python -m brif summarize --url https://www.gutenberg.org/cache/epub/64317/pg64317.txt
    python -m brif summarize --file book.txt --target-size 500 --output outputs/book_summary.json
"""

import argparse
import sys
from typing import Any, Dict

from brif.config import Config
from brif.exceptions import BrifError
from brif.logging_config import get_logger, setup_logging
from brif.summarization import summarize_document
from brif.tokens import TokenCounter
from brif.utils import OpenAICompletionClient, estimate_cost

from .common import add_source_arguments, load_source, print_summary_stats, save_json_output


logger = get_logger(__name__)


def summarize_book(config: Config, url: str | None = None, file: str | None = None,
                   gutenberg: bool = False, output_path: str | None = None,
                   ask_user_confirmation: bool = False) -> Dict[str, Any] | None:
    """
    CLI wrapper for summarizing one document with progress printing and file I/O.

    Args:
        config: Validated run configuration
        url: Gutenberg URL to download (defaults to ``config.source_url``)
        file: Local file to read instead of downloading
        gutenberg: Whether to strip Gutenberg markers from a local file
        output_path: Optional JSON file for the result
        ask_user_confirmation: Whether to ask before spending money on API calls

    Returns:
        The ``summarize_document`` result, or None if the user cancelled
    """
    context_size = config.resolved_context_size()

    print("🤖 Starting summarization...")
    print(f"🧠 Model: {config.model} (context {context_size} tokens)")
    print(f"🎯 Target summary size: {config.target_summary_size} tokens")

    text = load_source(url, file, config.source_url, gutenberg=gutenberg)

    token_counter = TokenCounter.for_model(config.model)
    num_tokens = token_counter.count(text)
    print(f"📄 Text contains {len(text)} characters")
    print(f"📄 Text contains {num_tokens} tokens")

    try:
        price = estimate_cost(config.model, num_tokens)
        print(f"💰 The approximate price of this summary will be on the order of: ${price:.6f}")
    except ValueError:
        logger.debug(f"No price estimate available for {config.model}")

    if ask_user_confirmation:
        response = input("Proceed with API calls? (y/n): ").strip().lower()
        if response not in ['y', 'yes']:
            print("❎ Cancelled")
            return None

    client = OpenAICompletionClient(config.api_key, model=config.model)
    result = summarize_document(
        text,
        client=client,
        token_counter=token_counter,
        context_size=context_size,
        target_size=config.target_summary_size,
        delimiter=config.delimiter,
        max_attempts=config.max_attempts,
        max_depth=config.max_depth,
    )

    print("\n📝 Final summary:\n")
    print(result["summary"])

    metadata = result["metadata"]
    usage = metadata["usage"]
    print_summary_stats({
        "input_tokens": metadata["input_tokens"],
        "input_budget": metadata["input_budget"],
        "summary_tokens": metadata["summary_tokens"],
        "completion_calls": usage["calls"],
        "completion_attempts": usage["attempts"],
        "api_tokens": usage["total_tokens"],
        "cost_usd": f"${usage['total_cost']:.6f}",
        "processing_time_s": metadata["processing_time"],
    })

    if output_path:
        save_json_output(result, output_path)

    return result


def _apply_overrides(config: Config, args: argparse.Namespace) -> Config:
    overrides = {
        "model": args.model,
        "context_size": args.context_size,
        "target_summary_size": args.target_size,
        "delimiter": args.delimiter,
        "max_depth": args.max_depth,
        "log_level": args.log_level,
    }
    for field_name, value in overrides.items():
        if value is not None:
            setattr(config, field_name, value)
    return config


def main():
    """Main CLI entry point for summarization."""
    parser = argparse.ArgumentParser(
        description="Summarize a book recursively to a fixed token budget",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Summarize The Metamorphosis (default source)
  python -m brif summarize

  # Summarize a local file to a 500-token summary and keep the result
  python -m brif summarize --file book.txt --target-size 500 --output outputs/summary.json

  # Use a model with a larger context window
  python -m brif summarize --model gpt-4o-mini --target-size 2000

Environment:
  OPENAI_API_KEY   API credential (required)
  RUN_MODE=dev     Verbose debug logging
        """
    )

    add_source_arguments(parser)

    parser.add_argument("--model", "-m", help="Model to use (default: BRIF_MODEL or gpt-3.5-turbo)")
    parser.add_argument("--context-size", type=int, help="Override the model context window in tokens")
    parser.add_argument("--target-size", "-t", type=int, help="Target summary size in tokens (default: 1000)")
    parser.add_argument("--delimiter", "-d", help="Boundary delimiter for splitting (default: '.')")
    parser.add_argument("--max-depth", type=int, help="Maximum recursion depth (default: 50)")
    parser.add_argument("--output", "-o", help="Save the summary and run metadata to this JSON file")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Set logging level (default: BRIF_LOG_LEVEL or WARNING)",
    )
    parser.add_argument(
        "--confirm",
        action="store_true",
        help="Ask for confirmation after the price estimate, before any API call",
    )

    args = parser.parse_args()

    try:
        config = _apply_overrides(Config.from_env(), args)
        config.validate(require_api_key=True)
        setup_logging(log_level=config.effective_log_level(), verbose=config.is_dev)

        summarize_book(
            config,
            url=args.url,
            file=args.file,
            gutenberg=args.gutenberg,
            output_path=args.output,
            ask_user_confirmation=args.confirm,
        )

    except BrifError as e:
        logger.error(f"Summarization failed: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        logger.warning("Summarization interrupted by user")
        sys.exit(1)


if __name__ == "__main__":
    main()
