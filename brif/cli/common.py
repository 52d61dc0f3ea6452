"""
Common utilities for CLI modules.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any

from brif.data import load_book, load_text_file
from brif.logging_config import get_logger


logger = get_logger(__name__)


def add_source_arguments(parser: argparse.ArgumentParser) -> None:
    """Add the mutually exclusive --url / --file source options."""
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--url", "-u",
        help="URL of a Project Gutenberg plain-text book (default: BRIF_SOURCE_URL or The Metamorphosis)",
    )
    source.add_argument(
        "--file", "-f",
        help="Local UTF-8 text file to read instead of downloading",
    )
    parser.add_argument(
        "--gutenberg",
        action="store_true",
        help="Strip Gutenberg header/footer markers from --file input (always done for --url)",
    )


def load_source(url: str | None, file: str | None, default_url: str, gutenberg: bool = False) -> str:
    """
    Load the document to process from a local file or a Gutenberg URL.

    Raises:
        SourceFetchError: If the source cannot be read or has the wrong shape
    """
    if file:
        print(f"📥 Reading: {file}")
        return load_text_file(file, gutenberg=gutenberg)

    source_url = url or default_url
    print(f"📥 Downloading: {source_url}")
    return load_book(source_url)


def save_json_output(
    data: dict[str, Any], output_path: str, pretty: bool = True
) -> None:
    """
    Save data to JSON file with error handling.

    Args:
        data: Data to save
        output_path: Path to save the JSON file
        pretty: Whether to pretty-print the JSON
    """
    try:
        output_file = Path(output_path)
        output_file.parent.mkdir(parents=True, exist_ok=True)

        with open(output_file, "w", encoding="utf-8") as f:
            if pretty:
                json.dump(data, f, indent=2, ensure_ascii=False)
            else:
                json.dump(data, f, ensure_ascii=False)

        print(f"✅ Output saved to: {output_file}")

    except OSError as e:
        print(f"❌ Error saving output to {output_path}: {e}", file=sys.stderr)
        sys.exit(1)


def print_summary_stats(stats: dict[str, Any]) -> None:
    """
    Print formatted summary statistics.

    Args:
        stats: Statistics dictionary to display
    """
    print("\n📊 Summary Statistics:")
    for key, value in stats.items():
        if isinstance(value, float):
            print(f"  {key}: {value:.1f}")
        else:
            print(f"  {key}: {value}")
