"""
Main entry point for brif.

Enables: python -m brif [command] [args]
"""

import sys

from brif.logging_config import get_logger, setup_logging


# Set up logger for main entry point
logger = get_logger(__name__)


def main():
    """Main entry point that delegates to appropriate CLI modules."""
    # Set up basic logging for error messages
    setup_logging(log_level="INFO")

    if len(sys.argv) < 2:
        print_help()
        return

    command = sys.argv[1]

    # Remove the command from argv so submodules see the right arguments
    sys.argv = [sys.argv[0]] + sys.argv[2:]

    if command == "summarize":
        from brif.cli.summarize import main as summarize_main

        summarize_main()
    elif command == "chunk":
        from brif.cli.chunk import main as chunk_main

        chunk_main()
    elif command == "help" or command == "-h" or command == "--help":
        print_help()
    else:
        logger.error(f"Unknown command: {command}")
        print_help()
        sys.exit(1)


def print_help():
    """Print main help message."""
    print("brif - recursive book summarization under a token budget")
    print()
    print("Usage:")
    print("  python -m brif <command> [options]")
    print()
    print("Available commands:")
    print("  summarize       Summarize a book to a target number of tokens")
    print("  chunk           Split a book into model-sized sections (no API calls)")
    print("  help            Show this help message")
    print()
    print("Examples:")
    print("  python -m brif summarize")
    print("  python -m brif summarize --file book.txt --target-size 500")
    print("  python -m brif chunk --budget 3000 --preview")
    print("  python -m brif help")
    print()
    print("For command-specific help:")
    print("  python -m brif summarize --help")
    print("  python -m brif chunk --help")


if __name__ == "__main__":
    main()
