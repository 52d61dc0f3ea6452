"""
Token-budget-aware section splitting.

Sections are cut along a delimiter so that sentences are only broken when a
single delimiter-bounded segment is too large to fit the budget on its own.
"""

import logging

from ..exceptions import ChunkingError, TokenizationError
from ..prompts import build_messages


logger = logging.getLogger(__name__)


def _non_empty_segments(text: str, delimiter: str) -> list[str]:
    return [segment for segment in text.split(delimiter) if segment.strip()]


def _hard_slice(text: str, budget: int, token_counter) -> tuple[str, str]:
    """
    Cut the first ``budget`` tokens off ``text``, ignoring delimiters.

    The decoded token span is located in the original string so the remainder
    is measured in characters. A span ending inside a multi-byte character
    does not decode to a prefix of ``text``; back off one token at a time
    until it does.
    """
    ids = token_counter.encode(text)[:budget]
    for end in range(len(ids), 0, -1):
        chunk = token_counter.decode(ids[:end])
        if chunk and text.startswith(chunk):
            if end < len(ids):
                logger.debug(f"Hard slice backed off {len(ids) - end} tokens to land on a character boundary")
            return chunk, text[len(chunk):]
    raise TokenizationError(
        f"Could not decode any prefix of the first {len(ids)} tokens back into the source text"
    )


def take_section(text: str, budget: int, delimiter: str, token_counter, target_size: int) -> tuple[str, str]:
    """
    Take one section off the front of ``text``.

    Args:
        text: Text to split
        budget: Maximum tokens a section may occupy, prompt overhead included
        delimiter: Boundary delimiter to respect
        token_counter: Object with ``count``, ``count_messages``, ``encode`` and ``decode``
        target_size: Summary size the prompt is rendered with (affects overhead)

    Returns:
        (section, remainder); remainder is empty once everything has been emitted
    """
    overhead = token_counter.count_messages(build_messages("", target_size))
    current_count = overhead
    segments = _non_empty_segments(text, delimiter)

    for i, segment in enumerate(segments):
        segment_count = token_counter.count(segment + delimiter)
        if current_count + segment_count >= budget:
            if i == 0:
                # No delimiter boundary inside the budget
                logger.debug(f"First segment alone exceeds {budget} tokens, slicing on tokens")
                return _hard_slice(text, budget, token_counter)
            if i == 1:
                return segments[0] + delimiter, delimiter.join(segments[1:])
            # The boundary segment goes back into the remainder
            return delimiter.join(segments[:i - 1]), delimiter.join(segments[i - 1:])
        current_count += segment_count

    # Runs of empty segments (dot leaders, ellipses) are not charged above
    if overhead + token_counter.count(text) >= budget:
        logger.debug(f"Skipped delimiters push the text past {budget} tokens, slicing on tokens")
        return _hard_slice(text, budget, token_counter)

    return text, ""


def split_into_sections(text: str, budget: int, delimiter: str, token_counter, target_size: int) -> list[str]:
    """
    Split text into ordered sections that each fit within ``budget`` tokens.

    Raises:
        ChunkingError: If input parameters are invalid
    """
    if not isinstance(text, str):
        raise ChunkingError(f"text must be a string, got {type(text).__name__}")

    if not isinstance(budget, int) or budget <= 0:
        raise ChunkingError(f"budget must be a positive integer, got {budget!r}")

    if not isinstance(delimiter, str) or len(delimiter) == 0:
        raise ChunkingError("delimiter must be a non-empty string")

    sections = []
    remainder = text
    while remainder:
        section, remainder = take_section(remainder, budget, delimiter, token_counter, target_size)
        sections.append(section)

    logger.debug(f"Split {len(text)} characters into {len(sections)} sections (budget {budget})")
    return sections
