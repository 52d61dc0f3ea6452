"""
Recursive reduction of a document to a summary under a token target.

Three cases, checked in order for every piece of text:

- already small (fewer than ``target_size`` tokens): returned unchanged
- fits one call (at most ``budget`` tokens): summarized by the model
- too large: split into sections, each section reduced on its own, the
  section summaries joined with blank lines, and the result reduced again

Model-written section summaries are wrapped in ``[[[ ]]]`` before they are
joined so the next call can weigh them as whole-passage stand-ins.
"""

from tqdm import tqdm

from ..chunk import split_into_sections
from ..exceptions import DepthExceededError
from ..logging_config import get_logger
from ..prompts import wrap_summary

logger = get_logger(__name__)

DEFAULT_MAX_DEPTH = 50
SECTION_SEPARATOR = "\n\n"


class RecursiveSummarizer:
    """
    Reduce text of any length to a summary that fits ``target_size`` tokens.

    Args:
        completer: ``RetryingCompleter`` (or anything with ``complete(text, target_size)``)
        token_counter: ``TokenCounter`` for the model being called
        max_depth: Deepest recursion allowed before giving up
        max_calls: Optional cap on completion calls per ``summarize`` run
    """

    def __init__(self, completer, token_counter, max_depth: int = DEFAULT_MAX_DEPTH, max_calls: int | None = None):
        self.completer = completer
        self.token_counter = token_counter
        self.max_depth = max_depth
        self.max_calls = max_calls

    def summarize(self, text: str, target_size: int, budget: int, delimiter: str = ".") -> str:
        """
        Summarize ``text`` to at most ``target_size`` tokens (best effort).

        Args:
            text: Document, section, or concatenated summaries
            target_size: Requested summary size in tokens
            budget: Maximum input tokens per completion call
            delimiter: Boundary delimiter for splitting oversized text

        Returns:
            The summary; summary markers from inner levels may still be present

        Raises:
            ExhaustedRetriesError: If a completion call failed on every attempt
            DepthExceededError: If the reduction does not converge within limits
        """
        calls = [0]
        summary, _ = self._reduce(text, target_size, budget, delimiter, depth=0, calls=calls)
        logger.info(f"Summarization finished with {calls[0]} completion calls")
        return summary

    def _reduce(self, text: str, target_size: int, budget: int, delimiter: str,
                depth: int, calls: list[int]) -> tuple[str, bool]:
        """Return (text, whether the model produced it)."""
        if depth > self.max_depth:
            raise DepthExceededError(depth, self.max_depth)

        num_tokens = self.token_counter.count(text)

        # no need to summarize
        if num_tokens < target_size:
            return text, False

        if num_tokens <= budget:
            calls[0] += 1
            if self.max_calls is not None and calls[0] > self.max_calls:
                raise DepthExceededError(calls[0], self.max_calls, what="completion calls")
            logger.debug(f"Summarizing {num_tokens} tokens at depth {depth}")
            result = self.completer.complete(text, target_size)
            return result.content, True

        sections = split_into_sections(text, budget, delimiter, self.token_counter, target_size)
        logger.info(f"Depth {depth}: {num_tokens} tokens split into {len(sections)} sections")

        summaries = []
        for section in tqdm(sections, desc=f"Summarizing sections (depth {depth})", unit="section",
                            disable=len(sections) < 2, leave=False):
            summary, summarized = self._reduce(section, target_size, budget, delimiter, depth + 1, calls)
            summaries.append(wrap_summary(summary) if summarized else summary)

        combined = SECTION_SEPARATOR.join(summaries)
        return self._reduce(combined, target_size, budget, delimiter, depth + 1, calls)
