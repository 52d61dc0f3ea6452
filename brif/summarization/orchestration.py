"""
End-to-end summarization of one document with run metadata.
"""

import time
from typing import Any, Dict

from ..logging_config import get_logger
from ..prompts import strip_summary_markers
from .budget import compute_input_budget
from .core import DEFAULT_MAX_DEPTH, RecursiveSummarizer
from .retry import MAX_ATTEMPTS, RetryingCompleter

logger = get_logger(__name__)


def summarize_document(
    text: str,
    client,
    token_counter,
    context_size: int,
    target_size: int = 1000,
    delimiter: str = ".",
    max_attempts: int = MAX_ATTEMPTS,
    max_depth: int = DEFAULT_MAX_DEPTH,
    max_calls: int | None = None,
    completer: RetryingCompleter | None = None,
) -> Dict[str, Any]:
    """
    Reduce a whole document to a single summary.

    Args:
        text: Document to summarize
        client: Completion client for the model
        token_counter: Token counter for the same model
        context_size: Model context window in tokens
        target_size: Requested summary size in tokens
        delimiter: Boundary delimiter for splitting
        max_attempts: Attempts per completion call
        max_depth: Recursion depth limit
        max_calls: Optional completion-call limit
        completer: Pre-built retrying completer (overrides client/max_attempts)

    Returns:
        {
            "summary": str,
            "metadata": {
                "model": str | None,
                "context_size": int,
                "target_size": int,
                "input_budget": int,
                "delimiter": str,
                "input_tokens": int,
                "summary_tokens": int,
                "usage": {...},
                "processing_time": float
            }
        }

    Raises:
        ConfigurationError: If the context cannot fit the prompt and target size
        ExhaustedRetriesError: If a completion call failed on every attempt
        DepthExceededError: If the reduction does not converge within limits
    """
    start_time = time.time()

    budget = compute_input_budget(context_size, target_size, token_counter)
    if completer is None:
        completer = RetryingCompleter(client, max_attempts=max_attempts)
    summarizer = RecursiveSummarizer(completer, token_counter, max_depth=max_depth, max_calls=max_calls)

    input_tokens = token_counter.count(text)
    logger.info(f"Summarizing {input_tokens} tokens to {target_size} with input budget {budget}")

    summary = strip_summary_markers(summarizer.summarize(text, target_size, budget, delimiter))

    return {
        "summary": summary,
        "metadata": {
            "model": getattr(token_counter, "model", None),
            "context_size": context_size,
            "target_size": target_size,
            "input_budget": budget,
            "delimiter": delimiter,
            "input_tokens": input_tokens,
            "summary_tokens": token_counter.count(summary),
            "usage": dict(completer.usage),
            "processing_time": time.time() - start_time,
        },
    }
