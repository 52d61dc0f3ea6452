"""
brif Summarization Module

Recursive, token-budget-aware summarization of arbitrarily long documents.

Main Functions:
- summarize_document: Budget, reduce, strip markers, report usage
- compute_input_budget: Input tokens available per completion call
- RecursiveSummarizer: The reduction driver
- RetryingCompleter: Completion calls with bounded, jittered retry

Usage Example:
    from brif.summarization import summarize_document
    from brif.tokens import TokenCounter
    from brif.utils import OpenAICompletionClient

    result = summarize_document(
        book_text,
        client=OpenAICompletionClient(api_key, model="gpt-3.5-turbo"),
        token_counter=TokenCounter.for_model("gpt-3.5-turbo"),
        context_size=4097,
        target_size=1000,
    )
    print(result["summary"])
"""

from .budget import compute_input_budget
from .core import RecursiveSummarizer
from .orchestration import summarize_document
from .retry import RetryingCompleter


__all__ = [
    "summarize_document",
    "compute_input_budget",
    "RecursiveSummarizer",
    "RetryingCompleter",
]
