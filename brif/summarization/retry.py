"""
Bounded retry around a completion client.

Every failure is treated the same way: log it, sleep a short random backoff,
try again, and give up after a fixed number of attempts.
"""

import random
import time
from typing import Callable

from tenacity import RetryError, Retrying, retry_if_exception_type, stop_after_attempt

from ..exceptions import ExhaustedRetriesError
from ..logging_config import get_logger
from ..prompts import build_messages
from ..utils import CompletionResult

logger = get_logger(__name__)

MAX_ATTEMPTS = 3
BACKOFF_RANGE = (1, 4)  # seconds, inclusive


class RetryingCompleter:
    """
    Summarize text through a completion client, retrying failed calls.

    Args:
        client: Object with ``complete(messages, max_tokens) -> CompletionResult``
        max_attempts: Attempts per call before giving up
        backoff: Zero-argument callable returning the seconds to wait before a retry
        sleep: Function used to wait (``time.sleep`` unless tests replace it)
    """

    def __init__(self, client, max_attempts: int = MAX_ATTEMPTS,
                 backoff: Callable[[], float] | None = None,
                 sleep: Callable[[float], None] = time.sleep):
        self.client = client
        self.max_attempts = max_attempts
        if backoff is None:
            rng = random.Random()
            backoff = lambda: rng.randint(*BACKOFF_RANGE)
        self.backoff = backoff
        self.sleep = sleep
        self.usage = {
            "calls": 0,
            "attempts": 0,
            "input_tokens": 0,
            "output_tokens": 0,
            "total_tokens": 0,
            "total_cost": 0.0,
        }

    def _wait(self, retry_state) -> float:
        seconds = self.backoff()
        logger.info(f"Sleeping for {seconds} seconds...")
        return seconds

    def _log_failure(self, retry_state) -> None:
        logger.warning(
            f"request {retry_state.attempt_number} failed: {retry_state.outcome.exception()}"
        )

    def _attempt(self, messages: list[dict[str, str]], max_tokens: int) -> CompletionResult:
        self.usage["attempts"] += 1
        return self.client.complete(messages, max_tokens)

    def complete(self, text: str, target_size: int) -> CompletionResult:
        """
        Ask for a summary of ``text`` of at most ``target_size`` tokens.

        Raises:
            ExhaustedRetriesError: If every attempt failed
        """
        messages = build_messages(text, target_size)
        retrying = Retrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=self._wait,
            retry=retry_if_exception_type(Exception),
            after=self._log_failure,
            sleep=self.sleep,
        )
        try:
            result = retrying(self._attempt, messages, target_size)
        except RetryError as e:
            last_error = e.last_attempt.exception()
            raise ExhaustedRetriesError(self.max_attempts, last_error) from last_error

        self.usage["calls"] += 1
        for key in ("input_tokens", "output_tokens", "total_tokens", "total_cost"):
            self.usage[key] += result.usage.get(key, 0)
        return result
