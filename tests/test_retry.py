#!/usr/bin/env python3
"""
Tests for the retrying completion wrapper.
"""

import unittest

from brif.exceptions import ExhaustedRetriesError, TransientCompletionError
from brif.prompts import build_messages
from brif.summarization import RetryingCompleter

from fakes import FakeClient


class TestRetryingCompleter(unittest.TestCase):
    """Test cases for RetryingCompleter."""

    def setUp(self):
        self.sleeps = []

    def _completer(self, client, **kwargs):
        return RetryingCompleter(client, backoff=lambda: 2, sleep=self.sleeps.append, **kwargs)

    def test_success_first_attempt(self):
        """A healthy client is called once and never waited on."""
        client = FakeClient("short summary")
        completer = self._completer(client)

        result = completer.complete("some text", 1000)

        self.assertEqual(result.content, "short summary")
        self.assertEqual(len(client.calls), 1)
        self.assertEqual(self.sleeps, [])
        self.assertEqual(completer.usage["calls"], 1)
        self.assertEqual(completer.usage["attempts"], 1)
        self.assertEqual(completer.usage["total_tokens"], 12)

    def test_sends_fixed_prompt(self):
        """The request carries the two-message prompt and the target as token cap."""
        client = FakeClient("ok")
        self._completer(client).complete("the text", 321)

        self.assertEqual(client.calls[0]["messages"], build_messages("the text", 321))
        self.assertEqual(client.calls[0]["max_tokens"], 321)

    def test_success_on_later_attempt(self):
        """Succeeding on attempt k makes exactly k attempts."""
        for k in (2, 3):
            with self.subTest(k=k):
                self.sleeps.clear()
                outcomes = [TransientCompletionError("rate limited")] * (k - 1) + ["done"]
                client = FakeClient(*outcomes)
                completer = self._completer(client)

                result = completer.complete("text", 100)

                self.assertEqual(result.content, "done")
                self.assertEqual(len(client.calls), k)
                self.assertEqual(self.sleeps, [2] * (k - 1))
                self.assertEqual(completer.usage["attempts"], k)
                self.assertEqual(completer.usage["calls"], 1)

    def test_exhausted_after_three_attempts(self):
        """A client that always fails is tried three times, then gives up."""
        error = TransientCompletionError("server error")
        client = FakeClient(error)
        completer = self._completer(client)

        with self.assertRaises(ExhaustedRetriesError) as ctx:
            completer.complete("text", 100)

        self.assertEqual(len(client.calls), 3)
        self.assertEqual(ctx.exception.attempts, 3)
        self.assertIs(ctx.exception.last_error, error)
        self.assertIs(ctx.exception.__cause__, error)
        # No sleep after the final attempt
        self.assertEqual(self.sleeps, [2, 2])
        self.assertEqual(completer.usage["calls"], 0)

    def test_every_failure_kind_retried(self):
        """Non-transient exceptions are retried the same way."""
        client = FakeClient(ValueError("unexpected"), "fine")
        result = self._completer(client).complete("text", 100)

        self.assertEqual(result.content, "fine")
        self.assertEqual(len(client.calls), 2)

    def test_custom_attempt_limit(self):
        """The attempt limit is configurable."""
        client = FakeClient(TransientCompletionError("nope"))

        with self.assertRaises(ExhaustedRetriesError):
            self._completer(client, max_attempts=5).complete("text", 100)

        self.assertEqual(len(client.calls), 5)

    def test_failures_logged(self):
        """Each failed attempt is logged."""
        client = FakeClient(TransientCompletionError("flaky"), "ok")

        with self.assertLogs("brif.summarization.retry", level="WARNING") as logs:
            self._completer(client).complete("text", 100)

        self.assertEqual(len(logs.records), 1)
        self.assertIn("request 1 failed: flaky", logs.output[0])

    def test_default_backoff_range(self):
        """Default backoff picks whole seconds from 1 to 4."""
        completer = RetryingCompleter(FakeClient("ok"))
        values = {completer.backoff() for _ in range(200)}

        self.assertTrue(values <= {1, 2, 3, 4})
        self.assertGreater(len(values), 1)


if __name__ == "__main__":
    unittest.main()
