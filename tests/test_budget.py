#!/usr/bin/env python3
"""
Tests for the input-token budget calculation.
"""

import unittest

from brif.exceptions import ConfigurationError
from brif.prompts import build_messages
from brif.summarization import RetryingCompleter, compute_input_budget

from fakes import CharTokenCounter, FakeClient


class TestComputeInputBudget(unittest.TestCase):
    """Test cases for compute_input_budget."""

    def test_gpt35_example(self):
        """4097 context, 1000 target and 50 tokens of prompt leave 3047."""
        budget = compute_input_budget(4097, 1000, CharTokenCounter(overhead=50))
        self.assertEqual(budget, 3047)

    def test_uses_rendered_prompt(self):
        """Overhead is the empty-body prompt rendered for the target size."""
        counter = CharTokenCounter()
        overhead = counter.count_messages(build_messages("", 500))

        self.assertEqual(compute_input_budget(4097, 500, counter), 4097 - overhead - 500)

    def test_target_size_changes_prompt(self):
        """The target size is both reserved and rendered into the prompt."""
        counter = CharTokenCounter()
        small = compute_input_budget(10000, 5, counter)
        large = compute_input_budget(10000, 5000, counter)

        self.assertEqual(small - large, (5000 - 5) + (len("5000") - len("5")))

    def test_overhead_matches_sent_prompt(self):
        """The prompt measured for the budget is the one the completer sends."""
        client = FakeClient("done")
        RetryingCompleter(client, backoff=lambda: 0, sleep=lambda seconds: None).complete("", 100)

        counter = CharTokenCounter()
        overhead = counter.count_messages(client.calls[0]["messages"])

        self.assertEqual(compute_input_budget(1000, 100, counter), 900 - overhead)

    def test_non_positive_budget(self):
        """A context too small for prompt and target is a configuration error."""
        with self.assertRaises(ConfigurationError):
            compute_input_budget(1050, 1000, CharTokenCounter(overhead=50))

        with self.assertRaises(ConfigurationError):
            compute_input_budget(100, 1000, CharTokenCounter(overhead=50))


if __name__ == "__main__":
    unittest.main()
