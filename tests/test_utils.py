#!/usr/bin/env python3
"""
Tests for the OpenAI completion client and cost helpers.
"""

import unittest
from types import SimpleNamespace
from unittest.mock import MagicMock

import openai

from brif.exceptions import ConfigurationError, TransientCompletionError
from brif.utils import OpenAICompletionClient, estimate_cost


def _response(content=" A summary. ", prompt_tokens=1000, completion_tokens=200):
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=content), finish_reason="stop")],
        usage=SimpleNamespace(prompt_tokens=prompt_tokens, completion_tokens=completion_tokens),
    )


class TestOpenAICompletionClient(unittest.TestCase):
    """Test cases for OpenAICompletionClient."""

    def setUp(self):
        self.api = MagicMock()
        self.client = OpenAICompletionClient(None, model="gpt-3.5-turbo", client=self.api)
        self.messages = [{"role": "system", "content": "s"}, {"role": "user", "content": "u"}]

    def test_request_and_result(self):
        """The request carries model, messages and token cap; content is stripped."""
        self.api.chat.completions.create.return_value = _response()

        result = self.client.complete(self.messages, 1000)

        self.api.chat.completions.create.assert_called_once_with(
            model="gpt-3.5-turbo", messages=self.messages, max_completion_tokens=1000
        )
        self.assertEqual(result.content, "A summary.")
        self.assertEqual(result.finish_reason, "stop")
        self.assertEqual(result.usage["input_tokens"], 1000)
        self.assertEqual(result.usage["output_tokens"], 200)
        self.assertEqual(result.usage["total_tokens"], 1200)
        self.assertAlmostEqual(result.usage["total_cost"], 0.0008)

    def test_extra_request_parameters(self):
        """Extra keyword arguments are passed through to the API."""
        client = OpenAICompletionClient(None, model="gpt-4o", client=self.api, temperature=0.2)
        self.api.chat.completions.create.return_value = _response()

        client.complete(self.messages, 50)

        self.assertEqual(self.api.chat.completions.create.call_args.kwargs["temperature"], 0.2)

    def test_api_error_is_transient(self):
        """OpenAI errors become TransientCompletionError."""
        self.api.chat.completions.create.side_effect = openai.OpenAIError("rate limit")

        with self.assertRaises(TransientCompletionError):
            self.client.complete(self.messages, 1000)

    def test_empty_choices(self):
        """A response without choices is treated as a failed call."""
        self.api.chat.completions.create.return_value = SimpleNamespace(choices=[], usage=None)

        with self.assertRaises(TransientCompletionError):
            self.client.complete(self.messages, 1000)

    def test_missing_api_key(self):
        """Building a real client without a key is a configuration error."""
        with self.assertRaises(ConfigurationError):
            OpenAICompletionClient(None)

        with self.assertRaises(ConfigurationError):
            OpenAICompletionClient("")


class TestEstimateCost(unittest.TestCase):
    """Test cases for cost estimation."""

    def test_known_model(self):
        """Costs follow the per-1M-token price table."""
        self.assertAlmostEqual(estimate_cost("gpt-3.5-turbo", 1_000_000), 0.50)
        self.assertAlmostEqual(estimate_cost("gpt-3.5-turbo", 1_000_000, 1_000_000), 2.00)

    def test_unknown_model(self):
        """Models without pricing raise ValueError."""
        with self.assertRaises(ValueError):
            estimate_cost("mystery-model", 100)


if __name__ == "__main__":
    unittest.main()
