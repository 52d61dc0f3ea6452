#!/usr/bin/env python3
"""
Tests for token counting.
"""

import json
import unittest
from unittest.mock import MagicMock, patch

from brif.exceptions import TokenizationError
from brif.tokens import DEFAULT_ENCODING, TokenCounter, context_size_for_model


class FakeEncoding:
    """Stand-in encoding: one token per character code."""

    name = "fake"

    def encode(self, text, disallowed_special=()):
        return [ord(c) for c in text]

    def decode(self, ids):
        return "".join(chr(i) for i in ids)


class TestTokenCounter(unittest.TestCase):
    """Test cases for TokenCounter."""

    def setUp(self):
        self.counter = TokenCounter(FakeEncoding(), model="gpt-3.5-turbo")

    def test_encode_decode_count(self):
        """Counting, encoding and decoding go through the encoding."""
        ids = self.counter.encode("hello")

        self.assertEqual(len(ids), 5)
        self.assertEqual(self.counter.count("hello"), 5)
        self.assertEqual(self.counter.decode(ids), "hello")

    def test_special_tokens_are_plain_text(self):
        """Special-token strings in a document must not raise."""
        encoding = MagicMock()
        encoding.encode.return_value = [1, 2, 3]
        TokenCounter(encoding).count("<|endoftext|>")

        encoding.encode.assert_called_once_with("<|endoftext|>", disallowed_special=())

    def test_count_messages_uses_json(self):
        """Messages are measured through their compact JSON rendering."""
        messages = [{"role": "user", "content": "hi"}]
        expected = len(json.dumps(messages, separators=(",", ":")))

        self.assertEqual(self.counter.count_messages(messages), expected)

    def test_encode_failure(self):
        """Encoder errors surface as TokenizationError."""
        encoding = MagicMock()
        encoding.encode.side_effect = ValueError("bad input")

        with self.assertRaises(TokenizationError):
            TokenCounter(encoding).encode("text")

    def test_decode_failure(self):
        """Decoder errors surface as TokenizationError."""
        encoding = MagicMock()
        encoding.decode.side_effect = KeyError(99999999)

        with self.assertRaises(TokenizationError):
            TokenCounter(encoding).decode([99999999])

    @patch("brif.tokens.tiktoken")
    def test_for_model_known(self, mock_tiktoken):
        """Known models get their own encoding."""
        mock_tiktoken.encoding_for_model.return_value = FakeEncoding()

        counter = TokenCounter.for_model("gpt-4")

        mock_tiktoken.encoding_for_model.assert_called_once_with("gpt-4")
        mock_tiktoken.get_encoding.assert_not_called()
        self.assertEqual(counter.model, "gpt-4")

    @patch("brif.tokens.tiktoken")
    def test_for_model_unknown_falls_back(self, mock_tiktoken):
        """Unknown models fall back to the default encoding with a warning."""
        mock_tiktoken.encoding_for_model.side_effect = KeyError("no-such-model")
        mock_tiktoken.get_encoding.return_value = FakeEncoding()

        with self.assertLogs("brif.tokens", level="WARNING"):
            counter = TokenCounter.for_model("no-such-model")

        mock_tiktoken.get_encoding.assert_called_once_with(DEFAULT_ENCODING)
        self.assertIsInstance(counter.encoding, FakeEncoding)

    def test_context_sizes(self):
        """Context windows are looked up by model name."""
        self.assertEqual(context_size_for_model("gpt-3.5-turbo"), 4097)
        self.assertEqual(context_size_for_model("gpt-4"), 8192)
        self.assertIsNone(context_size_for_model("unknown-model"))


if __name__ == "__main__":
    unittest.main()
