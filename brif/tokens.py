"""
Token counting for prompts and documents.

Wraps a tiktoken encoding chosen by model identifier so that every size
decision in the summarizer (budget, splitting, pass-through) is made with the
same encoder the model uses.
"""

import json

try:
    import tiktoken
except ImportError:
    raise ImportError("tiktoken package not installed. Run: pip install tiktoken") from None

from .exceptions import TokenizationError
from .logging_config import get_logger


logger = get_logger(__name__)

DEFAULT_ENCODING = "cl100k_base"

# Context windows (prompt + completion) in tokens
MODEL_CONTEXT_SIZES = {
    "gpt-3.5-turbo": 4097,
    "gpt-3.5-turbo-0613": 4097,
    "gpt-3.5-turbo-16k": 16385,
    "gpt-3.5-turbo-0125": 16385,
    "gpt-4": 8192,
    "gpt-4-32k": 32768,
    "gpt-4o": 128000,
    "gpt-4o-mini": 128000,
    "gpt-4.1": 1047576,
    "gpt-4.1-mini": 1047576,
}


def context_size_for_model(model: str) -> int | None:
    """Return the known context window for a model, or None if unknown."""
    return MODEL_CONTEXT_SIZES.get(model)


class TokenCounter:
    """Encode, decode and count tokens with a single tiktoken encoding."""

    def __init__(self, encoding, model: str | None = None):
        self.encoding = encoding
        self.model = model

    @classmethod
    def for_model(cls, model: str) -> "TokenCounter":
        """Pick the encoding that belongs to ``model``."""
        try:
            encoding = tiktoken.encoding_for_model(model)
        except KeyError:
            logger.warning(f"No tiktoken encoding registered for model '{model}', using {DEFAULT_ENCODING}")
            encoding = tiktoken.get_encoding(DEFAULT_ENCODING)
        logger.debug(f"Using encoding {encoding.name} for model {model}")
        return cls(encoding, model=model)

    def encode(self, text: str) -> list[int]:
        try:
            # Special-token strings inside a book are plain text
            return self.encoding.encode(text, disallowed_special=())
        except Exception as e:
            raise TokenizationError(f"Failed to encode text: {e}") from e

    def decode(self, ids: list[int]) -> str:
        try:
            return self.encoding.decode(ids)
        except Exception as e:
            raise TokenizationError(f"Failed to decode {len(ids)} tokens: {e}") from e

    def count(self, text: str) -> int:
        return len(self.encode(text))

    def count_messages(self, messages: list[dict[str, str]]) -> int:
        """
        Count the tokens of a chat message list.

        Messages are measured through their compact JSON rendering, which
        over-approximates the per-message framing the API adds.
        """
        rendered = json.dumps(messages, separators=(",", ":"), ensure_ascii=False)
        return self.count(rendered)
