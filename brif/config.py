"""Configuration management for brif."""

import os
from dataclasses import dataclass
from typing import Optional

from .exceptions import ConfigurationError
from .tokens import context_size_for_model


METAMORPHOSIS_URL = "https://www.gutenberg.org/cache/epub/64317/pg64317.txt"

VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _int_env(name: str, default: Optional[int]) -> Optional[int]:
    value = os.getenv(name)
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {value!r}") from None


@dataclass
class Config:
    """Run configuration with sensible defaults."""

    api_key: Optional[str] = None
    run_mode: str = "prod"
    model: str = "gpt-3.5-turbo"
    context_size: Optional[int] = None  # None = look up from the model
    target_summary_size: int = 1000
    delimiter: str = "."
    source_url: str = METAMORPHOSIS_URL
    max_attempts: int = 3
    max_depth: int = 50
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> 'Config':
        """Load configuration from environment variables."""
        return cls(
            api_key=os.getenv('OPENAI_API_KEY'),
            run_mode=os.getenv('RUN_MODE', 'prod'),
            model=os.getenv('BRIF_MODEL', 'gpt-3.5-turbo'),
            context_size=_int_env('BRIF_CONTEXT_SIZE', None),
            target_summary_size=_int_env('BRIF_TARGET_SUMMARY_SIZE', 1000),
            delimiter=os.getenv('BRIF_DELIMITER', '.'),
            source_url=os.getenv('BRIF_SOURCE_URL', METAMORPHOSIS_URL),
            max_attempts=_int_env('BRIF_MAX_ATTEMPTS', 3),
            max_depth=_int_env('BRIF_MAX_DEPTH', 50),
            log_level=os.getenv('BRIF_LOG_LEVEL', 'WARNING'),
        )

    @property
    def is_dev(self) -> bool:
        return self.run_mode == "dev"

    def resolved_context_size(self) -> int:
        """Context window for the configured model, honoring an explicit override."""
        if self.context_size is not None:
            return self.context_size
        size = context_size_for_model(self.model)
        if size is None:
            raise ConfigurationError(
                f"Unknown context size for model '{self.model}'. Set BRIF_CONTEXT_SIZE or --context-size."
            )
        return size

    def effective_log_level(self) -> str:
        """Dev runs always log everything."""
        return "DEBUG" if self.is_dev else self.log_level.upper()

    def validate(self, require_api_key: bool = False) -> None:
        """
        Validate configuration values.

        Args:
            require_api_key: Also fail when no OpenAI API key is configured
        """
        if require_api_key and not self.api_key:
            raise ConfigurationError("OPENAI_API_KEY is not set")

        if self.context_size is not None and self.context_size <= 0:
            raise ConfigurationError("context_size must be positive")

        if self.target_summary_size <= 0:
            raise ConfigurationError("target_summary_size must be positive")

        if not self.delimiter:
            raise ConfigurationError("delimiter cannot be empty")

        if self.max_attempts <= 0:
            raise ConfigurationError("max_attempts must be positive")

        if self.max_depth <= 0:
            raise ConfigurationError("max_depth must be positive")

        if self.log_level.upper() not in VALID_LOG_LEVELS:
            raise ConfigurationError(f"Invalid log_level: {self.log_level}. Must be one of: {VALID_LOG_LEVELS}")

        # Raises for models we cannot size
        self.resolved_context_size()
