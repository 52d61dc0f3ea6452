"""
Chunking module for splitting documents into model-sized sections.

Sections are cut along a delimiter under a token budget, falling back to a
token-level slice only when a single segment is too large on its own.
"""

from .splitters import split_into_sections, take_section
from .utils import analyze_sections, preview_sections, validate_sections


__all__ = [
    # Core splitting functions
    "take_section",
    "split_into_sections",
    # Utility functions
    "validate_sections",
    "analyze_sections",
    "preview_sections",
]
