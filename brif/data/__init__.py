"""
Source text loading.

Fetches books from Project Gutenberg (or reads local files) and strips the
license boilerplate around the book body.
"""

from .gutenberg import extract_book_body, fetch_text, load_book, load_text_file


__all__ = [
    "fetch_text",
    "extract_book_body",
    "load_book",
    "load_text_file",
]
