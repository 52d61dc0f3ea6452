"""
Utilities for section validation and analysis.
"""

import re


def _content(text: str, delimiter: str) -> str:
    return re.sub(r"\s+", "", text.replace(delimiter, ""))


def validate_sections(original_text: str, sections: list[str], delimiter: str = ".") -> bool:
    """
    Verify that sections preserve all content of the original text.

    Comparison ignores delimiters and whitespace, which the splitter may drop
    or move at section boundaries.

    Args:
        original_text: Original text before splitting
        sections: List of sections in emission order
        delimiter: Delimiter used for splitting

    Returns:
        True if sections preserve all original content, False otherwise
    """
    if not sections:
        return not _content(original_text, delimiter)

    reconstructed = "".join(_content(section, delimiter) for section in sections)
    return reconstructed == _content(original_text, delimiter)


def analyze_sections(sections: list[str], token_counter=None, delimiter: str = ".") -> dict:
    """
    Analyze section statistics for debugging and budget tuning.

    Args:
        sections: List of sections
        token_counter: Optional token counter; adds token statistics when given
        delimiter: Delimiter used for splitting

    Returns:
        Dictionary with section analysis statistics
    """
    if not sections:
        return {
            "num_sections": 0,
            "total_chars": 0,
            "avg_section_size": 0,
            "min_section_size": 0,
            "max_section_size": 0,
            "size_std": 0,
        }

    section_sizes = [len(section) for section in sections]
    total_chars = sum(section_sizes)
    avg_size = total_chars / len(sections)

    variance = sum((size - avg_size) ** 2 for size in section_sizes) / len(sections)
    std_dev = variance**0.5

    stats = {
        "num_sections": len(sections),
        "total_chars": total_chars,
        "avg_section_size": round(avg_size, 1),
        "min_section_size": min(section_sizes),
        "max_section_size": max(section_sizes),
        "size_std": round(std_dev, 1),
        "delimiter": repr(delimiter),
    }

    if token_counter is not None:
        token_sizes = [token_counter.count(section) for section in sections]
        stats.update({
            "total_tokens": sum(token_sizes),
            "min_section_tokens": min(token_sizes),
            "max_section_tokens": max(token_sizes),
        })

    return stats


def preview_sections(sections: list[str], max_preview: int = 100) -> list[str]:
    """
    Create preview of sections for debugging (truncated for readability).

    Args:
        sections: List of sections
        max_preview: Maximum characters to show per section

    Returns:
        List of truncated section previews
    """
    previews = []
    for i, section in enumerate(sections):
        preview = section if len(section) <= max_preview else section[:max_preview] + "..."

        # Replace newlines with visible characters for debugging
        preview = preview.replace("\n", "\\n").replace("\t", "\\t")
        previews.append(f"Section {i + 1}: {preview}")

    return previews
