"""Utility functions for schemabrowser."""

from __future__ import annotations


def substring_match(pattern: str, text: str) -> tuple[bool, list[int]]:
    """Case-insensitive containment check returning the matched indices.

    Args:
        pattern: The search text (e.g., "view" to match "UserView")
        text: The text to search in

    Returns:
        Tuple of (matches, indices) where indices cover the first occurrence.
    """
    if not pattern:
        return True, []

    start = text.lower().find(pattern.lower())
    if start < 0:
        return False, []
    return True, list(range(start, start + len(pattern)))


def highlight_matches(text: str, indices: list[int], style: str = "bold yellow") -> str:
    """Highlight matched characters in text using Rich markup.

    Args:
        text: The original, unescaped text
        indices: List of character indices to highlight
        style: Rich style string for highlighting (default: "bold yellow")

    Returns:
        Text with Rich markup highlighting the matched characters.
    """
    if not indices:
        return text

    from rich.markup import escape as escape_markup

    result = []
    idx_set = set(indices)

    for i, char in enumerate(text):
        if i in idx_set:
            result.append(f"[{style}]{escape_markup(char)}[/]")
        else:
            result.append(escape_markup(char))

    return "".join(result)
