"""
HTML stripping for citizen-entered text.

Report titles, descriptions and update-log messages are plain text. All
markup is removed with bleach before storage so nothing a citizen types is
ever rendered as HTML by a client.
"""

import html
from typing import Optional

import bleach


def sanitize_plain_text(content: Optional[str]) -> Optional[str]:
    """
    Strip all HTML tags and surrounding whitespace.

    Entities escaped by bleach are decoded again so the result is the plain
    text the citizen typed, minus markup.

    Args:
        content: Raw content from user input

    Returns:
        Plain text with all HTML removed, or None if input is None

    Examples:
        >>> sanitize_plain_text('<b>Bold</b> text ')
        'Bold text'
        >>> sanitize_plain_text("Lights & signs")
        'Lights & signs'
    """
    if content is None:
        return None

    return html.unescape(bleach.clean(content, tags=[], strip=True)).strip()


def sanitize_area_names(areas: list[str]) -> list[str]:
    """Strip markup from area names, dropping any that end up empty."""
    cleaned = []
    for area in areas:
        name = sanitize_plain_text(area)
        if name and name not in cleaned:
            cleaned.append(name)
    return cleaned
