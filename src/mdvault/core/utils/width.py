"""Terminal display width of text, independent of its encoded length"""

from wcwidth import wcswidth, wcwidth


def char_width(ch: str) -> int:
    """Return the number of columns a single character occupies; control characters count as 0."""
    return max(wcwidth(ch), 0)


def display_width(text: str) -> int:
    """Return the display width of text, e.g. 7 for 'deƒault' (8 bytes in UTF-8).

    Grapheme sequences (emoji with modifiers or zero-width joiners) count as one
    glyph. Control characters, which wcswidth rejects, are measured as 0 columns.
    """
    width = wcswidth(text)
    return width if width >= 0 else sum(char_width(ch) for ch in text)
