"""Text helpers for normalizing provider output."""

from urllib.parse import quote, urlparse

ELLIPSIS = "..."

# Fraction of the budget past which a word boundary is an acceptable cut point
WORD_BOUNDARY_RATIO = 0.8


def truncate_snippet(text: str | None, max_length: int = 450) -> str:
    """Truncate text to max_length, preferring to cut at a word boundary.

    The cut moves back to the last space only if that space lies within the
    final 20% of the budget; otherwise the word is split. An ellipsis is
    appended whenever the text was shortened, so the result is at most
    max_length + 3 characters.

    Args:
        text: Text to truncate (None is treated as empty)
        max_length: Character budget before the ellipsis

    Returns:
        The original text if it fits, otherwise the truncated text plus "..."
    """
    if not text or len(text) <= max_length:
        return text or ""

    truncated = text[:max_length]
    last_space = truncated.rfind(" ")

    if last_space > max_length * WORD_BOUNDARY_RATIO:
        return truncated[:last_space] + ELLIPSIS

    return truncated + ELLIPSIS


def extract_domain(url: str | None) -> str:
    """Return the hostname of url without a leading 'www.', or 'unknown'."""
    if not url:
        return "unknown"
    try:
        hostname = urlparse(url).hostname
    except ValueError:
        return "unknown"
    if not hostname:
        return "unknown"
    return hostname.removeprefix("www.")


def encode_component(value: str) -> str:
    """Percent-encode a URL component with the same safe set as JS encodeURIComponent."""
    return quote(value, safe="!*'()")
