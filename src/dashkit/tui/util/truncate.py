"""Text truncation utilities for dashkit.

Functions for truncating text to fit within constraints.
"""


def truncate_text(text: str, max_length: int, suffix: str = "…") -> str:
    """Truncate text to maximum length with suffix.

    Args:
        text: Text to truncate
        max_length: Maximum length including suffix
        suffix: Suffix to add when truncated

    Returns:
        Truncated text
    """
    if not text or max_length <= 0:
        return ""

    if len(text) <= max_length:
        return text

    if max_length <= len(suffix):
        return suffix[:max_length]

    return text[:max_length - len(suffix)] + suffix

