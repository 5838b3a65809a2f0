"""Text helpers."""


def truncate_text(text: str, max_length: int, suffix: str = "...") -> str:
    """Shorten ``text`` to at most ``max_length`` characters, suffix included.

    Prefers to cut at a word boundary when one is close to the limit.

    Example:
        >>> truncate_text("This is a very long text that needs truncating", max_length=30)
        'This is a very long text...'
    """
    if not text or len(text) <= max_length:
        return text

    cut_at = max_length - len(suffix)
    if cut_at <= 0:
        return suffix[:max_length]

    truncated = text[:cut_at]
    last_space = truncated.rfind(" ")
    if last_space > cut_at * 0.8:
        truncated = truncated[:last_space]

    return truncated.rstrip() + suffix
