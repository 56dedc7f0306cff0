"""Small text helpers."""

QUOTE_CHARS = ('"', "'")


def unquote(text: str) -> str:
    """Strip one layer of matching single or double quotes; otherwise return text unchanged."""
    if len(text) >= 2 and text[0] in QUOTE_CHARS and text[0] == text[-1]:
        return text[1:-1]
    return text
