"""
Quote-aware removal of ``//`` and ``/* */`` comments from document text.
"""

QUOTE_CHARS = ("\"", "'")


def strip_comments(text: str) -> str:
    """Remove line and block comments that occur outside string literals.

    Comment markers inside single- or double-quoted strings are preserved,
    escaped quotes do not terminate a string, and an unterminated block
    comment swallows the rest of the text.

    Args:
        text: Raw document text

    Returns:
        Text with comments removed
    """
    result: list[str] = []
    i = 0
    length = len(text)
    quote: str | None = None

    while i < length:
        char = text[i]

        if quote is not None:
            result.append(char)
            if char == "\\" and i + 1 < length:
                result.append(text[i + 1])
                i += 2
                continue
            if char == quote:
                quote = None
            i += 1
            continue

        if char in QUOTE_CHARS:
            quote = char
            result.append(char)
            i += 1
            continue

        next_char = text[i + 1] if i + 1 < length else ""

        if char == "/" and next_char == "/":
            end = text.find("\n", i + 2)
            # The newline itself is kept so line numbers stay meaningful
            i = length if end == -1 else end
            continue

        if char == "/" and next_char == "*":
            end = text.find("*/", i + 2)
            i = length if end == -1 else end + 2
            continue

        result.append(char)
        i += 1

    return "".join(result)
