"""Backslash escapes shared by bare values and expression operands."""

ESCAPABLE = {".", "\\", "+", "-", "*", "/", "%", "(", ")"}
# stands in for escaped characters when looking for expression syntax
MASK = "_"


def mask_escapes(text: str) -> tuple[str, list[tuple[int, str]]]:
    """Replace valid escape pairs with a placeholder; collect invalid escapes as (offset, sequence)."""
    masked: list[str] = []
    invalid: list[tuple[int, str]] = []
    position = 0
    while position < len(text):
        char = text[position]
        if char != "\\":
            masked.append(char)
            position += 1
            continue
        following = text[position + 1 : position + 2]
        if following in ESCAPABLE:
            masked.append(MASK * 2)
        else:
            invalid.append((position, text[position : position + 2]))
            masked.append(MASK + (following or ""))
        position += 2
    return "".join(masked), invalid


def decode_string(text: str) -> str:
    decoded: list[str] = []
    position = 0
    while position < len(text):
        char = text[position]
        if char == "\\":
            decoded.append(text[position + 1])
            position += 2
        else:
            decoded.append(char)
            position += 1
    return "".join(decoded)


__all__ = ["ESCAPABLE", "MASK", "decode_string", "mask_escapes"]
