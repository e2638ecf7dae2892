"""Brace-balanced block extraction."""

from dataclasses import dataclass


@dataclass
class BlockResult:
    """Body of a ``{ ... }`` block and where it closed.

    ``end`` is the offset of the closing brace, or ``len(text)`` when the
    block ran off the end of the text (``terminated`` is then False).
    """
    body: str
    end: int
    terminated: bool = True


def extract_block(text: str, start: int) -> BlockResult:
    """Return the body of the block whose opening brace sits at ``start - 1``.

    Depth starts at 1 and is tracked by counting every ``{`` and ``}``,
    including braces that appear inside quoted strings.

    >>> extract_block("a = {b = {1}}, c", 5).body
    'b = {1}'
    """
    start = max(0, min(start, len(text)))
    depth = 1
    for i in range(start, len(text)):
        ch = text[i]
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return BlockResult(body=text[start:i], end=i)
    return BlockResult(body=text[start:], end=len(text), terminated=False)


def strip_nested_blocks(body: str) -> str:
    """Remove every ``{ ... }`` group from a table body, keeping the rest.

    Used to get the flat part of a table that also carries sub-tables.
    """
    parts = []
    cursor = 0
    while True:
        open_at = body.find("{", cursor)
        if open_at == -1:
            parts.append(body[cursor:])
            break
        parts.append(body[cursor:open_at])
        block = extract_block(body, open_at + 1)
        if not block.terminated:
            break
        cursor = block.end + 1
    return "".join(parts)
