"""Sub-table location and maps-of-maps extraction.

Finds the named sub-tables inside a component body (``attributes``,
``config``, ``crew``...) and walks sections such as ``Shells`` whose
children are tables of their own.
"""

import logging
import re
from dataclasses import dataclass
from typing import Optional

from . import diagnostics as diag
from .blocks import BlockResult, extract_block, strip_nested_blocks
from .diagnostics import DiagnosticSink
from .models import TypedValue
from .parse_config import ParseConfig
from .scalars import NUMBER_PATTERN, extract_scalars, parse_number

logger = logging.getLogger(__name__)

_CHILD_RE = re.compile(r"\b(\w+)\s*=\s*\{")
_QUOTED_RE = re.compile(r'"([^"]*)"')


@dataclass
class Section:
    """A located ``key = { ... }`` sub-table."""
    key: str
    start: int  # offset of the key
    block: BlockResult

    @property
    def body(self) -> str:
        return self.block.body

    @property
    def end(self) -> int:
        """Offset just past the closing brace (or end of text)."""
        return self.block.end + 1 if self.block.terminated else self.block.end


def find_section(text: str, key: str, start: int = 0) -> Optional[Section]:
    """Locate the first ``key = {`` at or after ``start`` and carve its block."""
    pattern = re.compile(rf"\b{re.escape(key)}\s*=\s*\{{")
    m = pattern.search(text, start)
    if not m:
        return None
    return Section(key=key, start=m.start(), block=extract_block(text, m.end()))


def extract_named_children(
    section_body: str,
    config: Optional[ParseConfig] = None,
    sink: Optional[DiagnosticSink] = None,
    component: Optional[str] = None,
) -> dict[str, dict[str, TypedValue]]:
    """Extract ``name = { ... }`` children of a section as scalar mappings.

    Tables nested inside a child are dropped; only its flat keys are kept.

    Stops at the first unterminated child, keeping the children parsed
    before it.
    """
    config = config or ParseConfig.default()
    children: dict[str, dict[str, TypedValue]] = {}
    cursor = 0

    while cursor < len(section_body):
        m = _CHILD_RE.search(section_body, cursor)
        if not m:
            break

        name = m.group(1)
        block = extract_block(section_body, m.end())
        if not block.terminated:
            if sink is not None:
                sink.emit(
                    diag.BLOCK_UNTERMINATED,
                    f"Unterminated child '{name}', stopping section",
                    component=component, child=name,
                )
            break

        if sink is not None:
            sink.emit(
                diag.SHELL_TYPE_FOUND,
                f"Found child '{name}'",
                component=component, child=name,
            )
        children[name] = extract_scalars(strip_nested_blocks(block.body), config)
        cursor = block.end + 1

    return children


def extract_quoted_list(body: str) -> list[str]:
    """Quoted strings of a list table such as ``crew``, in order."""
    return _QUOTED_RE.findall(body)


def find_scalar_number(text: str, key: str) -> Optional[float]:
    """Value of the first ``key = <number>`` in ``text``, if finite."""
    m = re.search(rf"\b{re.escape(key)}\s*=\s*({NUMBER_PATTERN})(?![\w.])", text)
    if not m:
        return None
    return parse_number(m.group(1))


def mask_spans(text: str, spans: list[tuple[int, int]]) -> str:
    """Blank out the given ``(start, end)`` spans, keeping offsets intact."""
    chars = list(text)
    for start, end in spans:
        for i in range(start, min(end, len(chars))):
            chars[i] = " "
    return "".join(chars)
