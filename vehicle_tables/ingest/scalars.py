"""Scalar and typed-value extraction for flat table bodies.

A flat body is a ``key = value, key = value`` listing with no sub-tables
left in it. Values are recognised by an ordered list of recognisers:

  1. constructor calls   ``CF = CFrame.new(1, 2, 3)``
  2. quoted strings      ``Name = "APCR"``
  3. booleans            ``HEATFS = true``
  4. bare numbers        ``Damage = 400``

Each recogniser scans the whole body. A key keeps the value of the first
recogniser that claims it, regardless of where its matches sit in the text.
"""

import logging
import math
import re
from typing import Callable, Iterator, Optional

from .models import FrameValue, TypedValue, VectorValue
from .parse_config import ParseConfig

logger = logging.getLogger(__name__)

_UNSIGNED = r"(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][-+]?\d+)?"
NUMBER_PATTERN = rf"-?{_UNSIGNED}"

_NUMBER_RE = re.compile(rf"^[-+]?{_UNSIGNED}$")
_STRING_RE = re.compile(r'\b(\w+)\s*=\s*"([^"]*)"')
_BOOLEAN_RE = re.compile(r"\b(\w+)\s*=\s*(true|false)\b")
_BARE_NUMBER_RE = re.compile(rf"\b(\w+)\s*=\s*({NUMBER_PATTERN})(?![\w.])")

Recognizer = Callable[[str, ParseConfig], Iterator[tuple[str, TypedValue]]]


def parse_number(token: str) -> Optional[float]:
    """Parse a numeric literal, or None if the token is not a finite number.

    >>> parse_number(" -1.5 ")
    -1.5
    """
    token = token.strip()
    if not _NUMBER_RE.match(token):
        return None
    value = float(token)
    if not math.isfinite(value):
        return None
    return value


def parse_arguments(arg_text: str) -> Optional[list[float]]:
    """Parse a comma-separated constructor argument list as floats.

    Returns None when any argument is not a plain number, so that calls
    such as ``Vector3.new(x, 0, 0)`` stay unrecognised.
    """
    if not arg_text.strip():
        return []
    values = []
    for part in arg_text.split(","):
        value = parse_number(part)
        if value is None:
            return None
        values.append(value)
    return values


def _constructor_re(names: list[str]) -> Optional[re.Pattern]:
    if not names:
        return None
    # Longest names first so CFrame is tried before Frame
    alternation = "|".join(
        re.escape(n) for n in sorted(names, key=len, reverse=True)
    )
    return re.compile(rf"\b(\w+)\s*=\s*({alternation})\.new\s*\(([^()]*)\)")


def recognize_constructors(
    body: str, config: ParseConfig
) -> Iterator[tuple[str, TypedValue]]:
    """Yield ``key, value`` for every recognised ``Name.new(...)`` call."""
    pattern = _constructor_re(config.constructors)
    if pattern is None:
        return
    frames = set(config.frame_constructors)
    for m in pattern.finditer(body):
        key, name, arg_text = m.group(1), m.group(2), m.group(3)
        args = parse_arguments(arg_text)
        if args is None:
            logger.debug("Skipping %s.new with non-numeric args for %s", name, key)
            continue
        if name in frames:
            yield key, FrameValue.from_args(args)
        else:
            yield key, VectorValue(kind=name, components=args)


def recognize_strings(
    body: str, config: ParseConfig
) -> Iterator[tuple[str, TypedValue]]:
    for m in _STRING_RE.finditer(body):
        yield m.group(1), m.group(2)


def recognize_booleans(
    body: str, config: ParseConfig
) -> Iterator[tuple[str, TypedValue]]:
    for m in _BOOLEAN_RE.finditer(body):
        yield m.group(1), m.group(2) == "true"


def recognize_numbers(
    body: str, config: ParseConfig
) -> Iterator[tuple[str, TypedValue]]:
    for m in _BARE_NUMBER_RE.finditer(body):
        value = parse_number(m.group(2))
        if value is not None:
            yield m.group(1), value


# Order defines precedence
RECOGNIZERS: list[Recognizer] = [
    recognize_constructors,
    recognize_strings,
    recognize_booleans,
    recognize_numbers,
]


def extract_scalars(
    body: str, config: Optional[ParseConfig] = None
) -> dict[str, TypedValue]:
    """Extract a key -> TypedValue mapping from a flat table body.

    Args:
        body: Table body text, without its enclosing braces.
        config: Parse profile naming the recognised constructors.

    Returns:
        Mapping in the order keys were first claimed.
    """
    config = config or ParseConfig.default()
    values: dict[str, TypedValue] = {}
    for recognizer in RECOGNIZERS:
        for key, value in recognizer(body, config):
            if key not in values:
                values[key] = value
    return values
