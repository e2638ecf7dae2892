"""Structured diagnostics emitted while scanning a table.

The extractors never print. Each recognised step hands one record to a
sink, which keeps it and forwards it to the module logger.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

logger = logging.getLogger(__name__)

HEADER_FOUND = "header_found"
SECTION_FOUND = "section_found"
SECTION_MISSING = "section_missing"
SHELL_TYPE_FOUND = "shell_type_found"
BLOCK_UNTERMINATED = "block_unterminated"
AMBIGUOUS_CLASSIFICATION = "ambiguous_classification"

# Events that hint at malformed input rather than normal discovery
_NOTICE_EVENTS = {BLOCK_UNTERMINATED, AMBIGUOUS_CLASSIFICATION}


@dataclass
class Diagnostic:
    """One informational record about a parsing step."""
    event: str
    message: str
    component: Optional[str] = None
    detail: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "event": self.event,
            "message": self.message,
            "component": self.component,
            "detail": dict(self.detail),
        }


class DiagnosticSink:
    """Collects diagnostics for one parse call."""

    def __init__(self):
        self.records: list[Diagnostic] = []

    def emit(
        self,
        event: str,
        message: str,
        component: Optional[str] = None,
        **detail,
    ) -> Diagnostic:
        record = Diagnostic(event=event, message=message,
                            component=component, detail=detail)
        self.records.append(record)
        level = logging.INFO if event in _NOTICE_EVENTS else logging.DEBUG
        logger.log(level, "%s: %s", event, message)
        return record

    def by_event(self, event: str) -> list[Diagnostic]:
        return [r for r in self.records if r.event == event]

    def __len__(self) -> int:
        return len(self.records)
