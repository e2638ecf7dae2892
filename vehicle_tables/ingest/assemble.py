"""Document assembly and multi-file aggregation.

Scans a table text for component headers of the form::

    ['MainGun'] = {id = 12, metadata = {attributes = {...}, config = {...}}}

Each component's body runs from just after its ``id`` field to the start
of the next header (or the end of the text). Brace balance is not used to
end a body, so the sub-table searches for one component never see text
belonging to the next.
"""

import logging
import re
from datetime import datetime, timezone
from typing import Optional

from . import diagnostics as diag
from .blocks import strip_nested_blocks
from .classify import ComponentClassifier
from .diagnostics import DiagnosticSink
from .models import Category, CombinedResult, Component, Metadata, ParsedDocument
from .parse_config import ParseConfig
from .scalars import extract_scalars
from .sections import (
    Section,
    extract_named_children,
    extract_quoted_list,
    find_scalar_number,
    find_section,
    mask_spans,
)

logger = logging.getLogger(__name__)

HEADER_RE = re.compile(
    r"\[(?P<quote>['\"])(?P<name>[^'\"]+)(?P=quote)\]\s*=\s*\{\s*id\s*=\s*(?P<id>\d+)"
)


def strip_wrapper(text: str) -> str:
    """Drop a leading ``return`` keyword and a trailing ``;``."""
    text = re.sub(r"^\s*return\b\s*", "", text)
    return re.sub(r";\s*$", "", text)


def utc_timestamp() -> str:
    """Current UTC time as an ISO-8601 string with a ``Z`` suffix."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class DocumentAssembler:
    """Parses one table text into categorised components."""

    def __init__(self, config: Optional[ParseConfig] = None):
        self.config = config or ParseConfig.default()
        self.classifier = ComponentClassifier(self.config)

    def parse(self, text: str, source: str = "") -> ParsedDocument:
        """Parse a table text.

        Args:
            text: Raw file contents.
            source: Identifier recorded on the document (usually a path).

        Returns:
            ParsedDocument with components bucketed by category and the
            diagnostics emitted while scanning.
        """
        sink = DiagnosticSink()
        document = ParsedDocument(source=source)
        text = strip_wrapper(text)

        headers = list(HEADER_RE.finditer(text))
        for i, header in enumerate(headers):
            body_end = headers[i + 1].start() if i + 1 < len(headers) else len(text)
            body = text[header.end():body_end]
            name = header.group("name")

            sink.emit(
                diag.HEADER_FOUND,
                f"Found component: {name}, ID: {header.group('id')}",
                component=name, id=header.group("id"),
            )
            component = self._parse_component(name, header.group("id"), body, sink)
            document.add(component)

        document.diagnostics = sink.records
        logger.info(
            "Parsed %d components from %s: %d guns, %d turrets, %d hulls",
            document.count(), source or "<text>",
            len(document.guns), len(document.turrets), len(document.hulls),
        )
        return document

    def _parse_component(
        self, name: str, component_id: str, body: str, sink: DiagnosticSink
    ) -> Component:
        keys = self.config.sections
        found: list[Section] = []

        attributes_section = self._locate(body, keys.attributes, name, sink, required=True)
        config_section = self._locate(body, keys.config, name, sink, required=True)
        crew_section = self._locate(body, keys.crew, name, sink)
        td_section = self._locate(body, keys.td_attributes, name, sink)

        metadata = Metadata()
        if attributes_section:
            found.append(attributes_section)
            metadata.attributes = self._flat_scalars(attributes_section.body)
        if config_section:
            found.append(config_section)
            metadata.config = self._parse_config_table(config_section.body, name, sink)
        if crew_section:
            found.append(crew_section)
            metadata.crew = extract_quoted_list(crew_section.body)
        if td_section:
            found.append(td_section)
            metadata.td_attributes = self._flat_scalars(td_section.body)

        remainder = mask_spans(body, [(s.start, s.end) for s in found])
        metadata.ammo_mass = find_scalar_number(remainder, keys.ammo_mass)

        category = self.classifier.classify(metadata.config, sink=sink, component=name)
        return Component(
            name=name, id=component_id, metadata=metadata, category=category
        )

    def _locate(
        self,
        body: str,
        key: str,
        component: str,
        sink: DiagnosticSink,
        required: bool = False,
    ) -> Optional[Section]:
        section = find_section(body, key)
        if section is None:
            if required:
                sink.emit(
                    diag.SECTION_MISSING,
                    f"No {key} found for {component}",
                    component=component, section=key,
                )
            return None

        sink.emit(
            diag.SECTION_FOUND,
            f"Found {key} for {component}",
            component=component, section=key,
        )
        if not section.block.terminated:
            sink.emit(
                diag.BLOCK_UNTERMINATED,
                f"Unterminated {key} for {component}, using partial body",
                component=component, section=key,
            )
        return section

    def _flat_scalars(self, body: str) -> dict:
        return extract_scalars(strip_nested_blocks(body), self.config)

    def _parse_config_table(
        self, body: str, component: str, sink: DiagnosticSink
    ) -> dict:
        values = self._flat_scalars(body)
        for key in self.config.named_child_sections:
            section = find_section(body, key)
            if section is None:
                continue
            sink.emit(
                diag.SECTION_FOUND,
                f"Found {key} for {component}",
                component=component, section=key,
            )
            values[key] = extract_named_children(
                section.body, self.config, sink=sink, component=component
            )
        return values


def parse_document(
    text: str,
    source: str = "",
    config: Optional[ParseConfig] = None,
) -> ParsedDocument:
    """Parse one table text into guns, turrets and hulls."""
    return DocumentAssembler(config).parse(text, source)


def aggregate(
    documents: list[ParsedDocument],
    source_names: Optional[list[str]] = None,
    timestamp: Optional[str] = None,
) -> CombinedResult:
    """Merge documents in order; a later same-named component wins.

    Replacement happens within a category. Counts are derived from the
    merged mappings, so an overwrite is never counted twice.
    """
    result = CombinedResult(
        sources=list(source_names) if source_names is not None
        else [d.source for d in documents],
        last_updated=timestamp or utc_timestamp(),
    )
    for document in documents:
        for category in Category:
            merged = getattr(result, category.plural)
            for name, component in document.bucket(category).items():
                if name in merged:
                    logger.debug(
                        "%s '%s' from %s replaces earlier definition",
                        category.value, name, document.source or "<text>",
                    )
                merged[name] = component

    counts = result.count
    logger.info(
        "Aggregated %d documents: %d guns, %d turrets, %d hulls (%d total)",
        len(documents), counts["guns"], counts["turrets"],
        counts["hulls"], counts["total"],
    )
    return result
