"""Table parsing: block, scalar and section extraction, classification, assembly."""

from .assemble import DocumentAssembler, aggregate, parse_document
from .blocks import BlockResult, extract_block
from .classify import ComponentClassifier, classify
from .diagnostics import Diagnostic, DiagnosticSink
from .models import (
    Category,
    CombinedResult,
    Component,
    FrameValue,
    Metadata,
    ParsedDocument,
    VectorValue,
)
from .parse_config import ParseConfig, ProfileError, load_parse_config
from .scalars import extract_scalars
from .sections import extract_named_children

__all__ = [
    # Extraction
    "BlockResult",
    "extract_block",
    "extract_scalars",
    "extract_named_children",
    # Classification
    "ComponentClassifier",
    "classify",
    # Assembly
    "DocumentAssembler",
    "parse_document",
    "aggregate",
    # Models
    "Category",
    "CombinedResult",
    "Component",
    "FrameValue",
    "Metadata",
    "ParsedDocument",
    "VectorValue",
    "Diagnostic",
    "DiagnosticSink",
    # Configuration
    "ParseConfig",
    "ProfileError",
    "load_parse_config",
]
