"""Schema validation for converted documents.

The parser is best-effort and never raises on malformed tables. Callers
that need strictness validate the serialised output here.
"""

import json
import logging
from pathlib import Path
from typing import Optional

import jsonschema

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).parent.parent / "schemas" / "document.schema.json"


class DocumentValidationError(ValueError):
    """A converted document does not match the output schema."""

    def __init__(self, message: str, path: str = ""):
        super().__init__(message)
        self.path = path


def load_schema(path: Path = SCHEMA_PATH) -> dict:
    """Load the output document JSON schema."""
    return json.loads(path.read_text(encoding="utf-8"))


def validate_document(data: dict, schema: Optional[dict] = None) -> None:
    """Validate a serialised CombinedResult.

    Also checks that ``count`` agrees with the component mappings.

    Raises:
        DocumentValidationError: On the first schema or count mismatch.
    """
    schema = schema or load_schema()
    try:
        jsonschema.validate(instance=data, schema=schema)
    except jsonschema.ValidationError as e:
        location = "/".join(str(p) for p in e.absolute_path)
        raise DocumentValidationError(
            f"{location or '<root>'}: {e.message}", path=location
        ) from e

    count = data["count"]
    for key in ("guns", "turrets", "hulls"):
        if count[key] != len(data[key]):
            raise DocumentValidationError(
                f"count/{key}: {count[key]} does not match {len(data[key])} entries",
                path=f"count/{key}",
            )
    expected_total = count["guns"] + count["turrets"] + count["hulls"]
    if count["total"] != expected_total:
        raise DocumentValidationError(
            f"count/total: {count['total']} != {expected_total}",
            path="count/total",
        )
    logger.debug("Document validated (%d components)", expected_total)
