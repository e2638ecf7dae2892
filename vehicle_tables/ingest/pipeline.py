"""File-level conversion: expand inputs, parse each file, merge, write.

Files are processed sequentially. A file that cannot be read is logged
and skipped. The run fails when no file can be read or a write fails.
"""

import logging
from pathlib import Path
from typing import Optional

from .assemble import DocumentAssembler, aggregate
from .models import CombinedResult
from .parse_config import ParseConfig
from .utils import debug_output_path, expand_inputs, write_json
from .validate import validate_document

logger = logging.getLogger(__name__)


class ConversionError(Exception):
    """Base class for fatal conversion errors."""


class NoInputFilesError(ConversionError):
    """The input pattern matched no files, or none of them could be read."""


class OutputWriteError(ConversionError):
    """An output file could not be written."""


def convert_files(
    paths: list[Path],
    config: Optional[ParseConfig] = None,
) -> CombinedResult:
    """Parse every readable file and merge the results in order.

    Raises:
        NoInputFilesError: If ``paths`` is empty or no file could be read.
    """
    if not paths:
        raise NoInputFilesError("No input files to convert")

    assembler = DocumentAssembler(config)
    documents = []
    for path in paths:
        try:
            text = Path(path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Skipping %s: %s", path, e)
            continue
        documents.append(assembler.parse(text, source=str(path)))

    if not documents:
        raise NoInputFilesError(
            f"None of the {len(paths)} input file(s) could be read"
        )

    return aggregate(documents, [d.source for d in documents])


def convert_pattern(
    pattern: str,
    config: Optional[ParseConfig] = None,
) -> CombinedResult:
    """Expand ``pattern`` and convert the matching files.

    Raises:
        NoInputFilesError: If the pattern matches nothing.
    """
    paths = expand_inputs(pattern)
    if not paths:
        raise NoInputFilesError(f"No files match: {pattern}")
    logger.info("Converting %d file(s) matching %s", len(paths), pattern)
    return convert_files(paths, config)


def write_outputs(
    result: CombinedResult,
    output_path: str | Path,
    strict: bool = False,
) -> tuple[Path, Path]:
    """Write the compact document and its indented debug copy.

    Args:
        result: Merged conversion result.
        output_path: Path of the compact JSON document.
        strict: Validate against the output schema before writing.

    Returns:
        (compact_path, debug_path)

    Raises:
        DocumentValidationError: In strict mode, if validation fails.
        OutputWriteError: If either file cannot be written.
    """
    output_path = Path(output_path)
    debug_path = debug_output_path(output_path)
    data = result.to_dict()

    if strict:
        validate_document(data)

    try:
        write_json(output_path, data)
        write_json(debug_path, data, indent=2)
    except OSError as e:
        raise OutputWriteError(f"Could not write {output_path}: {e}") from e

    logger.info("Wrote %s and %s", output_path, debug_path)
    return output_path, debug_path
