"""
CLF document loading.

Reads a whole document, maps it onto the model and validates it. Failures
are reported as ClfLoadError tagged with the stage (parsing or validation)
that failed.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import BinaryIO

from clflut.config import DEFAULT_CONFIG, LoaderConfig
from clflut.errors import ClfLoadError, LoadStage, ValidationError, XmlSyntaxError
from clflut.models import ProcessList
from clflut.reader import read_process_list
from clflut.validators import validate_process_list

logger = logging.getLogger(__name__)


def _read_source(source: bytes | bytearray | BinaryIO) -> bytes:
    if isinstance(source, (bytes, bytearray)):
        return bytes(source)
    try:
        return source.read()
    except OSError as e:
        raise XmlSyntaxError(f"cannot read CLF source: {e}") from e


def load_clf(
    source: bytes | bytearray | BinaryIO, config: LoaderConfig | None = None
) -> ProcessList:
    """
    Load and validate a CLF document.

    Args:
        source: Raw XML bytes, or a binary file-like object to read fully
        config: Loader options (defaults to LoaderConfig())

    Returns:
        Validated, read-only ProcessList

    Raises:
        ClfLoadError: With ``stage`` set to PARSING or VALIDATION and the
            underlying error as ``cause``

    Example:
        >>> with open("grade.clf", "rb") as f:
        ...     process_list = load_clf(f)
        >>> process_list.kinds()
        ['Range', 'LUT3D']
    """
    config = config or DEFAULT_CONFIG

    try:
        process_list = read_process_list(_read_source(source), config)
    except XmlSyntaxError as e:
        raise ClfLoadError(LoadStage.PARSING, e) from e

    try:
        validate_process_list(process_list, config)
    except ValidationError as e:
        raise ClfLoadError(LoadStage.VALIDATION, e) from e

    logger.info(
        "[Loader] Loaded process list %r (CLF v%d, %d operators)",
        process_list.id,
        process_list.version,
        len(process_list),
    )
    return process_list


def load_clf_file(path: Path | str, config: LoaderConfig | None = None) -> ProcessList:
    """Open ``path`` in binary mode and load it with :func:`load_clf`."""
    try:
        f = Path(path).open("rb")
    except OSError as e:
        raise ClfLoadError(
            LoadStage.PARSING, XmlSyntaxError(f"cannot open CLF file {path}: {e}")
        ) from e
    with f:
        return load_clf(f, config)
