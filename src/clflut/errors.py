"""
Error types for CLF loading.

Parse-stage errors derive from XmlSyntaxError, rule violations from
ValidationError. The loader wraps either kind in ClfLoadError tagged with
the stage that failed.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ClfError(Exception):
    """Base class for every error raised by clflut."""


# =============================================================================
# Parse stage
# =============================================================================


class XmlSyntaxError(ClfError):
    """Malformed XML, or an element/attribute that does not map onto the model."""


class ArrayParseError(XmlSyntaxError):
    """A token of a space-separated numeric array failed to parse."""

    def __init__(self, token: str, reason: str):
        self.token = token
        self.reason = reason
        super().__init__(f"invalid array token {token!r}: {reason}")


class UnknownOperator(XmlSyntaxError):
    """An operator element with an unsupported tag name."""

    def __init__(self, tag: str):
        self.tag = tag
        super().__init__(f"unknown operator element <{tag}>")


# =============================================================================
# Validation stage
# =============================================================================


class ValidationError(ClfError):
    """A parsed document violates a CLF structural rule."""


class UnsupportedVersion(ValidationError):
    def __init__(self, version: int, max_version: int):
        self.version = version
        self.max_version = max_version
        super().__init__(
            f"CLF versions higher than {max_version} "
            f"(currently parsing {version}) are not yet supported"
        )


class UnsupportedBitDepthCombination(ValidationError):
    def __init__(self, in_depth: Any, out_depth: Any):
        self.in_depth = in_depth
        self.out_depth = out_depth
        super().__init__(
            f"currently only the 32f bit depth is supported "
            f"(got in={in_depth}, out={out_depth})"
        )


class MalformedArray(ValidationError):
    """Wrong dim arity, or dim product does not match the sample count."""


class MalformedLut3dShape(ValidationError):
    """LUT3D dims that are not cubic or do not carry 3 channels."""


class DegenerateRange(ValidationError):
    """Range with maxInValue == minInValue (only raised when opted in)."""


class InvalidOperator(ValidationError):
    """Wraps an operator's validation error with its kind and pipeline index."""

    def __init__(self, kind: str, index: int, cause: ClfError):
        self.kind = kind
        self.index = index
        self.cause = cause
        super().__init__(f"{kind} operator #{index} invalid: {cause}")


# =============================================================================
# Loader / archive
# =============================================================================


class LoadStage(Enum):
    PARSING = "parsing"
    VALIDATION = "validation"


class ClfLoadError(ClfError):
    """
    Failure of a whole document load.

    Attributes:
        stage: Which stage failed (parsing or validation)
        cause: The underlying error
    """

    def __init__(self, stage: LoadStage, cause: ClfError):
        self.stage = stage
        self.cause = cause
        super().__init__(f"CLF {stage.value} failed: {cause}")

    @property
    def root_cause(self) -> ClfError:
        """Innermost error, following `cause` through any wrappers."""
        err: ClfError = self.cause
        while isinstance(getattr(err, "cause", None), ClfError):
            err = err.cause  # type: ignore[attr-defined]
        return err


class ArchiveError(ClfError):
    """An archive file is unreadable or does not describe a process list."""
