"""
Document model for CLF process lists.

Every class here is a frozen dataclass: instances are built once by the
reader, validated once by the loader and read-only afterwards. NumPy arrays
held by the model are flagged non-writeable.
"""

from __future__ import annotations

import math
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, TypeAlias

import numpy as np

from clflut.constants import (
    DATA_DTYPE,
    DIM_DTYPE,
    LUT1D_TAG,
    LUT3D_TAG,
    RANGE_TAG,
)
from clflut.errors import MalformedArray, XmlSyntaxError


class BitDepth(Enum):
    """Sample representation of an operator's input or output."""

    I8 = "8i"
    I10 = "10i"
    I12 = "12i"
    I16 = "16i"
    F16 = "16f"
    F32 = "32f"

    @classmethod
    def from_token(cls, token: str) -> BitDepth:
        """Map a literal XML token (e.g. ``"32f"``) to a BitDepth."""
        try:
            return cls(token)
        except ValueError:
            valid = ", ".join(depth.value for depth in cls)
            raise XmlSyntaxError(
                f"unknown bit depth {token!r}, expected one of: {valid}"
            ) from None

    @property
    def is_float(self) -> bool:
        return self.value.endswith("f")

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class OperatorBitDepth:
    """Input/output bit depth pair attached to every operator."""

    in_depth: BitDepth
    out_depth: BitDepth


def _readonly(values, dtype: str) -> np.ndarray:
    array = np.array(values, dtype=dtype)
    if array.ndim != 1:
        raise ValueError(f"expected a 1-D array, got shape {array.shape}")
    array.flags.writeable = False
    return array


@dataclass(frozen=True, eq=False)
class NumericArray:
    """
    LUT shape and samples as parsed from an ``<Array>`` element.

    Attributes:
        dim: Shape entries, uint32 [D]
        data: Flat sample values, float32 [N]

    The shape invariant (product of ``dim`` == ``len(data)``) is checked by
    the validators, not at construction.
    """

    dim: np.ndarray
    data: np.ndarray

    def __post_init__(self) -> None:
        object.__setattr__(self, "dim", _readonly(self.dim, DIM_DTYPE))
        object.__setattr__(self, "data", _readonly(self.data, DATA_DTYPE))

    @property
    def expected_size(self) -> int:
        """Product of all ``dim`` entries (1 for an empty ``dim``)."""
        return math.prod(int(d) for d in self.dim)

    def reshaped(self) -> np.ndarray:
        """
        Return ``data`` viewed in the shape given by ``dim``.

        Raises:
            MalformedArray: If the sample count does not match ``dim``
        """
        if self.expected_size != len(self.data):
            raise MalformedArray(
                f"expected {self.expected_size} elements, got {len(self.data)}"
            )
        return self.data.reshape(tuple(int(d) for d in self.dim))


@dataclass(frozen=True)
class Range:
    """
    Range operator: linear remap of [min_in, max_in] onto [min_out, max_out].

    Bounds are stored as float32 and the derived values are computed in
    float32. A degenerate input range (``max_in == min_in``) yields an
    infinite or NaN scale.

    See https://docs.acescentral.com/specifications/clf#range
    """

    kind: ClassVar[str] = RANGE_TAG

    bit_depth: OperatorBitDepth
    min_in: np.float32
    max_in: np.float32
    min_out: np.float32
    max_out: np.float32

    def __post_init__(self) -> None:
        for name in ("min_in", "max_in", "min_out", "max_out"):
            object.__setattr__(self, name, np.float32(getattr(self, name)))

    def _scale(self) -> np.float32:
        with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
            return (self.max_out - self.min_out) / (self.max_in - self.min_in)

    def scale(self) -> float:
        """Return ``(max_out - min_out) / (max_in - min_in)``."""
        return float(self._scale())

    def offset(self) -> float:
        """Return ``min_out - scale * min_in``."""
        with np.errstate(invalid="ignore", over="ignore"):
            return float(self.min_out - self._scale() * self.min_in)


@dataclass(frozen=True)
class Lut1d:
    """1D LUT operator; ``array.dim`` is (length, channels)."""

    kind: ClassVar[str] = LUT1D_TAG

    bit_depth: OperatorBitDepth
    array: NumericArray

    @property
    def length(self) -> int:
        return int(self.array.dim[0])

    @property
    def channels(self) -> int:
        return int(self.array.dim[1])


@dataclass(frozen=True)
class Lut3d:
    """3D LUT operator; ``array.dim`` is (size, size, size, 3)."""

    kind: ClassVar[str] = LUT3D_TAG

    bit_depth: OperatorBitDepth
    array: NumericArray

    @property
    def grid_size(self) -> int:
        return int(self.array.dim[0])


# Closed set of operator kinds; validators match on it exhaustively
Operator: TypeAlias = Range | Lut1d | Lut3d


@dataclass(frozen=True)
class ProcessList:
    """
    Root of a CLF document: an ordered pipeline of operators.

    Attributes:
        version: compCLFversion attribute
        id: Document identifier
        operators: Operators in pipeline order
    """

    version: int
    id: str
    operators: tuple[Operator, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "operators", tuple(self.operators))

    def __len__(self) -> int:
        return len(self.operators)

    def __iter__(self) -> Iterator[Operator]:
        return iter(self.operators)

    def kinds(self) -> list[str]:
        """Operator tags in pipeline order, e.g. ``["Range", "LUT3D"]``."""
        return [op.kind for op in self.operators]
