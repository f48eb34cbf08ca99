"""
Structural validation for CLF process lists.

One explicit function per entity level. Checks run in a fixed order and the
first violated rule raises, so the reported error is deterministic.
"""

from __future__ import annotations

from typing import assert_never

from clflut.config import DEFAULT_CONFIG, LoaderConfig
from clflut.constants import (
    LUT1D_DIM_ARITY,
    LUT3D_CHANNELS,
    LUT3D_DIM_ARITY,
    MAX_CLF_VERSION,
)
from clflut.errors import (
    ClfError,
    DegenerateRange,
    InvalidOperator,
    MalformedArray,
    MalformedLut3dShape,
    UnsupportedBitDepthCombination,
    UnsupportedVersion,
)
from clflut.models import (
    BitDepth,
    Lut1d,
    Lut3d,
    NumericArray,
    Operator,
    OperatorBitDepth,
    ProcessList,
    Range,
)


def validate_bit_depth(bit_depth: OperatorBitDepth) -> None:
    """
    Check an operator's bit depth pair.

    Only ``32f -> 32f`` is rejected; every other pair passes. This mirrors
    the reference loader even though its message says only 32f is
    supported.

    Raises:
        UnsupportedBitDepthCombination: If both depths are 32f
    """
    if bit_depth.in_depth == bit_depth.out_depth == BitDepth.F32:
        raise UnsupportedBitDepthCombination(bit_depth.in_depth, bit_depth.out_depth)


def _validate_array_size(array: NumericArray) -> None:
    expected = array.expected_size
    if expected != len(array.data):
        raise MalformedArray(f"expected {expected} elements, got {len(array.data)}")


def validate_range(range_op: Range, *, reject_degenerate: bool = False) -> None:
    """
    Check a Range operator.

    Only the bit depth pair is validated; the bounds are not, unless
    ``reject_degenerate`` is set.

    Args:
        range_op: Operator to check
        reject_degenerate: Also fail when ``max_in == min_in``

    Raises:
        UnsupportedBitDepthCombination: From the bit depth check
        DegenerateRange: If opted in and the input range is empty
    """
    validate_bit_depth(range_op.bit_depth)

    if reject_degenerate and range_op.max_in == range_op.min_in:
        raise DegenerateRange(
            f"minInValue and maxInValue are both {float(range_op.min_in)}, "
            f"scale is undefined"
        )


def validate_lut1d(lut: Lut1d) -> None:
    """
    Check a LUT1D operator: bit depths, dim arity, then sample count.

    Raises:
        UnsupportedBitDepthCombination: From the bit depth check
        MalformedArray: If dim does not have 2 entries or the sample count
            does not match it
    """
    validate_bit_depth(lut.bit_depth)

    dim = lut.array.dim
    if len(dim) != LUT1D_DIM_ARITY:
        raise MalformedArray(
            f"A dim attribute defined for a LUT1D should have {LUT1D_DIM_ARITY} "
            f"elements, got {len(dim)}."
        )

    _validate_array_size(lut.array)


def validate_lut3d(lut: Lut3d) -> None:
    """
    Check a LUT3D operator.

    Order: bit depths, dim arity, cubic grid, channel count, sample count.

    Raises:
        UnsupportedBitDepthCombination: From the bit depth check
        MalformedArray: If dim does not have 4 entries or the sample count
            does not match it
        MalformedLut3dShape: If the grid is not cubic or channels != 3
    """
    validate_bit_depth(lut.bit_depth)

    dim = lut.array.dim
    if len(dim) != LUT3D_DIM_ARITY:
        raise MalformedArray(
            f"A dim attribute defined for a LUT3D should have {LUT3D_DIM_ARITY} "
            f"elements, got {len(dim)}."
        )
    if dim[0] != dim[1] or dim[0] != dim[2]:
        raise MalformedLut3dShape(
            f"A LUT3D should have the same dimensions on all three axes, "
            f"got {int(dim[0])}x{int(dim[1])}x{int(dim[2])}."
        )
    if dim[3] != LUT3D_CHANNELS:
        raise MalformedLut3dShape(
            f"A LUT3D should have {LUT3D_CHANNELS} color components, got {int(dim[3])}."
        )

    _validate_array_size(lut.array)


def validate_operator(operator: Operator, config: LoaderConfig = DEFAULT_CONFIG) -> None:
    """Dispatch to the validator of the operator's variant."""
    match operator:
        case Range():
            validate_range(operator, reject_degenerate=config.reject_degenerate_range)
        case Lut1d():
            validate_lut1d(operator)
        case Lut3d():
            validate_lut3d(operator)
        case _:
            assert_never(operator)


def validate_process_list(
    process_list: ProcessList, config: LoaderConfig = DEFAULT_CONFIG
) -> None:
    """
    Check a whole document.

    The version is checked first, independently of the operators. Operators
    are then checked in pipeline order and the first failure aborts.

    Raises:
        UnsupportedVersion: If compCLFversion is above the supported maximum
        InvalidOperator: Wrapping the first failing operator's error
    """
    if process_list.version > MAX_CLF_VERSION:
        raise UnsupportedVersion(process_list.version, MAX_CLF_VERSION)

    for index, operator in enumerate(process_list.operators):
        try:
            validate_operator(operator, config)
        except ClfError as e:
            raise InvalidOperator(operator.kind, index, e) from e
