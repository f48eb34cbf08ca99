"""Tests for the CLF document model."""

import dataclasses
import math

import numpy as np
import pytest

from clflut import (
    BitDepth,
    Lut1d,
    Lut3d,
    MalformedArray,
    NumericArray,
    OperatorBitDepth,
    ProcessList,
    Range,
    XmlSyntaxError,
)

F32_TO_F16 = OperatorBitDepth(BitDepth.F32, BitDepth.F16)


def make_range(min_in=0.0, max_in=1.0, min_out=0.0, max_out=2.0):
    return Range(F32_TO_F16, min_in, max_in, min_out, max_out)


class TestBitDepth:
    """Test BitDepth token mapping."""

    @pytest.mark.parametrize("token", ["8i", "10i", "12i", "16i", "16f", "32f"])
    def test_from_token(self, token):
        """Test that every CLF token maps to a member."""
        assert BitDepth.from_token(token).value == token
        assert str(BitDepth.from_token(token)) == token

    def test_unknown_token(self):
        """Test that unknown tokens are syntax errors."""
        with pytest.raises(XmlSyntaxError, match="32i"):
            BitDepth.from_token("32i")

    def test_is_float(self):
        """Test float/integer classification."""
        assert BitDepth.F16.is_float
        assert BitDepth.F32.is_float
        assert not BitDepth.I10.is_float


class TestRange:
    """Test Range derived values."""

    def test_scale_and_offset(self):
        """Test the identity-to-double remap."""
        range_op = make_range()

        assert range_op.scale() == 2.0
        assert range_op.offset() == 0.0

    def test_offset_with_shifted_domain(self):
        """Test offset = min_out - scale * min_in."""
        range_op = make_range(min_in=0.25, max_in=0.75, min_out=0.0, max_out=1.0)

        assert range_op.scale() == pytest.approx(2.0)
        assert range_op.offset() == pytest.approx(-0.5)

    def test_degenerate_scale_is_infinite(self):
        """Test that min_in == max_in propagates infinity."""
        range_op = make_range(min_in=0.5, max_in=0.5)

        assert math.isinf(range_op.scale())
        assert not math.isfinite(range_op.offset())

    def test_fully_degenerate_scale_is_nan(self):
        """Test that 0/0 propagates NaN."""
        range_op = make_range(min_in=1.0, max_in=1.0, min_out=3.0, max_out=3.0)

        assert math.isnan(range_op.scale())
        assert math.isnan(range_op.offset())

    def test_bounds_stored_as_float32(self):
        """Test float32 coercion of bounds."""
        range_op = make_range(min_in=0.1)
        assert isinstance(range_op.min_in, np.float32)

    def test_frozen(self):
        """Test that operators are immutable."""
        with pytest.raises(dataclasses.FrozenInstanceError):
            make_range().min_in = 5.0

    def test_kind(self):
        assert make_range().kind == "Range"


class TestNumericArray:
    """Test NumericArray storage."""

    def test_dtypes(self):
        """Test that dim and data are coerced to uint32/float32."""
        array = NumericArray(dim=[2, 3], data=[0, 0, 0, 1, 1, 1])

        assert array.dim.dtype == np.uint32
        assert array.data.dtype == np.float32

    def test_read_only(self):
        """Test that stored arrays are not writeable."""
        array = NumericArray(dim=[2, 1], data=[0.0, 1.0])

        with pytest.raises(ValueError):
            array.data[0] = 5.0
        with pytest.raises(ValueError):
            array.dim[0] = 5

    def test_copies_input(self):
        """Test that the caller's buffer is not shared."""
        data = np.array([0.0, 1.0], dtype=np.float32)
        array = NumericArray(dim=[2, 1], data=data)

        data[0] = 9.0
        assert array.data[0] == 0.0

    def test_expected_size(self):
        assert NumericArray(dim=[17, 17, 17, 3], data=[]).expected_size == 17**3 * 3
        assert NumericArray(dim=[], data=[]).expected_size == 1

    def test_reshaped(self):
        """Test viewing samples in dim shape."""
        array = NumericArray(dim=[2, 3], data=[0, 1, 2, 3, 4, 5])
        table = array.reshaped()

        assert table.shape == (2, 3)
        np.testing.assert_array_equal(table[1], [3, 4, 5])
        assert not table.flags.writeable

    def test_reshaped_size_mismatch(self):
        with pytest.raises(MalformedArray):
            NumericArray(dim=[2, 3], data=[0, 1]).reshaped()

    def test_rejects_nested_input(self):
        with pytest.raises(ValueError):
            NumericArray(dim=[[2, 3]], data=[])


class TestLuts:
    """Test LUT shape accessors."""

    def test_lut1d_accessors(self):
        lut = Lut1d(F32_TO_F16, NumericArray(dim=[4, 3], data=np.zeros(12)))

        assert lut.kind == "LUT1D"
        assert lut.length == 4
        assert lut.channels == 3

    def test_lut3d_accessors(self):
        lut = Lut3d(F32_TO_F16, NumericArray(dim=[5, 5, 5, 3], data=np.zeros(375)))

        assert lut.kind == "LUT3D"
        assert lut.grid_size == 5


class TestProcessList:
    """Test ProcessList container behavior."""

    def test_order_preserved(self):
        """Test that operators keep pipeline order."""
        lut = Lut1d(F32_TO_F16, NumericArray(dim=[2, 1], data=[0, 1]))
        process_list = ProcessList(3, "doc", [make_range(), lut, make_range()])

        assert len(process_list) == 3
        assert process_list.kinds() == ["Range", "LUT1D", "Range"]
        assert list(process_list)[1] is lut

    def test_operators_tuple(self):
        """Test that the operator sequence is immutable."""
        process_list = ProcessList(1, "doc", [make_range()])
        assert isinstance(process_list.operators, tuple)

    def test_empty(self):
        process_list = ProcessList(2, "empty")
        assert len(process_list) == 0
        assert process_list.kinds() == []
