"""
Space-separated numeric array parsing.

CLF stores LUT shapes and samples as a single text blob of whitespace
separated numbers (e.g. ``dim="17 17 17 3"``). These helpers turn such a
blob into a 1-D NumPy array of the requested dtype.
"""

from __future__ import annotations

import re
from collections.abc import Callable

import numpy as np
import numpy.typing as npt

from clflut.errors import ArrayParseError

_INTEGER_TOKEN = re.compile(r"[+-]?[0-9]+")
_UNSIGNED_TOKEN = re.compile(r"\+?[0-9]+")

# ASCII decimal, exponent and inf/nan forms only
_FLOAT_TOKEN = re.compile(
    r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf|infinity|nan)",
    re.IGNORECASE,
)


def _integer_parser(dtype: np.dtype) -> Callable[[str], int]:
    info = np.iinfo(dtype)
    pattern = _UNSIGNED_TOKEN if info.min == 0 else _INTEGER_TOKEN

    def parse(token: str) -> int:
        if not pattern.fullmatch(token):
            raise ArrayParseError(token, f"invalid digit for {dtype.name}")
        value = int(token)
        if not info.min <= value <= info.max:
            raise ArrayParseError(
                token, f"number out of range for {dtype.name} [{info.min}, {info.max}]"
            )
        return value

    return parse


def _float_parser(dtype: np.dtype) -> Callable[[str], float]:
    def parse(token: str) -> float:
        if not _FLOAT_TOKEN.fullmatch(token):
            raise ArrayParseError(token, f"invalid {dtype.name} literal")
        return float(token)

    return parse


def parse_space_separated(text: str | None, dtype: npt.DTypeLike) -> np.ndarray:
    """
    Parse a whitespace-separated string of numbers into a 1-D array.

    Tokens are parsed independently, left to right; the first token that
    does not parse aborts the whole operation.

    Args:
        text: Text blob such as ``"0 0.5 1"``; None or whitespace-only
            input yields an empty array
        dtype: Target NumPy integer or floating dtype

    Returns:
        1-D array of ``dtype`` in source order

    Raises:
        ArrayParseError: If a token is not a valid ``dtype`` literal
        TypeError: If ``dtype`` is neither integral nor floating

    Example:
        >>> parse_space_separated("1 2 3", np.uint32)
        array([1, 2, 3], dtype=uint32)
        >>> parse_space_separated("1 a 3", np.uint32)
        Traceback (most recent call last):
        ...
        clflut.errors.ArrayParseError: invalid array token 'a': invalid digit for uint32
    """
    dtype = np.dtype(dtype)
    if dtype.kind in "iu":
        parse = _integer_parser(dtype)
    elif dtype.kind == "f":
        parse = _float_parser(dtype)
    else:
        raise TypeError(f"dtype must be integral or floating, got {dtype.name}")

    tokens = text.split() if text else []
    values = [parse(token) for token in tokens]

    # Out-of-range floats saturate to +/-inf like any IEEE-754 parse
    with np.errstate(over="ignore"):
        return np.array(values, dtype=dtype)
