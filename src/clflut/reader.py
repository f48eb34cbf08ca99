"""
XML to document-model mapping.

Turns CLF bytes into an (unvalidated) ProcessList. Structural mismatches
(malformed XML, missing or mistyped attributes, unknown operator elements)
raise XmlSyntaxError subclasses; CLF rule checks live in validators.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET

import numpy as np
import numpy.typing as npt

from clflut.arrays import parse_space_separated
from clflut.config import DEFAULT_CONFIG, LoaderConfig
from clflut.constants import (
    ARRAY_TAG,
    DATA_DTYPE,
    DIM_ATTR,
    DIM_DTYPE,
    ID_ATTR,
    IN_BIT_DEPTH_ATTR,
    LUT1D_TAG,
    LUT3D_TAG,
    OUT_BIT_DEPTH_ATTR,
    PROCESS_LIST_TAG,
    RANGE_BOUND_ATTRS,
    RANGE_TAG,
    VERSION_ATTR,
)
from clflut.errors import ArrayParseError, UnknownOperator, XmlSyntaxError
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

logger = logging.getLogger(__name__)


def _local_name(element: ET.Element, config: LoaderConfig) -> str:
    tag = element.tag
    if config.ignore_namespaces and tag.startswith("{"):
        return tag.split("}", 1)[1]
    return tag


def _require_attr(element: ET.Element, name: str, tag: str) -> str:
    value = element.get(name)
    if value is None:
        raise XmlSyntaxError(f"<{tag}> is missing required attribute {name!r}")
    return value


def _parse_attr_array(
    element: ET.Element, name: str, tag: str, dtype: npt.DTypeLike
) -> np.ndarray:
    try:
        return parse_space_separated(_require_attr(element, name, tag), dtype)
    except ArrayParseError as e:
        raise XmlSyntaxError(f"<{tag}> attribute {name!r}: {e}") from e


def _parse_attr_scalar(
    element: ET.Element, name: str, tag: str, dtype: npt.DTypeLike
) -> np.generic:
    values = _parse_attr_array(element, name, tag, dtype)
    if len(values) != 1:
        raise XmlSyntaxError(
            f"<{tag}> attribute {name!r} must hold a single value, got {len(values)}"
        )
    return values[0]


def _parse_bit_depth(element: ET.Element, tag: str) -> OperatorBitDepth:
    in_token = _require_attr(element, IN_BIT_DEPTH_ATTR, tag)
    out_token = _require_attr(element, OUT_BIT_DEPTH_ATTR, tag)
    try:
        return OperatorBitDepth(
            in_depth=BitDepth.from_token(in_token),
            out_depth=BitDepth.from_token(out_token),
        )
    except XmlSyntaxError as e:
        raise XmlSyntaxError(f"<{tag}>: {e}") from e


def _parse_range(element: ET.Element) -> Range:
    min_in, max_in, min_out, max_out = (
        _parse_attr_scalar(element, name, RANGE_TAG, DATA_DTYPE) for name in RANGE_BOUND_ATTRS
    )
    return Range(
        bit_depth=_parse_bit_depth(element, RANGE_TAG),
        min_in=min_in,
        max_in=max_in,
        min_out=min_out,
        max_out=max_out,
    )


def _parse_array(element: ET.Element, tag: str, config: LoaderConfig) -> NumericArray:
    arrays = [child for child in element if _local_name(child, config) == ARRAY_TAG]
    if len(arrays) != 1:
        raise XmlSyntaxError(f"<{tag}> must contain exactly one <Array>, got {len(arrays)}")
    array_element = arrays[0]

    dim = _parse_attr_array(array_element, DIM_ATTR, ARRAY_TAG, DIM_DTYPE)
    try:
        data = parse_space_separated(array_element.text, DATA_DTYPE)
    except ArrayParseError as e:
        raise XmlSyntaxError(f"<{tag}> array values: {e}") from e

    return NumericArray(dim=dim, data=data)


def _parse_operator(element: ET.Element, config: LoaderConfig) -> Operator:
    tag = _local_name(element, config)
    if tag == RANGE_TAG:
        return _parse_range(element)
    if tag == LUT1D_TAG:
        return Lut1d(
            bit_depth=_parse_bit_depth(element, tag), array=_parse_array(element, tag, config)
        )
    if tag == LUT3D_TAG:
        return Lut3d(
            bit_depth=_parse_bit_depth(element, tag), array=_parse_array(element, tag, config)
        )
    raise UnknownOperator(tag)


def read_process_list(data: bytes, config: LoaderConfig = DEFAULT_CONFIG) -> ProcessList:
    """
    Map CLF XML bytes onto a ProcessList without validating it.

    Args:
        data: Complete XML document
        config: Loader options

    Returns:
        ProcessList with operators in document order

    Raises:
        XmlSyntaxError: Malformed XML or a document that does not map onto
            the model
        UnknownOperator: A child of <ProcessList> is not Range/LUT1D/LUT3D
    """
    try:
        root = ET.fromstring(data)
    except (ET.ParseError, LookupError) as e:
        raise XmlSyntaxError(f"malformed XML: {e}") from e

    root_tag = _local_name(root, config)
    if root_tag != PROCESS_LIST_TAG:
        raise XmlSyntaxError(f"expected root element <{PROCESS_LIST_TAG}>, got <{root_tag}>")

    version = int(_parse_attr_scalar(root, VERSION_ATTR, PROCESS_LIST_TAG, DIM_DTYPE))
    doc_id = _require_attr(root, ID_ATTR, PROCESS_LIST_TAG)

    operators = []
    for element in root:
        operator = _parse_operator(element, config)
        logger.debug("[Reader] Parsed %s operator #%d", operator.kind, len(operators))
        operators.append(operator)

    return ProcessList(version=version, id=doc_id, operators=tuple(operators))
