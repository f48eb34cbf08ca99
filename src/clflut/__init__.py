"""
clflut - Common LUT Format loading

Parses and structurally validates CLF (Common LUT Format) documents into a
read-only, NumPy-backed model of the color transform pipeline.

Features:
- Range, LUT1D and LUT3D operators, CLF versions 1-3
- Strict mapping: unknown operator elements fail the load
- Deterministic validation: the first violated rule is reported
- Errors tagged with the failing stage (parsing or validation)
- Binary .npz cache of validated process lists

Example:
    >>> from clflut import load_clf_file
    >>>
    >>> process_list = load_clf_file("grade.clf")
    >>> for op in process_list:
    ...     print(op.kind, op.bit_depth)
"""

__version__ = "0.1.0"

# Archive
from clflut.archive import load_archive, save_archive

# Array parsing
from clflut.arrays import parse_space_separated

# Configuration
from clflut.config import LoaderConfig

# Errors
from clflut.errors import (
    ArchiveError,
    ArrayParseError,
    ClfError,
    ClfLoadError,
    DegenerateRange,
    InvalidOperator,
    LoadStage,
    MalformedArray,
    MalformedLut3dShape,
    UnknownOperator,
    UnsupportedBitDepthCombination,
    UnsupportedVersion,
    ValidationError,
    XmlSyntaxError,
)

# Loading
from clflut.loader import load_clf, load_clf_file

# Document model
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
from clflut.reader import read_process_list

# Validation
from clflut.validators import (
    validate_bit_depth,
    validate_lut1d,
    validate_lut3d,
    validate_operator,
    validate_process_list,
    validate_range,
)

__all__ = [
    # Version
    "__version__",
    # Loading
    "load_clf",
    "load_clf_file",
    "read_process_list",
    "LoaderConfig",
    # Document model
    "BitDepth",
    "OperatorBitDepth",
    "NumericArray",
    "Range",
    "Lut1d",
    "Lut3d",
    "Operator",
    "ProcessList",
    # Validation
    "validate_bit_depth",
    "validate_range",
    "validate_lut1d",
    "validate_lut3d",
    "validate_operator",
    "validate_process_list",
    # Arrays
    "parse_space_separated",
    # Archive
    "save_archive",
    "load_archive",
    # Errors
    "ClfError",
    "XmlSyntaxError",
    "ArrayParseError",
    "UnknownOperator",
    "ValidationError",
    "UnsupportedVersion",
    "UnsupportedBitDepthCombination",
    "MalformedArray",
    "MalformedLut3dShape",
    "DegenerateRange",
    "InvalidOperator",
    "ClfLoadError",
    "LoadStage",
    "ArchiveError",
]
