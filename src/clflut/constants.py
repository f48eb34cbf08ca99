"""
Constants for CLF parsing and validation.

Centralizes the format's magic numbers and XML names for better maintainability.
"""

from __future__ import annotations

# =============================================================================
# Document Constants
# =============================================================================

# Highest compCLFversion accepted by the validator
MAX_CLF_VERSION = 3

# =============================================================================
# Array Shape Constants
# =============================================================================

LUT1D_DIM_ARITY = 2  # (input size, channel count)
LUT3D_DIM_ARITY = 4  # (size, size, size, channels)
LUT3D_CHANNELS = 3  # R, G, B

# Storage types for parsed arrays
DIM_DTYPE = "uint32"
DATA_DTYPE = "float32"

# =============================================================================
# XML Names
# =============================================================================

PROCESS_LIST_TAG = "ProcessList"
ARRAY_TAG = "Array"

RANGE_TAG = "Range"
LUT1D_TAG = "LUT1D"
LUT3D_TAG = "LUT3D"

VERSION_ATTR = "compCLFversion"
ID_ATTR = "id"
IN_BIT_DEPTH_ATTR = "inBitDepth"
OUT_BIT_DEPTH_ATTR = "outBitDepth"
DIM_ATTR = "dim"

RANGE_BOUND_ATTRS = ("minInValue", "maxInValue", "minOutValue", "maxOutValue")
