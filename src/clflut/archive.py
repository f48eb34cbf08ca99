"""
Binary cache of validated process lists.

Parsing large LUT3D text blobs dominates load time, so a validated
ProcessList can be stored as a single ``.npz`` file and reloaded without
touching the XML again. Arrays are stored as-is (float32 samples, uint32
dims); loading re-runs validation.

Layout (``i`` is the pipeline index):
    version, id, kinds        document header
    op{i}_bit_depth           ["<in>", "<out>"] tokens
    op{i}_bounds              Range: float32 [min_in, max_in, min_out, max_out]
    op{i}_dim, op{i}_data     LUT1D / LUT3D arrays
"""

from __future__ import annotations

import logging
import zipfile
from pathlib import Path
from typing import assert_never

import numpy as np

from clflut.config import DEFAULT_CONFIG, LoaderConfig
from clflut.constants import DATA_DTYPE, LUT1D_TAG, LUT3D_TAG, RANGE_TAG
from clflut.errors import ArchiveError, XmlSyntaxError
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
from clflut.validators import validate_process_list

logger = logging.getLogger(__name__)


def _operator_arrays(index: int, operator: Operator) -> dict[str, np.ndarray]:
    prefix = f"op{index}_"
    bit_depth = operator.bit_depth
    arrays = {
        prefix + "bit_depth": np.array([bit_depth.in_depth.value, bit_depth.out_depth.value])
    }
    match operator:
        case Range():
            arrays[prefix + "bounds"] = np.array(
                [operator.min_in, operator.max_in, operator.min_out, operator.max_out],
                dtype=DATA_DTYPE,
            )
        case Lut1d() | Lut3d():
            arrays[prefix + "dim"] = operator.array.dim
            arrays[prefix + "data"] = operator.array.data
        case _:
            assert_never(operator)
    return arrays


def save_archive(
    process_list: ProcessList, path: Path | str, config: LoaderConfig = DEFAULT_CONFIG
) -> None:
    """
    Validate ``process_list`` and write it to ``path`` as an ``.npz`` archive.

    Args:
        process_list: Document to store
        path: Destination file (written as given, no suffix is appended)
        config: Options used for the validation pass

    Raises:
        ValidationError: If the process list is not valid
    """
    validate_process_list(process_list, config)

    arrays: dict[str, np.ndarray] = {
        "version": np.array([process_list.version], dtype=np.uint32),
        "id": np.array(process_list.id),
        "kinds": np.array(process_list.kinds(), dtype=np.str_),
    }
    for index, operator in enumerate(process_list.operators):
        arrays.update(_operator_arrays(index, operator))

    with Path(path).open("wb") as f:
        np.savez(f, **arrays)

    logger.info(
        "[Archive] Saved %r with %d operators to %s", process_list.id, len(process_list), path
    )


def _read_operator(archive, index: int, kind: str) -> Operator:
    prefix = f"op{index}_"
    in_token, out_token = (str(token) for token in archive[prefix + "bit_depth"])
    bit_depth = OperatorBitDepth(BitDepth.from_token(in_token), BitDepth.from_token(out_token))

    if kind == RANGE_TAG:
        min_in, max_in, min_out, max_out = archive[prefix + "bounds"]
        return Range(bit_depth, min_in, max_in, min_out, max_out)

    array = NumericArray(dim=archive[prefix + "dim"], data=archive[prefix + "data"])
    if kind == LUT1D_TAG:
        return Lut1d(bit_depth, array)
    if kind == LUT3D_TAG:
        return Lut3d(bit_depth, array)
    raise ArchiveError(f"unknown operator kind {kind!r} at index {index}")


def load_archive(path: Path | str, config: LoaderConfig = DEFAULT_CONFIG) -> ProcessList:
    """
    Load a process list written by :func:`save_archive` and validate it.

    Raises:
        ArchiveError: If the file is missing, corrupt or not a clflut archive
        ValidationError: If the stored process list fails validation
    """
    try:
        with np.load(Path(path), allow_pickle=False) as archive:
            kinds = [str(kind) for kind in archive["kinds"]]
            process_list = ProcessList(
                version=int(archive["version"][0]),
                id=str(archive["id"]),
                operators=tuple(
                    _read_operator(archive, index, kind) for index, kind in enumerate(kinds)
                ),
            )
    except (
        OSError,
        KeyError,
        IndexError,
        TypeError,
        ValueError,
        zipfile.BadZipFile,
        XmlSyntaxError,
    ) as e:
        raise ArchiveError(f"cannot read archive {path}: {e}") from e

    validate_process_list(process_list, config)
    logger.info(
        "[Archive] Loaded %r with %d operators from %s", process_list.id, len(process_list), path
    )
    return process_list
