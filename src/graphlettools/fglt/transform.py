"""
Raw-to-net orbit transform.

Raw counts overlap: a raw orbit also counts every larger graphlet that
contains its pattern as a (non-induced) subgraph. The fixed map below
removes those overlaps. Net orbit o depends only on raw orbits o..15.
"""
from __future__ import annotations

from fractions import Fraction
from functools import lru_cache
from typing import Tuple

import numpy as np

from graphlettools.utils.linalg import exact_inverse

NUM_ORBITS = 16

# RAW_TO_NET[o][r]: coefficient of raw orbit r in net orbit o
RAW_TO_NET: Tuple[Tuple[int, ...], ...] = (
    #0  1  2  3  4  5  6  7  8   9  10  11  12  13  14  15
    (1, 0, 0, 0, 0, 0, 0, 0, 0,  0,  0,  0,  0,  0,  0,  0),
    (0, 1, 0, 0, 0, 0, 0, 0, 0,  0,  0,  0,  0,  0,  0,  0),
    (0, 0, 1, 0,-2, 0, 0, 0, 0,  0,  0,  0,  0,  0,  0,  0),
    (0, 0, 0, 1,-1, 0, 0, 0, 0,  0,  0,  0,  0,  0,  0,  0),
    (0, 0, 0, 0, 1, 0, 0, 0, 0,  0,  0,  0,  0,  0,  0,  0),
    (0, 0, 0, 0, 0, 1, 0, 0, 0, -2, -1,  0, -2,  4,  2, -6),
    (0, 0, 0, 0, 0, 0, 1, 0, 0,  0, -1, -2, -2,  2,  4, -6),
    (0, 0, 0, 0, 0, 0, 0, 1, 0, -1, -1,  0,  0,  2,  1, -3),
    (0, 0, 0, 0, 0, 0, 0, 0, 1,  0,  0, -1,  0,  0,  1, -1),
    (0, 0, 0, 0, 0, 0, 0, 0, 0,  1,  0,  0,  0, -2,  0,  3),
    (0, 0, 0, 0, 0, 0, 0, 0, 0,  0,  1,  0,  0, -2, -2,  6),
    (0, 0, 0, 0, 0, 0, 0, 0, 0,  0,  0,  1,  0,  0, -2,  3),
    (0, 0, 0, 0, 0, 0, 0, 0, 0,  0,  0,  0,  1, -1, -1,  3),
    (0, 0, 0, 0, 0, 0, 0, 0, 0,  0,  0,  0,  0,  1,  0, -3),
    (0, 0, 0, 0, 0, 0, 0, 0, 0,  0,  0,  0,  0,  0,  1, -3),
    (0, 0, 0, 0, 0, 0, 0, 0, 0,  0,  0,  0,  0,  0,  0,  1),
)


def raw2net(d: np.ndarray, out: np.ndarray | None = None) -> np.ndarray:
    """
    Apply the raw-to-net map to every column of d (shape (16, n) or (16,)).

    Terms are evaluated left to right in a fixed order, so each column is
    bit-identical to the scalar per-vertex formula.
    """
    d = np.asarray(d, dtype=np.float64)
    if d.shape[0] != NUM_ORBITS:
        raise ValueError(f"expected {NUM_ORBITS} orbit rows, got shape {d.shape}")
    f = np.empty_like(d) if out is None else out

    f[0] = d[0]
    f[1] = d[1]
    f[2] = d[2] - 2 * d[4]
    f[3] = d[3] - d[4]
    f[4] = d[4]
    f[5] = d[5] - 2 * d[9] - d[10] - 2 * d[12] + 4 * d[13] + 2 * d[14] - 6 * d[15]
    f[6] = d[6] - d[10] - 2 * d[11] - 2 * d[12] + 2 * d[13] + 4 * d[14] - 6 * d[15]
    f[7] = d[7] - d[9] - d[10] + 2 * d[13] + d[14] - 3 * d[15]
    f[8] = d[8] - d[11] + d[14] - d[15]
    f[9] = d[9] - 2 * d[13] + 3 * d[15]
    f[10] = d[10] - 2 * d[13] - 2 * d[14] + 6 * d[15]
    f[11] = d[11] - 2 * d[14] + 3 * d[15]
    f[12] = d[12] - d[13] - d[14] + 3 * d[15]
    f[13] = d[13] - 3 * d[15]
    f[14] = d[14] - 3 * d[15]
    f[15] = d[15]
    return f


@lru_cache(maxsize=None)
def net_to_raw_table() -> Tuple[Tuple[Fraction, ...], ...]:
    """Exact inverse of RAW_TO_NET over the rationals."""
    inv = exact_inverse([list(row) for row in RAW_TO_NET], NUM_ORBITS)
    return tuple(tuple(row) for row in inv)


def net2raw(f: np.ndarray) -> np.ndarray:
    """Recover raw counts from net counts (inverse of raw2net)."""
    f = np.asarray(f, dtype=np.float64)
    if f.shape[0] != NUM_ORBITS:
        raise ValueError(f"expected {NUM_ORBITS} orbit rows, got shape {f.shape}")
    inv = np.array(net_to_raw_table(), dtype=np.float64)
    return np.tensordot(inv, f, axes=(1, 0))
