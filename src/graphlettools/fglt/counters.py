from __future__ import annotations

from typing import Sequence

import numpy as np

from graphlettools.sparse.adjacency import SparseAdjacency


def degree_pass(adj: SparseAdjacency, raw: np.ndarray) -> None:
    """Fill raw orbit 1 (degree) for every vertex."""
    raw[1, :] = adj.degrees()


def two_path_count(
    i: int,
    row_offset: Sequence[int],
    col_index: Sequence[int],
    deg: Sequence[float],
) -> float:
    """
    Raw orbit 2: sum of neighbor degrees minus own degree.

    Every neighbor k lists i itself once, so dropping d_i removes the
    degenerate walks i-k-i.
    """
    s = 0.0
    for p in range(row_offset[i], row_offset[i + 1]):
        s += deg[col_index[p]]
    return s - deg[i]


def star_count(d: float) -> float:
    """Raw orbit 3: unordered pairs of neighbors, C(d,2)."""
    return d * (d - 1) * 0.5


def claw_center_count(d: float) -> float:
    """Raw orbit 8: unordered neighbor triples, C(d,3)."""
    return d * (d - 1) * (d - 2) / 6


def claw_leaf_count(
    i: int,
    row_offset: Sequence[int],
    col_index: Sequence[int],
    deg: Sequence[float],
) -> float:
    """Raw orbit 7: for each neighbor k, pairs among k's other neighbors."""
    s = 0.0
    for p in range(row_offset[i], row_offset[i + 1]):
        dk = deg[col_index[p]] - 1
        s += dk * (dk - 1) * 0.5
    return s


def path_center_count(d: float, d2: float, d4: float) -> float:
    """Raw orbit 6: walks k-i-j-l, minus the ones closing back on k."""
    return (d - 1) * d2 - 2 * d4


def paw_center_count(d: float, d4: float) -> float:
    """Raw orbit 11: a triangle at i plus one more neighbor of i."""
    return d4 * (d - 2)


def fill_closed_forms(col: list, d: float) -> None:
    """Orbits that are pure arithmetic on the degree."""
    col[0] = 1.0
    col[3] = star_count(d)
    col[8] = claw_center_count(d)
