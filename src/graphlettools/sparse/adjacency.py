from __future__ import annotations

from typing import List, Tuple

import numpy as np


def _frozen(a, dtype=np.int64) -> np.ndarray:
    arr = np.array(a, dtype=dtype, copy=True).reshape(-1)
    arr.setflags(write=False)
    return arr


class SparseAdjacency:
    """
    Read-only compressed adjacency of an undirected graph.

    row_offset: length n+1, row_offset[n] == m
    col_index:  length m; neighbors of i live at row_offset[i]:row_offset[i+1]

    Every undirected edge appears twice. Neighbor order is not assumed sorted.
    Nothing here validates the arrays; see check_adjacency.
    """

    __slots__ = ("row_offset", "col_index", "n", "m")

    def __init__(self, row_offset, col_index) -> None:
        self.row_offset = _frozen(row_offset)
        self.col_index = _frozen(col_index)
        self.n = len(self.row_offset) - 1
        self.m = int(self.row_offset[-1]) if self.n >= 0 else 0

    def __repr__(self) -> str:
        return f"SparseAdjacency(n={self.n}, m={self.m})"

    def degree(self, i: int) -> int:
        return int(self.row_offset[i + 1] - self.row_offset[i])

    def degrees(self) -> np.ndarray:
        return np.diff(self.row_offset)

    def edge_range(self, i: int) -> Tuple[int, int]:
        """Positions [lo, hi) of vertex i's entries in col_index."""
        return int(self.row_offset[i]), int(self.row_offset[i + 1])

    def neighbors(self, i: int) -> np.ndarray:
        lo, hi = self.edge_range(i)
        return self.col_index[lo:hi]

    def to_lists(self) -> Tuple[List[int], List[int]]:
        """Plain-int copies of (row_offset, col_index) for tight scan loops."""
        return self.row_offset.tolist(), self.col_index.tolist()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SparseAdjacency):
            return NotImplemented
        return (
            np.array_equal(self.row_offset, other.row_offset)
            and np.array_equal(self.col_index, other.col_index)
        )

    __hash__ = None  # type: ignore[assignment]


def check_adjacency(adj: SparseAdjacency) -> None:
    """
    Raise ValueError on the first structural problem found.

    Checks: offsets start at 0, are non-decreasing and end at m; column ids
    lie in [0, n); no self-loops; every entry (i, k) has a mirror (k, i).
    """
    ro = adj.row_offset
    ci = adj.col_index
    n = adj.n

    if n < 0:
        raise ValueError("row_offset must have at least one entry")
    if ro[0] != 0:
        raise ValueError(f"row_offset[0] must be 0, got {int(ro[0])}")
    steps = np.diff(ro)
    if np.any(steps < 0):
        i = int(np.argmax(steps < 0))
        raise ValueError(f"row_offset decreases between vertex {i} and {i + 1}")
    if int(ro[-1]) != len(ci):
        raise ValueError(
            f"row_offset[n]={int(ro[-1])} does not match len(col_index)={len(ci)}"
        )
    if len(ci) == 0:
        return
    bad = (ci < 0) | (ci >= n)
    if np.any(bad):
        p = int(np.argmax(bad))
        raise ValueError(f"col_index[{p}]={int(ci[p])} out of range [0, {n})")

    rows = np.repeat(np.arange(n, dtype=np.int64), steps)
    loops = rows == ci
    if np.any(loops):
        p = int(np.argmax(loops))
        raise ValueError(f"self-loop at vertex {int(rows[p])}")

    fwd = rows * n + ci
    rev = ci * n + rows
    fwd_sorted = np.sort(fwd)
    if np.any(fwd_sorted[1:] == fwd_sorted[:-1]):
        p = int(np.argmax(fwd_sorted[1:] == fwd_sorted[:-1]))
        u, v = divmod(int(fwd_sorted[p]), n)
        raise ValueError(f"duplicate entry ({u}, {v})")
    if not np.array_equal(fwd_sorted, np.sort(rev)):
        missing = np.setdiff1d(rev, fwd, assume_unique=True)
        u, v = divmod(int(missing[0]), n)
        raise ValueError(f"entry ({v}, {u}) has no mirror ({u}, {v})")
