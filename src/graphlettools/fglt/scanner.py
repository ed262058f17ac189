"""
Neighborhood scans over compressed adjacency.

scan_common_neighbors walks the 2-hop neighborhood of one vertex and yields
its triangle count, its 4-cycle count and the shared-neighbor count of each
of its edges. scan_second_pass runs once every edge's shared-neighbor count
is known and resolves the orbits that need neighbors' values.

All functions work on plain int lists (SparseAdjacency.to_lists) and one
worker's Scratch. They leave the Scratch clean.
"""
from __future__ import annotations

from typing import List, Sequence, Tuple

from graphlettools.fglt.scratch import Scratch


def remove_neighbors(
    is_ngbh: List[int],
    i: int,
    row_offset: Sequence[int],
    col_index: Sequence[int],
) -> None:
    """Unmark the neighbors of i (not a full clear)."""
    for p in range(row_offset[i], row_offset[i + 1]):
        is_ngbh[col_index[p]] = 0


def scan_common_neighbors(
    i: int,
    row_offset: Sequence[int],
    col_index: Sequence[int],
    c3: List[float],
    scratch: Scratch,
    base: int = 0,
) -> Tuple[float, float]:
    """
    Count triangles and 4-cycles through i.

    c3[p - base] receives the number of neighbors shared by i and
    col_index[p]; base is the adjacency position where c3 starts.

    Returns (d4, d12). Neighbor marks of i are left set for the caller
    (count_cliques4 reads them); clear with remove_neighbors.
    """
    is_ngbh = scratch.is_ngbh
    fl = scratch.fl
    is_used = scratch.is_used
    pos = scratch.pos
    lo = row_offset[i]

    for p in range(lo, row_offset[i + 1]):
        k = col_index[p]
        is_ngbh[k] = p + 1

        for q in range(row_offset[k], row_offset[k + 1]):
            j = col_index[q]
            if j == i:
                continue
            if not is_used[j]:
                fl[j] = 0
                is_used[j] = True
                pos.append(j)
            fl[j] += 1

    tri = 0.0
    cyc = 0.0
    for j in pos:
        c = fl[j]
        e = is_ngbh[j]
        if e:
            c3[e - 1 - base] = c
            tri += c
        cyc += c * (c - 1) * 0.5
        is_used[j] = False
    pos.clear()

    # each triangle is seen from both of its edges at i
    tri /= 2
    # each 4-cycle i-k-j-k' is seen from j only, once per unordered {k, k'}
    return tri, cyc


def count_cliques4(
    i: int,
    row_offset: Sequence[int],
    col_index: Sequence[int],
    c3: Sequence[float],
    scratch: Scratch,
    base: int = 0,
) -> float:
    """
    Raw orbit 15: 4-cliques containing i.

    Requires i's neighbor marks in scratch.is_ngbh. Every clique {i,a,b,c}
    is found once per ordering of (a, b, c).
    """
    is_ngbh = scratch.is_ngbh
    mark = scratch.mark
    lo = row_offset[i]
    found = 0

    for p in range(lo, row_offset[i + 1]):
        if c3[p - base] < 2:
            continue
        a = col_index[p]
        a_lo, a_hi = row_offset[a], row_offset[a + 1]
        for q in range(a_lo, a_hi):
            mark[col_index[q]] = True

        for q in range(a_lo, a_hi):
            b = col_index[q]
            if not is_ngbh[b]:
                continue
            for r in range(row_offset[b], row_offset[b + 1]):
                c = col_index[r]
                if is_ngbh[c] and mark[c]:
                    found += 1

        for q in range(a_lo, a_hi):
            mark[col_index[q]] = False

    return found / 6


def scan_second_pass(
    i: int,
    row_offset: Sequence[int],
    col_index: Sequence[int],
    deg: Sequence[float],
    d2: Sequence[float],
    d4: Sequence[float],
    c3: Sequence[float],
    scratch: Scratch,
) -> Tuple[float, float, float, float]:
    """
    Raw orbits 5, 9, 10 and 13 of vertex i.

    deg, d2, d4 and c3 must be complete for the whole graph; c3 is the full
    per-edge buffer indexed by adjacency position.
    """
    is_ngbh = scratch.is_ngbh
    lo, hi = row_offset[i], row_offset[i + 1]
    di = deg[i]

    sum_d2 = 0.0
    sum_d4 = 0.0
    tail = 0.0
    for p in range(lo, hi):
        k = col_index[p]
        is_ngbh[k] = p + 1
        sum_d2 += d2[k]
        sum_d4 += d4[k]
        tail += c3[p] * (deg[k] - 2)

    # triangles (i, a, b): the edge (a, b) carries c3(a, b) - 1 other apexes
    apex = 0.0
    for p in range(lo, hi):
        if c3[p] == 0:
            continue
        a = col_index[p]
        for q in range(row_offset[a], row_offset[a + 1]):
            if is_ngbh[col_index[q]]:
                apex += c3[q] - 1
    apex /= 2

    remove_neighbors(is_ngbh, i, row_offset, col_index)

    d5 = sum_d2 - di * (di - 1) - 2 * d4[i]
    d9 = sum_d4 - 2 * d4[i]
    return d5, d9, tail, apex
