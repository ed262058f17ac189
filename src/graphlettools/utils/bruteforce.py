from __future__ import annotations

from itertools import combinations

import numpy as np

from graphlettools.utils.connectivity import induced_edges, is_connected_subset
from graphlettools.utils.naming import orbit_of


def _extend(adj, sub, ext, root, max_size, out):
    # ESU growth: each connected set is produced exactly once, from its
    # smallest vertex `root`
    out.append(tuple(sub))
    if len(sub) == max_size:
        return
    closed = set(sub)
    for s in sub:
        closed |= adj[s]
    ext = set(ext)
    while ext:
        w = min(ext)
        ext.discard(w)
        nxt = ext | {u for u in adj[w] if u > root and u not in closed}
        sub.append(w)
        _extend(adj, sub, nxt, root, max_size, out)
        sub.pop()


def connected_vertex_sets(
    adj: list[set[int]],
    max_size: int = 4,
) -> list[tuple[int, ...]]:
    """All vertex sets of size 1..max_size that induce a connected subgraph."""
    out: list[tuple[int, ...]] = []
    for v in range(len(adj)):
        _extend(adj, [v], {x for x in adj[v] if x > v}, v, max_size, out)
    return out


def orbit_counts_bruteforce(
    n: int,
    edges: list[tuple[int, int]],
) -> np.ndarray:
    """Net orbit counts (16 x n) by explicit induced-graphlet enumeration.

    Exponential in the neighborhood size; only meant for small graphs and
    as a reference for the fast transform.
    """
    adj: list[set[int]] = [set() for _ in range(n)]
    for u, v in edges:
        if u != v:
            adj[u].add(v)
            adj[v].add(u)

    counts = np.zeros((16, n), dtype=np.float64)
    for verts in connected_vertex_sets(adj, 4):
        sub = induced_edges(adj, verts)
        for v in verts:
            counts[orbit_of(sub, v), v] += 1
    return counts


def orbit_counts_combinations(
    n: int,
    edges: list[tuple[int, int]],
) -> np.ndarray:
    """Same as orbit_counts_bruteforce, by testing every vertex subset.

    O(n^4); used to cross-check the connected-set enumeration.
    """
    adj: list[set[int]] = [set() for _ in range(n)]
    for u, v in edges:
        if u != v:
            adj[u].add(v)
            adj[v].add(u)

    counts = np.zeros((16, n), dtype=np.float64)
    for size in range(1, 5):
        for verts in combinations(range(n), size):
            if not is_connected_subset(adj, verts):
                continue
            sub = induced_edges(adj, verts)
            for v in verts:
                counts[orbit_of(sub, v), v] += 1
    return counts
