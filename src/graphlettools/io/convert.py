from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple

import networkx as nx
import numpy as np
import scipy.sparse as sp

from graphlettools.sparse.adjacency import SparseAdjacency


def from_edges(edges: Iterable[Tuple[int, int]], n: int | None = None) -> SparseAdjacency:
    """
    Build adjacency from undirected edges on vertices 0..n-1.

    Each edge is stored in both directions. Self-loops and repeated edges
    are dropped. If n is None it is inferred as max vertex id + 1.
    Neighbor lists come out sorted.
    """
    pairs = set()
    for u, v in edges:
        u, v = int(u), int(v)
        if u == v:
            continue
        pairs.add((u, v) if u < v else (v, u))

    if n is None:
        n = 1 + max((v for e in pairs for v in e), default=-1)

    if not pairs:
        return SparseAdjacency(np.zeros(n + 1, dtype=np.int64), np.zeros(0, dtype=np.int64))

    uv = np.array(sorted(pairs), dtype=np.int64)
    if uv.max() >= n:
        raise ValueError(f"edge endpoint {int(uv.max())} out of range for n={n}")

    rows = np.concatenate([uv[:, 0], uv[:, 1]])
    cols = np.concatenate([uv[:, 1], uv[:, 0]])
    order = np.lexsort((cols, rows))
    rows, cols = rows[order], cols[order]

    row_offset = np.zeros(n + 1, dtype=np.int64)
    np.cumsum(np.bincount(rows, minlength=n), out=row_offset[1:])
    return SparseAdjacency(row_offset, cols)


def from_adjlist(adj: Sequence[Sequence[int]]) -> SparseAdjacency:
    """
    Build adjacency from an adjlist: adj[u] = neighbors of u.

    The adjlist is taken as given (it must already be symmetric);
    neighbor order is preserved.
    """
    row_offset = [0]
    col_index: List[int] = []
    for neigh in adj:
        col_index.extend(int(v) for v in neigh)
        row_offset.append(len(col_index))
    return SparseAdjacency(row_offset, col_index)


def from_networkx(G: nx.Graph) -> Tuple[SparseAdjacency, list]:
    """
    Build adjacency from a simple undirected NetworkX graph.

    Returns (adjacency, nodes) where nodes[i] is the graph node mapped to
    vertex i (G.nodes order). Self-loops are dropped.
    """
    if G.is_directed():
        raise ValueError("directed graphs are not supported")
    nodes = list(G.nodes())
    index = {v: i for i, v in enumerate(nodes)}
    edges = ((index[u], index[v]) for u, v in G.edges())
    return from_edges(edges, n=len(nodes)), nodes


def from_scipy(A) -> SparseAdjacency:
    """
    Build adjacency from a square scipy.sparse matrix (or array).

    The sparsity pattern is used as-is, so A must be structurally
    symmetric; values are ignored. Explicit zeros are dropped, as is the
    diagonal.
    """
    if A.shape[0] != A.shape[1]:
        raise ValueError(f"adjacency matrix must be square, got shape {A.shape}")
    C = sp.coo_array(A)
    keep = (C.row != C.col) & (C.data != 0)
    pattern = sp.csr_array(
        (np.ones(int(keep.sum())), (C.row[keep], C.col[keep])),
        shape=C.shape,
    )
    pattern.sum_duplicates()
    pattern.sort_indices()
    return SparseAdjacency(pattern.indptr, pattern.indices)


def to_scipy(adj: SparseAdjacency) -> sp.csr_array:
    """Pattern of adj as a 0/1 float csr_array."""
    data = np.ones(adj.m, dtype=np.float64)
    return sp.csr_array((data, adj.col_index, adj.row_offset), shape=(adj.n, adj.n))


def to_edges(adj: SparseAdjacency) -> List[Tuple[int, int]]:
    """
    Return undirected edges as (u,v) with u < v.
    """
    ro, ci = adj.to_lists()
    eds: List[Tuple[int, int]] = []
    for u in range(adj.n):
        for p in range(ro[u], ro[u + 1]):
            v = ci[p]
            if v > u:
                eds.append((u, v))
    return eds
