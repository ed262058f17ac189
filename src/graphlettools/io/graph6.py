from __future__ import annotations

import networkx as nx

from graphlettools.io.convert import from_edges
from graphlettools.sparse.adjacency import SparseAdjacency

_HEADER = ">>graph6<<"


def g6_to_adjacency(g6: str) -> SparseAdjacency:
    """
    Parse a graph6 string (optional '>>graph6<<' header) into compressed
    adjacency on vertices 0..n-1.
    """
    s = g6.strip()
    if s.startswith(_HEADER):
        s = s[len(_HEADER) :].strip()
    G = nx.from_graph6_bytes(s.encode("ascii"))
    return from_edges(G.edges(), n=G.number_of_nodes())


def adjacency_to_g6(adj: SparseAdjacency) -> str:
    """Encode adj as a graph6 string (no header)."""
    G = nx.Graph()
    G.add_nodes_from(range(adj.n))
    ro, ci = adj.to_lists()
    for u in range(adj.n):
        for p in range(ro[u], ro[u + 1]):
            G.add_edge(u, ci[p])
    return nx.to_graph6_bytes(G, header=False).decode("ascii").strip()
