from .convert import from_edges, from_adjlist, from_networkx, from_scipy, to_scipy, to_edges
from .graph6 import g6_to_adjacency, adjacency_to_g6

__all__ = [
    "from_edges",
    "from_adjlist",
    "from_networkx",
    "from_scipy",
    "to_scipy",
    "to_edges",
    "g6_to_adjacency",
    "adjacency_to_g6",
]
