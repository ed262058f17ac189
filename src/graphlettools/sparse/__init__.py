from .adjacency import SparseAdjacency, check_adjacency

__all__ = [
    "SparseAdjacency",
    "check_adjacency",
]
