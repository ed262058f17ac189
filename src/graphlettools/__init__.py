"""
graphlettools: graphlet degree vectors (orbit counts of graphlets on up to
4 vertices) for large sparse undirected graphs, via the fast graphlet
transform over compressed adjacency.
"""

from loguru import logger

from .sparse.adjacency import SparseAdjacency, check_adjacency
from .fglt.pipeline import (
    GraphletCounts,
    compute,
    compute_into,
    edge_common_neighbors,
    get_workers,
)
from .fglt.scratch import ScratchAllocationError
from .fglt.transform import NUM_ORBITS, RAW_TO_NET, raw2net, net2raw

# Converters
from .io.convert import from_edges, from_adjlist, from_networkx, from_scipy, to_scipy, to_edges
from .io.graph6 import g6_to_adjacency

# Shared utilities
from .utils.naming import ORBITS, orbit_name
from .utils.bruteforce import orbit_counts_bruteforce

logger.disable("graphlettools")

__all__ = [
    # Adjacency
    "SparseAdjacency",
    "check_adjacency",
    # Transform
    "GraphletCounts",
    "compute",
    "compute_into",
    "edge_common_neighbors",
    "get_workers",
    "ScratchAllocationError",
    "NUM_ORBITS",
    "RAW_TO_NET",
    "raw2net",
    "net2raw",
    # IO
    "from_edges",
    "from_adjlist",
    "from_networkx",
    "from_scipy",
    "to_scipy",
    "to_edges",
    "g6_to_adjacency",
    # Utils
    "ORBITS",
    "orbit_name",
    "orbit_counts_bruteforce",
]
