from .pipeline import (
    GraphletCounts,
    compute,
    compute_into,
    edge_common_neighbors,
    get_workers,
)
from .scratch import Scratch, ScratchPool, ScratchAllocationError, allocate_edge_buffer
from .transform import NUM_ORBITS, RAW_TO_NET, raw2net, net2raw

__all__ = [
    "GraphletCounts",
    "compute",
    "compute_into",
    "edge_common_neighbors",
    "get_workers",
    "Scratch",
    "ScratchPool",
    "ScratchAllocationError",
    "allocate_edge_buffer",
    "NUM_ORBITS",
    "RAW_TO_NET",
    "raw2net",
    "net2raw",
]
