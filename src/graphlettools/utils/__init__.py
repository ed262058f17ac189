from .connectivity import is_connected_subset, induced_edges
from .linalg import exact_rank, exact_inverse
from .naming import ORBITS, orbit_name, graphlet_name, orbit_of
from .bruteforce import connected_vertex_sets, orbit_counts_bruteforce, orbit_counts_combinations

__all__ = [
    "is_connected_subset",
    "induced_edges",
    "exact_rank",
    "exact_inverse",
    "ORBITS",
    "orbit_name",
    "graphlet_name",
    "orbit_of",
    "connected_vertex_sets",
    "orbit_counts_bruteforce",
    "orbit_counts_combinations",
]
