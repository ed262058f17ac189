from __future__ import annotations

from collections import defaultdict

# orbit id -> (graphlet name, role of the vertex within it)
ORBITS: tuple[tuple[str, str], ...] = (
    ("K1", "vertex"),
    ("K2", "end"),
    ("P3", "end"),
    ("P3", "center"),
    ("K3", "corner"),
    ("P4", "end"),
    ("P4", "interior"),
    ("K1,3", "leaf"),
    ("K1,3", "center"),
    ("paw", "tail"),
    ("paw", "degree-2 corner"),
    ("paw", "hub"),
    ("C4", "corner"),
    ("diamond", "degree-2 corner"),
    ("diamond", "degree-3 corner"),
    ("K4", "corner"),
)


def orbit_name(o: int) -> str:
    """Short label such as 'paw:hub' for orbit o."""
    g, role = ORBITS[o]
    return f"{g}:{role}"


def graphlet_name(edges: list[tuple[int, int]]) -> str:
    """Name of a connected graphlet on at most 4 vertices, from its edges.

    Returns one of K2, P3, K3, P4, K1,3, C4, paw, diamond, K4.
    Raises ValueError for anything else.
    """
    if not edges:
        return "K1"

    deg: dict[int, int] = defaultdict(int)
    for u, v in edges:
        deg[u] += 1
        deg[v] += 1
    n = len(deg)
    m = len(edges)
    deg_seq = tuple(sorted(deg.values(), reverse=True))

    if n == 2 and m == 1:
        return "K2"
    if n == 3:
        if m == 2:
            return "P3"
        if m == 3:
            return "K3"
    if n == 4:
        named = {
            (3, (2, 2, 1, 1)): "P4",
            (3, (3, 1, 1, 1)): "K1,3",
            (4, (2, 2, 2, 2)): "C4",
            (4, (3, 2, 2, 1)): "paw",
            (5, (3, 3, 2, 2)): "diamond",
            (6, (3, 3, 3, 3)): "K4",
        }
        name = named.get((m, deg_seq))
        if name is not None:
            return name
    raise ValueError(f"not a connected graphlet on <= 4 vertices: {edges!r}")


_ROLE_BY_DEGREE: dict[str, dict[int, int]] = {
    "K1": {0: 0},
    "K2": {1: 1},
    "P3": {1: 2, 2: 3},
    "K3": {2: 4},
    "P4": {1: 5, 2: 6},
    "K1,3": {1: 7, 3: 8},
    "paw": {1: 9, 2: 10, 3: 11},
    "C4": {2: 12},
    "diamond": {2: 13, 3: 14},
    "K4": {3: 15},
}


def orbit_of(edges: list[tuple[int, int]], v: int) -> int:
    """Orbit of vertex v inside the graphlet spanned by edges.

    For graphlets on up to 4 vertices the degree of v inside the graphlet
    determines its orbit.
    """
    name = graphlet_name(edges)
    d = sum(1 for e in edges if v in e)
    return _ROLE_BY_DEGREE[name][d]
