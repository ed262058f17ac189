from __future__ import annotations


def is_connected_subset(
    adj: list[set[int]],
    vertices: tuple[int, ...],
) -> bool:
    """Whether *vertices* induce a connected subgraph of adj.

    The empty set and single vertices count as connected.
    """
    if len(vertices) <= 1:
        return True
    inside = set(vertices)
    seen = {vertices[0]}
    stack = [vertices[0]]
    while stack:
        u = stack.pop()
        for w in adj[u]:
            if w in inside and w not in seen:
                seen.add(w)
                stack.append(w)
    return len(seen) == len(inside)


def induced_edges(
    adj: list[set[int]],
    vertices: tuple[int, ...],
) -> list[tuple[int, int]]:
    """Edges of the subgraph induced by *vertices*, as (u, v) with u < v."""
    out: list[tuple[int, int]] = []
    for a in range(len(vertices)):
        u = vertices[a]
        for b in range(a + 1, len(vertices)):
            v = vertices[b]
            if v in adj[u]:
                out.append((u, v) if u < v else (v, u))
    return out
