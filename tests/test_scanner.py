"""Tests for the per-vertex counters, scanners and scratch arenas."""
import networkx as nx
import pytest

from graphlettools.io.convert import from_edges, from_networkx
from graphlettools.fglt.counters import (
    claw_center_count,
    claw_leaf_count,
    star_count,
    two_path_count,
)
from graphlettools.fglt.scanner import (
    count_cliques4,
    remove_neighbors,
    scan_common_neighbors,
    scan_second_pass,
)
from graphlettools.fglt.scratch import (
    Scratch,
    ScratchAllocationError,
    ScratchPool,
)

TRIANGLE = [(0, 1), (1, 2), (0, 2)]
C4 = [(0, 1), (1, 2), (2, 3), (3, 0)]
K4 = [(0, 1), (0, 2), (0, 3), (1, 2), (1, 3), (2, 3)]


def _lists(edges, n=None):
    adj = from_edges(edges, n=n)
    ro, ci = adj.to_lists()
    return adj, ro, ci


def _scan(edges, i, n=None):
    """Run the first scan for vertex i; return (d4, d12, c3 of i, scratch)."""
    adj, ro, ci = _lists(edges, n)
    scratch = Scratch(adj.n)
    c3 = [0.0] * adj.m
    d4, d12 = scan_common_neighbors(i, ro, ci, c3, scratch)
    return d4, d12, c3[ro[i] : ro[i + 1]], scratch, ro, ci, c3


# --- closed forms ---

def test_star_count():
    assert star_count(0) == 0
    assert star_count(1) == 0
    assert star_count(2) == 1
    assert star_count(5) == 10


def test_claw_center_count():
    assert claw_center_count(2) == 0
    assert claw_center_count(3) == 1
    assert claw_center_count(6) == 20


def test_two_path_count_c4():
    _, ro, ci = _lists(C4)
    deg = [2.0] * 4
    assert all(two_path_count(i, ro, ci, deg) == 2 for i in range(4))


def test_two_path_count_isolated():
    _, ro, ci = _lists([(0, 1)], n=3)
    deg = [1.0, 1.0, 0.0]
    assert two_path_count(2, ro, ci, deg) == 0


def test_claw_leaf_count_star():
    _, ro, ci = _lists([(0, 1), (0, 2), (0, 3)])
    deg = [3.0, 1.0, 1.0, 1.0]
    assert claw_leaf_count(1, ro, ci, deg) == 1
    assert claw_leaf_count(0, ro, ci, deg) == 0


# --- common-neighbor scan ---

def test_scan_triangle():
    d4, d12, c3_i, scratch, ro, ci, _ = _scan(TRIANGLE, 0)
    assert d4 == 1
    assert d12 == 0
    assert c3_i == [1, 1]
    remove_neighbors(scratch.is_ngbh, 0, ro, ci)
    assert scratch.is_clean()


def test_scan_c4():
    d4, d12, c3_i, *_ = _scan(C4, 0)
    assert d4 == 0
    assert d12 == 1
    assert c3_i == [0, 0]


def test_scan_isolated_vertex():
    d4, d12, c3_i, scratch, *_ = _scan([(0, 1)], 2, n=3)
    assert (d4, d12) == (0, 0)
    assert c3_i == []
    assert scratch.is_clean()


def test_scan_marks_left_for_caller():
    _, _, _, scratch, ro, ci, _ = _scan(TRIANGLE, 0)
    # marks hold 1-based edge positions
    assert scratch.is_ngbh[1] == ro[0] + 1
    assert scratch.is_ngbh[2] == ro[0] + 2
    assert scratch.pos == []
    assert not any(scratch.is_used)


def test_count_cliques4_k4():
    d4, _, _, scratch, ro, ci, c3 = _scan(K4, 0)
    assert d4 == 3
    assert count_cliques4(0, ro, ci, c3, scratch) == 1
    remove_neighbors(scratch.is_ngbh, 0, ro, ci)
    assert scratch.is_clean()


def test_count_cliques4_diamond():
    diamond = [(0, 1), (0, 2), (0, 3), (1, 2), (1, 3)]
    _, _, _, scratch, ro, ci, c3 = _scan(diamond, 0)
    assert count_cliques4(0, ro, ci, c3, scratch) == 0


def test_scratch_reused_across_vertices():
    G = nx.gnp_random_graph(30, 0.25, seed=11)
    adj, _ = from_networkx(G)
    ro, ci = adj.to_lists()
    scratch = Scratch(adj.n)
    c3 = [0.0] * adj.m
    tri = nx.triangles(G)
    for i in range(adj.n):
        d4, _ = scan_common_neighbors(i, ro, ci, c3, scratch)
        count_cliques4(i, ro, ci, c3, scratch)
        remove_neighbors(scratch.is_ngbh, i, ro, ci)
        assert d4 == tri[i]
        assert scratch.is_clean()


def test_scan_with_chunk_base():
    _, ro, ci = _lists(TRIANGLE)
    scratch = Scratch(3)
    # buffer covers vertex 1 only
    c3 = [0.0] * (ro[2] - ro[1])
    scan_common_neighbors(1, ro, ci, c3, scratch, base=ro[1])
    assert c3 == [1, 1]


# --- second pass ---

def test_second_pass_paw_tail():
    # triangle 0-1-2 with tail 3 on vertex 0
    paw = [(0, 1), (0, 2), (1, 2), (0, 3)]
    adj, ro, ci = _lists(paw)
    scratch = Scratch(adj.n)
    c3 = [0.0] * adj.m
    d4 = []
    for i in range(adj.n):
        t, _ = scan_common_neighbors(i, ro, ci, c3, scratch)
        remove_neighbors(scratch.is_ngbh, i, ro, ci)
        d4.append(t)
    deg = [3.0, 2.0, 2.0, 1.0]
    d2 = [two_path_count(i, ro, ci, deg) for i in range(adj.n)]

    d5, d9, d10, d13 = scan_second_pass(3, ro, ci, deg, d2, d4, c3, scratch)
    assert (d9, d10, d13) == (1, 0, 0)
    assert d5 == 2
    d5, d9, d10, d13 = scan_second_pass(1, ro, ci, deg, d2, d4, c3, scratch)
    assert d10 == 1
    assert scratch.is_clean()


# --- scratch ---

def test_scratch_pool_acquire():
    pool = ScratchPool(5, 3)
    assert len(pool) == 3
    assert pool.acquire(0) is not pool.acquire(1)
    assert pool.acquire(2).n == 5


def test_scratch_pool_rejects_zero_workers():
    with pytest.raises(ValueError):
        ScratchPool(5, 0)


def test_scratch_release_counters():
    pool = ScratchPool(4, 2)
    pool.release_counters()
    s = pool.acquire(1)
    assert s.fl == [] and s.is_used == []
    assert len(s.is_ngbh) == 4
    assert s.is_clean()


def test_scratch_allocation_failure(monkeypatch):
    def boom(self, n, counters=True):
        raise MemoryError

    monkeypatch.setattr(Scratch, "__init__", boom)
    with pytest.raises(ScratchAllocationError):
        Scratch.allocate(10)
