"""Tests for graphlettools.utils module."""
from fractions import Fraction

import networkx as nx
import numpy as np
import pytest

from graphlettools.utils.connectivity import induced_edges, is_connected_subset
from graphlettools.utils.linalg import exact_inverse, exact_rank
from graphlettools.utils.naming import ORBITS, graphlet_name, orbit_name, orbit_of
from graphlettools.utils.bruteforce import (
    connected_vertex_sets,
    orbit_counts_bruteforce,
    orbit_counts_combinations,
)


# --- connectivity ---

PATH_PLUS = [{1}, {0, 2}, {1}, set()]


def test_is_connected_subset_trivial():
    assert is_connected_subset(PATH_PLUS, ()) is True
    assert is_connected_subset(PATH_PLUS, (3,)) is True


def test_is_connected_subset_path():
    assert is_connected_subset(PATH_PLUS, (0, 1, 2)) is True


def test_is_connected_subset_gap():
    # 0 and 2 only meet through 1
    assert is_connected_subset(PATH_PLUS, (0, 2)) is False
    assert is_connected_subset(PATH_PLUS, (0, 1, 3)) is False


def test_induced_edges():
    adj = [{1, 2}, {0, 2}, {0, 1, 3}, {2}]
    assert induced_edges(adj, (0, 2, 3)) == [(0, 2), (2, 3)]
    assert induced_edges(adj, (3, 0)) == []


# --- linalg ---

def test_exact_rank_identity():
    assert exact_rank([[1, 0], [0, 1]], 2, 2) == 2


def test_exact_rank_rank_deficient():
    M = [[1, 2, 3], [2, 4, 6]]  # row 2 = 2 * row 1
    assert exact_rank(M, 2, 3) == 1


def test_exact_inverse():
    M = [[2, 1], [1, 1]]
    assert exact_inverse(M, 2) == [[1, -1], [-1, 2]]


def test_exact_inverse_rational():
    inv = exact_inverse([[2, 0], [0, 4]], 2)
    assert inv == [[Fraction(1, 2), 0], [0, Fraction(1, 4)]]


def test_exact_inverse_singular():
    with pytest.raises(ValueError):
        exact_inverse([[1, 2], [2, 4]], 2)


# --- naming ---

def test_orbit_table():
    assert len(ORBITS) == 16
    assert orbit_name(0) == "K1:vertex"
    assert orbit_name(11) == "paw:hub"
    assert orbit_name(15) == "K4:corner"


def test_graphlet_names():
    assert graphlet_name([]) == "K1"
    assert graphlet_name([(0, 1)]) == "K2"
    assert graphlet_name([(0, 1), (1, 2)]) == "P3"
    assert graphlet_name([(0, 1), (1, 2), (2, 3)]) == "P4"
    assert graphlet_name([(0, 1), (0, 2), (0, 3)]) == "K1,3"
    assert graphlet_name([(0, 1), (1, 2), (2, 3), (3, 0)]) == "C4"
    assert graphlet_name([(5, 6), (5, 7), (6, 7), (5, 8)]) == "paw"


def test_graphlet_name_rejects_large():
    with pytest.raises(ValueError):
        graphlet_name([(0, 1), (1, 2), (2, 3), (3, 4)])


def test_orbit_of_diamond():
    diamond = [(0, 1), (0, 2), (0, 3), (1, 2), (1, 3)]
    assert orbit_of(diamond, 0) == 14
    assert orbit_of(diamond, 2) == 13


def test_orbit_of_path():
    p4 = [(0, 1), (1, 2), (2, 3)]
    assert [orbit_of(p4, v) for v in range(4)] == [5, 6, 6, 5]


# --- brute force ---

def test_connected_vertex_sets_triangle():
    adj = [{1, 2}, {0, 2}, {0, 1}]
    sets = sorted(tuple(sorted(s)) for s in connected_vertex_sets(adj))
    assert sets == [(0,), (0, 1), (0, 1, 2), (0, 2), (1,), (1, 2), (2,)]


def test_connected_vertex_sets_unique():
    G = nx.gnp_random_graph(15, 0.3, seed=3)
    adj = [set(G[v]) for v in range(15)]
    sets = [frozenset(s) for s in connected_vertex_sets(adj, 4)]
    assert len(sets) == len(set(sets))


def test_bruteforce_strategies_agree():
    G = nx.gnp_random_graph(14, 0.35, seed=12)
    edges = list(G.edges())
    np.testing.assert_array_equal(
        orbit_counts_bruteforce(14, edges),
        orbit_counts_combinations(14, edges),
    )


def test_bruteforce_star():
    counts = orbit_counts_bruteforce(4, [(0, 1), (0, 2), (0, 3)])
    assert counts[8, 0] == 1
    assert counts[3, 0] == 3
    assert counts[7, 1:].tolist() == [1, 1, 1]
    assert counts[2, 1:].tolist() == [2, 2, 2]
