# tests/test_graph_store.py
import os, sys

ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

import pytest
from graph.store import Graph


def adjacency_of(G):
    return {v: sorted(u for (s, u) in G.edges() if s == v) for v in G.nodes()}


def test_registry_is_first_seen_order():
    G = Graph([("C", "A"), ("A", "B"), ("B", "C")])
    assert G.nodes() == ["C", "A", "B"]
    assert G.node_count() == 3
    assert len(G) == 3


def test_duplicate_pairs_are_absorbed():
    edges = [(1, 2), (2, 1), (1, 2), (2, 3), (1, 2), (2, 3)]
    G = Graph(edges)
    H = Graph([(1, 2), (2, 1), (2, 3)])
    assert G.edge_count() == 3
    assert adjacency_of(G) == adjacency_of(H)
    assert G.in_degree(2) == 1, "repeated edge must not bump in-degree"
    assert G.in_degree(3) == 1
    assert G.in_degree(1) == 1


def test_out_edges_keep_insertion_order():
    G = Graph([("A", "B"), ("A", "C"), ("A", "D")])
    a = G.node_id("A")
    assert [G.label(G.endpoint(e)) for e in G.out_edges(a)] == ["B", "C", "D"]
    assert G.out_degree("A") == 3
    assert G.out_degree("D") == 0


def test_edges_are_directed():
    G = Graph([("A", "B")])
    assert G.has_edge("A", "B")
    assert not G.has_edge("B", "A")
    assert not G.has_edge("A", "Z")


def test_self_loop_and_isolated_nodes_accepted():
    G = Graph([("A", "A")], nodes=["X"])
    assert G.nodes() == ["X", "A"]
    assert G.has_edge("A", "A")
    assert G.in_degree("A") == 1
    assert "X" in G and "Q" not in G
    with pytest.raises(KeyError):
        G.node_id("Q")


def test_adjacency_is_frozen():
    G = Graph([("A", "B")])
    assert isinstance(G.out_edges(G.node_id("A")), tuple)


def test_to_networkx_matches_store():
    G = Graph([(0, 1), (1, 0), (1, 2), (2, 2)])
    D = G.to_networkx()
    assert D.is_directed()
    assert set(D.nodes()) == {0, 1, 2}
    assert set(D.edges()) == {(0, 1), (1, 0), (1, 2), (2, 2)}
