# tests/test_clique_search.py
import os, sys

ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

import threading
import networkx as nx
import pytest

from graph.store import Graph
from graph.clique_validator import construct_clique, is_clique
from graph.loader import load_demo_edges
from graph.verify import verify_cliques
from driver.clique_search import (
    SearchAborted,
    find_all_cliques,
    find_cliques_of_size,
    search_report,
)

TRIANGLE = [("A", "B"), ("A", "C"), ("B", "A"), ("B", "C"), ("C", "A"), ("C", "B")]


def complete_edges(n):
    return [(u, v) for u in range(n) for v in range(n) if u != v]


def as_sets(cliques):
    return {frozenset(Q) for Q in cliques}


def run_and_check(G, k=None, name="Graph"):
    cliques = find_all_cliques(G) if k is None else find_cliques_of_size(G, k)
    rep = verify_cliques(G, cliques, expected_size=k)
    assert rep["feasible"], f"{name}: {rep}"
    return cliques


def test_triangle_pairs():
    G = Graph(TRIANGLE)
    cliques = run_and_check(G, 2, "K3 pairs")
    assert len(cliques) == 3
    assert as_sets(cliques) == {frozenset("AB"), frozenset("BC"), frozenset("AC")}


def test_triangle_whole():
    G = Graph(TRIANGLE)
    assert find_cliques_of_size(G, 3) == [frozenset("ABC")]


def test_find_all_grouped_by_size():
    G = Graph(TRIANGLE)
    sizes = [len(Q) for Q in find_all_cliques(G)]
    assert sizes == [2, 2, 2, 3]


def test_no_edges_no_cliques():
    G = Graph([], nodes=["A", "B", "C"])
    assert find_all_cliques(G) == []
    assert find_all_cliques(Graph()) == []


@pytest.mark.parametrize("k", [1, 0, -3, 4, 2.0, True])
def test_invalid_size(k):
    G = Graph(TRIANGLE)
    with pytest.raises(ValueError):
        find_cliques_of_size(G, k)


def test_repeated_queries_agree():
    G = Graph(load_demo_edges(n=9, p=0.6, seed=3))
    assert as_sets(find_cliques_of_size(G, 3)) == as_sets(find_cliques_of_size(G, 3))


@pytest.mark.parametrize("n", [2, 4, 6])
def test_complete_graph_reported_once(n):
    G = Graph(complete_edges(n))
    assert find_cliques_of_size(G, n) == [frozenset(range(n))]


def test_k4_triangles():
    G = Graph(complete_edges(4))
    cliques = run_and_check(G, 3, "K4 triangles")
    assert len(cliques) == 4


def test_duplicate_input_same_result():
    G = Graph(TRIANGLE + TRIANGLE[:3])
    assert as_sets(find_all_cliques(G)) == as_sets(find_all_cliques(Graph(TRIANGLE)))


def test_self_loops_do_not_count():
    G = Graph([("A", "A"), ("A", "B"), ("B", "A"), ("B", "B"), ("B", "C")])
    assert find_cliques_of_size(G, 2) == [frozenset("AB")]
    assert find_cliques_of_size(G, 3) == []
    assert find_all_cliques(Graph([("A", "A"), ("B", "B")])) == []


def test_one_way_edges_are_not_cliques():
    G = Graph([("A", "B"), ("B", "C"), ("C", "B"), ("C", "A")])
    assert find_cliques_of_size(G, 2) == [frozenset("BC")]
    assert find_cliques_of_size(G, 3) == []


def test_validator_returns_witness_edges():
    G = Graph(TRIANGLE)
    a = G.node_id("A")
    witness = construct_clique(G, a, G.out_edges(a))
    assert {(G.label(G.edge(e).source), G.label(G.edge(e).target)) for e in witness} == {("B", "A"), ("C", "A")}


def test_validator_rejects_partial_match():
    G = Graph([("A", "B"), ("A", "C"), ("B", "A"), ("B", "C"), ("C", "A")])
    a = G.node_id("A")
    assert construct_clique(G, a, G.out_edges(a)) == set()
    assert not is_clique(G, "ABC")
    assert is_clique(G, "AB")


def test_validator_rejects_edge_onto_pivot():
    G = Graph([("A", "A"), ("A", "B"), ("B", "A")])
    a = G.node_id("A")
    loop = [e for e in G.out_edges(a) if G.endpoint(e) == a]
    assert construct_clique(G, a, loop) == set()


@pytest.mark.parametrize("seed", range(5))
def test_matches_networkx_on_random_graphs(seed):
    G = Graph(load_demo_edges(n=10, p=0.5, seed=seed))
    cliques = run_and_check(G, None, f"ER seed={seed}")
    U = nx.Graph()
    U.add_edges_from((u, v) for u, v in G.edges())
    expected = {frozenset(Q) for Q in nx.enumerate_all_cliques(U) if len(Q) >= 2}
    assert as_sets(cliques) == expected
    assert len(cliques) == len(expected)


def test_asymmetric_random_graph_is_exact():
    D = nx.gnp_random_graph(9, 0.6, seed=7, directed=True)
    G = Graph(list(D.edges()))
    run_and_check(G, None, "directed gnp")


def test_max_combinations_aborts():
    G = Graph(complete_edges(5))
    with pytest.raises(SearchAborted) as exc:
        find_all_cliques(G, max_combinations=3)
    assert exc.value.stop_reason == "max_combinations"
    assert exc.value.combinations == 3
    assert isinstance(exc.value, TimeoutError)


def test_cancel_event_aborts():
    ev = threading.Event()
    ev.set()
    with pytest.raises(SearchAborted) as exc:
        find_cliques_of_size(Graph(TRIANGLE), 2, cancel_event=ev)
    assert exc.value.stop_reason == "cancelled"


def test_time_limit_aborts():
    # a negative budget is already spent
    with pytest.raises(SearchAborted) as exc:
        find_cliques_of_size(Graph(TRIANGLE), 2, time_limit_sec=-1.0)
    assert exc.value.stop_reason == "time_limit"


def test_search_report():
    G = Graph(complete_edges(4))
    res = search_report(G)
    assert res["stop_reason"] == "done"
    assert res["by_size"] == {2: 6, 3: 4, 4: 1}
    assert res["num_cliques"] == 11
    assert res["combinations"] > 0

    aborted = search_report(G, 3, max_combinations=1)
    assert aborted["stop_reason"] == "max_combinations"
    assert aborted["cliques"] == []

    with pytest.raises(ValueError):
        search_report(G, 9)


def test_verbose_logging(capsys):
    find_cliques_of_size(Graph(TRIANGLE), 2, verbose=True)
    out = capsys.readouterr().out
    assert "[CliqueSearch] k=2" in out
