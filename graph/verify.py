from typing import Dict, Any, List, Iterable, Optional, FrozenSet, Hashable
import networkx as nx
from graph.store import Graph
from graph.clique_validator import is_clique


def mutual_graph(G: Graph) -> nx.Graph:
    """Undirected graph keeping only pairs connected in both directions (self-loops dropped)."""
    D = G.to_networkx()
    U = nx.Graph()
    U.add_nodes_from(D.nodes())
    U.add_edges_from((u, v) for u, v in D.edges() if u != v and D.has_edge(v, u))
    return U


def reference_cliques(G: Graph, clique_size: Optional[int] = None) -> List[FrozenSet[Hashable]]:
    """All cliques (size >= 2, or exactly clique_size) of the mutual graph, via networkx."""
    out = []
    for Q in nx.enumerate_all_cliques(mutual_graph(G)):
        if clique_size is not None and len(Q) > clique_size:
            break
        if len(Q) < 2 or (clique_size is not None and len(Q) != clique_size):
            continue
        out.append(frozenset(Q))
    return out


def verify_cliques(
    G: Graph,
    cliques: Iterable[Iterable[Hashable]],
    expected_size: Optional[int] = None,
    sample: int = 10,
) -> Dict[str, Any]:

    report: Dict[str, Any] = {}
    found = [frozenset(Q) for Q in cliques]
    report["num_cliques"] = len(found)

    # size check
    size_mismatch = []
    if expected_size is not None:
        size_mismatch = [Q for Q in found if len(Q) != expected_size]
    report["size_mismatch"] = size_mismatch[:sample]

    # each reported set must be fully mutually connected
    not_cliques = [Q for Q in found if len(Q) < 2 or not is_clique(G, Q)]
    report["num_not_cliques"] = len(not_cliques)
    report["not_cliques"] = not_cliques[:sample]

    # duplicates
    seen = set()
    duplicates = []
    for Q in found:
        if Q in seen:
            duplicates.append(Q)
        seen.add(Q)
    report["num_duplicates"] = len(duplicates)
    report["duplicates"] = duplicates[:sample]

    # completeness against networkx
    ref = set(reference_cliques(G, expected_size))
    missing = [Q for Q in ref if Q not in seen]
    report["num_missing"] = len(missing)
    report["missing"] = missing[:sample]
    report["num_reference"] = len(ref)

    report["feasible"] = (
        len(size_mismatch) == 0 and
        len(not_cliques) == 0 and
        len(duplicates) == 0 and
        len(missing) == 0
    )
    return report


def print_check_summary(report: Dict[str, Any], prefix: str = "[Check] ") -> None:

    feasible = report.get("feasible", False)
    print(f"{prefix}feasible={feasible}|cliques={report.get('num_cliques', -1)}"
          f"|reference={report.get('num_reference', -1)}")
    if not feasible:
        def fmt(sets):
            return [sorted(map(str, Q)) for Q in sets]
        if report.get("size_mismatch"):
            print(f"{prefix}size_mismatch(sample) ={fmt(report['size_mismatch'])}")
        if report.get("not_cliques"):
            print(f"{prefix}not_cliques(sample) ={fmt(report['not_cliques'])}")
        if report.get("duplicates"):
            print(f"{prefix}duplicates(sample) ={fmt(report['duplicates'])}")
        if report.get("missing"):
            print(f"{prefix}missing(sample) ={fmt(report['missing'])}")
