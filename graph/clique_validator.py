# graph/clique_validator.py
from typing import Hashable, Iterable, Set
from graph.store import Graph


def construct_clique(G: Graph, pivot: int, edges: Iterable[int]) -> Set[int]:
    """
    Decide whether `pivot` plus the endpoints of `edges` (edge ids leaving the pivot)
    form a clique.
      - every candidate except the pivot must point at every other candidate
        (self-loops are not counted)
      - accepted: return the witness edges, i.e. the candidates' edges pointing back to the pivot
      - rejected: return an empty set (never a partial match)
    A combination whose endpoints collapse (an edge back onto the pivot, a repeated target)
    is rejected, so an accepted clique always has len(edges)+1 members.
    """
    edges = list(edges)
    candidates = {pivot}
    for e in edges:
        candidates.add(G.endpoint(e))
    if len(candidates) != len(edges) + 1:
        return set()

    witness: Set[int] = set()
    for cand in candidates:
        if cand == pivot:
            continue
        occurrences = 1  # the candidate itself
        for e in G.out_edges(cand):
            target = G.endpoint(e)
            if target == cand:
                continue
            if target in candidates:
                occurrences += 1
            if target == pivot:
                witness.add(e)
        if occurrences < len(candidates):
            return set()
    return witness


def is_clique(G: Graph, labels: Iterable[Hashable]) -> bool:
    """Every ordered pair of distinct members is joined by an edge."""
    members = list(set(labels))
    if any(v not in G for v in members):
        return False
    ids = [G.node_id(v) for v in members]
    for s in ids:
        for t in ids:
            if s != t and not G.has_edge_ids(s, t):
                return False
    return True
