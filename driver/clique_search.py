# driver/clique_search.py
from typing import Any, Dict, FrozenSet, Hashable, List, Optional, Set
from dataclasses import dataclass, field
import numbers
import time

from graph.store import Graph
from graph.combinator import EdgeCombinator
from graph.clique_validator import construct_clique

Clique = FrozenSet[Hashable]


class SearchAborted(TimeoutError):
    """Raised when a search hits its time limit, its combination cap, or is cancelled."""

    def __init__(self, stop_reason: str, combinations: int, elapsed: float):
        super().__init__(
            f"clique search aborted ({stop_reason}) after {combinations} combinations, t={elapsed:.2f}s"
        )
        self.stop_reason = stop_reason
        self.combinations = combinations
        self.elapsed = elapsed


@dataclass
class _Budget:
    time_limit_sec: Optional[float] = None
    max_combinations: Optional[int] = None
    cancel_event: Any = None  # threading.Event or anything with is_set()
    t0: float = field(default_factory=time.perf_counter)
    combinations: int = 0

    def elapsed(self) -> float:
        return time.perf_counter() - self.t0

    def check(self) -> None:
        if self.cancel_event is not None and self.cancel_event.is_set():
            raise SearchAborted("cancelled", self.combinations, self.elapsed())
        if self.time_limit_sec is not None and self.elapsed() > self.time_limit_sec:
            raise SearchAborted("time_limit", self.combinations, self.elapsed())

    def tick(self) -> None:
        self.combinations += 1
        if self.max_combinations is not None and self.combinations > self.max_combinations:
            raise SearchAborted("max_combinations", self.combinations - 1, self.elapsed())
        self.check()


def _check_size(G: Graph, clique_size) -> None:
    n = G.node_count()
    if isinstance(clique_size, bool) or not isinstance(clique_size, numbers.Integral):
        raise ValueError(f"clique size must be an integer, got {clique_size!r}")
    if clique_size < 2 or clique_size > n:
        raise ValueError(
            f"clique size should be at least 2 and not exceed the number of nodes ({n}), got {clique_size}"
        )


def _dedup(cliques: List[Clique]) -> List[Clique]:
    # keep first occurrence, drop repeats
    seen: Set[Clique] = set()
    uniq = []
    for Q in cliques:
        if Q not in seen:
            seen.add(Q)
            uniq.append(Q)
    return uniq


def _search_size(G: Graph, clique_size: int, budget: _Budget, verbose: bool) -> List[Clique]:
    n = G.node_count()
    visited: Set[int] = set()  # edge ids already consumed by a found clique
    result: List[Clique] = []
    skipped = 0

    for pivot in G.node_ids():
        budget.check()
        unvisited = [e for e in G.out_edges(pivot) if e not in visited]
        if len(unvisited) < clique_size - 1:
            skipped += 1
            continue

        combinator = EdgeCombinator(unvisited, clique_size - 1)
        done = False
        while True:
            budget.tick()
            comb = combinator.current_state()
            witness = construct_clique(G, pivot, comb)
            if witness:
                members = {G.label(pivot)}
                for e in comb:
                    visited.add(e)
                    members.add(G.label(G.endpoint(e)))
                for e in witness:
                    visited.add(e)
                    members.add(G.label(G.endpoint(e)))
                result.append(frozenset(members))
                if verbose:
                    print(f"[CliqueSearch] k={clique_size} pivot={G.label(pivot)!r} -> {sorted(map(str, members))}")
                # the whole graph is one clique, no other arrangement is new
                if clique_size == n:
                    done = True
                    break
            if combinator.advance():
                break
        if done:
            break

    uniq = _dedup(result)
    if verbose:
        dropped = len(result) - len(uniq)
        print(f"[CliqueSearch] k={clique_size} | cliques={len(uniq)} | skipped pivots={skipped}"
              f" | dup dropped={dropped} | combos={budget.combinations} | t={budget.elapsed():.3f}s")
    return uniq


def find_cliques_of_size(
    G: Graph,
    clique_size: int,
    *,
    time_limit_sec: Optional[float] = None,
    max_combinations: Optional[int] = None,
    cancel_event: Any = None,
    verbose: bool = False,
) -> List[Clique]:
    """
    Enumerate the cliques with exactly `clique_size` members.
    Nodes are visited in registry order; each node's not-yet-consumed edges are combined
    (clique_size-1 at a time) and validated. Edges of an accepted clique are consumed so
    later pivots do not rediscover it.
    Raises ValueError for sizes outside [2, node_count] and SearchAborted when a limit fires.
    """
    _check_size(G, clique_size)
    budget = _Budget(time_limit_sec, max_combinations, cancel_event)
    return _search_size(G, clique_size, budget, verbose)


def find_all_cliques(
    G: Graph,
    *,
    time_limit_sec: Optional[float] = None,
    max_combinations: Optional[int] = None,
    cancel_event: Any = None,
    verbose: bool = False,
) -> List[Clique]:
    """Cliques of every size 2..node_count, grouped by increasing size. Limits apply to the whole call."""
    budget = _Budget(time_limit_sec, max_combinations, cancel_event)
    return _search_all(G, budget, verbose)


def _search_all(G: Graph, budget: _Budget, verbose: bool) -> List[Clique]:
    result: List[Clique] = []
    for k in range(2, G.node_count() + 1):
        result.extend(_search_size(G, k, budget, verbose))
    return result


def search_report(
    G: Graph,
    clique_size: Optional[int] = None,
    *,
    time_limit_sec: Optional[float] = None,
    max_combinations: Optional[int] = None,
    cancel_event: Any = None,
    verbose: bool = False,
) -> Dict[str, Any]:
    """
    Run one query and summarise it:
      cliques, num_cliques, by_size, combinations, runtime_sec, stop_reason
    An aborted search is reported (stop_reason = abort reason, no cliques) instead of raised.
    Invalid sizes still raise ValueError.
    """
    if clique_size is not None:
        _check_size(G, clique_size)
    budget = _Budget(time_limit_sec, max_combinations, cancel_event)
    if verbose:
        what = "all sizes" if clique_size is None else f"k={clique_size}"
        print(f"[CliqueSearch] graph: |V|={G.node_count()} |E|={G.edge_count()} | query={what}")

    stop_reason = "done"
    try:
        if clique_size is None:
            cliques = _search_all(G, budget, verbose)
        else:
            cliques = _search_size(G, clique_size, budget, verbose)
    except SearchAborted as e:
        stop_reason = e.stop_reason
        cliques = []
        if verbose:
            print(f"[CliqueSearch] stopped: {e}")

    by_size: Dict[int, int] = {}
    for Q in cliques:
        by_size[len(Q)] = by_size.get(len(Q), 0) + 1

    return dict(
        cliques=cliques,
        num_cliques=len(cliques),
        by_size=by_size,
        combinations=budget.combinations,
        runtime_sec=budget.elapsed(),
        stop_reason=stop_reason,
    )
