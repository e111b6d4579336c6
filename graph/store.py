# graph/store.py
from typing import Dict, Hashable, Iterable, List, NamedTuple, Tuple, Set
import networkx as nx


class Edge(NamedTuple):
    source: int  # node id
    target: int  # node id


class Graph:
    """
    Directed graph over hashable labels, stored as two arenas:
      - nodes: label registry in first-seen order, addressed by node id
      - edges: (source, target) pairs, addressed by edge id
    Each node keeps its outgoing adjacency as a tuple of edge ids.
    Parallel edges are absorbed at construction; the graph is read-only afterwards.
    """

    def __init__(self, edges: Iterable[Tuple[Hashable, Hashable]] = (), nodes: Iterable[Hashable] = ()):
        self._labels: List[Hashable] = []
        self._index: Dict[Hashable, int] = {}
        self._in_degree: List[int] = []
        self._edges: List[Edge] = []
        adjacency: List[List[int]] = []
        linked: Set[Tuple[int, int]] = set()

        # isolated nodes first, so they keep their place in the registry
        for label in nodes:
            self._find_or_create(label, adjacency)

        for u, v in edges:
            s = self._find_or_create(u, adjacency)
            t = self._find_or_create(v, adjacency)
            if (s, t) in linked:
                continue
            linked.add((s, t))
            adjacency[s].append(len(self._edges))
            self._edges.append(Edge(s, t))
            self._in_degree[t] += 1

        # freeze
        self._adjacency: Tuple[Tuple[int, ...], ...] = tuple(tuple(a) for a in adjacency)
        self._linked = frozenset(linked)

    def _find_or_create(self, label: Hashable, adjacency: List[List[int]]) -> int:
        nid = self._index.get(label)
        if nid is None:
            nid = len(self._labels)
            self._index[label] = nid
            self._labels.append(label)
            self._in_degree.append(0)
            adjacency.append([])
        return nid

    # ---- counts ----
    def node_count(self) -> int:
        return len(self._labels)

    def edge_count(self) -> int:
        return len(self._edges)

    def __len__(self) -> int:
        return len(self._labels)

    def __contains__(self, label) -> bool:
        return label in self._index

    # ---- nodes ----
    def nodes(self) -> List[Hashable]:
        """Labels in registry (first-seen) order."""
        return list(self._labels)

    def node_ids(self) -> range:
        return range(len(self._labels))

    def node_id(self, label: Hashable) -> int:
        try:
            return self._index[label]
        except KeyError:
            raise KeyError(f"Unknown node: {label!r}") from None

    def label(self, node_id: int) -> Hashable:
        return self._labels[node_id]

    def in_degree(self, label: Hashable) -> int:
        return self._in_degree[self.node_id(label)]

    def out_degree(self, label: Hashable) -> int:
        return len(self._adjacency[self.node_id(label)])

    # ---- edges ----
    def out_edges(self, node_id: int) -> Tuple[int, ...]:
        """Edge ids leaving `node_id`, in the order they were added."""
        return self._adjacency[node_id]

    def edge(self, edge_id: int) -> Edge:
        return self._edges[edge_id]

    def endpoint(self, edge_id: int) -> int:
        return self._edges[edge_id].target

    def has_edge(self, u: Hashable, v: Hashable) -> bool:
        s = self._index.get(u)
        t = self._index.get(v)
        if s is None or t is None:
            return False
        return (s, t) in self._linked

    def has_edge_ids(self, s: int, t: int) -> bool:
        return (s, t) in self._linked

    def edges(self) -> List[Tuple[Hashable, Hashable]]:
        """All edges as label pairs, grouped by source in registry order."""
        out = []
        for s, adj in enumerate(self._adjacency):
            for eid in adj:
                out.append((self._labels[s], self._labels[self._edges[eid].target]))
        return out

    def to_networkx(self) -> nx.DiGraph:
        G = nx.DiGraph()
        G.add_nodes_from(self._labels)
        G.add_edges_from(self.edges())
        return G

    def __repr__(self) -> str:
        return f"Graph(|V|={self.node_count()}, |E|={self.edge_count()})"
