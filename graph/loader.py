# graph/loader.py
from typing import List, Tuple
import random
import networkx as nx

DELIMITER_NODES = ","
DELIMITER_EDGES = ";"
_ALPHABET = "abcdefghijklmnopqrstuvwxyz"


def parse_edge_string(graph_data: str) -> List[Tuple[str, str]]:
    """
    Parse "A,B;B,C;C,A" into [("A","B"), ("B","C"), ("C","A")].
      - labels are trimmed; one trailing ';' is tolerated
      - an edge with fewer than two labels, or an empty label -> ValueError
    Labels beyond the second in one edge are ignored.
    """
    data = graph_data.strip()
    if data.endswith(DELIMITER_EDGES):
        data = data[:-1]
    if not data:
        raise ValueError("no edges given")

    result: List[Tuple[str, str]] = []
    for chunk in data.split(DELIMITER_EDGES):
        parts = chunk.split(DELIMITER_NODES)
        if len(parts) < 2:
            raise ValueError(f"edge {chunk!r} needs two nodes separated by {DELIMITER_NODES!r}")
        u, v = parts[0].strip(), parts[1].strip()
        if not u or not v:
            raise ValueError(f"edge {chunk!r} has an empty node label")
        result.append((u, v))
    return result


def load_demo_edges(n: int = 12, p: float = 0.5, seed: int = 0) -> List[Tuple[int, int]]:
    # small random symmetric digraph for quick tests
    G = nx.erdos_renyi_graph(n=n, p=p, seed=seed)
    edges = []
    for u, v in G.edges():
        edges.append((u, v))
        edges.append((v, u))
    return edges


def _gen_label(rnd: random.Random, length: int) -> str:
    return "".join(rnd.choice(_ALPHABET) for _ in range(length))


def random_label_edges(seed: int = 0, steps: int = 10_000) -> List[Tuple[str, str]]:
    """
    Stress generator with random string labels. Each step either links two known
    labels or links a known label to a fresh one (50/50). Pairs are unique,
    directions are not symmetrised, self-loops can occur.
    Dense outputs make the search blow up; run it with a time limit.
    """
    rnd = random.Random(seed)
    first, second = _gen_label(rnd, 18), _gen_label(rnd, 24)
    defined = [first, second]
    known = set(defined)
    seen = {(first, second)}
    result = [(first, second)]
    for _ in range(steps):
        if rnd.randrange(2) == 1:
            pair = (rnd.choice(defined), rnd.choice(defined))
        else:
            n1 = rnd.choice(defined)
            n2 = _gen_label(rnd, rnd.randrange(5, 30))
            if n2 not in known:
                known.add(n2)
                defined.append(n2)
            pair = (n1, n2)
        if pair not in seen:
            seen.add(pair)
            result.append(pair)
    return result
