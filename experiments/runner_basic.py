# experiments/runner_basic.py
import csv
import os
import sys
from typing import List, Tuple

ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

import networkx as nx

from graph.store import Graph
from graph.loader import load_demo_edges
from graph.verify import verify_cliques
from driver.clique_search import search_report


def symmetric_edges(U: nx.Graph) -> List[Tuple]:
    edges = []
    for u, v in U.edges():
        edges.append((u, v))
        edges.append((v, u))
    return edges


def run_one(G: Graph, inst: str, time_limit: float = 30.0) -> dict:
    res = search_report(G, time_limit_sec=time_limit)
    rep = verify_cliques(G, res["cliques"]) if res["stop_reason"] == "done" else None
    return {
        "instance": inst,
        "n": G.node_count(),
        "m": G.edge_count(),
        "cliques": res["num_cliques"],
        "by_size": ";".join(f"{k}:{v}" for k, v in sorted(res["by_size"].items())),
        "reference": rep["num_reference"] if rep else "",
        "feasible": rep["feasible"] if rep else "",
        "combinations": res["combinations"],
        "runtime_sec": res["runtime_sec"],
        "stop_reason": res["stop_reason"],
    }


def main() -> None:
    instances = [
        ("K5", Graph(symmetric_edges(nx.complete_graph(5)))),
        ("C9", Graph(symmetric_edges(nx.cycle_graph(9)))),
        ("K3,4", Graph(symmetric_edges(nx.complete_bipartite_graph(3, 4)))),
        ("ER12_p05", Graph(load_demo_edges(n=12, p=0.5, seed=0))),
        ("ER20_p03", Graph(load_demo_edges(n=20, p=0.3, seed=1))),
    ]

    rows = []
    for name, G in instances:
        row = run_one(G, name)
        print(f"[Run] {name:10s} |V|={row['n']} |E|={row['m']} cliques={row['cliques']} "
              f"feasible={row['feasible']} stop={row['stop_reason']} t={row['runtime_sec']:.3f}s")
        rows.append(row)

    out = "results_basic.csv"
    with open(out, "w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=list(rows[0].keys()))
        w.writeheader()
        w.writerows(rows)

    print(f"Wrote {len(rows)} rows -> {out}")


if __name__ == "__main__":
    main()
