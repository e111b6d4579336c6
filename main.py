# main.py
import argparse, sys
from graph.store import Graph
from graph.loader import parse_edge_string, load_demo_edges, random_label_edges, DELIMITER_NODES, DELIMITER_EDGES
from graph.verify import verify_cliques, print_check_summary
from driver.clique_search import search_report

USAGE = (
    "This program looks for cliques of all sizes in the graph.\n"
    "To pass graph, just type like this: A{0}B{1}C{0}D{1} and so on. Here, A, B, C, D are the graph nodes,\n"
    "\tThey can be anything you want (numbers, characters, sentences). The only thing that matters is the delimiters.\n"
    "In the output you will see something like this: A, B, and every new set of clique nodes will start from new line."
).format(DELIMITER_NODES, DELIMITER_EDGES)


def print_cliques(cliques) -> None:
    if not cliques:
        print("No Cliques found!")
        return
    print("Found cliques:")
    for Q in cliques:
        print(", ".join(sorted(map(str, Q))))


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Enumerate cliques of a directed graph.")
    ap.add_argument("edges", nargs="*", help=f"edges like A{DELIMITER_NODES}B{DELIMITER_EDGES}B{DELIMITER_NODES}A")
    ap.add_argument("--size", type=int, default=None, help="only cliques of this size (default: all sizes)")
    ap.add_argument("--demo", default=None, choices=["er", "random-labels"])
    ap.add_argument("--demo-n", type=int, default=12)
    ap.add_argument("--demo-p", type=float, default=0.5)
    ap.add_argument("--seed", type=int, default=0)
    ap.add_argument("--time", type=float, default=None, help="time limit in seconds")
    ap.add_argument("--max-combinations", type=int, default=None)
    ap.add_argument("--verify", action="store_true", help="cross-check the result with networkx")
    ap.add_argument("--viz-out", default=None, help="directory for a PNG rendering of the cliques")
    ap.add_argument("--verbose", action="store_true")
    return ap


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    if args.demo == "er":
        edges = load_demo_edges(n=args.demo_n, p=args.demo_p, seed=args.seed)
    elif args.demo == "random-labels":
        edges = random_label_edges(seed=args.seed)
    else:
        try:
            edges = parse_edge_string("".join(args.edges))
        except ValueError as e:
            if args.verbose:
                print(f"[Main] invalid edges: {e}")
            print(USAGE)
            return 1

    G = Graph(edges)
    if args.verbose:
        print(f"[Main] graph built: |V|={G.node_count()} |E|={G.edge_count()} | size={args.size or 'all'}")

    try:
        res = search_report(
            G, args.size,
            time_limit_sec=args.time,
            max_combinations=args.max_combinations,
            verbose=args.verbose,
        )
    except ValueError as e:
        print(f"[Main] {e}")
        return 1

    if res["stop_reason"] != "done":
        print(f"[Main] search stopped: {res['stop_reason']} after {res['combinations']} combinations "
              f"({res['runtime_sec']:.2f}s)")
        return 2

    print_cliques(res["cliques"])
    if args.verbose:
        print(f"[Main] cliques={res['num_cliques']} by_size={res['by_size']} "
              f"combinations={res['combinations']} time={res['runtime_sec']:.4f}s")

    if args.verify:
        rep = verify_cliques(G, res["cliques"], expected_size=args.size)
        print_check_summary(rep)

    if args.viz_out:
        from visualisierung.draw import visualize_cliques
        path = visualize_cliques(G, res["cliques"], step=f"size-{args.size or 'all'}", out_dir=args.viz_out,
                                 layout_seed=args.seed)
        print(f"[Main] picture -> {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
