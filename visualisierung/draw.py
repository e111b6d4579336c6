# visualisierung/draw.py
from __future__ import annotations
import os, re
from typing import Dict, Hashable, Iterable, List, Optional, Set, Tuple
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import networkx as nx
from graph.store import Graph

PALETTE = [
    "#E63946", "#457B9D", "#2A9D8F", "#F4A261", "#8E44AD", "#F1C40F",
    "#7F8C8D", "#1ABC9C", "#D35400", "#27AE60", "#C2185B", "#5D6D7E",
]

def _sanitize_step(step: str) -> str:
    """Schrittname bereinigen: Kleinbuchstaben, [a-z0-9-_], Mehrfach-Bindestriche zusammenfassen."""
    s = step.strip().lower()
    s = re.sub(r"[^a-z0-9\-_]+", "-", s)
    s = re.sub(r"-+", "-", s).strip("-")
    return s or "step"

def ensure_outdir(out_dir: str) -> None:
    """Ausgabeverzeichnis sicherstellen (rekursiv anlegen)."""
    os.makedirs(out_dir, exist_ok=True)

def color_for_index(idx: int) -> str:
    """Farbwert aus Palette anhand des Cliquenindex zurückgeben (zyklisch)."""
    return PALETTE[idx % len(PALETTE)]

def visualize_cliques(
    G: Graph,
    cliques: Iterable[Iterable[Hashable]],
    step: str = "cliques",
    out_dir: str = "visualisierung/picture",
    layout_seed: int = 42,
    pos: Optional[Dict] = None,
    show_labels: bool = True,
    figure_size: Tuple[float, float] = (8.0, 6.0),
    dpi: int = 220,
) -> str:
    """
    Zeichnet den gerichteten Graphen und hebt die gefundenen Cliquen hervor:
      - Knoten einer Clique → Palettenfarbe der (ersten) Clique, in der sie vorkommen
      - Kanten innerhalb einer Clique → dick, in Cliquenfarbe
      - alle anderen Knoten/Kanten → hellgrau
    Gibt den Pfad der geschriebenen PNG-Datei zurück.
    """
    ensure_outdir(out_dir)
    step_clean = _sanitize_step(step)
    D = G.to_networkx()
    cliques = [set(Q) for Q in cliques]

    # Knotenfarbe: erste Clique gewinnt
    node_color: Dict[Hashable, str] = {}
    for i, Q in enumerate(cliques):
        for v in Q:
            node_color.setdefault(v, color_for_index(i))

    # Cliquenkanten (beide Richtungen), Farbe der Clique
    clique_edges: List[Tuple[Hashable, Hashable]] = []
    clique_edge_colors: List[str] = []
    marked: Set[Tuple[Hashable, Hashable]] = set()
    for i, Q in enumerate(cliques):
        for (u, v) in D.edges():
            if u != v and u in Q and v in Q and (u, v) not in marked:
                marked.add((u, v))
                clique_edges.append((u, v))
                clique_edge_colors.append(color_for_index(i))
    other_edges = [e for e in D.edges() if e not in marked and e[0] != e[1]]

    if pos is None:
        pos = nx.spring_layout(D, seed=layout_seed)

    plt.figure(figsize=figure_size, dpi=dpi)
    if other_edges:
        nx.draw_networkx_edges(D, pos, edgelist=other_edges, width=0.6, alpha=0.25,
                               edge_color="#CCCCCC", arrows=True)
    if clique_edges:
        nx.draw_networkx_edges(D, pos, edgelist=clique_edges, width=1.8, alpha=0.9,
                               edge_color=clique_edge_colors, arrows=True)

    nodes = list(D.nodes())
    if nodes:
        nx.draw_networkx_nodes(
            D, pos,
            nodelist=nodes,
            node_color=[node_color.get(v, "#DDDDDD") for v in nodes],
            edgecolors="#555555",
            linewidths=0.8,
            node_size=260,
        )
    if show_labels:
        nx.draw_networkx_labels(D, pos, labels={v: str(v) for v in nodes}, font_size=7)

    title = f"{step} | cliques={len(cliques)} (|V|={G.node_count()}, |E|={G.edge_count()})"
    plt.title(title)
    plt.axis("off")
    plt.tight_layout()

    # Dateiname & Speichern
    fname = f"step-{step_clean}_cliques-{len(cliques):03d}.png"
    fpath = os.path.join(out_dir, fname)
    plt.savefig(fpath, bbox_inches="tight")
    plt.close()
    return fpath
