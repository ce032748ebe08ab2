"""Trivial Graph Format (TGF) exporter for canonical edge sequences."""

from typing import Dict, List, Sequence

from graph.model import Edge


SEPARATOR = "#"


def assign_labels(edges: Sequence[Edge]) -> Dict[str, int]:
    """
    Assign integer labels to the node identifiers of an edge sequence.

    Labels start at 1 and follow the order in which identifiers are first
    seen while scanning the edges in order, source before target. The
    edges are expected to be the sorted output of ``EdgeStore.finalize()``;
    label numbers depend on that order.

    Args:
        edges: Canonical edge sequence.

    Returns:
        Mapping of node identifier to label.
    """
    labels: Dict[str, int] = {}
    counter = 0

    for source, target in edges:
        for node in (source, target):
            if node not in labels:
                counter += 1
                labels[node] = counter

    return labels


def to_tgf(edges: Sequence[Edge]) -> str:
    """
    Convert a canonical edge sequence to TGF.

    The document lists one ``<label> <identifier>`` line per node, ordered
    by identifier, then a ``#`` line, then one ``<label> <label>`` line per
    edge in sequence order. Every line ends with a newline.

    Args:
        edges: Canonical edge sequence.

    Returns:
        TGF document. An empty sequence yields ``"#\\n"``.
    """
    labels = assign_labels(edges)

    lines: List[str] = []

    for node in sorted(labels):
        lines.append(f"{labels[node]} {node}")

    lines.append(SEPARATOR)

    for source, target in edges:
        lines.append(f"{labels.get(source, 0)} {labels.get(target, 0)}")

    return "".join(line + "\n" for line in lines)
