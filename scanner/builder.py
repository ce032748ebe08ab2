"""Edge builder that orchestrates scanning and edge store population."""

from pathlib import Path
from typing import List, Optional, Set

from graph.model import Edge, EdgeStore
from exporters.tgf_exporter import to_tgf
from .discovery import iter_files
from .resolver import ExtractionRule, resolve_file_node


def read_file_edges(
    file_path: Path,
    source: str,
    extract_rule: ExtractionRule,
) -> Optional[List[Edge]]:
    """
    Collect the edges contributed by one file.

    Args:
        file_path: The file to read.
        source: Node identifier of the file.
        extract_rule: Rule applied to every line of the file.

    Returns:
        List of (source, target) edges, or None if the file could not be
        read or decoded as UTF-8.
    """
    edges: List[Edge] = []

    try:
        with file_path.open(encoding="utf-8", newline="\n") as handle:
            for line in handle:
                # Lines end at '\n' only; one '\r' before it is dropped
                if line.endswith("\n"):
                    line = line[:-1]
                if line.endswith("\r"):
                    line = line[:-1]
                for target in extract_rule.iter_identifiers(line):
                    edges.append((source, target))
    except (OSError, UnicodeDecodeError):
        return None

    return edges


def build_edge_store(
    root: Path,
    extract_rule: ExtractionRule,
    path_rule: Optional[ExtractionRule] = None,
    multiple: bool = False,
    include_ext: Optional[Set[str]] = None,
    exclude_dirs: Optional[Set[str]] = None,
    max_depth: Optional[int] = None,
) -> EdgeStore:
    """
    Scan a directory tree and collect identifier edges.

    Args:
        root: Directory to scan.
        extract_rule: Rule producing target identifiers from each line.
        path_rule: Rule producing a file's own identifier from its path.
                   If None, the file stem is used.
        multiple: If True, keep duplicate edges.
        include_ext: File extensions to scan (default: all files).
        exclude_dirs: Directory names to exclude (default: VCS directories).
        max_depth: Maximum directory depth to scan.

    Returns:
        EdgeStore holding every discovered edge.
    """
    store = EdgeStore(multiple=multiple)
    root = root.resolve()

    for file_path in iter_files(
        root=root,
        include_ext=include_ext,
        exclude_dirs=exclude_dirs,
        max_depth=max_depth,
    ):
        source = resolve_file_node(file_path, root, path_rule)
        if source is None:
            continue

        # Unreadable files contribute nothing, not even the lines read so far
        edges = read_file_edges(file_path, source, extract_rule)
        if edges is None:
            continue

        for edge_source, target in edges:
            store.insert(edge_source, target)

    return store


def scan_to_tgf(
    root: Path,
    extract_rule: ExtractionRule,
    path_rule: Optional[ExtractionRule] = None,
    multiple: bool = False,
    include_ext: Optional[Set[str]] = None,
    exclude_dirs: Optional[Set[str]] = None,
    max_depth: Optional[int] = None,
) -> str:
    """Scan a directory tree and return the resulting TGF document."""
    store = build_edge_store(
        root=root,
        extract_rule=extract_rule,
        path_rule=path_rule,
        multiple=multiple,
        include_ext=include_ext,
        exclude_dirs=exclude_dirs,
        max_depth=max_depth,
    )
    return to_tgf(store.finalize())
