"""File discovery utilities for scanning directory trees."""

from pathlib import Path
from typing import Iterable, Iterator, Set, Optional


DEFAULT_EXCLUDE_DIRS = {".git", ".hg", ".svn"}


def iter_files(
    root: Path,
    include_ext: Optional[Set[str]] = None,
    exclude_dirs: Optional[Set[str]] = None,
    max_depth: Optional[int] = None,
) -> Iterator[Path]:
    """
    Iterate over files in a directory tree.

    Args:
        root: Root directory to scan.
        include_ext: Set of lower-case file extensions to include (e.g., {'.rs', '.txt'}).
                    If None, every file is included.
        exclude_dirs: Set of directory names to skip. Names starting with '*'
                     match as suffixes. If None, uses DEFAULT_EXCLUDE_DIRS.
        max_depth: Maximum depth to descend. None means unlimited, 0 means
                  the root directory only.

    Yields:
        Path objects for matching files, in sorted order.
    """
    if exclude_dirs is None:
        exclude_dirs = DEFAULT_EXCLUDE_DIRS

    root = root.resolve()
    suffix_patterns = [pat.lstrip("*") for pat in exclude_dirs if pat.startswith("*")]

    def _walk(current: Path, depth: int) -> Iterator[Path]:
        if max_depth is not None and depth > max_depth:
            return

        try:
            entries = sorted(current.iterdir())
        except OSError:
            return

        for entry in entries:
            if entry.is_dir():
                # Symlinked directories are not followed
                if entry.is_symlink():
                    continue
                if entry.name in exclude_dirs:
                    continue
                if any(entry.name.endswith(suffix) for suffix in suffix_patterns):
                    continue
                yield from _walk(entry, depth + 1)
            elif entry.is_file():
                if include_ext is None or entry.suffix.lower() in include_ext:
                    yield entry

    yield from _walk(root, 0)


def normalize_extensions(extensions: Optional[Iterable[str]]) -> Optional[Set[str]]:
    """Turn user-supplied extensions ('rs', '.TXT') into a set of '.rs'-style suffixes."""
    if not extensions:
        return None

    normalized: Set[str] = set()
    for ext in extensions:
        if not ext.startswith("."):
            ext = "." + ext
        normalized.add(ext.lower())
    return normalized


def get_relative_path(file_path: Path, root: Path) -> Path:
    """Get the path relative to root, handling edge cases."""
    try:
        return file_path.resolve().relative_to(root.resolve())
    except ValueError:
        return file_path
