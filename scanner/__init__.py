"""Scanner module for file discovery and identifier extraction."""

from .discovery import iter_files
from .resolver import ExtractionRule, PatternError, resolve_file_node
from .config import ConfigError, load_config
from .builder import build_edge_store, scan_to_tgf

__all__ = [
    "iter_files",
    "ExtractionRule",
    "PatternError",
    "resolve_file_node",
    "ConfigError",
    "load_config",
    "build_edge_store",
    "scan_to_tgf",
]
