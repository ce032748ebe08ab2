"""Exporters for converting edge sequences to output formats."""

from .tgf_exporter import assign_labels, to_tgf

__all__ = ["assign_labels", "to_tgf"]
