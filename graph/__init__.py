"""Graph storage for extracted identifier relationships."""

from .model import Edge, EdgeStore

__all__ = ["Edge", "EdgeStore"]
