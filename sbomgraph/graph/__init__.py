"""Dependency graph construction, leveling and layout."""

from .builder import build_graph
from .layout import layout_hierarchical
from .levels import assign_levels
from .model import DependencyGraph

__all__ = ["DependencyGraph", "assign_levels", "build_graph", "layout_hierarchical"]
