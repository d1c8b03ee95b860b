"""
Graph module for Sociogram.

This module provides NetworkX-based graph construction for the
"who names whom as a friend" relationship data.
"""

from sociogram.graph.builder import (
    SocialGraph,
    build_graph,
    collect_names,
)

__all__ = [
    "SocialGraph",
    "build_graph",
    "collect_names",
]
