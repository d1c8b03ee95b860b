"""
Sociogram

Core engine for turning "who names whom as a friend" data into an
annotated, laid-out node-link diagram: graph construction, community
detection, deterministic layouts, and visual encoding.
"""

from sociogram.models import (
    AnnotatedNode,
    Edge,
    GraphView,
    InteractionState,
    LayoutMode,
    LayoutPosition,
    Node,
)

__all__ = [
    "AnnotatedNode",
    "Edge",
    "GraphView",
    "InteractionState",
    "LayoutMode",
    "LayoutPosition",
    "Node",
]
__version__ = "0.1.0"
