"""
Encoding module for Sociogram.

This module turns degree, community and interaction state into
draw parameters for nodes, edges and arrowheads.
"""

from sociogram.encoding.visual import (
    PALETTE,
    community_color,
    community_palette,
    connected_nodes,
    encode_edge,
    encode_node,
    node_size,
)

__all__ = [
    "PALETTE",
    "community_color",
    "community_palette",
    "connected_nodes",
    "encode_edge",
    "encode_node",
    "node_size",
]
