"""
Layout module for Sociogram.

This module provides the deterministic circular and hierarchical layouts
and the bridge to the external force simulation.
"""

from sociogram.layout.engine import (
    LayoutEngine,
    circular_layout,
    group_by_community,
    hierarchical_layout,
    merge_positions,
)
from sociogram.layout.physics import PhysicsEngine, SpringPhysics, fit_bounds

__all__ = [
    "LayoutEngine",
    "PhysicsEngine",
    "SpringPhysics",
    "circular_layout",
    "fit_bounds",
    "group_by_community",
    "hierarchical_layout",
    "merge_positions",
]
