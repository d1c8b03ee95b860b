"""
Layout Engine for Sociogram

This module computes explicit coordinates for the non-physical layouts and
drives the physics engine when the user switches layout mode.

Layouts:
    CIRCULAR: radius 0.35 * min(width, height) around the canvas centre,
              first node at 12 o'clock, then clockwise in input order
    HIERARCHICAL: one column per community (first-encountered order),
              nodes stacked evenly inside their column
    FORCE: no coordinates computed here; pinned nodes are released and the
              external simulation takes over

Design Decisions:
    - Layout functions are pure: they return LayoutPosition records and never
      touch the node objects they were given
    - Positions are merged into fresh AnnotatedNodes by the caller
    - Every mode switch ends with a one-shot delayed fit-to-view that is never
      cancelled; a stale fit is harmless
"""

import logging
import math
from typing import Iterable, Optional, Protocol, Sequence

from sociogram.config import SociogramConfig
from sociogram.layout.physics import PhysicsEngine
from sociogram.models import (
    AnnotatedNode,
    CommunityAssignment,
    Edge,
    LayoutMode,
    LayoutPosition,
)


logger = logging.getLogger(__name__)

CIRCLE_RADIUS_RATIO = 0.35


class HasId(Protocol):
    @property
    def id(self) -> str: ...


def circular_layout(nodes: Sequence[HasId], width: float, height: float) -> list[LayoutPosition]:
    """
    Place nodes evenly on a circle.

    Args:
        nodes: Nodes in the order they should appear clockwise
        width: Canvas width
        height: Canvas height

    Returns:
        One LayoutPosition per node, in input order
    """
    center_x = width / 2
    center_y = height / 2
    radius = min(width, height) * CIRCLE_RADIUS_RATIO
    count = len(nodes)

    positions = []
    for index, node in enumerate(nodes):
        angle = (index / count) * math.pi * 2 - math.pi / 2
        positions.append(
            LayoutPosition(
                id=node.id,
                x=center_x + radius * math.cos(angle),
                y=center_y + radius * math.sin(angle),
            )
        )
    return positions


def group_by_community(
    nodes: Sequence[HasId],
    communities: CommunityAssignment,
) -> dict[int, list[HasId]]:
    """
    Group nodes by community id, preserving first-encountered order.

    Nodes missing from the assignment are grouped under community 0.
    """
    groups: dict[int, list[HasId]] = {}
    for node in nodes:
        groups.setdefault(communities.get(node.id, 0), []).append(node)
    return groups


def hierarchical_layout(
    nodes: Sequence[HasId],
    communities: CommunityAssignment,
    width: float,
    height: float,
    edges: Optional[Iterable[Edge]] = None,
) -> list[LayoutPosition]:
    """
    Arrange communities as columns and stack their members.

    Column i sits at x = width / (k + 1) * (i + 1) for k communities; inside
    a column of m nodes, row j sits at y = height / (m + 1) * (j + 1).

    Args:
        nodes: Nodes to lay out
        communities: Community id per node ID
        width: Canvas width
        height: Canvas height
        edges: Accepted for symmetry with edge-aware layouts; unused

    Returns:
        One LayoutPosition per node, grouped by column
    """
    groups = group_by_community(nodes, communities)
    column_width = width / (len(groups) + 1)

    positions = []
    for column_index, members in enumerate(groups.values()):
        x = column_width * (column_index + 1)
        row_height = height / (len(members) + 1)
        for row_index, node in enumerate(members):
            positions.append(LayoutPosition(id=node.id, x=x, y=row_height * (row_index + 1)))
    return positions


def merge_positions(
    nodes: Sequence[AnnotatedNode],
    positions: Iterable[LayoutPosition],
) -> list[AnnotatedNode]:
    """
    Return fresh AnnotatedNodes carrying the given positions.

    Nodes without a position are returned unchanged.
    """
    by_id = {position.id: position for position in positions}
    return [
        node.with_position(by_id[node.id]) if node.id in by_id else node
        for node in nodes
    ]


class LayoutEngine:
    """
    Applies a layout mode to the physics engine.

    For CIRCULAR and HIERARCHICAL the computed positions are pinned on the
    engine; for FORCE every node is released. In all modes the simulation is
    reheated and a fit-to-view is requested after a short delay, and again
    whenever the engine reports it has settled.

    Usage:
        engine = LayoutEngine(physics, config)
        engine.apply(LayoutMode.CIRCULAR, view.nodes)
    """

    def __init__(
        self,
        physics: PhysicsEngine,
        config: Optional[SociogramConfig] = None,
    ) -> None:
        self._physics = physics
        self._config = config or SociogramConfig()
        self.mode = LayoutMode.FORCE
        self._physics.on_settled(self.on_engine_stop)

    def compute(
        self,
        mode: LayoutMode,
        nodes: Sequence[AnnotatedNode],
        communities: Optional[CommunityAssignment] = None,
        edges: Optional[Iterable[Edge]] = None,
    ) -> list[LayoutPosition]:
        """
        Compute positions for a mode without touching the physics engine.

        FORCE yields no positions. When communities are not given they are
        read from the annotated nodes.
        """
        width, height = self._config.width, self._config.height

        if mode is LayoutMode.CIRCULAR:
            return circular_layout(nodes, width, height)
        if mode is LayoutMode.HIERARCHICAL:
            if communities is None:
                communities = {node.id: node.community for node in nodes}
            return hierarchical_layout(nodes, communities, width, height, edges)
        return []

    def apply(
        self,
        mode: LayoutMode,
        nodes: Sequence[AnnotatedNode],
        communities: Optional[CommunityAssignment] = None,
        edges: Optional[Iterable[Edge]] = None,
    ) -> list[LayoutPosition]:
        """
        Switch to a layout mode.

        Args:
            mode: The requested layout
            nodes: Nodes currently shown
            communities: Community assignment, defaults to the nodes' own
            edges: Edges currently shown

        Returns:
            The positions pinned on the engine (empty for FORCE)
        """
        self.mode = mode
        positions = self.compute(mode, nodes, communities, edges)

        if mode is LayoutMode.FORCE:
            for node in nodes:
                self._physics.unpin(node.id)
        else:
            for position in positions:
                self._physics.pin(position.id, position.x, position.y)

        self._physics.reheat()
        self._physics.call_later(self._config.fit_delay_ms, self.fit_to_view)

        logger.debug("Applied %s layout to %d nodes", mode.value, len(nodes))
        return positions

    def fit_to_view(self) -> None:
        self._physics.zoom_to_fit(self._config.fit_duration_ms, self._config.fit_padding)

    def on_engine_stop(self) -> None:
        self.fit_to_view()
