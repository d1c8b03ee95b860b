"""
Visual Encoding for Sociogram

This module maps graph data and interaction state to draw parameters.

Encodings:
    Node radius:     degree, capped at 10, mapped linearly from [1, 10] to [4, 12].
                     No lower clamp, so an isolated node is slightly under 4.
    Node fill:       community color, alpha suffix "40" when dimmed
    Node border:     white for the selected node, community color for other
                     highlighted nodes, none otherwise
    Mutual edge:     accent color, thicker, no arrowhead
    Directed edge:   translucent white, thinner, arrowhead touching the target

Interaction Rules:
    - A node is highlighted if it is selected, hovered, or linked to the
      selected node by an edge in either direction
    - An edge is highlighted if it touches the selected or hovered node
    - Anything not highlighted is dimmed while something is selected or hovered

The encoder is pure: interaction state is passed in, never read from globals.
"""

import math
from typing import Iterable, Optional

from sociogram.models import (
    AnnotatedNode,
    Arrowhead,
    Edge,
    EdgeStyle,
    InteractionState,
    LabelStyle,
    NodeStyle,
)


MIN_NODE_SIZE = 4.0
MAX_NODE_SIZE = 12.0
MIN_CONNECTIONS = 1
MAX_CONNECTIONS = 10

PALETTE: tuple[str, ...] = (
    "#3b82f6",  # Blue
    "#ec4899",  # Pink
    "#10b981",  # Green
    "#f59e0b",  # Amber
    "#8b5cf6",  # Purple
    "#ef4444",  # Red
    "#14b8a6",  # Teal
    "#f97316",  # Orange
)

DIM_ALPHA = "40"
SELECTED_BORDER = "#fff"
LABEL_COLOR = "#ffffff"
LABEL_DIMMED_COLOR = "#ffffff80"
LABEL_FONT_SIZE = 12.0

MUTUAL_EDGE_COLOR = "#f59010"
MUTUAL_EDGE_DIMMED_COLOR = "#f5901040"
DIRECTED_EDGE_COLOR = "#ffffff60"
DIRECTED_EDGE_DIMMED_COLOR = "#ffffff20"

ARROW_LENGTH = 8.0
ARROW_HALF_WIDTH = 4.0


def node_size(connections: int) -> float:
    """
    Radius for a node with the given degree.

    Example:
        >>> node_size(1), node_size(10), node_size(19)
        (4.0, 12.0, 12.0)
    """
    capped = min(connections, MAX_CONNECTIONS)
    fraction = (capped - MIN_CONNECTIONS) / (MAX_CONNECTIONS - MIN_CONNECTIONS)
    return MIN_NODE_SIZE + fraction * (MAX_NODE_SIZE - MIN_NODE_SIZE)


def community_color(community_id: int) -> str:
    """Palette color for a community; ids past the eighth wrap around."""
    return PALETTE[community_id % len(PALETTE)]


def community_palette(community_ids: Iterable[int]) -> dict[int, str]:
    """
    Colors for the community ids actually in use, keyed by id.

    Ids need not be consecutive; the degree fallback can yield {0, 3}.
    """
    return {
        community_id: community_color(community_id)
        for community_id in sorted(set(community_ids))
    }


def connected_nodes(edges: Iterable[Edge], node_id: Optional[str]) -> set[str]:
    """
    IDs linked to node_id by an edge in either direction.

    A self-loop makes the node connected to itself.
    """
    connected: set[str] = set()
    if node_id is None:
        return connected
    for edge in edges:
        if edge.source == node_id:
            connected.add(edge.target)
        if edge.target == node_id:
            connected.add(edge.source)
    return connected


def is_node_highlighted(
    node_id: str,
    state: InteractionState,
    connected_to_selected: set[str],
) -> bool:
    if node_id in (state.selected, state.hovered):
        return True
    return state.selected is not None and node_id in connected_to_selected


def is_edge_highlighted(edge: Edge, state: InteractionState) -> bool:
    return edge.touches(state.selected) or edge.touches(state.hovered)


def encode_node(
    node: AnnotatedNode,
    state: InteractionState,
    connected_to_selected: set[str],
    global_scale: float = 1.0,
) -> NodeStyle:
    """
    Draw parameters for one node.

    Args:
        node: The annotated node, ideally with a position
        state: Current selection and hover
        connected_to_selected: connected_nodes(edges, state.selected), computed
            once per frame by the caller
        global_scale: Current zoom factor; strokes and text shrink as it grows

    Returns:
        The NodeStyle for this frame
    """
    x = node.x if node.x is not None else 0.0
    y = node.y if node.y is not None else 0.0
    radius = node_size(node.connections)

    highlighted = is_node_highlighted(node.id, state, connected_to_selected)
    dimmed = state.is_active and not highlighted
    is_selected = node.id == state.selected

    border_color: Optional[str] = None
    border_width = 0.0
    if highlighted:
        border_color = SELECTED_BORDER if is_selected else node.color
        border_width = (3 if is_selected else 2) / global_scale

    font_size = LABEL_FONT_SIZE / global_scale
    label = LabelStyle(
        text=node.name,
        x=x,
        y=y + radius + font_size,
        font_size=font_size,
        color=LABEL_DIMMED_COLOR if dimmed else LABEL_COLOR,
    )

    return NodeStyle(
        x=x,
        y=y,
        radius=radius,
        fill=f"{node.color}{DIM_ALPHA}" if dimmed else node.color,
        border_color=border_color,
        border_width=border_width,
        label=label,
        highlighted=highlighted,
        dimmed=dimmed,
    )


def arrowhead(
    start: tuple[float, float],
    end: tuple[float, float],
    target_radius: float,
    color: str,
    global_scale: float = 1.0,
) -> Arrowhead:
    """
    Triangle pointing at end, pulled back by target_radius so its tip
    touches the target circle instead of its centre.
    """
    length = ARROW_LENGTH / global_scale
    half_width = ARROW_HALF_WIDTH / global_scale
    angle = math.atan2(end[1] - start[1], end[0] - start[0])
    cos_a = math.cos(angle)
    sin_a = math.sin(angle)

    tip_x = end[0] - cos_a * target_radius
    tip_y = end[1] - sin_a * target_radius

    return Arrowhead(
        tip=(tip_x, tip_y),
        left=(
            tip_x - length * cos_a - half_width * sin_a,
            tip_y - length * sin_a + half_width * cos_a,
        ),
        right=(
            tip_x - length * cos_a + half_width * sin_a,
            tip_y - length * sin_a - half_width * cos_a,
        ),
        color=color,
    )


def encode_edge(
    edge: Edge,
    source: AnnotatedNode,
    target: AnnotatedNode,
    state: InteractionState,
    global_scale: float = 1.0,
) -> Optional[EdgeStyle]:
    """
    Draw parameters for one edge.

    Args:
        edge: The edge to draw
        source: Annotated source node
        target: Annotated target node; its degree sets the arrow offset
        state: Current selection and hover
        global_scale: Current zoom factor

    Returns:
        The EdgeStyle, or None when either endpoint has not been placed yet
    """
    if not (source.has_position and target.has_position):
        return None

    highlighted = is_edge_highlighted(edge, state)
    dimmed = state.is_active and not highlighted
    start = (source.x, source.y)
    end = (target.x, target.y)

    if edge.is_mutual:
        return EdgeStyle(
            start=start,
            end=end,
            color=MUTUAL_EDGE_DIMMED_COLOR if dimmed else MUTUAL_EDGE_COLOR,
            width=(3 if highlighted else 2) / global_scale,
            highlighted=highlighted,
            dimmed=dimmed,
        )

    color = DIRECTED_EDGE_DIMMED_COLOR if dimmed else DIRECTED_EDGE_COLOR
    return EdgeStyle(
        start=start,
        end=end,
        color=color,
        width=(2.5 if highlighted else 1.5) / global_scale,
        arrow=arrowhead(start, end, node_size(target.connections), color, global_scale),
        highlighted=highlighted,
        dimmed=dimmed,
    )
