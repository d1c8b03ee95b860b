"""
Core Data Models for Sociogram

This module defines the canonical data structures used throughout the system:
- Node: A person in the friendship graph with degree counters
- Edge: A directed "names as a friend" relationship
- AnnotatedNode: A Node composed with its derived community, color and position
- LayoutPosition: A computed 2-D coordinate for one node
- InteractionState: The current selection and hover, threaded into the encoder
- NodeStyle / EdgeStyle / Arrowhead: Draw parameters produced by the encoder

These models are designed to be:
- Immutable (frozen dataclasses); derived data is composed, never mutated in
- Independent of the render layer that consumes them
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Mapping, Optional, Sequence


# Raw input: person name -> ordered names they designate as friends
RelationshipMap = Mapping[str, Sequence[str]]

# Node id -> community id
CommunityAssignment = dict[str, int]


class LayoutMode(Enum):
    """
    Layout strategies a user can switch between.

    States:
        FORCE: Physically simulated placement, delegated to the physics engine.
        CIRCULAR: Nodes evenly spaced on a circle in input order.
        HIERARCHICAL: One column per community, nodes stacked within it.
    """

    FORCE = "force"
    CIRCULAR = "circular"
    HIERARCHICAL = "hierarchical"


@dataclass(frozen=True)
class Node:
    """
    A single person in the friendship graph.

    Attributes:
        id: Unique identifier, equal to the person's name
        name: Display name
        connections: Total degree (incoming + outgoing)
        incoming_connections: Number of edges naming this person
        outgoing_connections: Number of edges this person declared

    Invariants:
        - connections == incoming_connections + outgoing_connections
        - all counters are non-negative
    """

    id: str
    name: str
    connections: int = 0
    incoming_connections: int = 0
    outgoing_connections: int = 0

    def __post_init__(self) -> None:
        """Validate invariants after initialization."""
        if min(self.connections, self.incoming_connections, self.outgoing_connections) < 0:
            raise ValueError(f"connection counters must be non-negative for {self.id!r}")
        if self.connections != self.incoming_connections + self.outgoing_connections:
            raise ValueError(
                f"connections ({self.connections}) must equal incoming "
                f"({self.incoming_connections}) + outgoing ({self.outgoing_connections})"
            )


@dataclass(frozen=True)
class Edge:
    """
    A directed friendship declaration.

    Attributes:
        source: ID of the person who named the friend
        target: ID of the person named
        is_mutual: True iff the target also lists the source in the input

    Note:
        Duplicate (source, target) pairs are kept as parallel edges.
        Self-loops are valid.
    """

    source: str
    target: str
    is_mutual: bool = False

    @property
    def is_self_loop(self) -> bool:
        return self.source == self.target

    def touches(self, node_id: Optional[str]) -> bool:
        """Check if the edge is incident to the given node."""
        return node_id is not None and node_id in (self.source, self.target)


@dataclass(frozen=True)
class LayoutPosition:
    """A computed position for one node."""

    id: str
    x: float
    y: float


@dataclass(frozen=True)
class AnnotatedNode:
    """
    A Node plus everything derived from it downstream.

    The builder knows nothing about communities, colors or coordinates;
    those are attached here as a read view over the underlying Node.

    Attributes:
        node: The underlying graph node
        community: Community id assigned by the detector
        color: Fill color derived from the community
        x: Horizontal coordinate, None until a layout or the physics engine places it
        y: Vertical coordinate, None until placed
    """

    node: Node
    community: int = 0
    color: str = "#3b82f6"
    x: Optional[float] = None
    y: Optional[float] = None

    @property
    def id(self) -> str:
        return self.node.id

    @property
    def name(self) -> str:
        return self.node.name

    @property
    def connections(self) -> int:
        return self.node.connections

    @property
    def has_position(self) -> bool:
        return self.x is not None and self.y is not None

    def with_position(self, position: LayoutPosition) -> "AnnotatedNode":
        """Return a new AnnotatedNode placed at the given position (immutable update)."""
        return replace(self, x=position.x, y=position.y)


@dataclass(frozen=True)
class InteractionState:
    """
    The current selection and hover.

    At most one node is selected and at most one is hovered.
    """

    selected: Optional[str] = None
    hovered: Optional[str] = None

    @property
    def is_active(self) -> bool:
        """True if something is selected or hovered."""
        return self.selected is not None or self.hovered is not None

    def toggle_selection(self, node_id: str) -> "InteractionState":
        """Clicking a selected node clears the selection, otherwise selects it."""
        selected = None if node_id == self.selected else node_id
        return replace(self, selected=selected)

    def with_hover(self, node_id: Optional[str]) -> "InteractionState":
        return replace(self, hovered=node_id)


@dataclass(frozen=True)
class LabelStyle:
    """Text drawn beneath a node."""

    text: str
    x: float
    y: float
    font_size: float
    color: str


@dataclass(frozen=True)
class NodeStyle:
    """
    Draw parameters for one node in one frame.

    Attributes:
        x, y: Centre of the node
        radius: Circle radius derived from degree
        fill: Fill color, with an alpha suffix when dimmed
        border_color: Stroke color, None when no border is drawn
        border_width: Stroke width in canvas units
        label: Name label placed below the circle
        highlighted: Whether the node is selected, hovered or next to the selection
        dimmed: Whether the node is faded out
    """

    x: float
    y: float
    radius: float
    fill: str
    border_color: Optional[str]
    border_width: float
    label: LabelStyle
    highlighted: bool = False
    dimmed: bool = False


@dataclass(frozen=True)
class Arrowhead:
    """Triangle drawn at the target end of a one-directional edge."""

    tip: tuple[float, float]
    left: tuple[float, float]
    right: tuple[float, float]
    color: str

    @property
    def points(self) -> list[tuple[float, float]]:
        return [self.tip, self.left, self.right]


@dataclass(frozen=True)
class EdgeStyle:
    """Draw parameters for one edge in one frame."""

    start: tuple[float, float]
    end: tuple[float, float]
    color: str
    width: float
    arrow: Optional[Arrowhead] = None
    highlighted: bool = False
    dimmed: bool = False


@dataclass
class GraphView:
    """
    The annotated graph handed to the render layer.

    A fresh view is produced whenever the relationship data or the
    search filter changes.

    Attributes:
        nodes: Annotated nodes, in builder order
        edges: Edges whose endpoints are both present in nodes
        palette: Color for each community id present, keyed by id
        communities: Community assignment for the unfiltered graph
    """

    nodes: list[AnnotatedNode] = field(default_factory=list)
    edges: list[Edge] = field(default_factory=list)
    palette: dict[int, str] = field(default_factory=dict)
    communities: CommunityAssignment = field(default_factory=dict)

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    @property
    def edge_count(self) -> int:
        return len(self.edges)

    @property
    def mutual_edge_count(self) -> int:
        return sum(1 for edge in self.edges if edge.is_mutual)

    def get_node(self, node_id: str) -> Optional[AnnotatedNode]:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None
