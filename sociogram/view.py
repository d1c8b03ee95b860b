"""
View Pipeline for Sociogram

Runs the full chain from raw data to the annotated graph the render
layer consumes:

    RelationshipMap -> build_graph -> detect_communities -> colors
                    -> search filter -> GraphView

Communities are detected on the whole graph before filtering, so a
person keeps their color while the search narrows what is shown.
"""

import logging
from dataclasses import dataclass, replace
from typing import Iterable, Optional

from sociogram.community import detect_communities
from sociogram.encoding import community_color, community_palette
from sociogram.graph import SocialGraph, build_graph
from sociogram.layout import merge_positions
from sociogram.models import AnnotatedNode, GraphView, LayoutPosition, RelationshipMap


logger = logging.getLogger(__name__)


@dataclass
class NodeInfo:
    """
    Details shown for a selected person.

    Attributes:
        node_id: The selected person
        connections: Total connections (incoming + outgoing)
        incoming: Number of people naming them
        outgoing: Number of people they named
        connected_to: Everyone linked by an edge in either direction, sorted
        names: People they listed as friends, sorted
        named_by: People who listed them, sorted
    """

    node_id: str
    connections: int
    incoming: int
    outgoing: int
    connected_to: list[str]
    names: list[str]
    named_by: list[str]


def filter_view(view: GraphView, search: str) -> GraphView:
    """
    Keep nodes whose name contains the search text, case-insensitively.

    Edges survive only when both endpoints do. An empty search returns
    the view unchanged.
    """
    if not search:
        return view

    needle = search.lower()
    nodes = [node for node in view.nodes if needle in node.name.lower()]
    kept = {node.id for node in nodes}
    edges = [edge for edge in view.edges if edge.source in kept and edge.target in kept]
    return replace(view, nodes=nodes, edges=edges)


def build_view(relationships: RelationshipMap, search: str = "") -> GraphView:
    """
    Build the annotated view for a relationship mapping.

    Args:
        relationships: Raw name -> friends data
        search: Optional name filter

    Returns:
        A fresh GraphView; nodes carry community and color but no position
    """
    graph = build_graph(relationships)
    communities = detect_communities(graph.nodes, graph.edges)

    nodes = [
        AnnotatedNode(
            node=node,
            community=communities.get(node.id, 0),
            color=community_color(communities.get(node.id, 0)),
        )
        for node in graph.nodes
    ]

    view = GraphView(
        nodes=nodes,
        edges=graph.edges,
        palette=community_palette(communities.values()),
        communities=communities,
    )
    logger.debug(
        "View has %d nodes, %d edges, %d communities",
        view.node_count,
        view.edge_count,
        len(view.palette),
    )
    return filter_view(view, search)


def place(view: GraphView, positions: Iterable[LayoutPosition]) -> GraphView:
    """Return a copy of the view with positions merged into its nodes."""
    return replace(view, nodes=merge_positions(view.nodes, positions))


def node_info(view: GraphView, node_id: str) -> Optional[NodeInfo]:
    """
    Summarise one person's connectivity within the view.

    Returns:
        NodeInfo, or None if the person is not in the view
    """
    node = view.get_node(node_id)
    if node is None:
        return None

    graph = SocialGraph([n.node for n in view.nodes], view.edges)
    return NodeInfo(
        node_id=node.id,
        connections=node.connections,
        incoming=node.node.incoming_connections,
        outgoing=node.node.outgoing_connections,
        connected_to=sorted(graph.get_connected(node_id)),
        names=sorted(graph.get_friends(node_id)),
        named_by=sorted(graph.get_admirers(node_id)),
    )


def tooltip(node: AnnotatedNode) -> str:
    return f"{node.name} ({node.connections} connections)"


def community_members(view: GraphView) -> dict[int, list[str]]:
    """Names in each community, communities in ascending id order."""
    members: dict[int, list[str]] = {}
    for node in view.nodes:
        members.setdefault(node.community, []).append(node.name)
    return dict(sorted(members.items()))
