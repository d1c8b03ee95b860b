"""
Graph Builder for Sociogram

This module turns a raw RelationshipMap into typed nodes and directed edges
and wraps them in a NetworkX multigraph for traversal.

Design Decisions:
    - Uses NetworkX MultiDiGraph so repeated (source, target) pairs survive
      as parallel edges instead of collapsing
    - Stores Node objects as node attributes, Edge objects as edge attributes
    - Keeps the ordered node and edge lists alongside the graph; NetworkX
      adjacency order is not the input order once parallel edges exist
    - Rebuilt wholesale whenever the relationship data changes

Graph Properties:
    - Directed: edges point from the person naming to the person named
    - Every name that appears anywhere becomes a node, so edges never dangle
    - Self-loops are allowed
    - Node IDs are the names themselves (case-sensitive, opaque)
"""

import logging
from typing import Iterator, Optional

import networkx as nx

from sociogram.models import Edge, Node, RelationshipMap


logger = logging.getLogger(__name__)


class SocialGraph:
    """
    A graph representation of who names whom as a friend.

    Wraps a NetworkX MultiDiGraph to provide a clean interface for:
    - Retrieving people and their degree counters
    - Listing the edges in input order
    - Traversing friends, admirers and connections in either direction

    Usage:
        graph = build_graph({"Ana": ["Ben"], "Ben": ["Ana", "Cy"]})
        graph.get_node("Ben").connections     # 3
        sorted(graph.get_connected("Ben"))    # ["Ana", "Cy"]
    """

    def __init__(self, nodes: list[Node], edges: list[Edge]) -> None:
        """
        Initialize the graph from already-built nodes and edges.

        Args:
            nodes: Nodes in builder order
            edges: Edges in input order
        """
        self._nodes = list(nodes)
        self._edges = list(edges)
        self._graph: nx.MultiDiGraph = nx.MultiDiGraph()

        for node in self._nodes:
            self._graph.add_node(node.id, node=node)
        for edge in self._edges:
            self._graph.add_edge(edge.source, edge.target, edge=edge, is_mutual=edge.is_mutual)

    @property
    def graph(self) -> nx.MultiDiGraph:
        """Access the underlying NetworkX graph."""
        return self._graph

    @property
    def nodes(self) -> list[Node]:
        """Nodes in builder order."""
        return list(self._nodes)

    @property
    def edges(self) -> list[Edge]:
        """Edges in input order, duplicates included."""
        return list(self._edges)

    @property
    def node_count(self) -> int:
        return self._graph.number_of_nodes()

    @property
    def edge_count(self) -> int:
        return self._graph.number_of_edges()

    def has_node(self, node_id: str) -> bool:
        return node_id in self._graph

    def get_node(self, node_id: str) -> Optional[Node]:
        """
        Retrieve a Node by its ID.

        Args:
            node_id: The person's name

        Returns:
            The Node if found, None otherwise
        """
        if node_id not in self._graph:
            return None
        return self._graph.nodes[node_id].get("node")

    def get_friends(self, node_id: str) -> Iterator[str]:
        """
        Get IDs of everyone this person names as a friend.

        Yields:
            Successor IDs, each once
        """
        if node_id in self._graph:
            yield from self._graph.successors(node_id)

    def get_admirers(self, node_id: str) -> Iterator[str]:
        """
        Get IDs of everyone who names this person as a friend.

        Yields:
            Predecessor IDs, each once
        """
        if node_id in self._graph:
            yield from self._graph.predecessors(node_id)

    def get_connected(self, node_id: str) -> set[str]:
        """Get IDs linked to the given person by an edge in either direction."""
        return set(self.get_friends(node_id)) | set(self.get_admirers(node_id))


def collect_names(relationships: RelationshipMap) -> list[str]:
    """
    Collect every name in the map, keys first, in first-seen order.

    Args:
        relationships: The raw relationship mapping

    Returns:
        Unique names; targets never listed as a key are included
    """
    seen: dict[str, None] = dict.fromkeys(relationships)
    for targets in relationships.values():
        for target in targets:
            seen.setdefault(target, None)
    return list(seen)


def build_graph(relationships: RelationshipMap) -> SocialGraph:
    """
    Build a SocialGraph from a RelationshipMap.

    Every (source, target) pair listed in the input becomes one Edge in
    input order. Mutuality is decided against the input mapping, not the
    constructed edges, so a repeated pair never makes an edge mutual.

    Args:
        relationships: Mapping of name to the names they consider friends

    Returns:
        A SocialGraph with one node per unique name

    Example:
        >>> graph = build_graph({"A": ["B"], "B": ["A", "C"], "C": []})
        >>> [(n.id, n.connections) for n in graph.nodes]
        [('A', 2), ('B', 3), ('C', 1)]
    """
    names = collect_names(relationships)
    incoming = dict.fromkeys(names, 0)
    outgoing = dict.fromkeys(names, 0)

    pairs: list[tuple[str, str]] = []
    for source, targets in relationships.items():
        for target in targets:
            pairs.append((source, target))
            outgoing[source] += 1
            incoming[target] += 1

    nodes = [
        Node(
            id=name,
            name=name,
            connections=incoming[name] + outgoing[name],
            incoming_connections=incoming[name],
            outgoing_connections=outgoing[name],
        )
        for name in names
    ]

    # Second pass: reciprocity comes from the declared lists
    edges = [
        Edge(
            source=source,
            target=target,
            is_mutual=target in relationships and source in relationships[target],
        )
        for source, target in pairs
    ]

    logger.debug("Built graph with %d nodes and %d edges", len(nodes), len(edges))
    return SocialGraph(nodes, edges)
