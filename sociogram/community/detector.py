"""
Community Detection for Sociogram

This module partitions people into communities for coloring and for the
hierarchical layout.

Detection Rules:
    1. Ignore edge direction and find connected components, numbering them
       0, 1, 2, ... in the order their first member appears in the node list.
       People with no edges form singleton components.
    2. If that yields exactly one component, it says nothing useful about a
       dense class roster, so every person is instead bucketed by degree:

           connections >= 8  -> 0  (highly connected)
           connections >= 5  -> 1  (well connected)
           connections >= 3  -> 2  (moderately connected)
           otherwise         -> 3  (less connected)

Design Decisions:
    - Deterministic: the same node order always yields the same ids
    - Total: every node gets exactly one id; empty input gives {}
    - Not modularity based; components are the only structural signal used
"""

import logging
from typing import Iterable, Sequence

import networkx as nx

from sociogram.models import CommunityAssignment, Edge, Node


logger = logging.getLogger(__name__)

# (minimum connections, bucket id), checked in order
DEGREE_BUCKETS: tuple[tuple[int, int], ...] = (
    (8, 0),
    (5, 1),
    (3, 2),
)
FALLBACK_BUCKET = 3


def degree_bucket(connections: int) -> int:
    """
    Classify a degree into one of the four fixed buckets.

    Args:
        connections: Total degree of the node

    Returns:
        Bucket id between 0 (most connected) and 3 (least connected)
    """
    for threshold, bucket in DEGREE_BUCKETS:
        if connections >= threshold:
            return bucket
    return FALLBACK_BUCKET


def cluster_by_degree(nodes: Iterable[Node]) -> CommunityAssignment:
    """Assign every node its degree bucket."""
    return {node.id: degree_bucket(node.connections) for node in nodes}


def connected_component_ids(nodes: Sequence[Node], edges: Iterable[Edge]) -> CommunityAssignment:
    """
    Number the undirected connected components in node order.

    Args:
        nodes: Nodes in builder order; this order decides the ids
        edges: Directed edges, treated as undirected

    Returns:
        Mapping of node ID to component index
    """
    undirected = nx.Graph()
    undirected.add_nodes_from(node.id for node in nodes)
    for edge in edges:
        if edge.source in undirected and edge.target in undirected:
            undirected.add_edge(edge.source, edge.target)

    assignment: CommunityAssignment = {}
    for component_id, members in enumerate(nx.connected_components(undirected)):
        for node_id in members:
            assignment[node_id] = component_id
    return assignment


def count_communities(assignment: CommunityAssignment) -> int:
    """Number of distinct community ids in an assignment."""
    return len(set(assignment.values()))


def detect_communities(nodes: Sequence[Node], edges: Iterable[Edge]) -> CommunityAssignment:
    """
    Partition nodes into communities.

    Uses connected components, falling back to degree buckets when the
    whole graph is a single component.

    Args:
        nodes: Nodes in builder order
        edges: Edges of the graph

    Returns:
        Mapping of every node ID to its community id

    Example:
        >>> from sociogram.graph import build_graph
        >>> g = build_graph({"A": ["B"], "C": []})
        >>> sorted(detect_communities(g.nodes, g.edges).items())
        [('A', 0), ('B', 0), ('C', 1)]
    """
    components = connected_component_ids(nodes, edges)

    if count_communities(components) == 1:
        logger.debug("Single component over %d nodes, clustering by degree", len(nodes))
        return cluster_by_degree(nodes)

    logger.debug("Found %d connected components", count_communities(components))
    return components


class CommunityDetector:
    """
    Stateless wrapper around detect_communities for callers that pass a
    detector around as a collaborator.

    Usage:
        detector = CommunityDetector()
        communities = detector.detect(graph.nodes, graph.edges)
    """

    def detect(self, nodes: Sequence[Node], edges: Iterable[Edge]) -> CommunityAssignment:
        return detect_communities(nodes, edges)
