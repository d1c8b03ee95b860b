"""
Tests for the community detection module.

Tests connected components, the degree-bucket fallback and determinism.
"""

import pytest
from sociogram.community import (
    CommunityDetector,
    count_communities,
    degree_bucket,
    detect_communities,
)
from sociogram.graph import build_graph

from tests.fixtures import HUBS, SIMPLE_TRIANGLE, TWO_GROUPS


def _detect(relationships):
    graph = build_graph(relationships)
    return detect_communities(graph.nodes, graph.edges)


class TestConnectedComponents:
    """Tests for component-based communities."""

    def test_components_numbered_in_node_order(self):
        """Test ids follow the first member's position in the node list."""
        communities = _detect(TWO_GROUPS)

        assert communities == {"A": 0, "B": 0, "C": 1, "D": 1, "E": 2}

    def test_direction_ignored(self):
        """Test that one-way edges still join a component."""
        communities = _detect({"A": ["B"], "C": ["B"], "D": ["E"]})

        assert communities["A"] == communities["B"] == communities["C"]
        assert communities["D"] == communities["E"]
        assert communities["A"] != communities["D"]

    def test_singletons_get_own_ids(self):
        """Test that isolated people form singleton communities."""
        communities = _detect({"A": [], "B": [], "C": ["D"]})

        assert communities == {"A": 0, "B": 1, "C": 2, "D": 2}

    def test_every_node_assigned(self):
        """Test total coverage of the assignment."""
        graph = build_graph(TWO_GROUPS)
        communities = detect_communities(graph.nodes, graph.edges)

        assert set(communities) == {n.id for n in graph.nodes}

    def test_deterministic(self):
        """Test that running twice gives the same result."""
        assert _detect(TWO_GROUPS) == _detect(TWO_GROUPS)
        assert _detect(HUBS) == _detect(HUBS)

    def test_empty_input(self):
        """Test that no nodes gives an empty assignment."""
        assert detect_communities([], []) == {}

    def test_detector_wrapper(self):
        """Test the CommunityDetector collaborator."""
        graph = build_graph(TWO_GROUPS)

        assert CommunityDetector().detect(graph.nodes, graph.edges) == _detect(TWO_GROUPS)


class TestDegreeFallback:
    """Tests for the single-component degree buckets."""

    @pytest.mark.parametrize(
        "connections,bucket",
        [(15, 0), (8, 0), (7, 1), (5, 1), (4, 2), (3, 2), (2, 3), (0, 3)],
    )
    def test_degree_bucket(self, connections, bucket):
        """Test the bucket thresholds."""
        assert degree_bucket(connections) == bucket

    def test_single_component_uses_buckets(self):
        """Test that one giant component is bucketed by degree."""
        communities = _detect(HUBS)

        assert communities["Hub"] == 0
        assert communities["X"] == 0
        assert communities["Y"] == 1
        assert communities["Z"] == 2
        assert communities["P14"] == 3

    def test_worked_example_is_bucketed(self):
        """Test the A/B/C example falls back since it is one component."""
        communities = _detect(SIMPLE_TRIANGLE)

        assert communities == {"A": 3, "B": 2, "C": 3}

    def test_lone_person_is_bucketed(self):
        """Test that a single isolated person is one component too."""
        assert _detect({"A": []}) == {"A": 3}

    def test_count_communities(self):
        """Test counting distinct ids."""
        assert count_communities({"A": 0, "B": 0, "C": 3}) == 2
        assert count_communities({}) == 0
