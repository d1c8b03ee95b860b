"""
Tests for the view pipeline and the SVG render boundary.
"""

from sociogram.encoding import PALETTE
from sociogram.models import InteractionState, LayoutPosition
from sociogram.layout import circular_layout
from sociogram.render import SvgCanvas, render_view
from sociogram.view import build_view, community_members, filter_view, node_info, place, tooltip

from tests.fixtures import SIMPLE_TRIANGLE, STAR, TWO_GROUPS


class TestBuildView:
    """Tests for build_view."""

    def test_annotates_community_and_color(self):
        """Test nodes carry their community color."""
        view = build_view(TWO_GROUPS)

        colors = {n.id: n.color for n in view.nodes}
        assert colors["A"] == colors["B"] == PALETTE[0]
        assert colors["C"] == colors["D"] == PALETTE[1]
        assert colors["E"] == PALETTE[2]
        assert view.palette == {0: PALETTE[0], 1: PALETTE[1], 2: PALETTE[2]}

    def test_nodes_start_unplaced(self):
        """Test no positions are attached by the pipeline."""
        view = build_view(SIMPLE_TRIANGLE)

        assert all(not n.has_position for n in view.nodes)

    def test_counts(self):
        """Test node, edge and mutual counts."""
        view = build_view(SIMPLE_TRIANGLE)

        assert view.node_count == 3
        assert view.edge_count == 3
        assert view.mutual_edge_count == 2

    def test_empty(self):
        """Test empty data gives an empty view."""
        view = build_view({})

        assert view.nodes == []
        assert view.palette == {}

    def test_palette_follows_gapped_ids(self):
        """Test a single star component keeps its bucket ids in the palette."""
        view = build_view(STAR)

        assert sorted(view.palette) == [0, 3]
        for node in view.nodes:
            assert view.palette[node.community] == node.color


class TestSearchFilter:
    """Tests for the search filter."""

    def test_case_insensitive_substring(self):
        """Test names are matched ignoring case."""
        view = build_view({"Anna": ["Ben"], "Hannah": ["Anna"]}, search="ANN")

        assert sorted(n.id for n in view.nodes) == ["Anna", "Hannah"]

    def test_edges_need_both_ends(self):
        """Test edges to filtered-out people disappear."""
        view = build_view(SIMPLE_TRIANGLE, search="b")

        assert [n.id for n in view.nodes] == ["B"]
        assert view.edges == []

    def test_colors_kept_from_full_graph(self):
        """Test communities are computed before filtering."""
        full = build_view(TWO_GROUPS)
        filtered = filter_view(full, "d")

        assert filtered.get_node("D").color == full.get_node("D").color
        assert filtered.palette == full.palette

    def test_empty_search_is_identity(self):
        """Test no search returns the same view."""
        view = build_view(SIMPLE_TRIANGLE)

        assert filter_view(view, "") is view


class TestNodeInfo:
    """Tests for node details."""

    def test_node_info(self):
        """Test connection totals and neighbours."""
        info = node_info(build_view(SIMPLE_TRIANGLE), "B")

        assert info.connections == 3
        assert info.incoming == 1
        assert info.outgoing == 2
        assert info.connected_to == ["A", "C"]
        assert info.names == ["A", "C"]
        assert info.named_by == ["A"]

    def test_node_info_within_filtered_view(self):
        """Test neighbours outside the search are not listed."""
        info = node_info(build_view(SIMPLE_TRIANGLE, search="b"), "B")

        assert info.connections == 3
        assert info.connected_to == []

    def test_unknown_node(self):
        """Test a missing person gives None."""
        assert node_info(build_view(SIMPLE_TRIANGLE), "Zed") is None

    def test_tooltip(self):
        """Test the hover label."""
        view = build_view(SIMPLE_TRIANGLE)

        assert tooltip(view.get_node("B")) == "B (3 connections)"

    def test_community_members(self):
        """Test grouping names by community."""
        members = community_members(build_view(TWO_GROUPS))

        assert members == {0: ["A", "B"], 1: ["C", "D"], 2: ["E"]}


class TestRender:
    """Tests for drawing a view onto an SVG canvas."""

    def _placed(self, relationships):
        view = build_view(relationships)
        return place(view, circular_layout(view.nodes, 400, 400))

    def test_place_returns_new_view(self):
        """Test placing positions leaves the original view untouched."""
        view = build_view(SIMPLE_TRIANGLE)
        placed = place(view, [LayoutPosition("A", 1.0, 2.0)])

        assert placed.get_node("A").x == 1.0
        assert view.get_node("A").x is None

    def test_one_circle_per_node(self):
        """Test every node is drawn."""
        view = self._placed(SIMPLE_TRIANGLE)
        canvas = SvgCanvas(400, 400)

        render_view(view, canvas)

        svg = canvas.to_svg()
        assert svg.startswith("<svg")
        assert svg.count("<circle") == 3
        assert svg.count("<text") == 3

    def test_arrows_only_on_directed_edges(self):
        """Test mutual edges get no arrowhead."""
        view = self._placed(SIMPLE_TRIANGLE)
        canvas = SvgCanvas(400, 400)

        render_view(view, canvas)

        svg = canvas.to_svg()
        assert svg.count("<line") == 3
        assert svg.count("<polygon") == 1

    def test_edges_drawn_before_nodes(self):
        """Test nodes are painted on top of edges."""
        view = self._placed(SIMPLE_TRIANGLE)
        canvas = SvgCanvas(400, 400)

        render_view(view, canvas)

        kinds = [element.split(" ", 1)[0] for element in canvas.elements]
        assert kinds.index("<circle") > max(i for i, k in enumerate(kinds) if k == "<line")

    def test_selection_dims_others(self):
        """Test unrelated nodes are dimmed while something is selected."""
        view = self._placed({"A": ["B"], "C": ["D"]})
        canvas = SvgCanvas(400, 400)

        render_view(view, canvas, InteractionState(selected="A"))

        svg = canvas.to_svg()
        assert 'stroke="#fff"' in svg
        assert f'fill="{PALETTE[1]}40"' in svg

    def test_names_escaped(self):
        """Test labels are XML-escaped."""
        view = self._placed({"<A&B>": ["C"]})
        canvas = SvgCanvas(400, 400)

        render_view(view, canvas)

        assert "&lt;A&amp;B&gt;" in canvas.to_svg()

    def test_viewbox(self):
        """Test the fitted region becomes the SVG viewBox."""
        canvas = SvgCanvas(400, 400, viewbox=(-10, -20, 90, 80))

        assert 'viewBox="-10.00 -20.00 100.00 100.00"' in canvas.to_svg()
