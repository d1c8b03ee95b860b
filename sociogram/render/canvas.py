"""
Render Boundary for Sociogram

The encoder produces NodeStyle and EdgeStyle records; this module turns
them into calls on a canvas-like surface. Any object with arc, line,
polygon and text methods can be drawn on. SvgCanvas is the one shipped
here; it collects the calls and serialises them to an SVG document.
"""

from html import escape
from typing import Optional, Protocol, Sequence

from sociogram.encoding.visual import connected_nodes, encode_edge, encode_node
from sociogram.layout.physics import Bounds
from sociogram.models import EdgeStyle, GraphView, InteractionState, NodeStyle


class Canvas(Protocol):
    """Drawing primitives the render callbacks rely on."""

    def arc(
        self,
        x: float,
        y: float,
        radius: float,
        fill: str,
        stroke: Optional[str] = None,
        stroke_width: float = 0.0,
    ) -> None: ...

    def line(
        self,
        start: tuple[float, float],
        end: tuple[float, float],
        color: str,
        width: float,
    ) -> None: ...

    def polygon(self, points: Sequence[tuple[float, float]], fill: str) -> None: ...

    def text(self, x: float, y: float, text: str, font_size: float, color: str) -> None: ...


def draw_node(canvas: Canvas, style: NodeStyle) -> None:
    """Draw a node circle, its optional border, and its label."""
    canvas.arc(
        style.x,
        style.y,
        style.radius,
        fill=style.fill,
        stroke=style.border_color,
        stroke_width=style.border_width,
    )
    label = style.label
    canvas.text(label.x, label.y, label.text, label.font_size, label.color)


def draw_edge(canvas: Canvas, style: EdgeStyle) -> None:
    """Draw an edge line and, for one-directional edges, its arrowhead."""
    canvas.line(style.start, style.end, style.color, style.width)
    if style.arrow is not None:
        canvas.polygon(style.arrow.points, style.arrow.color)


def render_view(
    view: GraphView,
    canvas: Canvas,
    state: Optional[InteractionState] = None,
    global_scale: float = 1.0,
) -> None:
    """
    Draw one frame of a view: edges first, then nodes on top.

    Nodes that have not been placed are drawn at the origin; edges with an
    unplaced endpoint are skipped.
    """
    state = state or InteractionState()
    nodes_by_id = {node.id: node for node in view.nodes}

    for edge in view.edges:
        source = nodes_by_id.get(edge.source)
        target = nodes_by_id.get(edge.target)
        if source is None or target is None:
            continue
        style = encode_edge(edge, source, target, state, global_scale)
        if style is not None:
            draw_edge(canvas, style)

    connected = connected_nodes(view.edges, state.selected)
    for node in view.nodes:
        draw_node(canvas, encode_node(node, state, connected, global_scale))


def _fmt(value: float) -> str:
    return f"{value:.2f}"


class SvgCanvas:
    """
    A Canvas that records SVG elements.

    Attributes:
        width: Output width in pixels
        height: Output height in pixels
        background: Fill for the background rectangle
        viewbox: Visible region as (min_x, min_y, max_x, max_y); the whole
                 canvas when None

    Usage:
        canvas = SvgCanvas(800, 800)
        render_view(view, canvas, state)
        Path("graph.svg").write_text(canvas.to_svg())
    """

    def __init__(
        self,
        width: float,
        height: float,
        background: str = "#1a1a2e",
        viewbox: Optional[Bounds] = None,
    ) -> None:
        self.width = width
        self.height = height
        self.background = background
        self.viewbox = viewbox
        self._elements: list[str] = []

    @property
    def elements(self) -> list[str]:
        return list(self._elements)

    def arc(
        self,
        x: float,
        y: float,
        radius: float,
        fill: str,
        stroke: Optional[str] = None,
        stroke_width: float = 0.0,
    ) -> None:
        attrs = f'cx="{_fmt(x)}" cy="{_fmt(y)}" r="{_fmt(radius)}" fill="{fill}"'
        if stroke is not None:
            attrs += f' stroke="{stroke}" stroke-width="{_fmt(stroke_width)}"'
        self._elements.append(f"<circle {attrs}/>")

    def line(
        self,
        start: tuple[float, float],
        end: tuple[float, float],
        color: str,
        width: float,
    ) -> None:
        self._elements.append(
            f'<line x1="{_fmt(start[0])}" y1="{_fmt(start[1])}" '
            f'x2="{_fmt(end[0])}" y2="{_fmt(end[1])}" '
            f'stroke="{color}" stroke-width="{_fmt(width)}"/>'
        )

    def polygon(self, points: Sequence[tuple[float, float]], fill: str) -> None:
        coords = " ".join(f"{_fmt(x)},{_fmt(y)}" for x, y in points)
        self._elements.append(f'<polygon points="{coords}" fill="{fill}"/>')

    def text(self, x: float, y: float, text: str, font_size: float, color: str) -> None:
        self._elements.append(
            f'<text x="{_fmt(x)}" y="{_fmt(y)}" font-size="{_fmt(font_size)}" '
            f'font-family="Sans-Serif" text-anchor="middle" dominant-baseline="middle" '
            f'fill="{color}">{escape(text)}</text>'
        )

    def to_svg(self) -> str:
        """Serialise the recorded elements to a standalone SVG document."""
        if self.viewbox is None:
            min_x, min_y, max_x, max_y = 0.0, 0.0, self.width, self.height
        else:
            min_x, min_y, max_x, max_y = self.viewbox

        view_width = max(max_x - min_x, 1.0)
        view_height = max(max_y - min_y, 1.0)
        header = (
            f'<svg xmlns="http://www.w3.org/2000/svg" '
            f'width="{_fmt(self.width)}" height="{_fmt(self.height)}" '
            f'viewBox="{_fmt(min_x)} {_fmt(min_y)} {_fmt(view_width)} {_fmt(view_height)}">'
        )
        background = (
            f'<rect x="{_fmt(min_x)}" y="{_fmt(min_y)}" '
            f'width="{_fmt(view_width)}" height="{_fmt(view_height)}" fill="{self.background}"/>'
        )
        return "\n".join([header, background, *self._elements, "</svg>"]) + "\n"
