"""
Physics Engine Boundary for Sociogram

The force-directed layout is not computed here; it belongs to an external
physics engine. This module defines the small surface the layout engine
talks to, and a concrete adapter over NetworkX's spring layout so the CLI
can produce force-directed output without a browser.

Boundary:
    pin(id, x, y)            fix a node at a coordinate
    unpin(id)                release a fixed node
    reheat()                 restart the simulation
    zoom_to_fit(ms, pad)     camera fit to the node bounds
    call_later(ms, cb)       one-shot delayed callback, no cancellation
    on_settled(cb)           notification once the simulation stops
"""

import logging
from typing import Callable, Iterable, Optional, Protocol

import networkx as nx

from sociogram.models import Edge


logger = logging.getLogger(__name__)

Bounds = tuple[float, float, float, float]


class PhysicsEngine(Protocol):
    """What the layout engine needs from a force simulation."""

    def pin(self, node_id: str, x: float, y: float) -> None: ...

    def unpin(self, node_id: str) -> None: ...

    def reheat(self) -> None: ...

    def zoom_to_fit(self, duration_ms: int, padding: float) -> None: ...

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> None: ...

    def on_settled(self, callback: Callable[[], None]) -> None: ...


def fit_bounds(points: Iterable[tuple[float, float]], padding: float = 0.0) -> Optional[Bounds]:
    """
    Bounding box of a set of points, grown by padding on every side.

    Returns:
        (min_x, min_y, max_x, max_y), or None when there are no points
    """
    points = list(points)
    if not points:
        return None
    xs = [x for x, _ in points]
    ys = [y for _, y in points]
    return (min(xs) - padding, min(ys) - padding, max(xs) + padding, max(ys) + padding)


class SpringPhysics:
    """
    A synchronous stand-in for a live force simulation.

    Each reheat runs NetworkX's Fruchterman-Reingold spring layout with
    pinned nodes held fixed. Delayed callbacks and settle listeners run
    when settle() is called, which is when a browser engine would report
    that it has stopped.

    Attributes:
        positions: Current coordinate of every placed node
        viewport: Bounds chosen by the last zoom_to_fit, None before the first
        fit_count: Number of zoom_to_fit requests served

    Usage:
        physics = SpringPhysics(["A", "B"], edges, width=800, height=800)
        engine = LayoutEngine(physics)
        engine.apply(LayoutMode.FORCE, view.nodes)
        physics.settle()
    """

    def __init__(
        self,
        node_ids: Iterable[str],
        edges: Iterable[Edge] = (),
        width: float = 800.0,
        height: float = 800.0,
        seed: Optional[int] = 42,
        iterations: int = 100,
    ) -> None:
        self._graph = nx.Graph()
        self._graph.add_nodes_from(node_ids)
        for edge in edges:
            if edge.source in self._graph and edge.target in self._graph:
                self._graph.add_edge(edge.source, edge.target)

        self._width = width
        self._height = height
        self._seed = seed
        self._iterations = iterations

        self._pins: dict[str, tuple[float, float]] = {}
        self._pending: list[tuple[int, Callable[[], None]]] = []
        self._listeners: list[Callable[[], None]] = []

        self.positions: dict[str, tuple[float, float]] = {}
        self.viewport: Optional[Bounds] = None
        self.fit_count = 0

    @property
    def pinned(self) -> dict[str, tuple[float, float]]:
        return dict(self._pins)

    def pin(self, node_id: str, x: float, y: float) -> None:
        self._pins[node_id] = (x, y)
        self.positions[node_id] = (x, y)

    def unpin(self, node_id: str) -> None:
        self._pins.pop(node_id, None)

    def reheat(self) -> None:
        """Re-run the spring layout around the pinned nodes."""
        if self._graph.number_of_nodes() == 0:
            self.positions = {}
            return

        if self._pins.keys() >= set(self._graph.nodes):
            self.positions = {node_id: self._pins[node_id] for node_id in self._graph.nodes}
            return

        center = (self._width / 2, self._height / 2)

        if not self._pins:
            layout = nx.spring_layout(
                self._graph,
                center=center,
                scale=0.35 * min(self._width, self._height),
                seed=self._seed,
                iterations=self._iterations,
            )
        else:
            # NetworkX does not rescale when nodes are fixed; unplaced nodes
            # get random starts within the span of the known coordinates
            initial = {
                node_id: self.positions[node_id]
                for node_id in self._graph.nodes
                if node_id in self.positions
            }
            initial.update(self._pins)
            layout = nx.spring_layout(
                self._graph,
                pos=initial,
                fixed=list(self._pins),
                k=0.1 * min(self._width, self._height),
                seed=self._seed,
                iterations=self._iterations,
            )

        self.positions = {node_id: (float(x), float(y)) for node_id, (x, y) in layout.items()}
        logger.debug(
            "Spring layout placed %d nodes (%d pinned)", len(self.positions), len(self._pins)
        )

    def zoom_to_fit(self, duration_ms: int, padding: float) -> None:
        self.viewport = fit_bounds(self.positions.values(), padding)
        self.fit_count += 1

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> None:
        self._pending.append((delay_ms, callback))

    def on_settled(self, callback: Callable[[], None]) -> None:
        self._listeners.append(callback)

    def settle(self) -> None:
        """
        Report that the simulation has stopped.

        Runs every pending delayed callback in delay order, then every
        settle listener.
        """
        pending = sorted(self._pending, key=lambda item: item[0])
        self._pending.clear()
        for _, callback in pending:
            callback()
        for listener in self._listeners:
            listener()
