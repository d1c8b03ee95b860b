"""
Sociogram CLI

Command-line interface for exploring friendship data.
Provides commands for loading data, summarising the graph, inspecting
a person's connections, and rendering the diagram to SVG.

Commands:
    sociogram load <file>       Parse "Name: Friend1, Friend2" lines and save them
    sociogram reset             Forget saved data and use the built-in roster
    sociogram export            Print the current data as "Name: Friend1, Friend2" lines
    sociogram show              Display a summary of the current graph
    sociogram communities       List the members of each community
    sociogram info <name>       Show one person's connections
    sociogram render            Lay out the graph and write an SVG file

Usage:
    $ sociogram load class.txt
    $ sociogram render --layout circular --select Hannah --out class.svg
"""

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from rich.panel import Panel
from rich import box

from sociogram import __version__
from sociogram.community import count_communities
from sociogram.config import SociogramConfig
from sociogram.encoding import community_color
from sociogram.layout import LayoutEngine, SpringPhysics
from sociogram.models import InteractionState, LayoutMode, LayoutPosition
from sociogram.parser import DataFormatError, format_relationships, parse_relationships
from sociogram.render import SvgCanvas, render_view
from sociogram.storage import DataStore
from sociogram.view import build_view, community_members, node_info, place, tooltip

# Initialize Typer app and Rich console
app = typer.Typer(
    name="sociogram",
    help="Sociogram: explore who names whom as a friend",
    add_completion=False,
)
console = Console()


DB_OPTION_HELP = "Path to the database file (default: .sociogram/sociogram.db)"


def _open_store(db_path: Optional[Path]) -> tuple[SociogramConfig, DataStore]:
    """Resolve configuration and open the data store."""
    config = SociogramConfig.from_env().with_overrides(db_path=db_path)
    return config, DataStore(config.db_path)


@app.command()
def load(
    file: Path = typer.Argument(
        ...,
        help="Text file with one 'Name: Friend1, Friend2' line per person",
        exists=True,
        file_okay=True,
        dir_okay=False,
        resolve_path=True,
    ),
    db_path: Optional[Path] = typer.Option(None, "--db", "-d", help=DB_OPTION_HELP),
) -> None:
    """
    Parse relationship data from a file and make it the working dataset.

    The whole file is rejected if any line is malformed.
    """
    try:
        relationships = parse_relationships(file.read_text(encoding="utf-8"))
    except DataFormatError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    _, store = _open_store(db_path)
    store.save(relationships)

    view = build_view(relationships)
    console.print(
        f"[bold green]✓ Loaded[/bold green] {len(relationships)} people "
        f"({view.node_count} nodes, {view.edge_count} edges) into {store.path}"
    )


@app.command()
def reset(
    db_path: Optional[Path] = typer.Option(None, "--db", "-d", help=DB_OPTION_HELP),
) -> None:
    """
    Discard saved data and go back to the built-in roster.
    """
    _, store = _open_store(db_path)
    if not store.is_custom():
        console.print("[yellow]Already using the built-in data.[/yellow]")
        raise typer.Exit(0)

    store.reset()
    console.print("[bold green]✓ Reset[/bold green] to the built-in data.")


@app.command()
def export(
    out: Optional[Path] = typer.Option(None, "--out", "-o", help="File to write (default: stdout)"),
    db_path: Optional[Path] = typer.Option(None, "--db", "-d", help=DB_OPTION_HELP),
) -> None:
    """
    Write the current data in the text form that load accepts.
    """
    _, store = _open_store(db_path)
    text = format_relationships(store.load_or_default())

    if out is None:
        typer.echo(text)
        return

    out.write_text(text + "\n", encoding="utf-8")
    console.print(f"[bold green]✓ Exported[/bold green] to {out}")


@app.command()
def show(
    search: str = typer.Option("", "--search", "-s", help="Only include names containing this text"),
    db_path: Optional[Path] = typer.Option(None, "--db", "-d", help=DB_OPTION_HELP),
) -> None:
    """
    Display a summary of the current graph.
    """
    _, store = _open_store(db_path)
    view = build_view(store.load_or_default(), search)

    table = Table(box=box.SIMPLE, show_header=False)
    table.add_column("Label", style="dim")
    table.add_column("Value", style="bold")

    table.add_row("Data", "custom" if store.is_custom() else "built-in")
    table.add_row("People", str(view.node_count))
    table.add_row("Friendships", str(view.edge_count))
    table.add_row("Mutual", str(view.mutual_edge_count))
    table.add_row("Communities", str(count_communities(view.communities)))
    if search:
        table.add_row("Search", search)

    console.print(Panel(table, title="[bold blue]Sociogram[/bold blue]", border_style="blue"))

    if view.nodes:
        top = sorted(view.nodes, key=lambda n: (-n.connections, n.name))[:5]
        console.print("\n[bold]Most connected:[/bold]")
        for node in top:
            console.print(f"   • [{node.color}]{tooltip(node)}[/]")


@app.command()
def communities(
    db_path: Optional[Path] = typer.Option(None, "--db", "-d", help=DB_OPTION_HELP),
) -> None:
    """
    List the members of each community.
    """
    _, store = _open_store(db_path)
    view = build_view(store.load_or_default())

    if not view.nodes:
        console.print("[yellow]No people in the current data.[/yellow]")
        raise typer.Exit(0)

    table = Table(title="Communities", box=box.ROUNDED)
    table.add_column("Community", justify="right")
    table.add_column("Color")
    table.add_column("Members")

    for community_id, members in community_members(view).items():
        color = community_color(community_id)
        table.add_row(str(community_id), f"[{color}]■ {color}[/]", ", ".join(members))

    console.print(table)


@app.command()
def info(
    name: str = typer.Argument(..., help="Person to inspect"),
    db_path: Optional[Path] = typer.Option(None, "--db", "-d", help=DB_OPTION_HELP),
) -> None:
    """
    Show one person's connections.
    """
    _, store = _open_store(db_path)
    view = build_view(store.load_or_default())
    details = node_info(view, name)

    if details is None:
        matches = [n.name for n in view.nodes if name.lower() in n.name.lower()]
        if matches:
            console.print(f"[yellow]'{name}' not found. Did you mean:[/yellow]")
            for match in matches[:5]:
                console.print(f"   • {match}")
        else:
            console.print(f"[red]'{name}' not found.[/red]")
        raise typer.Exit(1)

    console.print(f"\n[bold]{details.node_id}[/bold]")
    console.print(f"[bold]Total Connections:[/bold] {details.connections}")
    console.print(f"   [dim]named by {details.incoming}, names {details.outgoing}[/dim]")
    if details.names:
        console.print(f"[bold]Names:[/bold] {', '.join(details.names)}")
    if details.named_by:
        console.print(f"[bold]Named by:[/bold] {', '.join(details.named_by)}")
    console.print("[bold]Connected to:[/bold]")
    for other in details.connected_to:
        console.print(f"   • {other}")


@app.command()
def render(
    out: Path = typer.Option(Path("sociogram.svg"), "--out", "-o", help="SVG file to write"),
    layout: LayoutMode = typer.Option(
        LayoutMode.FORCE,
        "--layout",
        "-l",
        case_sensitive=False,
        help="Layout strategy",
    ),
    search: str = typer.Option("", "--search", "-s", help="Only draw names containing this text"),
    select: Optional[str] = typer.Option(None, "--select", help="Person to select"),
    hover: Optional[str] = typer.Option(None, "--hover", help="Person to hover"),
    width: Optional[float] = typer.Option(None, "--width", help="Canvas width"),
    height: Optional[float] = typer.Option(None, "--height", help="Canvas height"),
    db_path: Optional[Path] = typer.Option(None, "--db", "-d", help=DB_OPTION_HELP),
) -> None:
    """
    Lay out the graph and write it as an SVG file.

    Circular and hierarchical layouts are computed directly; the force
    layout is simulated with a spring model. The picture is then fitted
    to the node bounds.
    """
    config, store = _open_store(db_path)
    config = config.with_overrides(width=width, height=height)
    view = build_view(store.load_or_default(), search)

    for label, node_id in (("--select", select), ("--hover", hover)):
        if node_id is not None and view.get_node(node_id) is None:
            console.print(f"[bold red]Error:[/bold red] {label} '{node_id}' is not in the graph")
            raise typer.Exit(1)

    physics = SpringPhysics(
        [node.id for node in view.nodes],
        view.edges,
        width=config.width,
        height=config.height,
    )
    engine = LayoutEngine(physics, config)
    engine.apply(layout, view.nodes, edges=view.edges)
    physics.settle()

    placed = place(
        view,
        [LayoutPosition(id=node_id, x=x, y=y) for node_id, (x, y) in physics.positions.items()],
    )
    canvas = SvgCanvas(
        config.width,
        config.height,
        background=config.background,
        viewbox=physics.viewport,
    )
    render_view(placed, canvas, InteractionState(selected=select, hovered=hover))

    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(canvas.to_svg(), encoding="utf-8")
    console.print(
        f"[bold green]✓ Rendered[/bold green] {placed.node_count} people "
        f"({layout.value} layout) to {out}"
    )


# Version and logging options
@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show version and exit",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Log debug output",
    ),
) -> None:
    """
    Sociogram: explore who names whom as a friend.
    """
    if version:
        console.print(f"[bold]Sociogram[/bold] version {__version__}")
        raise typer.Exit()

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


if __name__ == "__main__":
    app()
