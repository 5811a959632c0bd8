"""Command-line front end for the Campus Pathfinder.

    campus-pathfinder locations
    campus-pathfinder route gate1 jacques --map route.html
    campus-pathfinder check --data campus.json --policy lenient
"""

import asyncio
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .config import AppConfig, get_config
from .container import Container
from .domain.errors import CampusMapError
from .pipeline import describe_route
from .services import RoutePlannerService

cli_app = typer.Typer(help="Shortest walking routes across campus.")
console = Console()

DataOption = typer.Option(None, "--data", "-d", help="Path to a JSON pathway dataset.")
UrlOption = typer.Option(None, "--url", "-u", help="URL of a JSON pathway dataset.")
PolicyOption = typer.Option(None, "--policy", help="Malformed data policy: strict or lenient.")


def configure_logging(config: AppConfig) -> None:
    logging.basicConfig(
        level=config.observability.level.upper(),
        format=config.observability.format,
    )


def _build_config(
    data: Optional[Path], url: Optional[str], policy: Optional[str]
) -> AppConfig:
    config = get_config()
    updates = {}
    if data is not None:
        updates["data_dir"] = data.parent
        updates["dataset_file"] = data.name
    if url is not None:
        updates["dataset_url"] = url
    if policy is not None:
        if policy not in ("strict", "lenient"):
            raise typer.BadParameter("policy must be 'strict' or 'lenient'")
        updates["malformed_policy"] = policy
    if not updates:
        return config
    return config.model_copy(update={"graph": config.graph.model_copy(update=updates)})


def _load_planner(config: AppConfig) -> RoutePlannerService:
    configure_logging(config)
    planner: RoutePlannerService = Container.create_default(config).resolve(
        RoutePlannerService
    )
    error = asyncio.run(planner.load_safe())
    if error:
        console.print(f"[bold red]Error:[/bold red] {escape(error)}")
        raise typer.Exit(code=1)
    return planner


@cli_app.command()
def locations(
    data: Optional[Path] = DataOption,
    url: Optional[str] = UrlOption,
    policy: Optional[str] = PolicyOption,
):
    """
    Lists the buildings and gates that can be used as route endpoints.
    """
    planner = _load_planner(_build_config(data, url, policy))

    table = Table(title="Campus locations")
    table.add_column("Id", style="cyan")
    table.add_column("Name")
    table.add_column("Type", style="magenta")
    for node in planner.list_locations():
        table.add_row(node.id, node.name, node.type)
    console.print(table)


@cli_app.command()
def route(
    start: str = typer.Argument(..., help="Id of the start location."),
    end: str = typer.Argument(..., help="Id of the destination."),
    map_path: Optional[Path] = typer.Option(
        None, "--map", "-m", help="Write an HTML map of the route here."
    ),
    data: Optional[Path] = DataOption,
    url: Optional[str] = UrlOption,
    policy: Optional[str] = PolicyOption,
):
    """
    Computes the shortest walkable route between two locations.
    """
    planner = _load_planner(_build_config(data, url, policy))

    result, error = planner.plan_safe(
        start, end, generate_map=map_path is not None, map_output_path=map_path
    )
    if error or result is None:
        console.print(f"[bold red]Error:[/bold red] {escape(error or '')}")
        raise typer.Exit(code=1)

    console.print(escape(describe_route(result, planner.store)))
    if map_path is not None:
        console.print(f"[green]Map saved to:[/green] {map_path}")


@cli_app.command()
def check(
    data: Optional[Path] = DataOption,
    url: Optional[str] = UrlOption,
    policy: Optional[str] = PolicyOption,
):
    """
    Loads the dataset and reports what was kept and what was dropped.
    """
    config = _build_config(data, url, policy)
    configure_logging(config)
    planner: RoutePlannerService = Container.create_default(config).resolve(
        RoutePlannerService
    )
    try:
        report = asyncio.run(planner.load())
    except CampusMapError as e:
        console.print(f"[bold red]Error:[/bold red] {escape(e.message)}")
        for problem in getattr(e, "problems", ()):
            console.print(f"  - {escape(problem)}")
        raise typer.Exit(code=1)

    console.print(
        f"[cyan]{report.node_count} nodes, {report.edge_count} paths "
        f"({report.walkable_edge_count} walkable)[/cyan]"
    )
    if report.dropped:
        console.print(f"[yellow]Dropped {len(report.dropped)} malformed entries:[/yellow]")
        for line in report.dropped:
            console.print(f"  - {escape(line)}")


def main() -> None:
    cli_app()


if __name__ == "__main__":
    main()
