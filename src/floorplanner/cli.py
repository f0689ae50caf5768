"""Command Line Interface for Floor Planner.

This module provides a simple CLI for creating plans, applying operation
scripts to them, and checking their consistency.
"""

import json
import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from . import config
from .engine.api import FloorPlanEditor, apply_operations
from .engine.validators import InvariantViolation, validate_all

app = typer.Typer(
    name="floor-planner",
    help="A CLI tool for restaurant floor plan layouts",
    no_args_is_help=True,
)
console = Console()


@app.callback()
def main(
    log_level: str = typer.Option(config.LOG_LEVEL, "--log-level", help="Logging level"),
):
    logging.basicConfig(
        level=log_level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


@app.command()
def new(
    output: Path = typer.Option(..., "--out", "-o", help="Path to output plan JSON file"),
    name: str = typer.Option("Untitled", "--name", "-n", help="Plan name"),
    floors: int = typer.Option(1, "--floors", help="Number of empty floors to create"),
):
    """Create a plan with empty floors."""
    editor = FloorPlanEditor(name=name)
    for _ in range(floors):
        editor.add_floor()
    editor.save(str(output))
    console.print(f"[green]✓[/green] Created plan '{name}' with {floors} floor(s) at {output}")


@app.command()
def show(
    plan: Path = typer.Option(..., "--plan", "-p", help="Path to plan JSON file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="List every shape"),
):
    """Summarize the floors, shapes and groups of a plan."""
    try:
        editor = FloorPlanEditor.from_file(str(plan))
    except FileNotFoundError as e:
        console.print(f"[red]Error: File not found - {e}[/red]")
        raise typer.Exit(1)
    except (json.JSONDecodeError, KeyError, ValueError) as e:
        console.print(f"[red]Error: Invalid plan - {e}[/red]")
        raise typer.Exit(1)

    console.print(f"[bold]{editor.name}[/bold]")

    table = Table()
    table.add_column("Floor", style="cyan")
    table.add_column("Size", justify="right")
    table.add_column("Z", justify="right")
    table.add_column("Shapes", justify="right")
    table.add_column("Groups", justify="right")
    table.add_column("Reserved", justify="right")
    for floor in sorted(editor.floors, key=lambda f: f.z_index):
        groups = [g for g in editor.store.groups.values() if g.floor_id == floor.id]
        reserved = sum(1 for s in floor.shapes if s.reservation is not None)
        table.add_row(
            f"{floor.name} ({floor.id})",
            f"{floor.width:g}x{floor.height:g}",
            str(floor.z_index),
            str(len(floor.shapes)),
            str(len(groups)),
            str(reserved),
        )
    console.print(table)

    if verbose:
        shapes = Table()
        shapes.add_column("Shape", style="cyan")
        shapes.add_column("Category")
        shapes.add_column("Position", justify="right")
        shapes.add_column("Size", justify="right")
        shapes.add_column("Rotation", justify="right")
        shapes.add_column("Group")
        for floor in editor.floors:
            for shape in floor.shapes:
                shapes.add_row(
                    shape.label or shape.id,
                    shape.category.value,
                    f"{shape.x:.1f}, {shape.y:.1f}",
                    f"{shape.width:g}x{shape.height:g}",
                    f"{shape.rotation:g}",
                    shape.group_id or "",
                )
        console.print(shapes)


@app.command()
def apply(
    plan: Path = typer.Option(..., "--plan", "-p", help="Path to plan JSON file"),
    operations: Path = typer.Option(..., "--operations", help="Path to operations JSON file"),
    output: Path = typer.Option(..., "--out", "-o", help="Path to output plan JSON file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show detailed output"),
):
    """Apply a list of operations to a plan and save the result."""
    try:
        editor = FloorPlanEditor.from_file(str(plan))
        console.print(f"[green]✓[/green] Loaded plan from {plan}")

        with open(operations, encoding="utf-8") as f:
            operations_data = json.load(f)
        if isinstance(operations_data, dict):
            operations_data = [operations_data]
        console.print(f"[green]✓[/green] Loaded {len(operations_data)} operations from {operations}")
    except FileNotFoundError as e:
        console.print(f"[red]Error: File not found - {e}[/red]")
        raise typer.Exit(1)
    except json.JSONDecodeError as e:
        console.print(f"[red]Error: Invalid JSON - {e}[/red]")
        raise typer.Exit(1)
    except (KeyError, ValueError) as e:
        console.print(f"[red]Error: Invalid plan - {e}[/red]")
        raise typer.Exit(1)

    results = apply_operations(editor, operations_data)

    successful_ops = sum(1 for r in results if r["success"])
    console.print(f"[green]✓[/green] Applied {successful_ops}/{len(results)} operations successfully")

    if verbose:
        for result in results:
            status = "✓" if result["success"] else "✗"
            op_name = result["operation"].get("op") or result["operation"].get("type")
            console.print(f"  Operation {result['operation_index'] + 1} ({op_name}): {status}")
            if "error" in result:
                console.print(f"    Error: {result['error']}")

    editor.save(str(output))
    console.print(f"[green]✓[/green] Plan saved to {output}")

    if successful_ops < len(results):
        raise typer.Exit(1)


@app.command()
def check(
    plan: Path = typer.Option(..., "--plan", "-p", help="Path to plan JSON file"),
):
    """Check group membership and floor boundaries of a plan."""
    try:
        editor = FloorPlanEditor.from_file(str(plan))
    except FileNotFoundError as e:
        console.print(f"[red]Error: File not found - {e}[/red]")
        raise typer.Exit(1)
    except (KeyError, ValueError) as e:
        console.print(f"[red]Error: Invalid plan - {e}[/red]")
        raise typer.Exit(1)

    failed = False
    try:
        validate_all(editor.store)
        console.print("[green]✓[/green] Group membership is consistent")
    except InvariantViolation as e:
        console.print(f"[red]✗ {e}[/red]")
        failed = True

    for floor in editor.floors:
        for shape in floor.shapes:
            if not editor.store.fits_on_floor(floor.id, shape):
                console.print(f"[yellow]![/yellow] {shape.id} extends past the edge of {floor.name}")
            overlapping = editor.store.collisions(floor.id, shape)
            if overlapping:
                console.print(f"[yellow]![/yellow] {shape.id} overlaps {', '.join(overlapping)}")

    if failed:
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
