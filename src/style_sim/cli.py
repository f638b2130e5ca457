"""
Command line interface for generating response style data sets.

    python -m style_sim presets
    python -m style_sim generate --preset baseline --output data.csv
"""

import dataclasses
import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from style_sim.core.errors import SimulationError
from style_sim.synthetic_data.generators import simulate_style_data, to_csv
from style_sim.synthetic_data.presets import get_available_presets, get_preset

logger = logging.getLogger(__name__)

console = Console()
app = typer.Typer(no_args_is_help=True)


@app.command()
def presets() -> None:
    """List the available preset configurations."""
    table = Table(title="Presets")
    table.add_column("name")
    table.add_column("n", justify="right")
    table.add_column("items", justify="right")
    table.add_column("categories", justify="right")
    table.add_column("style")
    for name in get_available_presets():
        config = get_preset(name)
        table.add_row(
            name,
            str(config.n),
            str(config.items * config.content_dimensions),
            str(config.categories),
            str(config.style) if config.style is not None else "-",
        )
    console.print(table)


@app.command()
def generate(
    output: Path = typer.Option(..., help="CSV file to write"),
    preset: str = typer.Option("baseline", help="Preset configuration"),
    n: int | None = typer.Option(None, help="Override the respondent count"),
    seed: int | None = typer.Option(None, help="Override the base seed"),
) -> None:
    """Generate a data set from a preset and write it as CSV."""
    try:
        config = get_preset(preset)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1) from e

    overrides: dict[str, int] = {}
    if n is not None:
        overrides["n"] = n
    if seed is not None:
        overrides["seed"] = seed

    logger.info(f"Generating {preset} -> {output}")
    try:
        config = dataclasses.replace(config, **overrides)
        data = simulate_style_data(config)
    except SimulationError as e:
        console.print(f"[red]Invalid configuration: {e}[/red]")
        raise typer.Exit(1) from e
    output.parent.mkdir(parents=True, exist_ok=True)
    to_csv(data, str(output))

    n_items = data.items_per_dimension * data.content_dimensions
    logger.info(
        f"  Generated {data.n} respondents, {n_items} items, "
        f"{data.categories} categories"
    )
