"""Command-line entrypoints for chemlab."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Annotated, Any, Dict

import typer

from chemlab.catalog import default_catalog
from chemlab.config import WorkspaceSettings, load_config
from chemlab.lessons import DEFAULT_LESSONS
from chemlab.models import PlacedItem
from chemlab.workspace import Workspace

app = typer.Typer(add_completion=False)


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log reactions.")] = False,
) -> None:
    """Chemistry playground engine."""
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _item_payload(item: PlacedItem) -> Dict[str, Any]:
    return {
        "id": item.id,
        "symbol": item.symbol,
        "x": item.position[0],
        "y": item.position[1],
        "constituents": [part.id for part in item.constituents],
    }


def _state_payload(workspace: Workspace) -> Dict[str, Any]:
    return {
        "elements": [_item_payload(item) for item in workspace.placed_elements],
        "compounds": [_item_payload(item) for item in workspace.placed_compounds],
        "discovered": sorted(workspace.discovered),
        "history": [compound.formula for compound in workspace.history],
        "badges": list(workspace.badges),
    }


@app.command()
def reactions() -> None:
    """List the reactions of the stock catalog in matching order."""
    for reaction in default_catalog().all_reactions():
        typer.echo(reaction.equation)


@app.command()
def hints(
    symbol: Annotated[str, typer.Argument(help="Element or compound symbol, e.g. H.")],
) -> None:
    """Show which compounds a symbol can help make."""
    workspace = Workspace(default_catalog())
    products = workspace.possible_products_starting_with(symbol)
    if not products:
        typer.echo(f"No reactions use {symbol}.")
        return
    for compound in products:
        typer.echo(f"{compound.formula} ({compound.common_name})")


@app.command()
def lessons() -> None:
    """List the stock lessons."""
    for lesson in DEFAULT_LESSONS:
        typer.echo(f"{lesson.slug}: {lesson.title} [{lesson.reaction_equation}]")


@app.command()
def play(
    config_file: Annotated[
        Path, typer.Argument(help="Path to JSON configuration file.")
    ],
    output: Annotated[
        Path | None, typer.Option(help="Path to save output JSON.")
    ] = None,
    sequential: Annotated[
        bool, typer.Option(help="React after every placement instead of once at the end.")
    ] = False,
) -> None:
    """Place elements from a config file and print the resulting workspace."""
    try:
        config = load_config(config_file)
    except (KeyError, ValueError) as exc:
        raise typer.BadParameter(f"Invalid configuration: {exc}") from exc

    workspace = Workspace(config.catalog, config.settings)
    placements = [(p.symbol, p.position) for p in config.placements]
    try:
        if sequential:
            for symbol, position in placements:
                workspace.add_item(symbol, position)
        else:
            workspace.add_items(placements)
    except KeyError as exc:
        raise typer.BadParameter(str(exc)) from exc

    json_output = json.dumps(_state_payload(workspace), indent=2, ensure_ascii=False)
    typer.echo(json_output)

    if output:
        with open(output, "w", encoding="utf-8") as f:
            f.write(json_output)


@app.command()
def water_demo(
    threshold: Annotated[float, typer.Option(help="Cluster threshold.")] = 50.0,
) -> None:
    """Place four H and two O close together and print the outcome."""
    workspace = Workspace(default_catalog(), WorkspaceSettings(cluster_threshold=threshold))
    workspace.add_items(
        [
            ("H", (0.0, 0.0)),
            ("H", (10.0, 0.0)),
            ("H", (0.0, 10.0)),
            ("H", (10.0, 10.0)),
            ("O", (5.0, 5.0)),
            ("O", (5.0, 15.0)),
        ]
    )
    typer.echo(json.dumps(_state_payload(workspace), indent=2, ensure_ascii=False))


if __name__ == "__main__":
    app()
