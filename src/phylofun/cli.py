"""Command-line interface."""

import logging
from pathlib import Path
from typing import List, Optional

import pandas as pd
import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from phylofun.core import (
    ConditionalProbabilityTableCache,
    MutationProbabilityCatalogue,
    PhyloFunError,
    deduplicate_pairs,
    stringify_annotation,
    unique_protein_pairs,
)
from phylofun.core.cpt import conditional_probability_tables

app = typer.Typer(help="PHYLOFUN: annotation mutation probability tables")
console = Console()
logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@app.command()
def version():
    """Show PHYLOFUN version."""
    from phylofun import __version__
    console.print(f"PHYLOFUN version {__version__}")


@app.command()
def pairs(
    pairs_file: Path = typer.Argument(..., help="Tab-separated protein pair table"),
    accession: str = typer.Argument(..., help="Accession to look up"),
    first_col: int = typer.Option(0, help="Column matched against the accession"),
    second_col: int = typer.Option(1, help="Column holding the partner"),
    header: bool = typer.Option(False, help="First line of the table is a header"),
    unique: bool = typer.Option(False, help="Drop repeated partners"),
):
    """List the partners of ACCESSION in a protein pair table."""
    df = pd.read_csv(pairs_file, sep="\t", header=0 if header else None, dtype=str)

    try:
        found = unique_protein_pairs(df, first_col, second_col, accession)
    except PhyloFunError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1)
    if unique:
        found = deduplicate_pairs(found)

    if not found:
        console.print(f"[yellow]No partners found for {accession}[/yellow]")
        return

    table = Table(title=f"Partners of {accession}")
    table.add_column("Accession", style="cyan")
    table.add_column("Partner", style="green")
    for a, b in found:
        table.add_row(a, b)
    console.print(table)


@app.command()
def cpt(
    catalogue_file: Path = typer.Argument(
        ..., help="CSV with columns distance, from, to, probability"
    ),
    annotation: List[str] = typer.Option(
        ..., "--annotation", "-a",
        help="Composite annotation as comma-separated atomic labels (repeatable)",
    ),
    branch_length: List[float] = typer.Option(
        ..., "--branch-length", "-b", help="Branch length (repeatable)"
    ),
    output_dir: Optional[Path] = typer.Option(
        None, help="Write one CSV per branch length into this directory"
    ),
    workers: int = typer.Option(1, help="Worker processes across branch lengths"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
):
    """Compute conditional probability tables for the given branch lengths."""
    _configure_logging(verbose)

    composites = [[m.strip() for m in a.split(",") if m.strip()] for a in annotation]

    try:
        catalogue = MutationProbabilityCatalogue.from_frame(
            pd.read_csv(catalogue_file, dtype={"from": str, "to": str})
        )
        logger.info(f"Loaded {catalogue} from {catalogue_file}")

        labels = [stringify_annotation(c) for c in composites]
        if workers > 1:
            tables = conditional_probability_tables(
                branch_length, composites, labels, catalogue, n_workers=workers
            )
        else:
            tables = ConditionalProbabilityTableCache(
                catalogue, composites, labels
            ).tables(branch_length)
    except (PhyloFunError, ValueError) as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1)

    if output_dir is not None:
        output_dir.mkdir(parents=True, exist_ok=True)
        for key, df in tables.items():
            path = output_dir / f"cpt_{key}.csv"
            df.to_csv(path)
            logger.info(f"Wrote {path}")
        return

    for key, df in tables.items():
        table = Table(title=f"Branch length {key}")
        table.add_column("from \\ to", style="cyan")
        for col in df.columns:
            table.add_column(str(col), style="green")
        for row_label, row in zip(df.index, df.itertuples(index=False, name=None)):
            table.add_row(str(row_label), *(f"{v:.4f}" for v in row))
        console.print(table)


if __name__ == "__main__":
    app()
