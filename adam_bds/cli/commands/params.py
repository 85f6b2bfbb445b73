from __future__ import annotations

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from ...constants import Defaults, Domains
from ...infrastructure.io.exceptions import DataSourceError
from ...infrastructure.repositories import SourceDataRepository
from ...pandas_utils import is_missing_scalar
from ...transformations.parameters import build_parameter_lookup

console = Console()


def _text(value: object) -> str:
    return "" if is_missing_scalar(value) else str(value)


@click.command()
@click.option(
    "--domain",
    type=click.Choice(Domains.SUPPORTED, case_sensitive=False),
    default=Defaults.DOMAIN,
    show_default=True,
    help="SDTM findings domain",
)
@click.option(
    "--data-dir",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Directory with lb/vs as .csv or .xpt (default: bundled sample data)",
)
def params_command(domain: str, data_dir: Path | None) -> None:
    """Print the parameter lookup built from the findings data."""
    domain = domain.upper()
    try:
        findings = SourceDataRepository(data_dir).load_findings(domain)
        lookup = build_parameter_lookup(findings, domain=domain)
    except (DataSourceError, ValueError) as e:
        raise click.ClickException(str(e)) from e

    table = Table(title=f"{Domains.DATASET_NAMES[domain]} Parameters")
    table.add_column("PARAMN", justify="right", style="yellow")
    table.add_column("PARAMCD", style="cyan")
    table.add_column("PARAM")
    table.add_column("PARCAT1", style="dim")
    for row in lookup.itertuples(index=False):
        table.add_row(
            str(row.PARAMN),
            str(row.PARAMCD),
            _text(row.PARAM),
            _text(row.PARCAT1),
        )
    console.print(table)
