"""Build command - derive a BDS Finding dataset and render its vignette.

Thin adapter between click and ``BuildBdsUseCase``:
1. Parse CLI arguments and the optional config file
2. Create the BuildBdsRequest
3. Call the use case
4. Present the step summary
"""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

import click
from rich.console import Console

from ...application.build_bds_use_case import BuildBdsUseCase
from ...application.models import BuildBdsRequest
from ...config import ConfigLoader
from ...constants import Defaults, Domains
from ...infrastructure.logging import ConsoleLogger
from ..presenters.summary import SummaryPresenter

console = Console()

OUTPUT_FORMATS = ("html", "xpt", "csv")


def resolve_output_formats(output_format: str) -> set[str]:
    if output_format == "all":
        return set(OUTPUT_FORMATS)
    return {output_format}


@click.command()
@click.option(
    "--domain",
    type=click.Choice(Domains.SUPPORTED, case_sensitive=False),
    default=Defaults.DOMAIN,
    show_default=True,
    help="SDTM findings domain to build from (LB -> ADLB, VS -> ADVS)",
)
@click.option(
    "--data-dir",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Directory with adsl and lb/vs as .csv or .xpt (default: bundled sample data)",
)
@click.option(
    "--output-dir",
    type=click.Path(file_okay=False, path_type=Path),
    help="Output directory (default: ./output or the config file setting)",
)
@click.option(
    "--config",
    "config_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to an adam_bds.toml config file (default: ./adam_bds.toml)",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice([*OUTPUT_FORMATS, "all"]),
    default=Defaults.OUTPUT_FORMAT,
    show_default=True,
    help="Output: html vignette, xpt (SAS transport), csv, or all",
)
@click.option(
    "--preview-rows",
    type=click.IntRange(min=1),
    help="Rows shown in each preview table of the vignette",
)
@click.option(
    "--fail-safe",
    is_flag=True,
    help="Keep going when a derivation step or integrity check fails",
)
@click.option(
    "-v", "--verbose", count=True, help="Increase verbosity level (e.g., -v, -vv)"
)
def build_command(
    domain: str,
    data_dir: Path | None,
    output_dir: Path | None,
    config_file: Path | None,
    output_format: str,
    preview_rows: int | None,
    fail_safe: bool,
    verbose: int,
) -> None:
    """Derive ADLB or ADVS and write the vignette.

    Examples:

    \b
        # Vignette for the bundled laboratory data
        adam-bds build

    \b
        # ADVS from your own data, with XPT and CSV exports
        adam-bds build --domain VS --data-dir study/sdtm --format all
    """
    try:
        config = ConfigLoader.load(config_file=config_file)
    except ValueError as e:
        raise click.ClickException(f"Invalid configuration: {e}") from e
    if preview_rows is not None:
        config = replace(config, preview_rows=preview_rows)

    request = BuildBdsRequest(
        domain=domain.upper(),
        data_dir=data_dir or config.data_dir,
        output_dir=output_dir or config.output_dir,
        output_formats=resolve_output_formats(output_format),
        config=config,
        fail_safe=fail_safe,
        verbose=verbose,
    )

    logger = ConsoleLogger(console=console, verbosity=verbose)
    response = BuildBdsUseCase(logger=logger).execute(request)

    SummaryPresenter(console).present(response)
    logger.log_final_stats()

    if not response.success:
        raise click.ClickException(response.error or f"Building {response.dataset} failed")
