from __future__ import annotations

from typing import TYPE_CHECKING

from rich.table import Table

if TYPE_CHECKING:
    from rich.console import Console

    from ...application.models import BuildBdsResponse, StepResult

MAX_LISTED_COLUMNS = 6


class SummaryPresenter:
    """Print the per-step summary table and the build status."""

    def __init__(self, console: Console) -> None:
        super().__init__()
        self.console = console

    def present(self, response: BuildBdsResponse) -> None:
        self.console.print()
        if response.steps:
            self.console.print(self._build_step_table(response))
            self.console.print()
        self._print_integrity(response)
        self._print_status(response)

    def _build_step_table(self, response: BuildBdsResponse) -> Table:
        table = Table(
            title=f"📊 {response.dataset} Build Summary",
            show_header=True,
            header_style="bold cyan",
            border_style="bright_blue",
            title_style="bold magenta",
        )
        table.add_column("#", justify="right", style="dim", no_wrap=True)
        table.add_column("Step", style="cyan", overflow="fold", ratio=3)
        table.add_column("Rows", justify="right", style="yellow", no_wrap=True)
        table.add_column("Added", style="white", overflow="fold", ratio=3)
        table.add_column("Status", justify="center", no_wrap=True)
        for number, step in enumerate(response.steps, start=1):
            table.add_row(
                str(number),
                step.title,
                f"{step.output_rows:,}",
                self._format_columns(step.added_columns),
                self._status(step),
            )
        table.add_section()
        table.add_row(
            "",
            "[bold]Total[/bold]",
            f"[bold yellow]{response.records:,}[/bold yellow]",
            "",
            "",
        )
        return table

    @staticmethod
    def _format_columns(columns: list[str]) -> str:
        if len(columns) <= MAX_LISTED_COLUMNS:
            return ", ".join(columns)
        shown = ", ".join(columns[:MAX_LISTED_COLUMNS])
        return f"{shown} (+{len(columns) - MAX_LISTED_COLUMNS})"

    @staticmethod
    def _status(step: StepResult) -> str:
        if step.errors:
            return "[red]✗[/red]"
        if not step.applied:
            return "[dim]skipped[/dim]"
        if step.warnings:
            return "[yellow]⚠[/yellow]"
        return "[green]✓[/green]"

    def _print_integrity(self, response: BuildBdsResponse) -> None:
        report = response.integrity
        if report is None:
            return
        if report.passed:
            self.console.print(
                f"[green]✓[/green] Integrity: {report.enriched_rows:,} rows "
                f"(source {report.source_rows:,}), {report.lookup_rows} parameters"
            )
            return
        for issue in report.issues:
            self.console.print(f"[red]✗[/red] Integrity {issue.check}: {issue.message}")

    def _print_status(self, response: BuildBdsResponse) -> None:
        if response.success:
            self.console.print(
                f"[bold green]✓ {response.dataset} built: "
                f"{response.records:,} records[/bold green]"
            )
        else:
            self.console.print(
                f"[bold red]✗ {response.dataset} failed: {response.error}[/bold red]"
            )
        for path in response.output_paths:
            self.console.print(f"  [dim]→[/dim] {path}")
