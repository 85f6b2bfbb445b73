from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum
from typing import TYPE_CHECKING, override

from rich.console import Console
from rich.markup import escape

from ...application.ports.services import LoggerPort

if TYPE_CHECKING:
    from collections.abc import Sequence


class LogLevel(IntEnum):
    NORMAL = 0
    VERBOSE = 1
    DEBUG = 2


@dataclass(slots=True)
class LogContext:
    dataset: str = ""
    domain: str = ""
    step: str = ""
    start_time: datetime = field(default_factory=datetime.now)

    def elapsed_ms(self) -> float:
        return (datetime.now() - self.start_time).total_seconds() * 1000


STATS_LINES = (
    ("datasets_loaded", "Datasets loaded", "dim", True),
    ("steps_completed", "Steps completed", "dim", True),
    ("records_processed", "Total records", "dim", True),
    ("warnings", "Warnings", "dim yellow", False),
    ("errors", "Errors", "dim red", False),
)


def _empty_stats() -> dict[str, int]:
    return {key: 0 for key, *_ in STATS_LINES}


class ConsoleLogger(LoggerPort):
    """Rich console logger with NORMAL, VERBOSE and DEBUG verbosity."""

    def __init__(self, console: Console | None = None, verbosity: int = 0) -> None:
        super().__init__()
        self.console = console or Console()
        self.verbosity = verbosity
        self._context: LogContext | None = None
        self._stats = _empty_stats()

    def set_context(self, **kwargs: str) -> None:
        if self._context is None:
            self._context = LogContext()
        for key, value in kwargs.items():
            if hasattr(self._context, key):
                setattr(self._context, key, value)

    def clear_context(self) -> None:
        self._context = None

    @override
    def info(self, message: str, *, level: int = LogLevel.NORMAL) -> None:
        if self.verbosity >= level:
            prefix = self._get_prefix()
            self.console.print(f"{prefix}{message}")

    @override
    def verbose(self, message: str) -> None:
        if self.verbosity >= LogLevel.VERBOSE:
            prefix = self._get_prefix()
            self.console.print(f"[dim]{prefix}{message}[/dim]")

    @override
    def debug(self, message: str) -> None:
        if self.verbosity >= LogLevel.DEBUG:
            prefix = self._get_prefix()
            self.console.print(f"[dim cyan]{prefix}{message}[/dim cyan]")

    @override
    def success(self, message: str) -> None:
        self.console.print(f"[green]✓[/green] {message}")

    @override
    def warning(self, message: str) -> None:
        self._stats["warnings"] += 1
        self.console.print(f"[yellow]⚠[/yellow] {message}")

    @override
    def error(self, message: str) -> None:
        self._stats["errors"] += 1
        self.console.print(f"[red]✗[/red] {message}")

    @override
    def log_build_start(self, dataset: str, domain: str, source: str) -> None:
        self._context = LogContext(dataset=dataset, domain=domain)
        self.console.print()
        header = f"[bold]Building {dataset}[/bold]"
        if self.verbosity >= LogLevel.VERBOSE:
            header += f" [dim](from {domain}, {source})[/dim]"
        self.console.print(header)

    @override
    def log_dataset_loaded(
        self, name: str, row_count: int, column_count: int | None = None
    ) -> None:
        self._stats["datasets_loaded"] += 1
        msg = f"  Loaded {row_count:,} rows from {name}"
        if column_count is not None and self.verbosity >= LogLevel.DEBUG:
            msg += f" ({column_count} columns)"
        self.verbose(msg)

    @override
    def log_step_complete(
        self,
        title: str,
        input_rows: int,
        output_rows: int,
        added_columns: Sequence[str],
    ) -> None:
        self.set_context(step=title)
        self._stats["steps_completed"] += 1
        msg = f"  {title}: {input_rows:,} → {output_rows:,} rows"
        if added_columns:
            msg += f" (+{', '.join(added_columns)})"
        self.verbose(msg)
        if input_rows != output_rows:
            self.debug(f"    Row count changed by {output_rows - input_rows:+,}")

    @override
    def log_build_complete(
        self, dataset: str, final_row_count: int, final_column_count: int
    ) -> None:
        self._stats["records_processed"] += final_row_count
        msg = f"Final {dataset} dataset: {final_row_count:,} rows x {final_column_count} columns"
        if self._context is not None:
            msg += f" in {self._context.elapsed_ms():,.0f} ms"
        self.verbose(msg)
        self.clear_context()

    @override
    def log_final_stats(self) -> None:
        if self.verbosity < LogLevel.VERBOSE:
            return
        self.console.print()
        self.console.print("[dim]Processing Statistics:[/dim]")
        for key, label, style, always in STATS_LINES:
            count = self._stats[key]
            if always or count:
                self.console.print(f"[{style}]  {label}: {count:,}[/{style}]")

    def get_stats(self) -> dict[str, int]:
        return self._stats.copy()

    def _get_prefix(self) -> str:
        if self._context is None or self.verbosity < LogLevel.DEBUG:
            return ""
        parts = [p for p in (self._context.dataset, self._context.step) if p]
        return escape(f"[{':'.join(parts)}] ") if parts else ""
