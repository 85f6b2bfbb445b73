from __future__ import annotations

from typing import TYPE_CHECKING, override

from ...application.ports.services import LoggerPort

if TYPE_CHECKING:
    from collections.abc import Sequence


class NullLogger(LoggerPort):
    @override
    def info(self, message: str) -> None:
        return

    @override
    def success(self, message: str) -> None:
        return

    @override
    def warning(self, message: str) -> None:
        return

    @override
    def error(self, message: str) -> None:
        return

    @override
    def debug(self, message: str) -> None:
        return

    @override
    def verbose(self, message: str) -> None:
        return

    @override
    def log_build_start(self, dataset: str, domain: str, source: str) -> None:
        return None

    @override
    def log_dataset_loaded(
        self, name: str, row_count: int, column_count: int | None = None
    ) -> None:
        return None

    @override
    def log_step_complete(
        self,
        title: str,
        input_rows: int,
        output_rows: int,
        added_columns: Sequence[str],
    ) -> None:
        return None

    @override
    def log_build_complete(
        self, dataset: str, final_row_count: int, final_column_count: int
    ) -> None:
        return None

    @override
    def log_final_stats(self) -> None:
        return None
