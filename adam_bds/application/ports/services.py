from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence


@runtime_checkable
class LoggerPort(Protocol):
    def info(self, message: str) -> None: ...

    def success(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def debug(self, message: str) -> None: ...

    def verbose(self, message: str) -> None: ...

    def log_build_start(self, dataset: str, domain: str, source: str) -> None: ...

    def log_dataset_loaded(
        self, name: str, row_count: int, column_count: int | None = None
    ) -> None: ...

    def log_step_complete(
        self,
        title: str,
        input_rows: int,
        output_rows: int,
        added_columns: Sequence[str],
    ) -> None: ...

    def log_build_complete(
        self, dataset: str, final_row_count: int, final_column_count: int
    ) -> None: ...

    def log_final_stats(self) -> None: ...
