from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from ..config import BdsConfig
from ..constants import Defaults

if TYPE_CHECKING:
    import pandas as pd

    from ..validators.integrity import IntegrityReport


def _default_output_formats() -> set[str]:
    return {Defaults.OUTPUT_FORMAT}


def _empty_str_list() -> list[str]:
    return []


def _empty_step_results() -> list[StepResult]:
    return []


@dataclass(slots=True)
class StepResult:
    key: str
    title: str
    narrative: str
    code: str
    applied: bool = True
    message: str = ""
    input_rows: int = 0
    output_rows: int = 0
    added_columns: list[str] = field(default_factory=_empty_str_list)
    warnings: list[str] = field(default_factory=_empty_str_list)
    errors: list[str] = field(default_factory=_empty_str_list)
    preview: pd.DataFrame | None = None

    @property
    def success(self) -> bool:
        return len(self.errors) == 0


@dataclass(slots=True)
class BuildBdsRequest:
    domain: str = Defaults.DOMAIN
    data_dir: Path | None = None
    output_dir: Path = Path("output")
    output_formats: set[str] = field(default_factory=_default_output_formats)
    config: BdsConfig = field(default_factory=BdsConfig)
    fail_safe: bool = False
    verbose: int = 0


@dataclass(slots=True)
class BuildBdsResponse:
    success: bool = True
    dataset: str = ""
    domain: str = ""
    data: pd.DataFrame | None = None
    lookup: pd.DataFrame | None = None
    steps: list[StepResult] = field(default_factory=_empty_step_results)
    integrity: IntegrityReport | None = None
    html_path: Path | None = None
    xpt_path: Path | None = None
    csv_path: Path | None = None
    error: str | None = None
    warnings: list[str] = field(default_factory=_empty_str_list)

    @property
    def records(self) -> int:
        return 0 if self.data is None else len(self.data)

    @property
    def output_paths(self) -> list[Path]:
        return [p for p in (self.html_path, self.xpt_path, self.csv_path) if p]

    @property
    def failed_steps(self) -> list[str]:
        return [step.title for step in self.steps if not step.success]
