from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
import os
from pathlib import Path
import tomllib
from typing import cast
import warnings

from .constants import Defaults, ImputationLevels


@dataclass(frozen=True, slots=True)
class BdsConfig:
    data_dir: Path | None = None
    output_dir: Path = field(default_factory=lambda: Path("output"))
    preview_rows: int = Defaults.PREVIEW_ROWS
    date_imputation: str = Defaults.DATE_IMPUTATION
    highest_date_imputation: str = Defaults.HIGHEST_DATE_IMPUTATION
    time_imputation: str = Defaults.TIME_IMPUTATION
    highest_time_imputation: str = Defaults.HIGHEST_TIME_IMPUTATION
    ontrt_window_days: int = Defaults.ONTRT_WINDOW_DAYS

    def __post_init__(self) -> None:
        if self.preview_rows < 1:
            raise ValueError(f"preview_rows must be positive, got {self.preview_rows}")
        if self.ontrt_window_days < 0:
            raise ValueError(
                f"ontrt_window_days must not be negative, got {self.ontrt_window_days}"
            )
        if self.date_imputation not in ImputationLevels.DATE_MODES:
            raise ValueError(
                f"date_imputation must be one of {ImputationLevels.DATE_MODES}, "
                f"got {self.date_imputation!r}"
            )
        if self.time_imputation not in ImputationLevels.TIME_MODES:
            raise ValueError(
                f"time_imputation must be one of {ImputationLevels.TIME_MODES}, "
                f"got {self.time_imputation!r}"
            )
        if self.highest_date_imputation not in ImputationLevels.DATE:
            raise ValueError(
                f"highest_date_imputation must be one of {ImputationLevels.DATE}, "
                f"got {self.highest_date_imputation!r}"
            )
        if self.highest_time_imputation not in ImputationLevels.TIME:
            raise ValueError(
                f"highest_time_imputation must be one of {ImputationLevels.TIME}, "
                f"got {self.highest_time_imputation!r}"
            )

    @classmethod
    def from_env(cls) -> BdsConfig:
        raw_data_dir = os.getenv("ADAM_BDS_DATA_DIR")
        data_dir = Path(raw_data_dir.strip()) if raw_data_dir else None
        return cls(
            data_dir=data_dir,
            output_dir=Path(os.getenv("ADAM_BDS_OUTPUT_DIR", "output")),
            preview_rows=int(
                os.getenv("ADAM_BDS_PREVIEW_ROWS", str(Defaults.PREVIEW_ROWS))
            ),
            date_imputation=os.getenv(
                "ADAM_BDS_DATE_IMPUTATION", Defaults.DATE_IMPUTATION
            ),
            highest_date_imputation=os.getenv(
                "ADAM_BDS_HIGHEST_DATE_IMPUTATION", Defaults.HIGHEST_DATE_IMPUTATION
            ),
            time_imputation=os.getenv(
                "ADAM_BDS_TIME_IMPUTATION", Defaults.TIME_IMPUTATION
            ),
            highest_time_imputation=os.getenv(
                "ADAM_BDS_HIGHEST_TIME_IMPUTATION", Defaults.HIGHEST_TIME_IMPUTATION
            ),
            ontrt_window_days=int(
                os.getenv(
                    "ADAM_BDS_ONTRT_WINDOW_DAYS", str(Defaults.ONTRT_WINDOW_DAYS)
                )
            ),
        )


class ConfigLoader:

    @staticmethod
    def load(config_file: Path | None = None) -> BdsConfig:
        config = BdsConfig.from_env()
        if config_file is None:
            config_file = Path("adam_bds.toml")
        if config_file.exists():
            try:
                config = ConfigLoader._load_from_toml(config_file, config)
            except Exception as e:
                warnings.warn(
                    f"Failed to load config from {config_file}: {e}", stacklevel=2
                )
        return config

    @staticmethod
    def _load_from_toml(config_file: Path, base_config: BdsConfig) -> BdsConfig:
        with config_file.open("rb") as handle:
            data = tomllib.load(handle)
        paths = _get_table(data, "paths")
        derivation = _get_table(data, "derivation")
        report = _get_table(data, "report")
        data_dir = base_config.data_dir
        if value := paths.get("data_dir"):
            data_dir = Path(str(value))
        output_dir = base_config.output_dir
        if value := paths.get("output_dir"):
            output_dir = Path(str(value))
        preview_rows = base_config.preview_rows
        if (value := report.get("preview_rows")) is not None:
            preview_rows = _coerce_int(value, key="report.preview_rows")
        ontrt_window_days = base_config.ontrt_window_days
        if (value := derivation.get("ontrt_window_days")) is not None:
            ontrt_window_days = _coerce_int(value, key="derivation.ontrt_window_days")
        return BdsConfig(
            data_dir=data_dir,
            output_dir=output_dir,
            preview_rows=preview_rows,
            date_imputation=str(
                derivation.get("date_imputation", base_config.date_imputation)
            ),
            highest_date_imputation=str(
                derivation.get(
                    "highest_date_imputation", base_config.highest_date_imputation
                )
            ),
            time_imputation=str(
                derivation.get("time_imputation", base_config.time_imputation)
            ),
            highest_time_imputation=str(
                derivation.get(
                    "highest_time_imputation", base_config.highest_time_imputation
                )
            ),
            ontrt_window_days=ontrt_window_days,
        )


def _get_table(data: Mapping[str, object], key: str) -> Mapping[str, object]:
    value = data.get(key)
    if isinstance(value, Mapping):
        return cast("Mapping[str, object]", value)
    return {}


def _coerce_int(value: object, *, key: str) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{key} must be an int, got bool")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    if isinstance(value, str):
        return int(value)
    raise ValueError(f"{key} must be int-like or string, got {type(value).__name__}")
