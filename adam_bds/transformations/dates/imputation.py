"""Imputation of partial ISO 8601 date/time strings.

SDTM ``--DTC`` values may be partial (``2019-07``, ``2019``, ``2019---15``,
``2019-07-15T10``). ADaM analysis dates are numeric, so missing components
are imputed up to a configured level and the imputation is recorded in a
flag variable.

Imputation levels, lowest to highest: ``n`` (none), ``s``, ``m``, ``h``
(seconds, minutes, hours), ``D`` (day), ``M`` (month), ``Y`` (year).
Date flags: ``D`` (day imputed), ``M`` (month imputed).
Time flags: ``H`` (hour imputed), ``M`` (minute imputed), ``S`` (seconds
imputed).

A missing year is never imputed: there is no reference to impute it from,
so level ``Y`` behaves like ``M``.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
import re

import pandas as pd

from ...constants import ImputationLevels
from ...pandas_utils import is_missing_scalar

LEVEL_RANK = {"n": 0, "s": 1, "m": 2, "h": 3, "D": 4, "M": 5, "Y": 6}

DATE_PATTERN = re.compile(
    r"^(?P<year>\d{4})?(?:-(?P<month>\d{2}|-)?(?:-(?P<day>\d{2})?)?)?$"
)
TIME_PATTERN = re.compile(
    r"^(?P<hour>\d{2}|-)?(?::(?P<minute>\d{2}|-)?(?::(?P<second>\d{2})(?:\.\d+)?)?)?$"
)
COMPONENT_RANGES = {
    "month": (1, 12),
    "hour": (0, 23),
    "minute": (0, 59),
    "second": (0, 59),
}


@dataclass(frozen=True, slots=True)
class DtcComponents:
    year: int | None
    month: int | None
    day: int | None
    hour: int | None
    minute: int | None
    second: int | None

    @property
    def has_complete_date(self) -> bool:
        return None not in (self.year, self.month, self.day)


def _component(value: str | None) -> int | None:
    if value is None or value in ("", "-"):
        return None
    return int(value)


def parse_dtc(dtc: object) -> DtcComponents | None:
    """Split an ISO 8601 date/time string into its (possibly missing) parts.

    Returns None when the value is missing, not ISO 8601 shaped, or has a
    month or time component out of range.

    Example:
        >>> parse_dtc("2019-07")
        DtcComponents(year=2019, month=7, day=None, hour=None, minute=None, second=None)
    """
    if is_missing_scalar(dtc):
        return None
    text = str(dtc).strip()
    if not text:
        return None
    date_text, _, time_text = text.partition("T")
    date_match = DATE_PATTERN.match(date_text)
    time_match = TIME_PATTERN.match(time_text)
    if date_match is None or time_match is None:
        return None
    parts = DtcComponents(
        year=_component(date_match.group("year")),
        month=_component(date_match.group("month")),
        day=_component(date_match.group("day")),
        hour=_component(time_match.group("hour")),
        minute=_component(time_match.group("minute")),
        second=_component(time_match.group("second")),
    )
    for name, (low, high) in COMPONENT_RANGES.items():
        value = getattr(parts, name)
        if value is not None and not low <= value <= high:
            return None
    return parts


def _impute_date_parts(
    parts: DtcComponents, highest_imputation: str, date_imputation: str
) -> tuple[pd.Timestamp | None, str | None]:
    if parts.year is None:
        return None, None

    rank = LEVEL_RANK[highest_imputation]
    month, day, flag = parts.month, parts.day, None

    if month is None:
        if rank < LEVEL_RANK["M"]:
            return None, None
        month = {"first": 1, "mid": 6, "last": 12}[date_imputation]
        if day is None:
            day = {"first": 1, "mid": 30, "last": 31}[date_imputation]
        flag = "M"
    elif day is None:
        if rank < LEVEL_RANK["D"]:
            return None, None
        last_day = calendar.monthrange(parts.year, month)[1]
        day = {"first": 1, "mid": 15, "last": last_day}[date_imputation]
        flag = "D"

    try:
        return pd.Timestamp(year=parts.year, month=month, day=day), flag
    except ValueError:
        return None, None


def impute_date(
    dtc: object,
    highest_imputation: str = "n",
    date_imputation: str = "first",
) -> tuple[pd.Timestamp | None, str | None]:
    """Convert a (partial) ``--DTC`` value to a date plus imputation flag.

    Args:
        dtc: ISO 8601 date or date/time string
        highest_imputation: Highest component that may be imputed (n, D, M, Y)
        date_imputation: ``first``, ``mid`` or ``last``

    Returns:
        ``(date, flag)``; ``(None, None)`` when the value cannot be converted

    Example:
        >>> impute_date("2019-07", highest_imputation="M")
        (Timestamp('2019-07-01 00:00:00'), 'D')
        >>> impute_date("2019", highest_imputation="M", date_imputation="last")
        (Timestamp('2019-12-31 00:00:00'), 'M')
    """
    if highest_imputation not in ImputationLevels.DATE:
        raise ValueError(
            f"highest_imputation must be one of {ImputationLevels.DATE}, "
            f"got {highest_imputation!r}"
        )
    if date_imputation not in ImputationLevels.DATE_MODES:
        raise ValueError(
            f"date_imputation must be one of {ImputationLevels.DATE_MODES}, "
            f"got {date_imputation!r}"
        )
    parts = parse_dtc(dtc)
    if parts is None:
        return None, None
    return _impute_date_parts(parts, highest_imputation, date_imputation)


def impute_datetime(
    dtc: object,
    highest_imputation: str = "h",
    date_imputation: str = "first",
    time_imputation: str = "first",
    *,
    ignore_seconds_flag: bool = False,
) -> tuple[pd.Timestamp | None, str | None, str | None]:
    """Convert a (partial) ``--DTC`` value to a datetime plus imputation flags.

    Date components are imputed only when ``highest_imputation`` is ``D`` or
    higher; time components when it is at least the missing component's
    level.

    Returns:
        ``(datetime, date_flag, time_flag)``

    Example:
        >>> impute_datetime("2019-07-15T10")
        (Timestamp('2019-07-15 10:00:00'), None, 'M')
        >>> impute_datetime("2019-07-15", time_imputation="last")
        (Timestamp('2019-07-15 23:59:59'), None, 'H')
    """
    if highest_imputation not in ImputationLevels.TIME:
        raise ValueError(
            f"highest_imputation must be one of {ImputationLevels.TIME}, "
            f"got {highest_imputation!r}"
        )
    if date_imputation not in ImputationLevels.DATE_MODES:
        raise ValueError(
            f"date_imputation must be one of {ImputationLevels.DATE_MODES}, "
            f"got {date_imputation!r}"
        )
    if time_imputation not in ImputationLevels.TIME_MODES:
        raise ValueError(
            f"time_imputation must be one of {ImputationLevels.TIME_MODES}, "
            f"got {time_imputation!r}"
        )
    parts = parse_dtc(dtc)
    if parts is None:
        return None, None, None

    rank = LEVEL_RANK[highest_imputation]
    if parts.has_complete_date:
        date_level = "n"
    elif rank >= LEVEL_RANK["D"]:
        date_level = highest_imputation
    else:
        return None, None, None
    date, date_flag = _impute_date_parts(parts, date_level, date_imputation)
    if date is None:
        return None, None, None

    fill = 0 if time_imputation == "first" else None
    hour, minute, second = parts.hour, parts.minute, parts.second
    time_flag: str | None = None
    if hour is None:
        needed = "h"
        time_flag = "H"
    elif minute is None:
        needed = "m"
        time_flag = "M"
    elif second is None:
        needed = "s"
        time_flag = None if ignore_seconds_flag else "S"
    else:
        needed = "n"
    # A date-level imputation implies the whole time part is imputed too.
    if date_flag is not None:
        needed = "h"
        time_flag = "H"
    if LEVEL_RANK[needed] > rank:
        return None, None, None

    if date_flag is not None or hour is None:
        hour = minute = second = None
    elif minute is None:
        second = None

    hour = hour if hour is not None else (fill if fill is not None else 23)
    minute = minute if minute is not None else (fill if fill is not None else 59)
    second = second if second is not None else (fill if fill is not None else 59)
    return date.replace(hour=hour, minute=minute, second=second), date_flag, time_flag


def impute_dates(
    values: pd.Series, highest_imputation: str = "n", date_imputation: str = "first"
) -> tuple[pd.Series, pd.Series]:
    """Vectorised ``impute_date`` returning ``(dates, flags)`` series."""
    pairs = [impute_date(v, highest_imputation, date_imputation) for v in values]
    dates = pd.to_datetime(
        pd.Series([d for d, _ in pairs], index=values.index, dtype="object"),
        errors="coerce",
    )
    flags = pd.Series([f for _, f in pairs], index=values.index, dtype="string")
    return dates, flags


def impute_datetimes(
    values: pd.Series,
    highest_imputation: str = "h",
    date_imputation: str = "first",
    time_imputation: str = "first",
    *,
    ignore_seconds_flag: bool = False,
) -> tuple[pd.Series, pd.Series, pd.Series]:
    """Vectorised ``impute_datetime`` returning ``(datetimes, date_flags, time_flags)``."""
    triples = [
        impute_datetime(
            v,
            highest_imputation,
            date_imputation,
            time_imputation,
            ignore_seconds_flag=ignore_seconds_flag,
        )
        for v in values
    ]
    datetimes = pd.to_datetime(
        pd.Series([t[0] for t in triples], index=values.index, dtype="object"),
        errors="coerce",
    )
    date_flags = pd.Series([t[1] for t in triples], index=values.index, dtype="string")
    time_flags = pd.Series([t[2] for t in triples], index=values.index, dtype="string")
    return datetimes, date_flags, time_flags
