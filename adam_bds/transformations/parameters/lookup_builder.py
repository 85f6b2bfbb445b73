"""Parameter lookup table construction.

Builds one row per distinct test code from the observation table:

- ``PARAMCD``: the test code
- ``PARAM``: test name with the standard unit in parentheses
- ``PARCAT1``: the test category
- ``PARAMN``: sequential number in test code order

A test code recorded with several names, units or categories is resolved
by counting: the most frequent combination wins, ties go to the first in
sort order.
"""

from __future__ import annotations

import pandas as pd

from ...pandas_utils import normalize_missing_strings

COUNT_COLUMN = "_RECORDS"


def parameter_label(test: object, unit: object) -> str | None:
    """Human-readable parameter label.

    Example:
        >>> parameter_label("Alanine Aminotransferase", "U/L")
        'Alanine Aminotransferase (U/L)'
        >>> parameter_label("pH", None)
        'pH'
    """
    if test is None or pd.isna(test) or not str(test).strip():
        return None
    if unit is None or pd.isna(unit) or not str(unit).strip():
        return str(test).strip()
    return f"{str(test).strip()} ({str(unit).strip()})"


def build_parameter_lookup(
    observations: pd.DataFrame, domain: str = "LB", unit_var: str | None = None
) -> pd.DataFrame:
    """Build the parameter lookup for a findings domain.

    Args:
        observations: SDTM findings records (LB, VS)
        domain: Domain prefix of the variables
        unit_var: Unit variable (default ``--STRESU``)

    Returns:
        DataFrame with columns ``--TESTCD``, ``PARAMCD``, ``PARAM``,
        ``PARCAT1``, ``PARAMN``, unique by ``--TESTCD``

    Raises:
        ValueError: If the test code or test name variable is missing
    """
    prefix = domain.upper()
    testcd_var = f"{prefix}TESTCD"
    test_var = f"{prefix}TEST"
    cat_var = f"{prefix}CAT"
    unit_var = unit_var or f"{prefix}STRESU"

    missing = [var for var in (testcd_var, test_var) if var not in observations.columns]
    if missing:
        raise ValueError(
            f"Cannot build parameter lookup, missing variables: {', '.join(missing)}"
        )

    frame = pd.DataFrame(index=observations.index)
    for var in (testcd_var, test_var, cat_var, unit_var):
        if var in observations.columns:
            frame[var] = normalize_missing_strings(observations[var])
        else:
            frame[var] = pd.Series(pd.NA, index=observations.index, dtype="string")
    frame = frame.dropna(subset=[testcd_var])

    group_vars = [testcd_var, test_var, cat_var, unit_var]
    counts = (
        frame.groupby(group_vars, dropna=False)
        .size()
        .reset_index(name=COUNT_COLUMN)
        .sort_values(
            [testcd_var, COUNT_COLUMN, test_var, unit_var],
            ascending=[True, False, True, True],
            kind="stable",
        )
    )
    lookup = counts.drop_duplicates(subset=[testcd_var], keep="first").reset_index(
        drop=True
    )

    result = pd.DataFrame(
        {
            testcd_var: lookup[testcd_var].astype("string"),
            "PARAMCD": lookup[testcd_var].astype("string"),
            "PARAM": pd.Series(
                [
                    parameter_label(test, unit)
                    for test, unit in zip(lookup[test_var], lookup[unit_var])
                ],
                dtype="string",
            ),
            "PARCAT1": lookup[cat_var].astype("string"),
            "PARAMN": pd.Series(range(1, len(lookup) + 1), dtype="Int64"),
        }
    )
    return result
