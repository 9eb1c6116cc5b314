from __future__ import annotations

import numbers
import re
from typing import Any, Dict, Iterable, List, Mapping, Union

import pandas as pd


# Cell values the sheet uses for "no number here".
NA_TOKENS = {"NA", "#N/A", "N/A", "0"}

_NON_NUMERIC = re.compile(r"[^0-9.\-]")
_LEADING_FLOAT = re.compile(r"-?(?:\d+(?:\.\d*)?|\.\d+)")
# Exponent form, as produced by str(float) for very small or very large values.
_EXPONENT_FLOAT = re.compile(r"-?(?:\d+(?:\.\d*)?|\.\d+)[eE][+-]?\d+")


def drop_duplicate_columns(df: pd.DataFrame) -> pd.DataFrame:
    return df.loc[:, ~df.columns.duplicated()]


def column_as_series(df: pd.DataFrame, col: str) -> pd.Series:
    if col not in df.columns:
        return pd.Series(dtype=object)
    val = df[col]
    if isinstance(val, pd.DataFrame):
        return val.iloc[:, 0]
    return val


def text_series(df: pd.DataFrame, col: str) -> pd.Series:
    """Column as strings aligned to `df`; a missing column reads as all blanks."""
    if col not in df.columns:
        return pd.Series("", index=df.index, dtype=object)
    return column_as_series(df, col).fillna("").astype(str)


def clean_numeric(value: object) -> float:
    """Coerce a sheet cell to a number.

    Blank cells and the NA tokens count as 0. Text is stripped of thousands
    separators and any character that cannot be part of a number, then the
    longest leading number is parsed ("12.5kg" -> 12.5, "12-5" -> 12).
    Anything unparseable is 0.
    """
    if value is None:
        return 0.0
    if isinstance(value, numbers.Real) and not isinstance(value, bool):
        return 0.0 if pd.isna(value) else float(value)
    s = str(value).strip()
    if not s or s in NA_TOKENS:
        return 0.0
    if _EXPONENT_FLOAT.fullmatch(s):
        return float(s)
    s = _NON_NUMERIC.sub("", s.replace(",", ""))
    match = _LEADING_FLOAT.match(s)
    if not match:
        return 0.0
    return float(match.group(0))


def numeric_series(df: pd.DataFrame, col: str) -> pd.Series:
    if col not in df.columns:
        return pd.Series(0.0, index=df.index, dtype=float)
    return column_as_series(df, col).map(clean_numeric).astype(float)


def _is_blank_cell(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and pd.isna(value):
        return True
    s = str(value).strip()
    return s == "" or s == "0"


def forward_fill_column(rows: Union[pd.DataFrame, Iterable[Mapping[str, Any]]], column: str) -> pd.DataFrame:
    """Carry the last non-blank value of `column` down over blank cells.

    Sheets exported with merged date cells only carry the date on the first
    row of each block. Single pass, top to bottom; "0" counts as blank and the
    carried value starts as "".
    """
    frame = rows.copy() if isinstance(rows, pd.DataFrame) else pd.DataFrame(list(rows))
    if column not in frame.columns:
        return frame

    last_seen: Any = ""
    filled: List[Any] = []
    for value in column_as_series(frame, column).tolist():
        if _is_blank_cell(value):
            filled.append(last_seen)
        else:
            last_seen = value
            filled.append(value)
    frame[column] = filled
    return frame


def records(df: pd.DataFrame) -> List[Dict[str, Any]]:
    if df.empty:
        return []
    return df.fillna("").to_dict(orient="records")
