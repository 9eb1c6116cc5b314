from __future__ import annotations

from typing import List

import pandas as pd

from core.data import text_series


ZONE_COLUMN = "zone_name"
HIRING_RESPONSES_ZONE_COLUMN = "Zone Name"
PREP_OFFICE_COLUMN = "مقر التحضير"


def filter_equals(df: pd.DataFrame, col: str, value: str, *, strip: bool = False) -> pd.DataFrame:
    """Rows whose `col` equals `value`. A frame without `col` yields no rows."""
    if df.empty or col not in df.columns:
        return df.iloc[0:0]
    series = text_series(df, col)
    if strip:
        series = series.str.strip()
        value = (value or "").strip()
    return df[series == value].reset_index(drop=True)


def filter_zone(df: pd.DataFrame, zone: str, *, col: str = ZONE_COLUMN) -> pd.DataFrame:
    return filter_equals(df, col, zone)


def distinct_values(df: pd.DataFrame, col: str) -> List[str]:
    """Distinct non-blank values of `col` in first-seen order."""
    if df.empty or col not in df.columns:
        return []
    series = text_series(df, col)
    series = series[series.str.strip() != ""]
    return [str(v) for v in series.drop_duplicates().tolist()]
