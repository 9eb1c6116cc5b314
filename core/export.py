from __future__ import annotations

import io
from urllib.parse import quote

import pandas as pd

from core.filters import filter_zone
from core.sheets import SheetTable


EXPORT_SHEET_NAME = "Courier_Performance"
XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def zone_export_frame(roster: SheetTable, zone: str) -> pd.DataFrame:
    frame = filter_zone(roster.frame, zone)
    return frame.reindex(columns=roster.headers)


def build_workbook(frame: pd.DataFrame, sheet_name: str = EXPORT_SHEET_NAME) -> bytes:
    buf = io.BytesIO()
    with pd.ExcelWriter(buf, engine="openpyxl") as writer:
        frame.to_excel(writer, sheet_name=sheet_name, index=False)
    return buf.getvalue()


def export_filename(zone: str) -> str:
    return f"{zone}_{EXPORT_SHEET_NAME}.xlsx"


def content_disposition(filename: str) -> str:
    try:
        filename.encode("latin-1")
    except UnicodeEncodeError:
        fallback = filename.encode("ascii", "ignore").decode("ascii") or "export.xlsx"
        return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename)}"
    return f"attachment; filename=\"{filename}\""
