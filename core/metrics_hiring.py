from __future__ import annotations

from typing import Any, Dict

from core.charts import split_donut
from core.data import records, text_series
from core.filters import HIRING_RESPONSES_ZONE_COLUMN, filter_zone
from core.sheets import SheetTable


NEW_HIRES_TAB = "تعيينات الشهر"
HIRING_RESPONSES_TAB = "ردود التعيينات"

STATUS_COLUMN = "الحاله"
RECEIVED_STATUSES = {"استلم", "تم الاستلام", "Received"}


def count_new_hires(hires: SheetTable, zone: str) -> int:
    return int(len(filter_zone(hires.frame, zone)))


def compute_new_hires(hires: SheetTable, zone: str) -> Dict[str, Any]:
    riders = filter_zone(hires.frame, zone)
    total = int(len(riders))
    received = int(text_series(riders, STATUS_COLUMN).isin(RECEIVED_STATUSES).sum())
    stats = {
        "total": total,
        "received": received,
        "not_received": total - received,
        "received_pct": (received / total) if total else 0.0,
    }

    charts: Dict[str, Any] = {}
    if total:
        charts["received_split"] = split_donut(
            {"Received": received, "Not received": total - received},
            title="Received status",
        )

    return {
        "zone": zone,
        "stats": stats,
        "riders": records(riders),
        "headers": hires.headers,
        "charts": charts,
    }


def compute_hiring_responses(responses: SheetTable, zone: str) -> Dict[str, Any]:
    # This tab spells its zone header differently from the others.
    matches = filter_zone(responses.frame, zone, col=HIRING_RESPONSES_ZONE_COLUMN)
    return {"zone": zone, "responses": records(matches), "headers": responses.headers}
