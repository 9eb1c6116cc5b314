from __future__ import annotations

from typing import Any, Dict, Optional

import pandas as pd

from core.charts import split_donut
from core.data import numeric_series, records
from core.filters import ZONE_COLUMN, distinct_values, filter_zone
from core.sheets import SheetTable


ROSTER_TAB = 0
TARGETS_TAB = "التارجت"
ORDER_RESPONSES_TAB = "ردود الأوردات"

SHIFTS_COLUMN = "شيفتات الغد"
WALLET_COLUMN = "المحفظه"
HIGH_WALLET_THRESHOLD = 1000.0


def compute_zone_list(roster: SheetTable) -> Dict[str, Any]:
    return {"zones": distinct_values(roster.frame, ZONE_COLUMN), "error": None}


def compute_rider_stats(riders: pd.DataFrame) -> Dict[str, int]:
    shifts = numeric_series(riders, SHIFTS_COLUMN)
    wallet = numeric_series(riders, WALLET_COLUMN)
    return {
        "total": int(len(riders)),
        "with_shifts": int((shifts > 0).sum()),
        "no_shifts": int((shifts == 0).sum()),
        "high_wallet": int((wallet > HIGH_WALLET_THRESHOLD).sum()),
    }


def compute_dashboard(roster: SheetTable, zone: str, *, new_count: int = 0) -> Dict[str, Any]:
    riders = filter_zone(roster.frame, zone)
    stats = compute_rider_stats(riders)
    stats["new_count"] = int(new_count)

    charts: Dict[str, Any] = {}
    if stats["total"]:
        charts["shifts_split"] = split_donut(
            {"With shifts": stats["with_shifts"], "No shifts": stats["no_shifts"]},
            title="Tomorrow's shifts",
        )

    return {
        "zone": zone,
        "stats": stats,
        "riders": records(riders),
        "headers": roster.headers,
        "charts": charts,
    }


def compute_targets(targets: SheetTable, zone: str, roster: Optional[SheetTable] = None) -> Dict[str, Any]:
    """The zone's target row (one expected) plus roster stats when available."""
    matches = filter_zone(targets.frame, zone)
    target = records(matches.head(1))
    payload: Dict[str, Any] = {
        "zone": zone,
        "target": target[0] if target else None,
        "headers": targets.headers,
        "stats": None,
    }
    if roster is not None:
        payload["stats"] = compute_rider_stats(filter_zone(roster.frame, zone))
    return payload


def compute_order_responses(responses: SheetTable, zone: str) -> Dict[str, Any]:
    return {
        "zone": zone,
        "orders": records(filter_zone(responses.frame, zone)),
        "headers": responses.headers,
    }
