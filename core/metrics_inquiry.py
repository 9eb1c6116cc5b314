from __future__ import annotations

from typing import Any, Dict, List

from core.data import records, text_series
from core.filters import PREP_OFFICE_COLUMN, distinct_values, filter_equals
from core.sheets import SheetTable


UPLOADED_INQUIRY_TAB = "مرفوعين استعلام"
REJECTED_INQUIRY_TAB = "مرفوضين استعلام"

REJECTED_FIELDS = {
    "date": "التاريخ",
    "office": "مكتب",
    "prep_office": PREP_OFFICE_COLUMN,
    "name": "الاسم",
    "phone": "رقم الهاتف",
    "national_id": "الرقم القومي",
    "supervisor": "اسم المشرف",
    "reason": "سبب الرفض",
}


def compute_prep_offices(uploaded: SheetTable, zone: str, *, error: bool = False) -> Dict[str, Any]:
    return {"zone": zone, "locations": distinct_values(uploaded.frame, PREP_OFFICE_COLUMN), "error": error}


def compute_office_inquiries(uploaded: SheetTable, zone: str, location: str) -> Dict[str, Any]:
    matches = filter_equals(uploaded.frame, PREP_OFFICE_COLUMN, location, strip=True)
    return {
        "zone": zone,
        "location": location,
        "data": records(matches),
        "headers": uploaded.headers,
    }


def compute_rejected_inquiries(rejected: SheetTable, zone: str) -> Dict[str, Any]:
    # Not zone-filtered: the rejection list is shared across all zones.
    df = rejected.frame
    projected = {key: text_series(df, col).tolist() for key, col in REJECTED_FIELDS.items()}
    data: List[Dict[str, str]] = [
        {key: projected[key][i] for key in REJECTED_FIELDS} for i in range(len(df))
    ]
    return {"zone": zone, "data": data}
