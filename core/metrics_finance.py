from __future__ import annotations

from typing import Any, Dict

from core.data import forward_fill_column, records
from core.sheets import SheetTable


WALLETS_TAB = "جميع المحافظ"
RECONCILIATIONS_TAB = "تصالحات"

WALLET_DATE_COLUMN = "Date"
RECONCILIATION_DATE_COLUMN = "التاريخ"


def compute_office_wallets(wallets: SheetTable, zone: str) -> Dict[str, Any]:
    filled = forward_fill_column(wallets.frame, WALLET_DATE_COLUMN)
    return {"zone": zone, "wallets": records(filled), "headers": wallets.headers}


def compute_reconciliations(reconciliations: SheetTable, zone: str) -> Dict[str, Any]:
    filled = forward_fill_column(reconciliations.frame, RECONCILIATION_DATE_COLUMN)
    return {"zone": zone, "data": records(filled), "headers": reconciliations.headers}
