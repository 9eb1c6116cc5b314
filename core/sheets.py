"""Read-only access to the zone spreadsheet on Google Sheets.

Credentials come from the GOOGLE_CREDS environment variable (service account
JSON) or, failing that, a local credentials file. A new client is authorized
for every request; there is no connection pool.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Union

import gspread
import pandas as pd
import requests
from google.auth.exceptions import GoogleAuthError
from google.oauth2.service_account import Credentials

from core.config import AppConfig
from core.data import drop_duplicate_columns
from core.errors import FetchError, SheetConnectionError, TabNotFoundError


logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/spreadsheets.readonly"]

TabRef = Union[int, str]


@dataclass(frozen=True)
class SheetTable:
    title: str
    headers: List[str] = field(default_factory=list)
    frame: pd.DataFrame = field(default_factory=pd.DataFrame)


def table_from_values(title: str, values: List[List[Any]]) -> SheetTable:
    """Build a SheetTable from a header row followed by data rows."""
    if not values:
        return SheetTable(title=title)
    header_row = [str(h).strip() for h in values[0]]
    width = len(header_row)
    rows = []
    for raw in values[1:]:
        cells = ["" if v is None else str(v) for v in raw[:width]]
        cells += [""] * (width - len(cells))
        if any(c.strip() for c in cells):
            rows.append(cells)

    df = pd.DataFrame(rows, columns=header_row, dtype=object)
    df = df.loc[:, [bool(h) for h in header_row]]
    df = drop_duplicate_columns(df)
    return SheetTable(title=title, headers=[str(c) for c in df.columns], frame=df)


def load_service_account_info(cfg: AppConfig) -> Dict[str, Any]:
    if cfg.google_creds:
        try:
            info = json.loads(cfg.google_creds)
        except json.JSONDecodeError as exc:
            raise SheetConnectionError(f"GOOGLE_CREDS is not valid JSON: {exc}") from exc
    else:
        if not os.path.exists(cfg.credentials_file):
            raise SheetConnectionError(f"No GOOGLE_CREDS set and {cfg.credentials_file} does not exist")
        try:
            with open(cfg.credentials_file, "r", encoding="utf-8") as f:
                info = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            raise SheetConnectionError(f"Could not read {cfg.credentials_file}: {exc}") from exc

    if not isinstance(info, dict) or "client_email" not in info or "private_key" not in info:
        raise SheetConnectionError("Service account info is missing client_email or private_key")
    info = dict(info)
    info["private_key"] = str(info["private_key"]).replace("\\n", "\n")
    return info


class SheetGateway:
    def __init__(self, cfg: AppConfig) -> None:
        self.cfg = cfg

    def connect(self) -> gspread.Spreadsheet:
        info = load_service_account_info(self.cfg)
        try:
            creds = Credentials.from_service_account_info(info, scopes=SCOPES)
            client = gspread.authorize(creds)
            client.set_timeout(self.cfg.sheets_timeout)
            doc = client.open_by_key(self.cfg.spreadsheet_id)
        except (GoogleAuthError, gspread.exceptions.GSpreadException, requests.exceptions.RequestException, ValueError) as exc:
            logger.exception("Spreadsheet connection failed")
            raise SheetConnectionError(f"{type(exc).__name__}: {exc}") from exc
        logger.debug("Opened spreadsheet %s", self.cfg.spreadsheet_id)
        return doc

    def get_tab(self, doc: gspread.Spreadsheet, ref: TabRef) -> gspread.Worksheet:
        try:
            if isinstance(ref, int):
                tab = doc.get_worksheet(ref)
            else:
                tab = doc.worksheet(ref)
        except gspread.exceptions.WorksheetNotFound as exc:
            raise TabNotFoundError(f"Tab {ref!r} not found") from exc
        except (gspread.exceptions.APIError, requests.exceptions.RequestException) as exc:
            logger.exception("Resolving tab %r failed", ref)
            raise FetchError(f"{type(exc).__name__}: {exc}") from exc
        if tab is None:
            raise TabNotFoundError(f"Tab {ref!r} not found")
        return tab

    def get_rows(self, tab: gspread.Worksheet) -> SheetTable:
        logger.debug("Fetching rows from tab %r", tab.title)
        try:
            values = tab.get_all_values()
        except (gspread.exceptions.APIError, requests.exceptions.RequestException) as exc:
            logger.exception("Fetching tab %r failed", tab.title)
            raise FetchError(f"{type(exc).__name__}: {exc}") from exc
        return table_from_values(tab.title, values)

    def read(self, doc: gspread.Spreadsheet, ref: TabRef) -> SheetTable:
        return self.get_rows(self.get_tab(doc, ref))
