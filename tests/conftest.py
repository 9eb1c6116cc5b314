from __future__ import annotations

from dataclasses import replace
from types import MappingProxyType
from typing import Any, Dict, List

import pytest
from fastapi.testclient import TestClient

from api.main import app, get_credential_tables, get_gateway, get_session_store
from core.config import AppConfig
from core.credentials import CredentialTables
from core.errors import TabNotFoundError
from core.sessions import SessionStore
from core.sheets import table_from_values


BASE_CONFIG = AppConfig(
    spreadsheet_id="sheet-123",
    google_creds=None,
    credentials_file="missing-credentials.json",
    sheets_timeout=5.0,
    session_secret="test-secret",
    session_max_age=60,
    session_https_only=False,
    host="127.0.0.1",
    port=8080,
    log_level="DEBUG",
)


def make_config(**overrides: Any) -> AppConfig:
    return replace(BASE_CONFIG, **overrides)


TABS: Dict[Any, List[List[str]]] = {
    0: [
        ["zone_name", "rider", "شيفتات الغد", "المحفظه"],
        ["Giza", "Ahmed", "2", "1,500"],
        ["Giza", "Mona", "0", "200"],
        ["Giza", "Omar", "", "NA"],
        ["Maadi", "Sara", "3", "5000"],
        ["", "Nobody", "1", "1"],
    ],
    "تعيينات الشهر": [
        ["zone_name", "rider", "الحاله"],
        ["Giza", "Ali", "استلم"],
        ["Giza", "Hany", "Received"],
        ["Giza", "Tamer", "لم يستلم"],
        ["Maadi", "Nour", "تم الاستلام"],
    ],
    "مرفوعين استعلام": [
        ["الاسم", "مقر التحضير"],
        ["Rider 1", "مكتب طلبات الهرم"],
        ["Rider 2", " مكتب طلبات الهرم "],
        ["Rider 3", "مكتب طلبات المعادي"],
        ["Rider 4", "   "],
    ],
    "جميع المحافظ": [
        ["Date", "office", "amount"],
        ["2024-01-01", "Haram", "100"],
        ["", "Maadi", "200"],
        ["0", "Giza", "300"],
        ["2024-01-02", "Haram", "400"],
    ],
    "تصالحات": [
        ["التاريخ", "rider", "amount"],
        ["", "Early", "10"],
        ["2024-02-01", "Ahmed", "20"],
        ["", "Mona", "30"],
    ],
    "التارجت": [
        ["zone_name", "target"],
        ["Maadi", "900"],
        ["Giza", "1200"],
    ],
    "ردود الأوردات": [
        ["zone_name", "order_id", "reply"],
        ["Giza", "1", "ok"],
        ["Maadi", "2", "late"],
    ],
    "ردود التعيينات": [
        ["Zone Name", "rider", "reply"],
        ["Maadi", "Nour", "joined"],
        ["Giza", "Ali", "joined"],
        ["Giza", "Hany", "declined"],
    ],
    "مرفوضين استعلام": [
        ["التاريخ", "مكتب", "مقر التحضير", "الاسم", "رقم الهاتف", "الرقم القومي", "اسم المشرف"],
        ["2024-03-01", "Haram", "مكتب طلبات الهرم", "Karim", "0100", "2990", "Said"],
        ["2024-03-02", "Maadi", "مكتب طلبات المعادي", "Laila", "0111", "2980", "Hoda"],
    ],
}


class FakeGateway:
    """In-memory stand-in for SheetGateway that records remote activity."""

    def __init__(self, tabs: Dict[Any, List[List[str]]], *, connect_error: Exception | None = None) -> None:
        self.tabs = tabs
        self.connect_error = connect_error
        self.connects = 0
        self.reads: List[Any] = []

    def connect(self):
        self.connects += 1
        if self.connect_error is not None:
            raise self.connect_error
        return self

    def read(self, doc, ref):
        self.reads.append(ref)
        if ref not in self.tabs:
            raise TabNotFoundError(f"Tab {ref!r} not found")
        return table_from_values(str(ref), self.tabs[ref])


@pytest.fixture
def tables() -> CredentialTables:
    return CredentialTables(
        zone_passwords=MappingProxyType({"Giza": "1568", "Maadi": "878"}),
        office_passwords=MappingProxyType({"مكتب طلبات الهرم": "5050", "مكتب طلبات المعادي": "6060"}),
    )


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway({k: [list(r) for r in v] for k, v in TABS.items()})


@pytest.fixture
def store() -> SessionStore:
    return SessionStore(ttl_seconds=60)


@pytest.fixture
def client(gateway, tables, store):
    app.dependency_overrides[get_gateway] = lambda: gateway
    app.dependency_overrides[get_session_store] = lambda: store
    app.dependency_overrides[get_credential_tables] = lambda: tables
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def login(client: TestClient, zone: str = "Giza", password: str = "1568"):
    return client.post("/login", data={"zone": zone, "password": password}, follow_redirects=False)
