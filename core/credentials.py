"""Gate passwords for zones and preparation offices.

Passwords are plaintext and compared by exact string equality (no trimming,
case-sensitive). Supervisors already depend on this behaviour, so it is kept
as a known limitation rather than hardened here.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import List, Mapping, Optional

from core.config import AppConfig
from core.errors import InvalidCredentials


logger = logging.getLogger(__name__)

DEFAULT_ZONE_PASSWORDS = {
    "Ain shams": "754",
    "Alexandria": "1234",
    "Cairo_city_centre": "909",
    "Giza": "1568",
    "Heliopolis": "2161",
    "Ismalia city": "1122",
    "Kafr el-sheikh": "3344",
    "Maadi": "878",
    "Mansoura": "5566",
    "Mohandiseen": "1862",
    "Nasr city": "2851",
    "New damietta": "7788",
    "October": "2161",
    "Portsaid city": "9900",
    "Shebin el koom": "4455",
    "Sheikh zayed": "854",
    "Suez": "6677",
    "Tagammoa south": "1072",
    "Tanta": "8899",
    "Zagazig": "2233",
}

DEFAULT_OFFICE_PASSWORDS = {
    "مكتب طلبات المنصوره": "1010",
    "مكتب طلبات الأسكندرية": "2020",
    "مكتب طلبات مدينه نصر": "3030",
    "مكتب طلبات أكتوبر": "4040",
    "مكتب طلبات الهرم": "5050",
    "مكتب طلبات المعادي": "6060",
    "مكتب طلبات المهندسين": "7070",
    "مكتب طلبات التجمع": "8080",
}


def _frozen(mapping: Mapping[str, str]) -> Mapping[str, str]:
    return MappingProxyType({str(k): str(v) for k, v in mapping.items()})


@dataclass(frozen=True)
class CredentialTables:
    zone_passwords: Mapping[str, str] = field(default_factory=lambda: _frozen(DEFAULT_ZONE_PASSWORDS))
    office_passwords: Mapping[str, str] = field(default_factory=lambda: _frozen(DEFAULT_OFFICE_PASSWORDS))

    def zones(self) -> List[str]:
        return list(self.zone_passwords.keys())

    def login(self, zone: Optional[str], password: Optional[str]) -> str:
        """Return the zone when the pair matches, else raise InvalidCredentials."""
        expected = self.zone_passwords.get(zone or "")
        if expected is None or password is None or expected != password:
            raise InvalidCredentials(f"zone login rejected for {zone!r}")
        return str(zone)

    def office_auth(self, location: Optional[str], password: Optional[str]) -> str:
        expected = self.office_passwords.get(location or "")
        if expected is None or password is None or expected != password:
            raise InvalidCredentials(f"office gate rejected for {location!r}")
        return str(location)


def _load_table(raw: Optional[str], default: Mapping[str, str], name: str) -> Mapping[str, str]:
    if not raw:
        return _frozen(default)
    try:
        table = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ValueError(f"{name} is not valid JSON: {exc}") from exc
    if not isinstance(table, dict) or not table:
        raise ValueError(f"{name} must be a non-empty JSON object")
    logger.info("Loaded %d entries from %s", len(table), name)
    return _frozen(table)


def load_credential_tables(cfg: AppConfig) -> CredentialTables:
    return CredentialTables(
        zone_passwords=_load_table(cfg.zone_passwords_json, DEFAULT_ZONE_PASSWORDS, "ZONE_PASSWORDS_JSON"),
        office_passwords=_load_table(cfg.office_passwords_json, DEFAULT_OFFICE_PASSWORDS, "OFFICE_PASSWORDS_JSON"),
    )
