"""Versioned export envelopes and export file naming."""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..i18n import Lang, Theme
from ..ledger.model import Ledger
from .classify import EXPORT_SCHEMA, EXPORT_VERSION

_UNSAFE_FILENAME = re.compile(r'[\\/:*?"<>|]+')
_WHITESPACE = re.compile(r"\s+")
FILENAME_MAX = 80
FILENAME_FALLBACK = "auragold"


# ---- Envelope models ----

class _Envelope(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    schema_name: Literal["auragold.export"] = Field(EXPORT_SCHEMA, alias="schema")
    version: Literal[1] = EXPORT_VERSION
    exported_at: str = Field(alias="exportedAt")


class AllPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    ledgers: List[Dict[str, Any]]
    active_ledger_id: Optional[str] = Field(None, alias="activeLedgerId")
    lang: Optional[Lang] = None
    theme: Optional[Theme] = None


class AllExport(_Envelope):
    kind: Literal["all"] = "all"
    payload: AllPayload


class LedgerPayload(BaseModel):
    ledger: Dict[str, Any]


class LedgerExport(_Envelope):
    kind: Literal["ledger"] = "ledger"
    payload: LedgerPayload


# ---- Builders ----

def iso_timestamp(now: Optional[datetime] = None) -> str:
    """UTC ISO-8601 with millisecond precision and a trailing Z."""
    now = (now or datetime.now(timezone.utc)).astimezone(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _dump(model: BaseModel) -> Dict[str, Any]:
    return model.model_dump(by_alias=True, exclude_none=True)


def build_all_export(
    ledgers: List[Ledger],
    active_ledger_id: Optional[str] = None,
    lang: Optional[Lang] = None,
    theme: Optional[Theme] = None,
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    env = AllExport(
        exported_at=iso_timestamp(now),
        payload=AllPayload(
            ledgers=[led.to_json() for led in ledgers],
            active_ledger_id=active_ledger_id,
            lang=lang,
            theme=theme,
        ),
    )
    return _dump(env)


def build_ledger_export(ledger: Ledger, now: Optional[datetime] = None) -> Dict[str, Any]:
    env = LedgerExport(exported_at=iso_timestamp(now), payload=LedgerPayload(ledger=ledger.to_json()))
    return _dump(env)


# ---- File names ----

def safe_filename(name: str) -> str:
    cleaned = _UNSAFE_FILENAME.sub("-", name)
    cleaned = _WHITESPACE.sub(" ", cleaned).strip()
    return cleaned[:FILENAME_MAX] or FILENAME_FALLBACK


def file_stamp(now: Optional[datetime] = None) -> str:
    """2026-10-18T09:30:00.123Z -> 2026-10-18_09-30-00"""
    iso = iso_timestamp(now)
    return re.sub(r"[:.]", "-", iso).replace("T", "_", 1)[:19]


def all_export_filename(now: Optional[datetime] = None) -> str:
    return f"auragold-all-{file_stamp(now)}.json"


def ledger_export_filename(name: str, now: Optional[datetime] = None) -> str:
    return f"auragold-ledger-{safe_filename(name)}-{file_stamp(now)}.json"
