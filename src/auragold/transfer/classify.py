"""Recognize the shape of an import payload and normalize it.

Accepted "all data" shapes:
- tagged envelope: {"schema": "auragold.export", "kind": "all", "payload": {...}}
- legacy bare array of ledgers (pre-envelope exports)

Accepted single-ledger shapes:
- tagged envelope with kind "ledger"
- a bare ledger object
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional

from ..i18n import LANGS, THEMES, Lang, Theme
from ..ledger.model import Ledger
from .coerce import as_plain_object, as_sequence, as_string
from .merge import merge_ledgers
from .normalize import normalize_ledger, normalize_ledgers
from .result import Invalid, Result, Valid, invalid

EXPORT_SCHEMA = "auragold.export"
EXPORT_VERSION = 1
KIND_ALL = "all"
KIND_LEDGER = "ledger"


@dataclass
class AllImport:
    ledgers: List[Ledger] = field(default_factory=list)
    active_ledger_id: Optional[str] = None
    lang: Optional[Lang] = None
    theme: Optional[Theme] = None


def _is_envelope(obj: Optional[dict], kind: str) -> bool:
    return obj is not None and obj.get("schema") == EXPORT_SCHEMA and obj.get("kind") == kind


def normalize_all_import(value: Any) -> Result[AllImport]:
    obj = as_plain_object(value)

    if _is_envelope(obj, KIND_ALL):
        payload = as_plain_object(obj.get("payload"))
        if payload is None:
            return invalid("payload", "expected an object")
        raw_ledgers = as_sequence(payload.get("ledgers"))
        if raw_ledgers is None:
            return invalid("payload.ledgers", "expected an array")
        res = normalize_ledgers(raw_ledgers, "payload.ledgers")
        if isinstance(res, Invalid):
            return res

        lang = as_string(payload.get("lang"))
        theme = as_string(payload.get("theme"))
        return Valid(
            AllImport(
                ledgers=merge_ledgers([], res.value),
                active_ledger_id=as_string(payload.get("activeLedgerId")),
                lang=lang if lang in LANGS else None,  # type: ignore[arg-type]
                theme=theme if theme in THEMES else None,  # type: ignore[arg-type]
            )
        )

    raw_ledgers = as_sequence(value)
    if raw_ledgers is not None:
        res = normalize_ledgers(raw_ledgers, "ledgers")
        if isinstance(res, Invalid):
            return res
        return Valid(AllImport(ledgers=merge_ledgers([], res.value)))

    return invalid("$", "unrecognized export format")


def normalize_ledger_import(value: Any) -> Result[Ledger]:
    obj = as_plain_object(value)
    if _is_envelope(obj, KIND_LEDGER):
        payload = as_plain_object(obj.get("payload"))
        if payload is None:
            return invalid("payload", "expected an object")
        return normalize_ledger(payload.get("ledger"), "payload.ledger")
    return normalize_ledger(value)
