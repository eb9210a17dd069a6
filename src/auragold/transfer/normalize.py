"""Validate-and-reconstruct untrusted JSON into ledger domain records.

Policy is fail-fast: one bad record rejects its ledger. There is no partial
repair; callers either get a complete value or an ``Invalid`` result.
"""

from __future__ import annotations

from typing import Any, Dict, List, Set, Tuple

from ..ledger.model import Ledger, TradeRecord, sort_newest_first
from .coerce import as_number, as_plain_object, as_sequence, as_string
from .result import Invalid, Result, Valid, invalid

# (json key, dataclass field)
RECORD_NUMBER_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("grams", "grams"),
    ("costPrice", "cost_price"),
    ("sellingPrice", "selling_price"),
    ("handlingFeeRate", "handling_fee_rate"),
    ("actualProfit", "actual_profit"),
    ("desiredPrice", "desired_price"),
    ("projectedProfit", "projected_profit"),
    ("profitMargin", "profit_margin"),
    ("timestamp", "timestamp"),
)


def normalize_record(value: Any, path: str = "record") -> Result[TradeRecord]:
    obj = as_plain_object(value)
    if obj is None:
        return invalid(path, "expected an object")

    record_id = as_string(obj.get("id"))
    if not record_id:
        return invalid(f"{path}.id", "expected a non-empty string")

    fields: Dict[str, Any] = {"id": record_id}
    for key, attr in RECORD_NUMBER_FIELDS:
        num = as_number(obj.get(key))
        if num is None:
            return invalid(f"{path}.{key}", "expected a finite number")
        fields[attr] = num
    return Valid(TradeRecord(**fields))


def normalize_ledger(value: Any, path: str = "ledger") -> Result[Ledger]:
    obj = as_plain_object(value)
    if obj is None:
        return invalid(path, "expected an object")

    ledger_id = as_string(obj.get("id"))
    if not ledger_id:
        return invalid(f"{path}.id", "expected a non-empty string")
    name = as_string(obj.get("name"))
    if not name:
        return invalid(f"{path}.name", "expected a non-empty string")
    created_at = as_number(obj.get("createdAt"))
    if created_at is None:
        return invalid(f"{path}.createdAt", "expected a finite number")
    raw_records = as_sequence(obj.get("records"))
    if raw_records is None:
        return invalid(f"{path}.records", "expected an array")

    records: List[TradeRecord] = []
    seen: Set[str] = set()
    for i, item in enumerate(raw_records):
        res = normalize_record(item, f"{path}.records[{i}]")
        if isinstance(res, Invalid):
            return res
        rec = res.value
        if rec.id in seen:
            # first occurrence wins
            continue
        seen.add(rec.id)
        records.append(rec)

    return Valid(Ledger(id=ledger_id, name=name, created_at=created_at, records=sort_newest_first(records)))


def normalize_ledgers(values: List[Any], path: str) -> Result[List[Ledger]]:
    ledgers: List[Ledger] = []
    for i, item in enumerate(values):
        res = normalize_ledger(item, f"{path}[{i}]")
        if isinstance(res, Invalid):
            return res
        ledgers.append(res.value)
    return Valid(ledgers)
