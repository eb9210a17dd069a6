from __future__ import annotations

from typing import Dict, Iterable, List

from ..ledger.model import Ledger, sort_newest_first


def merge_ledger_pair(existing: Ledger, incoming: Ledger) -> Ledger:
    """Merge two versions of the same ledger by record id.

    Records already present are kept as-is; unseen incoming records are
    appended, then everything is re-sorted newest first. The incoming name
    wins when non-empty; ``created_at`` is the older of the two.
    """
    seen = {r.id for r in existing.records}
    merged = list(existing.records)
    for rec in incoming.records:
        if rec.id not in seen:
            seen.add(rec.id)
            merged.append(rec)
    return Ledger(
        id=existing.id,
        name=incoming.name or existing.name,
        created_at=min(existing.created_at, incoming.created_at),
        records=sort_newest_first(merged),
    )


def merge_ledgers(existing: Iterable[Ledger], incoming: Iterable[Ledger]) -> List[Ledger]:
    """Reconcile ``incoming`` ledgers into ``existing`` by ledger id.

    Returns a new list sorted oldest ledger first. Neither input is mutated,
    and merging the same incoming set twice is a no-op the second time.
    """
    by_id: Dict[str, Ledger] = {}
    for led in existing:
        by_id[led.id] = led
    for led in incoming:
        prev = by_id.get(led.id)
        if prev is None:
            by_id[led.id] = led
        else:
            by_id[led.id] = merge_ledger_pair(prev, led)
    return sorted(by_id.values(), key=lambda led: led.created_at)


def count_new_records(existing: Iterable[Ledger], merged: Iterable[Ledger]) -> int:
    before = sum(len(led.records) for led in existing)
    after = sum(len(led.records) for led in merged)
    return max(0, after - before)
