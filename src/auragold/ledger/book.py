"""State transitions for ledger management.

Every function takes an AppState and returns a new one; the input state and
its ledgers are left untouched.
"""

from __future__ import annotations

import time
from dataclasses import replace
from typing import TYPE_CHECKING, Callable, List, Optional

from ..i18n import MASTER_LEDGER_ID
from .model import Ledger, TradeRecord, new_id

if TYPE_CHECKING:  # pragma: no cover
    from ..store.base import AppState


def _now_ms() -> int:
    return int(time.time() * 1000)


def find_ledger(ledgers: List[Ledger], ledger_id: str) -> Optional[Ledger]:
    for led in ledgers:
        if led.id == ledger_id:
            return led
    return None


def resolve_active_id(state: "AppState", candidate: Optional[str], prefer_master: bool = True) -> str:
    """Pick a valid active ledger id for ``state``.

    ``candidate`` is kept when it names an existing ledger, or is "master"
    while the master view is shown. Otherwise the fallback is the master view
    then the first ledger (``prefer_master``), or the reverse.
    """
    if candidate and candidate != MASTER_LEDGER_ID and find_ledger(state.ledgers, candidate):
        return candidate
    if candidate == MASTER_LEDGER_ID and state.show_master_ledger:
        return MASTER_LEDGER_ID
    first = state.ledgers[0].id if state.ledgers else ""
    if prefer_master:
        return MASTER_LEDGER_ID if state.show_master_ledger else first
    if first:
        return first
    return MASTER_LEDGER_ID if state.show_master_ledger else ""


def active_ledger(state: "AppState") -> Optional[Ledger]:
    """The selected ledger, falling back to the first one."""
    led = find_ledger(state.ledgers, state.active_ledger_id)
    if led is not None:
        return led
    return state.ledgers[0] if state.ledgers else None


def view_records(state: "AppState") -> List[TradeRecord]:
    if state.active_ledger_id == MASTER_LEDGER_ID:
        return [r for led in state.ledgers for r in led.records]
    led = active_ledger(state)
    return list(led.records) if led is not None else []


def create_ledger(
    state: "AppState",
    name: str,
    now_ms: Optional[int] = None,
    id_factory: Callable[[], str] = new_id,
) -> "AppState":
    name = (name or "").strip()
    if not name:
        return state
    led = Ledger(id=id_factory(), name=name, created_at=now_ms if now_ms is not None else _now_ms())
    return replace(state, ledgers=[*state.ledgers, led], active_ledger_id=led.id)


def rename_ledger(state: "AppState", ledger_id: str, name: str) -> "AppState":
    name = (name or "").strip()
    if not name or find_ledger(state.ledgers, ledger_id) is None:
        return state
    return replace(
        state,
        ledgers=[replace(led, name=name) if led.id == ledger_id else led for led in state.ledgers],
    )


def delete_ledger(state: "AppState", ledger_id: str) -> "AppState":
    if find_ledger(state.ledgers, ledger_id) is None:
        return state
    remaining = [led for led in state.ledgers if led.id != ledger_id]
    active = state.active_ledger_id
    if active == ledger_id:
        if remaining:
            active = remaining[0].id
        else:
            active = MASTER_LEDGER_ID if state.show_master_ledger else ""
    return replace(state, ledgers=remaining, active_ledger_id=active)


def clear_ledger(state: "AppState", ledger_id: str) -> "AppState":
    return replace(
        state,
        ledgers=[led.with_records([]) if led.id == ledger_id else led for led in state.ledgers],
    )


def add_record(state: "AppState", record: TradeRecord) -> "AppState":
    """Prepend ``record`` to the active ledger. No-op in the master view."""
    target = state.active_ledger_id
    if not target or target == MASTER_LEDGER_ID:
        return state
    return replace(
        state,
        ledgers=[led.with_records([record, *led.records]) if led.id == target else led for led in state.ledgers],
    )


def remove_record(state: "AppState", record_id: str) -> "AppState":
    target = state.active_ledger_id
    if not target or target == MASTER_LEDGER_ID:
        return state
    return replace(
        state,
        ledgers=[
            led.with_records([r for r in led.records if r.id != record_id]) if led.id == target else led
            for led in state.ledgers
        ],
    )
