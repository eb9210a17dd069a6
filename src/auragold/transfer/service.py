"""
Import/export orchestration.

What it does:
- Reads an import file (or takes an already-decoded JSON value), runs it
  through the classifier/normalizers, and applies the result to the state held
  by a StateStore in "merge" or "replace" mode.
- Writes export envelopes to timestamped JSON files.

Failure policy:
- Unreadable files and invalid JSON raise ImportFileError / MalformedJsonError.
- A payload that fails normalization raises ImportRejected; nothing is saved.
- Replacing a missing ledger raises TargetNotFoundError before any prompt.
- A declined confirmation returns a "cancelled" outcome and saves nothing.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Literal, Optional
import logging

from ..errors import ImportRejected, TargetNotFoundError, TransferError
from ..i18n import t
from ..ledger.book import find_ledger, resolve_active_id
from ..ledger.model import new_id
from ..logs.transfer_log import log_transfer_event
from ..metrics.transfer import get_exports_total, get_imports_total, get_records_merged_total
from ..store.base import AppState, StateStore
from .classify import KIND_ALL, KIND_LEDGER, normalize_all_import, normalize_ledger_import
from .envelope import all_export_filename, build_all_export, build_ledger_export, ledger_export_filename
from .files import PathLike, read_json_file, write_json_file
from .merge import count_new_records, merge_ledgers
from .result import Invalid

ImportMode = Literal["merge", "replace"]
LedgerImportMode = Literal["as_new", "replace"]
Status = Literal["imported", "cancelled"]

Confirm = Callable[[str], bool]


def _decline(_message: str) -> bool:
    return False


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class ImportOutcome:
    status: Status
    state: AppState
    ledger_id: Optional[str] = None
    records_added: int = 0

    @property
    def cancelled(self) -> bool:
        return self.status == "cancelled"


class TransferService:
    """Import/export entry points over a StateStore.

    ``confirm`` receives a localized prompt and returns True to proceed with
    a destructive replace. Without one, replace imports are declined.
    """

    def __init__(
        self,
        store: StateStore,
        confirm: Optional[Confirm] = None,
        id_factory: Callable[[], str] = new_id,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.store = store
        self.confirm = confirm or _decline
        self.id_factory = id_factory
        self.clock = clock

    # ---- Export ----

    def export_all(self, out_dir: PathLike) -> Path:
        state = self.store.load()
        now = self.clock()
        data = build_all_export(
            state.ledgers,
            active_ledger_id=state.active_ledger_id or None,
            lang=state.lang,
            theme=state.theme,
            now=now,
        )
        path = write_json_file(Path(out_dir) / all_export_filename(now), data)
        get_exports_total().labels(KIND_ALL).inc()
        log_transfer_event("export_written", KIND_ALL, path=str(path), ledgers=len(state.ledgers))
        return path

    def export_ledger(self, ledger_id: str, out_dir: PathLike) -> Path:
        state = self.store.load()
        ledger = find_ledger(state.ledgers, ledger_id)
        if ledger is None:
            raise TargetNotFoundError(ledger_id)
        now = self.clock()
        path = write_json_file(Path(out_dir) / ledger_export_filename(ledger.name, now), build_ledger_export(ledger, now))
        get_exports_total().labels(KIND_LEDGER).inc()
        log_transfer_event("export_written", KIND_LEDGER, path=str(path), ledger_id=ledger.id, records=len(ledger.records))
        return path

    # ---- Import: all data ----

    def import_all(self, path: PathLike, mode: ImportMode) -> ImportOutcome:
        raw = self._read(path, KIND_ALL, mode)
        return self.apply_all_import(raw, mode)

    def apply_all_import(self, raw: Any, mode: ImportMode) -> ImportOutcome:
        if mode not in ("merge", "replace"):
            raise ValueError(f"unknown import mode: {mode}")
        res = normalize_all_import(raw)
        if isinstance(res, Invalid):
            self._rejected(KIND_ALL, mode, res)
        imported = res.value
        state = self.store.load()

        if mode == "replace":
            if not self.confirm(t(state.lang, "confirm_replace_all")):
                return self._cancelled(KIND_ALL, mode, state)
            nxt = replace(state, ledgers=imported.ledgers)
            nxt.active_ledger_id = resolve_active_id(nxt, imported.active_ledger_id, prefer_master=False)
            if imported.lang:
                nxt.lang = imported.lang
            if imported.theme:
                nxt.theme = imported.theme
            added = sum(len(led.records) for led in imported.ledgers)
        else:
            merged = merge_ledgers(state.ledgers, imported.ledgers)
            added = count_new_records(state.ledgers, merged)
            nxt = replace(state, ledgers=merged)
            get_records_merged_total().inc(added)

        self.store.save(nxt)
        get_imports_total().labels(KIND_ALL, mode, "ok").inc()
        log_transfer_event("import_applied", KIND_ALL, mode, ledgers=len(imported.ledgers), records_added=added)
        return ImportOutcome(status="imported", state=nxt, records_added=added)

    # ---- Import: single ledger ----

    def import_ledger(
        self,
        path: PathLike,
        mode: LedgerImportMode,
        target_ledger_id: Optional[str] = None,
    ) -> ImportOutcome:
        raw = self._read(path, KIND_LEDGER, mode)
        return self.apply_ledger_import(raw, mode, target_ledger_id)

    def apply_ledger_import(
        self,
        raw: Any,
        mode: LedgerImportMode,
        target_ledger_id: Optional[str] = None,
    ) -> ImportOutcome:
        if mode not in ("as_new", "replace"):
            raise ValueError(f"unknown ledger import mode: {mode}")
        res = normalize_ledger_import(raw)
        if isinstance(res, Invalid):
            self._rejected(KIND_LEDGER, mode, res)
        ledger = res.value
        state = self.store.load()

        if mode == "as_new":
            names = {led.name.strip() for led in state.ledgers}
            base = ledger.name.strip() or t(state.lang, "imported_ledger")
            name, i = base, 2
            while name in names:
                name = t(state.lang, "import_copy", base=base, n=i)
                i += 1
            new_ledger = replace(ledger, id=self.id_factory(), name=name, records=list(ledger.records))
            nxt = replace(state, ledgers=[*state.ledgers, new_ledger], active_ledger_id=new_ledger.id)
            target_id = new_ledger.id
        else:
            target = find_ledger(state.ledgers, target_ledger_id or "")
            if target is None:
                get_imports_total().labels(KIND_LEDGER, mode, "not_found").inc()
                log_transfer_event("import_target_missing", KIND_LEDGER, mode, logging.WARNING, ledger_id=target_ledger_id)
                raise TargetNotFoundError(target_ledger_id or "")
            if not self.confirm(t(state.lang, "confirm_replace_ledger", name=target.name)):
                return self._cancelled(KIND_LEDGER, mode, state)
            nxt = replace(
                state,
                ledgers=[led.with_records(ledger.records) if led.id == target.id else led for led in state.ledgers],
            )
            target_id = target.id

        self.store.save(nxt)
        get_imports_total().labels(KIND_LEDGER, mode, "ok").inc()
        log_transfer_event("import_applied", KIND_LEDGER, mode, ledger_id=target_id, records=len(ledger.records))
        return ImportOutcome(status="imported", state=nxt, ledger_id=target_id, records_added=len(ledger.records))

    # ---- Helpers ----

    def _read(self, path: PathLike, kind: str, mode: str) -> Any:
        try:
            return read_json_file(path)
        except TransferError as e:
            get_imports_total().labels(kind, mode, "error").inc()
            log_transfer_event("import_unreadable", kind, mode, logging.WARNING, path=str(path), error=str(e))
            raise

    def _rejected(self, kind: str, mode: str, res: Invalid) -> None:
        get_imports_total().labels(kind, mode, "rejected").inc()
        log_transfer_event("import_rejected", kind, mode, logging.WARNING, error=str(res.error))
        raise ImportRejected(res.error)

    def _cancelled(self, kind: str, mode: str, state: AppState) -> ImportOutcome:
        get_imports_total().labels(kind, mode, "cancelled").inc()
        log_transfer_event("import_cancelled", kind, mode)
        return ImportOutcome(status="cancelled", state=state)

