"""
Command-line entrypoint for AuraGold.

What it does:
- Loads settings from `config/config.yaml` and the environment.
- Opens the SQLite-backed state store.
- Dispatches one subcommand: manage ledgers and trades, export or
  import JSON backups, print the share report, or request an AI summary.

This is the UI boundary: TransferError subclasses raised by the service layer
are caught here and printed as localized messages (exit status 1). Existing
state is never modified by a failed import.

Usage:
  python -m auragold.main import-all backup.json --mode merge
  python -m auragold.main export-ledger <ledger-id> --out exports/
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from datetime import datetime
from typing import Callable, List, Optional

from .config.loader import Settings, load_settings
from .errors import ImportFileError, ImportRejected, MalformedJsonError, TargetNotFoundError, TransferError
from .i18n import MASTER_LEDGER_ID, t
from .ledger import book
from .ledger.stats import summarize
from .ledger.trades import build_trade_record
from .llm.router import get_client
from .reports.share import build_share_report_text
from .store.base import AppState
from .store.sqlite_store import SQLiteStore
from .transfer.service import TransferService

log = logging.getLogger("auragold.main")


def _stdin_confirm(assume_yes: bool) -> Callable[[str], bool]:
    def confirm(message: str) -> bool:
        if assume_yes:
            return True
        try:
            answer = input(f"{message} [y/N] ")
        except EOFError:
            return False
        return answer.strip().lower() in ("y", "yes")
    return confirm


def _error_message(e: TransferError, lang: str) -> str:
    if isinstance(e, ImportRejected):
        return f"{t(lang, 'unsupported_json')} ({e})"
    if isinstance(e, MalformedJsonError):
        return t(lang, "malformed_json")
    if isinstance(e, ImportFileError):
        return t(lang, "unreadable_file")
    if isinstance(e, TargetNotFoundError):
        return t(lang, "target_not_found")
    return t(lang, "import_failed")


def _with_view(state: AppState, ledger_id: Optional[str]) -> AppState:
    if not ledger_id:
        return state
    return replace(state, active_ledger_id=ledger_id)


def _view_name(state: AppState) -> str:
    if state.active_ledger_id == MASTER_LEDGER_ID:
        return t(state.lang, "master_name")
    led = book.active_ledger(state)
    return led.name if led is not None else t(state.lang, "no_ledgers")


# ---- Subcommands ----

def cmd_ledgers(args, settings: Settings, store: SQLiteStore) -> int:
    state = store.load()
    for led in state.ledgers:
        marker = "*" if led.id == state.active_ledger_id else " "
        print(f"{marker} {led.id}  {led.name}  ({len(led.records)} records)")
    return 0


def cmd_new_ledger(args, settings: Settings, store: SQLiteStore) -> int:
    state = store.load()
    nxt = book.create_ledger(state, args.name)
    if nxt is state:
        print("ledger name must not be blank", file=sys.stderr)
        return 1
    store.save(nxt)
    print(nxt.active_ledger_id)
    return 0


def cmd_rename_ledger(args, settings: Settings, store: SQLiteStore) -> int:
    state = store.load()
    if book.find_ledger(state.ledgers, args.ledger_id) is None:
        raise TargetNotFoundError(args.ledger_id)
    store.save(book.rename_ledger(state, args.ledger_id, args.name))
    return 0


def cmd_delete_ledger(args, settings: Settings, store: SQLiteStore) -> int:
    state = store.load()
    if book.find_ledger(state.ledgers, args.ledger_id) is None:
        raise TargetNotFoundError(args.ledger_id)
    if not _stdin_confirm(args.yes)(f"Delete ledger {args.ledger_id}?"):
        return 0
    store.save(book.delete_ledger(state, args.ledger_id))
    return 0


def cmd_clear_ledger(args, settings: Settings, store: SQLiteStore) -> int:
    state = store.load()
    if book.find_ledger(state.ledgers, args.ledger_id) is None:
        raise TargetNotFoundError(args.ledger_id)
    if not _stdin_confirm(args.yes)(f"Remove all records from ledger {args.ledger_id}?"):
        return 0
    store.save(book.clear_ledger(state, args.ledger_id))
    return 0


def cmd_remove_trade(args, settings: Settings, store: SQLiteStore) -> int:
    state = _with_view(store.load(), args.ledger)
    if not state.active_ledger_id or state.active_ledger_id == MASTER_LEDGER_ID:
        print("select a ledger with --ledger", file=sys.stderr)
        return 1
    if book.find_ledger(state.ledgers, state.active_ledger_id) is None:
        raise TargetNotFoundError(state.active_ledger_id)
    store.save(book.remove_record(state, args.record_id))
    return 0


def cmd_add_trade(args, settings: Settings, store: SQLiteStore) -> int:
    state = _with_view(store.load(), args.ledger)
    if not state.active_ledger_id or state.active_ledger_id == MASTER_LEDGER_ID:
        print("select a ledger with --ledger", file=sys.stderr)
        return 1
    if book.find_ledger(state.ledgers, state.active_ledger_id) is None:
        raise TargetNotFoundError(state.active_ledger_id)
    try:
        rec = build_trade_record(
            args.grams,
            args.cost,
            args.sell,
            handling_fee_rate=args.fee if args.fee is not None else settings.handling_fee_rate,
            desired_price=args.target,
        )
    except ValueError as e:
        print(str(e), file=sys.stderr)
        return 1
    store.save(book.add_record(state, rec))
    print(f"{rec.id}  profit={rec.actual_profit:.2f}  margin={rec.profit_margin:.2f}%")
    return 0


def cmd_export_all(args, settings: Settings, store: SQLiteStore) -> int:
    service = TransferService(store)
    path = service.export_all(args.out or settings.export_dir)
    print(f"{t(store.load().lang, 'exported_all')}: {path}")
    return 0


def cmd_export_ledger(args, settings: Settings, store: SQLiteStore) -> int:
    service = TransferService(store)
    path = service.export_ledger(args.ledger_id, args.out or settings.export_dir)
    print(f"{t(store.load().lang, 'exported_ledger')}: {path}")
    return 0


def cmd_import_all(args, settings: Settings, store: SQLiteStore) -> int:
    service = TransferService(store, confirm=_stdin_confirm(args.yes))
    outcome = service.import_all(args.file, args.mode)
    lang = outcome.state.lang
    print(t(lang, "import_cancelled") if outcome.cancelled else t(lang, "import_completed"))
    return 0


def cmd_import_ledger(args, settings: Settings, store: SQLiteStore) -> int:
    service = TransferService(store, confirm=_stdin_confirm(args.yes))
    mode = "as_new" if args.mode == "as-new" else "replace"
    outcome = service.import_ledger(args.file, mode, args.target)
    lang = outcome.state.lang
    print(t(lang, "import_cancelled") if outcome.cancelled else t(lang, "import_completed"))
    return 0


def cmd_report(args, settings: Settings, store: SQLiteStore) -> int:
    state = _with_view(store.load(), args.ledger)
    records = book.view_records(state)
    text = build_share_report_text(
        _view_name(state),
        summarize(records),
        len(records),
        datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
        state.lang,
    )
    print(text)
    return 0


def cmd_analyze(args, settings: Settings, store: SQLiteStore) -> int:
    state = _with_view(store.load(), args.ledger)
    if state.active_ledger_id == MASTER_LEDGER_ID:
        print("analysis runs on a single ledger; pass --ledger", file=sys.stderr)
        return 1
    client = get_client(settings.llm.model_dump())
    print(client.summarize(book.view_records(state), state.lang))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="auragold", description="Gold trading ledger tracker")
    parser.add_argument("--config", default="config/config.yaml", help="settings YAML path")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("ledgers", help="list ledgers")
    p.set_defaults(func=cmd_ledgers)

    p = sub.add_parser("new-ledger", help="create a ledger and make it active")
    p.add_argument("name")
    p.set_defaults(func=cmd_new_ledger)

    p = sub.add_parser("add-trade", help="record a trade in a ledger")
    p.add_argument("grams", type=float)
    p.add_argument("cost", type=float)
    p.add_argument("sell", type=float)
    p.add_argument("--fee", type=float, default=None, help="handling fee rate (fraction)")
    p.add_argument("--target", type=float, default=None, help="desired selling price")
    p.add_argument("--ledger", default=None)
    p.set_defaults(func=cmd_add_trade)

    p = sub.add_parser("remove-trade", help="delete a trade from a ledger")
    p.add_argument("record_id")
    p.add_argument("--ledger", default=None)
    p.set_defaults(func=cmd_remove_trade)

    p = sub.add_parser("rename-ledger", help="rename a ledger")
    p.add_argument("ledger_id")
    p.add_argument("name")
    p.set_defaults(func=cmd_rename_ledger)

    p = sub.add_parser("delete-ledger", help="delete a ledger and its records")
    p.add_argument("ledger_id")
    p.add_argument("--yes", action="store_true", help="skip confirmation")
    p.set_defaults(func=cmd_delete_ledger)

    p = sub.add_parser("clear-ledger", help="remove every record from a ledger")
    p.add_argument("ledger_id")
    p.add_argument("--yes", action="store_true", help="skip confirmation")
    p.set_defaults(func=cmd_clear_ledger)

    p = sub.add_parser("export-all", help="export all ledgers and settings")
    p.add_argument("--out", default=None)
    p.set_defaults(func=cmd_export_all)

    p = sub.add_parser("export-ledger", help="export one ledger")
    p.add_argument("ledger_id")
    p.add_argument("--out", default=None)
    p.set_defaults(func=cmd_export_ledger)

    p = sub.add_parser("import-all", help="import an all-data export or legacy array")
    p.add_argument("file")
    p.add_argument("--mode", choices=["merge", "replace"], default="merge")
    p.add_argument("--yes", action="store_true", help="skip confirmation")
    p.set_defaults(func=cmd_import_all)

    p = sub.add_parser("import-ledger", help="import a single-ledger export")
    p.add_argument("file")
    p.add_argument("--mode", choices=["as-new", "replace"], default="as-new")
    p.add_argument("--target", default=None, help="ledger id to overwrite in replace mode")
    p.add_argument("--yes", action="store_true", help="skip confirmation")
    p.set_defaults(func=cmd_import_ledger)

    p = sub.add_parser("report", help="print the share report")
    p.add_argument("--ledger", default=None, help="ledger id, or 'master' for all ledgers")
    p.set_defaults(func=cmd_report)

    p = sub.add_parser("analyze", help="AI summary of a ledger's trades")
    p.add_argument("--ledger", default=None)
    p.set_defaults(func=cmd_analyze)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = load_settings(args.config)
    logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(message)s")
    store = SQLiteStore(
        settings.store_path,
        defaults=AppState(
            lang=settings.default_lang,
            theme=settings.default_theme,
            show_master_ledger=settings.show_master_ledger,
        ),
    )
    try:
        return args.func(args, settings, store)
    except TransferError as e:
        lang = store.load().lang
        log.debug("transfer failed: %s", e)
        print(_error_message(e, lang), file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
