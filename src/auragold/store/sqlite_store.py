from __future__ import annotations

import json
import logging
import os
import sqlite3
from typing import Dict, Optional

from ..i18n import LANGS, THEMES
from ..ledger.book import resolve_active_id
from ..transfer.classify import normalize_all_import
from ..transfer.result import Invalid
from .base import AppState

logger = logging.getLogger(__name__)

DDL = """
CREATE TABLE IF NOT EXISTS kv (
  key TEXT PRIMARY KEY,
  value TEXT NOT NULL
);
"""

KEY_LEDGERS = "auragold_all_ledgers"
KEY_ACTIVE = "auragold_active_ledger_id"
KEY_LANG = "auragold_lang"
KEY_THEME = "auragold_theme"
KEY_SHOW_MASTER = "auragold_show_master_ledger"


class SQLiteStore:
    """Key-value application store backed by a single SQLite table."""

    def __init__(self, path: str = "data/auragold.sqlite", defaults: Optional[AppState] = None):
        parent = os.path.dirname(path)
        if parent:
            os.makedirs(parent, exist_ok=True)
        self.path = path
        self.defaults = defaults or AppState()
        with sqlite3.connect(self.path) as con:
            con.execute(DDL)

    def _read_all(self) -> Dict[str, str]:
        with sqlite3.connect(self.path) as con:
            rows = con.execute("SELECT key, value FROM kv").fetchall()
        return {k: v for k, v in rows}

    def load(self) -> AppState:
        kv = self._read_all()
        state = AppState(
            lang=self.defaults.lang,
            theme=self.defaults.theme,
            show_master_ledger=self.defaults.show_master_ledger,
        )
        if kv.get(KEY_LANG) in LANGS:
            state.lang = kv[KEY_LANG]  # type: ignore[assignment]
        if kv.get(KEY_THEME) in THEMES:
            state.theme = kv[KEY_THEME]  # type: ignore[assignment]
        if KEY_SHOW_MASTER in kv:
            state.show_master_ledger = kv[KEY_SHOW_MASTER] != "false"

        raw = kv.get(KEY_LEDGERS)
        if raw:
            try:
                res = normalize_all_import(json.loads(raw))
            except json.JSONDecodeError as e:
                logger.error("Failed to parse stored ledgers: %s", e)
            else:
                if isinstance(res, Invalid):
                    logger.error("Stored ledgers failed validation: %s", res.error)
                else:
                    state.ledgers = res.value.ledgers

        stored_active = kv.get(KEY_ACTIVE, "")
        state.active_ledger_id = resolve_active_id(state, stored_active)
        return state

    def save(self, state: AppState) -> None:
        rows = [
            (KEY_LEDGERS, json.dumps([led.to_json() for led in state.ledgers], ensure_ascii=False)),
            (KEY_LANG, state.lang),
            (KEY_THEME, state.theme),
            (KEY_SHOW_MASTER, "true" if state.show_master_ledger else "false"),
        ]
        with sqlite3.connect(self.path) as con:
            con.executemany("INSERT OR REPLACE INTO kv(key, value) VALUES (?, ?)", rows)
            if state.active_ledger_id:
                con.execute(
                    "INSERT OR REPLACE INTO kv(key, value) VALUES (?, ?)",
                    (KEY_ACTIVE, state.active_ledger_id),
                )
            else:
                con.execute("DELETE FROM kv WHERE key = ?", (KEY_ACTIVE,))
