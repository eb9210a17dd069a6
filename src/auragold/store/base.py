from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import List, Optional, Protocol

from ..i18n import Lang, Theme
from ..ledger.model import Ledger


@dataclass
class AppState:
    ledgers: List[Ledger] = field(default_factory=list)
    active_ledger_id: str = ""  # ledger id, "master", or "" for none
    lang: Lang = "zh"
    theme: Theme = "dark"
    show_master_ledger: bool = True


class StateStore(Protocol):
    def load(self) -> AppState:
        ...

    def save(self, state: AppState) -> None:
        ...


class MemoryStore:
    """Keeps a deep copy of the last saved state in process memory."""

    def __init__(self, initial: Optional[AppState] = None):
        self._state = copy.deepcopy(initial) if initial is not None else AppState()
        self.saves = 0

    def load(self) -> AppState:
        return copy.deepcopy(self._state)

    def save(self, state: AppState) -> None:
        self._state = copy.deepcopy(state)
        self.saves += 1
