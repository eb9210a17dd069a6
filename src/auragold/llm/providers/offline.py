from __future__ import annotations

from typing import Any, Dict, List, Optional

from ...i18n import t
from ...ledger.model import TradeRecord
from ..client import SummaryClient


class OfflineClient(SummaryClient):
    """Used when no summary provider is configured."""

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self.cfg = config or {}

    def summarize(self, records: List[TradeRecord], lang: str = "zh") -> str:
        if not records:
            return t(lang, "ai_no_data")
        return t(lang, "ai_offline")
