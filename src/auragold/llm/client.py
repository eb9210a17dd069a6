from __future__ import annotations

from typing import Any, Dict, List

from ..ledger.model import TradeRecord


class SummaryClient:
    def summarize(self, records: List[TradeRecord], lang: str = "zh") -> str:
        raise NotImplementedError


def trade_digest(records: List[TradeRecord]) -> List[Dict[str, Any]]:
    """The compact per-trade view sent to the model."""
    return [
        {
            "grams": r.grams,
            "cost": r.cost_price,
            "sold": r.selling_price,
            "profit": r.actual_profit,
            "margin": f"{r.profit_margin}%",
        }
        for r in records
    ]
