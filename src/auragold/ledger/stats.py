from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from .model import TradeRecord


@dataclass(frozen=True)
class TradeSummary:
    total_profit: float = 0.0
    total_projected_profit: float = 0.0
    total_grams: float = 0.0
    avg_cost_price: float = 0.0
    profit_difference: float = 0.0


def summarize(records: Iterable[TradeRecord]) -> TradeSummary:
    recs = list(records)
    if not recs:
        return TradeSummary()
    total_profit = sum(r.actual_profit for r in recs)
    total_projected = sum(r.projected_profit for r in recs)
    return TradeSummary(
        total_profit=total_profit,
        total_projected_profit=total_projected,
        total_grams=sum(r.grams for r in recs),
        avg_cost_price=sum(r.cost_price for r in recs) / len(recs),
        profit_difference=total_projected - total_profit,
    )
