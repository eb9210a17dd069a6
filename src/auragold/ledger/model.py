from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Union
import uuid

Number = Union[int, float]


def new_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True)
class TradeRecord:
    """A single gold trade. Profit fields are computed once at entry time."""

    id: str
    grams: Number
    cost_price: Number
    selling_price: Number
    handling_fee_rate: Number
    actual_profit: Number
    desired_price: Number
    projected_profit: Number
    profit_margin: Number
    timestamp: Number  # epoch ms

    def to_json(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "grams": self.grams,
            "costPrice": self.cost_price,
            "sellingPrice": self.selling_price,
            "handlingFeeRate": self.handling_fee_rate,
            "actualProfit": self.actual_profit,
            "desiredPrice": self.desired_price,
            "projectedProfit": self.projected_profit,
            "profitMargin": self.profit_margin,
            "timestamp": self.timestamp,
        }


@dataclass
class Ledger:
    id: str
    name: str
    created_at: Number  # epoch ms
    records: List[TradeRecord] = field(default_factory=list)

    def to_json(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "createdAt": self.created_at,
            "records": [r.to_json() for r in self.records],
        }

    def with_records(self, records: List[TradeRecord]) -> "Ledger":
        return replace(self, records=list(records))


def sort_newest_first(records: List[TradeRecord]) -> List[TradeRecord]:
    # stable: equal timestamps keep their relative order
    return sorted(records, key=lambda r: r.timestamp, reverse=True)
