from __future__ import annotations

import math
import time
from typing import Optional

from .model import TradeRecord, new_id

DEFAULT_HANDLING_FEE_RATE = 0.004


def build_trade_record(
    grams: float,
    cost_price: float,
    selling_price: float,
    handling_fee_rate: float = DEFAULT_HANDLING_FEE_RATE,
    desired_price: Optional[float] = None,
    record_id: Optional[str] = None,
    timestamp: Optional[int] = None,
) -> TradeRecord:
    """Create a trade and compute its profit figures.

    actual    = g * (sell - cost) - sell * fee_rate * g
    projected = g * (target - cost) - target * fee_rate * g
    margin    = actual / (g * cost) * 100

    ``desired_price`` defaults to the selling price. Margin is 0 when the
    position cost is zero. Non-finite inputs or results raise ValueError.
    """
    g = float(grams)
    cp = float(cost_price)
    sp = float(selling_price)
    hfr = float(handling_fee_rate)
    dp = float(desired_price) if desired_price else sp
    if not all(math.isfinite(v) for v in (g, cp, sp, hfr, dp)):
        raise ValueError("grams, prices and fee rate must be finite")
    if g < 0 or cp < 0 or sp < 0:
        raise ValueError("grams and prices must be non-negative")

    actual = g * (sp - cp) - sp * hfr * g
    projected = g * (dp - cp) - dp * hfr * g
    basis = g * cp
    margin = actual / basis * 100 if basis else 0.0
    if not all(math.isfinite(v) for v in (actual, projected, margin)):
        raise ValueError("trade figures overflow")

    return TradeRecord(
        id=record_id or new_id(),
        grams=g,
        cost_price=cp,
        selling_price=sp,
        handling_fee_rate=hfr,
        actual_profit=actual,
        desired_price=dp,
        projected_profit=projected,
        profit_margin=margin,
        timestamp=timestamp if timestamp is not None else int(time.time() * 1000),
    )
