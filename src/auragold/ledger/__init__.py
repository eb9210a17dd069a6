"""Ledger package.

Public API:
- TradeRecord, Ledger: domain records exchanged with the transfer layer.
- summarize: profit/loss statistics over a set of records.
"""

from .model import Ledger, TradeRecord, new_id  # re-export
from .stats import TradeSummary, summarize  # re-export
