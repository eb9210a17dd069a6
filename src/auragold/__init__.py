"""AuraGold: personal gold trading-ledger tracker.

Packages:
- ledger: trade records, ledgers, book operations and statistics
- transfer: JSON export/import, normalization and ledger merge
- store: persistence port for application state
"""

__version__ = "0.1.0"
