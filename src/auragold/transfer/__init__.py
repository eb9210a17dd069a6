"""Data transfer: JSON export envelopes, import normalization and ledger merge."""
