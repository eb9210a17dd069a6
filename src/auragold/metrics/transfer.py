"""Import/export metrics.

Counters:
- auragold_imports_total{kind,mode,outcome}   kind=all|ledger, outcome=ok|rejected|cancelled|error
- auragold_exports_total{kind}
- auragold_records_merged_total
"""

from __future__ import annotations

from typing import Any, Optional

from .core import safe_counter

_imports_total: Optional[Any] = None
_exports_total: Optional[Any] = None
_records_merged: Optional[Any] = None


def get_imports_total():
    global _imports_total
    if _imports_total is None:
        _imports_total = safe_counter("auragold_imports_total", "Import attempts", ["kind", "mode", "outcome"])
    return _imports_total


def get_exports_total():
    global _exports_total
    if _exports_total is None:
        _exports_total = safe_counter("auragold_exports_total", "Export files written", ["kind"])
    return _exports_total


def get_records_merged_total():
    global _records_merged
    if _records_merged is None:
        _records_merged = safe_counter("auragold_records_merged_total", "Records added by merge imports")
    return _records_merged
