"""Core metrics helpers for AuraGold.

Counters are created through ``safe_counter`` so that repeated imports (tests,
reloads) reuse the collector already in the default registry instead of
failing on duplicate registration. ``DISABLE_PROMETHEUS=1`` swaps in no-ops.
"""

from __future__ import annotations

import os

from prometheus_client import REGISTRY, Counter


class _NoOp:
    def labels(self, *args, **kwargs):
        return self
    def inc(self, *args, **kwargs):
        return None


def safe_counter(name: str, doc: str, labelnames=()):
    if os.getenv("DISABLE_PROMETHEUS", "0") == "1":
        return _NoOp()
    try:
        return Counter(name, doc, labelnames)
    except ValueError:
        # Already registered: find the existing collector by name
        names = getattr(REGISTRY, "_names_to_collectors", {})
        coll = names.get(name) or names.get(f"{name}_total")
        if coll is not None:
            return coll
        return _NoOp()
