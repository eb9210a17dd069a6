import pytest
from prometheus_client import REGISTRY

from auragold.errors import ImportRejected
from auragold.metrics.core import _NoOp, safe_counter
from auragold.store.base import AppState, MemoryStore
from auragold.transfer.service import TransferService


def _imports(outcome):
    return REGISTRY.get_sample_value(
        "auragold_imports_total", {"kind": "all", "mode": "merge", "outcome": outcome}
    ) or 0.0


def test_safe_counter_reuses_registered_collector():
    first = safe_counter("auragold_test_dup", "dup test", ["k"])
    second = safe_counter("auragold_test_dup", "dup test", ["k"])
    assert first is second


def test_safe_counter_disabled(monkeypatch):
    monkeypatch.setenv("DISABLE_PROMETHEUS", "1")
    c = safe_counter("auragold_test_disabled", "disabled")
    assert isinstance(c, _NoOp)
    c.labels("x").inc()


def test_import_outcomes_are_counted():
    service = TransferService(MemoryStore(AppState()))
    ok_before = _imports("ok")
    service.apply_all_import([], "merge")
    assert _imports("ok") == ok_before + 1

    rejected_before = _imports("rejected")
    with pytest.raises(ImportRejected):
        service.apply_all_import({"foo": 1}, "merge")
    assert _imports("rejected") == rejected_before + 1
