import copy

from auragold.ledger.model import Ledger, TradeRecord
from auragold.transfer.merge import count_new_records, merge_ledgers


def rec(rid: str, ts: int) -> TradeRecord:
    return TradeRecord(
        id=rid,
        grams=1.0,
        cost_price=500.0,
        selling_price=510.0,
        handling_fee_rate=0.004,
        actual_profit=7.96,
        desired_price=510.0,
        projected_profit=7.96,
        profit_margin=1.59,
        timestamp=ts,
    )


def test_merge_conflict_resolution():
    existing = [Ledger(id="L1", name="A", created_at=1000, records=[rec("r1", 10)])]
    incoming = [Ledger(id="L1", name="B", created_at=500, records=[rec("r1", 10), rec("r2", 20)])]
    merged = merge_ledgers(existing, incoming)
    assert merged == [Ledger(id="L1", name="B", created_at=500, records=[rec("r2", 20), rec("r1", 10)])]


def test_merge_is_additive_and_idempotent():
    existing = [
        Ledger(id="L1", name="A", created_at=1000, records=[rec("r1", 10)]),
        Ledger(id="L3", name="C", created_at=3000, records=[]),
    ]
    incoming = [
        Ledger(id="L2", name="B", created_at=2000, records=[rec("x", 5)]),
        Ledger(id="L1", name="A2", created_at=1200, records=[rec("r1", 99), rec("r3", 30)]),
    ]
    once = merge_ledgers(existing, incoming)
    twice = merge_ledgers(once, incoming)
    assert twice == once
    assert [led.id for led in once] == ["L1", "L2", "L3"]
    l1 = once[0]
    # existing copy of r1 is kept, not the incoming one
    assert [(r.id, r.timestamp) for r in l1.records] == [("r3", 30), ("r1", 10)]
    assert count_new_records(existing, once) == 2


def test_empty_incoming_name_keeps_existing_name():
    existing = [Ledger(id="L1", name="Keep", created_at=100, records=[])]
    incoming = [Ledger(id="L1", name="", created_at=900, records=[])]
    merged = merge_ledgers(existing, incoming)
    assert merged[0].name == "Keep"
    assert merged[0].created_at == 100


def test_merge_does_not_mutate_inputs():
    existing = [Ledger(id="L1", name="A", created_at=1000, records=[rec("r1", 10)])]
    incoming = [Ledger(id="L1", name="B", created_at=500, records=[rec("r2", 20)])]
    before_existing = copy.deepcopy(existing)
    before_incoming = copy.deepcopy(incoming)
    merge_ledgers(existing, incoming)
    assert existing == before_existing
    assert incoming == before_incoming


def test_result_sorted_oldest_ledger_first():
    incoming = [
        Ledger(id="c", name="c", created_at=300),
        Ledger(id="a", name="a", created_at=100),
        Ledger(id="b", name="b", created_at=200),
    ]
    assert [led.id for led in merge_ledgers([], incoming)] == ["a", "b", "c"]
