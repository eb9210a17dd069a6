from auragold.transfer.classify import normalize_all_import, normalize_ledger_import
from auragold.transfer.result import Invalid, Valid


def rec_json(rid: str, ts: int):
    return {
        "id": rid,
        "grams": 1,
        "costPrice": 500,
        "sellingPrice": 510,
        "handlingFeeRate": 0.004,
        "actualProfit": 7.96,
        "desiredPrice": 510,
        "projectedProfit": 7.96,
        "profitMargin": 1.59,
        "timestamp": ts,
    }


def ledger_json(lid, name="Book", created_at=1000, records=None):
    return {"id": lid, "name": name, "createdAt": created_at, "records": records or []}


def all_envelope(ledgers, **payload_extra):
    payload = {"ledgers": ledgers}
    payload.update(payload_extra)
    return {
        "schema": "auragold.export",
        "version": 1,
        "kind": "all",
        "exportedAt": "2026-10-18T09:30:00.000Z",
        "payload": payload,
    }


def test_all_envelope_with_settings():
    res = normalize_all_import(
        all_envelope([ledger_json("L1", records=[rec_json("r1", 5)])], activeLedgerId="L1", lang="en", theme="light")
    )
    assert isinstance(res, Valid)
    assert [led.id for led in res.value.ledgers] == ["L1"]
    assert res.value.active_ledger_id == "L1"
    assert res.value.lang == "en"
    assert res.value.theme == "light"


def test_invalid_optional_settings_are_dropped_silently():
    res = normalize_all_import(all_envelope([ledger_json("L1")], activeLedgerId=3, lang="fr", theme="blue"))
    assert isinstance(res, Valid)
    assert res.value.active_ledger_id is None
    assert res.value.lang is None
    assert res.value.theme is None


def test_one_bad_ledger_aborts_all_import():
    bad = ledger_json("L2", records=[{"id": "r"}])
    res = normalize_all_import(all_envelope([ledger_json("L1"), bad]))
    assert isinstance(res, Invalid)
    assert res.error.path.startswith("payload.ledgers[1]")


def test_envelope_requires_ledger_array():
    env = all_envelope([])
    env["payload"]["ledgers"] = {"L1": ledger_json("L1")}
    assert isinstance(normalize_all_import(env), Invalid)
    env["payload"] = "nope"
    assert isinstance(normalize_all_import(env), Invalid)


def test_unrecognized_top_level_shapes_rejected():
    assert isinstance(normalize_all_import({"foo": "bar"}), Invalid)
    assert isinstance(normalize_all_import(42), Invalid)
    assert isinstance(normalize_all_import(None), Invalid)
    wrong_kind = all_envelope([])
    wrong_kind["kind"] = "ledger"
    assert isinstance(normalize_all_import(wrong_kind), Invalid)


def test_legacy_bare_array_accepted():
    res = normalize_all_import([ledger_json("L1", created_at=2000), ledger_json("L2", created_at=1000)])
    assert isinstance(res, Valid)
    assert [led.id for led in res.value.ledgers] == ["L2", "L1"]
    assert res.value.active_ledger_id is None
    assert res.value.lang is None


def test_duplicate_ledger_ids_in_one_file_are_collapsed():
    res = normalize_all_import(
        [
            ledger_json("L1", name="Old", created_at=2000, records=[rec_json("r1", 10)]),
            ledger_json("L1", name="New", created_at=1500, records=[rec_json("r1", 10), rec_json("r2", 20)]),
        ]
    )
    assert isinstance(res, Valid)
    assert len(res.value.ledgers) == 1
    led = res.value.ledgers[0]
    assert led.name == "New"
    assert led.created_at == 1500
    assert [r.id for r in led.records] == ["r2", "r1"]


def test_ledger_import_envelope_and_bare():
    led = ledger_json("L9", records=[rec_json("a", 1)])
    env = {"schema": "auragold.export", "version": 1, "kind": "ledger", "exportedAt": "x", "payload": {"ledger": led}}
    res = normalize_ledger_import(env)
    assert isinstance(res, Valid)
    assert res.value.id == "L9"

    bare = normalize_ledger_import(led)
    assert isinstance(bare, Valid)
    assert bare.value == res.value


def test_ledger_import_rejects_bad_payload():
    env = {"schema": "auragold.export", "kind": "ledger", "payload": {"ledger": {"id": "L"}}}
    res = normalize_ledger_import(env)
    assert isinstance(res, Invalid)
    assert res.error.path.startswith("payload.ledger")
    assert isinstance(normalize_ledger_import({"schema": "auragold.export", "kind": "ledger"}), Invalid)
    assert isinstance(normalize_ledger_import([]), Invalid)


def test_oversized_integer_rejects_import():
    rec = dict(rec_json("r1", 1), costPrice=10 ** 400)
    res = normalize_all_import([{"id": "L1", "name": "A", "createdAt": 1, "records": [rec]}])
    assert isinstance(res, Invalid)
    assert res.error.path == "ledgers[0].records[0].costPrice"
