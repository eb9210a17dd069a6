import json

import pytest

from auragold.main import main
from auragold.store.sqlite_store import SQLiteStore


@pytest.fixture
def cfg(tmp_path, monkeypatch):
    for var in ("AURAGOLD_STORE_PATH", "AURAGOLD_EXPORT_DIR", "AURAGOLD_LOG_LEVEL", "GEMINI_API_KEY"):
        monkeypatch.delenv(var, raising=False)
    path = tmp_path / "config.yaml"
    path.write_text(
        f"store_path: {tmp_path / 'db.sqlite'}\n"
        f"export_dir: {tmp_path / 'exports'}\n"
        "default_lang: en\n"
        "llm:\n"
        "  provider: offline\n",
        encoding="utf-8",
    )
    return tmp_path, str(path)


def test_create_trade_report_and_export(cfg, capsys):
    tmp_path, config = cfg
    assert main(["--config", config, "new-ledger", "Daily"]) == 0
    ledger_id = capsys.readouterr().out.strip()
    assert main(["--config", config, "add-trade", "10", "500", "520", "--ledger", ledger_id]) == 0
    assert "profit=179.20" in capsys.readouterr().out

    assert main(["--config", config, "report", "--ledger", ledger_id]) == 0
    out = capsys.readouterr().out
    assert "[Daily] Gold Trading Report" in out
    assert "- Trades: 1" in out

    assert main(["--config", config, "export-all"]) == 0
    files = list((tmp_path / "exports").glob("auragold-all-*.json"))
    assert len(files) == 1
    data = json.loads(files[0].read_text(encoding="utf-8"))
    assert data["payload"]["ledgers"][0]["name"] == "Daily"


def test_import_rejected_prints_message_and_keeps_state(cfg, capsys):
    tmp_path, config = cfg
    main(["--config", config, "new-ledger", "Keep"])
    capsys.readouterr()
    bad = tmp_path / "bad.json"
    bad.write_text(json.dumps({"foo": "bar"}), encoding="utf-8")
    assert main(["--config", config, "import-all", str(bad), "--mode", "replace", "--yes"]) == 1
    assert "Unsupported JSON" in capsys.readouterr().err
    state = SQLiteStore(str(tmp_path / "db.sqlite")).load()
    assert [led.name for led in state.ledgers] == ["Keep"]


def test_malformed_json_message(cfg, capsys):
    tmp_path, config = cfg
    broken = tmp_path / "broken.json"
    broken.write_text("{", encoding="utf-8")
    assert main(["--config", config, "import-all", str(broken)]) == 1
    assert "not valid JSON" in capsys.readouterr().err


def test_replace_import_declined_on_stdin(cfg, capsys, monkeypatch):
    tmp_path, config = cfg
    main(["--config", config, "new-ledger", "Keep"])
    capsys.readouterr()
    legacy = tmp_path / "legacy.json"
    legacy.write_text("[]", encoding="utf-8")
    monkeypatch.setattr("builtins.input", lambda _prompt: "n")
    assert main(["--config", config, "import-all", str(legacy), "--mode", "replace"]) == 0
    assert "Import cancelled" in capsys.readouterr().out
    assert len(SQLiteStore(str(tmp_path / "db.sqlite")).load().ledgers) == 1


def test_import_ledger_replace_unknown_target(cfg, capsys):
    tmp_path, config = cfg
    one = tmp_path / "one.json"
    one.write_text(json.dumps({"id": "x", "name": "X", "createdAt": 1, "records": []}), encoding="utf-8")
    assert main(["--config", config, "import-ledger", str(one), "--mode", "replace", "--target", "nope", "--yes"]) == 1
    assert "Target ledger not found" in capsys.readouterr().err


def test_analyze_offline(cfg, capsys):
    tmp_path, config = cfg
    main(["--config", config, "new-ledger", "Daily"])
    ledger_id = capsys.readouterr().out.strip()
    assert main(["--config", config, "analyze", "--ledger", ledger_id]) == 0
    assert "No trades to analyze yet." in capsys.readouterr().out


def test_rename_remove_and_delete(cfg, capsys):
    tmp_path, config = cfg
    main(["--config", config, "new-ledger", "Old"])
    ledger_id = capsys.readouterr().out.strip()
    main(["--config", config, "add-trade", "1", "500", "510", "--ledger", ledger_id])
    record_id = capsys.readouterr().out.split()[0]

    assert main(["--config", config, "rename-ledger", ledger_id, "New"]) == 0
    assert main(["--config", config, "remove-trade", record_id, "--ledger", ledger_id]) == 0
    state = SQLiteStore(str(tmp_path / "db.sqlite")).load()
    assert state.ledgers[0].name == "New"
    assert state.ledgers[0].records == []

    assert main(["--config", config, "delete-ledger", ledger_id, "--yes"]) == 0
    assert SQLiteStore(str(tmp_path / "db.sqlite")).load().ledgers == []
    assert main(["--config", config, "delete-ledger", ledger_id, "--yes"]) == 1


def test_add_trade_rejects_non_finite_and_keeps_ledgers(cfg, capsys):
    tmp_path, config = cfg
    main(["--config", config, "new-ledger", "Daily"])
    ledger_id = capsys.readouterr().out.strip()
    main(["--config", config, "add-trade", "1", "500", "510", "--ledger", ledger_id])
    assert main(["--config", config, "add-trade", "nan", "500", "510", "--ledger", ledger_id]) == 1
    assert main(["--config", config, "add-trade", "1e308", "1e308", "0", "--ledger", ledger_id]) == 1
    state = SQLiteStore(str(tmp_path / "db.sqlite")).load()
    assert len(state.ledgers) == 1
    assert len(state.ledgers[0].records) == 1


def test_remove_trade_unknown_ledger(cfg, capsys):
    tmp_path, config = cfg
    main(["--config", config, "new-ledger", "Daily"])
    ledger_id = capsys.readouterr().out.strip()
    assert main(["--config", config, "remove-trade", "r1", "--ledger", "nope"]) == 1
    assert "Target ledger not found" in capsys.readouterr().err
    assert SQLiteStore(str(tmp_path / "db.sqlite")).load().active_ledger_id == ledger_id
