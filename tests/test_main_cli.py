import json
from pathlib import Path

import pytest

from casador.main import main

TEXT = "the quick hello brown fox jumps"


def _output(capsys) -> dict:
    return json.loads(capsys.readouterr().out)


def test_verifica_matched(capsys) -> None:
    main(["verifica", "--text", TEXT, "--start", "10", "--length", "5"])
    assert _output(capsys) == {"status": "ok", "result": "hello"}


def test_verifica_rejected(capsys) -> None:
    main(["verifica", "--text", TEXT, "--start", "11", "--length", "4"])
    assert _output(capsys) == {"status": "error", "result": ""}


def test_verifica_reads_text_file(tmp_path: Path, capsys) -> None:
    text_file = tmp_path / "texto.txt"
    text_file.write_text("café olá mundo", encoding="utf-8")
    main(["verifica", "--text-file", str(text_file), "--start", "5", "--length", "3"])
    assert _output(capsys) == {"status": "ok", "result": "olá"}


def test_lote_policies(capsys) -> None:
    spans = "[[10, 5], [22, 3], [11, 4]]"
    main(["lote", "--text", TEXT, "--spans", spans, "--policy", "filtered"])
    assert _output(capsys)["result"] == ["hello", "fox"]

    main(["lote", "--text", TEXT, "--spans", spans, "--policy", "unfiltered", "--parallel", "4"])
    assert _output(capsys)["result"] == ["hello", "fox", ""]


def test_lote_uses_config_policy(tmp_path: Path, capsys) -> None:
    cfg_path = tmp_path / "casador.yaml"
    cfg_path.write_text("batch_policy: filtered\n", encoding="utf-8")
    spans_file = tmp_path / "spans.json"
    spans_file.write_text("[[10, 5], [11, 4]]", encoding="utf-8")

    main(["--config", str(cfg_path), "lote", "--text", TEXT, "--spans-file", str(spans_file)])
    assert _output(capsys) == {"status": "ok", "result": ["hello"]}


def test_lote_malformed_exits(capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["lote", "--text", TEXT, "--spans", '[[10, 5], ["x", 1]]'])
    assert "#1" in str(excinfo.value.code)
    assert capsys.readouterr().out == ""


def test_lote_invalid_json_exits() -> None:
    with pytest.raises(SystemExit):
        main(["lote", "--text", TEXT, "--spans", "[[10, 5"])


def test_ping(capsys) -> None:
    main(["ping"])
    assert _output(capsys) == {"status": "ok", "result": "Success"}


def test_verifica_missing_text_file_exits(tmp_path: Path) -> None:
    missing = tmp_path / "nao_existe.txt"
    with pytest.raises(SystemExit) as excinfo:
        main(["verifica", "--text-file", str(missing), "--start", "0", "--length", "1"])
    assert "Arquivo não encontrado" in str(excinfo.value.code)


def test_lote_missing_spans_file_exits(tmp_path: Path) -> None:
    missing = tmp_path / "spans.json"
    with pytest.raises(SystemExit) as excinfo:
        main(["lote", "--text", TEXT, "--spans-file", str(missing)])
    assert "Arquivo não encontrado" in str(excinfo.value.code)


def test_verifica_negative_start_matches_adapter(capsys) -> None:
    main(["verifica", "--text", TEXT, "--start", "-1", "--length", "3"])
    output = _output(capsys)
    assert output["status"] == "malformed_candidate"
    assert "start_pos" in output["result"]
