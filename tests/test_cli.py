from __future__ import annotations

import json
import signal
from pathlib import Path

import pytest

from birb_devtools.cli import main


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, sample_data: dict) -> Path:
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("BIRB_TOKEN", raising=False)
    (tmp_path / "docs.json").write_text(json.dumps(sample_data), encoding="utf-8")
    return tmp_path


def test_docs_command_renders_site(workdir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    before = signal.getsignal(signal.SIGINT)
    assert main(["docs"]) == 0

    assert (workdir / "docs" / "classes" / "Client.md").exists()
    assert (workdir / "docs" / "types" / "index.md").exists()
    assert not (workdir / "docs" / "interfaces" / "ClientOptions.md").exists()

    logs = list((workdir / "logs").glob("debug-*.log"))
    assert len(logs) == 1
    text = logs[0].read_text(encoding="utf-8")
    assert f"] working in {workdir}" in text
    assert "] write: /classes/Client.md" in text
    assert "] miss: /interfaces/ClientOptions.md" in text
    assert "wrote 4 index page(s) and 3 symbol page(s)" in text
    assert text.rstrip().splitlines()[-1].startswith("[info] Birb.JS Debug Log end at ")

    err = capsys.readouterr().err
    assert "[warn] miss: /interfaces/ClientOptions.md" in err
    assert signal.getsignal(signal.SIGINT) == before


def test_flags_override_paths(workdir: Path) -> None:
    (workdir / "in").mkdir()
    (workdir / "docs.json").rename(workdir / "in" / "api.json")
    assert main(["docs", "--input", "in/api.json", "--output", "site", "--no-log-file"]) == 0
    assert (workdir / "site" / "enumerations" / "Color.md").exists()
    assert not (workdir / "logs").exists()


def test_config_file_is_used(workdir: Path) -> None:
    (workdir / "birb-devtools.yml").write_text("output: public\nlogs: debug-logs\n", encoding="utf-8")
    assert main(["docs"]) == 0
    assert (workdir / "public" / "classes" / "index.md").exists()
    assert list((workdir / "debug-logs").glob("debug-*.log"))


def test_token_is_redacted_in_log(workdir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BIRB_TOKEN", "Client")
    assert main(["docs", "--log-dir", "out-logs"]) == 0
    text = next((workdir / "out-logs").glob("debug-*.log")).read_text(encoding="utf-8")
    assert "/classes/Client.md" not in text
    assert "/classes/" + "*" * 54 + ".md" in text


def test_invalid_document_returns_1(workdir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    (workdir / "docs.json").write_text(json.dumps({"groups": []}), encoding="utf-8")
    assert main(["docs", "--no-log-file"]) == 1
    assert "[error] Document must define `children`." in capsys.readouterr().err
    assert not (workdir / "docs").exists()


def test_missing_input_returns_1(workdir: Path) -> None:
    assert main(["docs", "--input", "missing.json", "--no-log-file"]) == 1


def test_undecodable_input_returns_1(workdir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    (workdir / "docs.json").write_bytes(b"\xff\xfe\x00")
    assert main(["docs", "--no-log-file"]) == 1
    assert "[error] Failed reading" in capsys.readouterr().err
    assert not (workdir / "docs").exists()


def test_missing_config_exits_1(workdir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as exc:
        main(["docs", "--config", "nope.yml"])
    assert exc.value.code == 1
    assert "Config file does not exist" in capsys.readouterr().err
