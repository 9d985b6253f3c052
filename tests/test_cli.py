"""Tests for the CLI."""

import json
from pathlib import Path

import pytest

from dweller.cli import cli


def run_cli(monkeypatch, *args: str) -> int:
    monkeypatch.setattr("sys.argv", ["dweller", *args])
    with pytest.raises(SystemExit) as exc_info:
        cli()
    return exc_info.value.code


class TestCli:
    """Tests for the dweller command."""

    @pytest.fixture(autouse=True)
    def clean_env(self, monkeypatch, tmp_path: Path):
        monkeypatch.delenv("DWELLER_VAULT_PATH", raising=False)
        # keep any .env in the working directory out of the way
        monkeypatch.chdir(tmp_path)

    def test_query(self, tmp_vault: Path, monkeypatch, capsys):
        code = run_cli(monkeypatch, "--vault", str(tmp_vault), "-q", "LIST FROM #x AND #y")

        assert code == 0
        data = json.loads(capsys.readouterr().out)
        assert [item["name"] for item in data["items"]] == ["C"]

    def test_query_error(self, tmp_vault: Path, monkeypatch, capsys):
        code = run_cli(monkeypatch, "--vault", str(tmp_vault), "-q", "LIST FORM #x")

        assert code == 1
        assert "Parse error" in capsys.readouterr().err

    def test_note(self, tmp_vault: Path, monkeypatch, capsys):
        code = run_cli(monkeypatch, "--vault", str(tmp_vault), "-n", "Projects/Roadmap")

        assert code == 0
        assert json.loads(capsys.readouterr().out)["name"] == "Roadmap"

    def test_note_contents(self, tmp_vault: Path, monkeypatch, capsys):
        code = run_cli(monkeypatch, "--vault", str(tmp_vault), "-n", "A", "--contents")

        assert code == 0
        assert "First note." in capsys.readouterr().out

    def test_missing_note(self, tmp_vault: Path, monkeypatch):
        assert run_cli(monkeypatch, "--vault", str(tmp_vault), "-n", "Nope") == 1

    def test_tree(self, tmp_vault: Path, monkeypatch, capsys):
        code = run_cli(monkeypatch, "--vault", str(tmp_vault), "--tree")

        assert code == 0
        out = capsys.readouterr().out
        assert out.startswith("vault/")
        assert "  Projects/" in out
        assert "    Roadmap" in out

    def test_stats(self, tmp_vault: Path, monkeypatch, capsys):
        code = run_cli(monkeypatch, "--vault", str(tmp_vault))

        assert code == 0
        assert "4 notes, 1 files, 1 folders" in capsys.readouterr().out

    def test_no_vault(self, monkeypatch):
        assert run_cli(monkeypatch) == 1

    def test_bad_vault(self, tmp_path: Path, monkeypatch):
        assert run_cli(monkeypatch, "--vault", str(tmp_path / "missing")) == 1
