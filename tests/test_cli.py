"""Tests for the CLI commands."""

import json
import subprocess
from pathlib import Path

import pytest
from typer.testing import CliRunner

from carapace import __version__
from carapace.cli import app

runner = CliRunner()


@pytest.fixture
def diff_file(tmp_path: Path, sample_diff_multi: str) -> Path:
    path = tmp_path / "change.diff"
    path.write_text(sample_diff_multi)
    return path


class TestVersion:
    def test_version_flag(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert f"carapace {__version__}" in result.output


class TestInit:
    def test_creates_config(self, tmp_git_repo: Path, monkeypatch):
        monkeypatch.chdir(tmp_git_repo)
        result = runner.invoke(app, ["init"])
        assert result.exit_code == 0
        assert (tmp_git_repo / ".carapace.toml").exists()

    def test_refuses_overwrite(self, tmp_git_repo: Path, monkeypatch):
        monkeypatch.chdir(tmp_git_repo)
        (tmp_git_repo / ".carapace.toml").write_text("existing")
        result = runner.invoke(app, ["init"])
        assert result.exit_code == 1
        assert (tmp_git_repo / ".carapace.toml").read_text() == "existing"

    def test_outside_repo(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(app, ["init"])
        assert result.exit_code == 2


class TestChunk:
    def test_json_from_file(self, diff_file: Path, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(app, ["chunk", str(diff_file), "--format", "json"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["total_files"] == 2
        assert data["chunks"][0]["files"][0]["path"] == "a.py"

    def test_json_from_stdin(self, sample_diff_modified: str, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(
            app, ["chunk", "-", "-f", "json", "--include-diff"], input=sample_diff_modified
        )
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["chunks"][0]["diff"].startswith("--- a/src/index.ts\n")

    def test_max_tokens_option(self, diff_file: Path, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(app, ["chunk", str(diff_file), "-f", "json", "-m", "40"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["max_chunk_tokens"] == 40
        assert data["total_chunks"] == 3

    def test_config_file_budget(self, diff_file: Path, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        config = tmp_path / "custom.toml"
        config.write_text('[chunking]\nmax_tokens = 40\n[output]\nformat = "json"\n')
        result = runner.invoke(app, ["chunk", str(diff_file), "--config", str(config)])
        assert result.exit_code == 0
        assert json.loads(result.stdout)["max_chunk_tokens"] == 40

    def test_terminal_output(self, diff_file: Path, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(app, ["chunk", str(diff_file)])
        assert result.exit_code == 0
        assert "Review Chunks" in result.output

    def test_output_file(self, diff_file: Path, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        report = tmp_path / "report.json"
        result = runner.invoke(app, ["chunk", str(diff_file), "--output", str(report)])
        assert result.exit_code == 0
        assert json.loads(report.read_text())["total_chunks"] == 1

    def test_dry_run(self, diff_file: Path, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(app, ["chunk", str(diff_file), "--dry-run"])
        assert result.exit_code == 0
        assert "Dry run" in result.output
        assert "contracts/Token.sol" in result.output

    def test_staged_changes(self, tmp_git_repo: Path, monkeypatch):
        monkeypatch.chdir(tmp_git_repo)
        (tmp_git_repo / "Vault.sol").write_text("contract Vault {}\n")
        subprocess.run(["git", "add", "Vault.sol"], cwd=tmp_git_repo, capture_output=True)
        result = runner.invoke(app, ["chunk", "--format", "json"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        chunk = data["chunks"][0]
        assert chunk["files"][0]["status"] == "added"
        assert chunk["classifications"]["Vault.sol"]["is_smart_contract"] is True

    def test_no_staged_changes(self, tmp_git_repo: Path, monkeypatch):
        monkeypatch.chdir(tmp_git_repo)
        result = runner.invoke(app, ["chunk", "--format", "json"])
        assert result.exit_code == 0
        assert json.loads(result.stdout)["total_chunks"] == 0


class TestExitCodes:
    def test_exit_2_bad_format(self, diff_file: Path, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(app, ["chunk", str(diff_file), "--format", "invalid"])
        assert result.exit_code == 2

    def test_exit_2_malformed_diff(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        bad = tmp_path / "bad.diff"
        bad.write_text("@@ -1 +1 @@\n-a\n+b\n")
        result = runner.invoke(app, ["chunk", str(bad)])
        assert result.exit_code == 2
        assert "Malformed diff" in result.output

    def test_exit_2_zero_budget(self, diff_file: Path, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(app, ["chunk", str(diff_file), "--max-tokens", "0"])
        assert result.exit_code == 2

    def test_exit_2_missing_file(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(app, ["chunk", str(tmp_path / "nope.diff")])
        assert result.exit_code == 2

    def test_exit_2_bad_config(self, diff_file: Path, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / ".carapace.toml").write_text("[chunking]\nmax_tokens = -1\n")
        result = runner.invoke(app, ["chunk", str(diff_file)])
        assert result.exit_code == 2
        assert "Config error" in result.output

    @pytest.mark.parametrize("command", [["chunk", "{diff}", "--format", "json"], ["rules"]])
    def test_exit_2_broken_rule_file(self, diff_file: Path, tmp_path: Path, monkeypatch, command):
        monkeypatch.chdir(tmp_path)
        rules_dir = tmp_path / ".carapace-rules"
        rules_dir.mkdir()
        (rules_dir / "bad.yaml").write_text("id: [unclosed\n")
        args = [a.format(diff=diff_file) for a in command]
        result = runner.invoke(app, args)
        assert result.exit_code == 2
        assert "Config error" in result.output


class TestClassify:
    def test_json(self):
        result = runner.invoke(app, ["classify", "a.sol", "b.tsx", "c.txt", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["a.sol"]["chain"] == "solidity"
        assert data["b.tsx"]["language"] == "typescript"
        assert data["c.txt"] == {"language": "unknown", "is_smart_contract": False}

    def test_table(self):
        result = runner.invoke(app, ["classify", "main.go"])
        assert result.exit_code == 0
        assert "go" in result.output


class TestRules:
    def test_lists_default_rules(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(app, ["rules"])
        assert result.exit_code == 0
        assert "gen-security" in result.output
        assert "sol-reentrancy" not in result.output

    def test_chain_rules(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(app, ["rules", "--chain", "solidity"])
        assert result.exit_code == 0
        assert "sol-reentrancy" in result.output
