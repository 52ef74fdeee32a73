"""Unit tests for the CLI — command registration and basic behavior."""

from __future__ import annotations

import json
from pathlib import Path

from typer.testing import CliRunner

from buildcast.cli.app import app

runner = CliRunner()


def _script(tmp_path: Path, steps: list[dict]) -> Path:
    path = tmp_path / "script.json"
    path.write_text(json.dumps({"steps": steps}), encoding="utf-8")
    return path


class TestCliApp:
    """The CLI must register all expected commands and show help."""

    def test_no_args_shows_help(self):
        result = runner.invoke(app, [])
        # Typer's no_args_is_help may exit with 0 or 2 depending on version
        assert result.exit_code in (0, 2)
        assert "usage" in result.output.lower()

    def test_help_flag(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "replay" in result.output
        assert "demo" in result.output
        assert "config" in result.output


class TestReplayCommand:
    def test_replay_prints_broadcasts_and_snapshot(self, tmp_path: Path):
        path = _script(
            tmp_path,
            [
                {"kind": "client_invalid"},
                {"kind": "client_done", "result": {"hash": "abc123"}},
                {"kind": "join", "listener": "late"},
            ],
        )
        result = runner.invoke(app, ["replay", str(path)])
        assert result.exit_code == 0, result.output
        assert "BUILDING" in result.output
        assert "abc123" in result.output
        assert "late" in result.output

    def test_replay_writes_jsonl(self, tmp_path: Path):
        path = _script(
            tmp_path,
            [
                {"kind": "client_done", "result": {"hash": "A"}},
                {"kind": "server_done", "result": {"hash": "A", "errors": ["E1"]}},
            ],
        )
        out = tmp_path / "out" / "events.jsonl"
        result = runner.invoke(app, ["replay", str(path), "--jsonl", str(out), "--quiet"])
        assert result.exit_code == 0, result.output
        lines = [json.loads(line) for line in out.read_text(encoding="utf-8").splitlines()]
        assert [line["errors"] for line in lines] == [[], ["E1"]]

    def test_replay_missing_script(self, tmp_path: Path):
        result = runner.invoke(app, ["replay", str(tmp_path / "nope.json")])
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_replay_invalid_script(self, tmp_path: Path):
        path = tmp_path / "bad.json"
        path.write_text('[{"kind": "server_done"}]', encoding="utf-8")
        result = runner.invoke(app, ["replay", str(path)])
        assert result.exit_code == 1
        assert "Invalid script" in result.output


class TestOtherCommands:
    def test_demo_runs(self):
        result = runner.invoke(app, ["demo", "--delay", "0"])
        assert result.exit_code == 0, result.output
        assert "Module not found" in result.output
        assert "late" in result.output

    def test_config_shows_settings(self):
        result = runner.invoke(app, ["config"])
        assert result.exit_code == 0
        assert "log_level" in result.output

    def test_replay_uses_configured_event_log(self, tmp_path: Path, monkeypatch):
        from buildcast.config import config

        out = tmp_path / "configured.jsonl"
        monkeypatch.setattr(config, "event_log_path", out)
        path = _script(tmp_path, [{"kind": "client_invalid"}])
        result = runner.invoke(app, ["replay", str(path), "--quiet"])
        assert result.exit_code == 0, result.output
        assert json.loads(out.read_text(encoding="utf-8")) == {"action": "building"}
