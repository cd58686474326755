"""Tests for agentlens replay and watch CLI commands."""

from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from agentlens.app.state import Model
from agentlens.cli.main import app

runner = CliRunner()

LINES = [
    '{"timestamp":"2024-01-01T09:00:00Z","payload":{"kind":"new_session"}}',
    '{"timestamp":"2024-01-01T09:00:01Z","payload":{"kind":"assistant_text","text":"Working on it"}}',
    '{"timestamp":"t","payload":{"kind":"bogus"}}',
    '{"timestamp":"2024-01-01T09:00:02Z","payload":{"kind":"stream_complete"}}',
]


@pytest.fixture(autouse=True)
def project_dir(tmp_path: Path, monkeypatch) -> Path:
    """Run each command from an empty project without touching root logging."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("agentlens.cli.common.configure_logging", lambda *args, **kwargs: None)
    return tmp_path


def _capture(directory: Path, lines: list[str]) -> Path:
    path = directory / "run.ndjson"
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


class TestReplayCommand:
    """Tests for agentlens replay CLI command."""

    def test_replay_prints_timeline(self, project_dir: Path):
        path = _capture(project_dir, LINES)
        result = runner.invoke(app, ["replay", str(path)])
        assert result.exit_code == 0
        assert "[REPLAY]" in result.output
        assert "Events: 3" in result.output
        assert "Working on it" in result.output
        assert "stream_complete" in result.output
        assert "skipped 1 undecodable line(s)" in result.output

    def test_replay_without_summary(self, project_dir: Path):
        path = _capture(project_dir, LINES[:2])
        result = runner.invoke(app, ["replay", "--no-summary", str(path)])
        assert result.exit_code == 0
        assert "skipped" not in result.output

    def test_replay_empty_capture(self, project_dir: Path):
        path = _capture(project_dir, [])
        result = runner.invoke(app, ["replay", str(path)])
        assert result.exit_code == 0
        assert "No events" in result.output

    def test_replay_missing_file(self, project_dir: Path):
        result = runner.invoke(app, ["replay", str(project_dir / "nope.ndjson")])
        assert result.exit_code == 1
        assert "File not found" in result.output

    def test_invalid_config_exits_nonzero(self, project_dir: Path):
        (project_dir / "agentlens.yaml").write_text("view:\n  page_size: 0\n")
        path = _capture(project_dir, LINES)
        result = runner.invoke(app, ["replay", str(path)])
        assert result.exit_code == 1
        assert "Invalid agentlens.yaml" in result.output
        assert "view.page_size" in result.output


class TestWatchCommand:
    """Tests for agentlens watch CLI wiring (the live loop itself is faked)."""

    def _fake_dashboard(self, monkeypatch) -> list[dict]:
        calls: list[dict] = []

        async def fake_run(source, config, *, console, follow=False, capture=None, read_input=True):
            calls.append(
                {"source": source, "config": config, "follow": follow, "capture": capture}
            )
            if capture is not None:
                capture.write('{"kind": "x"}')
            return Model()

        monkeypatch.setattr("agentlens.cli.watch_cmd.run_live_dashboard", fake_run)
        return calls

    def test_defaults_to_configured_endpoint(self, project_dir: Path, monkeypatch):
        calls = self._fake_dashboard(monkeypatch)
        (project_dir / "agentlens.yaml").write_text("stream:\n  endpoint: http://agent:9/events\n")
        result = runner.invoke(app, ["watch"])
        assert result.exit_code == 0
        assert calls[0]["source"] == "http://agent:9/events"
        assert calls[0]["follow"] is False
        assert "0 event(s) received" in result.output

    def test_options_are_passed_through(self, project_dir: Path, monkeypatch):
        calls = self._fake_dashboard(monkeypatch)
        capture = project_dir / "out" / "capture.ndjson"
        result = runner.invoke(
            app,
            ["watch", "run.ndjson", "--follow", "--capture", str(capture), "--page-size", "3"],
        )
        assert result.exit_code == 0
        call = calls[0]
        assert call["source"] == "run.ndjson"
        assert call["follow"] is True
        assert call["config"].view.page_size == 3
        assert capture.read_text(encoding="utf-8") == '{"kind":"x"}\n'

    def test_page_size_out_of_range(self, project_dir: Path, monkeypatch):
        self._fake_dashboard(monkeypatch)
        result = runner.invoke(app, ["watch", "--page-size", "0"])
        assert result.exit_code != 0

    def test_keyboard_interrupt_is_clean(self, project_dir: Path, monkeypatch):
        async def interrupted(*args, **kwargs):
            raise KeyboardInterrupt

        monkeypatch.setattr("agentlens.cli.watch_cmd.run_live_dashboard", interrupted)
        result = runner.invoke(app, ["watch", "run.ndjson"])
        assert result.exit_code == 0
        assert "Interrupted." in result.output
