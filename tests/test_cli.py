"""Smoke tests for the command line."""

from typer.testing import CliRunner

from cybersystems.cli import app
from cybersystems.engine.serialization import loads

runner = CliRunner()


def test_play_bots():
    result = runner.invoke(app, ["play", "--seed", "3", "--show-log"])
    assert result.exit_code == 0, result.output
    assert "Winner:" in result.output
    assert "drew a card" in result.output


def test_play_saves_state(tmp_path):
    out = tmp_path / "final.json"
    result = runner.invoke(app, ["play", "--seed", "5", "--save", str(out)])
    assert result.exit_code == 0, result.output
    state = loads(out.read_text())
    assert len(state.players) == 2


def test_play_rejects_unknown_agent():
    result = runner.invoke(app, ["play", "--agents", "bot,wizard"])
    assert result.exit_code != 0


def test_tournament():
    result = runner.invoke(app, ["tournament", "--games", "2", "--seed", "1", "--bots", "3"])
    assert result.exit_code == 0, result.output
    assert "Tournament results:" in result.output
    assert " wins" in result.output
