"""Game orchestration."""

from cybersystems.orchestration.game_runner import GameResult, GameRunner
from cybersystems.orchestration.history import ActionLog, LogEntry
from cybersystems.orchestration.tournament import run_tournament

__all__ = ["ActionLog", "GameResult", "GameRunner", "LogEntry", "run_tournament"]
