"""CLI entry point."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from cybersystems.config import (
    configure_logging,
    load_environment,
    log_level_from_env,
    rules_from_env,
)

# Load environment variables from .env file
load_environment()

app = typer.Typer(help="Cyber Systems card game with heuristic bots and human players")


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Logging level (default: CYBERSYSTEMS_LOG_LEVEL or WARNING)",
    ),
) -> None:
    try:
        configure_logging(log_level or log_level_from_env())
    except ValueError as e:
        raise typer.BadParameter(str(e)) from e


def _parse_agents(agent_specs: str, rules) -> dict[str, "AgentProtocol"]:
    from cybersystems.agent.protocol import AgentProtocol
    from cybersystems.agents.heuristic_bot import HeuristicBot
    from cybersystems.agents.human_agent import HumanAgent

    parts = [s.strip().lower() for s in agent_specs.split(",") if s.strip()]
    if len(parts) < 2:
        raise typer.BadParameter("At least two agents are required.")
    agents: dict[str, AgentProtocol] = {}
    for i, kind in enumerate(parts):
        pid = f"player_{i}"
        if kind == "bot":
            agents[pid] = HeuristicBot(name=f"Bot_{i}", rules=rules)
        elif kind == "human":
            agents[pid] = HumanAgent(name=f"Human_{i}")
        else:
            raise typer.BadParameter(f"Unknown agent type: {kind}. Use 'bot' or 'human'.")
    return agents


@app.command()
def play(
    agents: str = typer.Option(
        "bot,bot",
        "--agents",
        "-a",
        help="Comma-separated: bot or human (e.g. human,bot,bot)",
    ),
    seed: Optional[int] = typer.Option(None, "--seed", "-s", help="Deck seed"),
    max_turns: int = typer.Option(500, "--max-turns", help="Turn limit before a draw"),
    save: Optional[Path] = typer.Option(None, "--save", help="Write the final state as JSON"),
    show_log: bool = typer.Option(False, "--show-log", help="Print every accepted action"),
) -> None:
    """Run a single game."""
    from cybersystems.engine.serialization import dumps
    from cybersystems.orchestration.game_runner import GameRunner

    rules = rules_from_env()
    agent_map = _parse_agents(agents, rules)
    runner = GameRunner(agent_map, seed=seed, rules=rules, max_turns=max_turns)
    result = runner.run()
    if show_log:
        for line in result.log.describe():
            typer.echo(line)
    typer.echo(f"Winner: {result.winner or 'None (draw)'}")
    typer.echo(f"Turns: {result.num_turns}")
    typer.echo(f"Actions: {result.num_actions}")
    if save is not None:
        save.write_text(dumps(result.final_state, indent=2))
        typer.echo(f"Saved final state to {save}")


@app.command()
def tournament(
    bots: int = typer.Option(2, "--bots", "-b", help="Number of bots at the table"),
    games: int = typer.Option(100, "--games", "-g", help="Number of games"),
    seed: Optional[int] = typer.Option(None, "--seed", "-s", help="Series seed"),
    max_turns: int = typer.Option(500, "--max-turns", help="Turn limit per game"),
) -> None:
    """Run a bot-vs-bot tournament."""
    from cybersystems.orchestration.tournament import run_tournament

    rules = rules_from_env()
    agent_map = _parse_agents(",".join(["bot"] * bots), rules)
    wins = run_tournament(agent_map, num_games=games, seed=seed, rules=rules, max_turns=max_turns)
    typer.echo("Tournament results:")
    for pid, w in sorted(wins.items(), key=lambda x: -x[1]):
        typer.echo(f"  {pid}: {w} wins")


if __name__ == "__main__":
    app()
