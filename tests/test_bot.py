"""Tests for the heuristic bot."""

import pytest
from cybersystems.agents import HeuristicBot
from cybersystems.engine import (
    Color,
    DiscardCard,
    DrawCard,
    EndPlay,
    Modifier,
    OperationEffect,
    Phase,
    PlayDefense,
    PlayMalware,
    PlayModule,
    PlayOperation,
    PlayerView,
    get_legal_actions,
    validate,
)
from cybersystems.engine.rules import check_invariants
from cybersystems.orchestration import GameRunner

from helpers import defense, make_state, malware, module, operation, slotted


def _bot_state():
    hand = [malware(Color.RED), module(Color.GREEN), defense(Color.YELLOW)]
    return make_state(
        {"p1": hand, "p2": [module(Color.BLUE)]},
        systems={"p1": [slotted(Color.BLUE)], "p2": [slotted(Color.RED), slotted(Color.YELLOW)]},
    )


def test_decide_is_deterministic() -> None:
    bot = HeuristicBot()
    first = _bot_state()
    # Structurally equal copy built from the same cards.
    second = make_state(
        {p.id: list(p.hand) for p in first.players},
        systems={p.id: list(p.system) for p in first.players},
    )
    assert first == second
    assert bot.decide(first) == bot.decide(second)
    assert bot.decide(first) == bot.decide(first)


def test_completes_own_system_first() -> None:
    finisher = module(Color.YELLOW)
    state = make_state(
        {"p1": [malware(Color.RED), defense(Color.BLUE), finisher], "p2": []},
        systems={
            "p1": [slotted(Color.BLUE, Modifier.PROTECTED), slotted(Color.RED), slotted(Color.GREEN)],
            "p2": [slotted(Color.RED)],
        },
    )
    assert HeuristicBot().decide(state) == PlayModule("p1", finisher.id, Color.YELLOW)


def test_prefers_immunize_over_cure() -> None:
    shield = defense(Color.PURPLE)
    state = make_state(
        {"p1": [shield], "p2": []},
        systems={"p1": [slotted(Color.BLUE, Modifier.INFECTED), slotted(Color.RED, Modifier.PROTECTED)]},
    )
    assert HeuristicBot().decide(state) == PlayDefense("p1", shield.id, Color.RED)


def test_cure_ties_break_on_color_order() -> None:
    shield = defense(Color.PURPLE)
    state = make_state(
        {"p1": [shield], "p2": []},
        systems={"p1": [slotted(Color.GREEN, Modifier.INFECTED), slotted(Color.BLUE, Modifier.INFECTED)]},
    )
    assert HeuristicBot().decide(state) == PlayDefense("p1", shield.id, Color.BLUE)


def test_attacks_the_leader() -> None:
    bug = malware(Color.PURPLE)
    state = make_state(
        {"p1": [bug], "p2": [], "p3": []},
        systems={
            "p2": [slotted(Color.BLUE)],
            "p3": [slotted(Color.GREEN), slotted(Color.RED), slotted(Color.YELLOW, Modifier.IMMUNE)],
        },
    )
    assert HeuristicBot().decide(state) == PlayMalware("p1", bug.id, "p3", Color.RED)


def test_builds_system_when_nothing_better() -> None:
    wild, green = module(Color.PURPLE), module(Color.GREEN)
    state = make_state({"p1": [wild, green], "p2": []})
    assert HeuristicBot().decide(state) == PlayModule("p1", green.id, Color.GREEN)


def test_plays_profitable_operation() -> None:
    theft = operation(OperationEffect.MODULE_THEFT)
    state = make_state(
        {"p1": [theft, operation(OperationEffect.EXTRA_DRAW)], "p2": []},
        systems={"p2": [slotted(Color.YELLOW)]},
        deck=[module(Color.RED)],
    )
    action = HeuristicBot().decide(state)
    assert action == PlayOperation("p1", theft.id, "p2", Color.YELLOW)


def test_ends_play_without_useful_moves() -> None:
    state = make_state(
        {"p1": [malware(Color.RED), operation(OperationEffect.EXTRA_DRAW)], "p2": []},
        deck=[module(Color.RED)],
    )
    assert HeuristicBot().decide(state) == EndPlay("p1")


def test_draws_in_draw_phase() -> None:
    state = make_state({"p1": [], "p2": []}, phase=Phase.DRAW)
    assert HeuristicBot().decide(state) == DrawCard("p1")


def test_discards_least_useful_card() -> None:
    dead_module = module(Color.BLUE)  # blue slot already filled
    good_module = module(Color.RED)
    extra = operation(OperationEffect.EXTRA_DRAW)
    dead_defense = defense(Color.GREEN)  # no green module to treat
    state = make_state(
        {"p1": [good_module, extra, dead_module, dead_defense], "p2": []},
        systems={"p1": [slotted(Color.BLUE)]},
        phase=Phase.DISCARD,
    )
    action = HeuristicBot().decide(state)
    assert action == DiscardCard("p1", dead_module.id)
    assert validate(action, state) is None


def test_decide_on_finished_game() -> None:
    with pytest.raises(ValueError):
        HeuristicBot().decide(make_state({"p1": [], "p2": []}, winner="p2"))


def test_bot_game_is_repeatable() -> None:
    def play():
        agents = {"a": HeuristicBot("A"), "b": HeuristicBot("B")}
        return GameRunner(agents, seed=2024, max_turns=300).run()

    first, second = play(), play()
    assert first.winner == second.winner
    assert first.num_actions == second.num_actions
    assert first.final_state == second.final_state
    check_invariants(first.final_state, 67)
    assert first.final_state.get_player("a").is_bot


def test_get_action_matches_decide_from_view() -> None:
    bot = HeuristicBot()
    state = _bot_state()
    legal = get_legal_actions(state, "p1")
    view = PlayerView.from_state(state, "p1")
    assert bot.get_action(view, legal, "p1") == bot.decide(state)


class _RecordingAgent(HeuristicBot):
    def __init__(self, name):
        super().__init__(name)
        self.seen = []

    def get_action(self, player_view, legal_actions, player_id):
        self.seen.append(player_view)
        return super().get_action(player_view, legal_actions, player_id)


def test_runner_hands_agents_a_player_view() -> None:
    agents = {"a": _RecordingAgent("A"), "b": _RecordingAgent("B")}
    GameRunner(agents, seed=5, max_turns=20).run()
    for pid, agent in agents.items():
        assert agent.seen
        assert all(isinstance(view, PlayerView) for view in agent.seen)
        assert all(view.player_id == pid for view in agent.seen)
