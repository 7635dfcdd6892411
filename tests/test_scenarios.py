"""End-to-end scenarios driven through GameEngine.submit_action."""

from cybersystems.engine import (
    Color,
    DiscardCard,
    DrawCard,
    EndPlay,
    GameEngine,
    Modifier,
    MoveErrorCode,
    Phase,
    PlayDefense,
    PlayModule,
    check_winner,
)

from helpers import defense, make_state, module, slotted


def _submit(engine, action):
    result = engine.submit_action(action)
    assert result.ok, result.error
    return result.state


def test_four_modules_over_four_turns_wins() -> None:
    blue, red, green, yellow = (module(c) for c in (Color.BLUE, Color.RED, Color.GREEN, Color.YELLOW))
    p1_fillers = [defense(Color.BLUE), defense(Color.GREEN), defense(Color.YELLOW)]
    p2_cards = [defense(Color.YELLOW) for _ in range(6)]
    # Cards in the order they leave the deck: three dealing rounds, then draws.
    order = [
        blue, p2_cards[0], red, p2_cards[1], green, p2_cards[2],
        yellow, p2_cards[3],
        p1_fillers[0], p2_cards[4],
        p1_fillers[1], p2_cards[5],
        p1_fillers[2],
        defense(Color.RED), defense(Color.RED),
    ]
    engine = GameEngine.new_game(["A", "B"], deck=list(reversed(order)))

    for turn, card in enumerate((blue, red, green, yellow)):
        state = _submit(engine, DrawCard("A"))
        assert check_winner(state) is None
        state = _submit(engine, PlayModule("A", card.id, card.color))
        if turn < 3:
            assert check_winner(state) is None
            state = _submit(engine, EndPlay("A"))
            assert state.current_player.id == "B"

            _submit(engine, DrawCard("B"))
            state = _submit(engine, EndPlay("B"))
            assert state.phase == Phase.DISCARD
            first = state.get_player("B").hand[0]
            state = _submit(engine, DiscardCard("B", first.id))
            assert state.current_player.id == "A"

    assert check_winner(state) == "A"
    assert state.winner == "A"
    assert state.phase == Phase.FINISHED
    assert engine.current_state().get_player("B").system == ()

    for action in (EndPlay("A"), DrawCard("B")):
        result = engine.submit_action(action)
        assert result.error.code == MoveErrorCode.GAME_ALREADY_OVER


def test_cure_infected_module() -> None:
    cure = defense(Color.BLUE)
    infected = slotted(Color.BLUE, Modifier.INFECTED)
    engine = GameEngine(
        make_state({"A": [cure], "B": []}, systems={"A": [infected]})
    )
    state = _submit(engine, PlayDefense("A", cure.id, Color.BLUE))
    a = state.get_player("A")
    assert a.slot(Color.BLUE).modifier == Modifier.NONE
    assert cure not in a.hand
    assert [c.id for c in a.discard_pile] == [cure.id]
