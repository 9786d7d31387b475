"""Simulates single games between two strategy-driven players."""

from rochambeau.game.moves import Outcome, Round, judge
from rochambeau.game.player import Player, Strategy


def simulate_one_game(
    player_a: Player,
    strategy_a: Strategy,
    player_b: Player,
    strategy_b: Strategy,
) -> Outcome:
    """Play one round and record it into both players' histories.

    Both moves are chosen before either history is updated, so the order in
    which the players decide does not matter.

    Args:
        player_a: First player.
        strategy_a: Strategy used by ``player_a``.
        player_b: Second player.
        strategy_b: Strategy used by ``player_b``.

    Returns:
        The outcome from ``player_a``'s perspective.
    """
    move_a = player_a.play(strategy_a)
    move_b = player_b.play(strategy_b)

    round_a = Round(my_move=move_a, their_move=move_b, outcome=judge(move_a, move_b))
    round_b = round_a.mirrored()

    player_a.add_round(round_a)
    player_b.add_round(round_b)
    return round_a.outcome
