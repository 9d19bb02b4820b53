"""
Tests for dice, deck handling, the roulette and the prize lottery.
"""

import random

import pytest

from monopoly_ledger.random_events import (
    PRIZE_TIERS,
    PrizeKind,
    draw_card,
    draw_prize,
    is_doubles,
    roll_dice,
    select_roulette_property,
    shuffle_cards,
)


def test_roll_dice_is_deterministic_with_seed():
    first = [roll_dice(random.Random(42)) for _ in range(3)]
    second = [roll_dice(random.Random(42)) for _ in range(3)]
    assert first == second


def test_roll_dice_range():
    rng = random.Random(1)
    for _ in range(200):
        die1, die2 = roll_dice(rng)
        assert 1 <= die1 <= 6
        assert 1 <= die2 <= 6


def test_is_doubles():
    assert is_doubles((4, 4))
    assert not is_doubles((4, 5))


def test_shuffle_cards_is_a_permutation():
    cards = [f"card-{i}" for i in range(10)]
    shuffled = shuffle_cards(cards, random.Random(3))

    assert sorted(shuffled) == sorted(cards)
    assert cards == [f"card-{i}" for i in range(10)]


def test_draw_card_moves_head_to_discard():
    deck = ["a", "b", "c"]
    discard = []

    assert draw_card(deck, discard, random.Random(0)) == "a"
    assert deck == ["b", "c"]
    assert discard == ["a"]


def test_draw_card_reshuffles_discard():
    deck = []
    discard = ["a", "b", "c"]

    card = draw_card(deck, discard, random.Random(0))

    assert card in {"a", "b", "c"}
    assert len(deck) == 2
    assert discard == [card]


def test_draw_card_from_nothing():
    with pytest.raises(ValueError):
        draw_card([], [], random.Random(0))


def test_roulette_is_deterministic_with_seed():
    catalog = ["mediterranean", "baltic", "boardwalk"]
    assert select_roulette_property(catalog, random.Random(7)) == select_roulette_property(catalog, random.Random(7))

    with pytest.raises(ValueError):
        select_roulette_property([], random.Random(7))


def test_prize_tiers_are_cumulative():
    bounds = [threshold for threshold, _ in PRIZE_TIERS]
    assert bounds == sorted(bounds)
    assert bounds[-1] < 100


@pytest.mark.parametrize("roll,kind", [(1, PrizeKind.CASH), (75, PrizeKind.CASH), (76, PrizeKind.PROPERTY)])
def test_draw_prize_with_fixed_roll(roll, kind):
    prize = draw_prize(random.Random(0), ["boardwalk"], roll=roll)

    assert prize.kind == kind
    assert prize.roll == roll
    if kind == PrizeKind.PROPERTY:
        assert prize.property_id == "boardwalk"


def test_draw_prize_random_roll():
    prize = draw_prize(random.Random(5), ["boardwalk"])
    assert 1 <= prize.roll <= 100


def test_draw_prize_invalid_roll():
    with pytest.raises(ValueError):
        draw_prize(random.Random(0), ["boardwalk"], roll=0)
