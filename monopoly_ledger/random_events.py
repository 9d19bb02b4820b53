"""
Randomized sub-flows: dice, card decks, the property roulette and the
free-parking prize lottery.

Every function takes its randomness source as an argument, so a seeded
random.Random (or any object with randint/choice/shuffle) makes them fully
deterministic.
"""

import random
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple

DiceRoll = Tuple[int, int]

PROPERTY_PRIZE_CASH_EQUIVALENT = 400

# (upper bound of the 1-100 draw, cash amount); draws above the last bound win a property.
PRIZE_TIERS: List[Tuple[int, int]] = [
    (50, 100),
    (70, 200),
    (75, 500),
]


def roll_dice(rng: random.Random) -> DiceRoll:
    """Roll two independent six-sided dice."""
    return (rng.randint(1, 6), rng.randint(1, 6))


def is_doubles(dice: DiceRoll) -> bool:
    return dice[0] == dice[1]


def shuffle_cards(cards: Sequence[str], rng: random.Random) -> List[str]:
    """Return a uniformly shuffled copy of the card ids."""
    shuffled = list(cards)
    rng.shuffle(shuffled)
    return shuffled


def draw_card(deck: List[str], discard: List[str], rng: random.Random) -> str:
    """
    Draw the head of the deck and move it to the tail of the discard pile.

    If the deck is empty the shuffled discard pile becomes the new deck.
    Both lists are modified in place.
    """
    if not deck:
        if not discard:
            raise ValueError("Cannot draw from an empty deck with an empty discard pile")
        deck.extend(shuffle_cards(discard, rng))
        discard.clear()

    card_id = deck.pop(0)
    discard.append(card_id)
    return card_id


def select_roulette_property(property_ids: Sequence[str], rng: random.Random) -> str:
    """Pick the property the roulette settles on, uniformly from the catalog."""
    if not property_ids:
        raise ValueError("Property catalog is empty")
    return rng.choice(list(property_ids))


class PrizeKind(Enum):
    CASH = "CASH"
    PROPERTY = "PROPERTY"


@dataclass
class Prize:
    """Result of a free-parking lottery draw."""

    kind: PrizeKind
    roll: int
    amount: int = 0
    property_id: Optional[str] = None


def draw_prize(rng: random.Random, property_ids: Sequence[str], roll: Optional[int] = None) -> Prize:
    """
    Run the tiered prize lottery.

    A single draw in [1, 100] is matched against the cumulative tiers in
    PRIZE_TIERS. Draws beyond the last tier win a random property.

    Args:
        rng: Randomness source
        property_ids: Catalog the property prize is chosen from
        roll: Fixed draw, used instead of rng for the tier selection

    Returns:
        The drawn Prize
    """
    if roll is None:
        roll = rng.randint(1, 100)
    if not 1 <= roll <= 100:
        raise ValueError(f"Prize roll must be in [1, 100], got {roll}")

    for threshold, amount in PRIZE_TIERS:
        if roll <= threshold:
            return Prize(PrizeKind.CASH, roll, amount=amount)

    return Prize(PrizeKind.PROPERTY, roll, property_id=select_roulette_property(property_ids, rng))
