"""
Rent and building eligibility.

Pure functions over GameState: none of them mutate the state or touch its
history, so they can be called freely from handlers, UIs and tests.
"""

from decimal import ROUND_FLOOR, Decimal
from typing import List, Optional, Sequence

from monopoly_ledger.board import RAILROAD_RENTS
from monopoly_ledger.game import GameState
from monopoly_ledger.player import PropertyState
from monopoly_ledger.spaces import RAILROAD_GROUP, UTILITY_GROUP

MAX_HOUSES = 4


def owned_in_group(state: GameState, player_id: str, group: str) -> List[str]:
    """Property ids of a group owned by the player."""
    return [
        pid
        for pid in state.board.get_group(group)
        if state.property_states[pid].owner_id == player_id
    ]


def count_in_group(state: GameState, player_id: str, group: str) -> int:
    return len(owned_in_group(state, player_id, group))


def rent_due(state: GameState, property_id: str, dice_roll: Optional[Sequence[int]] = None) -> Optional[int]:
    """
    Calculate the rent owed for landing on a property.

    Args:
        state: Current game state
        property_id: Property being landed on
        dice_roll: The two dice (needed for utilities)

    Returns:
        Rent amount, 0 for unowned or mortgaged properties, or None when the
        property is a utility and no dice roll is available.
    """
    data = state.get_property_data(property_id)
    prop = state.get_property_state(property_id)
    if data is None or prop is None or not prop.is_owned() or prop.mortgaged:
        return 0

    if data.group == UTILITY_GROUP:
        if not dice_roll:
            return None
        utilities_owned = count_in_group(state, prop.owner_id, UTILITY_GROUP)
        multiplier = 4 if utilities_owned == 1 else 10
        return sum(dice_roll) * multiplier

    if data.group == RAILROAD_GROUP:
        railroads_owned = count_in_group(state, prop.owner_id, RAILROAD_GROUP)
        return RAILROAD_RENTS[min(railroads_owned, len(RAILROAD_RENTS)) - 1]

    return data.rent_for_level(prop.houses, prop.hotel)


def has_monopoly(state: GameState, player_id: str, group: str) -> bool:
    """Check if a player owns every property in a group."""
    roster = state.board.get_group(group)
    if not roster:
        return False
    return all(state.property_states[pid].owner_id == player_id for pid in roster)


def _siblings(state: GameState, property_id: str) -> List[PropertyState]:
    group = state.property_data[property_id].group
    return [state.property_states[pid] for pid in state.board.get_group(group) if pid != property_id]


def _street_owned_by(state: GameState, property_id: str, player_id: str) -> bool:
    data = state.get_property_data(property_id)
    prop = state.get_property_state(property_id)
    if data is None or prop is None or prop.owner_id != player_id:
        return False
    return data.is_street and not prop.mortgaged


def can_build_house(state: GameState, property_id: str, player_id: str) -> bool:
    """
    Check if a player can build a house on a property.

    Requirements:
    - Player owns the property and it is a street (not a railroad or utility)
    - Property is not mortgaged
    - Property has no hotel and fewer than 4 houses
    - Player has a monopoly on the group
    - With even building enforced, no sibling would fall more than one level behind
    """
    if not _street_owned_by(state, property_id, player_id):
        return False

    prop = state.property_states[property_id]
    if prop.hotel or prop.houses >= MAX_HOUSES:
        return False

    if not has_monopoly(state, player_id, state.property_data[property_id].group):
        return False

    if state.settings.enforce_even_building:
        new_level = prop.level + 1
        if any(new_level - sibling.level > 1 for sibling in _siblings(state, property_id)):
            return False

    return True


def can_build_hotel(state: GameState, property_id: str, player_id: str) -> bool:
    """
    Check if a player can build a hotel on a property.

    Same as a house, except the property needs exactly 4 houses. With even
    building enforced every sibling needs 4 houses or a hotel as well.
    """
    if not _street_owned_by(state, property_id, player_id):
        return False

    prop = state.property_states[property_id]
    if prop.hotel or prop.houses != MAX_HOUSES:
        return False

    if not has_monopoly(state, player_id, state.property_data[property_id].group):
        return False

    if state.settings.enforce_even_building:
        if any(sibling.level < MAX_HOUSES for sibling in _siblings(state, property_id)):
            return False

    return True


def can_sell_house(state: GameState, property_id: str, player_id: str) -> bool:
    """Check if a house can be sold from a property (even-selling rule when enforced)."""
    prop = state.get_property_state(property_id)
    if prop is None or prop.owner_id != player_id or prop.houses == 0:
        return False

    if state.settings.enforce_even_building:
        new_level = prop.level - 1
        if any(sibling.level - new_level > 1 for sibling in _siblings(state, property_id)):
            return False

    return True


def can_sell_hotel(state: GameState, property_id: str, player_id: str) -> bool:
    """Check if a hotel can be sold back down to 4 houses."""
    prop = state.get_property_state(property_id)
    return prop is not None and prop.owner_id == player_id and prop.hotel


def unmortgage_cost(state: GameState, property_id: str) -> int:
    """Mortgage value plus interest, floored to a whole amount."""
    data = state.property_data[property_id]
    rate = Decimal(str(state.settings.mortgage_interest_rate))
    cost = Decimal(data.mortgage_value) * (1 + rate)
    return int(cost.to_integral_value(rounding=ROUND_FLOOR))


def net_worth(state: GameState, player_id: str) -> int:
    """Calculate a player's total net worth (cash + property values)."""
    player = state.get_player(player_id)
    if player is None:
        return 0

    worth = player.balance
    for pid in player.owned_property_ids:
        data = state.property_data[pid]
        prop = state.property_states[pid]
        worth += data.price
        worth += prop.houses * data.house_cost
        if prop.hotel:
            worth += MAX_HOUSES * data.house_cost + data.hotel_cost
        if prop.mortgaged:
            worth -= data.mortgage_value
    return worth
