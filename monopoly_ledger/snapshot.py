"""
Snapshot serialization of GameState.

serialize_state / deserialize_state round-trip the complete state (history,
log and deck order included) through a JSON-ready dict with stable
snake_case field names, for saving and restoring games.

serialize_public_view produces a sanitized, UI-friendly summary that does
not expose hidden information such as deck order.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Dict, List

from pydantic import TypeAdapter, ValidationError

from monopoly_ledger.exceptions import SnapshotError
from monopoly_ledger.game import GameState
from monopoly_ledger.rent import net_worth


@lru_cache
def _state_adapter() -> TypeAdapter:
    return TypeAdapter(GameState)


def serialize_state(game: GameState) -> Dict[str, Any]:
    """Serialize the complete GameState into a JSON-ready dict."""
    return _state_adapter().dump_python(game, mode="json")


def deserialize_state(data: Dict[str, Any]) -> GameState:
    """
    Rebuild a GameState from serialize_state output.

    Raises:
        SnapshotError: if the data does not describe a valid game state
    """
    try:
        return _state_adapter().validate_python(data)
    except ValidationError as e:
        raise SnapshotError(f"Invalid game snapshot: {e.error_count()} problem(s)\n{e}") from e


def serialize_public_view(game: GameState) -> Dict[str, Any]:
    """Serialize a GameState into a public, stable JSON dict.

    The view includes:
    - turn_number, phase and current_player_id
    - players with public info (balance, position, jail, properties with status, net worth)
    - deck counts (remaining / discard) only
    - the free-parking pot and the pending event kind
    """
    players: List[Dict[str, Any]] = []
    for player in game.players:
        props: List[Dict[str, Any]] = []
        for property_id in player.owned_property_ids:
            data = game.property_data[property_id]
            prop = game.property_states[property_id]
            props.append(
                {
                    "property_id": property_id,
                    "name": data.name,
                    "group": data.group,
                    "houses": prop.houses,
                    "hotel": prop.hotel,
                    "mortgaged": prop.mortgaged,
                }
            )

        players.append(
            {
                "player_id": player.player_id,
                "name": player.name,
                "balance": player.balance,
                "position": player.position,
                "in_jail": player.in_jail,
                "jail_attempts": player.jail_attempts,
                "jail_cards": [deck.value for deck in player.held_jail_cards()],
                "is_bankrupt": player.is_bankrupt,
                "net_worth": net_worth(game, player.player_id),
                "properties": props,
            }
        )

    pending = game.pending_event
    return {
        "game_id": game.game_id,
        "turn_number": game.turn_number,
        "phase": game.phase.value,
        "current_player_id": game.get_current_player().player_id,
        "players": players,
        "decks": {
            "chance": {"remaining": len(game.chance_deck), "discard": len(game.chance_discard)},
            "community_chest": {"remaining": len(game.chest_deck), "discard": len(game.chest_discard)},
        },
        "free_parking_pot": game.free_parking_pot,
        "last_dice_roll": list(game.last_dice_roll) if game.last_dice_roll else None,
        "pending_event": pending.kind.value if pending else None,
        "can_undo": bool(game.history),
    }
