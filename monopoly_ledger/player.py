"""
Player and property state records.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from monopoly_ledger.cards import DeckType


@dataclass
class PlayerState:
    """Represents the complete state of a player in the game."""

    player_id: str
    name: str
    balance: int
    position: int = 0
    in_jail: bool = False
    jail_attempts: int = 0
    jail_card_chance: bool = False
    jail_card_chest: bool = False
    owned_property_ids: List[str] = field(default_factory=list)
    is_bankrupt: bool = False

    def has_jail_card(self, deck: Optional[DeckType] = None) -> bool:
        """Check for a Get Out of Jail Free entitlement, optionally from one deck."""
        if deck == DeckType.CHANCE:
            return self.jail_card_chance
        if deck == DeckType.COMMUNITY_CHEST:
            return self.jail_card_chest
        return self.jail_card_chance or self.jail_card_chest

    def set_jail_card(self, deck: DeckType, held: bool) -> None:
        if deck == DeckType.CHANCE:
            self.jail_card_chance = held
        else:
            self.jail_card_chest = held

    def held_jail_cards(self) -> List[DeckType]:
        """Decks whose Get Out of Jail Free card this player holds."""
        held = []
        if self.jail_card_chance:
            held.append(DeckType.CHANCE)
        if self.jail_card_chest:
            held.append(DeckType.COMMUNITY_CHEST)
        return held

    def add_property(self, property_id: str) -> None:
        if property_id not in self.owned_property_ids:
            self.owned_property_ids.append(property_id)

    def remove_property(self, property_id: str) -> None:
        if property_id in self.owned_property_ids:
            self.owned_property_ids.remove(property_id)

    def __repr__(self) -> str:
        return (
            f"PlayerState(id={self.player_id!r}, name='{self.name}', "
            f"balance={self.balance}, position={self.position}, bankrupt={self.is_bankrupt})"
        )


@dataclass
class PropertyState:
    """Tracks ownership and improvements of a property."""

    property_id: str
    owner_id: Optional[str] = None
    mortgaged: bool = False
    houses: int = 0
    hotel: bool = False

    def is_owned(self) -> bool:
        """Check if property is owned by any player."""
        return self.owner_id is not None

    @property
    def has_improvements(self) -> bool:
        return self.houses > 0 or self.hotel

    @property
    def level(self) -> int:
        """Improvement level, with a hotel counting as level 5."""
        return 5 if self.hotel else self.houses

    def clear(self) -> None:
        """Return the property to the bank: unowned, unmortgaged, unimproved."""
        self.owner_id = None
        self.mortgaged = False
        self.houses = 0
        self.hotel = False
