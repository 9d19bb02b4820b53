"""
Board space definitions and types.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


RAILROAD_GROUP = "railroad"
UTILITY_GROUP = "utility"


class SpaceType(Enum):
    """Types of spaces on the board."""

    GO = "GO"
    PROPERTY = "PROPERTY"
    RAILROAD = "RAILROAD"
    UTILITY = "UTILITY"
    TAX = "TAX"
    CHANCE = "CHANCE"
    COMMUNITY_CHEST = "COMMUNITY_CHEST"
    JAIL = "JAIL"
    GO_TO_JAIL = "GO_TO_JAIL"
    FREE_PARKING = "FREE_PARKING"


PURCHASABLE_SPACE_TYPES = (SpaceType.PROPERTY, SpaceType.RAILROAD, SpaceType.UTILITY)


@dataclass(frozen=True)
class PropertyData:
    """Title deed for a purchasable space."""

    property_id: str
    name: str
    position: int
    price: int
    group: str
    rent: int = 0
    rent_with_houses: List[int] = field(default_factory=list)
    rent_with_hotel: int = 0
    house_cost: int = 0
    hotel_cost: int = 0
    mortgage_value: int = 0

    @property
    def is_street(self) -> bool:
        """True for color-group properties that can carry buildings."""
        return self.group not in (RAILROAD_GROUP, UTILITY_GROUP)

    def rent_for_level(self, houses: int, hotel: bool) -> int:
        """
        Rent for a street at the given improvement level.

        Args:
            houses: Number of houses (0-4)
            hotel: Whether a hotel stands on the site

        Returns:
            Rent amount
        """
        if hotel:
            return self.rent_with_hotel
        if 0 < houses <= len(self.rent_with_houses):
            return self.rent_with_houses[houses - 1]
        return self.rent


@dataclass(frozen=True)
class Space:
    """A single board space."""

    space_id: str
    name: str
    position: int
    space_type: SpaceType
    property_id: Optional[str] = None
    tax_amount: int = 0

    @property
    def is_purchasable(self) -> bool:
        return self.space_type in PURCHASABLE_SPACE_TYPES

    def __repr__(self) -> str:
        return f"Space(name='{self.name}', position={self.position})"
