"""
The standard Monopoly board and its title deeds.

This is immutable reference data: the engine reads it but never mutates it.
Games copy the PropertyData records into their own state so that variants
with dynamic prices can amend a price at first purchase.
"""

from functools import lru_cache
from typing import Dict, List, Optional

from monopoly_ledger.spaces import (
    RAILROAD_GROUP,
    UTILITY_GROUP,
    PropertyData,
    Space,
    SpaceType,
)

BOARD_SIZE = 40
GO_POSITION = 0
JAIL_POSITION = 10
FREE_PARKING_POSITION = 20
GO_TO_JAIL_POSITION = 30

RAILROAD_RENTS = [25, 50, 100, 200]


def _street(
    property_id: str,
    name: str,
    position: int,
    price: int,
    group: str,
    rent: int,
    r1: int,
    r2: int,
    r3: int,
    r4: int,
    hotel: int,
    house_cost: int,
) -> PropertyData:
    return PropertyData(
        property_id=property_id,
        name=name,
        position=position,
        price=price,
        group=group,
        rent=rent,
        rent_with_houses=[r1, r2, r3, r4],
        rent_with_hotel=hotel,
        house_cost=house_cost,
        hotel_cost=house_cost,
        mortgage_value=price // 2,
    )


def _railroad(property_id: str, name: str, position: int) -> PropertyData:
    return PropertyData(property_id, name, position, 200, RAILROAD_GROUP, rent=25, mortgage_value=100)


def _utility(property_id: str, name: str, position: int) -> PropertyData:
    return PropertyData(property_id, name, position, 150, UTILITY_GROUP, mortgage_value=75)


PROPERTIES: List[PropertyData] = [
    _street("mediterranean", "Mediterranean Avenue", 1, 60, "brown", 2, 10, 30, 90, 160, 250, 50),
    _street("baltic", "Baltic Avenue", 3, 60, "brown", 4, 20, 60, 180, 320, 450, 50),
    _railroad("reading-railroad", "Reading Railroad", 5),
    _street("oriental", "Oriental Avenue", 6, 100, "light-blue", 6, 30, 90, 270, 400, 550, 50),
    _street("vermont", "Vermont Avenue", 8, 100, "light-blue", 6, 30, 90, 270, 400, 550, 50),
    _street("connecticut", "Connecticut Avenue", 9, 120, "light-blue", 8, 40, 100, 300, 450, 600, 50),
    _street("st-charles", "St. Charles Place", 11, 140, "pink", 10, 50, 150, 450, 625, 750, 100),
    _utility("electric-company", "Electric Company", 12),
    _street("states", "States Avenue", 13, 140, "pink", 10, 50, 150, 450, 625, 750, 100),
    _street("virginia", "Virginia Avenue", 14, 160, "pink", 12, 60, 180, 500, 700, 900, 100),
    _railroad("pennsylvania-railroad", "Pennsylvania Railroad", 15),
    _street("st-james", "St. James Place", 16, 180, "orange", 14, 70, 200, 550, 750, 950, 100),
    _street("tennessee", "Tennessee Avenue", 18, 180, "orange", 14, 70, 200, 550, 750, 950, 100),
    _street("new-york", "New York Avenue", 19, 200, "orange", 16, 80, 220, 600, 800, 1000, 100),
    _street("kentucky", "Kentucky Avenue", 21, 220, "red", 18, 90, 250, 700, 875, 1050, 150),
    _street("indiana", "Indiana Avenue", 23, 220, "red", 18, 90, 250, 700, 875, 1050, 150),
    _street("illinois", "Illinois Avenue", 24, 240, "red", 20, 100, 300, 750, 925, 1100, 150),
    _railroad("bno-railroad", "B. & O. Railroad", 25),
    _street("atlantic", "Atlantic Avenue", 26, 260, "yellow", 22, 110, 330, 800, 975, 1150, 150),
    _street("ventnor", "Ventnor Avenue", 27, 260, "yellow", 22, 110, 330, 800, 975, 1150, 150),
    _utility("water-works", "Water Works", 28),
    _street("marvin-gardens", "Marvin Gardens", 29, 280, "yellow", 24, 120, 360, 850, 1025, 1200, 150),
    _street("pacific", "Pacific Avenue", 31, 300, "green", 26, 130, 390, 900, 1100, 1275, 200),
    _street("north-carolina", "North Carolina Avenue", 32, 300, "green", 26, 130, 390, 900, 1100, 1275, 200),
    _street("pennsylvania", "Pennsylvania Avenue", 34, 320, "green", 28, 150, 450, 1000, 1200, 1400, 200),
    _railroad("short-line", "Short Line", 35),
    _street("park-place", "Park Place", 37, 350, "dark-blue", 35, 175, 500, 1100, 1300, 1500, 200),
    _street("boardwalk", "Boardwalk", 39, 400, "dark-blue", 50, 200, 600, 1400, 1700, 2000, 200),
]


class Board:
    """The Monopoly game board with 40 spaces."""

    def __init__(self, properties: Optional[List[PropertyData]] = None):
        properties = properties if properties is not None else PROPERTIES
        self.properties: Dict[str, PropertyData] = {p.property_id: p for p in properties}
        self.spaces: List[Space] = self._create_standard_board()
        self.groups: Dict[str, List[str]] = self._build_groups()

    def _create_standard_board(self) -> List[Space]:
        """Create the standard 40-space board, filling deeds in by position."""
        fixed = {
            GO_POSITION: Space("go", "GO", 0, SpaceType.GO),
            2: Space("community-chest-1", "Community Chest", 2, SpaceType.COMMUNITY_CHEST),
            4: Space("income-tax", "Income Tax", 4, SpaceType.TAX, tax_amount=200),
            7: Space("chance-1", "Chance", 7, SpaceType.CHANCE),
            JAIL_POSITION: Space("jail", "Jail", 10, SpaceType.JAIL),
            17: Space("community-chest-2", "Community Chest", 17, SpaceType.COMMUNITY_CHEST),
            FREE_PARKING_POSITION: Space("free-parking", "Free Parking", 20, SpaceType.FREE_PARKING),
            22: Space("chance-2", "Chance", 22, SpaceType.CHANCE),
            GO_TO_JAIL_POSITION: Space("go-to-jail", "Go To Jail", 30, SpaceType.GO_TO_JAIL),
            33: Space("community-chest-3", "Community Chest", 33, SpaceType.COMMUNITY_CHEST),
            36: Space("chance-3", "Chance", 36, SpaceType.CHANCE),
            38: Space("luxury-tax", "Luxury Tax", 38, SpaceType.TAX, tax_amount=100),
        }
        for deed in self.properties.values():
            if deed.group == RAILROAD_GROUP:
                space_type = SpaceType.RAILROAD
            elif deed.group == UTILITY_GROUP:
                space_type = SpaceType.UTILITY
            else:
                space_type = SpaceType.PROPERTY
            fixed[deed.position] = Space(
                deed.property_id, deed.name, deed.position, space_type, property_id=deed.property_id
            )

        missing = [pos for pos in range(BOARD_SIZE) if pos not in fixed]
        if missing:
            raise ValueError(f"Board has no space at positions {missing}")
        return [fixed[pos] for pos in range(BOARD_SIZE)]

    def _build_groups(self) -> Dict[str, List[str]]:
        """Build a mapping of group ids to property ids in board order."""
        groups: Dict[str, List[str]] = {}
        for space in self.spaces:
            if space.property_id is not None:
                group = self.properties[space.property_id].group
                groups.setdefault(group, []).append(space.property_id)
        return groups

    def get_space(self, position: int) -> Space:
        """Get the space at the given position."""
        return self.spaces[position % BOARD_SIZE]

    def get_group(self, group: str) -> List[str]:
        """Get all property ids in a group."""
        return self.groups.get(group, [])

    def property_ids(self) -> List[str]:
        """All purchasable property ids in board order."""
        return [s.property_id for s in self.spaces if s.property_id is not None]

    def find_nearest(self, position: int, group: str) -> int:
        """Find the nearest position of a group moving forward from given position."""
        targets = {self.properties[pid].position for pid in self.get_group(group)}
        for offset in range(1, BOARD_SIZE + 1):
            pos = (position + offset) % BOARD_SIZE
            if pos in targets:
                return pos
        raise ValueError(f"Group {group!r} has no spaces on the board")


@lru_cache
def get_board() -> Board:
    """Return the shared standard board."""
    return Board()
