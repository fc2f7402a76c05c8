import math
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum


class Color(str, Enum):
    """Mana colors, plus the synthetic colorless bucket."""

    W = "W"
    U = "U"
    B = "B"
    R = "R"
    G = "G"
    C = "C"


# Canonical iteration order for every per-color mapping
COLORS: tuple[Color, ...] = (Color.W, Color.U, Color.B, Color.R, Color.G)

BASIC_LAND_NAMES: dict[Color, str] = {
    Color.W: "Plains",
    Color.U: "Island",
    Color.B: "Swamp",
    Color.R: "Mountain",
    Color.G: "Forest",
}

COLOR_NAMES: dict[Color, str] = {**BASIC_LAND_NAMES, Color.C: "Colorless"}


def canonical_colors(colors: Iterable[str]) -> tuple[Color, ...]:
    """Coerce color symbols to Color members in WUBRG order, dropping unknowns."""
    present = {c.value if isinstance(c, Color) else str(c).upper() for c in colors}
    return tuple(color for color in COLORS if color.value in present)


@dataclass(frozen=True, slots=True)
class Card:
    """
    A single physical card in a pool.

    Copies of the same card are separate Card values sharing a name;
    copy limits are counted by name.

    Attributes:
        name: Card name (non-unique across copies)
        type_line: Type text, e.g. "Legendary Creature"
        colors: Card colors in canonical WUBRG order
        mana_cost: Mana cost text, e.g. "{1}{W/U}" (empty for lands)
        cmc: Converted mana cost, floored to a whole number
        set_code: Set code of the printing
        collector_number: Collector number within the set
        rating: Pick-quality score, higher is better
    """

    name: str
    type_line: str = ""
    colors: tuple[Color, ...] = ()
    mana_cost: str = ""
    cmc: int = 0
    set_code: str = ""
    collector_number: str = ""
    rating: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "colors", canonical_colors(self.colors))
        object.__setattr__(self, "cmc", math.floor(self.cmc))

    @property
    def is_land(self) -> bool:
        return "Land" in self.type_line

    @property
    def is_creature(self) -> bool:
        return "Creature" in self.type_line

    @property
    def is_basic_land(self) -> bool:
        return self.is_land and "Basic" in self.type_line
