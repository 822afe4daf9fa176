"""Behaviour variants a dot can take, with their display colours."""
from __future__ import annotations

from enum import Enum
from typing import List, Tuple

Color = Tuple[int, int, int, int]


class DotType(Enum):
    CLASSIC = "classic"          # Plain dot, the only type the life rules act on
    PREDATOR = "predator"        # Eats prey and classic dots
    PREY = "prey"                # Flees predators
    ABSORBER = "absorber"        # Eats nearly anything and grows
    TRANSFORMER = "transformer"
    REPULSOR = "repulsor"        # Pushes neighbours away
    ATTRACTOR = "attractor"      # Pulls neighbours in
    CHASER = "chaser"            # Chases other types
    PROTECTOR = "protector"      # Shields its own kind from predators
    GHOST = "ghost"              # Passes through other dots
    BOUNCER = "bouncer"          # Knocks close neighbours away
    SOCIAL = "social"            # Seeks its own kind
    GROWER = "grower"            # Grows over time
    DIVIDER = "divider"          # Buds off offspring once large

    @property
    def color(self) -> Color:
        return _COLORS[self]

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @property
    def collides(self) -> bool:
        """Whether the dot takes part in overlap separation."""
        return self is not DotType.GHOST

    @property
    def grows(self) -> bool:
        return self is DotType.GROWER

    def next(self) -> "DotType":
        """Following type in cycling order, wrapping around."""
        members = DotType.all_types()
        return members[(members.index(self) + 1) % len(members)]

    @classmethod
    def all_types(cls) -> List["DotType"]:
        return list(cls)

    @classmethod
    def from_name(cls, name: str) -> "DotType":
        try:
            return cls(name.strip().lower())
        except ValueError:
            valid = ", ".join(t.value for t in cls)
            raise ValueError(f"Unknown dot type '{name}'. Available: {valid}") from None


_COLORS = {
    DotType.CLASSIC: (130, 130, 130, 255),
    DotType.PREDATOR: (230, 41, 55, 255),
    DotType.PREY: (253, 249, 0, 255),
    DotType.ABSORBER: (112, 31, 126, 255),
    DotType.TRANSFORMER: (255, 161, 0, 255),
    DotType.REPULSOR: (0, 82, 172, 255),
    DotType.ATTRACTOR: (255, 0, 255, 255),
    DotType.CHASER: (255, 109, 194, 255),
    DotType.PROTECTOR: (102, 191, 255, 255),
    DotType.GHOST: (204, 204, 204, 128),
    DotType.BOUNCER: (0, 117, 44, 255),
    DotType.SOCIAL: (0, 158, 47, 255),
    DotType.GROWER: (127, 106, 79, 255),
    DotType.DIVIDER: (0, 255, 255, 255),
}
