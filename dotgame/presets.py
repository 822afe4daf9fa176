"""Preset coefficient sets with a matching starting population."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional

from .config import DotConfig
from .dot_types import DotType


@dataclass
class Preset:
    """A named configuration plus how to seed the world when it is applied."""
    name: str
    description: str
    config: DotConfig
    seed_count: int = 100
    seed_type: Optional[DotType] = None  # None seeds a mix of every type


# ============================================================================
# Preset Definitions
# ============================================================================

DEFAULT = Preset(
    name="default",
    description="Stock coefficients with a mixed population",
    config=DotConfig(),
)

# Fast, forceful and bouncy
CHAOS = Preset(
    name="chaos",
    description="High speed, strong forces and lively walls",
    config=DotConfig(
        max_speed=12.0,
        attraction_strength=1.5,
        repulsion_strength=5.0,
        friction=0.995,
        bounce_damping=1.0,
        eating_radius=20.0,
        growth_rate=0.05,
        divide_size=12.0,
    ),
    seed_count=150,
)

# Slow drift with heavy friction
CALM = Preset(
    name="calm",
    description="Low speed and heavy friction, dots settle into clusters",
    config=DotConfig(
        max_speed=2.0,
        attraction_strength=0.3,
        repulsion_strength=1.0,
        friction=0.9,
        bounce_damping=0.5,
    ),
    seed_count=80,
)

# Tuned for the life rules: classic dots only, tighter neighbourhoods
LIFE = Preset(
    name="life",
    description="Classic dots only, radius tuned for the survival rules",
    config=DotConfig(
        max_speed=1.0,
        friction=0.9,
        interaction_radius=40.0,
    ),
    seed_count=200,
    seed_type=DotType.CLASSIC,
)


# ============================================================================
# Preset Registry
# ============================================================================

PRESETS: Dict[str, Preset] = {
    "default": DEFAULT,
    "chaos": CHAOS,
    "calm": CALM,
    "life": LIFE,
}


def list_presets() -> List[Preset]:
    """Return list of all available presets."""
    return list(PRESETS.values())


def get_preset(name: str) -> Preset:
    """Get preset by name."""
    if name not in PRESETS:
        raise ValueError(f"Unknown preset '{name}'. Available: {list(PRESETS.keys())}")
    return PRESETS[name]
