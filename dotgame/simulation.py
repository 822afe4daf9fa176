"""Dot simulation: owns the population and advances it one tick at a time."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import numpy as np

from .config import (
    DEFAULT_CONFIG_PATH,
    MAX_DOTS,
    SCREEN_HEIGHT,
    SCREEN_WIDTH,
    ConfigError,
    DotConfig,
)
from .dot_types import Color, DotType
from .interactions import apply_interactions, resolve_interactions
from .life_rules import LIFE_RULE_PERIOD, evaluate_life_rules
from .particle import Dot
from .presets import Preset, get_preset

logger = logging.getLogger(__name__)

REAP_PERIOD = 60
REMOVE_RADIUS = 20.0


@dataclass
class DotView:
    """What the renderer needs to draw one live dot."""
    x: float
    y: float
    radius: float
    color: Color
    vx: float
    vy: float
    dot_type: DotType


class Simulation:
    """
    Interactive dot world.

    Each unpaused tick resolves pairwise interactions, applies the resulting
    forces, integrates every dot, optionally runs the life rules, and
    periodically reaps dead dots. Dead dots keep their index until the reap,
    so indices stay stable for the whole tick.
    """

    def __init__(
        self,
        config: Optional[DotConfig] = None,
        width: float = SCREEN_WIDTH,
        height: float = SCREEN_HEIGHT,
        capacity: int = MAX_DOTS,
        seed: Optional[int] = None,
    ):
        self.config = config or DotConfig()
        self.width = width
        self.height = height
        self.capacity = capacity
        self.rng = np.random.RandomState(seed)

        self.dots: List[Dot] = []
        self.selected_type = DotType.CLASSIC
        self.paused = False
        self.show_aura = True
        self.life_mode = False
        self.frame = 0

    # ========================================================================
    # Tick
    # ========================================================================

    def step(self, dt: float = 1.0) -> None:
        """Advance simulation by one tick."""
        if self.paused:
            return

        self.frame += 1

        result = resolve_interactions(self.dots, self.config, self.frame, self.rng)
        apply_interactions(self.dots, result, self.capacity)

        for dot in self.dots:
            dot.integrate(self.config, dt, self.width, self.height)

        if self.life_mode and self.frame % LIFE_RULE_PERIOD == 0:
            self.apply_life_rules()

        if self.frame % REAP_PERIOD == 0:
            self.reap()

    def apply_life_rules(self) -> None:
        """Run one pass of the survival/birth rules over classic dots."""
        result = evaluate_life_rules(self.dots, self.config, self.rng)
        for index in result.removals:
            self.dots[index].alive = False
        born = sum(1 for dot in result.spawns if self._insert(dot))
        logger.debug(
            "Life rules on frame %d: %d died, %d born",
            self.frame, len(result.removals), born,
        )

    def reap(self) -> int:
        """Physically drop dead dots. The only place indices may shift."""
        before = len(self.dots)
        self.dots = [dot for dot in self.dots if dot.alive]
        return before - len(self.dots)

    # ========================================================================
    # Placement intents
    # ========================================================================

    def _insert(self, dot: Dot) -> bool:
        if len(self.dots) >= self.capacity:
            return False
        self.dots.append(dot)
        return True

    def add_dot(self, x: float, y: float, dot_type: Optional[DotType] = None) -> Optional[Dot]:
        """Place a dot of the given (or currently selected) type; None when full."""
        dot = Dot.at(x, y, dot_type or self.selected_type)
        return dot if self._insert(dot) else None

    def remove_near(self, x: float, y: float, radius: float = REMOVE_RADIUS) -> int:
        """Mark every live dot within radius of (x, y) dead."""
        point = np.array([x, y], dtype=float)
        removed = 0
        for dot in self.dots:
            if dot.alive and np.linalg.norm(dot.position - point) < radius:
                dot.alive = False
                removed += 1
        return removed

    def clear(self) -> None:
        self.dots = []

    def seed_random(self, count: int, dot_type: Optional[DotType] = None) -> None:
        """Replace the population with count randomly placed dots."""
        self.dots = []
        if dot_type is not None:
            types = [dot_type]
        elif self.life_mode:
            types = [DotType.CLASSIC]
        else:
            types = DotType.all_types()

        for _ in range(count):
            chosen = types[self.rng.randint(len(types))]
            if not self._insert(Dot.random(chosen, self.rng, self.width, self.height)):
                break
        logger.info("Seeded %d dots", len(self.dots))

    # ========================================================================
    # Mode toggles
    # ========================================================================

    def toggle_pause(self) -> bool:
        self.paused = not self.paused
        return self.paused

    def toggle_life_mode(self) -> bool:
        self.life_mode = not self.life_mode
        return self.life_mode

    def toggle_aura(self) -> bool:
        self.show_aura = not self.show_aura
        return self.show_aura

    def cycle_selected_type(self) -> DotType:
        self.selected_type = self.selected_type.next()
        return self.selected_type

    def adjust_max_speed(self, delta: float) -> float:
        self.config = self.config.with_max_speed(delta)
        return self.config.max_speed

    def apply_preset(self, name: str) -> Preset:
        """Swap in a preset's coefficients and reseed its population."""
        preset = get_preset(name)
        self.config = preset.config
        self.seed_random(preset.seed_count, preset.seed_type)
        logger.info("Applied preset '%s'", preset.name)
        return preset

    # ========================================================================
    # Configuration persistence
    # ========================================================================

    def save_config(self, filepath: str = DEFAULT_CONFIG_PATH) -> bool:
        try:
            self.config.save(filepath)
        except ConfigError as exc:
            logger.warning("Saving configuration failed: %s", exc)
            return False
        return True

    def load_config(self, filepath: str = DEFAULT_CONFIG_PATH) -> bool:
        """Replace the configuration from a file; on failure keep the current one."""
        try:
            config = DotConfig.load(filepath)
        except ConfigError as exc:
            logger.warning("Loading configuration failed: %s", exc)
            return False
        self.config = config
        return True

    # ========================================================================
    # Queries
    # ========================================================================

    def visible_dots(self) -> List[DotView]:
        return [
            DotView(
                x=dot.x,
                y=dot.y,
                radius=dot.radius,
                color=dot.dot_type.color,
                vx=float(dot.velocity[0]),
                vy=float(dot.velocity[1]),
                dot_type=dot.dot_type,
            )
            for dot in self.dots
            if dot.alive
        ]

    def alive_count(self) -> int:
        return sum(1 for dot in self.dots if dot.alive)

    def population_counts(self) -> Dict[DotType, int]:
        """Live dots per type, including types with none alive."""
        counts = {t: 0 for t in DotType.all_types()}
        for dot in self.dots:
            if dot.alive:
                counts[dot.dot_type] += 1
        return counts

    def find_dot_at(self, x: float, y: float) -> Optional[Dot]:
        """Topmost (last drawn) live dot whose disc contains the point."""
        point = np.array([x, y], dtype=float)
        for dot in reversed(self.dots):
            if dot.alive and np.linalg.norm(dot.position - point) <= dot.radius:
                return dot
        return None

    def get_state(self) -> Dict[str, Any]:
        """Get current state for visualization or inspection."""
        return {
            "width": self.width,
            "height": self.height,
            "frame": self.frame,
            "paused": self.paused,
            "life_mode": self.life_mode,
            "selected_type": self.selected_type.value,
            "config": self.config.to_dict(),
            "dots": [
                {
                    "type": view.dot_type.value,
                    "x": view.x,
                    "y": view.y,
                    "vx": view.vx,
                    "vy": view.vy,
                    "radius": view.radius,
                }
                for view in self.visible_dots()
            ],
        }
