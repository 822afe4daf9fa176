"""Dot entity: physical state, type and lifecycle flags."""
from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from .config import DOT_RADIUS, SCREEN_HEIGHT, SCREEN_WIDTH, DotConfig
from .dot_types import DotType

ENERGY_DRAIN = 0.1       # energy lost per unit of simulated time
INITIAL_ENERGY = 100.0
SPIN_TRANSFER = 0.1      # share of tangential velocity turned into spin on wall contact
SPIN_DECAY = 0.95
SPAWN_MARGIN = 50.0
SEED_SPEED = 2.0


def _zero() -> np.ndarray:
    return np.zeros(2)


@dataclass(eq=False)
class Dot:
    """A single simulated dot."""
    position: np.ndarray
    dot_type: DotType = DotType.CLASSIC
    velocity: np.ndarray = field(default_factory=_zero)
    acceleration: np.ndarray = field(default_factory=_zero)
    radius: float = DOT_RADIUS
    mass: float = 1.0
    spin: float = 0.0
    alive: bool = True
    age: float = 0.0
    energy: float = INITIAL_ENERGY

    def __post_init__(self) -> None:
        self.position = np.asarray(self.position, dtype=float)
        self.velocity = np.asarray(self.velocity, dtype=float)
        self.acceleration = np.asarray(self.acceleration, dtype=float)

    @classmethod
    def at(cls, x: float, y: float, dot_type: DotType = DotType.CLASSIC) -> "Dot":
        return cls(position=np.array([x, y], dtype=float), dot_type=dot_type)

    @classmethod
    def random(
        cls,
        dot_type: DotType,
        rng: np.random.RandomState,
        width: float = SCREEN_WIDTH,
        height: float = SCREEN_HEIGHT,
    ) -> "Dot":
        """Dot placed uniformly away from the walls with a small random velocity."""
        dot = cls.at(
            rng.uniform(SPAWN_MARGIN, width - SPAWN_MARGIN),
            rng.uniform(SPAWN_MARGIN, height - SPAWN_MARGIN),
            dot_type,
        )
        dot.velocity = rng.uniform(-SEED_SPEED, SEED_SPEED, 2)
        return dot

    @property
    def x(self) -> float:
        return float(self.position[0])

    @property
    def y(self) -> float:
        return float(self.position[1])

    @property
    def speed(self) -> float:
        return float(np.linalg.norm(self.velocity))

    def distance_to(self, other: "Dot") -> float:
        return float(np.linalg.norm(other.position - self.position))

    def apply_force(self, force: np.ndarray) -> None:
        self.acceleration += force / self.mass

    def can_eat(self, other: "Dot") -> bool:
        """Whether this dot is large enough and of the right type to eat other."""
        if self.dot_type is DotType.PREDATOR:
            return (
                other.dot_type in (DotType.PREY, DotType.CLASSIC)
                and self.radius >= other.radius
            )
        if self.dot_type is DotType.ABSORBER:
            return self.radius >= other.radius * 0.9
        return False

    def absorb(self, prey_radius: float, prey_energy: float) -> None:
        """Take in half of an eaten dot's energy; absorbers also grow."""
        if self.dot_type is DotType.ABSORBER:
            self.radius += prey_radius * 0.2
            self.mass = self.radius * self.radius
        self.energy += prey_energy * 0.5

    def integrate(
        self,
        config: DotConfig,
        dt: float,
        width: float = SCREEN_WIDTH,
        height: float = SCREEN_HEIGHT,
    ) -> None:
        """Advance motion, aging and energy by dt."""
        if not self.alive:
            return

        self.velocity += self.acceleration * dt
        self.velocity *= config.friction

        # Clamp speed, keeping direction
        speed = np.linalg.norm(self.velocity)
        if speed > config.max_speed:
            self.velocity *= config.max_speed / speed

        self.position += self.velocity * dt
        self._bounce(config.bounce_damping, width, height)

        self.spin *= SPIN_DECAY
        self.acceleration = _zero()

        self.age += dt
        self.energy -= ENERGY_DRAIN * dt

        if self.dot_type.grows:
            self.radius += config.growth_rate * dt
            self.mass = self.radius * self.radius

        if self.energy <= 0.0:
            self.alive = False

    def _bounce(self, damping: float, width: float, height: float) -> None:
        """Reflect off the four walls; contact with a wall sets the spin."""
        r = self.radius
        if self.position[0] < r:
            self.position[0] = r
            self.velocity[0] *= -damping
            self.spin = self.velocity[1] * SPIN_TRANSFER
        if self.position[0] > width - r:
            self.position[0] = width - r
            self.velocity[0] *= -damping
            self.spin = -self.velocity[1] * SPIN_TRANSFER
        if self.position[1] < r:
            self.position[1] = r
            self.velocity[1] *= -damping
            self.spin = -self.velocity[0] * SPIN_TRANSFER
        if self.position[1] > height - r:
            self.position[1] = height - r
            self.velocity[1] *= -damping
            self.spin = self.velocity[0] * SPIN_TRANSFER
