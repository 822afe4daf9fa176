"""Type-specific pairwise forces.

Every behaviour has the same signature and is invoked once per ordered role
of an in-range pair: ``behavior(ctx, actor, receiver, direction, distance)``,
where ``direction`` is the unit vector pointing from the actor to the
receiver. A behaviour only writes into ``ctx.forces`` and ``ctx.spawns``;
the population itself is never touched during the sweep.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, List

import numpy as np

from .config import DotConfig
from .dot_types import DotType
from .particle import Dot

DIVISION_PERIOD = 120
DIVISION_JITTER = 10.0
OFFSPRING_SPEED = 2.0
PROTECT_RANGE = 0.7
BOUNCE_RANGE = 0.5
MIN_FALLOFF_DISTANCE = 1.0


@dataclass
class PairContext:
    """Shared per-tick state handed to every behaviour."""
    dots: List[Dot]
    config: DotConfig
    frame: int
    rng: np.random.RandomState
    forces: np.ndarray
    spawns: List[Dot] = field(default_factory=list)
    predators: List[int] = field(default_factory=list)


Behavior = Callable[[PairContext, int, int, np.ndarray, float], None]


def falloff(distance: float) -> float:
    return 1.0 / max(distance, MIN_FALLOFF_DISTANCE)


def attract(ctx: PairContext, actor: int, receiver: int, direction: np.ndarray, distance: float) -> None:
    """Pull the receiver in; the attractor is drawn toward it in return."""
    force = direction * ctx.config.attraction_strength * falloff(distance)
    ctx.forces[receiver] -= force
    ctx.forces[actor] += force


def repel(ctx: PairContext, actor: int, receiver: int, direction: np.ndarray, distance: float) -> None:
    """Push the receiver away; the repulsor is pushed back in return."""
    force = direction * ctx.config.repulsion_strength * falloff(distance)
    ctx.forces[receiver] += force
    ctx.forces[actor] -= force


def chase(ctx: PairContext, actor: int, receiver: int, direction: np.ndarray, distance: float) -> None:
    if ctx.dots[receiver].dot_type is not ctx.dots[actor].dot_type:
        ctx.forces[actor] += direction * ctx.config.attraction_strength * 2.0 * falloff(distance)


def flee(ctx: PairContext, actor: int, receiver: int, direction: np.ndarray, distance: float) -> None:
    if ctx.dots[receiver].dot_type is DotType.PREDATOR:
        ctx.forces[actor] -= direction * ctx.config.repulsion_strength * 3.0 * falloff(distance)


def flock(ctx: PairContext, actor: int, receiver: int, direction: np.ndarray, distance: float) -> None:
    if ctx.dots[receiver].dot_type is ctx.dots[actor].dot_type:
        ctx.forces[actor] += direction * ctx.config.attraction_strength * 1.5 * falloff(distance)


def protect(ctx: PairContext, actor: int, receiver: int, direction: np.ndarray, distance: float) -> None:
    """Push every predator near a close same-type neighbour away from it.

    The effect reaches beyond the pair: all live predators within the
    interaction radius of the protected dot are affected.
    """
    ward = ctx.dots[receiver]
    if ward.dot_type is not ctx.dots[actor].dot_type:
        return
    if distance >= ctx.config.interaction_radius * PROTECT_RANGE:
        return

    strength = ctx.config.repulsion_strength * 2.0
    for k in ctx.predators:
        offset = ctx.dots[k].position - ward.position
        dist = float(np.linalg.norm(offset))
        # A predator sitting exactly on the ward has no direction to be pushed in
        if 0.0 < dist < ctx.config.interaction_radius:
            ctx.forces[k] += offset / dist * strength


def divide(ctx: PairContext, actor: int, receiver: int, direction: np.ndarray, distance: float) -> None:
    """Bud off one offspring on division ticks.

    Fires once per in-range pair, so a large divider with several
    neighbours produces several offspring on the same tick.
    """
    parent = ctx.dots[actor]
    if parent.radius <= ctx.config.divide_size or ctx.frame % DIVISION_PERIOD != 0:
        return

    jitter = ctx.rng.uniform(-DIVISION_JITTER, DIVISION_JITTER, 2)
    offspring = Dot(position=parent.position + jitter, dot_type=DotType.DIVIDER)
    offspring.velocity = ctx.rng.uniform(-OFFSPRING_SPEED, OFFSPRING_SPEED, 2)
    ctx.spawns.append(offspring)


def bounce(ctx: PairContext, actor: int, receiver: int, direction: np.ndarray, distance: float) -> None:
    if distance < ctx.config.interaction_radius * BOUNCE_RANGE:
        force = direction * ctx.config.repulsion_strength * 5.0 * falloff(distance)
        ctx.forces[receiver] += force
        ctx.forces[actor] -= force * 0.5


BEHAVIORS: Dict[DotType, Behavior] = {
    DotType.ATTRACTOR: attract,
    DotType.REPULSOR: repel,
    DotType.CHASER: chase,
    DotType.PREY: flee,
    DotType.SOCIAL: flock,
    DotType.PROTECTOR: protect,
    DotType.DIVIDER: divide,
    DotType.BOUNCER: bounce,
}


def act(ctx: PairContext, actor: int, receiver: int, direction: np.ndarray, distance: float) -> None:
    """Run the actor's behaviour against the receiver, if its type has one."""
    behavior = BEHAVIORS.get(ctx.dots[actor].dot_type)
    if behavior is not None:
        behavior(ctx, actor, receiver, direction, distance)
