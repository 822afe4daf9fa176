"""Pairwise interaction sweep: collisions, eating and type forces."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Set

import numpy as np

from .behaviors import PairContext, act
from .config import DotConfig
from .dot_types import DotType
from .particle import Dot

logger = logging.getLogger(__name__)

MIN_SEPARATION = 0.1  # below this, overlapping dots have no usable contact normal


@dataclass
class Feeding:
    """One dot eating another.

    The prey's radius and energy are read when the feeding is applied, in
    sweep order, so a dot that ate earlier in the sweep and is then eaten
    itself hands on half of its increased energy.
    """
    eater: int
    prey: int


@dataclass
class InteractionResult:
    """Everything a sweep wants changed, applied only after the sweep ends."""
    forces: np.ndarray
    removals: Set[int] = field(default_factory=set)
    spawns: List[Dot] = field(default_factory=list)
    feedings: List[Feeding] = field(default_factory=list)


def in_range_pairs(dots: List[Dot], radius: float) -> List[tuple]:
    """Index pairs (i < j) of live dots no farther apart than radius, in (i, j) order."""
    n = len(dots)
    if n < 2:
        return []

    positions = np.array([d.position for d in dots])
    alive = np.array([d.alive for d in dots])

    delta = positions[None, :, :] - positions[:, None, :]
    dist = np.linalg.norm(delta, axis=2)

    mask = np.triu(dist <= radius, k=1)
    mask &= alive[:, None] & alive[None, :]
    rows, cols = np.nonzero(mask)
    return list(zip(rows.tolist(), cols.tolist()))


def _try_eat(dots: List[Dot], eater: int, prey: int, distance: float,
             config: DotConfig, result: InteractionResult) -> bool:
    if not (dots[eater].can_eat(dots[prey]) and distance < config.eating_radius):
        return False
    result.removals.add(prey)
    result.feedings.append(Feeding(eater, prey))
    return True


def _collide(dots: List[Dot], i: int, j: int, direction: np.ndarray, distance: float,
             config: DotConfig, forces: np.ndarray) -> None:
    """Separate two overlapping dots and exchange an impulse along the normal."""
    overlap = dots[i].radius + dots[j].radius - distance
    separation = direction * overlap * 0.5
    forces[i] -= separation
    forces[j] += separation

    relative_velocity = dots[i].velocity - dots[j].velocity
    impulse = direction * float(np.dot(relative_velocity, direction)) * config.bounce_damping
    forces[i] -= impulse * dots[j].mass
    forces[j] += impulse * dots[i].mass


def resolve_interactions(
    dots: List[Dot],
    config: DotConfig,
    frame: int,
    rng: np.random.RandomState,
) -> InteractionResult:
    """
    Sweep every unordered pair of live dots within the interaction radius.

    For overlapping pairs the lower index gets the first chance to eat; an
    eaten dot takes no further part in the sweep. Pairs that did not end in
    eating collide (unless one is a ghost) and then run each dot's type
    behaviour against the other.

    Args:
        dots: Current population; read, never mutated
        config: Coefficient snapshot for this tick
        frame: Current tick number
        rng: Random source for offspring placement

    Returns:
        Forces per index plus removal, spawn and feeding intents
    """
    forces = np.zeros((len(dots), 2))
    result = InteractionResult(forces=forces)
    predators = [
        k for k, d in enumerate(dots)
        if d.alive and d.dot_type is DotType.PREDATOR
    ]
    ctx = PairContext(
        dots=dots,
        config=config,
        frame=frame,
        rng=rng,
        forces=forces,
        spawns=result.spawns,
        predators=predators,
    )

    for i, j in in_range_pairs(dots, config.interaction_radius):
        if i in result.removals or j in result.removals:
            continue

        delta = dots[j].position - dots[i].position
        distance = float(np.linalg.norm(delta))
        if distance > 0.0:
            direction = delta / distance
        else:
            direction = np.zeros(2)

        min_distance = dots[i].radius + dots[j].radius
        if MIN_SEPARATION < distance < min_distance:
            if _try_eat(dots, i, j, distance, config, result):
                continue
            if _try_eat(dots, j, i, distance, config, result):
                continue
            if dots[i].dot_type.collides and dots[j].dot_type.collides:
                _collide(dots, i, j, direction, distance, config, forces)

        act(ctx, i, j, direction, distance)
        act(ctx, j, i, -direction, distance)

    return result


def apply_interactions(dots: List[Dot], result: InteractionResult, capacity: int) -> int:
    """
    Merge a sweep's intents back into the population.

    Order: feedings, removals, forces on the survivors, then spawns up to
    capacity. Spawns beyond capacity are dropped.

    Returns:
        Number of spawned dots actually inserted
    """
    for feeding in result.feedings:
        prey = dots[feeding.prey]
        dots[feeding.eater].absorb(prey.radius, prey.energy)

    for index in sorted(result.removals):
        dots[index].alive = False

    for index, dot in enumerate(dots):
        if dot.alive and index < len(result.forces):
            dot.apply_force(result.forces[index])

    inserted = 0
    for dot in result.spawns:
        if len(dots) >= capacity:
            logger.debug("Population at capacity (%d), dropping offspring", capacity)
            break
        dots.append(dot)
        inserted += 1
    return inserted
