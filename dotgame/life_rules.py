"""Conway-style survival and birth rules over continuous positions."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Set

import numpy as np

from .config import DotConfig
from .dot_types import DotType
from .particle import Dot

LIFE_RULE_PERIOD = 30
SURVIVAL_COUNTS: Set[int] = {2, 3}  # live dots survive with 2-3 neighbours
BIRTH_COUNT = 3                     # and exactly 3 also spawn one offspring
BIRTH_OFFSET = 20.0


@dataclass
class LifeRuleResult:
    removals: Set[int] = field(default_factory=set)
    spawns: List[Dot] = field(default_factory=list)


def count_neighbors(
    dots: List[Dot],
    config: DotConfig,
    base_type: DotType = DotType.CLASSIC,
) -> Dict[int, int]:
    """Count live same-type neighbours strictly within the interaction radius.

    Returns:
        Mapping of population index to neighbour count, for every live dot
        of base_type
    """
    indices = [i for i, d in enumerate(dots) if d.alive and d.dot_type is base_type]
    if not indices:
        return {}

    positions = np.array([dots[i].position for i in indices])
    delta = positions[None, :, :] - positions[:, None, :]
    dist = np.linalg.norm(delta, axis=2)

    near = dist < config.interaction_radius
    np.fill_diagonal(near, False)
    counts = near.sum(axis=1)
    return {index: int(count) for index, count in zip(indices, counts)}


def evaluate_life_rules(
    dots: List[Dot],
    config: DotConfig,
    rng: np.random.RandomState,
    base_type: DotType = DotType.CLASSIC,
) -> LifeRuleResult:
    """Decide deaths and births from a single neighbour-count snapshot."""
    result = LifeRuleResult()
    for index, neighbors in count_neighbors(dots, config, base_type).items():
        if neighbors not in SURVIVAL_COUNTS:
            result.removals.add(index)
        elif neighbors == BIRTH_COUNT:
            offset = rng.uniform(-BIRTH_OFFSET, BIRTH_OFFSET, 2)
            result.spawns.append(
                Dot(position=dots[index].position + offset, dot_type=base_type)
            )
    return result
