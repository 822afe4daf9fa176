import numpy as np

from dotgame.config import DotConfig
from dotgame.dot_types import DotType
from dotgame.life_rules import count_neighbors, evaluate_life_rules
from dotgame.particle import Dot
from dotgame.simulation import Simulation


def classic(x, y, **kwargs):
    dot = Dot.at(x, y, DotType.CLASSIC)
    for name, value in kwargs.items():
        setattr(dot, name, value)
    return dot


def star_population():
    """Centre with three neighbours that cannot see each other, plus a loner."""
    return [
        classic(200, 200),   # 3 neighbours
        classic(240, 200),   # 1
        classic(160, 200),   # 1
        classic(200, 240),   # 1
        classic(600, 600),   # 0
    ]


def test_neighbor_counts_on_synthetic_population():
    counts = count_neighbors(star_population(), DotConfig(interaction_radius=50.0))
    assert counts == {0: 3, 1: 1, 2: 1, 3: 1, 4: 0}


def test_three_neighbors_survive_and_spawn_exactly_once():
    dots = star_population()
    result = evaluate_life_rules(dots, DotConfig(interaction_radius=50.0), np.random.RandomState(1))

    assert result.removals == {1, 2, 3, 4}
    assert len(result.spawns) == 1
    child = result.spawns[0]
    assert child.dot_type is DotType.CLASSIC
    assert np.all(np.abs(child.position - dots[0].position) <= 20.0)


def test_two_neighbors_survive_without_spawning():
    dots = [classic(100, 100), classic(130, 100), classic(160, 100)]
    result = evaluate_life_rules(dots, DotConfig(interaction_radius=50.0), np.random.RandomState(1))
    assert 1 not in result.removals
    assert result.removals == {0, 2}
    assert result.spawns == []


def test_crowded_dot_dies():
    dots = [classic(100, 100)] + [classic(100 + dx, 100 + dy) for dx, dy in
                                  [(10, 0), (-10, 0), (0, 10), (0, -10)]]
    result = evaluate_life_rules(dots, DotConfig(interaction_radius=50.0), np.random.RandomState(1))
    # Everyone sees the other four
    assert result.removals == {0, 1, 2, 3, 4}


def test_dead_and_other_types_are_not_neighbors():
    dots = star_population()
    dots[1].alive = False
    dots[2].dot_type = DotType.PREY
    counts = count_neighbors(dots, DotConfig(interaction_radius=50.0))
    assert counts == {0: 1, 3: 1, 4: 0}


def test_neighbor_radius_is_exclusive():
    dots = [classic(100, 100), classic(150, 100)]
    assert count_neighbors(dots, DotConfig(interaction_radius=50.0)) == {0: 0, 1: 0}


def test_life_rules_only_run_in_life_mode_on_their_period():
    sim = Simulation(DotConfig(interaction_radius=50.0), seed=0)
    for dot in star_population():
        sim.dots.append(dot)

    for _ in range(29):
        sim.step()
    assert sim.alive_count() == 5

    sim.toggle_life_mode()
    sim.step()  # frame 30
    assert sim.frame == 30
    alive = [d for d in sim.dots if d.alive]
    # The centre survives and a newborn joins it; the rest die
    assert len(alive) == 2
    assert all(d.dot_type is DotType.CLASSIC for d in alive)


def test_life_rule_births_respect_capacity():
    sim = Simulation(DotConfig(interaction_radius=50.0), capacity=5, seed=0)
    sim.dots.extend(star_population())
    sim.apply_life_rules()
    assert len(sim.dots) == 5
