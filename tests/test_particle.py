import math

import numpy as np
import pytest

from dotgame.config import SCREEN_HEIGHT, SCREEN_WIDTH, DotConfig
from dotgame.dot_types import DotType
from dotgame.particle import Dot


def make_dot(x=640.0, y=360.0, dot_type=DotType.CLASSIC, vx=0.0, vy=0.0, **kwargs):
    dot = Dot.at(x, y, dot_type)
    dot.velocity = np.array([vx, vy])
    for name, value in kwargs.items():
        setattr(dot, name, value)
    return dot


def test_dead_dot_is_not_integrated():
    dot = make_dot(vx=3.0, alive=False)
    dot.integrate(DotConfig(), 1.0)
    assert dot.x == pytest.approx(640.0)
    assert dot.energy == pytest.approx(100.0)
    assert dot.age == 0.0


def test_speed_is_clamped_to_max_speed_keeping_direction():
    config = DotConfig(max_speed=5.0)
    dot = make_dot(vx=30.0, vy=40.0)
    dot.integrate(config, 1.0)
    assert dot.speed == pytest.approx(5.0)
    assert dot.velocity[0] / dot.velocity[1] == pytest.approx(0.75)


def test_acceleration_is_scaled_by_mass_and_reset():
    dot = make_dot(mass=2.0)
    dot.apply_force(np.array([1.0, 0.0]))
    assert dot.acceleration[0] == pytest.approx(0.5)

    dot.integrate(DotConfig(), 1.0)
    assert dot.velocity[0] == pytest.approx(0.5 * 0.98)
    assert np.all(dot.acceleration == 0.0)


def test_right_wall_reflects_and_damps_velocity():
    config = DotConfig(bounce_damping=0.8)
    dot = make_dot(x=SCREEN_WIDTH - 6.0, vx=4.0, vy=1.0)

    dot.integrate(config, 1.0)

    assert dot.x == pytest.approx(SCREEN_WIDTH - dot.radius)
    assert dot.velocity[0] == pytest.approx(-4.0 * 0.98 * 0.8)
    assert abs(dot.velocity[0]) <= 4.0 * 0.98 * config.bounce_damping + 1e-12
    # Spin comes from the tangential component and then decays
    assert dot.spin == pytest.approx(-0.98 * 0.1 * 0.95)


def test_top_wall_sets_spin_from_horizontal_velocity():
    dot = make_dot(y=5.5, vx=2.0, vy=-3.0)
    dot.integrate(DotConfig(), 1.0)
    assert dot.y == pytest.approx(dot.radius)
    assert dot.velocity[1] > 0.0
    assert dot.spin == pytest.approx(-2.0 * 0.98 * 0.1 * 0.95)


def test_left_wall_sets_spin_from_vertical_velocity():
    dot = make_dot(x=5.5, vx=-3.0, vy=2.0)
    dot.integrate(DotConfig(), 1.0)
    assert dot.x == pytest.approx(dot.radius)
    assert dot.velocity[0] > 0.0
    assert dot.spin == pytest.approx(2.0 * 0.98 * 0.1 * 0.95)


def test_bottom_wall_sets_spin_from_horizontal_velocity():
    dot = make_dot(y=SCREEN_HEIGHT - 5.5, vx=2.0, vy=3.0)
    dot.integrate(DotConfig(), 1.0)
    assert dot.y == pytest.approx(SCREEN_HEIGHT - dot.radius)
    assert dot.velocity[1] < 0.0
    assert dot.spin == pytest.approx(2.0 * 0.98 * 0.1 * 0.95)


def test_spin_decays_without_wall_contact():
    dot = make_dot(spin=1.0)
    dot.integrate(DotConfig(), 1.0)
    dot.integrate(DotConfig(), 1.0)
    assert dot.spin == pytest.approx(0.95 ** 2)


def test_energy_drains_and_age_advances():
    dot = make_dot()
    dot.integrate(DotConfig(), 0.5)
    assert dot.energy == pytest.approx(100.0 - 0.05)
    assert dot.age == pytest.approx(0.5)


def test_dot_dies_when_energy_runs_out():
    dot = make_dot(energy=0.05)
    dot.integrate(DotConfig(), 1.0)
    assert not dot.alive


def test_grower_grows_and_mass_follows_radius():
    config = DotConfig(growth_rate=0.5)
    dot = make_dot(dot_type=DotType.GROWER)
    dot.integrate(config, 2.0)
    assert dot.radius == pytest.approx(6.0)
    assert dot.mass == pytest.approx(36.0)


def test_other_types_keep_constant_size():
    dot = make_dot(dot_type=DotType.CLASSIC)
    dot.integrate(DotConfig(growth_rate=0.5), 2.0)
    assert dot.radius == pytest.approx(5.0)
    assert dot.mass == pytest.approx(1.0)


@pytest.mark.parametrize(
    "eater, prey, eater_radius, prey_radius, expected",
    [
        (DotType.PREDATOR, DotType.PREY, 10.0, 10.0, True),
        (DotType.PREDATOR, DotType.CLASSIC, 10.0, 5.0, True),
        (DotType.PREDATOR, DotType.PREY, 5.0, 10.0, False),
        (DotType.PREDATOR, DotType.ATTRACTOR, 10.0, 5.0, False),
        (DotType.ABSORBER, DotType.PREDATOR, 9.5, 10.0, True),
        (DotType.ABSORBER, DotType.GHOST, 8.0, 10.0, False),
        (DotType.PREY, DotType.CLASSIC, 10.0, 5.0, False),
    ],
)
def test_can_eat(eater, prey, eater_radius, prey_radius, expected):
    a = make_dot(dot_type=eater, radius=eater_radius)
    b = make_dot(dot_type=prey, radius=prey_radius)
    assert a.can_eat(b) is expected


def test_absorber_grows_when_absorbing():
    absorber = make_dot(dot_type=DotType.ABSORBER, radius=10.0)
    absorber.absorb(prey_radius=5.0, prey_energy=60.0)
    assert absorber.radius == pytest.approx(11.0)
    assert absorber.mass == pytest.approx(121.0)
    assert absorber.energy == pytest.approx(130.0)


def test_random_dot_stays_inside_spawn_margin():
    rng = np.random.RandomState(3)
    for _ in range(50):
        dot = Dot.random(DotType.PREY, rng, 400.0, 300.0)
        assert 50.0 <= dot.x <= 350.0
        assert 50.0 <= dot.y <= 250.0
        assert np.all(np.abs(dot.velocity) <= 2.0)
        assert math.isclose(dot.energy, 100.0)


def test_dots_compare_by_identity():
    a = make_dot(100.0, 100.0)
    b = make_dot(100.0, 100.0)
    predator = make_dot(130.0, 100.0, DotType.PREDATOR)
    dots = [predator, a]

    assert a != b
    assert dots.index(a) == 1
    assert a in dots and b not in dots
    dots.remove(a)
    assert dots == [predator]
