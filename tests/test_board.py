"""
Unit tests for board geometry.
"""
import math

import pytest

from dartsim.board import DartboardMapper, ThrowSimulator
from dartsim.core import BULLSEYE, Ring, Target

SECTOR = 2 * math.pi / 20


def test_angle_table():
    """Every number's centre angle follows the clockwise layout from the top."""
    mapper = DartboardMapper()

    assert mapper.angle_for_number(20) == 0.0
    assert mapper.angle_for_number(1) == pytest.approx(SECTOR)
    assert mapper.angle_for_number(6) == pytest.approx(5 * SECTOR)
    assert mapper.angle_for_number(5) == pytest.approx(19 * SECTOR)
    assert mapper.angle_for_number(BULLSEYE) == 0.0

    angles = [mapper.angle_for_number(n) for n in range(1, 21)]
    assert len(set(angles)) == 20


def test_angle_table_is_stable_and_read_only():
    """Repeated lookups agree and the table cannot be modified."""
    mapper = DartboardMapper()
    first = {n: mapper.angle_for_number(n) for n in range(1, 21)}
    second = {n: mapper.angle_for_number(n) for n in range(1, 21)}
    assert first == second

    with pytest.raises(TypeError):
        mapper.number_angles[20] = 1.0


def test_to_polar():
    """0 is the top, angles grow clockwise."""
    mapper = DartboardMapper()

    # Top (0)
    radius, angle = mapper.to_polar(0, 100)
    assert radius == pytest.approx(100.0)
    assert angle == pytest.approx(0.0)

    # Right (π/2)
    radius, angle = mapper.to_polar(100, 0)
    assert radius == pytest.approx(100.0)
    assert angle == pytest.approx(math.pi / 2)

    # Bottom (π)
    _, angle = mapper.to_polar(0, -100)
    assert angle == pytest.approx(math.pi)

    # Left (3π/2)
    _, angle = mapper.to_polar(-100, 0)
    assert angle == pytest.approx(3 * math.pi / 2)


def test_cartesian_round_trip():
    """to_cartesian inverts to_polar."""
    mapper = DartboardMapper()
    x, y = mapper.to_cartesian(103.0, mapper.angle_for_number(19))
    radius, angle = mapper.to_polar(x, y)

    assert radius == pytest.approx(103.0)
    assert angle == pytest.approx(mapper.angle_for_number(19))


def test_number_from_angle():
    """Nearest sector centre wins, wrapping at the top."""
    mapper = DartboardMapper()

    assert mapper.number_from_angle(0.0) == 20
    assert mapper.number_from_angle(SECTOR * 0.49) == 20
    assert mapper.number_from_angle(SECTOR * 0.51) == 1
    assert mapper.number_from_angle(math.pi / 2) == 6
    assert mapper.number_from_angle(math.pi) == 3
    assert mapper.number_from_angle(3 * math.pi / 2) == 11
    assert mapper.number_from_angle(2 * math.pi - 0.01) == 20
    assert mapper.number_from_angle(-SECTOR) == 5


def test_ring_from_radius():
    """Radius bands map to rings; the board edge is inclusive."""
    mapper = DartboardMapper()

    assert mapper.ring_from_radius(50.0) == Ring.SINGLE
    assert mapper.ring_from_radius(99.0) == Ring.TRIPLE
    assert mapper.ring_from_radius(103.0) == Ring.TRIPLE
    assert mapper.ring_from_radius(134.5) == Ring.SINGLE
    assert mapper.ring_from_radius(166.0) == Ring.DOUBLE
    assert mapper.ring_from_radius(170.0) == Ring.DOUBLE
    assert mapper.ring_from_radius(170.1) == Ring.MISS


def test_classify():
    """Landing points score independently of any aim."""
    mapper = DartboardMapper()

    assert mapper.classify(0, 0).target == Target.parse("DB")
    assert mapper.classify(0, 0).score == 50
    assert mapper.classify(0, 10).target == Target.parse("SB")
    assert mapper.classify(0, 50).target == Target.parse("S20")
    assert mapper.classify(0, 103).target == Target.parse("T20")
    assert mapper.classify(0, 166).target == Target.parse("D20")
    assert mapper.classify(0, -103).target == Target.parse("T3")
    assert mapper.classify(166, 0).target == Target.parse("D6")

    miss = mapper.classify(0, 200)
    assert miss.ring == Ring.MISS
    assert miss.score == 0
    assert miss.radius == pytest.approx(200.0)


def test_every_aim_point_scores_its_target():
    """Aiming dead centre of any scoring area classifies back to it."""
    simulator = ThrowSimulator()
    mapper = simulator.mapper

    targets = [Target(ring, n) for n in range(1, 21)
               for ring in (Ring.SINGLE, Ring.DOUBLE, Ring.TRIPLE)]
    targets.append(Target.parse("DB"))

    for target in targets:
        x, y = simulator.aim_point(target)
        assert mapper.classify(x, y).target == target
