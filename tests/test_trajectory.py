import math
from collections import Counter

import pytest

from constants import DEFAULT_PALETTE, SHAPE_RIBBON, SHAPE_ROUND, STYLES
from trajectory import TrajectoryGenerator, frac


@pytest.fixture
def generator():
    return TrajectoryGenerator()


def test_frac():
    assert frac(0.0) == 0.0
    assert frac(2.75) == 0.75
    assert frac(-0.25) == 0.75


def test_first_particle_on_small_canvas(generator):
    p = generator.generate(0, 100, 200)
    assert p.start_position == (0.0, -20.0)
    assert p.end_position == (-60.0, 250.0)
    assert p.color == DEFAULT_PALETTE[0]
    assert p.delay == 0.0
    assert p.size == 4
    assert p.shape == SHAPE_RIBBON
    assert p.extent == (4.0, 6.0)
    assert p.corner_radius == 3.0
    assert p.fall_duration == 3.0


def test_odd_particles_are_round(generator):
    p = generator.generate(1, 100, 200)
    assert p.shape == SHAPE_ROUND
    assert p.size == 5
    assert p.extent == (5.0, 5.0)
    assert p.corner_radius == 2.5
    assert p.start_position[0] == pytest.approx(70.0)


def test_generation_is_deterministic(generator):
    for i in range(200):
        assert generator.generate(i, 375.5, 812) == generator.generate(i, 375.5, 812)
    assert TrajectoryGenerator().generate(17, 320, 640) == generator.generate(17, 320, 640)


def test_attribute_bounds(generator):
    width, height = 375.5, 812.0
    for i in range(500):
        p = generator.generate(i, width, height)
        assert 0 <= p.start_position[0] < width
        assert p.start_position[1] == -20.0
        assert p.end_position[1] == height + 50
        assert abs(p.end_position[0] - p.start_position[0]) <= 60.0
        assert p.color in DEFAULT_PALETTE
        assert 0.0 <= p.delay <= 0.72 + 1e-9
        assert 4 <= p.size <= 9
        assert p.rotation == i % 360


def test_palette_and_shape_periodicity(generator):
    for i in range(100):
        assert generator.generate(i, 300, 600).color == generator.generate(i + 5, 300, 600).color
        assert generator.generate(i, 300, 600).shape == generator.generate(i + 2, 300, 600).shape


def test_canvas_independent_fields(generator):
    small = generator.generate(13, 10, 10)
    large = generator.generate(13, 2000, 3000)
    for field in ('color', 'size', 'shape', 'rotation', 'delay', 'corner_radius'):
        assert getattr(small, field) == getattr(large, field)
    assert small.start_position != large.start_position


def test_fifty_pieces_fill_ten_delay_buckets(generator):
    delays = Counter(round(generator.generate(i, 390, 844).delay, 9) for i in range(50))
    assert len(delays) == 10
    assert set(delays.values()) == {5}


def test_zero_canvas_collapses_positions(generator):
    for i in range(50):
        p = generator.generate(i, 0, 0)
        assert p.start_position == (0.0, 0.0)
        assert p.end_position == (0.0, 0.0)
        assert all(math.isfinite(v) for v in p.start_position + p.end_position)


def test_zero_width_only_collapses_x(generator):
    p = generator.generate(3, 0, 400)
    assert p.start_position == (0.0, -20.0)
    assert p.end_position == (0.0, 450.0)


def test_negative_canvas_treated_as_zero(generator):
    assert generator.generate(8, -50, -10) == generator.generate(8, 0, 0)


def test_palette_is_frozen():
    palette = [list(c) for c in STYLES['green']]
    gen = TrajectoryGenerator(palette=palette)
    palette[0][0] = 0
    assert gen.palette == STYLES['green']
    assert gen.generate(0, 100, 100).color == STYLES['green'][0]


class TestBurstFromAllSides:
    @pytest.fixture
    def burst(self):
        return TrajectoryGenerator(from_all_sides=True)

    def test_top_edge(self, burst):
        p = burst.generate(0, 400, 800)
        assert p.start_position == (0.0, -24.0)
        assert p.burst_position == pytest.approx((0.0, 96.0))
        assert p.end_position == pytest.approx((-60.0, 850.0))

    def test_right_edge(self, burst):
        p = burst.generate(1, 400, 800)
        assert p.start_position[0] == 424.0
        assert p.burst_position[0] == pytest.approx(328.0)
        assert p.start_position[1] == pytest.approx(p.burst_position[1])

    def test_bottom_and_left_edges(self, burst):
        bottom = burst.generate(2, 400, 800)
        assert bottom.start_position[1] == 824.0
        assert bottom.burst_position[1] == pytest.approx(704.0)
        left = burst.generate(3, 400, 800)
        assert left.start_position[0] == -24.0
        assert left.burst_position[0] == pytest.approx(72.0)

    def test_timing(self, burst):
        p = burst.generate(5, 400, 800)
        assert p.fall_duration == pytest.approx(1.95)
        assert p.delay == pytest.approx(5 * 0.08 * 0.7)
        assert p.burst_delay == pytest.approx(5 * 0.008)
        long_fall = TrajectoryGenerator(fall_duration=10.0, from_all_sides=True)
        assert long_fall.generate(5, 400, 800).fall_duration == 2.8

    def test_spin(self, burst):
        assert burst.generate(30, 400, 800).spin == 30.0
        assert TrajectoryGenerator().generate(30, 400, 800).spin == 0.0

    def test_zero_canvas(self, burst):
        for i in range(8):
            p = burst.generate(i, 0, 0)
            assert p.start_position == (0.0, 0.0)
            assert p.burst_position == (0.0, 0.0)
            assert p.end_position == (0.0, 0.0)
