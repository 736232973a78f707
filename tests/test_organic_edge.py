"""Tests for the ripped bezier edge generator."""

import random

import pytest

from edgelab.edges import organic_edge, paper_rip
from edgelab.geometry import CubicBezierTo, HorizontalTo, MoveTo, Point, VerticalTo
from edgelab.params import Edge, OrganicEdgeParams, Side


def _curves(path):
    return [s for s in path.segments if isinstance(s, CubicBezierTo)]


class TestShape:

    def test_single_segment_is_well_formed(self):
        path = organic_edge(OrganicEdgeParams(segments=1, seed=1))
        assert path.command_letters() == ["M", "V", "L", "C", "V", "H", "Z"]
        assert len(path.points()) >= 2

    def test_zero_segments_clamped_to_one(self):
        path = organic_edge(OrganicEdgeParams(segments=0, seed=1))
        assert len(_curves(path)) == 1
        assert path.is_closed

    def test_vertical_command_sequence(self):
        path = organic_edge(OrganicEdgeParams(segments=3, edge=Edge.VERTICAL, seed=1))
        assert path.command_letters() == ["M", "H", "L", "C", "C", "C", "H", "V", "Z"]

    def test_same_structure_across_calls(self):
        params = OrganicEdgeParams(segments=20)
        shapes = {tuple(organic_edge(params).command_letters()) for _ in range(10)}
        assert len(shapes) == 1
        (shape,) = shapes
        assert len(shape) == 3 + 20 + 3


class TestHorizontal:

    def test_top_rip_layout(self):
        params = OrganicEdgeParams(width=1020, height=100, segments=20, roughness=30,
                                   variance=0.5, side=Side.PRIMARY, seed=3)
        path = organic_edge(params)
        assert path.segments[0] == MoveTo(Point(0.0, 100.0))
        assert path.segments[1] == VerticalTo(70.0)
        assert path.segments[-3] == VerticalTo(100.0)
        assert path.segments[-2] == HorizontalTo(0.0)

        step = 1020 / 20
        for i, curve in enumerate(_curves(path), start=1):
            assert curve.end.x == pytest.approx(i * step)
            assert curve.c1.x == pytest.approx(i * step - step * 0.5)
            assert curve.c2.x == pytest.approx(i * step - step * 0.25)
            for y in (curve.c1.y, curve.c2.y, curve.end.y):
                assert 70 - 15 <= y <= 70 + 15

    def test_bottom_rip_layout(self):
        params = OrganicEdgeParams(height=100, roughness=30, variance=0.0,
                                   side=Side.SECONDARY, seed=3)
        path = organic_edge(params)
        assert path.segments[0] == MoveTo(Point(0.0, 0.0))
        assert path.segments[1] == VerticalTo(30.0)
        # variance 0 and sign +1 only push away from the straight edge
        for curve in _curves(path):
            assert 30 <= curve.end.y <= 60

    def test_zero_roughness_sits_on_baseline(self):
        path = organic_edge(OrganicEdgeParams(height=100, roughness=0, seed=8))
        assert all(c.end.y == 70.0 and c.c1.y == 70.0 and c.c2.y == 70.0 for c in _curves(path))


class TestVertical:

    def test_left_tear(self):
        params = OrganicEdgeParams(width=200, height=600, segments=10, roughness=20,
                                   edge=Edge.VERTICAL, side=Side.PRIMARY, seed=5)
        path = organic_edge(params)
        assert path.segments[0] == MoveTo(Point(200.0, 0.0))
        assert path.segments[1] == HorizontalTo(60.0)
        for i, curve in enumerate(_curves(path), start=1):
            assert curve.end.y == pytest.approx(i * 60)
            assert 60 - 20 <= curve.end.x <= 60 + 20

    def test_right_tear(self):
        params = OrganicEdgeParams(width=200, edge=Edge.VERTICAL, side=Side.SECONDARY, seed=5)
        path = organic_edge(params)
        assert path.segments[0] == MoveTo(Point(0.0, 0.0))
        assert path.segments[1] == HorizontalTo(140.0)
        assert path.segments[-3] == HorizontalTo(0.0)


class TestRandomness:

    def test_seed_reproduces_geometry(self):
        params = OrganicEdgeParams(seed=77)
        assert organic_edge(params) == organic_edge(params)

    def test_control_points_are_resampled(self):
        path = organic_edge(OrganicEdgeParams(seed=4))
        assert any(c.c1.y != c.c2.y for c in _curves(path))

    def test_paper_rip_pair(self):
        top, bottom = paper_rip(OrganicEdgeParams(height=100, seed=9))
        assert top.segments[0] == MoveTo(Point(0.0, 100.0))
        assert bottom.segments[0] == MoveTo(Point(0.0, 0.0))
        assert paper_rip(OrganicEdgeParams(seed=9)) == paper_rip(OrganicEdgeParams(seed=9))

    def test_injected_stream(self):
        params = OrganicEdgeParams()
        assert organic_edge(params, rng=random.Random(3)) == organic_edge(params, rng=random.Random(3))


class TestExtremeInput:

    def test_huge_segment_count_is_capped(self):
        path = organic_edge(OrganicEdgeParams(segments=10 ** 12, seed=1))
        assert path.command_letters().count("C") == 1000

    def test_huge_values_stay_finite(self):
        params = OrganicEdgeParams(width=1e300, height=1e300, roughness=1e300,
                                   edge=Edge.VERTICAL, seed=2)
        assert organic_edge(params).is_finite()
