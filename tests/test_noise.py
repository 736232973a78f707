"""Unit tests for edgelab.noise: per-call random streams and the sine sampler."""

import math
import random

import numpy as np
import pytest

from edgelab.noise import (NoiseOffset, SineNoiseSampler, resolve_rng, rng_from_seed,
                           sine_sampler_factory)


class TestRandomStreams:

    def test_same_seed_same_sequence(self):
        a = rng_from_seed(42)
        b = rng_from_seed(42)
        assert [a.random() for _ in range(5)] == [b.random() for _ in range(5)]

    def test_float_seed(self):
        assert rng_from_seed(1.5).random() == rng_from_seed(1.5).random()

    def test_unseeded_streams_differ(self):
        a = rng_from_seed(None)
        b = rng_from_seed(None)
        assert [a.random() for _ in range(5)] != [b.random() for _ in range(5)]

    def test_resolve_prefers_injected_stream(self, rng):
        assert resolve_rng(rng, 5) is rng
        assert isinstance(resolve_rng(None, 5), random.Random)

    def test_global_random_state_untouched(self):
        state = random.getstate()
        rng_from_seed(3).random()
        SineNoiseSampler.from_rng(rng_from_seed(None))
        assert random.getstate() == state


class TestSineNoiseSampler:

    def test_offset_ranges(self, rng):
        for _ in range(50):
            sampler = SineNoiseSampler.from_rng(rng)
            assert len(sampler.offsets) == 3
            for off in sampler.offsets:
                assert 0 <= off.phase < 2 * math.pi
                assert 0.5 <= off.frequency <= 2.0
                assert 0.5 <= off.amplitude <= 1.0

    def test_sample_is_mean_of_sines(self):
        offsets = (NoiseOffset(0.0, 1.0, 1.0), NoiseOffset(math.pi / 2, 2.0, 0.5))
        sampler = SineNoiseSampler(offsets)
        p = 0.7
        expected = (math.sin(p) + math.sin(2 * p + math.pi / 2) * 0.5) / 2
        assert sampler.sample(p) == pytest.approx(expected)
        assert isinstance(sampler.sample(p), float)

    def test_array_input_keeps_shape_and_bounds(self, rng):
        sampler = SineNoiseSampler.from_rng(rng)
        positions = np.linspace(0, 100, 500)
        values = sampler.sample(positions)
        assert values.shape == positions.shape
        assert np.all(np.abs(values) <= 1.0)

    def test_factory_draws_from_given_stream(self):
        a = sine_sampler_factory(random.Random(8))
        b = sine_sampler_factory(random.Random(8))
        assert a == b
