"""
Tests for the Point-Cloud Generator
"""

import pytest
import numpy as np

from hofstadterheart import (
    ConfigurationError,
    EmptyPointCloudError,
    GeneratedPoint,
    PipelineConfig,
    PointCloudGenerator,
    generate,
)
from hofstadterheart.model.colors import classification_colors, hsl_to_rgb
from hofstadterheart.model.geometry_primitives import Point


class TestMapping:
    def test_small_range_keeps_everything(self, small_config):
        cloud = PointCloudGenerator(small_config).generate()
        assert len(cloud) == 10
        np.testing.assert_array_equal(cloud.indices, np.arange(1, 11))
        np.testing.assert_array_equal(cloud.positions[:, 2], np.zeros(10))

    def test_coordinates(self, small_config):
        cloud = PointCloudGenerator(small_config).generate()
        # a(5) = 3, Q(5) = 5
        x, y, z = cloud.positions[4]
        assert x == pytest.approx((5 - 5.0) * 0.03)
        assert y == pytest.approx(-2 * 0.125)
        assert z == 0.0

    def test_depth_from_local_variation(self):
        cloud = generate(n_max=15, step=1)
        row = int(np.flatnonzero(cloud.indices == 11)[0])
        x, y, z = cloud.positions[row]
        # a(11) = 7, a(6) = 4, Q(11) = 10, Q(6) = 3
        assert x == pytest.approx((11 - 7.5) * 0.03)
        assert y == pytest.approx((7 - 10) * 0.125)
        assert z == pytest.approx((3 + 7) * 0.1)

    def test_step_sampling(self):
        cloud = generate(n_max=10, step=3)
        np.testing.assert_array_equal(cloud.indices, [1, 4, 7, 10])

    def test_generated_points(self, small_config):
        cloud = PointCloudGenerator(small_config).generate()
        points = cloud.points
        assert len(points) == len(cloud)
        assert all(isinstance(p, GeneratedPoint) for p in points)
        assert points[0].index == 1
        assert points[0].position == Point.from_array(cloud.positions[0])
        assert points[0].color == tuple(cloud.colors[0])


class TestOutlierFilter:
    def test_y_threshold(self, small_config):
        # |a - Q| = 2 at n = 5 and n = 8
        config = small_config.with_overrides(max_abs_y=0.2)
        cloud = PointCloudGenerator(config).generate()
        np.testing.assert_array_equal(cloud.indices, [1, 2, 3, 4, 6, 7, 9, 10])

    def test_x_and_y_thresholds(self, small_config):
        config = small_config.with_overrides(max_abs_x=0.1, max_abs_y=0.2)
        cloud = PointCloudGenerator(config).generate()
        np.testing.assert_array_equal(cloud.indices, [2, 3, 4, 6, 7])

    def test_z_threshold(self):
        # z(11) = 1.0 is the only value above 0.9 in 1..11
        config = PipelineConfig(n_max=11, max_abs_z=0.9)
        cloud = PointCloudGenerator(config).generate()
        assert 11 not in cloud.indices
        assert len(cloud) == 10

    def test_default_run_respects_thresholds(self):
        cloud = generate(n_max=3000)
        assert (np.abs(cloud.positions[:, 0]) <= 200).all()
        assert (np.abs(cloud.positions[:, 1]) <= 100).all()
        assert (np.abs(cloud.positions[:, 2]) <= 50).all()
        assert len(np.unique(cloud.indices)) == len(cloud)
        assert (np.diff(cloud.indices) > 0).all()

    def test_everything_rejected(self):
        # a(n) != Q(n) for n = 1..9, so every |y| >= 0.125
        config = PipelineConfig(n_max=9, max_abs_y=0.01)
        with pytest.raises(EmptyPointCloudError) as excinfo:
            PointCloudGenerator(config).generate()
        assert excinfo.value.n_max == 9
        assert excinfo.value.step == 1


class TestColors:
    def test_colors_are_binary(self):
        cloud = generate(n_max=2000)
        concordant, discordant = classification_colors(PipelineConfig())
        is_concordant = np.all(cloud.colors == concordant, axis=1)
        is_discordant = np.all(cloud.colors == discordant, axis=1)
        assert np.all(is_concordant ^ is_discordant)
        np.testing.assert_array_equal(is_concordant, cloud.concordant)

    def test_colors_in_unit_range(self):
        cloud = generate(n_max=500)
        assert cloud.colors.min() >= 0.0
        assert cloud.colors.max() <= 1.0

    def test_threshold_classification(self, small_config):
        # correlation(1) = 1/4, correlation(5) = 2/9, correlation(10) = 0
        config = small_config.with_overrides(correlation_threshold=0.24)
        cloud = PointCloudGenerator(config).generate()
        assert not cloud.concordant[0]
        assert cloud.concordant[4]
        assert cloud.concordant[9]


    def test_srgb_colors_are_raw_hsl(self, small_config):
        config = small_config.with_overrides(linear_colors=False, correlation_threshold=0.24)
        cloud = PointCloudGenerator(config).generate()
        np.testing.assert_allclose(cloud.colors[0], hsl_to_rgb(0.6, 0.7, 0.5))
        np.testing.assert_allclose(cloud.colors[9], hsl_to_rgb(0.95, 0.9, 0.6))
        np.testing.assert_allclose(cloud.colors[0], [0.15, 0.43, 0.85])


class TestBoundsAndView:
    def test_positions_within_bounds(self):
        cloud = generate(n_max=1500)
        lo = cloud.bounds.min.to_array()
        hi = cloud.bounds.max.to_array()
        assert (cloud.positions >= lo).all()
        assert (cloud.positions <= hi).all()
        np.testing.assert_array_equal(lo, cloud.positions.min(axis=0))
        np.testing.assert_array_equal(hi, cloud.positions.max(axis=0))

    def test_view_targets_center(self):
        cloud = generate(n_max=1500)
        assert cloud.view.target == cloud.bounds.min.midpoint(cloud.bounds.max)

    def test_view_position(self):
        cloud = generate(n_max=1500)
        center = cloud.bounds.center.to_array()
        distance = cloud.bounds.max_dim * 3
        expected = center + distance * np.array([0.7, 0.3, 0.5])
        np.testing.assert_allclose(cloud.view.position.to_array(), expected)
        assert cloud.view.distance == pytest.approx(distance * np.linalg.norm([0.7, 0.3, 0.5]))

    def test_single_index(self):
        cloud = generate(n_max=1, step=1)
        assert len(cloud) == 1
        assert cloud.bounds.min == cloud.bounds.max
        assert cloud.view.position == cloud.view.target


class TestDeterminism:
    def test_repeated_generation_identical(self):
        first = generate(n_max=2000)
        second = generate(n_max=2000)
        np.testing.assert_array_equal(first.positions, second.positions)
        np.testing.assert_array_equal(first.colors, second.colors)
        np.testing.assert_array_equal(first.indices, second.indices)

    def test_reused_engine_identical(self):
        generator = PointCloudGenerator(PipelineConfig(n_max=2000))
        first = generator.generate()
        count = generator.sequences.computed_count
        second = generator.generate()
        assert generator.sequences.computed_count == count
        np.testing.assert_array_equal(first.positions, second.positions)
        np.testing.assert_array_equal(first.colors, second.colors)


class TestConfiguration:
    @pytest.mark.parametrize("n_max, step", [(0, 1), (-3, 1), (10, 0), (10, -1)])
    def test_invalid_inputs(self, n_max, step):
        with pytest.raises(ConfigurationError):
            generate(n_max=n_max, step=step)

    def test_config_limits_are_honoured(self):
        cloud = generate(config=PipelineConfig(n_max=100, step=5))
        assert cloud.indices.max() <= 100
        np.testing.assert_array_equal(cloud.indices, np.arange(1, 101, 5))

    def test_explicit_arguments_override_config(self):
        cloud = generate(n_max=20, config=PipelineConfig(n_max=100, step=5))
        np.testing.assert_array_equal(cloud.indices, [1, 6, 11, 16])

    def test_configuration_error_is_value_error(self):
        with pytest.raises(ValueError):
            PipelineConfig(n_max=0).validate()

    def test_non_positive_scale(self):
        with pytest.raises(ConfigurationError):
            PipelineConfig(y_scale=0.0).validate()

    def test_bad_hsl(self):
        with pytest.raises(ConfigurationError):
            PipelineConfig(concordant_hsl=(0.5, 1.5, 0.5)).validate()

    def test_unknown_override(self):
        with pytest.raises(ConfigurationError):
            PipelineConfig().with_overrides(nmax=5)

    def test_dict_round_trip(self):
        config = PipelineConfig(n_max=1234, view_direction=(1.0, 0.0, 0.0))
        assert PipelineConfig.from_dict(config.to_dict()) == config
