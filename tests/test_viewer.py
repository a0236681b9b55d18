"""
Tests for the pyvista adapter (no window is opened)
"""

import numpy as np

from hofstadterheart import generate
from hofstadterheart.view.viewer import PRESET_VIEWS, to_polydata


class TestPolyData:
    def test_points_and_colors(self):
        cloud = generate(n_max=400)
        pd = to_polydata(cloud)

        assert pd.n_points == len(cloud)
        np.testing.assert_allclose(pd.points, cloud.positions, rtol=1e-6, atol=1e-5)
        np.testing.assert_allclose(pd.point_data["rgb"], cloud.colors, rtol=1e-6)
        np.testing.assert_array_equal(pd.point_data["index"], cloud.indices)

    def test_presets(self):
        assert set(PRESET_VIEWS) == {"t", "s", "f", "r"}
