"""
Point Cloud Viewer (pyvista)
============================
Thin renderer adapter: draws the generated points and frames the camera with
the view suggestion. No pipeline logic lives here.

Keys:
    t  heart view     s  side view     f  front view
    r  reset view     space  toggle auto-rotation
"""
import logging
from typing import Optional

import numpy as np
import pyvista as pv

from hofstadterheart.pointcloud.generator import PointCloud

logger = logging.getLogger(__name__)

BACKGROUND_COLOR = "#0a0a1a"

# Fixed camera presets, all looking at the origin
PRESET_VIEWS: dict[str, tuple[float, float, float]] = {
    "t": (0.0, 200.0, 300.0),
    "s": (300.0, 0.0, 0.0),
    "f": (0.0, 0.0, 400.0),
    "r": (200.0, 150.0, 300.0),
}

AUTO_ROTATE_DEGREES_PER_FRAME = 0.5


def to_polydata(cloud: PointCloud) -> pv.PolyData:
    """Point primitive with an 'rgb' point array built from the cloud colors."""
    pd = pv.PolyData(np.ascontiguousarray(cloud.positions, dtype=np.float32))
    pd.point_data["rgb"] = np.ascontiguousarray(cloud.colors, dtype=np.float32)
    pd.point_data["index"] = cloud.indices
    return pd


class PointCloudViewer:
    def __init__(self, cloud: PointCloud, point_size: float = 3.0, off_screen: bool = False) -> None:
        self.cloud = cloud
        self.point_size = point_size
        self.auto_rotate = True
        self.plotter = pv.Plotter(off_screen=off_screen)
        self._build_scene()

    def _build_scene(self) -> None:
        self.plotter.set_background(BACKGROUND_COLOR)
        self.plotter.add_points(
            to_polydata(self.cloud),
            scalars="rgb",
            rgb=True,
            point_size=self.point_size,
            render_points_as_spheres=True,
            opacity=0.9,
        )
        self.plotter.add_axes()
        self.apply_suggested_view()

        for key, position in PRESET_VIEWS.items():
            self.plotter.add_key_event(key, lambda p=position: self.set_camera(p, (0.0, 0.0, 0.0)))
        self.plotter.add_key_event("space", self.toggle_auto_rotate)

    def set_camera(self, position: tuple[float, float, float], target: tuple[float, float, float]) -> None:
        self.plotter.camera_position = [position, target, (0.0, 1.0, 0.0)]
        self.plotter.render()

    def apply_suggested_view(self) -> None:
        view = self.cloud.view
        self.plotter.camera_position = [view.position.to_tuple(), view.target.to_tuple(), (0.0, 1.0, 0.0)]
        logger.info(f"Camera set to suggested view at {view.position.to_tuple()}")

    def toggle_auto_rotate(self) -> None:
        self.auto_rotate = not self.auto_rotate
        logger.debug(f"Auto-rotate: {self.auto_rotate}")

    def _on_tick(self, step: Optional[int] = None) -> None:
        if self.auto_rotate:
            self.plotter.camera.Azimuth(AUTO_ROTATE_DEGREES_PER_FRAME)
            self.plotter.render()

    def show(self) -> None:
        self.plotter.add_timer_event(max_steps=10**9, duration=16, callback=self._on_tick)
        self.plotter.show(title="Hofstadter Heart")
