"""
Input/Output Manager (HDF5)
Handles saving and loading a generated PointCloud to .h5 files.
"""
import json
import logging
from typing import Optional
from importlib.metadata import version, PackageNotFoundError

import h5py
import numpy as np

from hofstadterheart.config import PipelineConfig
from hofstadterheart.model.geometry_primitives import BoundingBox, Point, ViewSuggestion
from hofstadterheart.pointcloud.generator import PointCloud

# Get module logger
logger = logging.getLogger(__name__)

try:
    APP_VERSION = version("hofstadterheart")
except PackageNotFoundError:
    APP_VERSION = "0.0.0-dev"

_REQUIRED_DATASETS = ("positions", "colors", "indices", "concordant")


class PointCloudIO:
    @staticmethod
    def save(cloud: PointCloud, filepath: str, config: Optional[PipelineConfig] = None) -> None:
        """
        Write the point cloud, its framing and the generating configuration.

        Args:
            cloud: Generator output.
            filepath: Target .h5 file (overwritten).
            config: Configuration used to build `cloud`, stored as JSON.
        """
        logger.info(f"Saving point cloud to: {filepath}")
        try:
            with h5py.File(filepath, "w") as f:
                f.attrs["app_version"] = APP_VERSION
                if config is not None:
                    f.attrs["config"] = json.dumps(config.to_dict())

                f.create_dataset("positions", data=cloud.positions, compression="gzip")
                f.create_dataset("colors", data=cloud.colors, compression="gzip")
                f.create_dataset("indices", data=cloud.indices, compression="gzip")
                f.create_dataset("concordant", data=cloud.concordant.astype(np.uint8), compression="gzip")

                grp_bounds = f.create_group("bounds")
                grp_bounds.attrs["min"] = cloud.bounds.min.to_array()
                grp_bounds.attrs["max"] = cloud.bounds.max.to_array()

                grp_view = f.create_group("view")
                grp_view.attrs["position"] = cloud.view.position.to_array()
                grp_view.attrs["target"] = cloud.view.target.to_array()

            logger.info(f"Point cloud saved ({len(cloud)} points).")
        except Exception as e:
            logger.exception(f"Failed to save point cloud: {e}")
            raise e

    @staticmethod
    def load(filepath: str) -> PointCloud:
        """
        Read a point cloud written by `save`.

        Raises:
            ValueError: If the file does not contain a point cloud.
        """
        logger.info(f"Loading point cloud from: {filepath}")
        try:
            with h5py.File(filepath, "r") as f:
                missing = [name for name in _REQUIRED_DATASETS if name not in f]
                if missing or "bounds" not in f or "view" not in f:
                    msg = f"File '{filepath}' is not a point cloud (missing: {missing or ['bounds/view']})."
                    logger.error(msg)
                    raise ValueError(msg)

                saved_version = f.attrs.get("app_version", "unknown")
                if saved_version != APP_VERSION:
                    logger.debug(f"File written by version {saved_version}, running {APP_VERSION}.")

                cloud = PointCloud(
                    positions=f["positions"][()].astype(np.float64),
                    colors=f["colors"][()].astype(np.float64),
                    indices=f["indices"][()].astype(np.int64),
                    concordant=f["concordant"][()].astype(bool),
                    bounds=BoundingBox(
                        min=Point.from_array(f["bounds"].attrs["min"]),
                        max=Point.from_array(f["bounds"].attrs["max"]),
                    ),
                    view=ViewSuggestion(
                        position=Point.from_array(f["view"].attrs["position"]),
                        target=Point.from_array(f["view"].attrs["target"]),
                    ),
                )
            logger.info(f"Point cloud loaded ({len(cloud)} points).")
            return cloud
        except ValueError:
            raise
        except Exception as e:
            logger.exception(f"Failed to load point cloud: {e}")
            raise e

    @staticmethod
    def load_config(filepath: str) -> Optional[PipelineConfig]:
        """Configuration stored alongside the cloud, if any."""
        with h5py.File(filepath, "r") as f:
            raw = f.attrs.get("config")
        if raw is None:
            return None
        return PipelineConfig.from_dict(json.loads(raw))
