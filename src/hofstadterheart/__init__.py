"""
Hofstadter Heart - point clouds from Hofstadter's a(n) and Q(n) sequences.
"""

__version__ = "0.1.0"

from .config import PipelineConfig, DEFAULT_N_MAX, DEFAULT_STEP
from .errors import (
    HofstadterError,
    ConfigurationError,
    EmptyPointCloudError,
    SequenceReferenceError,
    SequenceOverflowError,
)
from .sequences import HofstadterSequences, SequenceTables
from .pointcloud import GeneratedPoint, PointCloud, PointCloudGenerator, generate

__all__ = [
    "PipelineConfig",
    "DEFAULT_N_MAX",
    "DEFAULT_STEP",
    "HofstadterError",
    "ConfigurationError",
    "EmptyPointCloudError",
    "SequenceReferenceError",
    "SequenceOverflowError",
    "HofstadterSequences",
    "SequenceTables",
    "GeneratedPoint",
    "PointCloud",
    "PointCloudGenerator",
    "generate",
]
