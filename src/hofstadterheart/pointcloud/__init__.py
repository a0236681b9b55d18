from .generator import GeneratedPoint, PointCloud, PointCloudGenerator, generate, map_tables
from .view import compute_bounds, suggest_view
