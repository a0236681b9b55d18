from .geometry_primitives import Vector, Point, BoundingBox, ViewSuggestion
from .colors import hsl_to_rgb, srgb_to_linear, classification_colors
