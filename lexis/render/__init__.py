from .control_points import ControlPoint, ControlPointSet
from .color_map import (
    Channel,
    Color,
    ColorMap,
    get_default_color_map,
    get_texture_sample_range,
)
from .histogram import Histogram
from .clip_planes import AABB, ClipPlanes, Plane
from .image_jpeg import ImageJPEG, encode_color_map_preview

__all__ = [
    "ControlPoint",
    "ControlPointSet",
    "Channel",
    "Color",
    "ColorMap",
    "get_default_color_map",
    "get_texture_sample_range",
    "Histogram",
    "AABB",
    "ClipPlanes",
    "Plane",
    "ImageJPEG",
    "encode_color_map_preview",
]
