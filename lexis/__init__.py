"""
Lexis - Message Types for Visualization Applications
====================================================

Value types exchanged over a publish/subscribe bus between visualization
applications, and the tools to publish and monitor them.

Key Features
------------
- 4 channel color maps defined by control points, sampled into lookup tables
- Histograms, clip planes and JPEG images for render settings
- Progress meters and cell selection events
- JSON round trip for every message type
- In-process bus (PyPubSub) bridged to JSON-lines streams

Quick Start
-----------
>>> from lexis import ColorMap, Channel
>>> import numpy as np
>>>
>>> cmap = ColorMap()
>>> cmap.add_control_point(0.0, 0.0, Channel.RED)
>>> cmap.add_control_point(1.0, 1.0, Channel.RED)
>>> lut = cmap.sample_array(256, dtype=np.uint8)

Modules
-------
- render: ColorMap, Histogram, ClipPlanes, ImageJPEG
- data: Progress and selection events
- serialization: message envelopes and color map files
- bus: Publisher and Subscriber
"""

from .message import DecodeError, Message
from .render import (
    AABB,
    Channel,
    ClipPlanes,
    Color,
    ColorMap,
    ControlPoint,
    ControlPointSet,
    Histogram,
    ImageJPEG,
    Plane,
    encode_color_map_preview,
    get_default_color_map,
    get_texture_sample_range,
)
from .data import CellSetBinaryOp, CellSetBinaryOpType, Progress, SelectedIDs, ToggleIDRequest
from .serialization import (
    ColorMapFallback,
    decode_envelope,
    encode_envelope,
    load_color_map,
    message_registry,
    save_color_map,
)
from .bus import Publisher, Subscriber

__version__ = "0.3.0"

__all__ = [
    "DecodeError",
    "Message",
    "AABB",
    "Channel",
    "ClipPlanes",
    "Color",
    "ColorMap",
    "ControlPoint",
    "ControlPointSet",
    "Histogram",
    "ImageJPEG",
    "Plane",
    "encode_color_map_preview",
    "get_default_color_map",
    "get_texture_sample_range",
    "CellSetBinaryOp",
    "CellSetBinaryOpType",
    "Progress",
    "SelectedIDs",
    "ToggleIDRequest",
    "ColorMapFallback",
    "decode_envelope",
    "encode_envelope",
    "load_color_map",
    "message_registry",
    "save_color_map",
    "Publisher",
    "Subscriber",
]
