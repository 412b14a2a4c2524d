from __future__ import annotations
import base64
import binascii
from io import BytesIO
from typing import Any, Dict

import numpy as np
from PIL import Image

from ..config import DEFAULT_JPEG_QUALITY, PREVIEW_HEIGHT, PREVIEW_WIDTH
from ..message import DecodeError, Message
from .color_map import ColorMap


class ImageJPEG(Message):
    """JPEG encoded image. The JSON form carries the bytes base64 encoded."""

    TYPE_NAME = "lexis::render::ImageJPEG"
    TOPIC = "image_jpeg"

    def __init__(self, data: bytes = b"") -> None:
        self.data = bytes(data)

    @classmethod
    def from_array(cls, pixels: np.ndarray, quality: int = DEFAULT_JPEG_QUALITY) -> ImageJPEG:
        """
        Encode an image array.

        Args:
            pixels: uint8 array, (H, W) grayscale or (H, W, 3) RGB
            quality: JPEG quality, 1-95

        Returns:
            ImageJPEG holding the encoded bytes.
        """
        pixels = np.asarray(pixels)
        if pixels.dtype != np.uint8:
            raise TypeError(f"ImageJPEG expects uint8 pixels, got {pixels.dtype}")
        if not (pixels.ndim == 2 or (pixels.ndim == 3 and pixels.shape[-1] == 3)):
            raise ValueError(f"ImageJPEG expects (H, W) or (H, W, 3) pixels, got shape {pixels.shape}")
        img = Image.fromarray(np.ascontiguousarray(pixels))
        out = BytesIO()
        img.save(out, format="JPEG", quality=quality)
        return cls(out.getvalue())

    def to_array(self) -> np.ndarray:
        """Decode the image into a uint8 array."""
        if not self.data:
            raise ValueError("ImageJPEG has no data")
        with Image.open(BytesIO(self.data)) as img:
            return np.array(img)

    def __len__(self) -> int:
        return len(self.data)

    def to_dict(self) -> Dict[str, Any]:
        return {"data": base64.b64encode(self.data).decode("ascii")}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> ImageJPEG:
        try:
            return cls(base64.b64decode(data.get("data", ""), validate=True))
        except binascii.Error as e:
            raise DecodeError(f"ImageJPEG data is not base64: {e}") from e


def encode_color_map_preview(
    color_map: ColorMap,
    width: int = PREVIEW_WIDTH,
    height: int = PREVIEW_HEIGHT,
    quality: int = DEFAULT_JPEG_QUALITY,
) -> ImageJPEG:
    """
    Render a color map as a horizontal RGB strip and encode it.

    The map is sampled over its full range at one sample per column; alpha
    is dropped since JPEG has no alpha channel.
    """
    colors = color_map.sample_array(width, dtype=np.uint8)
    strip = np.tile(colors[np.newaxis, :, :3], (height, 1, 1))
    return ImageJPEG.from_array(np.ascontiguousarray(strip), quality=quality)
