import numpy as np
import pytest

from lexis.message import DecodeError
from lexis.render.color_map import ColorMap
from lexis.render.image_jpeg import ImageJPEG, encode_color_map_preview

NB_BYTES = 16
EXPECTED_DATA = "AAECAwQFBgcICQoLDA0ODw=="


def test_empty_image():
    image = ImageJPEG()
    assert len(image.data) == 0
    assert image.to_dict() == {"data": ""}


def test_data_is_base64_encoded():
    image = ImageJPEG(bytes(range(NB_BYTES)))
    assert image.to_dict() == {"data": EXPECTED_DATA}


def test_json_round_trip():
    image = ImageJPEG(bytes(range(NB_BYTES)))
    other = ImageJPEG.from_json(image.to_json())
    assert other == image
    assert other != ImageJPEG()


def test_invalid_json():
    with pytest.raises(DecodeError):
        ImageJPEG.from_json("blubb")
    with pytest.raises(DecodeError):
        ImageJPEG.from_json('{"data": "not base64!"}')


def test_encode_decode_array():
    pixels = np.full((8, 12, 3), (200, 40, 90), dtype=np.uint8)
    image = ImageJPEG.from_array(pixels)
    assert image.data[:2] == b"\xff\xd8"
    decoded = image.to_array()
    assert decoded.shape == pixels.shape
    assert np.allclose(decoded.astype(int), pixels.astype(int), atol=4)


def test_from_array_checks_input():
    with pytest.raises(TypeError):
        ImageJPEG.from_array(np.zeros((4, 4, 3), dtype=np.float32))
    with pytest.raises(ValueError):
        ImageJPEG.from_array(np.zeros((4, 4, 4), dtype=np.uint8))
    with pytest.raises(ValueError):
        ImageJPEG().to_array()


def test_color_map_preview():
    image = encode_color_map_preview(ColorMap.default(), width=64, height=8)
    decoded = image.to_array()
    assert decoded.shape == (8, 64, 3)
    # the default map goes from black to white
    assert decoded[4, 0].max() < 40
    assert decoded[4, -1].min() > 215
