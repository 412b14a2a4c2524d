import json
import pytest

from lexis.data.events import SelectedIDs
from lexis.data.progress import Progress
from lexis.message import DecodeError
from lexis.render.color_map import Channel, ColorMap
from lexis.render.histogram import Histogram
from lexis.serialization import (
    ColorMapFallback,
    decode_envelope,
    encode_envelope,
    load_color_map,
    message_registry,
    save_color_map,
)


def test_registry_has_all_types():
    assert message_registry["lexis::render::ColorMap"] is ColorMap
    assert message_registry["lexis::data::Progress"] is Progress
    assert len(message_registry) == 8


def test_envelope_round_trip(color_map):
    for message in (color_map, Histogram([1, 2], 0.0, 1.0), SelectedIDs([4, 2])):
        line = encode_envelope(message)
        assert "\n" not in line
        assert json.loads(line)["type"] == message.TYPE_NAME
        assert decode_envelope(line) == message


@pytest.mark.parametrize(
    "line",
    [
        "not json",
        "[]",
        '{"type": "lexis::data::Progress"}',
        '{"type": "lexis::data::Nope", "payload": {}}',
        '{"type": "lexis::data::Progress", "payload": []}',
        '{"type": "lexis::data::SelectedIDs", "payload": {"ids": ["a"]}}',
        '{"type": "lexis::render::Histogram", "payload": {"bins": [-1]}}',
        '{"type": "lexis::render::Histogram", "payload": {"bins": [100000000000000000000000]}}',
    ],
)
def test_bad_envelopes(line):
    with pytest.raises(DecodeError):
        decode_envelope(line)


def test_save_and_load_json(tmp_path, color_map):
    path = tmp_path / "colormap.json"
    save_color_map(color_map, path)
    assert load_color_map(path) == color_map


def test_load_json_document(tmp_path):
    path = tmp_path / "colormap.json"
    path.write_text(json.dumps({
        "red": [{"x": 0.0, "y": 0.0}, {"x": 1.0, "y": 1.0}],
        "alpha": [{"x": 0.5, "y": 0.3}],
    }))
    cmap = load_color_map(path)
    assert len(cmap.get_control_points(Channel.RED)) == 2
    assert len(cmap.get_control_points(Channel.GREEN)) == 0
    assert cmap.get_control_points(Channel.ALPHA)[0].value == 0.3


def test_load_1dt(tmp_path):
    path = tmp_path / "transfer.1dt"
    path.write_text("3\n0 0 0 0\n0.5 0.5 0.5 0.1\n1 1 1 1\n")
    cmap = load_color_map(path, value_range=(0.0, 10.0))
    points = cmap.get_control_points(Channel.ALPHA)
    assert [(cp.position, cp.value) for cp in points] == [(0.0, 0.0), (5.0, 0.1), (10.0, 1.0)]


def test_load_malformed_1dt(tmp_path):
    path = tmp_path / "transfer.1dt"
    path.write_text("3\n0 0 0 0\n")
    with pytest.raises(DecodeError):
        load_color_map(path)


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_color_map(tmp_path / "missing.json")


def test_missing_file_falls_back_to_default(tmp_path):
    cmap = load_color_map(tmp_path / "missing.json", fallback=ColorMapFallback.DEFAULT)
    assert cmap == ColorMap.default()


def test_unparseable_file(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{ not json")
    with pytest.raises(DecodeError):
        load_color_map(path)
    cmap = load_color_map(path, fallback="default", value_range=(2.0, 4.0))
    assert cmap == ColorMap.default(2.0, 4.0)


def test_out_of_range_number_in_file(tmp_path):
    path = tmp_path / "huge.json"
    path.write_text('{"red": [{"x": 1' + "0" * 400 + ', "y": 0.5}]}')
    with pytest.raises(DecodeError):
        load_color_map(path)
    cmap = load_color_map(path, fallback=ColorMapFallback.DEFAULT)
    assert cmap == ColorMap.default()
