import pytest
from pubsub import pub

from lexis.render.color_map import Channel, ColorMap

CONTROL_POINTS = [
    (0.7, 0.1),
    (5.0, 0.9),
    (12.0, 0.1),
    (3.2, 0.4),
    (16.3, 0.7),
    (2.0, 0.1),
    (2.3, 0.4),
    (14.2, 0.3),
]


@pytest.fixture(autouse=True)
def clean_bus():
    """Drop every bus listener a test registered."""
    yield
    pub.unsubAll()


@pytest.fixture
def color_map():
    """Same unsorted control points on all four channels."""
    cmap = ColorMap()
    for x, y in CONTROL_POINTS:
        for channel in Channel:
            cmap.add_control_point(x, y, channel)
    return cmap
