import math
import numpy as np
import pytest

from lexis.message import DecodeError
from lexis.render.histogram import Histogram


def test_equality():
    histogram = Histogram()
    other = Histogram()

    assert histogram == other
    assert histogram == histogram

    other.max = 10
    assert histogram != other

    histogram.max = 10
    assert histogram == other

    histogram.bins = [1, 2, 3]
    assert histogram != other

    other.bins = [1, 2, 3]
    assert histogram == other

    other.bins = [1, 2]
    assert histogram != other


def test_default_range():
    histogram = Histogram()
    assert histogram.range() == (math.inf, -math.inf)
    assert histogram.is_empty()
    assert histogram.sum() == 0


def test_sample_curve():
    histogram = Histogram()
    assert histogram.sample_curve(False, (0, 1)).shape == (0, 2)

    histogram.bins = [10, 5, 0, 5]
    histogram.max = 10

    sample = histogram.sample_curve(False, (0, 1))
    assert np.allclose(sample, [[0, 0], [0.25, 0.5], [0.5, 1], [0.75, 0.5]])

    log_sample = histogram.sample_curve(True, (0, 1))
    assert np.allclose(log_sample, [[0, 0], [0.25, 0.30102998], [0.5, 1.0], [0.75, 0.30102998]], atol=1e-6)

    sample_range = histogram.sample_curve(False, (0.3, 0.7))
    assert np.allclose(sample_range, [[0, 0.5], [0.5, 1]])


def test_add():
    histogram = Histogram([1, 2, 3], min=0.0, max=5.0)
    histogram += Histogram([1, 1, 1], min=-1.0, max=4.0)
    assert np.array_equal(histogram.bins, [2, 3, 4])
    assert histogram.range() == (-1.0, 5.0)

    total = histogram + Histogram([0, 0, 1], min=0.0, max=9.0)
    assert np.array_equal(total.bins, [2, 3, 5])
    assert total.max == 9.0
    assert np.array_equal(histogram.bins, [2, 3, 4])


def test_add_empty():
    histogram = Histogram([1, 2], min=0.0, max=1.0)
    histogram += Histogram()
    assert histogram == Histogram([1, 2], min=0.0, max=1.0)

    empty = Histogram()
    empty += histogram
    assert empty == histogram
    empty.bins[0] = 99
    assert histogram.bins[0] == 1


def test_add_incompatible():
    histogram = Histogram([1, 2, 3])
    with pytest.raises(ValueError, match="incompatible"):
        histogram += Histogram([1, 2])


def test_indices_and_ratio():
    histogram = Histogram([4, 1, 4, 1])
    assert histogram.min_index() == 1
    assert histogram.max_index() == 0
    assert histogram.sum() == 10
    assert histogram.ratio(0) == pytest.approx(0.4)
    assert histogram.ratio(4) == 0.0
    assert Histogram([0, 0]).ratio(0) == 0.0


def test_resize_keeps_counts():
    histogram = Histogram([4, 1])
    histogram.resize(5)
    assert np.array_equal(histogram.bins, [4, 1, 0, 0, 0])
    histogram.resize(1)
    assert np.array_equal(histogram.bins, [4])
    histogram.resize(0)
    assert histogram.bins.size == 0


def test_negative_bins():
    with pytest.raises(ValueError):
        Histogram([3, -1])
    with pytest.raises(DecodeError):
        Histogram.from_json('{"bins": [-1]}')
    with pytest.raises(DecodeError):
        Histogram.from_json('{"bins": [100000000000000000000000]}')


def test_json_round_trip():
    histogram = Histogram([1, 2, 3], min=-2.5, max=7.0)
    assert Histogram.from_json(histogram.to_json()) == histogram
    assert Histogram.from_json(Histogram().to_json()) == Histogram()
