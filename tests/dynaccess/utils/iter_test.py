import pytest

from dynaccess.utils.iter import chunked, unique_by


def test_chunked_keeps_order_and_duplicates():
    assert list(chunked(2, [1, 1, 2, 3, 5])) == [[1, 1], [2, 3], [5]]


def test_chunked_nothing():
    assert list(chunked(25, [])) == []


def test_chunked_requires_positive_size():
    with pytest.raises(AssertionError):
        list(chunked(0, [1]))


def test_unique_by_keeps_first_seen_order():
    assert unique_by(abs, [3, -1, 2, 1, -3, 4]) == [3, -1, 2, 4]
