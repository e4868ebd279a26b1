import pytest

from utils.pagination import clamp_page, total_pages


@pytest.mark.parametrize("page, limit, expected", [
    (None, None, (1, 10)),
    (2, 25, (2, 25)),
    (0, 0, (1, 1)),
    (-3, 1000, (1, 100)),
    ("4", "5", (4, 5)),
    ("x", "y", (1, 10)),
])
def test_clamp_page(page, limit, expected):
    assert clamp_page(page, limit) == expected


def test_clamp_page_custom_bounds():
    assert clamp_page(1, None, default_limit=10, max_limit=20) == (1, 10)
    assert clamp_page(1, 50, default_limit=10, max_limit=20) == (1, 20)


@pytest.mark.parametrize("total, limit, expected", [
    (0, 10, 1),
    (10, 10, 1),
    (11, 10, 2),
    (25, 10, 3),
])
def test_total_pages(total, limit, expected):
    assert total_pages(total, limit) == expected
