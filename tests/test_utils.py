from __future__ import annotations

import pytest

from folderatlas.utils import clamp, format_bytes, parse_depth


@pytest.mark.parametrize(
    "num, expected",
    [
        (0, "0.00 B"),
        (1023, "1023.00 B"),
        (1024, "1.00 KB"),
        (1536, "1.50 KB"),
        (3500, "3.42 KB"),
        (5 * 1024 ** 3, "5.00 GB"),
        (1024 ** 5, "1024.00 TB"),
        (-5, "-5"),
    ],
)
def test_format_bytes(num, expected):
    assert format_bytes(num) == expected


def test_parse_depth():
    assert parse_depth(" 3 ") == 3
    assert parse_depth("0") == 0
    assert parse_depth("-1") == -1
    assert parse_depth("-20") == -1
    assert parse_depth(2) == 2


def test_parse_depth_rejects_text():
    with pytest.raises(ValueError):
        parse_depth("deep")


def test_clamp():
    assert clamp(5, 0, 3) == 3
    assert clamp(-1, 0, 3) == 0
    assert clamp(2, 0, 3) == 2
