"""Unit tests for core/utils/width.py"""

import pytest

from mdvault.core.utils.width import char_width, display_width


@pytest.mark.parametrize("text, width", [
    ("", 0),
    ("abc", 3),
    ("deƒault", 7),
    ("日本", 4),
    ("ｆｕｌｌ", 8),
    ("e\u0301", 1),
    ("a\u200bb", 2),
    ("\U0001f44d\U0001f3fd", 2),
    ("\U0001f468\u200d\U0001f469\u200d\U0001f467", 2),
])
def test_display_width(text, width):
    assert display_width(text) == width


def test_display_width_differs_from_encoded_length():
    assert len("deƒault".encode("utf-8")) == 8
    assert display_width("deƒault") == 7


def test_display_width_ignores_control_characters():
    assert display_width("a\tb") == 2


def test_char_width_combining_mark():
    assert char_width("\u0301") == 0
