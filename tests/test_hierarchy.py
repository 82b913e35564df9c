# -*- coding: utf-8 -*-
import pytest

from selection_checker.hierarchy import Level, parse_level


def test_unicode_numeral():
    assert parse_level("물리학Ⅰ") == Level("물리학", 1)
    assert parse_level("물리학Ⅷ") == Level("물리학", 8)


def test_ascii_numeral_longest_match():
    assert parse_level("물리학VIII") == Level("물리학", 8)
    assert parse_level("물리학VII") == Level("물리학", 7)
    assert parse_level("물리학III") == Level("물리학", 3)
    assert parse_level("물리학IX") == Level("물리학", 9)
    assert parse_level("물리학X") == Level("물리학", 10)


def test_base_is_trimmed():
    assert parse_level("수학 II") == Level("수학", 2)
    assert parse_level("  물리학 Ⅱ  ") == Level("물리학", 2)


@pytest.mark.parametrize("name", ["물리학", "", None, "Ⅱ", "II", "물리학XVIII", "물리학XI", "수학ii"])
def test_not_a_leveled_course(name):
    assert parse_level(name) is None
