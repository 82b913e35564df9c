# -*- coding: utf-8 -*-
"""
위계 과목 판별: '물리학Ⅱ', '수학 II' 처럼 로마 숫자로 끝나는 과목명을
(기본 과목명, 단계)로 분해.
"""

import unicodedata
from typing import NamedTuple, Optional

from .config import ROMAN_LEVELS, UNICODE_ROMAN_LEVELS


class Level(NamedTuple):
    base: str
    level: int


# 긴 표기부터 비교해야 'VIII'가 'I'로 잘못 읽히지 않음
_ASCII_NUMERALS = sorted(ROMAN_LEVELS, key=len, reverse=True)
_ROMAN_LETTERS = set("IVX") | set(UNICODE_ROMAN_LEVELS)


def _nfkc(s: str) -> str:
    return unicodedata.normalize("NFKC", s).strip()


def _make_level(head: str, level: int) -> Optional[Level]:
    # 'XVIII'처럼 표에 없는 더 긴 숫자의 일부이면 위계 과목 아님
    if head and head[-1] in _ROMAN_LETTERS:
        return None
    base = _nfkc(head)
    return Level(base, level) if base else None


def parse_level(name) -> Optional[Level]:
    """과목명 끝의 로마 숫자를 읽어 Level 반환. 위계 과목이 아니면 None."""
    if name is None:
        return None
    raw = str(name).strip()
    if raw == "":
        return None

    # 유니코드 로마 숫자 한 글자(Ⅰ~Ⅹ)
    if raw[-1] in UNICODE_ROMAN_LEVELS:
        return _make_level(raw[:-1].rstrip(), UNICODE_ROMAN_LEVELS[raw[-1]])

    s = _nfkc(raw)
    for numeral in _ASCII_NUMERALS:
        if s.endswith(numeral):
            return _make_level(s[:-len(numeral)].rstrip(), ROMAN_LEVELS[numeral])
    return None
