# -*- coding: utf-8 -*-
"""
문자열 정규화 / 교과(군) 정리 / 셀 값 변환 유틸.
"""

import re
import math
import unicodedata

from .config import SEPARATOR, MIDDLE_DOTS, OTHER_GROUP, GROUP_ALIASES


_MIDDLE_DOT_RE = re.compile("[" + re.escape(MIDDLE_DOTS) + "]")
_SEPARATOR_SPACE_RE = re.compile(r"\s*" + re.escape(SEPARATOR) + r"\s*")
_SLASH_SPACE_RE = re.compile(r"\s*/\s*")
_PAREN_RE = re.compile(r"\(([^)]*)\)")
_SPACE_RE = re.compile(r"\s+")


def _squeeze_paren(m) -> str:
    return "(" + _SPACE_RE.sub("", m.group(1)) + ")"


def normalize_text(s) -> str:
    """
    표기 정규화 (멱등):
    - NFKC (전각/반각 통일)
    - 중점 기호(·⋅•∙・ㆍ) -> '・', 전각 슬래시 -> '/'
    - 구분자('・', '/') 양옆 공백 제거
    - 괄호 내부 공백 제거: (역사/도덕 포함) -> (역사/도덕포함)
    """
    if s is None:
        return ""
    s = unicodedata.normalize("NFKC", str(s))
    s = _MIDDLE_DOT_RE.sub(SEPARATOR, s)
    s = s.replace("／", "/")
    s = _SEPARATOR_SPACE_RE.sub(SEPARATOR, s)
    s = _SLASH_SPACE_RE.sub("/", s)
    s = _PAREN_RE.sub(_squeeze_paren, s)
    # 공백이 빠지면서 붙은 자모/결합 문자를 다시 합침 (멱등성)
    return unicodedata.normalize("NFKC", s)


def normalize_course_name(name) -> str:
    """과목명 비교용: NFKC + 양끝 공백 제거 + 괄호 내부 공백 제거 (대소문자/구분자 유지)."""
    if name is None:
        return ""
    s = unicodedata.normalize("NFKC", str(name)).strip()
    s = _PAREN_RE.sub(_squeeze_paren, s)
    return unicodedata.normalize("NFKC", s)


def _strip_spaces(s: str) -> str:
    return _SPACE_RE.sub("", s)


def group_sort_key(group: str):
    """교과(군) 정렬: 대소문자 무시 후 원래 문자열 순."""
    return (group.casefold(), group)


def canon_group(raw, aliases=GROUP_ALIASES) -> str:
    """
    교과(군) 이름을 정리.
    - 비었으면 '기타'
    - 공백을 뺀 형태가 통합 대상(aliases) 중 하나와 같으면 통합 그룹명(aliases[0])
    - 아니면 정규화된 이름(공백 유지)을 그대로 반환
    """
    if raw is None:
        return OTHER_GROUP
    s = str(raw).strip()
    if s == "":
        return OTHER_GROUP

    normalized = normalize_text(s)
    if normalized.strip() == "":
        return OTHER_GROUP

    cmp = _strip_spaces(normalized)
    for alias in aliases:
        if cmp == _strip_spaces(normalize_text(alias)):
            return aliases[0]
    return normalized


# =========================
# 셀 값 변환
# =========================

def to_number(value):
    """숫자 변환(정수/실수). 실패 시 None."""
    if value is None:
        return None
    if isinstance(value, (int, float)):
        n = float(value)
    else:
        s = str(value).strip()
        if s == "":
            return None
        try:
            n = float(s)
        except ValueError:
            return None
    if not math.isfinite(n):  # NaN / inf
        return None
    return n


def to_int(value):
    """정수 변환. 소수점이 있는 값이나 숫자가 아닌 값은 None."""
    n = to_number(value)
    if n is None or n != int(n):
        return None
    return int(n)


def safe_strip(v):
    if v is None:
        return ""
    return str(v).strip()


def to_str(value):
    if value is None:
        return None
    s = str(value).strip()
    return s if s != "" else None


def round_half_up(value: float, digits: int) -> float:
    """사사오입 반올림 (round()의 짝수 반올림 대신)."""
    scale = 10 ** digits
    return math.floor(value * scale + 0.5) / scale


def format_number(num):
    """정수로 떨어지면 소수점 없이 표시."""
    if num is None:
        return ""
    if isinstance(num, float) and num == int(num):
        return str(int(num))
    return str(num)
