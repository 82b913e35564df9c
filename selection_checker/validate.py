# -*- coding: utf-8 -*-
"""
학생 한 명의 과목 목록 검사
- 위계: 'Ⅲ'을 들었는데 'Ⅱ'가 없는 경우
- 선수과목: 참조표에 적힌 선수과목을 듣지 않은 경우
"""

from .hierarchy import parse_level
from .normalize import normalize_course_name
from .prereq import EMPTY_TABLE

FINDING_DELIM = "; "
CLAUSE_DELIM = " / "

SEQUENCE_LABEL = "[위계] "
PREREQ_LABEL = "[선수] "


def _normalized_names(names):
    """정규화 + 중복 제거(처음 나온 순서 유지), 빈 이름 제외."""
    out = []
    seen = set()
    for n in names:
        s = normalize_course_name(n)
        if s == "" or s in seen:
            continue
        seen.add(s)
        out.append(s)
    return out


def find_sequence_gaps(names):
    """
    return: {기본 과목명: [빠진 단계, ...]}
    기본 과목명별로 가장 높은 단계 M 아래(1..M-1)에서 듣지 않은 단계.
    """
    attained = {}
    for name in _normalized_names(names):
        lv = parse_level(name)
        if lv is None:
            continue
        attained.setdefault(lv.base, set()).add(lv.level)

    gaps = {}
    for base in sorted(attained):
        levels = attained[base]
        missing = [i for i in range(1, max(levels)) if i not in levels]
        if missing:
            gaps[base] = missing
    return gaps


def find_prerequisite_gaps(names, table=EMPTY_TABLE):
    """return: {과목명: [듣지 않은 선수과목, ...]} (학생 과목 순서대로)"""
    held = _normalized_names(names)
    held_set = set(held)

    gaps = {}
    for course in held:
        required = table.requirements_of(course)
        if not required:
            continue
        missing = []
        for r in required:
            if r not in held_set and r not in missing:
                missing.append(r)
        if missing:
            gaps[course] = missing
    return gaps


def format_sequence_gaps(gaps) -> str:
    return FINDING_DELIM.join(
        f"{base}: missing level → {', '.join(str(i) for i in levels)}"
        for base, levels in gaps.items()
    )


def format_prerequisite_gaps(gaps, table=EMPTY_TABLE) -> str:
    """과목명은 참조표에 적힌 표기로 보여줌."""
    return FINDING_DELIM.join(
        f"{table.display(course)}: missing → {', '.join(table.display(n) for n in names)}"
        for course, names in gaps.items()
    )


def join_clauses(*clauses) -> str:
    return CLAUSE_DELIM.join(c for c in clauses if c)


def check_student(entries, table=EMPTY_TABLE) -> str:
    """
    entries: CourseEntry 목록
    return: 위반 내용 문자열 (없으면 "")
    """
    names = [e.course for e in entries]

    seq = format_sequence_gaps(find_sequence_gaps(names))
    pre = format_prerequisite_gaps(find_prerequisite_gaps(names, table), table)

    return join_clauses(
        SEQUENCE_LABEL + seq if seq else "",
        PREREQ_LABEL + pre if pre else "",
    )
