# -*- coding: utf-8 -*-
"""
학생별 / 교과(군)별 학점 집계.
"""

import logging
from typing import NamedTuple, Dict, List, Optional

from .config import FOUNDATION_GROUPS, KOREAN_HISTORY_NAMES, SOURCE_COLUMNS
from .normalize import canon_group, normalize_course_name, round_half_up, group_sort_key, format_number
from .rows import CourseEntry, StudentKey, student_key, credit_of

logger = logging.getLogger(__name__)


class StudentRows(NamedTuple):
    key: StudentKey
    name: Optional[str]
    rows: list


class StudentTotals(NamedTuple):
    key: StudentKey
    name: Optional[str]
    total: float
    by_group: Dict[str, float]
    foundation: float
    korean_history: float
    ratio: float


def group_by_student(rows) -> Dict[StudentKey, StudentRows]:
    """
    (학년, 반, 번호)별로 행을 묶음. 셋 중 하나라도 없는 행은 제외.
    이름은 처음 나온 값을 사용하고, 다른 이름이 나오면 경고만 남김.
    """
    students = {}
    skipped = 0
    for r in rows:
        key = student_key(r)
        if key is None:
            skipped += 1
            continue
        s = students.get(key)
        if s is None:
            students[key] = StudentRows(key, r.name, [r])
            continue
        s.rows.append(r)
        if r.name is None:
            continue
        if s.name is None:
            students[key] = s._replace(name=r.name)
        elif r.name != s.name:
            logger.warning(f"학생 {key[0]}-{key[1]}-{key[2]}: 이름 불일치 '{s.name}' / '{r.name}' - 처음 이름을 사용합니다.")

    if skipped:
        logger.info(f"학년/반/번호가 없는 {skipped}행은 학생별 집계에서 제외했습니다.")
    return students


def course_entries(rows) -> List[CourseEntry]:
    return [
        CourseEntry(
            group=canon_group(r.group),
            course=r.course or "",
            credit=credit_of(r),
            course_grade=r.course_grade,
            course_term=r.course_term,
        )
        for r in rows
    ]


def foundation_ratio(foundation: float, korean_history: float, total: float) -> float:
    """(기초교과 + 한국사) / 총학점 * 100, 소수 첫째 자리 반올림."""
    if total <= 0:
        return 0.0
    return round_half_up((foundation + korean_history) / total * 100, 1)


def summarize_student(student: StudentRows, foundation=FOUNDATION_GROUPS, korean_history=KOREAN_HISTORY_NAMES) -> StudentTotals:
    foundation_set = {canon_group(g) for g in foundation}
    history_set = {normalize_course_name(n) for n in korean_history}

    by_group = {}
    total = 0.0
    found_sum = 0.0
    history_sum = 0.0
    for r in student.rows:
        g = canon_group(r.group)
        c = credit_of(r)
        by_group[g] = by_group.get(g, 0.0) + c
        total += c
        if g in foundation_set:
            found_sum += c
        if normalize_course_name(r.course) in history_set:
            history_sum += c

    return StudentTotals(
        key=student.key,
        name=student.name,
        total=total,
        by_group=by_group,
        foundation=found_sum,
        korean_history=history_sum,
        ratio=foundation_ratio(found_sum, history_sum, total),
    )


# =========================
# 대시보드용 요약
# =========================

def compute_kpis(rows) -> dict:
    """총 행 수 / 학생 수 / 학생당 평균 학점(소수 둘째 자리)."""
    totals = {}
    for r in rows:
        key = student_key(r)
        if key is None:
            continue
        totals[key] = totals.get(key, 0.0) + credit_of(r)

    avg = sum(totals.values()) / len(totals) if totals else 0.0
    return {
        "rows": len(rows),
        "students": len(totals),
        "avg_credit": round_half_up(avg, 2),
    }


def overall_summary(rows):
    """
    전체 이수학점과 교과(군)별 (교과, 학점 합, 행 수).
    학생 정보가 없는 행도 포함.
    """
    total = 0.0
    by_group = {}
    for r in rows:
        c = credit_of(r)
        total += c
        g = canon_group(r.group)
        credits, count = by_group.get(g, (0.0, 0))
        by_group[g] = (credits + c, count + 1)
    groups = [(g, credits, count) for g, (credits, count) in sorted(by_group.items(), key=lambda kv: group_sort_key(kv[0]))]
    return total, groups


def class_list(rows):
    """[(학년, 반), ...] 숫자 오름차순"""
    found = {(r.grade, r.klass) for r in rows if r.grade is not None and r.klass is not None}
    return sorted(found)


def class_label(grade, klass) -> str:
    return f"{grade}학년 {klass}반"


def class_roster(students, grade, klass):
    """
    해당 학급 학생 [(key, '01 홍길동'), ...] (표시 문자열 순)
    students: group_by_student() 결과 (다시 묶지 않음)
    """
    roster = []
    for key, s in students.items():
        if key[0] != grade or key[1] != klass:
            continue
        roster.append((key, f"{key[2]:02d} {s.name or ''}".rstrip()))
    roster.sort(key=lambda x: x[1])
    return roster


def filter_roster(roster, query: str):
    q = (query or "").strip()
    if q == "":
        return list(roster)
    return [x for x in roster if q in x[1]]


def _term_order(e: CourseEntry):
    return (
        e.course_grade is None, e.course_grade or 0,
        e.course_term is None, e.course_term or 0,
    )


def student_detail(rows):
    """
    학생 한 명의 과목 상세: [(교과, [CourseEntry...], 학점 합), ...]
    교과는 이름순, 교과 안에서는 과목학년/과목학기 순(없는 값은 뒤로).
    """
    by_group = {}
    for e in course_entries(rows):
        by_group.setdefault(e.group, []).append(e)

    detail = []
    for g in sorted(by_group, key=group_sort_key):
        entries = sorted(by_group[g], key=_term_order)
        detail.append((g, entries, sum(e.credit for e in entries)))
    return detail


# =========================
# 원본 행 미리보기
# =========================

PREVIEW_LIMIT = 100


def row_preview(rows, limit=PREVIEW_LIMIT):
    """
    앞쪽 limit행만 (학년, 반, 번호, 이름, 과목학년, 과목학기, 교과, 과목명, 학점) 문자열로.
    반환: (열 이름, [[값...], ...], '표시: n / 총 m')
    """
    shown = [[format_number(v) for v in r] for r in rows[:limit]]
    return list(SOURCE_COLUMNS), shown, f"표시: {len(shown)} / 총 {len(rows)}"
