# -*- coding: utf-8 -*-
"""
학생별 요약표 생성 및 엑셀 저장.

열 순서(내보내기 파일 호환용, 바꾸지 말 것):
  학년, 반, 번호, 이름 | 교과(군)별 학점 ... | 총학점, 기초교과학점, 한국사학점, 기초교과비율(%), 위반사항
"""

import logging
from typing import NamedTuple, Dict, List, Optional

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side

from .config import (
    FOUNDATION_GROUPS, KOREAN_HISTORY_NAMES, FOUNDATION_RATIO_LIMIT,
    REPORT_IDENTITY_COLUMNS, REPORT_TRAILING_COLUMNS,
)
from .normalize import canon_group, group_sort_key
from .rows import StudentKey
from .prereq import EMPTY_TABLE
from .aggregate import StudentRows, group_by_student, summarize_student, course_entries
from .validate import check_student, join_clauses

logger = logging.getLogger(__name__)

REPORT_SHEET_TITLE = "학생별 요약"
RATIO_LABEL = "[기초교과] "


class StudentSummary(NamedTuple):
    key: StudentKey
    name: Optional[str]
    total: float
    by_group: Dict[str, float]
    foundation: float
    korean_history: float
    ratio: float
    violations: str


class Report(NamedTuple):
    groups: List[str]
    records: List[StudentSummary]
    # 학생별 원본 행 (화면에서 학급 명단/상세에 재사용)
    students: Dict[StudentKey, StudentRows]


def discover_groups(rows) -> List[str]:
    """데이터 전체에 나오는 교과(군) 목록 (정리된 이름, 대소문자 무시 이름순)."""
    return sorted({canon_group(r.group) for r in rows}, key=group_sort_key)


def ratio_flag(ratio: float, limit=FOUNDATION_RATIO_LIMIT) -> str:
    if ratio > limit:
        return f"{RATIO_LABEL}기초교과+한국사 비율 {ratio:.1f}% ({limit:g}% 초과)"
    return ""


def build_report(rows, table=EMPTY_TABLE, foundation=FOUNDATION_GROUPS,
                 korean_history=KOREAN_HISTORY_NAMES, limit=FOUNDATION_RATIO_LIMIT) -> Report:
    """행 전체 -> 학생별 요약 (학년, 반, 번호 오름차순)."""
    groups = discover_groups(rows)
    students = group_by_student(rows)

    records = []
    for key in sorted(students):
        s = students[key]
        totals = summarize_student(s, foundation=foundation, korean_history=korean_history)
        violations = join_clauses(
            check_student(course_entries(s.rows), table),
            ratio_flag(totals.ratio, limit),
        )
        records.append(StudentSummary(
            key=key,
            name=s.name,
            total=totals.total,
            by_group=totals.by_group,
            foundation=totals.foundation,
            korean_history=totals.korean_history,
            ratio=totals.ratio,
            violations=violations,
        ))

    flagged = sum(1 for r in records if r.violations)
    logger.info(f"요약표 생성: 학생 {len(records)}명, 교과(군) {len(groups)}개, 위반 {flagged}명")
    return Report(groups, records, students)


def report_header(groups) -> List[str]:
    return list(REPORT_IDENTITY_COLUMNS) + list(groups) + list(REPORT_TRAILING_COLUMNS)


def record_values(record: StudentSummary, groups) -> list:
    grade, klass, number = record.key
    values = [grade, klass, number, record.name or ""]
    values += [record.by_group.get(g, 0.0) for g in groups]
    values += [record.total, record.foundation, record.korean_history, record.ratio, record.violations]
    return values


# =========================
# 엑셀 저장
# =========================

def solid_fill_rgb(r: int, g: int, b: int) -> PatternFill:
    c = f"FF{r:02X}{g:02X}{b:02X}"
    return PatternFill(fill_type="solid", start_color=c, end_color=c)


HEADER_FILL = solid_fill_rgb(221, 214, 254)    # 파스텔 퍼플
VIOLATION_FILL = solid_fill_rgb(254, 226, 226)  # 연한 빨강


def _cell_value(v):
    # 정수로 떨어지는 학점은 정수로 저장
    if isinstance(v, float) and v == int(v):
        return int(v)
    return v


def export_report_xlsx(report: Report, path: str):
    wb = Workbook()
    ws = wb.active
    ws.title = REPORT_SHEET_TITLE

    header = report_header(report.groups)
    ws.append(header)
    for rec in report.records:
        values = record_values(rec, report.groups)
        # 비율은 소수 첫째 자리까지 그대로 둠
        ws.append([v if i == len(values) - 2 else _cell_value(v) for i, v in enumerate(values)])

    thin = Side(style="thin")
    thin_all = Border(left=thin, right=thin, top=thin, bottom=thin)
    center = Alignment(horizontal="center", vertical="center", wrap_text=True)
    last_col = len(header)

    for c in range(1, last_col + 1):
        cell = ws.cell(1, c)
        cell.fill = HEADER_FILL
        cell.font = Font(bold=True)

    for r in range(1, ws.max_row + 1):
        for c in range(1, last_col + 1):
            cell = ws.cell(r, c)
            cell.border = thin_all
            cell.alignment = center

    for i, rec in enumerate(report.records, start=2):
        if rec.violations:
            for c in range(1, last_col + 1):
                ws.cell(i, c).fill = VIOLATION_FILL
            ws.cell(i, last_col).alignment = Alignment(horizontal="left", vertical="center", wrap_text=True)

    ws.column_dimensions[ws.cell(1, last_col).column_letter].width = 60
    ws.freeze_panes = "E2"

    wb.save(path)
    logger.info(f"요약표 저장: {path} (학생 {len(report.records)}명)")
