# -*- coding: utf-8 -*-
"""
과목 이수 행(Row) 자료형과 원본 레코드 -> Row 변환.
"""

from typing import NamedTuple, Optional, Tuple

from .config import (
    COL_GRADE, COL_CLASS, COL_NUMBER, COL_NAME,
    COL_COURSE_GRADE, COL_COURSE_TERM, COL_GROUP, COL_COURSE, COL_CREDIT,
)
from .normalize import to_number, to_int, to_str


class Row(NamedTuple):
    grade: Optional[int] = None
    klass: Optional[int] = None
    number: Optional[int] = None
    name: Optional[str] = None
    course_grade: Optional[int] = None
    course_term: Optional[int] = None
    group: Optional[str] = None
    course: Optional[str] = None
    credit: Optional[float] = None


class CourseEntry(NamedTuple):
    """학생 한 명의 과목 한 건 (교과는 정리된 그룹명)."""
    group: str
    course: str
    credit: float
    course_grade: Optional[int] = None
    course_term: Optional[int] = None


StudentKey = Tuple[int, int, int]


def row_from_record(record) -> Row:
    """열 이름 -> 셀 값 dict를 Row로. 빈칸/숫자 아님은 None."""
    get = record.get
    return Row(
        grade=to_int(get(COL_GRADE)),
        klass=to_int(get(COL_CLASS)),
        number=to_int(get(COL_NUMBER)),
        name=to_str(get(COL_NAME)),
        course_grade=to_int(get(COL_COURSE_GRADE)),
        course_term=to_int(get(COL_COURSE_TERM)),
        group=to_str(get(COL_GROUP)),
        course=to_str(get(COL_COURSE)),
        credit=to_number(get(COL_CREDIT)),
    )


def rows_from_records(records):
    return [row_from_record(r) for r in records]


def student_key(row: Row) -> Optional[StudentKey]:
    """(학년, 반, 번호). 하나라도 없으면 None."""
    if row.grade is None or row.klass is None or row.number is None:
        return None
    return (row.grade, row.klass, row.number)


def credit_of(row: Row) -> float:
    return row.credit if row.credit is not None else 0.0
