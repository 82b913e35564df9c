# -*- coding: utf-8 -*-
import logging

from selection_checker.config import MERGED_GROUP, OTHER_GROUP
from selection_checker.rows import Row
from selection_checker.aggregate import (
    group_by_student, summarize_student, foundation_ratio, compute_kpis,
    overall_summary, class_list, class_label, class_roster, filter_roster, student_detail,
    row_preview,
)


def r(grade=1, klass=1, number=1, name="김철수", group=None, course=None, credit=None,
      course_grade=None, course_term=None):
    return Row(grade=grade, klass=klass, number=number, name=name, group=group,
               course=course, credit=credit, course_grade=course_grade, course_term=course_term)


def only_student(rows):
    students = group_by_student(rows)
    assert len(students) == 1
    return summarize_student(next(iter(students.values())))


def test_sums_per_group_and_total():
    t = only_student([
        r(group="A", credit=3),
        r(group="A", credit=2),
        r(group="B", credit=4),
    ])
    assert t.total == 9
    assert t.by_group == {"A": 5, "B": 4}


def test_missing_credit_counts_as_zero_and_groups_canonicalized():
    t = only_student([
        r(group="교양", credit=1),
        r(group="한 문", credit=2),
        r(group=None, credit=3),
        r(group="국어", credit=None),
    ])
    assert t.total == 6
    assert t.by_group == {MERGED_GROUP: 3, OTHER_GROUP: 3, "국어": 0}


def test_rows_without_identity_excluded():
    students = group_by_student([
        r(credit=3),
        r(number=None, credit=100),
        r(grade=None, credit=100),
    ])
    assert list(students) == [(1, 1, 1)]
    assert len(students[(1, 1, 1)].rows) == 1


def test_first_seen_name_wins(caplog):
    with caplog.at_level(logging.WARNING):
        students = group_by_student([
            r(name="김철수"),
            r(name="김철순"),
        ])
    assert students[(1, 1, 1)].name == "김철수"
    assert "이름 불일치" in caplog.text


def test_missing_first_name_filled_from_later_row():
    students = group_by_student([r(name=None), r(name="이영희")])
    assert students[(1, 1, 1)].name == "이영희"
    assert len(students[(1, 1, 1)].rows) == 2


def test_ratio_over_threshold():
    t = only_student([
        r(group="국어", credit=30),
        r(group="수학", credit=10),
        r(group="사회", course="한국사", credit=11),
        r(group="과학", course="물리학Ⅰ", credit=49),
    ])
    assert t.total == 100
    assert t.foundation == 40
    assert t.korean_history == 11
    assert t.ratio == 51.0


def test_ratio_at_threshold():
    t = only_student([
        r(group="영어", credit=40),
        r(group="사회", course="한국사1", credit=10),
        r(group="과학", credit=50),
    ])
    assert t.ratio == 50.0


def test_korean_history_is_exact_match_only():
    t = only_student([
        r(group="사회", course="한국사Ⅰ", credit=3),
        r(group="사회", course="한국사 탐구", credit=3),
        r(group="사회", course="한국사2", credit=2),
    ])
    assert t.korean_history == 2


def test_foundation_ratio_rounding():
    assert foundation_ratio(1, 0, 3) == 33.3
    assert foundation_ratio(2, 0, 3) == 66.7
    assert foundation_ratio(5, 0, 0) == 0.0


def test_custom_foundation_groups():
    students = group_by_student([r(group="과학", credit=3), r(group="국어", credit=1)])
    t = summarize_student(students[(1, 1, 1)], foundation=("과학",), korean_history=())
    assert t.foundation == 3
    assert t.ratio == 75.0


def test_kpis():
    rows = [
        r(number=1, credit=1),
        r(number=2, credit=1),
        r(number=3, credit=1),
        r(number=3, credit=1),
        r(grade=None, credit=10),
    ]
    kpi = compute_kpis(rows)
    assert kpi == {"rows": 5, "students": 3, "avg_credit": 1.33}


def test_kpis_empty():
    assert compute_kpis([]) == {"rows": 0, "students": 0, "avg_credit": 0.0}


def test_overall_summary_includes_rows_without_identity():
    total, groups = overall_summary([
        r(group="수학", credit=4),
        r(grade=None, group="국어", credit=3),
        r(group="수학", credit=None),
    ])
    assert total == 7
    assert groups == [("국어", 3, 1), ("수학", 4, 2)]


def test_overall_summary_group_order_ignores_case():
    _, groups = overall_summary([r(group="b", credit=1), r(group="A", credit=1), r(group="국어", credit=1)])
    assert [g for g, _, _ in groups] == ["A", "b", "국어"]


def test_class_list_numeric_order():
    rows = [r(grade=2, klass=1), r(grade=1, klass=10), r(grade=1, klass=2), r(grade=1, klass=2, number=5)]
    assert class_list(rows) == [(1, 2), (1, 10), (2, 1)]
    assert class_label(1, 10) == "1학년 10반"


def test_class_roster_and_search():
    rows = [
        r(number=12, name="박민수"),
        r(number=3, name="김철수"),
        r(klass=2, number=1, name="다른반"),
        r(number=7, name=None),
    ]
    roster = class_roster(group_by_student(rows), 1, 1)
    assert roster == [((1, 1, 3), "03 김철수"), ((1, 1, 7), "07"), ((1, 1, 12), "12 박민수")]
    assert filter_roster(roster, "철") == [((1, 1, 3), "03 김철수")]
    assert filter_roster(roster, "  ") == roster


def test_student_detail_groups_and_term_order():
    detail = student_detail([
        r(group="수학", course="미적분", credit=4, course_grade=2, course_term=2),
        r(group="국어", course="문학", credit=3, course_grade=1, course_term=1),
        r(group="수학", course="수학Ⅰ", credit=4, course_grade=2, course_term=1),
        r(group="수학", course="기하", credit=2),
    ])
    assert [g for g, _, _ in detail] == ["국어", "수학"]
    g, entries, credits = detail[1]
    assert [e.course for e in entries] == ["수학Ⅰ", "미적분", "기하"]
    assert credits == 10


def test_student_detail_group_order_ignores_case():
    detail = student_detail([r(group="b", course="x"), r(group="A", course="y")])
    assert [g for g, _, _ in detail] == ["A", "b"]


def test_row_preview_limits_rows_and_reports_counts():
    rows = [r(number=n, group="수학", course="기하", credit=2.0) for n in range(1, 151)]
    cols, shown, footer = row_preview(rows)
    assert cols == ["학년", "반", "번호", "이름", "과목학년", "과목학기", "교과", "과목명", "학점"]
    assert len(shown) == 100
    assert shown[0] == ["1", "1", "1", "김철수", "", "", "수학", "기하", "2"]
    assert footer == "표시: 100 / 총 150"


def test_row_preview_short_input():
    _, shown, footer = row_preview([r(credit=2.5)], limit=10)
    assert shown[0][-1] == "2.5"
    assert footer == "표시: 1 / 총 1"
