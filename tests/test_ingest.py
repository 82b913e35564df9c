# -*- coding: utf-8 -*-
import pytest
from openpyxl import Workbook

from selection_checker.rows import Row, row_from_record, rows_from_records, student_key
from selection_checker.ingest import read_rows


def save_rows(path, rows, title="정리완료"):
    wb = Workbook()
    ws = wb.active
    ws.title = title
    for values in rows:
        ws.append(values)
    wb.save(path)
    return str(path)


def test_read_rows_with_title_row_and_column_order(tmp_path):
    path = save_rows(tmp_path / "data.xlsx", [
        ["2025학년도 과목선택 정리완료"],
        ["이름", "학년", "반", "번호", "교과", "과목명", "학점", "과목학년", "과목학기", "비고"],
        ["김철수", 1, 2, 3, "국어", "문학", 4, 2, 1, "x"],
        [None, None, None, None, None, None, None, None, None, None],
        ["  ", "1", "2", "4", " ", "수학Ⅰ", "abc", None, None, None],
    ])
    rows = read_rows(path)
    assert rows == [
        Row(grade=1, klass=2, number=3, name="김철수", course_grade=2, course_term=1,
            group="국어", course="문학", credit=4.0),
        Row(grade=1, klass=2, number=4, name=None, course_grade=None, course_term=None,
            group=None, course="수학Ⅰ", credit=None),
    ]


def test_optional_columns_may_be_absent(tmp_path):
    path = save_rows(tmp_path / "data.xlsx", [
        ["학년", "반", "번호", "과목명"],
        [1, 1, 1, "한국사1"],
    ])
    assert read_rows(path) == [Row(grade=1, klass=1, number=1, course="한국사1")]


def test_missing_required_column(tmp_path):
    path = save_rows(tmp_path / "data.xlsx", [
        ["학년", "반", "과목명"],
        [1, 1, "문학"],
    ])
    with pytest.raises(ValueError, match="번호"):
        read_rows(path)


def test_missing_header(tmp_path):
    path = save_rows(tmp_path / "data.xlsx", [["아무", "내용"]])
    with pytest.raises(ValueError):
        read_rows(path)


def test_missing_file_and_bad_extension(tmp_path):
    with pytest.raises(ValueError):
        read_rows(str(tmp_path / "none.xlsx"))
    csv = tmp_path / "data.csv"
    csv.write_text("학년,반\n", encoding="utf-8")
    with pytest.raises(ValueError, match="확장자"):
        read_rows(str(csv))


def test_unknown_sheet(tmp_path):
    path = save_rows(tmp_path / "data.xlsx", [["학년", "반", "번호", "과목명"]])
    with pytest.raises(ValueError):
        read_rows(path, sheet_name="없는시트")


def test_row_from_record_coercion():
    row = row_from_record({"학년": "2", "반": 3.0, "번호": "x", "이름": "  이영희 ", "학점": " 2.5 "})
    assert row.grade == 2
    assert row.klass == 3
    assert row.number is None
    assert row.name == "이영희"
    assert row.credit == 2.5
    assert student_key(row) is None


def test_rows_from_records():
    rows = rows_from_records([{"학년": 1, "반": 1, "번호": 1, "과목명": "문학"}])
    assert student_key(rows[0]) == (1, 1, 1)
