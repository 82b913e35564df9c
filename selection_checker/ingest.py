# -*- coding: utf-8 -*-
"""
정리완료 엑셀(.xlsx/.xlsm) -> Row 목록.
첫 시트(또는 지정 시트)의 헤더 행에서 열 이름으로 위치를 찾는다.
"""

import os
import logging

from openpyxl import load_workbook

from .config import SOURCE_COLUMNS, REQUIRED_COLUMNS, COL_GRADE, COL_COURSE
from .normalize import safe_strip
from .rows import row_from_record

logger = logging.getLogger(__name__)

HEADER_SCAN_ROWS = 20


def open_workbook(path: str, **kwargs):
    """확장자/존재 여부 확인 후 openpyxl 워크북 반환. 실패 시 ValueError."""
    if not os.path.exists(path):
        raise ValueError(f"파일을 찾을 수 없습니다: {path}")

    ext = os.path.splitext(path)[1].lower()
    if ext not in (".xlsx", ".xlsm"):
        raise ValueError("지원하지 않는 확장자입니다. .xlsx 또는 .xlsm만 지원합니다.")

    try:
        return load_workbook(path, **kwargs)
    except Exception as e:
        raise ValueError(f"엑셀 파일을 열 수 없습니다: {e}") from e


def find_header(rows, required=(COL_GRADE, COL_COURSE), scan=HEADER_SCAN_ROWS):
    """
    앞쪽 scan개 행에서 required 열 이름이 모두 있는 행을 헤더로 봄.
    return: (헤더 행 인덱스(0부터), {열 이름: 열 인덱스}) 또는 (None, {})
    """
    for i, values in enumerate(rows[:scan]):
        labels = [safe_strip(v) for v in values]
        if all(r in labels for r in required):
            col = {}
            for c, label in enumerate(labels):
                if label and label not in col:
                    col[label] = c
            return i, col
    return None, {}


def records_from_values(values_rows, sheet_title="-"):
    """셀 값 행 목록 -> 열 이름 dict 목록 (헤더 아래 완전히 빈 행은 건너뜀)."""
    values_rows = [tuple(r) for r in values_rows]
    header_idx, col = find_header(values_rows)
    if header_idx is None:
        raise ValueError(f"'{sheet_title}' 시트에서 '{COL_GRADE}', '{COL_COURSE}' 헤더 행을 찾지 못했습니다.")

    missing = [c for c in REQUIRED_COLUMNS if c not in col]
    if missing:
        raise ValueError(f"'{sheet_title}' 시트에 필수 열이 없습니다: {', '.join(missing)}")

    records = []
    for values in values_rows[header_idx + 1:]:
        if all(safe_strip(v) == "" for v in values):
            continue
        rec = {}
        for label in SOURCE_COLUMNS:
            c = col.get(label)
            rec[label] = values[c] if c is not None and c < len(values) else None
        records.append(rec)
    return records


def read_rows(path: str, sheet_name=None):
    """엑셀 파일에서 Row 목록을 읽음."""
    wb = open_workbook(path, read_only=True, data_only=True)
    try:
        if sheet_name is None:
            ws = wb[wb.sheetnames[0]]
        elif sheet_name in wb.sheetnames:
            ws = wb[sheet_name]
        else:
            raise ValueError(f"시트를 찾을 수 없습니다: {sheet_name}")
        records = records_from_values(ws.iter_rows(values_only=True), ws.title)
    finally:
        wb.close()

    rows = [row_from_record(r) for r in records]
    logger.info(f"{os.path.basename(path)}: {len(rows)}행 읽음")
    return rows
