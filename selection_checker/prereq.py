# -*- coding: utf-8 -*-
"""
선수과목 참조표.
과목명 -> 선수과목 목록. 읽을 때 한 번 정규화하고 이후에는 바꾸지 않는다.
"""

import os
import re
import json
import logging
from io import BytesIO
from types import MappingProxyType

import requests
from openpyxl import load_workbook

from .config import PREREQ_COL_COURSE, PREREQ_COL_REQUIRES
from .normalize import normalize_course_name, safe_strip
from .ingest import open_workbook, find_header

logger = logging.getLogger(__name__)

PREREQ_SHEET_NAME = "선수과목"

_LIST_SPLIT_RE = re.compile(r"[,，\n]")
_SHEET_URL_RE = re.compile(r"/spreadsheets/d/([A-Za-z0-9_-]+)")

GOOGLE_SHEET_LABEL = "구글 스프레드시트"


class PrerequisiteTable:
    """정규화된 과목명 -> 정규화된 선수과목 tuple (읽기 전용)."""

    def __init__(self, entries=None):
        table = {}
        display = {}
        for key, values in (entries or []):
            course = normalize_course_name(key)
            if course == "":
                logger.info("선수과목 참조표: 과목명이 빈 항목을 건너뜁니다.")
                continue
            display.setdefault(course, safe_strip(key))

            required = []
            for v in (values or []):
                n = normalize_course_name(v)
                if n == "":
                    continue
                display.setdefault(n, safe_strip(v))
                required.append(n)

            if course in table:
                logger.warning(f"선수과목 참조표: 중복 과목명 '{course}' - 나중 항목으로 덮어씁니다.")
            table[course] = tuple(required)
        self._table = MappingProxyType(table)
        self._display = MappingProxyType(display)

    @classmethod
    def from_mapping(cls, mapping):
        return cls(mapping.items())

    def requirements_of(self, course):
        """정규화된 과목명의 선수과목 목록. 참조표에 없으면 None."""
        return self._table.get(course)

    def display(self, course):
        """정규화된 과목명을 참조표에 처음 적힌 표기로 (예: '수학II' -> '수학Ⅱ')."""
        return self._display.get(course, course)

    def courses(self):
        return list(self._table)

    def __contains__(self, course):
        return course in self._table

    def __len__(self):
        return len(self._table)

    def __repr__(self):
        return f"PrerequisiteTable({len(self)} courses)"


EMPTY_TABLE = PrerequisiteTable()


def split_requirements(value):
    """'수학Ⅰ, 수학Ⅱ' 또는 줄바꿈 구분 -> ['수학Ⅰ', '수학Ⅱ']"""
    s = safe_strip(value)
    if s == "":
        return []
    return [p.strip() for p in _LIST_SPLIT_RE.split(s) if p.strip() != ""]


def load_prerequisites_json(path: str) -> PrerequisiteTable:
    """{"미적분": ["수학Ⅰ", "수학Ⅱ"], ...} 형식의 JSON 파일."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise ValueError(f"선수과목 파일을 열 수 없습니다: {e}") from e
    except json.JSONDecodeError as e:
        raise ValueError(f"선수과목 파일(JSON) 형식 오류: {e}") from e

    if not isinstance(data, dict):
        raise ValueError("선수과목 파일은 '과목명: [선수과목, ...]' 형태의 객체여야 합니다.")

    entries = []
    for k, v in data.items():
        if isinstance(v, str):
            v = split_requirements(v)
        elif not isinstance(v, list):
            v = []
        entries.append((k, [str(x) for x in v if x is not None]))

    table = PrerequisiteTable(entries)
    logger.info(f"선수과목 참조표 로드: {path} ({len(table)}과목)")
    return table


def table_from_workbook(wb, sheet_name=None) -> PrerequisiteTable:
    """
    '과목명' / '선수과목' 헤더를 가진 시트에서 참조표 생성.
    sheet_name이 없으면 '선수과목' 시트, 그것도 없으면 첫 시트.
    """
    if sheet_name is None:
        sheet_name = PREREQ_SHEET_NAME if PREREQ_SHEET_NAME in wb.sheetnames else wb.sheetnames[0]
    if sheet_name not in wb.sheetnames:
        raise ValueError(f"선수과목 시트를 찾을 수 없습니다: {sheet_name}")

    ws = wb[sheet_name]
    values_rows = [tuple(r) for r in ws.iter_rows(values_only=True)]
    header_idx, col = find_header(values_rows, required=(PREREQ_COL_COURSE, PREREQ_COL_REQUIRES))
    if header_idx is None:
        raise ValueError(f"'{sheet_name}' 시트에서 '{PREREQ_COL_COURSE}', '{PREREQ_COL_REQUIRES}' 헤더를 찾지 못했습니다.")

    c_course = col[PREREQ_COL_COURSE]
    c_req = col[PREREQ_COL_REQUIRES]
    entries = []
    for values in values_rows[header_idx + 1:]:
        course = values[c_course] if c_course < len(values) else None
        if safe_strip(course) == "":
            continue
        req = values[c_req] if c_req < len(values) else None
        entries.append((str(course), split_requirements(req)))
    return PrerequisiteTable(entries)


def load_prerequisites_xlsx(path: str, sheet_name=None) -> PrerequisiteTable:
    wb = open_workbook(path, read_only=True, data_only=True)
    try:
        table = table_from_workbook(wb, sheet_name)
    finally:
        wb.close()
    logger.info(f"선수과목 참조표 로드: {path} ({len(table)}과목)")
    return table


def load_prerequisites(path: str) -> PrerequisiteTable:
    """확장자에 따라 JSON / 엑셀 참조표를 읽음."""
    if path.lower().endswith(".json"):
        return load_prerequisites_json(path)
    return load_prerequisites_xlsx(path)


def load_prerequisites_from_google_sheet(spreadsheet_id: str, timeout=10):
    """
    구글 스프레드시트를 Excel 형식으로 내려받아 참조표 생성
    return: (table, None) 또는 (None, error_msg)
    """
    export_url = f"https://docs.google.com/spreadsheets/d/{spreadsheet_id}/export?format=xlsx"

    try:
        response = requests.get(export_url, timeout=timeout)
    except requests.exceptions.Timeout:
        return None, f"구글 스프레드시트 연결 시간 초과 (타임아웃: {timeout}초). 인터넷 연결을 확인해주세요."
    except requests.exceptions.ConnectionError:
        return None, "구글 스프레드시트에 연결할 수 없습니다. 인터넷 연결을 확인해주세요."
    except requests.exceptions.RequestException as e:
        return None, f"구글 스프레드시트 요청 중 오류 발생: {e}"

    if response.status_code != 200:
        return None, f"구글 스프레드시트 다운로드 실패 (HTTP 상태 코드: {response.status_code})"

    try:
        wb = load_workbook(BytesIO(response.content), read_only=True, data_only=True)
    except Exception as e:
        return None, f"내려받은 파일을 엑셀로 열 수 없습니다: {e}"

    try:
        table = table_from_workbook(wb)
    except ValueError as e:
        return None, str(e)
    finally:
        wb.close()

    logger.info(f"구글 스프레드시트 선수과목 참조표 로드 ({len(table)}과목)")
    return table, None


def sheet_id_from_input(text) -> str:
    """입력값이 스프레드시트 주소이면 ID만 꺼냄. 아니면 공백만 제거."""
    s = safe_strip(text)
    m = _SHEET_URL_RE.search(s)
    return m.group(1) if m else s


def load_configured_prerequisites(settings):
    """
    설정에 저장된 참조표를 읽음: 파일 경로 우선, 없거나 못 읽으면 구글 스프레드시트 ID.
    return: (table, label, error_msg) - 설정이 비어 있으면 (None, None, None)
    """
    path = settings.get("prerequisite_path")
    sheet_id = settings.get("google_sheet_id")

    if path and os.path.exists(path):
        try:
            return load_prerequisites(path), os.path.basename(path), None
        except ValueError as e:
            logger.warning(f"저장된 선수과목 참조표를 읽지 못했습니다: {e}")
            if not sheet_id:
                return None, None, str(e)

    if sheet_id:
        table, err = load_prerequisites_from_google_sheet(sheet_id)
        if table is None:
            logger.warning(err)
            return None, None, err
        return table, GOOGLE_SHEET_LABEL, None

    return None, None, None
