# -*- coding: utf-8 -*-
"""
고정 설정값(교과 통합 목록, 기초교과, 한국사 표기, 열 이름 등)과
사용자 설정 파일(JSON) 읽기/쓰기.
"""

import os
import json
import logging

logger = logging.getLogger(__name__)


# =========================
# 교과(군) 정규화
# =========================

# 다양한 중점 기호를 하나로 통일할 때 쓰는 구분자
# (\u119e: NFKC를 거친 'ㆍ')
SEPARATOR = "・"
MIDDLE_DOTS = "·⋅•∙・ㆍ\u119e"

OTHER_GROUP = "기타"

# 아래 항목들은 모두 하나의 그룹으로 합침 (공백 제거 후 비교)
MERGED_GROUP = "기술・가정/제2외국어/한문/교양"
GROUP_ALIASES = (
    MERGED_GROUP,
    "교양",
    "제2외국어",
    "한문",
    "기술・가정",
    "기술・가정/정보",
)


# =========================
# 위계(로마 숫자) 표기
# =========================

ROMAN_LEVELS = {
    "I": 1, "II": 2, "III": 3, "IV": 4, "V": 5,
    "VI": 6, "VII": 7, "VIII": 8, "IX": 9, "X": 10,
}

# 유니코드 로마 숫자 한 글자(Ⅰ~Ⅹ)
UNICODE_ROMAN_LEVELS = {
    "Ⅰ": 1, "Ⅱ": 2, "Ⅲ": 3, "Ⅳ": 4, "Ⅴ": 5,
    "Ⅵ": 6, "Ⅶ": 7, "Ⅷ": 8, "Ⅸ": 9, "Ⅹ": 10,
}


# =========================
# 기초교과 / 한국사
# =========================

FOUNDATION_GROUPS = ("국어", "수학", "영어")
KOREAN_HISTORY_NAMES = ("한국사", "한국사1", "한국사2")

# 기초교과+한국사 비율(%)이 이 값을 넘으면 위반으로 표시
FOUNDATION_RATIO_LIMIT = 50


# =========================
# 원본 엑셀 열 이름
# =========================

COL_GRADE = "학년"
COL_CLASS = "반"
COL_NUMBER = "번호"
COL_NAME = "이름"
COL_COURSE_GRADE = "과목학년"
COL_COURSE_TERM = "과목학기"
COL_GROUP = "교과"
COL_COURSE = "과목명"
COL_CREDIT = "학점"

SOURCE_COLUMNS = (
    COL_GRADE, COL_CLASS, COL_NUMBER, COL_NAME,
    COL_COURSE_GRADE, COL_COURSE_TERM, COL_GROUP, COL_COURSE, COL_CREDIT,
)
REQUIRED_COLUMNS = (COL_GRADE, COL_CLASS, COL_NUMBER, COL_COURSE)

# 선수과목 참조표
PREREQ_COL_COURSE = "과목명"
PREREQ_COL_REQUIRES = "선수과목"

# 요약표 고정 열
REPORT_IDENTITY_COLUMNS = (COL_GRADE, COL_CLASS, COL_NUMBER, COL_NAME)
REPORT_TRAILING_COLUMNS = ("총학점", "기초교과학점", "한국사학점", "기초교과비율(%)", "위반사항")


# =========================
# 사용자 설정 파일
# =========================

SETTINGS_FILE = "selection_checker_settings.json"

DEFAULT_SETTINGS = {
    "prerequisite_path": "",
    "google_sheet_id": "",
    "export_dir": "",
}


def load_settings(path=SETTINGS_FILE):
    """설정 파일을 읽어 기본값 위에 덮어씀. 파일이 없거나 깨졌으면 기본값."""
    settings = dict(DEFAULT_SETTINGS)
    if not os.path.exists(path):
        return settings
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning(f"설정 파일을 읽을 수 없어 기본값을 사용합니다: {path} ({e})")
        return settings

    if not isinstance(data, dict):
        logger.warning(f"설정 파일 형식이 올바르지 않습니다: {path}")
        return settings

    for k in DEFAULT_SETTINGS:
        v = data.get(k)
        if isinstance(v, str):
            settings[k] = v
    return settings


def save_settings(settings, path=SETTINGS_FILE):
    data = {k: settings.get(k, DEFAULT_SETTINGS[k]) for k in DEFAULT_SETTINGS}
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2)
    logger.info(f"설정 저장: {path}")
