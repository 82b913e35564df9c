# -*- coding: utf-8 -*-
"""과목선택 점검: 교과(군) 정리, 위계/선수과목 검사, 학생별 학점 집계."""

from .normalize import normalize_text, normalize_course_name, canon_group
from .hierarchy import Level, parse_level
from .rows import Row, CourseEntry, row_from_record, rows_from_records
from .prereq import PrerequisiteTable, load_prerequisites
from .validate import check_student, find_sequence_gaps, find_prerequisite_gaps
from .aggregate import group_by_student, summarize_student
from .report import Report, StudentSummary, build_report, report_header, export_report_xlsx

__version__ = "1.0.0"
