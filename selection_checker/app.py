# -*- coding: utf-8 -*-
"""
과목선택 점검 프로그램 (Tkinter + openpyxl)

사용 방법
1) pip install .
2) selection-checker
3) 정리완료 엑셀 파일 선택 → 점검 실행 → 학급/학생 선택 → 요약표 저장
"""

import os
import logging
import threading
import traceback
import tkinter as tk
from tkinter import ttk, filedialog, messagebox, simpledialog
from tkinter.scrolledtext import ScrolledText

from .config import load_settings, save_settings
from .normalize import format_number
from .ingest import read_rows
from .prereq import (
    EMPTY_TABLE, GOOGLE_SHEET_LABEL, load_prerequisites, load_prerequisites_from_google_sheet,
    load_configured_prerequisites, sheet_id_from_input,
)
from .aggregate import (
    compute_kpis, overall_summary, class_list, class_label, class_roster, filter_roster,
    student_detail, row_preview,
)
from .report import build_report, export_report_xlsx

logger = logging.getLogger(__name__)


class App:
    def __init__(self, root: tk.Tk):
        self.root = root
        self.root.title("과목선택 점검 대시보드")
        self.root.minsize(1080, 720)

        # 파스텔 톤
        self.colors = {
            "bg": "#F4F7F4",          # 연한 세이지
            "card": "#FFFFFF",
            "text": "#1F2937",
            "muted": "#6B7280",
            "accent": "#5E8C6A",      # 세이지 그린
            "danger": "#EF4444",
            "warn": "#F59E0B",
        }
        self.root.configure(bg=self.colors["bg"])

        self.style = ttk.Style(self.root)
        try:
            self.style.theme_use("clam")
        except tk.TclError:
            pass

        base_font = ("Malgun Gothic", 11)
        title_font = ("Malgun Gothic", 16, "bold")

        self.style.configure("TFrame", background=self.colors["bg"])
        self.style.configure("Card.TFrame", background=self.colors["card"])
        self.style.configure("TLabel", background=self.colors["bg"], foreground=self.colors["text"], font=base_font)
        self.style.configure("Title.TLabel", font=title_font, foreground=self.colors["text"])
        self.style.configure("Muted.TLabel", foreground=self.colors["muted"], font=("Malgun Gothic", 10))

        self.settings = load_settings()
        self.xlsx_path = None
        self.rows = []
        self.table = EMPTY_TABLE
        self.report = None
        self.students = {}
        self.roster = []
        self.classes = []
        self.running = False

        self._build_ui()
        self._load_saved_prerequisites()

    def _build_ui(self):
        header = ttk.Frame(self.root, padding=(18, 18, 18, 10))
        header.pack(fill="x")

        ttk.Label(header, text="과목선택 점검 대시보드", style="Title.TLabel").pack(anchor="w")
        ttk.Label(
            header,
            text="정리완료.xlsx(고정 양식) 업로드 후, 학생별 이수학점과 위계/선수과목을 점검합니다.",
            style="Muted.TLabel"
        ).pack(anchor="w", pady=(6, 0))

        body = ttk.Frame(self.root, padding=(18, 8, 18, 18))
        body.pack(fill="both", expand=True)

        card = ttk.Frame(body, style="Card.TFrame", padding=(16, 16))
        card.pack(fill="x")

        row1 = ttk.Frame(card, style="Card.TFrame")
        row1.pack(fill="x")
        self.path_var = tk.StringVar(value="선택된 파일 없음")
        ttk.Label(row1, text="엑셀 파일:", style="Muted.TLabel").pack(side="left")
        ttk.Label(row1, textvariable=self.path_var).pack(side="left", padx=(8, 0))

        row2 = ttk.Frame(card, style="Card.TFrame")
        row2.pack(fill="x", pady=(6, 0))
        self.prereq_var = tk.StringVar(value="선수과목 참조표 없음")
        ttk.Label(row2, text="선수과목:", style="Muted.TLabel").pack(side="left")
        ttk.Label(row2, textvariable=self.prereq_var).pack(side="left", padx=(8, 0))

        btn_frame = ttk.Frame(card, style="Card.TFrame")
        btn_frame.pack(fill="x", pady=(12, 0))

        def button(text, command, state="normal"):
            b = tk.Button(
                btn_frame, text=text, command=command,
                bg=self.colors["accent"], fg="white", bd=0,
                activebackground=self.colors["accent"], activeforeground="white",
                padx=16, pady=10, font=("Malgun Gothic", 11, "bold"),
                cursor="hand2", state=state,
            )
            b.pack(side="left", padx=(0, 10))
            return b

        self.btn_pick = button("파일 선택", self.pick_file)
        self.btn_prereq = button("선수과목 참조표", self.pick_prerequisites)
        self.btn_sheet = button("온라인 참조표", self.pick_google_sheet)
        self.btn_run = button("점검 실행", self.run, state="disabled")
        self.btn_export = button("요약표 저장", self.export, state="disabled")

        self.status_var = tk.StringVar(value="대기 중")
        ttk.Label(card, textvariable=self.status_var, style="Muted.TLabel").pack(anchor="w", pady=(12, 0))
        self.kpi_var = tk.StringVar(value="")
        ttk.Label(card, textvariable=self.kpi_var).pack(anchor="w", pady=(4, 0))

        main = ttk.Frame(body)
        main.pack(fill="both", expand=True, pady=(14, 0))

        left = ttk.Frame(main, style="Card.TFrame", padding=(12, 12))
        left.pack(side="left", fill="y")

        ttk.Label(left, text="학급 선택", style="Muted.TLabel").pack(anchor="w")
        self.class_var = tk.StringVar()
        self.class_box = ttk.Combobox(left, textvariable=self.class_var, state="readonly", width=18)
        self.class_box.pack(fill="x", pady=(4, 10))
        self.class_box.bind("<<ComboboxSelected>>", self.on_class_selected)

        ttk.Label(left, text="학생 선택/검색", style="Muted.TLabel").pack(anchor="w")
        self.query_var = tk.StringVar()
        self.query_var.trace_add("write", lambda *_: self.update_student_list())
        ttk.Entry(left, textvariable=self.query_var).pack(fill="x", pady=(4, 6))

        self.student_list = tk.Listbox(left, height=20, font=("Malgun Gothic", 10), activestyle="none")
        self.student_list.pack(fill="both", expand=True)
        self.student_list.bind("<<ListboxSelect>>", self.on_student_selected)
        self.visible_roster = []

        right = ttk.Frame(main, style="Card.TFrame", padding=(12, 12))
        right.pack(side="left", fill="both", expand=True, padx=(14, 0))

        ttk.Label(right, text="학생별 요약", style="Muted.TLabel").pack(anchor="w")
        self.out = ScrolledText(
            right, wrap="word", height=20, font=("Consolas", 10),
            bg="#FBFCFB", fg=self.colors["text"], relief="solid", bd=1, padx=10, pady=10
        )
        self.out.pack(fill="both", expand=True, pady=(8, 0))

        self.out.tag_configure("ERROR", foreground=self.colors["danger"])
        self.out.tag_configure("WARNING", foreground=self.colors["warn"])
        self.out.tag_configure("INFO", foreground=self.colors["muted"])
        self.out.tag_configure("HEADER", font=("Malgun Gothic", 11, "bold"))

    # -------------------------
    # 선수과목 참조표
    # -------------------------

    def _load_saved_prerequisites(self):
        table, label, err = load_configured_prerequisites(self.settings)
        if table is not None:
            self._set_table(table, label)
        elif err:
            self.prereq_var.set(f"참조표 불러오기 실패: {err}")

    def _set_table(self, table, label):
        self.table = table
        self.prereq_var.set(f"{label} ({len(table)}과목)")

    def pick_prerequisites(self):
        path = filedialog.askopenfilename(
            title="선수과목 참조표 선택",
            filetypes=[("참조표", "*.xlsx *.xlsm *.json"), ("All files", "*.*")]
        )
        if not path:
            return
        try:
            table = load_prerequisites(path)
        except ValueError as e:
            messagebox.showwarning("안내", str(e))
            return
        self._set_table(table, os.path.basename(path))
        self.settings["prerequisite_path"] = path
        save_settings(self.settings)

    def pick_google_sheet(self):
        text = simpledialog.askstring(
            "온라인 참조표",
            "구글 스프레드시트 주소 또는 ID를 입력하세요.\n('링크가 있는 모든 사용자' 보기 권한 필요, 비우면 연결 해제)",
            initialvalue=self.settings.get("google_sheet_id", ""),
            parent=self.root,
        )
        if text is None:
            return
        sheet_id = sheet_id_from_input(text)
        if sheet_id == "":
            self.settings["google_sheet_id"] = ""
            save_settings(self.settings)
            messagebox.showinfo("안내", "온라인 참조표 연결을 해제했습니다.")
            return

        self.status_var.set("구글 스프레드시트에서 참조표를 불러오는 중...")
        self.root.update_idletasks()
        table, err = load_prerequisites_from_google_sheet(sheet_id)
        self.status_var.set("대기 중")
        if table is None:
            messagebox.showwarning("안내", err)
            return
        self._set_table(table, GOOGLE_SHEET_LABEL)
        # 다음 실행 때 온라인 참조표를 읽도록 파일 경로는 비움
        self.settings["google_sheet_id"] = sheet_id
        self.settings["prerequisite_path"] = ""
        save_settings(self.settings)

    # -------------------------
    # 점검 실행
    # -------------------------

    def pick_file(self):
        path = filedialog.askopenfilename(
            title="정리완료 엑셀 파일 선택",
            filetypes=[("Excel files", "*.xlsx *.xlsm"), ("All files", "*.*")]
        )
        if not path:
            return
        self.xlsx_path = path
        self.path_var.set(path)
        self.btn_run.configure(state="normal")

    def run(self):
        if self.running:
            return
        if not self.xlsx_path:
            messagebox.showwarning("안내", "먼저 엑셀 파일을 선택하세요.")
            return

        self.running = True
        self.btn_run.configure(state="disabled")
        self.status_var.set("점검 중...")
        t = threading.Thread(target=self._worker, args=(self.xlsx_path, self.table), daemon=True)
        t.start()

    def _worker(self, path, table):
        try:
            rows = read_rows(path)
            report = build_report(rows, table)
            self.root.after(0, lambda: self._show_result(rows, report))
        except ValueError as e:
            msg = str(e)
            logger.warning(msg)
            self.root.after(0, lambda: self._fail("점검 중단", msg, warning=True))
        except Exception:
            logger.error("점검 중 예외 발생\n" + traceback.format_exc())
            self.root.after(0, lambda: self._fail("오류 발생", "점검 중 예외가 발생했습니다.\n로그를 확인하세요."))

    def _fail(self, status, msg, warning=False):
        self.running = False
        self.btn_run.configure(state="normal")
        self.status_var.set(status)
        if warning:
            messagebox.showwarning("안내", msg)
        else:
            messagebox.showerror("오류", msg)

    def _show_result(self, rows, report):
        self.running = False
        self.btn_run.configure(state="normal")
        self.btn_export.configure(state="normal")

        self.rows = rows
        self.report = report
        self.students = report.students
        self.classes = class_list(rows)

        kpi = compute_kpis(rows)
        self.kpi_var.set(f"총 행 수 {kpi['rows']}  ·  학생 수 {kpi['students']}  ·  학생당 평균 학점 {format_number(kpi['avg_credit'])}")

        flagged = sum(1 for r in report.records if r.violations)
        self.status_var.set(f"점검 완료: 학생 {len(report.records)}명 중 위반 {flagged}명")

        self.class_box.configure(values=[class_label(g, c) for g, c in self.classes])
        self.class_var.set("")
        self.roster = []
        self.update_student_list()
        self._print_overview()

    # -------------------------
    # 학급 / 학생 선택
    # -------------------------

    def on_class_selected(self, event=None):
        idx = self.class_box.current()
        if idx < 0:
            return
        grade, klass = self.classes[idx]
        self.roster = class_roster(self.students, grade, klass)
        self.query_var.set("")
        self.update_student_list()

    def update_student_list(self):
        self.visible_roster = filter_roster(self.roster, self.query_var.get())
        self.student_list.delete(0, "end")
        for _, label in self.visible_roster:
            self.student_list.insert("end", label)

    def on_student_selected(self, event=None):
        sel = self.student_list.curselection()
        if not sel:
            return
        key, label = self.visible_roster[sel[0]]
        self._print_student(key, label)

    # -------------------------
    # 출력
    # -------------------------

    def _print_overview(self):
        self.out.delete("1.0", "end")
        self.out.insert("end", "[점검 개요]\n", "HEADER")
        self.out.insert("end", f"- 파일: {self.xlsx_path}\n", "INFO")
        self.out.insert("end", f"- 교과(군): {', '.join(self.report.groups)}\n\n", "INFO")

        total, groups = overall_summary(self.rows)
        self.out.insert("end", f"[교과(군)별 이수학점] 전체 {format_number(total)}학점\n", "HEADER")
        for g, credits, count in groups:
            self.out.insert("end", f"- {g}: {format_number(credits)}학점 ({count}행)\n")
        self.out.insert("end", "\n")

        flagged = [r for r in self.report.records if r.violations]
        if not flagged:
            self.out.insert("end", "위반 사항 없음.\n\n", "INFO")
        else:
            self.out.insert("end", "[위반 학생]\n", "HEADER")
            for r in flagged:
                g, c, n = r.key
                self.out.insert("end", f"- {g}-{c}-{n:02d} {r.name or ''}: {r.violations}\n", "ERROR")
            self.out.insert("end", "\n")

        cols, shown, footer = row_preview(self.rows)
        self.out.insert("end", "[원본 데이터 미리보기]\n", "HEADER")
        self.out.insert("end", " | ".join(cols) + "\n", "INFO")
        for values in shown:
            self.out.insert("end", " | ".join(values) + "\n")
        self.out.insert("end", footer + "\n", "INFO")

    def _print_student(self, key, label):
        rec = next((r for r in self.report.records if r.key == key), None)
        s = self.students.get(key)
        if rec is None or s is None:
            return

        self.out.delete("1.0", "end")
        self.out.insert("end", f"[{class_label(key[0], key[1])} · {label}]\n", "HEADER")
        self.out.insert("end", f"- 전체 이수학점: {format_number(rec.total)}\n", "INFO")
        self.out.insert("end", f"- 기초교과 {format_number(rec.foundation)} / 한국사 {format_number(rec.korean_history)} / 비율 {rec.ratio:.1f}%\n", "INFO")
        if rec.violations:
            self.out.insert("end", f"- 위반: {rec.violations}\n", "ERROR")
        self.out.insert("end", "\n")

        for group, entries, credits in student_detail(s.rows):
            self.out.insert("end", f"{group} ({format_number(credits)}학점)\n", "HEADER")
            for e in entries:
                when = ""
                if e.course_grade is not None or e.course_term is not None:
                    when = f"  [{e.course_grade or '-'}학년 {e.course_term or '-'}학기]"
                self.out.insert("end", f"  · {e.course} {format_number(e.credit)}{when}\n")
            self.out.insert("end", "\n")

    # -------------------------
    # 저장
    # -------------------------

    def export(self):
        if self.report is None:
            return
        base = os.path.splitext(os.path.basename(self.xlsx_path))[0]
        path = filedialog.asksaveasfilename(
            title="요약표 저장",
            defaultextension=".xlsx",
            initialdir=self.settings.get("export_dir") or None,
            initialfile=f"{base}_학생별요약.xlsx",
            filetypes=[("Excel 파일", "*.xlsx"), ("모든 파일", "*.*")]
        )
        if not path:
            return
        try:
            export_report_xlsx(self.report, path)
        except OSError as e:
            messagebox.showerror("오류", f"파일을 저장할 수 없습니다:\n{e}")
            return
        self.settings["export_dir"] = os.path.dirname(path)
        save_settings(self.settings)
        messagebox.showinfo("완료", "요약표를 저장했습니다.")


def main():
    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
    root = tk.Tk()
    App(root)
    root.mainloop()


if __name__ == "__main__":
    main()
