"""
Mentor / mentee schedule matcher.

Reads the mentor and mentee schedule tables, places every mentee with a
mentor in three greedy passes and writes two candidate assignment reports:
- 'Final Assignments': mentees taken in sheet order
- 'Final Assignments Option 2': the same passes over a shuffled mentee order

Mentee table columns: [1] name, [2] session times, [3] preferred mentor,
[4] email, [5] course, [6] position. Mentor table columns: [1] name,
[2] availability ranges such as 'Mon 2:00pm-4:00pm, Wed 9:00am-10:00am'.

Usage:
  python schedule_matching.py

Configuration is read from the environment (.env): SHEET_ID and GCRED_PATH
for Google Sheets, otherwise INPUT_DIR holding '<table name>.csv' files.
"""

import sys
from time import time
from typing import Dict, List, Optional, Sequence, Tuple

import pandas as pd

from config import (ALTERNATE_SHEET, GCRED_PATH, INCOMPATIBLE_PAIRS, INPUT_DIR, MENTEE_SHEET,
                    MENTOR_SHEET, PRIMARY_SHEET, SHEET_ID)
from matching_algos import Assignment, assign_mentees, count_si_leaders
from models import Mentee, Mentor
from sheet_helper import CsvWorkbook, GoogleWorkbook, MissingInputTable
from time_slots import MalformedTimeRange, expand_availability, expand_session_times, parse_multi_line_text

REPORT_HEADER = ["Mentor Name", "Mentee Name", "Email", "Course", "Position"]


def _cell(row: pd.Series, idx: int) -> str:
    if idx >= len(row):
        return ""
    value = row.iloc[idx]
    if value is None or pd.isna(value):
        return ""
    return str(value).strip()


def load_mentees(df: pd.DataFrame) -> List[Mentee]:
    mentees = []
    for _, row in df.iterrows():
        name = _cell(row, 1)
        if not name:
            continue
        try:
            session_times = expand_session_times(_cell(row, 2))
        except MalformedTimeRange as e:
            raise MalformedTimeRange(f"Mentee '{name}': {e}") from e
        mentees.append(Mentee(
            name=name,
            session_times=tuple(session_times),
            preferred_mentor=_cell(row, 3) or None,
            email=_cell(row, 4),
            course=_cell(row, 5),
            position=_cell(row, 6),
        ))
    return mentees


def load_mentors(df: pd.DataFrame) -> List[Mentor]:
    mentors = []
    for _, row in df.iterrows():
        name = _cell(row, 1)
        if not name:
            continue
        try:
            availability = expand_availability(parse_multi_line_text(_cell(row, 2)))
        except MalformedTimeRange as e:
            raise MalformedTimeRange(f"Mentor '{name}': {e}") from e
        mentors.append(Mentor(name=name, availability=tuple(availability)))
    return mentors


def build_report_rows(assignment: Assignment) -> Tuple[List[List[str]], List[Tuple[int, int]]]:
    """
    Lays the assignment out as report rows.
    Returns the rows and the (row, col) cells to bold: the mentee name of
    everyone placed with the mentor they asked for.
    """
    rows = [list(REPORT_HEADER)]
    bold_cells = []
    for mentor_name, group in assignment.items():
        rows.append([mentor_name, "", "", "", ""])
        for mentee in group:
            rows.append(["", mentee.name, mentee.email, mentee.course, mentee.position])
            if mentee.preferred_mentor == mentor_name:
                bold_cells.append((len(rows), 2))
    return rows, bold_cells


def write_assignment_sheet(workbook, sheet_name: str, assignment: Assignment):
    rows, bold_cells = build_report_rows(assignment)
    workbook.write_table(sheet_name, rows, bold_cells=bold_cells)


def summarize_assignment(assignment: Assignment) -> pd.DataFrame:
    rows = []
    for mentor_name, group in assignment.items():
        rows.append({
            "Mentor": mentor_name,
            "Mentees": len(group),
            "SI Leaders": count_si_leaders(group),
            "Preferred Matches": sum(1 for m in group if m.preferred_mentor == mentor_name),
        })
    return pd.DataFrame(rows, columns=["Mentor", "Mentees", "SI Leaders", "Preferred Matches"])


def generate_final_assignments(workbook, mentors: List[Mentor], mentees: List[Mentee],
                               incompatible_pairs: Sequence[Sequence[str]], sheet_name: str,
                               randomize: bool = False) -> Tuple[Assignment, List[Mentee]]:
    assignment, unassigned = assign_mentees(mentors, mentees, incompatible_pairs, randomize=randomize)
    write_assignment_sheet(workbook, sheet_name, assignment)

    summary = summarize_assignment(assignment)
    placed = int(summary["Mentees"].sum()) if not summary.empty else 0
    print(f"[INFO] {sheet_name}: placed {placed}/{len(mentees)} mentees with {len(mentors)} mentors")
    if not summary.empty:
        print(summary.to_string(index=False))
    return assignment, unassigned


def match_mentors_to_mentees(workbook, incompatible_pairs: Optional[Sequence[Sequence[str]]] = None
                             ) -> Dict[str, Tuple[Assignment, List[Mentee]]]:
    """
    Loads both schedule tables and writes the primary and the randomized
    assignment reports. Raises MissingInputTable before anything is written
    if either input table is absent.
    """
    if incompatible_pairs is None:
        incompatible_pairs = INCOMPATIBLE_PAIRS

    mentee_df = workbook.read_table(MENTEE_SHEET)
    mentor_df = workbook.read_table(MENTOR_SHEET)

    mentees = load_mentees(mentee_df)
    mentors = load_mentors(mentor_df)
    print(f"[INFO] Mentors: {len(mentors)}, Mentees: {len(mentees)}, Incompatible pairs: {len(incompatible_pairs)}")

    return {
        PRIMARY_SHEET: generate_final_assignments(
            workbook, mentors, mentees, incompatible_pairs, PRIMARY_SHEET),
        ALTERNATE_SHEET: generate_final_assignments(
            workbook, mentors, mentees, incompatible_pairs, ALTERNATE_SHEET, randomize=True),
    }


def open_workbook():
    if SHEET_ID:
        if not GCRED_PATH:
            raise SystemExit('When using SHEET_ID you must provide GCRED_PATH to service account JSON')
        print(f"[INFO] Using Google Sheet {SHEET_ID}")
        return GoogleWorkbook.from_service_account(SHEET_ID, GCRED_PATH)
    print(f"[INFO] Using CSV tables in {INPUT_DIR}")
    return CsvWorkbook(INPUT_DIR)


def main() -> int:
    start_time = time()

    workbook = open_workbook()
    try:
        results = match_mentors_to_mentees(workbook)
    except MissingInputTable as e:
        print(f"[ERROR] Mentee or Mentor sheet not found: {e}")
        return 1
    except MalformedTimeRange as e:
        print(f"[ERROR] Could not read schedule: {e}")
        return 1

    end_time = time()

    print('[OK] Wrote:')
    for sheet_name, (_, unassigned) in results.items():
        note = f" ({len(unassigned)} unassigned)" if unassigned else ""
        print(f" - {sheet_name}{note}")
    print(f'[INFO] Time elapsed: {end_time - start_time:.2f} seconds')
    return 0


if __name__ == '__main__':
    sys.exit(main())
