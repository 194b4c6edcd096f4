# tests/test_sheet_helper.py
import unittest
import tempfile
import sys
import os
from pathlib import Path
from unittest import mock

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import gspread

from sheet_helper import BOLD, PLAIN, CsvWorkbook, GoogleWorkbook, MissingInputTable


class TestCsvWorkbook(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.workbook = CsvWorkbook(self.tmp.name)

    def tearDown(self):
        self.tmp.cleanup()

    def test_missing_table(self):
        with self.assertRaises(MissingInputTable):
            self.workbook.read_table("Mentor Schedules")

    def test_write_then_read(self):
        rows = [["Mentor Name", "Mentee Name"], ["Alice", ""], ["", "x"]]
        self.workbook.write_table("Final Assignments", rows, bold_cells=[(3, 2)])
        self.assertTrue((Path(self.tmp.name) / "Final Assignments.csv").exists())

        df = self.workbook.read_table("Final Assignments")
        self.assertEqual(list(df.columns), ["Mentor Name", "Mentee Name"])
        self.assertEqual(df.values.tolist(), [["Alice", ""], ["", "x"]])

    def test_write_overwrites(self):
        self.workbook.write_table("Report", [["h"], ["old"], ["older"]])
        self.workbook.write_table("Report", [["h"], ["new"]])
        self.assertEqual(self.workbook.read_table("Report")["h"].tolist(), ["new"])


class TestGoogleWorkbook(unittest.TestCase):

    def setUp(self):
        self.spreadsheet = mock.MagicMock()
        self.workbook = GoogleWorkbook(self.spreadsheet)

    def test_read_table_pads_rows(self):
        ws = self.spreadsheet.worksheet.return_value
        ws.get_all_values.return_value = [
            ["Timestamp", "Name", "Availability"],
            ["", "Alice", "Mon 2:00pm-3:00pm"],
            ["", "Bob"],
        ]
        df = self.workbook.read_table("Mentor Schedules")
        self.spreadsheet.worksheet.assert_called_once_with("Mentor Schedules")
        self.assertEqual(df.shape, (2, 3))
        self.assertEqual(df.iloc[0, 1], "Alice")
        self.assertEqual(df.iloc[1, 2], "")

    def test_read_missing_worksheet(self):
        self.spreadsheet.worksheet.side_effect = gspread.exceptions.WorksheetNotFound("Mentee Schedules")
        with self.assertRaises(MissingInputTable):
            self.workbook.read_table("Mentee Schedules")

    def test_write_creates_worksheet_and_bolds(self):
        self.spreadsheet.worksheet.side_effect = gspread.exceptions.WorksheetNotFound("Final Assignments")
        ws = self.spreadsheet.add_worksheet.return_value
        rows = [["Mentor Name", "Mentee Name", "Email", "Course", "Position"],
                ["Alice", "", "", "", ""],
                ["", "x", "x@example.edu", "CS101", "Tutor"]]

        self.workbook.write_table("Final Assignments", rows, bold_cells=[(3, 2)])

        self.spreadsheet.add_worksheet.assert_called_once_with(title="Final Assignments", rows=3, cols=5)
        ws.append_rows.assert_called_once_with(rows, value_input_option="RAW")
        ws.batch_format.assert_called_once_with([{"range": "B3", "format": BOLD}])

    def test_write_clears_existing_worksheet(self):
        ws = self.spreadsheet.worksheet.return_value
        ws.row_count = 100
        ws.col_count = 26

        self.workbook.write_table("Final Assignments", [["Mentor Name"]])

        ws.clear.assert_called_once_with()
        ws.format.assert_called_once_with("A1:Z100", PLAIN)
        self.spreadsheet.add_worksheet.assert_not_called()
        ws.batch_format.assert_not_called()


if __name__ == '__main__':
    unittest.main()
