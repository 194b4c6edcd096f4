from pathlib import Path
from typing import Iterable, List, Sequence, Tuple

import pandas as pd
import gspread
from gspread.utils import rowcol_to_a1
from google.oauth2.service_account import Credentials

SCOPE = ['https://www.googleapis.com/auth/spreadsheets', 'https://www.googleapis.com/auth/drive']

BOLD = {"textFormat": {"bold": True}}
PLAIN = {"textFormat": {"bold": False}}


class MissingInputTable(LookupError):
    """Raised when a table the run depends on does not exist."""


def _frame_from_values(values: List[List[str]]) -> pd.DataFrame:
    if not values:
        return pd.DataFrame()
    width = max(len(row) for row in values)
    padded = [list(row) + [""] * (width - len(row)) for row in values]
    return pd.DataFrame(padded[1:], columns=padded[0])


def open_spreadsheet(sheet_id: str, creds_json: str) -> gspread.Spreadsheet:
    creds = Credentials.from_service_account_file(creds_json, scopes=SCOPE)
    client = gspread.authorize(creds)
    return client.open_by_key(sheet_id)


class GoogleWorkbook:
    """Reads and writes worksheets of one Google spreadsheet."""

    def __init__(self, spreadsheet: gspread.Spreadsheet):
        self.spreadsheet = spreadsheet

    @classmethod
    def from_service_account(cls, sheet_id: str, creds_json: str) -> "GoogleWorkbook":
        return cls(open_spreadsheet(sheet_id, creds_json))

    def read_table(self, name: str) -> pd.DataFrame:
        try:
            ws = self.spreadsheet.worksheet(name)
        except gspread.exceptions.WorksheetNotFound:
            raise MissingInputTable(f"Worksheet '{name}' not found") from None
        print(f"[INFO] Reading from worksheet: '{name}'")
        return _frame_from_values(ws.get_all_values())

    def _get_or_create(self, name: str, rows: int, cols: int):
        try:
            ws = self.spreadsheet.worksheet(name)
        except gspread.exceptions.WorksheetNotFound:
            return self.spreadsheet.add_worksheet(title=name, rows=max(rows, 1), cols=max(cols, 1))
        ws.clear()
        ws.format(f"A1:{rowcol_to_a1(ws.row_count, ws.col_count)}", PLAIN)
        return ws

    def write_table(self, name: str, rows: List[List[str]], bold_cells: Iterable[Tuple[int, int]] = ()):
        width = max((len(row) for row in rows), default=0)
        ws = self._get_or_create(name, len(rows), width)
        if rows:
            ws.append_rows(rows, value_input_option="RAW")
        formats = [{"range": rowcol_to_a1(r, c), "format": BOLD} for r, c in bold_cells]
        if formats:
            ws.batch_format(formats)
        print(f"[INFO] Wrote {len(rows)} rows to worksheet: '{name}'")


class CsvWorkbook:
    """
    A directory of '<table name>.csv' files standing in for a spreadsheet.
    CSV has no cell styling, so bold cells are not kept.
    """

    def __init__(self, directory):
        self.directory = Path(directory)

    def _path(self, name: str) -> Path:
        return self.directory / f"{name}.csv"

    def read_table(self, name: str) -> pd.DataFrame:
        path = self._path(name)
        if not path.exists():
            raise MissingInputTable(f"CSV table '{path}' not found")
        print(f"[INFO] Loaded CSV {path}")
        return pd.read_csv(path, dtype=str, keep_default_na=False)

    def write_table(self, name: str, rows: List[List[str]], bold_cells: Sequence[Tuple[int, int]] = ()):
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self._path(name)
        df = _frame_from_values(rows)
        df.to_csv(path, index=False)
        print(f"[INFO] Wrote {len(rows)} rows to {path}")
