from config import SHEET_ID, GCRED_PATH, MENTEE_SHEET, MENTOR_SHEET
from sheet_helper import open_spreadsheet

if __name__ == "__main__":
    print("Testing Google Sheets connection...")
    print(f"Sheet ID: {SHEET_ID}")
    print(f"Credentials: {GCRED_PATH}")
    print("-" * 60)

    try:
        sh = open_spreadsheet(SHEET_ID, GCRED_PATH)

        print(f"\n✅ Successfully connected to Google Sheet!")
        print(f"Spreadsheet title: {sh.title}")
        print(f"\nAvailable worksheets:")

        titles = []
        for i, worksheet in enumerate(sh.worksheets(), 1):
            titles.append(worksheet.title)
            print(f"  {i}. {worksheet.title} (id: {worksheet.id}, {worksheet.row_count} rows x {worksheet.col_count} cols)")

        # The matcher needs both schedule tables
        print("\n" + "=" * 60)
        for name in (MENTEE_SHEET, MENTOR_SHEET):
            print(f"\nChecking worksheet: '{name}'")
            print("-" * 60)
            if name not in titles:
                print(f"  ⚠️  Missing: the matcher will abort without it")
                continue

            values = sh.worksheet(name).get_all_values()
            if len(values) <= 1:
                print(f"  ⚠️  No data found (empty or only headers)")
                continue

            print(f"  ✅ Found {len(values) - 1} rows of data")
            print(f"  Headers: {values[0]}")
            print(f"\n  First row:")
            for header, value in zip(values[0], values[1]):
                print(f"    {header}: {value}")

    except Exception as e:
        print(f"\n❌ Error connecting to Google Sheet:")
        print(f"   {type(e).__name__}: {e}")
        import traceback
        traceback.print_exc()
