#!/usr/bin/env python3
"""Create sample input files for the room supervision scheduler."""

import pandas as pd
from pathlib import Path

from supervision.models import FacilityConfig
from supervision.workbook_sheets import setup_workbook

BASE = Path(__file__).resolve().parent

# 50 names: enough for the reference facility (41 slots per day)
names = [f"Supervisor {i:02d}" for i in range(1, 51)]

# Plain name list, as exported by most spreadsheet tools
pd.DataFrame({"Name": names}).to_csv(BASE / "sample_names.csv", index=False, header=False)

# A loose sheet: names spread over several columns with blanks and repeats
loose = pd.DataFrame([
    ["Supervisor 01", "Supervisor 02", None],
    ["  Supervisor 03 ", "null", "Supervisor 01"],
    [None, "Supervisor 04", "undefined"],
])
with pd.ExcelWriter(BASE / "sample_loose_names.xlsx", engine="openpyxl") as w:
    loose.to_excel(w, sheet_name="Sheet1", index=False, header=False)

# Full input workbook: CANDIDATES + FACILITY_CONFIG
setup_workbook(str(BASE / "sample_supervisors.xlsx"), names=names, config=FacilityConfig())

print("Created: sample_names.csv, sample_loose_names.xlsx, sample_supervisors.xlsx")
