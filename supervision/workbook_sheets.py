"""
Input workbook template: CANDIDATES and FACILITY_CONFIG sheets.
Both sheets live in the same workbook that parse_workbook() reads.
"""

from pathlib import Path
from typing import Iterable, Optional

import openpyxl
from openpyxl.styles import Font

from .models import FacilityConfig
from .parse_inputs import sheet_values, clean_names


def ensure_candidates_sheet(wb, names: Optional[Iterable[str]] = None):
    """Create/replace CANDIDATES sheet (one name per row under a Name header)."""
    if "CANDIDATES" in wb.sheetnames:
        if names is None:
            return
        del wb["CANDIDATES"]
    ws = wb.create_sheet("CANDIDATES", 0)
    ws.cell(1, 1, "Name").font = Font(bold=True)
    ws.column_dimensions["A"].width = 32
    for i, name in enumerate(names or [], 2):
        ws.cell(i, 1, name)


def ensure_config_sheet(wb, config: Optional[FacilityConfig] = None):
    """Create FACILITY_CONFIG sheet with the facility parameters."""
    if "FACILITY_CONFIG" in wb.sheetnames:
        # Keep user edits
        return
    ws = wb.create_sheet("FACILITY_CONFIG")
    headers = ["Parameter", "Value", "Description"]
    for c, h in enumerate(headers, 1):
        ws.cell(1, c, h).font = Font(bold=True)

    cfg = config or FacilityConfig()
    defaults = [
        ("two_person_rooms", cfg.two_person_rooms, "Rooms supervised by two candidates (filled first)"),
        ("one_person_rooms", cfg.one_person_rooms, "Rooms supervised by one candidate"),
        ("days", cfg.days, "Number of days to distribute"),
        ("max_attempts", cfg.max_attempts, "Whole-distribution retries before giving up"),
        ("room_prefix", cfg.room_prefix, "Room label; rooms are numbered after it"),
    ]
    for i, (p, v, d) in enumerate(defaults, 2):
        ws.cell(i, 1, p)
        ws.cell(i, 2, v)
        ws.cell(i, 3, d)
    ws.column_dimensions["A"].width = 20
    ws.column_dimensions["C"].width = 50


def setup_workbook(
    wb_path: str,
    names: Optional[Iterable[str]] = None,
    config: Optional[FacilityConfig] = None,
) -> str:
    """
    Open (or create) the input workbook and add/refresh its sheets.
    Existing candidate names are kept unless new names are given.
    """
    path = Path(wb_path)
    if path.exists():
        wb = openpyxl.load_workbook(path)
        if names is None and "CANDIDATES" not in wb.sheetnames and wb.sheetnames:
            # A plain name list: copy it into the CANDIDATES sheet
            names = clean_names(sheet_values(wb))
    else:
        wb = openpyxl.Workbook()
        # Drop the default empty sheet
        wb.remove(wb.active)

    ensure_candidates_sheet(wb, names)
    ensure_config_sheet(wb, config)
    wb.save(path)
    return str(path)
