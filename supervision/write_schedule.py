"""
Render a distribution: room lookups, the candidate-by-day table, and the
output workbook (DISTRIBUTION + ROOMS sheets, CONFLICTS on failure).
"""

from pathlib import Path
from typing import List, Optional, Sequence

import openpyxl
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from .models import Distribution, FacilityConfig


thin_side = Side(border_style="thin", color="cbd5e1")
center = Alignment(horizontal="center", vertical="center")
bold_font = Font(bold=True, size=11, name="Arial")
header_fill = PatternFill(start_color="F8FAFC", end_color="F8FAFC", fill_type="solid")
stripe_fill = PatternFill(start_color="F1F5F9", end_color="F1F5F9", fill_type="solid")
cell_border = Border(top=thin_side, bottom=thin_side, left=thin_side, right=thin_side)


def room_of(distribution: Distribution, candidate: str, day: int) -> str:
    """Room the candidate occupied on a 1-based day, or '' if none."""
    if day < 1 or day > len(distribution):
        return ""
    return distribution[day - 1].room_of(candidate) or ""


def distribution_table(distribution: Distribution, candidates: Sequence[str]) -> List[List[str]]:
    """Rows of [candidate, room on day 1, ..., room on day N] in candidate order."""
    rows = []
    for name in candidates:
        rows.append([name] + [room_of(distribution, name, d) for d in range(1, len(distribution) + 1)])
    return rows


def _header(ws, labels):
    for c, label in enumerate(labels, 1):
        cell = ws.cell(1, c, label)
        cell.font = bold_font
        cell.alignment = center
        cell.fill = header_fill
        cell.border = cell_border
    ws.freeze_panes = "B2"


def build_workbook(
    distribution: Distribution,
    candidates: Sequence[str],
    config: Optional[FacilityConfig] = None,
):
    """
    DISTRIBUTION: one row per candidate, one column per day (room name).
    ROOMS:        one row per room, one column per day (occupants).
    """
    config = config or FacilityConfig()
    days = len(distribution)
    day_labels = [f"Day {d}" for d in range(1, days + 1)]

    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = "DISTRIBUTION"
    _header(ws, ["Candidate"] + day_labels)
    for i, row in enumerate(distribution_table(distribution, candidates), 2):
        for c, value in enumerate(row, 1):
            cell = ws.cell(i, c, value or None)
            cell.border = cell_border
            if c > 1:
                cell.alignment = center
            if i % 2 == 0:
                cell.fill = stripe_fill
    ws.column_dimensions["A"].width = 32
    for d in range(days):
        ws.column_dimensions[get_column_letter(d + 2)].width = 16

    ws_rooms = wb.create_sheet("ROOMS")
    _header(ws_rooms, ["Room", "Capacity"] + day_labels)
    for i, room in enumerate(config.rooms(), 2):
        ws_rooms.cell(i, 1, room.name).border = cell_border
        ws_rooms.cell(i, 2, room.capacity).alignment = center
        for d, day in enumerate(distribution):
            cell = ws_rooms.cell(i, d + 3, ", ".join(day.rooms.get(room.name, [])) or None)
            cell.border = cell_border
    ws_rooms.column_dimensions["A"].width = 16
    for d in range(days):
        ws_rooms.column_dimensions[get_column_letter(d + 3)].width = 36

    return wb


def write_distribution(
    output_path: str,
    distribution: Distribution,
    candidates: Sequence[str],
    config: Optional[FacilityConfig] = None,
) -> str:
    output = Path(output_path)
    wb = build_workbook(distribution, candidates, config)
    wb.save(output)
    return str(output)


def add_conflicts_sheet(wb_path: str, conflicts: List[str]) -> None:
    """Add a CONFLICTS sheet listing failure messages (creates the file if missing)."""
    path = Path(wb_path)
    if path.exists():
        wb = openpyxl.load_workbook(path)
    else:
        wb = openpyxl.Workbook()
        wb.remove(wb.active)
    if "CONFLICTS" in wb.sheetnames:
        del wb["CONFLICTS"]
    ws = wb.create_sheet("CONFLICTS")
    ws.cell(1, 1, "Conflict / Issue").font = bold_font
    for i, msg in enumerate(conflicts, 2):
        ws.cell(i, 1, msg)
    ws.column_dimensions["A"].width = 90
    wb.save(path)
