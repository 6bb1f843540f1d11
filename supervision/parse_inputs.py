"""
Parse inputs for the supervision scheduler.
Candidate names come from a spreadsheet: every non-empty cell of the
CANDIDATES sheet (or the first sheet) is a name. Facility parameters come
from an optional FACILITY_CONFIG sheet in the same workbook.
"""

import csv
from io import BytesIO, StringIO
from pathlib import Path
from typing import Iterable, List, Optional, Union

import openpyxl
import pandas as pd

from .models import DistributionContext, FacilityConfig, PLACEHOLDER_VALUES


XLSX_SUFFIXES = {".xlsx", ".xlsm"}
CSV_SUFFIXES = {".csv", ".txt"}

Source = Union[str, Path, bytes]


class CandidateFileError(ValueError):
    """The name file could not be read."""


class EmptyCandidateList(ValueError):
    """The name file was readable but held no names."""


def clean_names(values: Iterable) -> List[str]:
    """Trim, drop blanks and placeholders, dedupe keeping first occurrence."""
    names = []
    seen = set()
    for v in values:
        if v is None:
            continue
        s = str(v).strip()
        if not s or s.lower() in PLACEHOLDER_VALUES:
            continue
        if s in seen:
            continue
        seen.add(s)
        names.append(s)
    return names


def _suffix(src: Source, filename: Optional[str]) -> str:
    if filename:
        return Path(filename).suffix.lower()
    if isinstance(src, (str, Path)):
        return Path(src).suffix.lower()
    # Raw bytes with no name: xlsx files are zip archives
    return ".xlsx" if src[:2] == b"PK" else ".csv"


def _load_workbook(src: Source, data_only: bool = True):
    try:
        if isinstance(src, bytes):
            return openpyxl.load_workbook(BytesIO(src), data_only=data_only)
        return openpyxl.load_workbook(src, data_only=data_only)
    except FileNotFoundError:
        raise
    except Exception as e:
        raise CandidateFileError(f"Invalid Excel file: {e}") from e


def _skip_header(values: List) -> List:
    # A template's "Name" header is not a candidate
    if values and values[0] is not None and str(values[0]).strip().lower() == "name":
        return values[1:]
    return values


def sheet_values(wb) -> List:
    """All cell values of the name sheet, row by row."""
    ws = wb["CANDIDATES"] if "CANDIDATES" in wb.sheetnames else wb[wb.sheetnames[0]]
    values = []
    for row in ws.iter_rows(values_only=True):
        values.extend(row)
    return _skip_header(values)


def _csv_text(src: Source) -> str:
    raw = src if isinstance(src, bytes) else Path(src).read_bytes()
    try:
        return raw.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise CandidateFileError(f"Could not decode CSV as UTF-8: {e}") from e


def _cells_from_csv(src: Source) -> List:
    """Every cell of a CSV name list, row by row; rows may differ in length."""
    text = _csv_text(src)
    try:
        # Widest row decides the column count, so ragged lists parse
        width = max((len(row) for row in csv.reader(StringIO(text))), default=0)
        if width == 0:
            return []
        df = pd.read_csv(
            StringIO(text),
            header=None,
            names=list(range(width)),
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
        )
    except pd.errors.EmptyDataError:
        return []
    except (csv.Error, pd.errors.ParserError) as e:
        raise CandidateFileError(f"Could not parse CSV: {e}") from e
    df = df.fillna("")
    return _skip_header([v for row in df.itertuples(index=False) for v in row])


def read_candidates(src: Source, filename: Optional[str] = None) -> List[str]:
    """
    Read candidate names from an .xlsx or .csv file (path or raw bytes).
    Raises CandidateFileError if unreadable, EmptyCandidateList if no names.
    """
    suffix = _suffix(src, filename)
    if suffix in XLSX_SUFFIXES:
        values = sheet_values(_load_workbook(src))
    elif suffix in CSV_SUFFIXES:
        values = _cells_from_csv(src)
    else:
        raise CandidateFileError(f"Unsupported file type '{suffix}' (use .xlsx or .csv)")

    names = clean_names(values)
    if not names:
        raise EmptyCandidateList("No names found in the file. Make sure it lists the candidates.")
    return names


def _count(key: str, value) -> int:
    """Whole-number parameter; accepts 4, 4.0 and "4.0" as written by spreadsheets."""
    try:
        number = float(str(value).strip())
    except ValueError:
        raise ValueError(f"FACILITY_CONFIG {key} must be a whole number, got {value!r}") from None
    if not number.is_integer():
        raise ValueError(f"FACILITY_CONFIG {key} must be a whole number, got {value!r}")
    return int(number)


def read_config(wb) -> FacilityConfig:
    """Read FACILITY_CONFIG sheet; fall back to defaults."""
    config = FacilityConfig()
    if "FACILITY_CONFIG" not in wb.sheetnames:
        return config

    ws = wb["FACILITY_CONFIG"]
    rows = {}
    for row in range(2, ws.max_row + 1):
        p = ws.cell(row, 1).value
        v = ws.cell(row, 2).value
        if p and v is not None and str(v).strip():
            rows[str(p).strip()] = v

    for key in ("two_person_rooms", "one_person_rooms", "days", "max_attempts"):
        if key in rows:
            setattr(config, key, _count(key, rows[key]))
    if "room_prefix" in rows:
        config.room_prefix = str(rows["room_prefix"]).strip()
    return config


def parse_workbook(wb_path: str, random_seed: Optional[int] = None) -> DistributionContext:
    """Build the DistributionContext from a single input workbook (or a bare .csv name list)."""
    if Path(wb_path).suffix.lower() in CSV_SUFFIXES:
        return DistributionContext(
            candidates=read_candidates(wb_path),
            config=FacilityConfig(),
            random_seed=random_seed,
        )

    wb = _load_workbook(wb_path)
    names = clean_names(sheet_values(wb))
    if not names:
        raise EmptyCandidateList("No names found in the file. Make sure it lists the candidates.")

    return DistributionContext(
        candidates=names,
        config=read_config(wb),
        random_seed=random_seed,
    )
