"""Fixtures and helpers for scheduler tests."""
from __future__ import annotations

from itertools import combinations
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

import openpyxl

from supervision.models import DayAssignment, FacilityConfig


def make_names(count: int, prefix: str = "P") -> List[str]:
    return [f"{prefix}{i:02d}" for i in range(1, count + 1)]


def small_config(
    two: int = 3,
    one: int = 2,
    days: int = 3,
    attempts: int = 100,
) -> FacilityConfig:
    return FacilityConfig(
        two_person_rooms=two,
        one_person_rooms=one,
        days=days,
        max_attempts=attempts,
    )


def day(number: int, **rooms: Sequence[str]) -> DayAssignment:
    """DayAssignment with rooms given as Room_1=["A", "B"] -> "Room 1"."""
    return DayAssignment(day=number, rooms={k.replace("_", " "): list(v) for k, v in rooms.items()})


def write_sheet(path: Path, rows: Iterable[Sequence], title: Optional[str] = None) -> Path:
    wb = openpyxl.Workbook()
    ws = wb.active
    if title:
        ws.title = title
    for row in rows:
        ws.append(list(row))
    wb.save(path)
    return path


def assert_invariants(distribution: List[DayAssignment], config: FacilityConfig) -> None:
    """Check the four distribution rules directly, independent of validate.py."""
    assert len(distribution) == config.days
    rooms = config.rooms()
    room_history = set()
    pair_history = set()
    for d in distribution:
        assert set(d.rooms) == {r.name for r in rooms}
        today = [name for names in d.rooms.values() for name in names]
        assert len(today) == len(set(today)), f"day {d.day}: someone is in two rooms"
        for room in rooms:
            names = d.rooms[room.name]
            assert len(names) == room.capacity
            for name in names:
                assert (name, room.name) not in room_history, f"{name} repeats {room.name}"
                room_history.add((name, room.name))
            if room.capacity == 2:
                for a, b in combinations(names, 2):
                    pair = frozenset((a, b))
                    assert pair not in pair_history, f"{a}/{b} paired twice"
                    pair_history.add(pair)
