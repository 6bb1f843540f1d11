"""
Data models for the room supervision scheduler.
A facility is a fixed, ordered block of two-person rooms followed by one-person rooms.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass(frozen=True)
class Room:
    """One supervision room; capacity is fixed by its position in the room order."""
    name: str
    capacity: int  # 1 or 2

    @property
    def is_pair_room(self) -> bool:
        return self.capacity == 2


@dataclass
class FacilityConfig:
    """Facility parameters. Defaults are the reference deployment."""
    two_person_rooms: int = 15
    one_person_rooms: int = 11
    days: int = 4
    max_attempts: int = 100
    room_prefix: str = "Room"

    @property
    def total_rooms(self) -> int:
        return self.two_person_rooms + self.one_person_rooms

    @property
    def slots_per_day(self) -> int:
        """Candidates needed to fill every room once on a single day."""
        return self.two_person_rooms * 2 + self.one_person_rooms

    def room_name(self, number: int) -> str:
        return f"{self.room_prefix} {number}"

    def rooms(self) -> List[Room]:
        """Ordered rooms: the two-person block first, then the one-person block."""
        out = []
        for i in range(self.total_rooms):
            cap = 2 if i < self.two_person_rooms else 1
            out.append(Room(name=self.room_name(i + 1), capacity=cap))
        return out

    def check(self) -> None:
        """Raise ValueError on parameters the engine cannot work with."""
        if self.two_person_rooms < 0 or self.one_person_rooms < 0:
            raise ValueError("Room counts must be >= 0")
        if self.days < 0:
            raise ValueError("Day count must be >= 0")
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")


@dataclass
class DayAssignment:
    """Room -> occupants for one day (day numbers are 1-based)."""
    day: int
    rooms: Dict[str, List[str]] = field(default_factory=dict)

    def occupants(self) -> List[str]:
        return [name for names in self.rooms.values() for name in names]

    def room_of(self, candidate: str) -> Optional[str]:
        for room, names in self.rooms.items():
            if candidate in names:
                return room
        return None

    def to_dict(self) -> dict:
        return {"day": self.day, "rooms": {r: list(n) for r, n in self.rooms.items()}}


# A distribution is one DayAssignment per day, in day order.
Distribution = List[DayAssignment]


@dataclass
class DistributionContext:
    """Everything parsed from an input workbook."""
    candidates: List[str]
    config: FacilityConfig = field(default_factory=FacilityConfig)
    random_seed: Optional[int] = None


# Values a spreadsheet export may leave behind in place of an empty cell
PLACEHOLDER_VALUES = {"null", "undefined", "nan", "none"}

STATUS_OK = "OK"
STATUS_EXHAUSTED = "ATTEMPTS_EXHAUSTED"
