"""Pydantic schemas for API."""
from typing import Optional, List, Dict
from pydantic import BaseModel

from supervision.models import DayAssignment, FacilityConfig


class FacilityConfigSchema(BaseModel):
    two_person_rooms: int = 15
    one_person_rooms: int = 11
    days: int = 4
    max_attempts: int = 100
    room_prefix: str = "Room"

    class Config:
        from_attributes = True


class CandidateReview(BaseModel):
    """Parsed name list, shown for confirmation before distributing."""
    candidates: List[str]
    count: int
    slots_per_day: int
    warnings: List[str] = []


class DistributeRequest(BaseModel):
    candidates: List[str]
    config: Optional[FacilityConfigSchema] = None
    seed: Optional[int] = None


class DayOut(BaseModel):
    day: int
    rooms: Dict[str, List[str]]


class DistributionOut(BaseModel):
    days: List[DayOut]
    attempts: int
    seed: Optional[int] = None
    table: List[List[str]]  # [candidate, room day 1, ..., room day N]


class ExportRequest(BaseModel):
    candidates: List[str]
    days: List[DayOut]
    config: Optional[FacilityConfigSchema] = None


def to_config(schema: Optional[FacilityConfigSchema]) -> FacilityConfig:
    if schema is None:
        return FacilityConfig()
    return FacilityConfig(**schema.model_dump())


def to_distribution(days: List[DayOut]) -> List[DayAssignment]:
    return [DayAssignment(day=d.day, rooms={r: list(n) for r, n in d.rooms.items()}) for d in days]
