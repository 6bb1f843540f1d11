"""
Randomized retry engine for the room supervision distribution.

Each attempt fills the days in order. Within a day the two-person rooms are
filled first, then the one-person rooms, each by a uniform random pick from
the choices that are still legal. A room with no legal choice ends the
attempt; the next attempt starts again from day 1 with an empty history.
"""

import random
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List, Optional, Sequence, Set, Tuple, Union

from .models import (
    DayAssignment, Distribution, FacilityConfig, Room,
    STATUS_OK, STATUS_EXHAUSTED,
)


@dataclass(frozen=True)
class RoomUnavailable:
    """A room that could not be filled; the attempt it belongs to is abandoned."""
    day: int
    room: str
    reason: str


class AttemptsExhausted(Exception):
    """Raised by distribute() when the attempt budget is spent."""

    def __init__(self, attempts: int, messages: Sequence[str] = ()):
        self.attempts = attempts
        self.messages = list(messages)
        super().__init__(
            f"No valid distribution could be produced after {attempts} attempts")


@dataclass
class SolveResult:
    distribution: Distribution
    attempts: int
    seed: Optional[int] = None


class AttemptHistory:
    """
    Fairness index for a single attempt.
    room_occupants: room -> every candidate placed there on a committed day
    used_pairs:     unordered pairs that already shared a two-person room
    """

    def __init__(self):
        self.room_occupants: Dict[str, Set[str]] = {}
        self.used_pairs: Set[FrozenSet[str]] = set()

    def has_occupied(self, candidate: str, room: str) -> bool:
        return candidate in self.room_occupants.get(room, ())

    def have_paired(self, a: str, b: str) -> bool:
        return frozenset((a, b)) in self.used_pairs

    def commit(self, day: DayAssignment) -> None:
        for room, names in day.rooms.items():
            self.room_occupants.setdefault(room, set()).update(names)
            if len(names) == 2:
                self.used_pairs.add(frozenset(names))


# ══════════════════════════════════════════════════════════
# Eligibility
# ══════════════════════════════════════════════════════════

def available_candidates(
    candidates: Sequence[str],
    room: Room,
    history: AttemptHistory,
    used_today: Set[str],
) -> List[str]:
    """Candidates never seated in this room and not yet placed today, in input order."""
    return [
        c for c in candidates
        if c not in used_today and not history.has_occupied(c, room.name)
    ]


def available_pairs(
    candidates: Sequence[str],
    room: Room,
    history: AttemptHistory,
    used_today: Set[str],
) -> List[Tuple[str, str]]:
    """Unordered pairs of eligible candidates that have never shared a two-person room."""
    eligible = available_candidates(candidates, room, history, used_today)
    pairs = []
    for i, first in enumerate(eligible):
        for second in eligible[i + 1:]:
            if not history.have_paired(first, second):
                pairs.append((first, second))
    return pairs


def fill_room(
    day: int,
    room: Room,
    candidates: Sequence[str],
    history: AttemptHistory,
    used_today: Set[str],
    rng: random.Random,
) -> Union[List[str], RoomUnavailable]:
    """Pick the occupants of one room, or report that the room cannot be filled."""
    if room.is_pair_room:
        pairs = available_pairs(candidates, room, history, used_today)
        if not pairs:
            return RoomUnavailable(day, room.name, "no available pair")
        return list(rng.choice(pairs))

    singles = available_candidates(candidates, room, history, used_today)
    if not singles:
        return RoomUnavailable(day, room.name, "no available candidate")
    return [rng.choice(singles)]


def build_attempt(
    candidates: Sequence[str],
    rooms: Sequence[Room],
    days: int,
    rng: random.Random,
) -> Union[Distribution, RoomUnavailable]:
    """One full attempt from an empty history."""
    ordered = [r for r in rooms if r.is_pair_room] + [r for r in rooms if not r.is_pair_room]
    history = AttemptHistory()
    distribution: Distribution = []

    for day in range(1, days + 1):
        assignment = DayAssignment(day=day)
        used_today: Set[str] = set()
        for room in ordered:
            picked = fill_room(day, room, candidates, history, used_today, rng)
            if isinstance(picked, RoomUnavailable):
                return picked
            assignment.rooms[room.name] = picked
            used_today.update(picked)
        history.commit(assignment)
        distribution.append(assignment)

    return distribution


# ══════════════════════════════════════════════════════════
# Entry points
# ══════════════════════════════════════════════════════════

def _check_candidates(candidates) -> List[str]:
    if candidates is None:
        raise ValueError("Candidate list is required")
    names = list(candidates)
    for name in names:
        if not isinstance(name, str) or not name.strip():
            raise ValueError(f"Invalid candidate name: {name!r}")
    seen, dupes = set(), set()
    for name in names:
        if name in seen:
            dupes.add(name)
        seen.add(name)
    if dupes:
        dupes = sorted(dupes)
        raise ValueError(f"Duplicate candidate names: {', '.join(dupes)}")
    return names


@dataclass
class SearchOutcome:
    """What the retry loop ended with; distribution is None when the budget ran out."""
    distribution: Optional[Distribution]
    attempts: int
    config: FacilityConfig
    candidates: List[str]
    blocked: Counter = field(default_factory=Counter)  # (room, reason) -> failed attempts

    @property
    def found(self) -> bool:
        return self.distribution is not None

    def messages(self) -> List[str]:
        if self.found:
            return [f"Distribution found on attempt {self.attempts} of {self.config.max_attempts}."]
        return _exhausted_messages(self.config, self.candidates, self.blocked)


def search(
    candidates: Sequence[str],
    config: Optional[FacilityConfig] = None,
    random_seed: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> SearchOutcome:
    """Run up to config.max_attempts whole attempts and report how it went."""
    config = config or FacilityConfig()
    config.check()
    names = _check_candidates(candidates)
    if rng is None:
        rng = random.Random(random_seed)
    rooms = config.rooms()

    outcome = SearchOutcome(distribution=None, attempts=0, config=config, candidates=names)
    for attempt in range(1, config.max_attempts + 1):
        outcome.attempts = attempt
        result = build_attempt(names, rooms, config.days, rng)
        if isinstance(result, RoomUnavailable):
            outcome.blocked[(result.room, result.reason)] += 1
            continue
        outcome.distribution = result
        break
    return outcome


def _exhausted_messages(config: FacilityConfig, names: List[str], blocked: Counter) -> List[str]:
    msgs = [f"No valid distribution could be produced after {config.max_attempts} attempts."]
    for (room, reason), count in blocked.most_common(5):
        msgs.append(f"{room}: {reason} ({count} attempt(s))")
    if len(names) < config.slots_per_day:
        msgs.append(
            f"Only {len(names)} candidate(s) for {config.slots_per_day} slots per day.")
    msgs.append("Try again or add more candidates.")
    return msgs


def solve(
    candidates: Sequence[str],
    config: Optional[FacilityConfig] = None,
    random_seed: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> Tuple[Optional[Distribution], str, List[str]]:
    """
    Returns (distribution, status_str, messages).
    distribution is None when every attempt failed; it is never partial.
    """
    outcome = search(candidates, config, random_seed, rng)
    status = STATUS_OK if outcome.found else STATUS_EXHAUSTED
    return outcome.distribution, status, outcome.messages()


def distribute(
    candidates: Sequence[str],
    config: Optional[FacilityConfig] = None,
    random_seed: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> SolveResult:
    """Like solve(), but raises AttemptsExhausted instead of returning None."""
    outcome = search(candidates, config, random_seed, rng)
    if not outcome.found:
        raise AttemptsExhausted(outcome.attempts, outcome.messages())
    return SolveResult(distribution=outcome.distribution, attempts=outcome.attempts, seed=random_seed)
