"""
Post-distribution validation and dry-run pool checks.
"""

from typing import Dict, FrozenSet, List, Optional, Sequence, Tuple

from .models import Distribution, FacilityConfig


def validate_distribution(
    distribution: Distribution,
    config: FacilityConfig,
    candidates: Optional[Sequence[str]] = None,
) -> Tuple[bool, List[str]]:
    """
    Validate a distribution against the hard rules.
    Returns (is_valid, list_of_violation_messages).
    """
    violations = []
    rooms = config.rooms()
    capacity = {r.name: r.capacity for r in rooms}
    known = set(candidates) if candidates is not None else None

    if len(distribution) != config.days:
        violations.append(f"Distribution has {len(distribution)} day(s) (expected {config.days})")

    seen_in_room: Dict[Tuple[str, str], int] = {}
    seen_pairs: Dict[FrozenSet[str], int] = {}

    for pos, day in enumerate(distribution, 1):
        if day.day != pos:
            violations.append(f"Day {pos}: numbered {day.day}")

        missing = [r.name for r in rooms if r.name not in day.rooms]
        if missing:
            violations.append(f"Day {day.day}: rooms not filled: {', '.join(missing)}")
        extra = [r for r in day.rooms if r not in capacity]
        if extra:
            violations.append(f"Day {day.day}: unknown rooms: {', '.join(extra)}")

        placed_today: Dict[str, str] = {}
        for room, names in day.rooms.items():
            cap = capacity.get(room)
            if cap is not None and len(names) != cap:
                violations.append(
                    f"Day {day.day}: {room} has {len(names)} occupant(s) (capacity {cap})")
            if len(set(names)) != len(names):
                violations.append(f"Day {day.day}: {room} lists the same candidate twice")

            for name in names:
                if known is not None and name not in known:
                    violations.append(f"Day {day.day}: {room} holds unknown candidate {name}")
                if name in placed_today and placed_today[name] != room:
                    violations.append(
                        f"Day {day.day}: {name} in both {placed_today[name]} and {room}")
                placed_today[name] = room

                key = (name, room)
                if key in seen_in_room and seen_in_room[key] != day.day:
                    violations.append(
                        f"{name}: {room} on day {seen_in_room[key]} and day {day.day}")
                else:
                    seen_in_room[key] = day.day

            if cap == 2 and len(set(names)) == 2:
                pair = frozenset(names)
                if pair in seen_pairs:
                    a, b = sorted(pair)
                    violations.append(
                        f"{a} / {b}: paired on day {seen_pairs[pair]} and day {day.day}")
                else:
                    seen_pairs[pair] = day.day

    return len(violations) == 0, violations


def dry_run_pool_check(candidates: Sequence[str], config: FacilityConfig) -> Tuple[bool, List[str]]:
    """Warn when the candidate pool is too small for the facility (warnings only)."""
    msgs = []
    n = len(candidates)

    if n < config.slots_per_day:
        msgs.append(
            f"Only {n} candidate(s) found for {config.slots_per_day} slots per day "
            f"({config.two_person_rooms} two-person + {config.one_person_rooms} one-person rooms); "
            f"distribution will likely fail.")
    if config.two_person_rooms and n < 2 * config.days:
        msgs.append(
            f"A two-person room needs {2 * config.days} different candidates over "
            f"{config.days} day(s); only {n} available.")
    elif config.one_person_rooms and n < config.days:
        msgs.append(
            f"A one-person room needs {config.days} different candidates over "
            f"{config.days} day(s); only {n} available.")

    return len(msgs) == 0, msgs
