import random
from typing import Dict, FrozenSet, Iterable, List, Optional, Sequence, Set, Tuple

from config import MAX_MENTEES_PER_MENTOR, MAX_SI_LEADERS_PER_MENTOR
from models import Mentee, Mentor

Assignment = Dict[str, List[Mentee]]


def normalize_pairs(pairs: Iterable[Sequence[str]]) -> Set[FrozenSet[str]]:
    return {frozenset(pair) for pair in pairs if len(frozenset(pair)) == 2}


def count_si_leaders(group: List[Mentee]) -> int:
    return sum(1 for mentee in group if mentee.is_si_leader)


def has_overlap(mentor: Mentor, mentee: Mentee) -> bool:
    return not set(mentor.availability).isdisjoint(mentee.session_times)


def is_incompatible(mentor_name: str, mentee_name: str, group: List[Mentee],
                    pairs: Set[FrozenSet[str]]) -> bool:
    """
    A mentee conflicts with a mentor when the pair (mentee, mentor) is listed,
    or when the mentee is paired with anyone already in the mentor's group.
    """
    if frozenset((mentee_name, mentor_name)) in pairs:
        return True
    return any(frozenset((existing.name, mentee_name)) in pairs for existing in group)


def _has_room(group: List[Mentee]) -> bool:
    return len(group) < MAX_MENTEES_PER_MENTOR


def _si_quota_ok(group: List[Mentee]) -> bool:
    return count_si_leaders(group) < MAX_SI_LEADERS_PER_MENTOR


def preference_pass(assignment: Assignment, mentors: List[Mentor], working: List[Mentee],
                    pairs: Set[FrozenSet[str]]) -> List[Mentee]:
    """
    Places mentees with the mentor they asked for.
    - The preferred mentor must share a slot, have room and be under the SI Leader quota.
    - The quota is checked for every mentee here, SI Leader or not.
    Returns the mentees that are still unplaced, in order.
    """
    remaining = []
    for mentee in working:
        preferred = None
        if mentee.preferred_mentor:
            preferred = next((m for m in mentors if m.name == mentee.preferred_mentor), None)
        if preferred is not None:
            group = assignment[preferred.name]
            if (has_overlap(preferred, mentee) and _has_room(group) and _si_quota_ok(group)
                    and not is_incompatible(preferred.name, mentee.name, group, pairs)):
                group.append(mentee)
                continue
        remaining.append(mentee)
    return remaining


def availability_pass(assignment: Assignment, mentors: List[Mentor], working: List[Mentee],
                      pairs: Set[FrozenSet[str]]) -> List[Mentee]:
    """
    Places each mentee with the first mentor (input order) that shares a slot,
    has room, respects the SI Leader quota for SI Leaders and has no conflict.
    """
    remaining = []
    for mentee in working:
        placed = False
        for mentor in mentors:
            group = assignment[mentor.name]
            if not _has_room(group) or not has_overlap(mentor, mentee):
                continue
            if mentee.is_si_leader and not _si_quota_ok(group):
                continue
            if is_incompatible(mentor.name, mentee.name, group, pairs):
                continue
            group.append(mentee)
            placed = True
            break
        if not placed:
            remaining.append(mentee)
    return remaining


def leftover_pass(assignment: Assignment, working: List[Mentee],
                  pairs: Set[FrozenSet[str]]) -> List[Mentee]:
    """
    Places whoever is left with the first mentor that has room and no conflict.
    Availability and the SI Leader quota are ignored. Mentors are tried in the
    assignment's insertion order.
    """
    remaining = []
    for mentee in working:
        for mentor_name, group in assignment.items():
            if _has_room(group) and not is_incompatible(mentor_name, mentee.name, group, pairs):
                group.append(mentee)
                break
        else:
            remaining.append(mentee)
    return remaining


def assign_mentees(mentors: List[Mentor], mentees: List[Mentee], incompatible_pairs: Iterable[Sequence[str]],
                   randomize: bool = False, rng: Optional[random.Random] = None) -> Tuple[Assignment, List[Mentee]]:
    """
    Greedy three-pass assignment of mentees to mentors.
    - Pass 1: preferred mentor.
    - Pass 2: first mentor with an overlapping slot.
    - Pass 3: first mentor with room, regardless of availability.
    With randomize=True the mentee order is shuffled first (Fisher-Yates).
    Returns the mentor -> mentees mapping and the mentees no mentor could take.
    """
    pairs = normalize_pairs(incompatible_pairs)

    assignment: Assignment = {}
    for mentor in mentors:
        assignment.setdefault(mentor.name, [])

    working = list(mentees)
    if randomize:
        (rng or random).shuffle(working)

    working = preference_pass(assignment, mentors, working, pairs)
    working = availability_pass(assignment, mentors, working, pairs)
    unassigned = leftover_pass(assignment, working, pairs)

    if unassigned:
        print(f"[WARN] {len(unassigned)} mentees could not be placed with any mentor:")
        for mentee in unassigned:
            print(f"  - {mentee.name}")

    return assignment, unassigned
