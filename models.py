from dataclasses import dataclass
from typing import Optional, Tuple

from config import SI_LEADER_POSITION


@dataclass(frozen=True)
class Mentor:
    name: str
    availability: Tuple[str, ...] = ()  # half-hour slot tokens


@dataclass(frozen=True)
class Mentee:
    name: str
    session_times: Tuple[str, ...] = ()  # half-hour slot tokens
    preferred_mentor: Optional[str] = None
    email: str = ""
    course: str = ""
    position: str = ""

    @property
    def is_si_leader(self) -> bool:
        return self.position == SI_LEADER_POSITION
