import os
from typing import List, Optional, Tuple

from dotenv import load_dotenv

# Load environment variables from .env
load_dotenv()

# ---- Data source ----
# Google Sheets is used when SHEET_ID is set, otherwise a directory of CSV tables.
SHEET_ID = os.getenv('SHEET_ID')
GCRED_PATH = os.getenv('GCRED_PATH')
INPUT_DIR = os.getenv('INPUT_DIR', 'data')

# ---- Table names ----
MENTEE_SHEET = 'Mentee Schedules'
MENTOR_SHEET = 'Mentor Schedules'
PRIMARY_SHEET = 'Final Assignments'
ALTERNATE_SHEET = 'Final Assignments Option 2'

# ---- Matching limits ----
MAX_MENTEES_PER_MENTOR = 6
MAX_SI_LEADERS_PER_MENTOR = 2
SI_LEADER_POSITION = 'SI Leader'

# Pairs of names that must never end up under the same mentor.
# A pair may also name a mentor and a mentee.
DEFAULT_INCOMPATIBLE_PAIRS = [
    'tutor15 + tutor23',
    'tutor17 + tutor22',
    'tutor12 + Mentor1 Lastname',
    'tutor6 + tutor8',
    'tutor7 + tutor19',
    'tutor10 + tutor12',
]


def parse_incompatible_pairs(entries) -> List[Tuple[str, str]]:
    """
    Turns "nameA + nameB" strings into (nameA, nameB) tuples.
    Accepts a list of strings or a single ';' separated string.
    """
    if isinstance(entries, str):
        entries = entries.split(';')
    pairs = []
    for entry in entries:
        if not entry or not entry.strip():
            continue
        names = [name.strip() for name in entry.split('+')]
        if len(names) != 2 or not all(names):
            raise ValueError(f"Incompatible pair must look like 'nameA + nameB', got {entry!r}")
        pairs.append((names[0], names[1]))
    return pairs


def load_incompatible_pairs(raw: Optional[str] = None) -> List[Tuple[str, str]]:
    raw = os.getenv('INCOMPATIBLE_PAIRS') if raw is None else raw
    if raw:
        return parse_incompatible_pairs(raw)
    return parse_incompatible_pairs(DEFAULT_INCOMPATIBLE_PAIRS)


INCOMPATIBLE_PAIRS = load_incompatible_pairs()
