import re
from typing import Iterable, List

from core.exceptions import EmptyRoster

# Names are separated by line breaks or commas
NAME_SEPARATOR = re.compile(r"[\n,]")


def parse_roster(text: str) -> List[str]:
    """
    Split pasted roster text into participant names.
    Blank entries are dropped; repeated names (case-insensitive) keep the first spelling.
    """
    names = []
    seen = set()
    for raw in NAME_SEPARATOR.split(text or ""):
        name = " ".join(raw.split())
        if not name:
            continue
        key = name.casefold()
        if key in seen:
            continue
        seen.add(key)
        names.append(name)

    if not names:
        raise EmptyRoster()
    return names


def search_participants(participants: Iterable, term: str, active_only: bool = False) -> list:
    """
    Case-insensitive substring match on participant names, order preserved.
    With active_only, eliminated participants are left out (match entry picks from these).
    """
    if active_only:
        participants = [p for p in participants if not p.eliminated]
    needle = (term or "").strip().casefold()
    if not needle:
        return list(participants)
    return [p for p in participants if needle in p.name.casefold()]
