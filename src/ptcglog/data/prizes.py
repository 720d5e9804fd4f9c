"""Derive the winner's prize path: which knockouts paid for which prizes."""
import re
import logging
from dataclasses import dataclass
from typing import List

from .lines import classify_log, normalize_name, strip_owner_prefix

logger = logging.getLogger(__name__)

PATTERNS = {
    "owned_knockout": re.compile(
        r"^(.+?)['’]s\s+(.+?)\s+was Knocked Out(?: on the Bench)?[!.]", re.IGNORECASE
    ),
    "knockout": re.compile(r"^(.+?)\s+was Knocked Out(?: on the Bench)?[!.]", re.IGNORECASE),
    "prize": re.compile(r"^(.+?)\s+took\s+(a|an|\d+)\s+Prize cards?\.", re.IGNORECASE),
}


@dataclass
class PendingKnockout:
    owner_norm: str  # empty when the log did not name the owner
    victim: str


def _prize_count(value: str) -> int:
    if value.lower() in ("a", "an"):
        return 1
    try:
        return int(value)
    except ValueError:
        return 1


def derive_prize_path(raw_log: str, winner_name: str) -> List[str]:
    """Ordered names of the Pokemon whose knockouts gave the winner prizes.

    Each prize line is paired with the most recent pending knockout that
    is not the taker's own Pokemon. A line taking several prizes repeats
    the victim once per card.

    Args:
        raw_log: Full log text
        winner_name: Name of the player whose path is wanted

    Returns:
        Victim display names in prize order
    """
    if not raw_log or not winner_name:
        return []
    winner_norm = normalize_name(winner_name)
    if not winner_norm:
        return []

    pending: List[PendingKnockout] = []
    path: List[str] = []

    for line in classify_log(raw_log):
        text = line.body

        if match := PATTERNS["owned_knockout"].match(text):
            victim = strip_owner_prefix(match.group(2))
            if victim:
                pending.append(PendingKnockout(normalize_name(match.group(1)), victim))

        elif match := PATTERNS["knockout"].match(text):
            victim = strip_owner_prefix(match.group(1))
            if victim:
                pending.append(PendingKnockout("", victim))

        elif match := PATTERNS["prize"].match(text):
            taker_norm = normalize_name(match.group(1))
            count = _prize_count(match.group(2))

            for i in range(len(pending) - 1, -1, -1):
                if not pending[i].owner_norm or pending[i].owner_norm != taker_norm:
                    knockout = pending.pop(i)
                    if taker_norm == winner_norm:
                        path.extend([knockout.victim] * count)
                    break

    if pending:
        logger.debug(f"Discarded {len(pending)} unmatched knockouts")
    return path
