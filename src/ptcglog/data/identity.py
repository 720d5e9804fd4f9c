"""Resolve player names and point of view from a log."""
import logging
import re
from typing import List, Optional, Sequence

from .lines import (
    ClassifiedLine, OwnershipTracker, PLACEHOLDER_NAMES, classify_line,
)
from .models import PlayerIdentity, Side

logger = logging.getLogger(__name__)

PATTERNS = {
    "opening_hand": re.compile(r"^(\S+) drew 7 cards for the opening hand\."),
    "result": re.compile(r"\bwins\.", re.IGNORECASE),
    "winner": re.compile(r"(\S+)\s+wins\.", re.IGNORECASE),
    "first_turn": re.compile(r"^Turn\s*#\s*1\b\D*?-\s*(.+?)['’]s Turn", re.IGNORECASE),
    "go_first": re.compile(r"^(\S+) decided to go first"),
    "go_second": re.compile(r"^(\S+) decided to go second"),
}

USER_WON_PHRASES = ("Opponent conceded.", "You took all of your Prize cards.")
OPPONENT_WON_PHRASES = ("You conceded.", "Opponent took all of their Prize cards.")


def _as_classified(lines: Sequence) -> List[ClassifiedLine]:
    return [l if isinstance(l, ClassifiedLine) else classify_line(l) for l in lines]


def _discover_names(lines: List[ClassifiedLine]) -> List[str]:
    """Up to two participant names in order of appearance."""
    names: List[str] = []
    for line in lines:
        if match := PATTERNS["opening_hand"].match(line.text):
            name = match.group(1)
            if name not in names:
                names.append(name)
            if len(names) == 2:
                return names

    for line in lines:
        if line.is_turn_marker or line.is_bullet or line.text == "Setup":
            continue
        token = re.sub(r"['’]s$", "", line.text.split()[0])
        if not token or token in PLACEHOLDER_NAMES or token in names:
            continue
        names.append(token)
        if len(names) == 2:
            break
    return names


def _other(name: str, a: str, b: str) -> str:
    return b if name == a else a


def resolve_players(lines: Sequence, preferred_username: Optional[str] = None) -> tuple[str, str]:
    """Return (username, opponent) for a log.

    Precedence: preferred username, then the POV of the result line,
    then the You/Opponent placeholders, then order of appearance.
    """
    lines = _as_classified(lines)
    names = _discover_names(lines)
    a = names[0] if names else ""
    b = names[1] if len(names) > 1 else ""

    if preferred_username and preferred_username.strip():
        wanted = preferred_username.strip().lower()
        for name in (a, b):
            if name and name.lower() == wanted:
                return name, _other(name, a, b)

    result_line = next((l.text for l in reversed(lines) if PATTERNS["result"].search(l.text)), None)
    if result_line:
        winners = PATTERNS["winner"].findall(result_line)
        winner = winners[-1] if winners else ""
        if winner and winner in (a, b):
            if any(p in result_line for p in USER_WON_PHRASES):
                return winner, _other(winner, a, b)
            if any(p in result_line for p in OPPONENT_WON_PHRASES):
                return _other(winner, a, b), winner

    if {a, b} == set(PLACEHOLDER_NAMES):
        return "You", "Opponent"

    return a, b


def detect_first_player(lines: Sequence, username: str, opponent: str) -> Optional[str]:
    """Name of the player who took the first turn, if the log tells."""
    lines = _as_classified(lines)
    for line in lines:
        if line.is_turn_marker and line.turn == 1:
            if match := PATTERNS["first_turn"].match(line.text):
                return match.group(1).strip()
            break

    for line in lines:
        if match := PATTERNS["go_first"].match(line.text):
            return match.group(1)
        if match := PATTERNS["go_second"].match(line.text):
            name = match.group(1)
            if name == username:
                return opponent or None
            if name == opponent:
                return username or None
            return None

    tracker = OwnershipTracker(PlayerIdentity(username=username, opponent=opponent))
    seen_first_turn = False
    for line in lines:
        if line.is_turn_marker:
            seen_first_turn = True
            continue
        if not seen_first_turn:
            continue
        side, _ = tracker.match_prefix(line)
        if side is not None:
            return username if side == Side.USER else opponent
    return None


def resolve_identity(lines: Sequence, preferred_username: Optional[str] = None) -> PlayerIdentity:
    """Resolve the full point-of-view identity for a log."""
    lines = _as_classified(lines)
    username, opponent = resolve_players(lines, preferred_username)
    first = detect_first_player(lines, username, opponent)
    went_first = True if first is None else first == username

    logger.debug(f"Resolved identity: user={username!r} opponent={opponent!r} went_first={went_first}")
    return PlayerIdentity(username=username, opponent=opponent, went_first=went_first)
