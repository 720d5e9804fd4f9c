"""Line splitting, classification and ownership for TCG Live logs."""
import re
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from .models import PlayerIdentity, Side

TURN_PATTERN = re.compile(r"^Turn\s*#\s*(\d+)")
BULLET_PATTERN = re.compile(r"^[-•]\s*")
OWNER_PREFIX_PATTERN = re.compile(r"^[^'’]+['’]s\s+")
PLACEHOLDER_NAMES = ("You", "Opponent")


class LineKind(str, Enum):
    TURN_MARKER = "turn_marker"
    BULLET = "bullet"
    STATEMENT = "statement"


@dataclass(frozen=True)
class ClassifiedLine:
    """A trimmed, non-empty log line."""
    text: str
    kind: LineKind
    body: str  # text without the bullet marker
    turn: Optional[int] = None

    @property
    def is_bullet(self) -> bool:
        return self.kind == LineKind.BULLET

    @property
    def is_turn_marker(self) -> bool:
        return self.kind == LineKind.TURN_MARKER


def split_lines(text: str) -> List[str]:
    """Split a raw log into trimmed, non-empty lines."""
    return [line.strip() for line in re.split(r"\r?\n", text) if line.strip()]


def classify_line(text: str) -> ClassifiedLine:
    """Classify a single trimmed line."""
    if match := TURN_PATTERN.match(text):
        try:
            turn = int(match.group(1))
        except ValueError:
            turn = 0
        return ClassifiedLine(text=text, kind=LineKind.TURN_MARKER, body=text, turn=turn)

    if BULLET_PATTERN.match(text):
        return ClassifiedLine(text=text, kind=LineKind.BULLET, body=BULLET_PATTERN.sub("", text, count=1))

    return ClassifiedLine(text=text, kind=LineKind.STATEMENT, body=text)


def classify_log(text: str) -> List[ClassifiedLine]:
    return [classify_line(line) for line in split_lines(text)]


def strip_owner_prefix(name: str) -> str:
    """Drop a leading owner, e.g. "Alice's Pikachu" -> "Pikachu"."""
    return OWNER_PREFIX_PATTERN.sub("", name, count=1).strip()


def normalize_name(text: str) -> str:
    """Loose comparison key: lowercase alphanumerics and single spaces."""
    text = text.lower().replace("’", "'")
    text = re.sub(r"[^a-z0-9\s]", "", text)
    return re.sub(r"\s+", " ", text).strip()


def _prefix_pattern(name: str) -> Optional[re.Pattern]:
    if not name:
        return None
    return re.compile(rf"^{re.escape(name)}(?:['’]s)?(?=\s|$)")


def _possessive_pattern(name: str) -> Optional[re.Pattern]:
    if not name:
        return None
    return re.compile(rf"^{re.escape(name)}['’]s\s")


class OwnershipTracker:
    """Attribute lines to the user or the opponent.

    A line that starts with a player's name belongs to that player and
    makes them the last actor. Bullet continuations inherit the last
    actor unless their body names an owner ("Bob's Squirtle ..."), as
    after Boss's Orders. Turn markers clear it.
    """

    def __init__(self, identity: PlayerIdentity):
        self._patterns = [
            (Side.USER, _prefix_pattern(identity.username)),
            (Side.OPPONENT, _prefix_pattern(identity.opponent)),
        ]
        self._possessives = [
            (Side.USER, _possessive_pattern(identity.username)),
            (Side.OPPONENT, _possessive_pattern(identity.opponent)),
        ]
        self.last_actor: Optional[Side] = None

    def reset(self) -> None:
        self.last_actor = None

    def match_prefix(self, line: ClassifiedLine) -> tuple[Optional[Side], str]:
        """Return the side whose name prefixes the line and the remaining text."""
        for side, pattern in self._patterns:
            if pattern is None:
                continue
            if match := pattern.match(line.text):
                return side, line.text[match.end():].strip()
        return None, line.body

    def named_owner(self, line: ClassifiedLine) -> Optional[Side]:
        """Side named by a bullet body's "<name>'s" prefix, if any."""
        if not line.is_bullet:
            return None
        for side, pattern in self._possessives:
            if pattern is not None and pattern.match(line.body):
                return side
        return None

    def resolve(self, line: ClassifiedLine) -> tuple[Optional[Side], str]:
        """Return (owner, text with the owner prefix stripped)."""
        if line.is_turn_marker:
            self.reset()
            return None, line.body

        side, rest = self.match_prefix(line)
        if side is not None:
            self.last_actor = side
            return side, rest

        if line.is_bullet:
            return self.named_owner(line) or self.last_actor, line.body

        return None, line.body
