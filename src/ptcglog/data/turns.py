"""Group log lines into per-turn action lists for replay display."""
import re
import logging
from typing import List, Optional

from .lines import ClassifiedLine, OwnershipTracker, classify_log
from .models import GameTurn, PlayerIdentity, Side

logger = logging.getLogger(__name__)

CONCEDED_PATTERN = re.compile(r"\bconceded\b")
WINS_PATTERN = re.compile(r"\bwins\b")

USER_CONCEDED = "You conceded the game"
OPPONENT_CONCEDED = "Opponent conceded the game"
WON_BY_CONCESSION = "You won by opponent's concession"
LOST_BY_CONCESSION = "Opponent won by your concession"
WON_BY_PRIZES = "You won by taking all prize cards"
LOST_BY_PRIZES = "Opponent won by taking all prize cards"


class TurnSegmenter:
    """Split a log into GameTurn buckets from one player's point of view."""

    def __init__(self, identity: PlayerIdentity):
        self.identity = identity

    def segment(self, raw_log: str) -> List[GameTurn]:
        """Segment a raw log into turns, with setup as turn 0."""
        tracker = OwnershipTracker(self.identity)
        setup = GameTurn(turn_number=0)
        turns: List[GameTurn] = []
        current: Optional[GameTurn] = None
        current_game_turn = 0
        in_setup = True
        end_message = ""

        for line in classify_log(raw_log):
            if line.is_turn_marker:
                tracker.resolve(line)
                in_setup = False
                game_turn = ((line.turn or 0) + 1) // 2
                if game_turn != current_game_turn or current is None:
                    if current is not None and current.has_content():
                        turns.append(current)
                    current_game_turn = game_turn
                    current = GameTurn(turn_number=game_turn)
                continue

            bucket = setup if in_setup else current
            if bucket is None:
                bucket = current = GameTurn(turn_number=current_game_turn)

            if CONCEDED_PATTERN.search(line.text):
                message = self._on_concession(line, bucket)
                if message:
                    end_message = message
                    continue

            if WINS_PATTERN.search(line.text):
                message = self._on_win(line)
                if message:
                    end_message = end_message or message
                    continue

            if in_setup:
                self._add_setup_action(tracker, line, setup)
            else:
                side, text = tracker.resolve(line)
                self._add_action(bucket, side, text)

        if setup.has_content():
            turns.insert(0, setup)

        final = current if current is not None else (setup if setup.has_content() else None)
        if end_message and final is not None:
            if end_message.startswith("You won"):
                final.user_actions.append(end_message)
            else:
                final.opponent_actions.append(end_message)

        if current is not None and current.has_content():
            turns.append(current)

        logger.debug(f"Segmented log into {len(turns)} turns")
        return turns

    def _add_setup_action(self, tracker: OwnershipTracker, line: ClassifiedLine, setup: GameTurn) -> None:
        side, text = tracker.match_prefix(line)
        if side is None:
            side = tracker.named_owner(line)
        if side is None and line.is_bullet:
            # Continuations go to whoever has done more so far
            if len(setup.user_actions) > len(setup.opponent_actions):
                side = Side.USER
            else:
                side = Side.OPPONENT
        self._add_action(setup, side, text)

    @staticmethod
    def _add_action(turn: GameTurn, side: Optional[Side], text: str) -> None:
        if side == Side.USER:
            turn.user_actions.append(text)
        elif side == Side.OPPONENT:
            turn.opponent_actions.append(text)

    def _on_concession(self, line: ClassifiedLine, turn: GameTurn) -> str:
        text = line.text
        username = self.identity.username
        opponent = self.identity.opponent

        if text.startswith("Opponent conceded") or (opponent and f"{opponent} conceded" in text):
            turn.opponent_actions.append(OPPONENT_CONCEDED)
            return WON_BY_CONCESSION
        if text.startswith("You conceded") or (username and f"{username} conceded" in text):
            turn.user_actions.append(USER_CONCEDED)
            return LOST_BY_CONCESSION
        return ""

    def _on_win(self, line: ClassifiedLine) -> str:
        text = line.text
        if self.identity.username and f"{self.identity.username} wins" in text:
            return WON_BY_PRIZES
        if self.identity.opponent and f"{self.identity.opponent} wins" in text:
            return LOST_BY_PRIZES
        return ""
