"""Event extraction for TCG Live game logs."""
import re
import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence

from ..catalog.models import Catalog
from ..config import AnalyzerConfig
from .lines import ClassifiedLine, OwnershipTracker, classify_line, strip_owner_prefix
from .models import ActionPackedTurns, EventType, GameEvent, PlayerIdentity, Side, UnitRecord

logger = logging.getLogger(__name__)

# Regex patterns for log parsing, matched against the owner-stripped text
PATTERNS = {
    "prize_single": re.compile(r"took a Prize card\.", re.IGNORECASE),
    "prize_multiple": re.compile(r"took (\w+) Prize cards?", re.IGNORECASE),
    "play_active": re.compile(r"played (.+?) to the Active Spot", re.IGNORECASE),
    "draw_bench": re.compile(r"drew (.+?) and played it to the Bench", re.IGNORECASE),
    "play_bench": re.compile(r"played (.+?) (?:to|onto) the Bench", re.IGNORECASE),
    "switch": re.compile(r"^(.+?) is now in the Active Spot", re.IGNORECASE),
    "attacker": re.compile(r"^(.+?) used\b", re.IGNORECASE),
    "damage": re.compile(r"for (\d+) damage", re.IGNORECASE),
    "knockout": re.compile(r"^(?:(.+?)['’]s\s+)?(.+?) was Knocked Out", re.IGNORECASE),
    "result": re.compile(r"\b(?:wins|conceded)\b", re.IGNORECASE),
}

SUPER_EFFECTIVE = "It's super effective!"
ACTION_BULLET = "•"


@dataclass
class LineContext:
    """One line as seen by the matchers."""
    line: ClassifiedLine
    owner: Optional[Side]
    text: str  # owner prefix and bullet marker stripped


@dataclass
class ExtractorState:
    """Everything carried across the line walk."""
    current_turn: int = 0
    raw_turn_count: int = 0
    max_turn: int = 0
    user_active: str = ""
    opponent_active: str = ""
    user_units: Dict[str, UnitRecord] = field(default_factory=dict)
    opponent_units: Dict[str, UnitRecord] = field(default_factory=dict)
    user_prizes: int = 0
    opponent_prizes: int = 0
    high_damage_attack_count: int = 0
    bench_knockouts: int = 0
    total_benched_pokemon: int = 0
    weakness_bonus: bool = False
    action_packed: ActionPackedTurns = field(default_factory=ActionPackedTurns)
    user_ace_specs: Dict[str, None] = field(default_factory=dict)
    opponent_ace_specs: Dict[str, None] = field(default_factory=dict)
    user_won: bool = False
    opponent_won: bool = False
    user_conceded: bool = False
    opponent_conceded: bool = False
    events: List[GameEvent] = field(default_factory=list)

    def units(self, side: Side) -> Dict[str, UnitRecord]:
        return self.user_units if side == Side.USER else self.opponent_units

    def get_unit(self, side: Side, name: str) -> UnitRecord:
        units = self.units(side)
        if name not in units:
            units[name] = UnitRecord(name=name)
        return units[name]

    def set_active(self, side: Side, name: str) -> None:
        if side == Side.USER:
            self.user_active = name
        else:
            self.opponent_active = name


@dataclass
class ExtractionResult:
    """Final state of one extraction pass."""
    identity: PlayerIdentity
    state: ExtractorState

    @property
    def turns(self) -> int:
        return (self.state.max_turn + 1) // 2

    @property
    def events(self) -> List[GameEvent]:
        return self.state.events

    def main_attacker(self, side: Side) -> str:
        return select_main_attacker(self.state.units(side).values())

    def observed_units(self, side: Side) -> List[str]:
        return list(self.state.units(side).keys())

    def winner_side(self) -> Optional[Side]:
        if self.state.user_won:
            return Side.USER
        if self.state.opponent_won:
            return Side.OPPONENT
        return None

    def damage_dealt(self, side: Side = Side.USER) -> int:
        return sum(u.total_damage for u in self.state.units(side).values())


def select_main_attacker(units) -> str:
    """Most attacks, then most board presence, then most damage.

    Ties keep the first-seen unit. Returns "None" for an empty side.
    """
    units = list(units)
    if not units:
        return "None"
    best = max(units, key=lambda u: (u.attack_count, u.turns_on_board, u.total_damage))
    return best.name


def _parse_int(value: str, default: int) -> int:
    if value.lower() in ("a", "an"):
        return 1
    try:
        return int(value)
    except ValueError:
        return default


class EventExtractor:
    """Walk a classified log and fold its events into an ExtractorState."""

    def __init__(
        self,
        identity: PlayerIdentity,
        catalog: Catalog,
        config: Optional[AnalyzerConfig] = None,
    ):
        self.identity = identity
        self.catalog = catalog
        self.config = config or AnalyzerConfig()

        # Order matters: several matchers may fire on the same line
        self._matchers: tuple[Callable[[LineContext], List[GameEvent]], ...] = (
            self._match_turn,
            self._match_ace_spec,
            self._match_prize,
            self._match_play,
            self._match_switch,
            self._match_attack,
            self._match_knockout,
        )

    def extract(self, lines: Sequence) -> ExtractionResult:
        """Extract events and stats from log lines.

        Args:
            lines: Raw or classified lines, in log order

        Returns:
            ExtractionResult with the final state
        """
        state = ExtractorState()
        tracker = OwnershipTracker(self.identity)

        for raw in lines:
            line = raw if isinstance(raw, ClassifiedLine) else classify_line(raw)
            self._process_line(state, tracker, line)

        logger.debug(
            f"Extracted {len(state.events)} events over {state.raw_turn_count} half-turns "
            f"({len(state.user_units)} user / {len(state.opponent_units)} opponent units)"
        )
        return ExtractionResult(identity=self.identity, state=state)

    def _process_line(self, state: ExtractorState, tracker: OwnershipTracker, line: ClassifiedLine) -> None:
        """Process a single log line."""
        owner, text = tracker.resolve(line)
        ctx = LineContext(line=line, owner=owner, text=text)

        for matcher in self._matchers:
            for event in matcher(ctx):
                self._apply(state, event)

        # Flags that are not events of their own
        if SUPER_EFFECTIVE in line.text:
            state.weakness_bonus = True

        if line.text.count(ACTION_BULLET) > self.config.action_packed_bullets:
            if owner == Side.USER:
                state.action_packed.user += 1
            elif owner == Side.OPPONENT:
                state.action_packed.opponent += 1

        if PATTERNS["result"].search(line.text):
            self._apply_result(state, self._match_result(ctx))

        if self.config.board_presence == "line" or line.is_turn_marker:
            self._tick_board(state)

    # Matchers

    def _match_turn(self, ctx: LineContext) -> List[GameEvent]:
        if not ctx.line.is_turn_marker:
            return []
        return [GameEvent(event_type=EventType.TURN_BOUNDARY, value=ctx.line.turn or 0)]

    def _match_ace_spec(self, ctx: LineContext) -> List[GameEvent]:
        # Bullet continuations list revealed cards, not played ones
        if ctx.owner is None or ctx.line.is_bullet:
            return []
        return [
            GameEvent(event_type=EventType.ACE_SPEC_USED, side=ctx.owner, name=card)
            for card in self.catalog.ace_specs
            if card in ctx.line.text
        ]

    def _match_prize(self, ctx: LineContext) -> List[GameEvent]:
        if ctx.owner is None:
            return []
        if PATTERNS["prize_single"].search(ctx.text):
            count = 1
        elif match := PATTERNS["prize_multiple"].search(ctx.text):
            count = _parse_int(match.group(1), 1)
        else:
            return []
        return [GameEvent(event_type=EventType.PRIZE_TAKE, side=ctx.owner, value=count)]

    def _match_play(self, ctx: LineContext) -> List[GameEvent]:
        if match := PATTERNS["play_active"].search(ctx.text):
            name, active = match.group(1), 1
        elif match := PATTERNS["draw_bench"].search(ctx.text):
            name, active = match.group(1), 0
        elif match := PATTERNS["play_bench"].search(ctx.text):
            name, active = match.group(1), 0
        else:
            return []
        return [GameEvent(
            event_type=EventType.PLAY,
            side=ctx.owner,
            name=strip_owner_prefix(name),
            value=active,
        )]

    def _match_switch(self, ctx: LineContext) -> List[GameEvent]:
        if match := PATTERNS["switch"].match(ctx.text):
            return [GameEvent(
                event_type=EventType.SWITCH,
                side=ctx.owner,
                name=strip_owner_prefix(match.group(1)),
            )]
        return []

    def _match_attack(self, ctx: LineContext) -> List[GameEvent]:
        text = ctx.text
        if not ("used" in text and "for" in text and "damage" in text):
            return []
        attacker = PATTERNS["attacker"].match(text)
        damage = PATTERNS["damage"].search(text)
        if not attacker or not damage:
            return []
        return [GameEvent(
            event_type=EventType.ATTACK,
            side=ctx.owner,
            name=strip_owner_prefix(attacker.group(1)),
            value=_parse_int(damage.group(1), 0),
        )]

    def _match_knockout(self, ctx: LineContext) -> List[GameEvent]:
        match = PATTERNS["knockout"].match(ctx.line.body)
        if not match:
            return []
        owner_name = (match.group(1) or "").strip()
        victim_side = None
        if owner_name and owner_name == self.identity.username:
            victim_side = Side.USER
        elif owner_name and owner_name == self.identity.opponent:
            victim_side = Side.OPPONENT
        events = [GameEvent(
            event_type=EventType.KNOCKOUT,
            side=victim_side,
            name=strip_owner_prefix(match.group(2)),
        )]
        if "on the Bench" in ctx.line.text:
            events.append(GameEvent(event_type=EventType.BENCH_KNOCKOUT, side=victim_side))
        return events

    def _match_result(self, ctx: LineContext) -> List[GameEvent]:
        text = ctx.line.text
        username = self.identity.username
        opponent = self.identity.opponent
        events = []

        if (username and f"{username} conceded" in text) or "You conceded." in text:
            events.append(GameEvent(event_type=EventType.CONCESSION, side=Side.USER))
        if (opponent and f"{opponent} conceded" in text) or "Opponent conceded." in text:
            events.append(GameEvent(event_type=EventType.CONCESSION, side=Side.OPPONENT))
        if username and f"{username} wins" in text:
            events.append(GameEvent(event_type=EventType.WIN_DECLARED, side=Side.USER))
        elif opponent and f"{opponent} wins" in text:
            events.append(GameEvent(event_type=EventType.WIN_DECLARED, side=Side.OPPONENT))
        return events

    # State updates

    def _apply(self, state: ExtractorState, event: GameEvent) -> None:
        state.events.append(event)
        side = event.side

        if event.event_type == EventType.TURN_BOUNDARY:
            state.current_turn = event.value
            state.raw_turn_count += 1
            state.max_turn = max(state.max_turn, event.value)

        elif event.event_type == EventType.ACE_SPEC_USED:
            specs = state.user_ace_specs if side == Side.USER else state.opponent_ace_specs
            specs.setdefault(event.name, None)

        elif event.event_type == EventType.PRIZE_TAKE:
            if side == Side.USER:
                state.user_prizes += event.value
            elif side == Side.OPPONENT:
                state.opponent_prizes += event.value

        elif event.event_type == EventType.PLAY:
            if not event.value:
                state.total_benched_pokemon += 1
            if side is not None and event.name:
                state.get_unit(side, event.name)
                if event.value:
                    state.set_active(side, event.name)

        elif event.event_type == EventType.SWITCH:
            if side is not None and event.name:
                state.get_unit(side, event.name)
                state.set_active(side, event.name)

        elif event.event_type == EventType.ATTACK:
            if event.value > self.config.high_damage_threshold:
                state.high_damage_attack_count += 1
            if side is not None and event.name:
                unit = state.get_unit(side, event.name)
                unit.total_damage += event.value
                unit.attack_count += 1

        elif event.event_type == EventType.BENCH_KNOCKOUT:
            state.bench_knockouts += 1

    def _apply_result(self, state: ExtractorState, events: List[GameEvent]) -> None:
        """The latest result line decides the outcome flags."""
        state.events.extend(events)
        conceded = {e.side for e in events if e.event_type == EventType.CONCESSION}
        declared = {e.side for e in events if e.event_type == EventType.WIN_DECLARED}
        state.user_conceded = Side.USER in conceded
        state.opponent_conceded = Side.OPPONENT in conceded
        state.user_won = Side.USER in declared or state.opponent_conceded
        state.opponent_won = Side.OPPONENT in declared or state.user_conceded

    def _tick_board(self, state: ExtractorState) -> None:
        if state.user_active and state.user_active in state.user_units:
            state.user_units[state.user_active].turns_on_board += 1
        if state.opponent_active and state.opponent_active in state.opponent_units:
            state.opponent_units[state.opponent_active].turns_on_board += 1
