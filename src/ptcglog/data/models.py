"""Data models for analyzed game logs."""
from enum import Enum
from typing import Optional, List
from pydantic import BaseModel, Field

class Side(str, Enum):
    USER = "user"
    OPPONENT = "opponent"

class EventType(str, Enum):
    TURN_BOUNDARY = "turn_boundary"
    PLAY = "play"
    SWITCH = "switch"
    ATTACK = "attack"
    BENCH_KNOCKOUT = "bench_knockout"
    KNOCKOUT = "knockout"
    PRIZE_TAKE = "prize_take"
    CONCESSION = "concession"
    WIN_DECLARED = "win_declared"
    ACE_SPEC_USED = "ace_spec_used"

class GameEvent(BaseModel):
    """A domain event detected on a log line."""
    event_type: EventType
    side: Optional[Side] = None
    name: str = ""  # Pokemon or card name
    value: int = 0  # Turn number, damage, prize count, or 1 for an Active play

class PlayerIdentity(BaseModel):
    """Who is who in a log."""
    username: str = ""
    opponent: str = ""
    went_first: bool = True

    def swapped(self) -> "PlayerIdentity":
        return PlayerIdentity(
            username=self.opponent,
            opponent=self.username,
            went_first=not self.went_first,
        )

class UnitRecord(BaseModel):
    """Running stats for one Pokemon on one side."""
    name: str
    total_damage: int = 0
    turns_on_board: int = 0
    attack_count: int = 0

class Tag(BaseModel):
    text: str
    color: str

class ActionPackedTurns(BaseModel):
    user: int = 0
    opponent: int = 0

class GameSummary(BaseModel):
    """A fully analyzed game."""
    id: str
    date: str
    username: str = ""
    opponent: str = ""
    user_main_attacker: str = "None"
    opponent_main_attacker: str = "None"
    user_other_pokemon: List[str] = Field(default_factory=list)
    opponent_other_pokemon: List[str] = Field(default_factory=list)
    turns: int = 0
    turn_count: int = 0  # Raw half-turn markers seen
    user_won: bool = False
    damage_dealt: int = 0
    user_prize_cards_taken: int = 0
    opponent_prize_cards_taken: int = 0
    raw_log: str = ""
    went_first: bool = True
    user_conceded: bool = False
    opponent_conceded: bool = False
    high_damage_attack_count: int = 0
    bench_knockouts: int = 0
    total_benched_pokemon: int = 0
    weakness_bonus: bool = False
    action_packed_turns: ActionPackedTurns = Field(default_factory=ActionPackedTurns)
    user_ace_specs: List[str] = Field(default_factory=list)
    opponent_ace_specs: List[str] = Field(default_factory=list)
    winner_prize_path: List[str] = Field(default_factory=list)
    user_archetype: Optional[str] = None
    opponent_archetype: Optional[str] = None
    tags: List[Tag] = Field(default_factory=list)

    @property
    def winner(self) -> str:
        return self.username if self.user_won else self.opponent

class GameTurn(BaseModel):
    """Actions of both players in one game turn (0 = setup)."""
    turn_number: int
    user_actions: List[str] = Field(default_factory=list)
    opponent_actions: List[str] = Field(default_factory=list)

    def has_content(self) -> bool:
        return bool(self.user_actions or self.opponent_actions)

class IdentityPreview(BaseModel):
    """Quick look at a log before the full analysis is confirmed."""
    username: str = ""
    opponent: str = ""
    suggested_user_archetype: Optional[str] = None
    suggested_opponent_archetype: Optional[str] = None
    user_main_attacker: str = "None"
    opponent_main_attacker: str = "None"
    all_user_pokemon: List[str] = Field(default_factory=list)
    all_opponent_pokemon: List[str] = Field(default_factory=list)
