from __future__ import annotations

from enum import Enum, IntEnum
from typing import Annotated, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .utils.location import Location

COUNT_INNINGS = 9
OUTS_PER_HALF_INNING = 3
BALLS_PER_WALK = 4
STRIKES_PER_STRIKEOUT = 3
PLAYERS_PER_LINEUP = 9

Bias = Annotated[int, Field(ge=-128, le=127)]

# Occupant batting index (or None) for first, second and third base.
BaseState = Tuple[Optional[int], Optional[int], Optional[int]]
EMPTY_BASES: BaseState = (None, None, None)


class Base(IntEnum):
    FIRST = 0
    SECOND = 1
    THIRD = 2
    HOME = 3


class Fielder(IntEnum):
    CATCHER = 0
    PITCHER = 1
    FIRST_BASE = 2
    SECOND_BASE = 3
    THIRD_BASE = 4
    SHORTSTOP = 5
    LEFT_FIELDER = 6
    CENTER_FIELDER = 7
    RIGHT_FIELDER = 8

    def starting_location(self) -> Location:
        direction, distance = _STARTING_SPOTS[self]
        return Location(direction=direction, distance=distance)

    @property
    def code(self) -> str:
        return _CODES[self]

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @classmethod
    def from_code(cls, code: str) -> "Fielder":
        key = str(code).strip().upper()
        for fielder, c in _CODES.items():
            if c == key:
                return fielder
        raise ValueError(f"unknown position code: {code!r}")

    def __str__(self) -> str:
        return self.display_name


_STARTING_SPOTS = {
    Fielder.CATCHER: (0.0, 0.0),
    Fielder.PITCHER: (45.0, 60.5),
    Fielder.FIRST_BASE: (83.5, 105.0),
    Fielder.SECOND_BASE: (57.5, 125.0),
    Fielder.THIRD_BASE: (6.5, 105.0),
    Fielder.SHORTSTOP: (32.5, 125.0),
    Fielder.LEFT_FIELDER: (19.5, 255.0),
    Fielder.CENTER_FIELDER: (45.0, 255.0),
    Fielder.RIGHT_FIELDER: (70.5, 255.0),
}

_CODES = {
    Fielder.CATCHER: "C",
    Fielder.PITCHER: "P",
    Fielder.FIRST_BASE: "1B",
    Fielder.SECOND_BASE: "2B",
    Fielder.THIRD_BASE: "3B",
    Fielder.SHORTSTOP: "SS",
    Fielder.LEFT_FIELDER: "LF",
    Fielder.CENTER_FIELDER: "CF",
    Fielder.RIGHT_FIELDER: "RF",
}

_DISPLAY_NAMES = {
    Fielder.CATCHER: "Catcher",
    Fielder.PITCHER: "Pitcher",
    Fielder.FIRST_BASE: "First Baseman",
    Fielder.SECOND_BASE: "Second Baseman",
    Fielder.THIRD_BASE: "Third Baseman",
    Fielder.SHORTSTOP: "Shortstop",
    Fielder.LEFT_FIELDER: "Left Fielder",
    Fielder.CENTER_FIELDER: "Center Fielder",
    Fielder.RIGHT_FIELDER: "Right Fielder",
}


class HitType(str, Enum):
    OUT = "out"
    FIELDERS_CHOICE = "fielders_choice"
    SINGLE = "single"
    DOUBLE = "double"
    TRIPLE = "triple"
    HOME_RUN = "home_run"

    @property
    def is_hit(self) -> bool:
        return self not in (HitType.OUT, HitType.FIELDERS_CHOICE)


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


# Players and teams

class Player(_Frozen):
    name: Optional[str] = None
    jersey_number: str = "0"

    pitch_height_bias: Bias = 0
    pitch_width_bias: Bias = 0
    pitch_strike_bias: Bias = 0

    # pitcher side of each batter/pitcher matchup
    pitcher_swing_on_ball_bias: Bias = 0
    pitcher_contact_on_ball_bias: Bias = 0
    pitcher_foul_on_ball_contact_bias: Bias = 0
    pitcher_swing_on_strike_bias: Bias = 0
    pitcher_contact_on_strike_bias: Bias = 0
    pitcher_foul_on_strike_contact_bias: Bias = 0
    pitcher_hit_direction_bias: Bias = 0
    pitcher_launch_angle_bias: Bias = 0
    pitcher_hit_speed_bias: Bias = 0

    hitter_swing_on_ball_bias: Bias = 0
    hitter_contact_on_ball_bias: Bias = 0
    hitter_foul_on_ball_contact_bias: Bias = 0
    hitter_swing_on_strike_bias: Bias = 0
    hitter_contact_on_strike_bias: Bias = 0
    hitter_foul_on_strike_contact_bias: Bias = 0
    hitter_hit_direction_bias: Bias = 0
    hitter_launch_angle_bias: Bias = 0
    hitter_hit_speed_bias: Bias = 0

    fielder_run_speed_bias: Bias = 0
    fielder_reaction_time_bias: Bias = 0
    fielder_throw_speed_bias: Bias = 0
    fielder_transfer_time_bias: Bias = 0

    baserunner_run_speed_bias: Bias = 0
    baserunner_box_exit_time_bias: Bias = 0
    baserunner_takeoff_delay_bias: Bias = 0


BIAS_FIELDS = tuple(name for name in Player.model_fields if name.endswith("_bias"))

DEFAULT_BATTING_ORDER: Tuple[Fielder, ...] = tuple(Fielder)


class Team(_Frozen):
    """Nine players indexed by `Fielder` plus the order they bat in."""

    name: Optional[str] = None
    fielders: Tuple[Player, ...]
    batting_order: Tuple[Fielder, ...] = DEFAULT_BATTING_ORDER

    @field_validator("fielders")
    @classmethod
    def _nine_fielders(cls, v):
        if len(v) != PLAYERS_PER_LINEUP:
            raise ValueError(f"a team needs {PLAYERS_PER_LINEUP} fielders, got {len(v)}")
        return v

    @field_validator("batting_order")
    @classmethod
    def _order_is_permutation(cls, v):
        if sorted(v) != list(Fielder):
            raise ValueError("batting order must list every position exactly once")
        return v

    @classmethod
    def default(cls, name: Optional[str] = None) -> "Team":
        return cls(
            name=name,
            fielders=tuple(Player(jersey_number=str(i)) for i in range(PLAYERS_PER_LINEUP)),
        )

    def player_at_batting_index(self, index: int) -> Player:
        return self.fielders[self.batting_order[index % PLAYERS_PER_LINEUP]]

    def player_at_position(self, fielder: Fielder) -> Player:
        return self.fielders[fielder]

    def pitcher(self) -> Player:
        return self.player_at_position(Fielder.PITCHER)


# Pitches

class PitchHeight(str, Enum):
    HIGH = "high"
    MIDDLE = "middle"
    LOW = "low"


class PitchWidth(str, Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class PitchLocation(_Frozen):
    height: PitchHeight
    width: PitchWidth

    @property
    def is_center(self) -> bool:
        return self.height == PitchHeight.MIDDLE and self.width == PitchWidth.CENTER


class PitchOutcome(_Frozen):
    kind: Literal["strike", "ball", "foul", "hit"]
    swinging: Optional[bool] = None
    was_on_a_ball: Optional[bool] = None

    @classmethod
    def strike(cls, swinging: bool) -> "PitchOutcome":
        return cls(kind="strike", swinging=swinging)

    @classmethod
    def ball(cls) -> "PitchOutcome":
        return cls(kind="ball")

    @classmethod
    def foul(cls) -> "PitchOutcome":
        return cls(kind="foul")

    @classmethod
    def hit(cls, was_on_a_ball: bool) -> "PitchOutcome":
        return cls(kind="hit", was_on_a_ball=was_on_a_ball)


class PitchRecord(_Frozen):
    location: PitchLocation
    outcome: PitchOutcome


# Fielding and base running

class FieldingEvent(_Frozen):
    location: Location
    # seconds since contact
    travel_time: float


class FieldingPlay(_Frozen):
    from_fielder: Fielder
    from_event: FieldingEvent
    to_fielder: Fielder
    to_event: FieldingEvent
    base: Base


class BallLanding(_Frozen):
    """Either caught in the air (`out`) or fielded off the ground and thrown."""

    kind: Literal["out", "landed"]
    location: Location
    fielder: Optional[Fielder] = None
    play: Optional[FieldingPlay] = None

    @classmethod
    def caught(cls, fielder: Fielder, location: Location) -> "BallLanding":
        return cls(kind="out", fielder=fielder, location=location)

    @classmethod
    def landed(cls, location: Location, play: FieldingPlay) -> "BallLanding":
        return cls(kind="landed", location=location, play=play)


class MoveType(_Frozen):
    kind: Literal["out", "advanced"]
    # base the runner was put out at, or number of bases advanced
    value: int

    @classmethod
    def out(cls, base: Base) -> "MoveType":
        return cls(kind="out", value=int(base))

    @classmethod
    def advanced(cls, bases: int) -> "MoveType":
        return cls(kind="advanced", value=bases)


class BaseMovement(_Frozen):
    # None for the batter
    starting_base: Optional[Base] = None
    bases_moved: MoveType

    @property
    def is_out(self) -> bool:
        return self.bases_moved.kind == "out"

    @property
    def ending_base(self) -> Optional[int]:
        if self.is_out:
            return None
        start = -1 if self.starting_base is None else int(self.starting_base)
        return start + self.bases_moved.value

    @property
    def scores(self) -> bool:
        end = self.ending_base
        return end is not None and end >= Base.HOME


class BaseRunningOutcome(_Frozen):
    outs_made: int
    runs_scored: int
    batter_hit_type: HitType
    ending_base_state: BaseState


class BaseRunningRecord(_Frozen):
    movements: Tuple[BaseMovement, ...]
    outcome: BaseRunningOutcome


class FieldingRecord(_Frozen):
    landing: BallLanding
    base_running_record: BaseRunningRecord


# Hits

class HitOutcome(_Frozen):
    kind: Literal["in_play", "home_run"]
    fielding: Optional[FieldingRecord] = None

    @classmethod
    def in_play(cls, record: FieldingRecord) -> "HitOutcome":
        return cls(kind="in_play", fielding=record)

    @classmethod
    def home_run(cls) -> "HitOutcome":
        return cls(kind="home_run")

    def hit_type(self) -> HitType:
        if self.kind == "home_run":
            return HitType.HOME_RUN
        if self.fielding.landing.kind == "out":
            return HitType.OUT
        return self.fielding.base_running_record.outcome.batter_hit_type


class HitRecord(_Frozen):
    direction: float
    launch_angle: float
    exit_speed: float
    outcome: HitOutcome


# At-bats and innings

class AtBatProgress(_Frozen):
    balls: int = 0
    strikes: int = 0


class AtBatOutcome(_Frozen):
    outcome_type: Literal["hit", "walk", "out"]
    hit: Optional[HitRecord] = None


class AtBatRecord(_Frozen):
    batter_index: int
    player: Player
    pitches: Tuple[Tuple[PitchRecord, AtBatProgress], ...]
    outcome: AtBatOutcome


class HalfInningProgress(_Frozen):
    bases: BaseState = EMPTY_BASES
    score_change: int = 0
    outs: int = 0


class HalfInningOutcome(_Frozen):
    runs_scored: int
    total_hits: int
    walks: int = 0
    strikeouts: int = 0


class HalfInningRecord(_Frozen):
    at_bats: Tuple[Tuple[AtBatRecord, HalfInningProgress], ...]
    outcome: HalfInningOutcome


class InningOutcome(_Frozen):
    away: HalfInningOutcome
    home: HalfInningOutcome


class InningRecord(_Frozen):
    away: HalfInningRecord
    home: HalfInningRecord
    outcome: InningOutcome


class GameOutcome(_Frozen):
    home_score: int
    home_hits: int
    away_score: int
    away_hits: int


GameProgress = GameOutcome


class GameRecord(_Frozen):
    innings: Tuple[Tuple[InningRecord, GameProgress], ...]
    outcome: GameOutcome
