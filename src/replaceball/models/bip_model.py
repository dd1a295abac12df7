from __future__ import annotations

from typing import Dict

from ..features.transforms import bias_fraction, clamp, saturating_sub
from ..sampler.rng import Decider
from ..schemas import (
    BaseState,
    HitRecord,
    PitchHeight,
    PitchLocation,
    PitchWidth,
    Player,
    Team,
)
from ..utils.location import MAX_DIRECTION
from . import levels
from .fielding import simulate_fielding
from .stat import Skill


class BipModel:
    """Ball-in-play generator: spray direction, launch angle and exit speed.

    Monotone responses:
    - hitter minus pitcher direction bias pulls the ball toward right field
    - pitch height raises (high) or lowers (low) the launch angle
    - hit speed bias raises exit speed; chasing a ball out of the zone costs 15%
    - launch angles far from the league average lose up to 25% of exit speed
    """

    def __init__(self,
                 direction_bias_range: float = levels.DIRECTION_BIAS_RANGE,
                 width_offset: float = levels.PITCH_WIDTH_OFFSET,
                 launch_offset: float = levels.LAUNCH_OFFSET,
                 ball_contact_factor: float = levels.BALL_CONTACT_SPEED_FACTOR):
        self.direction_bias_range = direction_bias_range
        self.width_offset = width_offset
        self.launch_offset = launch_offset
        self.ball_contact_factor = ball_contact_factor

    def _width_shift(self, width: PitchWidth) -> float:
        return {
            PitchWidth.LEFT: -self.width_offset,
            PitchWidth.CENTER: 0.0,
            PitchWidth.RIGHT: self.width_offset,
        }[width]

    def _height_shift(self, height: PitchHeight) -> float:
        return {
            PitchHeight.HIGH: self.launch_offset,
            PitchHeight.MIDDLE: 0.0,
            PitchHeight.LOW: -self.launch_offset,
        }[height]

    @staticmethod
    def launch_error(launch_angle: float) -> float:
        """Fraction of exit speed lost for missing the sweet spot."""
        miss = abs(launch_angle - levels.HIT_LAUNCH_ANGLE.average) - levels.LAUNCH_ERROR_TOLERANCE
        return clamp(miss / levels.LAUNCH_ERROR_SCALE, 0.0, levels.MAX_LAUNCH_ERROR)

    def predict(self, pitch_location: PitchLocation, is_ball: bool, batter: Player, pitcher: Player,
                decider: Decider) -> Dict[str, float]:
        direction_bias = saturating_sub(batter.hitter_hit_direction_bias, pitcher.pitcher_hit_direction_bias)
        direction = decider.roll_uniform(0.0, MAX_DIRECTION)
        direction += self.direction_bias_range * bias_fraction(direction_bias)
        direction += self._width_shift(pitch_location.width)
        direction = clamp(direction, 0.0, MAX_DIRECTION)

        launch_bias = saturating_sub(batter.hitter_launch_angle_bias, pitcher.pitcher_launch_angle_bias)
        launch_skill = Skill.std_dev_bias_skill(launch_bias, levels.HIT_LAUNCH_ANGLE)
        launch_angle = decider.roll_stat(levels.HIT_LAUNCH_ANGLE, launch_skill)
        launch_angle = levels.HIT_LAUNCH_ANGLE.clamp(launch_angle + self._height_shift(pitch_location.height))

        speed_bias = saturating_sub(batter.hitter_hit_speed_bias, pitcher.pitcher_hit_speed_bias)
        exit_speed = decider.roll_std_dev_skill_stat(levels.HIT_EXIT_SPEED, speed_bias)
        if is_ball:
            exit_speed *= self.ball_contact_factor
        exit_speed *= 1.0 - self.launch_error(launch_angle)

        return {
            "direction": float(direction),
            "launch_angle": float(launch_angle),
            "exit_speed": float(exit_speed),
        }


_MODEL = BipModel()


def simulate_hit(pitch_location: PitchLocation,
                 is_ball: bool,
                 batter_index: int,
                 batting_team: Team,
                 fielding_team: Team,
                 decider: Decider,
                 base_state: BaseState,
                 outs: int = 0) -> HitRecord:
    batter = batting_team.player_at_batting_index(batter_index)
    contact = _MODEL.predict(pitch_location, is_ball, batter, fielding_team.pitcher(), decider)
    outcome = simulate_fielding(
        contact["direction"],
        contact["launch_angle"],
        contact["exit_speed"],
        batter_index,
        batting_team,
        fielding_team,
        base_state,
        decider,
        outs=outs,
    )
    return HitRecord(outcome=outcome, **contact)
