from __future__ import annotations

from typing import Dict

from ..features.transforms import saturating_neg, saturating_sub
from ..sampler.rng import Decider, flip_threshold
from ..schemas import PitchHeight, PitchLocation, PitchOutcome, PitchRecord, PitchWidth, Player
from . import levels

# A pitch called a ball can't sit in the heart of the zone.
BALL_RELOCATION = PitchLocation(height=PitchHeight.LOW, width=PitchWidth.LEFT)


class PitchEngine:
    """Location and ball/strike/foul/in-play outcome of a single pitch.

    Each branch is a Bernoulli draw at a league rate, nudged by the
    batter-minus-pitcher bias for that branch.
    """

    @staticmethod
    def _branch_biases(batter: Player, pitcher: Player, on_ball: bool) -> Dict[str, int]:
        if on_ball:
            return {
                "swing": saturating_sub(batter.hitter_swing_on_ball_bias, pitcher.pitcher_swing_on_ball_bias),
                "contact": saturating_sub(batter.hitter_contact_on_ball_bias, pitcher.pitcher_contact_on_ball_bias),
                "foul": saturating_sub(batter.hitter_foul_on_ball_contact_bias, pitcher.pitcher_foul_on_ball_contact_bias),
            }
        return {
            "swing": saturating_sub(batter.hitter_swing_on_strike_bias, pitcher.pitcher_swing_on_strike_bias),
            "contact": saturating_sub(batter.hitter_contact_on_strike_bias, pitcher.pitcher_contact_on_strike_bias),
            "foul": saturating_sub(batter.hitter_foul_on_strike_contact_bias, pitcher.pitcher_foul_on_strike_contact_bias),
        }

    @staticmethod
    def _branch_rates(on_ball: bool) -> Dict[str, float]:
        if on_ball:
            return {
                "swing": levels.SWINGS_PER_BALL,
                "contact": levels.CONTACTS_PER_BALL_SWING,
                "foul": levels.FOULS_PER_BALL_CONTACT,
            }
        return {
            "swing": levels.SWINGS_PER_STRIKE,
            "contact": levels.CONTACTS_PER_STRIKE_SWING,
            "foul": levels.FOULS_PER_STRIKE_CONTACT,
        }

    def probabilities(self, batter: Player, pitcher: Player) -> Dict[str, float]:
        """Effective branch probabilities after biases, each within [0, 1]."""
        p = {"ball": flip_threshold(levels.BALLS_PER_PITCH, saturating_neg(pitcher.pitch_strike_bias))}
        for on_ball, prefix in ((True, "ball"), (False, "strike")):
            rates = self._branch_rates(on_ball)
            biases = self._branch_biases(batter, pitcher, on_ball)
            for branch in ("swing", "contact", "foul"):
                p[f"{branch}_on_{prefix}"] = flip_threshold(rates[branch], biases[branch])
        return p

    def pitch(self, decider: Decider, batter: Player, pitcher: Player) -> PitchRecord:
        location = decider.roll_pitch_location(pitcher.pitch_height_bias, pitcher.pitch_width_bias)
        is_ball = decider.flip(levels.BALLS_PER_PITCH, saturating_neg(pitcher.pitch_strike_bias))
        if is_ball and location.is_center:
            location = BALL_RELOCATION

        rates = self._branch_rates(is_ball)
        biases = self._branch_biases(batter, pitcher, is_ball)

        if not decider.flip(rates["swing"], biases["swing"]):
            outcome = PitchOutcome.ball() if is_ball else PitchOutcome.strike(swinging=False)
        elif not decider.flip(rates["contact"], biases["contact"]):
            outcome = PitchOutcome.strike(swinging=True)
        elif decider.flip(rates["foul"], biases["foul"]):
            outcome = PitchOutcome.foul()
        else:
            outcome = PitchOutcome.hit(was_on_a_ball=is_ball)

        return PitchRecord(location=location, outcome=outcome)


_ENGINE = PitchEngine()


def simulate_pitch(decider: Decider, batter: Player, pitcher: Player) -> PitchRecord:
    return _ENGINE.pitch(decider, batter, pitcher)
