"""League-average rates and distributions the simulators are tuned against.

Pitch-outcome rates come from league pitch totals; every other constant is a
`Stat` sampled through the decider.
"""
from .stat import Stat

TOTAL_PITCHES = 10_894_935
TOTAL_BALLS = 5_359_317
TOTAL_BALL_SWINGS = 1_593_720
TOTAL_BALL_SWING_CONTACTS = 983_462
TOTAL_BALL_SWING_CONTACT_FOULS = 550_032
TOTAL_STRIKES = TOTAL_PITCHES - TOTAL_BALLS
TOTAL_STRIKE_SWINGS = 3_468_221
TOTAL_STRIKE_SWING_CONTACTS = 2_905_144
TOTAL_STRIKE_SWING_CONTACT_FOULS = 1_363_718

BALLS_PER_PITCH = TOTAL_BALLS / TOTAL_PITCHES

SWINGS_PER_BALL = TOTAL_BALL_SWINGS / TOTAL_BALLS
CONTACTS_PER_BALL_SWING = TOTAL_BALL_SWING_CONTACTS / TOTAL_BALL_SWINGS
FOULS_PER_BALL_CONTACT = TOTAL_BALL_SWING_CONTACT_FOULS / TOTAL_BALL_SWING_CONTACTS

SWINGS_PER_STRIKE = TOTAL_STRIKE_SWINGS / TOTAL_STRIKES
CONTACTS_PER_STRIKE_SWING = TOTAL_STRIKE_SWING_CONTACTS / TOTAL_STRIKE_SWINGS
FOULS_PER_STRIKE_CONTACT = TOTAL_STRIKE_SWING_CONTACT_FOULS / TOTAL_STRIKE_SWING_CONTACTS

HIT_AVERAGE_SPEED = 125.0

# ft/s off the bat
HIT_EXIT_SPEED = Stat(average=HIT_AVERAGE_SPEED, std_dev=35.0, range=(0.0, 2.0 * HIT_AVERAGE_SPEED))

# degrees above horizontal
HIT_LAUNCH_ANGLE = Stat(average=0.0, std_dev=45.0, range=(-90.0, 90.0))

# ft/s
BASERUNNER_SPEED = Stat(average=27.0, std_dev=4.0, range=(0.0, 40.0))
FIELDER_SPEED = Stat(average=23.0, std_dev=4.0, range=(0.0, 40.0))
THROW_SPEED = Stat(average=57.25, std_dev=7.0, range=(0.0, 150.0))

# seconds
PLAYER_REACTION_TIME = Stat(average=1.85, std_dev=0.1, range=(1.25, 2.5))
FIELDER_TRANSFER_TIME = Stat(average=1.5, std_dev=0.2, range=(1.0, 3.0))
BOX_EXIT_TIME = Stat(average=2.0, std_dev=0.3, range=(1.5, 3.5))
BASE_TAKEOFF_DELAY = Stat(average=1.0, std_dev=0.3, range=(0.75, 2.0))

# degrees added to the launch angle for a high pitch (subtracted for a low one)
LAUNCH_OFFSET = 10.0

# degrees the direction bias can pull a batted ball at its extreme
DIRECTION_BIAS_RANGE = 15.0

# degrees a pitch off the inner/outer third pushes the batted ball
PITCH_WIDTH_OFFSET = 5.0

# exit speed kept when the batter puts a pitch outside the zone in play
BALL_CONTACT_SPEED_FACTOR = 0.85

# launch angles within this many degrees of average hit the sweet spot
LAUNCH_ERROR_TOLERANCE = 2.0
LAUNCH_ERROR_SCALE = 200.0
MAX_LAUNCH_ERROR = 0.25

BASE_PATH = 90.0
