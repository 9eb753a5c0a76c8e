"""
Memory-model constants.

This module contains the static FSRS (Free Spaced Repetition Scheduler) weights and
the fixed constants of the forgetting curve. No runtime configuration - pure constants only.
"""
from typing import Tuple

# Default FSRS-5 parameters (weights 'w').
# w[0..3] are the initial stabilities for Forgot/Hard/Good/Easy, w[4..7] drive
# difficulty, w[8..16] drive stability updates. w[17] and w[18] are carried for
# compatibility with FSRS-5 parameter exports but are not read by the formulas.
DEFAULT_PARAMETERS: Tuple[float, ...] = (
    0.40255,  # w[0]
    1.18385,  # w[1]
    3.173,    # w[2]
    15.69105, # w[3]
    7.1949,   # w[4]
    0.5345,   # w[5]
    1.4604,   # w[6]
    0.0046,   # w[7]
    1.54575,  # w[8]
    0.1192,   # w[9]
    1.01925,  # w[10]
    1.9395,   # w[11]
    0.11,     # w[12]
    0.29605,  # w[13]
    2.2698,   # w[14]
    0.2315,   # w[15]
    2.9898,   # w[16]
    0.51655,  # w[17]
    0.6621,   # w[18]
)

# Highest index read by the formulas is w[16].
MIN_PARAMETER_COUNT: int = 17

# Forgetting curve R(t, S) = (1 + FACTOR * t / S) ** DECAY.
# FACTOR is chosen so that R(S, S) == 0.9, i.e. stability is the 90% interval.
DECAY: float = -0.5
FACTOR: float = 0.9 ** (1 / DECAY) - 1

# Default desired retention rate if not specified elsewhere.
DEFAULT_DESIRED_RETENTION: float = 0.9

MIN_DIFFICULTY: float = 1.0
MAX_DIFFICULTY: float = 10.0
MIN_STABILITY: float = 0.01

# Interval policy defaults (days).
DEFAULT_MINIMUM_INTERVAL: float = 1.0
DEFAULT_MAXIMUM_INTERVAL: float = 36500.0
