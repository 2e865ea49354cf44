"""mathematical constants computed once here to avoid recomputation"""
import math

# general math constants
PI2 = math.pi**2.0
THREE_OVER_PI_SQUARED = 3.0 / PI2

# glicko2 scale constants
GLICKO2_SCALE = 173.7178
RATING_OFFSET = 1500.0

# default player state on the display scale
DEFAULT_RATING = 1500.0
DEFAULT_RD = 350.0
DEFAULT_VOLATILITY = 0.06

# solver defaults
DEFAULT_TAU = 0.5
DEFAULT_EPSILON = 1e-6
DEFAULT_MAX_ITER = 1000
TAU_RANGE = (0.3, 1.2)
