"""configuration for the Glicko-2 rating code"""
import logging
import math
from dataclasses import dataclass
from teamglicko.utils.constants import (
    DEFAULT_EPSILON,
    DEFAULT_MAX_ITER,
    DEFAULT_RATING,
    DEFAULT_RD,
    DEFAULT_TAU,
    DEFAULT_VOLATILITY,
    GLICKO2_SCALE,
    RATING_OFFSET,
    TAU_RANGE,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Glicko2Config:
    """
    Tunable values for the Glicko-2 updater and volatility solver.

    Attributes:
        initial_rating (float): display rating given to new players.
        initial_rd (float): display rating deviation given to new players.
        initial_volatility (float): volatility given to new players.
        tau (float): constrains the change in volatility over time, smaller values make the system
            less responsive. Glickman recommends something between 0.3 and 1.2.
        epsilon (float): convergence tolerance of the volatility solver.
        scale (float): factor between the display scale and the internal Glicko-2 scale.
        rating_offset (float): display rating that maps to 0 on the internal scale.
        max_iter (int): iteration cap for each of the two loops in the volatility solver.
    """

    initial_rating: float = DEFAULT_RATING
    initial_rd: float = DEFAULT_RD
    initial_volatility: float = DEFAULT_VOLATILITY
    tau: float = DEFAULT_TAU
    epsilon: float = DEFAULT_EPSILON
    scale: float = GLICKO2_SCALE
    rating_offset: float = RATING_OFFSET
    max_iter: int = DEFAULT_MAX_ITER

    def __post_init__(self):
        for name in ('initial_rd', 'initial_volatility', 'tau', 'epsilon', 'scale'):
            value = getattr(self, name)
            if not (math.isfinite(value) and value > 0.0):
                raise ValueError(f'{name} must be a finite positive number, got {value}')
        if self.max_iter < 1:
            raise ValueError(f'max_iter must be at least 1, got {self.max_iter}')
        low, high = TAU_RANGE
        if not low <= self.tau <= high:
            logger.warning(f'tau={self.tau} is outside of the recommended range [{low}, {high}]')


DEFAULT_CONFIG = Glicko2Config()
