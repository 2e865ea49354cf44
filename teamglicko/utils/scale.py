"""
conversions between the display scale (rating ~1500, RD ~350)
and the internal Glicko-2 scale (mu ~0, phi ~1-2)
"""
from teamglicko.utils.constants import GLICKO2_SCALE, RATING_OFFSET


def to_internal_rating(rating: float, scale: float = GLICKO2_SCALE, offset: float = RATING_OFFSET) -> float:
    return (rating - offset) / scale


def to_internal_deviation(rd: float, scale: float = GLICKO2_SCALE) -> float:
    return rd / scale


def to_display_rating(mu: float, scale: float = GLICKO2_SCALE, offset: float = RATING_OFFSET) -> float:
    return (mu * scale) + offset


def to_display_deviation(phi: float, scale: float = GLICKO2_SCALE) -> float:
    return phi * scale
