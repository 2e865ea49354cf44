"""
helpers for rating players who compete in teams or in contests with more than two sides
"""
import logging
import math
from typing import Iterable, Optional, Sequence
from teamglicko.configs import Glicko2Config
from teamglicko.core.player import Player, RosterEntry
from teamglicko.errors import InvalidRatingInput
from teamglicko.models.glicko2 import update_rating

logger = logging.getLogger(__name__)


def adjust_score(strength_a: float, strength_b: float) -> float:
    """
    Turn two aggregate strengths into a pairwise result in [0, 1] for a multi sided contest.

    The share a / (a + b) is pushed through a sine so that even contests stay near 0.5
    while lopsided ones saturate towards 0 or 1.
    """
    total = strength_a + strength_b
    if not (math.isfinite(total) and total > 0.0):
        raise InvalidRatingInput(f'strengths must sum to a positive number, got {strength_a} and {strength_b}')
    percent = strength_a / total
    return (math.sin((percent - 0.5) * math.pi) + 1.0) * 0.5


def team_strength(players: Iterable[Player]) -> float:
    """sum of the members' display ratings"""
    return sum(player.rating for player in players)


def update_team_ratings(entries: Sequence[RosterEntry], config: Optional[Glicko2Config] = None):
    """
    Update every player of a roster, splitting each player's credit evenly over their N matches:
    the update is applied N times with factor 1/N.

    The opponents in the matches are snapshots, so the order of the entries does not matter.
    """
    for entry in entries:
        num_matches = len(entry.matches)
        if num_matches == 0:
            logger.debug(f'skipping {entry.player} with no matches')
            continue
        factor = 1.0 / num_matches
        for _ in range(num_matches):
            update_rating(entry.player, entry.matches, factor=factor, config=config)
