"""teamglicko: Glicko-2 ratings for individual and team competitors"""
from teamglicko.configs import Glicko2Config
from teamglicko.core.player import Match, Player, RatingSnapshot, RosterEntry
from teamglicko.errors import InvalidRatingInput, RatingError, VolatilityConvergenceError
from teamglicko.models.glicko2 import (
    Glicko2,
    estimate_delta,
    estimate_variance,
    expected_score,
    g,
    solve_volatility,
    update_rating,
)
from teamglicko.models.teams import adjust_score, team_strength, update_team_ratings
from teamglicko.utils.data_utils import MatchupDataset
from teamglicko.utils.scale import (
    to_display_deviation,
    to_display_rating,
    to_internal_deviation,
    to_internal_rating,
)

__all__ = [
    'Glicko2',
    'Glicko2Config',
    'InvalidRatingInput',
    'Match',
    'MatchupDataset',
    'Player',
    'RatingError',
    'RatingSnapshot',
    'RosterEntry',
    'VolatilityConvergenceError',
    'adjust_score',
    'estimate_delta',
    'estimate_variance',
    'expected_score',
    'g',
    'solve_volatility',
    'team_strength',
    'to_display_deviation',
    'to_display_rating',
    'to_internal_deviation',
    'to_internal_rating',
    'update_rating',
    'update_team_ratings',
]
