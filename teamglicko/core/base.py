"""base class for online rating systems"""
import logging
from abc import ABC
from typing import Optional
import numpy as np
from teamglicko.utils.data_utils import MatchupDataset

logger = logging.getLogger(__name__)


class OnlineRatingSystem(ABC):
    """
    Base class for online rating systems which are fit one rating period at a time.

    Attributes:
        rating_dim (int): Dimension of competitor ratings, 2 for Glicko-2 which keeps a mean and a deviation
                          (the volatility is state, not part of the rating used for prediction).
        competitors (list): A list of competitors within the rating system.
        num_competitors (int): The number of competitors in the system.
    """

    rating_dim: int

    def __init__(self, competitors):
        """
        Parameters:
            competitors (list): A list of competitors to be included in the rating system, the position
                                of a competitor in this list is its index in matchup arrays.
        """
        self.competitors = competitors
        self.num_competitors = len(competitors)

    def print_leaderboard(self, num_places=None):
        """
        Prints the leaderboard of the rating system.

        Parameters:
            num_places int: The number of top places to display on the leaderboard.
        """
        raise NotImplementedError

    def predict(self, matchups: np.ndarray, time_step: int = None, set_cache: bool = False):
        raise NotImplementedError

    def update(self, matchups: np.ndarray, outcomes: np.ndarray, time_step: Optional[int], use_cache: bool = False):
        """
        Updates player ratings based on the results of one rating period.
        Subclasses bind this to batched_update or iterative_update.

        Parameters:
            matchups (np.ndarray): Array of matchups, where each matchup is represented by a pair of competitor indices
            outcomes (np.ndarray): Array of outcomes for the first competitor of each matchup: win (1), loss (0), or draw (0.5).
            time_step (int): The rating period of the update, used to grow deviations over idle periods.
        """
        raise NotImplementedError

    def batched_update(self, matchups: np.ndarray, outcomes: np.ndarray, time_step: int, use_cache=False, **kwargs):
        """Processes all matchups of a period as occurring simultaneously."""
        raise NotImplementedError

    def iterative_update(self, matchups: np.ndarray, outcomes: np.ndarray, time_step: int, use_cache=False, **kwargs):
        """Processes the matchups of a period one at a time, as if they were sequential."""
        raise NotImplementedError

    def get_pre_match_ratings(self, matchups: np.ndarray, time_step: Optional[int]) -> np.ndarray:
        """
        Returns the ratings for competitors at the timestep of the matchups
        Useful when using pre-match ratings as features in downstream ML pipelines

        Parameters:
            matchups (np.ndarray of shape (n,2)): competitor indices
            time_step (optional int)

        Returns:
            np.ndarray of shape (n, 2 * rating_dim): ratings for specified competitors
        """
        raise NotImplementedError

    def fit_batch(
        self,
        matchups: np.ndarray,
        outcomes: np.ndarray,
        time_step: int = None,
        return_pre_match_probs: bool = False,
        return_pre_match_ratings: bool = False,
    ):
        """
        update on one rating period, optionally returning the probabilities and/or the ratings from before it
        when both are requested they are returned as a (probs, ratings) tuple
        """
        if return_pre_match_probs:
            pre_match_probs = self.predict(matchups=matchups, time_step=time_step)
        if return_pre_match_ratings:
            pre_match_ratings = self.get_pre_match_ratings(matchups, time_step=time_step)
        self.update(matchups, outcomes, time_step=time_step)
        if return_pre_match_probs and return_pre_match_ratings:
            return pre_match_probs, pre_match_ratings
        elif return_pre_match_probs:
            return pre_match_probs
        elif return_pre_match_ratings:
            return pre_match_ratings
        return None

    def fit_dataset(
        self,
        dataset: MatchupDataset,
        return_pre_match_probs: bool = False,
        return_pre_match_ratings: bool = False,
    ):
        """fit the rating system to every rating period of a dataset in order"""
        if return_pre_match_probs:
            pre_match_probs = np.empty(shape=(len(dataset),))
        if return_pre_match_ratings:
            pre_match_ratings = np.empty(shape=(len(dataset), 2 * self.rating_dim))

        idx = 0
        num_periods = 0
        for matchups, outcomes, time_step in dataset:
            batch_outputs = self.fit_batch(
                matchups=matchups,
                outcomes=outcomes,
                time_step=time_step,
                return_pre_match_probs=return_pre_match_probs,
                return_pre_match_ratings=return_pre_match_ratings,
            )
            if not isinstance(batch_outputs, tuple):
                batch_outputs = (batch_outputs,)
            end_idx = idx + matchups.shape[0]
            if return_pre_match_probs:
                pre_match_probs[idx:end_idx] = batch_outputs[0]
            if return_pre_match_ratings:
                pre_match_ratings[idx:end_idx] = batch_outputs[-1]
            idx = end_idx
            num_periods += 1
        logger.info(f'fit {idx} matchups over {num_periods} rating periods')

        if return_pre_match_probs and return_pre_match_ratings:
            return pre_match_probs, pre_match_ratings
        elif return_pre_match_probs:
            return pre_match_probs
        elif return_pre_match_ratings:
            return pre_match_ratings
        return None
