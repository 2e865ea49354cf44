"""
Glicko 2
paper: http://www.glicko.net/research/dpcmsv.pdf
example: http://www.glicko.net/glicko/glicko2.pdf

"""
import logging
import math
from typing import Dict, List, Optional, Sequence
import numpy as np
from teamglicko.configs import Glicko2Config
from teamglicko.core.base import OnlineRatingSystem
from teamglicko.core.player import Match, Player, RatingSnapshot
from teamglicko.errors import InvalidRatingInput, VolatilityConvergenceError
from teamglicko.utils.constants import (
    DEFAULT_EPSILON,
    DEFAULT_MAX_ITER,
    DEFAULT_TAU,
    THREE_OVER_PI_SQUARED,
)
from teamglicko.utils.math_utils import is_finite_positive, sigmoid, sigmoid_scalar
from teamglicko.utils.scale import to_display_deviation, to_display_rating

logger = logging.getLogger(__name__)


def g(phi: float) -> float:
    """this is DIFFERENT from g in regular Glicko"""
    return 1.0 / math.sqrt(1.0 + (THREE_OVER_PI_SQUARED * (phi**2.0)))


def g_vector(phi: np.ndarray) -> np.ndarray:
    """vector version"""
    return 1.0 / np.sqrt(1.0 + (THREE_OVER_PI_SQUARED * np.square(phi)))


def expected_score(mu: float, opp_mu: float, opp_phi: float) -> float:
    """expected score of a player rated mu against an opponent rated (opp_mu, opp_phi)"""
    return sigmoid_scalar(g(opp_phi) * (mu - opp_mu))


def estimate_variance(mu: float, matches: Sequence[Match]) -> float:
    """
    Step 3: estimated variance of the player's rating based only on game outcomes.
    The match list must not be empty.
    """
    info = 0.0
    for match in matches:
        opponent = match.opponent
        g_j = g(opponent.phi)
        e_j = expected_score(mu, opponent.mu, opponent.phi)
        info += (g_j**2.0) * e_j * (1.0 - e_j)
    return 1.0 / info


def _score_residual(mu: float, matches: Sequence[Match]) -> float:
    """sum of g(phi_j) * (s_j - E_j), this is kinda like a gradient"""
    residual = 0.0
    for match in matches:
        opponent = match.opponent
        residual += g(opponent.phi) * (match.result - expected_score(mu, opponent.mu, opponent.phi))
    return residual


def estimate_delta(mu: float, matches: Sequence[Match], v: float) -> float:
    """Step 4: estimated improvement in rating"""
    return v * _score_residual(mu, matches)


def _volatility_f(x, delta2, phi2, v, a, tau2):
    ex = math.exp(x)
    phi2_v_ex = phi2 + v + ex
    num_1 = ex * (delta2 - phi2_v_ex)
    denom_1 = 2 * ((phi2_v_ex) ** 2.0)
    term_2 = (x - a) / tau2
    return (num_1 / denom_1) - term_2


def solve_volatility(
    sigma: float,
    phi: float,
    v: float,
    delta: float,
    tau: float = DEFAULT_TAU,
    epsilon: float = DEFAULT_EPSILON,
    max_iter: int = DEFAULT_MAX_ITER,
) -> float:
    """
    Step 5: find the new volatility with the Illinois variant of regula falsi.

    Parameters:
        sigma (float): volatility before the rating period.
        phi (float): deviation before the rating period, internal scale.
        v (float): estimated variance from estimate_variance.
        delta (float): estimated improvement from estimate_delta.
        tau (float): system constant constraining the volatility change.
        epsilon (float): convergence tolerance on the bracket width.
        max_iter (int): cap on the iterations of each of the two loops.

    Returns:
        float: the new volatility sigma'.

    Raises:
        InvalidRatingInput: if any input is not finite, or sigma, phi or v are not positive.
        VolatilityConvergenceError: if either loop exceeds max_iter iterations.
    """
    if not (is_finite_positive(sigma) and is_finite_positive(phi) and is_finite_positive(v) and math.isfinite(delta)):
        raise InvalidRatingInput(f'cannot solve volatility for sigma={sigma}, phi={phi}, v={v}, delta={delta}')

    tau2 = tau**2.0
    delta2 = delta**2.0
    phi2 = phi**2.0
    A = a = 2.0 * math.log(sigma)

    def f(x):
        return _volatility_f(x, delta2, phi2, v, a, tau2)

    if delta2 > (phi2 + v):
        B = math.log(delta2 - phi2 - v)
    else:
        k = 1
        B = a - tau
        while f(B) < 0:
            k += 1
            if k > max_iter:
                raise VolatilityConvergenceError('bracketing', max_iter)
            B = a - k * tau
        logger.debug(f'bracketed volatility root after stepping down {k} times')

    f_A = f(A)
    f_B = f(B)
    iters = 0
    while math.fabs(B - A) > epsilon:
        if iters >= max_iter:
            raise VolatilityConvergenceError('illinois', max_iter)
        C = A + ((A - B) * f_A) / (f_B - f_A)
        f_C = f(C)
        if (f_C * f_B) < 0:
            A = B
            f_A = f_B
        else:
            f_A = f_A / 2.0
        B = C
        f_B = f_C
        iters += 1
    logger.debug(f'volatility solver converged in {iters} iterations')
    return math.exp(A / 2.0)


def _validate_update(player: Player, matches: Sequence[Match], factor: float):
    if len(matches) == 0:
        raise InvalidRatingInput('at least one match is required to update a rating')
    if not is_finite_positive(player.phi):
        raise InvalidRatingInput(f'deviation must be positive, got phi={player.phi}')
    if not is_finite_positive(player.sigma):
        raise InvalidRatingInput(f'volatility must be positive, got sigma={player.sigma}')
    if not math.isfinite(player.mu):
        raise InvalidRatingInput(f'rating must be finite, got mu={player.mu}')
    for match in matches:
        if not 0.0 <= match.result <= 1.0:
            raise InvalidRatingInput(f'match result must be in [0, 1], got {match.result}')
        if not (math.isfinite(match.opponent.mu) and is_finite_positive(match.opponent.phi)):
            raise InvalidRatingInput(f'invalid opponent snapshot {match.opponent}')
    if not 0.0 <= factor <= 1.0:
        raise InvalidRatingInput(f'factor must be in [0, 1], got {factor}')


def update_rating(
    player: Player,
    matches: Sequence[Match],
    factor: float = 1.0,
    config: Optional[Glicko2Config] = None,
) -> Player:
    """
    Apply one Glicko-2 rating period to player in place.

    Every quantity is computed from the player's rating as it was before the call,
    the opponents are only read through their snapshots.

    Parameters:
        player (Player): the player to update.
        matches (Sequence[Match]): the player's results in the rating period, must not be empty.
        factor (float): share of the full update to apply, 0 leaves the player unchanged and 1 applies
            the whole update. Used to spread one result over several simultaneous matches or teammates.
        config (Glicko2Config, optional): solver settings, defaults to the player's own config.

    Returns:
        Player: the same player, for chaining.
    """
    config = config or player.config
    _validate_update(player, matches, factor)

    mu, phi, sigma = player.mu, player.phi, player.sigma

    v = estimate_variance(mu, matches)
    residual = _score_residual(mu, matches)
    delta = v * residual

    sigma_prime = solve_volatility(
        sigma=sigma,
        phi=phi,
        v=v,
        delta=delta,
        tau=config.tau,
        epsilon=config.epsilon,
        max_iter=config.max_iter,
    )
    phi_star = math.sqrt((phi**2.0) + (sigma_prime**2.0))
    phi_prime = 1.0 / math.sqrt((1.0 / (phi_star**2.0)) + (1.0 / v))
    mu_prime = mu + (phi_prime**2.0) * residual

    player.sigma = sigma + factor * (sigma_prime - sigma)
    player.phi = phi + factor * (phi_prime - phi)
    player.mu = mu + factor * (mu_prime - mu)
    return player


class Glicko2(OnlineRatingSystem):
    """
    Implements the Glicko 2 rating system, designed by Mark Glickman,
    over a fixed set of competitors stored in numpy arrays.
    """

    rating_dim = 2

    def __init__(
        self,
        competitors: list,
        initial_rating: float = 1500.0,
        initial_rd: float = 350.0,
        initial_sigma: float = 0.06,
        tau: float = 0.5,
        epsilon: float = 1e-6,
        dtype=np.float64,
        update_method: str = 'batched',
        config: Optional[Glicko2Config] = None,
    ):
        """
        Initializes the Glicko-2 rating system with the given parameters.

        Parameters:
            competitors (list): A list of competitors to be rated within the system.
            initial_rating (float, optional): The initial display rating for new competitors. Defaults to 1500.0.
            initial_rd (float, optional): The initial display rating deviation. Defaults to 350.0.
            initial_sigma (float, optional): The initial volatility. Defaults to 0.06.
            tau (float, optional): System constant constraining the volatility change. Defaults to 0.5.
            epsilon (float, optional): Convergence tolerance of the volatility solver. Defaults to 1e-6.
            dtype: The data type for internal numpy computations. Defaults to np.float64.
            update_method (str, optional): 'batched' rates every matchup of a period from one snapshot,
                'iterative' treats the matchups as sequential. Defaults to 'batched'.
            config (Glicko2Config, optional): overrides all of the numeric arguments above.
        """
        super().__init__(competitors)
        self.config = config or Glicko2Config(
            initial_rating=initial_rating,
            initial_rd=initial_rd,
            initial_volatility=initial_sigma,
            tau=tau,
            epsilon=epsilon,
        )
        initial_mu = (self.config.initial_rating - self.config.rating_offset) / self.config.scale
        self.initial_phi = self.config.initial_rd / self.config.scale
        self.mus = np.zeros(shape=self.num_competitors, dtype=dtype) + initial_mu
        self.phis = np.zeros(shape=self.num_competitors, dtype=dtype) + self.initial_phi
        self.sigmas = np.zeros(shape=self.num_competitors, dtype=dtype) + self.config.initial_volatility
        self.has_played = np.zeros(shape=self.num_competitors, dtype=np.bool_)
        self.prev_time_step = -1

        if update_method == 'batched':
            self.update = self.batched_update
        elif update_method == 'iterative':
            self.update = self.iterative_update
        else:
            raise ValueError(f'Invalid update_method {update_method}')

    def predict(self, matchups: np.ndarray, time_step: int = None, set_cache: bool = False):
        """probability that the first competitor of each matchup wins"""
        mu_diff = self.mus[matchups[:, 0]] - self.mus[matchups[:, 1]]
        phi_1 = self.phis[matchups[:, 0]]
        phi_2 = self.phis[matchups[:, 1]]
        combined_g = g_vector(np.sqrt(np.square(phi_1) + np.square(phi_2)))
        return sigmoid(combined_g * mu_diff)

    def get_pre_match_ratings(self, matchups: np.ndarray, **kwargs):
        means = self.mus[matchups]
        devs = self.phis[matchups]
        ratings = np.concatenate((means[..., None], devs[..., None]), axis=2).reshape(means.shape[0], -1)
        return ratings

    def get_player(self, idx: int) -> Player:
        """a detached Player holding the current rating of competitor idx"""
        return Player.from_internal(
            mu=float(self.mus[idx]),
            phi=float(self.phis[idx]),
            sigma=float(self.sigmas[idx]),
            config=self.config,
        )

    def _set_player(self, idx: int, player: Player):
        self.mus[idx] = player.mu
        self.phis[idx] = player.phi
        self.sigmas[idx] = player.sigma

    def increase_rating_dev(self, time_step, active_in_period):
        """grow phi for competitors who have played before but sit out this period"""
        inactive_mask = np.ones(self.num_competitors, dtype=np.bool_)
        inactive_mask[active_in_period] = False
        update_phi_mask = self.has_played & inactive_mask
        time_delta = 1 if time_step is None else time_step - self.prev_time_step
        self.phis[update_phi_mask] = np.minimum(
            np.sqrt(np.square(self.phis[update_phi_mask]) + (time_delta * np.square(self.sigmas[update_phi_mask]))),
            self.initial_phi,
        )
        self.has_played[active_in_period] = True
        if time_step is not None:
            self.prev_time_step = time_step

    def batched_update(self, matchups, outcomes, time_step=None, **kwargs):
        """apply one update based on all of the results of the rating period"""
        active_in_period = np.unique(matchups)
        self.increase_rating_dev(time_step, active_in_period)

        snapshots = {
            comp: RatingSnapshot(mu=float(self.mus[comp]), phi=float(self.phis[comp])) for comp in active_in_period
        }
        period_matches: Dict[int, List[Match]] = {comp: [] for comp in active_in_period}
        for (comp_1, comp_2), outcome in zip(matchups, outcomes):
            period_matches[comp_1].append(Match(opponent=snapshots[comp_2], result=float(outcome)))
            period_matches[comp_2].append(Match(opponent=snapshots[comp_1], result=1.0 - float(outcome)))

        # every competitor is rated against the frozen snapshots before any rating is written back
        updated = {}
        for comp, matches in period_matches.items():
            updated[comp] = update_rating(self.get_player(comp), matches, config=self.config)
        for comp, player in updated.items():
            self._set_player(comp, player)

    def iterative_update(self, matchups, outcomes, time_step=None, **kwargs):
        """treat the matchups in the rating period as if they were sequential"""
        self.increase_rating_dev(time_step, np.unique(matchups))
        for idx in range(matchups.shape[0]):
            comp_1, comp_2 = matchups[idx]
            player_1 = self.get_player(comp_1)
            player_2 = self.get_player(comp_2)
            snapshot_1 = player_1.snapshot()
            snapshot_2 = player_2.snapshot()
            update_rating(player_1, [Match(snapshot_2, float(outcomes[idx]))], config=self.config)
            update_rating(player_2, [Match(snapshot_1, 1.0 - float(outcomes[idx]))], config=self.config)
            self._set_player(comp_1, player_1)
            self._set_player(comp_2, player_2)

    def print_leaderboard(self, num_places):
        ratings = to_display_rating(self.mus, scale=self.config.scale, offset=self.config.rating_offset)
        rds = to_display_deviation(self.phis, scale=self.config.scale)
        sort_array = ratings - (2.0 * rds)
        sorted_idxs = np.argsort(-sort_array)[:num_places]
        max_len = min(np.max([len(str(comp)) for comp in self.competitors] + [10]), 25)
        print(f'{"competitor": <{max_len}}\t{"rating": <10}\t{"rd": <10}\t{"sigma"}')
        for comp_idx in sorted_idxs:
            out = f'{str(self.competitors[comp_idx]): <{max_len}}\t{ratings[comp_idx]: <10.2f}\t'
            out += f'{rds[comp_idx]: <10.2f}\t{self.sigmas[comp_idx]:.6f}'
            print(out)
