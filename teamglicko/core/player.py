"""competitor state and the match records that are rated against it"""
from dataclasses import dataclass
from typing import Optional, Sequence
from teamglicko.configs import DEFAULT_CONFIG, Glicko2Config
from teamglicko.utils.scale import (
    to_display_deviation,
    to_display_rating,
    to_internal_deviation,
    to_internal_rating,
)


@dataclass(frozen=True)
class RatingSnapshot:
    """read only (mu, phi) of an opponent, on the internal scale, taken at the time of the match"""

    mu: float
    phi: float


@dataclass(frozen=True)
class Match:
    """
    One observed result against an opponent.

    Attributes:
        opponent (RatingSnapshot): the opponent as they were when the match was played.
        result (float): 1.0 for a win, 0.0 for a loss, 0.5 for a draw. Fractional values
            in [0, 1] are accepted for adjusted scores from multi sided contests.
    """

    opponent: RatingSnapshot
    result: float


class Player:
    """
    A competitor rated with Glicko-2.

    The rating math runs on the internal scale stored in mu, phi and sigma.
    The rating and rd properties read and write the display scale (rating ~1500, rd ~350).
    """

    def __init__(
        self,
        rating: Optional[float] = None,
        rd: Optional[float] = None,
        volatility: Optional[float] = None,
        config: Glicko2Config = DEFAULT_CONFIG,
    ):
        self.config = config
        self.rating = config.initial_rating if rating is None else rating
        self.rd = config.initial_rd if rd is None else rd
        self.sigma = config.initial_volatility if volatility is None else volatility

    @classmethod
    def from_internal(cls, mu: float, phi: float, sigma: float, config: Glicko2Config = DEFAULT_CONFIG) -> 'Player':
        """build a player directly from internal scale values"""
        player = cls(config=config)
        player.mu = mu
        player.phi = phi
        player.sigma = sigma
        return player

    @property
    def rating(self) -> float:
        return to_display_rating(self.mu, scale=self.config.scale, offset=self.config.rating_offset)

    @rating.setter
    def rating(self, value: float):
        self.mu = to_internal_rating(value, scale=self.config.scale, offset=self.config.rating_offset)

    @property
    def rd(self) -> float:
        return to_display_deviation(self.phi, scale=self.config.scale)

    @rd.setter
    def rd(self, value: float):
        self.phi = to_internal_deviation(value, scale=self.config.scale)

    @property
    def volatility(self) -> float:
        return self.sigma

    @volatility.setter
    def volatility(self, value: float):
        self.sigma = value

    def snapshot(self) -> RatingSnapshot:
        """freeze the current rating so it can be used as an opponent while this player is updated"""
        return RatingSnapshot(mu=self.mu, phi=self.phi)

    def __repr__(self) -> str:
        return f'Player(rating={self.rating:.2f}, rd={self.rd:.2f}, volatility={self.sigma:.6f})'


@dataclass
class RosterEntry:
    """one player together with the matches they played in a rating period"""

    player: Player
    matches: Sequence[Match]
