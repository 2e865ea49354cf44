"""exceptions raised by the rating code"""


class RatingError(Exception):
    """base class for every error raised by teamglicko"""


class InvalidRatingInput(RatingError, ValueError):
    """
    Raised when a rating update is handed input it cannot rate: an empty match list,
    a non positive deviation or volatility, or a result outside of [0, 1].
    These are programming errors on the caller's side, they are reported before any state is touched.
    """


class VolatilityConvergenceError(RatingError, RuntimeError):
    """Raised when the volatility solver exceeds its iteration cap."""

    def __init__(self, stage: str, iterations: int):
        self.stage = stage
        self.iterations = iterations
        super().__init__(f'volatility solver {stage} loop hit {iterations} iterations without converging')
