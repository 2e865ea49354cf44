"""math utility functions for rating systems"""
import math
from scipy.special import expit


def sigmoid(x):
    """a little faster than implementing it in numpy for d < 100000"""
    return expit(x)


def sigmoid_scalar(x):
    """no need to use numpy on scalars, split on the sign of x so exp never overflows"""
    if x >= 0.0:
        return 1.0 / (1.0 + math.exp(-x))
    z = math.exp(x)
    return z / (1.0 + z)


def is_finite_positive(x) -> bool:
    """True for finite floats strictly greater than zero"""
    return math.isfinite(x) and x > 0.0
