"""
Polynomial Ring Operations
Implements polynomial arithmetic in R_q = Z_q[X]/(X^N + 1)

Coefficients are kept as Python ints inside numpy 'object' arrays so that
products never overflow, whatever the size of q.
"""

import operator

import numpy as np

from .errors import MalformedInput


def as_poly(a):
    """Copy a flat coefficient sequence into an object array of Python ints"""
    if isinstance(a, np.ndarray) and a.ndim != 1:
        raise MalformedInput(f"expected a flat coefficient vector, got shape {a.shape}")
    try:
        coeffs = [operator.index(x) for x in a]
    except TypeError:
        raise MalformedInput("coefficients must be a flat sequence of integers") from None
    return np.array(coeffs, dtype=object)


def rotate_negacyclic(poly, shift):
    """
    Multiply by X^shift in Z[X]/(X^N + 1), without any coefficient reduction.

    Coefficients that wrap past X^(N-1) come back with their sign flipped,
    since X^N = -1. Any integer shift is accepted (X^(2N) = 1).
    """
    poly = as_poly(poly)
    n = len(poly)
    if n == 0:
        return poly

    shift %= 2 * n
    k = shift % n
    out = np.roll(poly, k)
    out[:k] = -out[:k]
    if shift >= n:
        out = -out
    return out


class PolynomialRing:
    def __init__(self, N, q):
        self.N = N
        self.q = q
        if N <= 0 or N & (N - 1) != 0:
            raise ValueError("N must be a power of 2")

    def reduce(self, a):
        return as_poly(a) % self.q

    def add(self, a, b):
        return (as_poly(a) + as_poly(b)) % self.q

    def neg(self, a):
        return (-as_poly(a)) % self.q

    def mul_scalar(self, a, scalar):
        return (as_poly(a) * int(scalar)) % self.q

    def mul(self, a, b):
        """
        Multiply two polynomials in R_q using arbitrary precision integers.
        """
        conv = np.convolve(as_poly(a), as_poly(b))

        # Negacyclic Reduction (X^N = -1)
        result = np.zeros(self.N, dtype=object)
        low = conv[:self.N]
        high = conv[self.N:]
        result[:len(low)] = low
        result[:len(high)] -= high

        return result % self.q

    def rotate(self, a, shift):
        """Multiply by the monomial X^shift in R_q"""
        return rotate_negacyclic(a, shift) % self.q

    def mod_center(self, a):
        """Representatives in [-q/2, q/2)"""
        result = as_poly(a) % self.q
        half_q = self.q >> 1
        mask = result >= half_q
        result[mask] -= self.q
        return result


class DiscreteGaussian:
    def __init__(self, sigma, N, rng=None):
        self.sigma = sigma
        self.N = N
        self.rng = rng if rng is not None else np.random.default_rng()

    def sample(self):
        samples = self.rng.normal(0, self.sigma, self.N)
        return np.round(samples).astype(np.int64)

    def sample_bounded(self, bound):
        samples = self.sample()
        return np.clip(samples, -bound, bound)
