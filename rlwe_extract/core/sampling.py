"""
Randomness used by key generation and encryption.

Encryption takes a Sampler as an argument so tests can inject a seeded
generator (or a stub) without touching the scheme itself.
"""

from abc import ABC, abstractmethod

import numpy as np

from .errors import InvalidParameters
from .polynomial import DiscreteGaussian, as_poly


class Sampler(ABC):
    @abstractmethod
    def uniform_poly(self, ctx):
        """Uniformly random polynomial with coefficients in [0, Q)"""
        ...

    @abstractmethod
    def error_poly(self, N):
        """Small error polynomial"""
        ...

    @abstractmethod
    def hamming_weight_poly(self, N, weight):
        """Ternary polynomial with exactly `weight` nonzero coefficients"""
        ...


class NumpySampler(Sampler):
    def __init__(self, seed=None, sigma=3.2):
        self.rng = np.random.default_rng(seed)
        self.sigma = sigma

    def uniform_poly(self, ctx):
        # Uniform residues per prime compose into a uniform value mod Q
        chain = ctx.chain
        residues = [self.rng.integers(0, q, size=ctx.n, dtype=np.int64)
                    for q in chain.primes]
        return chain.crt_compose(residues)

    def error_poly(self, N):
        gaussian = DiscreteGaussian(self.sigma, N, rng=self.rng)
        return as_poly(gaussian.sample_bounded(bound=6 * int(self.sigma)))

    def hamming_weight_poly(self, N, weight):
        if not 0 < weight <= N:
            raise InvalidParameters(f"Hamming weight {weight} must be in [1, {N}]")
        poly = np.zeros(N, dtype=np.int64)
        positions = self.rng.choice(N, size=weight, replace=False)
        poly[positions] = self.rng.choice([-1, 1], size=weight)
        return poly
