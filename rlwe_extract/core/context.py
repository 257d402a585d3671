"""
Ring context: the degree n, the plaintext modulus p and the ciphertext
modulus Q, where Q is the product of a chain of NTT-friendly primes.
"""

import logging
import math
from dataclasses import dataclass
from typing import Tuple

import numpy as np
import sympy

from .errors import InvalidParameters
from .polynomial import PolynomialRing, as_poly

logger = logging.getLogger(__name__)


def find_ntt_primes(start_q, N, count):
    """Find `count` consecutive primes q >= start_q with q = 1 mod 2N"""
    m = 2 * N
    q = (start_q // m) * m + 1
    primes = []
    while len(primes) < count:
        if sympy.isprime(q):
            primes.append(q)
        q += m
    return primes


@dataclass(frozen=True)
class ModulusChain:
    """Active ciphertext primes; Q is always recomputed from them"""
    primes: Tuple[int, ...]

    def product(self):
        return math.prod(self.primes)

    def reduce(self, a):
        """Residues of each coefficient, one int64 row per prime"""
        a = as_poly(a)
        return [(a % q).astype(np.int64) for q in self.primes]

    def crt_compose(self, residues):
        """Inverse of reduce(): combine per-prime residues into values mod Q"""
        Q = self.product()
        total = 0
        for q, r in zip(self.primes, residues):
            q_hat = Q // q
            total = total + as_poly(r) * (q_hat * pow(q_hat, -1, q))
        return total % Q


def check_degree(n):
    if n <= 0 or n & (n - 1) != 0:
        raise InvalidParameters(f"ring degree n={n} must be a power of 2")


def build_mod_chain(N, num_primes, prime_bits):
    if num_primes < 1:
        raise InvalidParameters("the modulus chain needs at least one prime")
    primes = find_ntt_primes(1 << prime_bits, N, num_primes)
    return ModulusChain(tuple(primes))


@dataclass(frozen=True)
class RingContext:
    n: int
    p: int
    chain: ModulusChain

    def __post_init__(self):
        check_degree(self.n)
        if self.p <= 1:
            raise InvalidParameters(f"plaintext modulus p={self.p} must be > 1")
        if not self.chain.primes:
            raise InvalidParameters("the modulus chain is empty")
        if self.chain.product() <= self.p:
            raise InvalidParameters("ciphertext modulus Q must exceed p")

    @classmethod
    def build(cls, n, p, num_primes=3, prime_bits=40):
        # n is checked before the prime search, which needs a positive degree
        check_degree(n)
        ctx = cls(n, p, build_mod_chain(n, num_primes, prime_bits))
        logger.info("RLWE parameters: n=%d, p=%d, Q~2^%d (%d primes)",
                    n, p, ctx.ciphertext_modulus().bit_length(), num_primes)
        return ctx

    @classmethod
    def from_parameters(cls, params):
        return cls.build(params.n, params.p, params.num_primes, params.prime_bits)

    def degree(self):
        return self.n

    def plaintext_modulus(self):
        return self.p

    def ciphertext_modulus(self):
        return self.chain.product()

    @property
    def poly_ring(self):
        return PolynomialRing(self.n, self.ciphertext_modulus())

    def params(self):
        return {'n': self.n, 'p': self.p, 'Q': self.ciphertext_modulus()}
