"""
Symmetric RLWE encryption with coefficient extraction.

A ciphertext (c0, c1) of a polynomial m satisfies c0 + c1*s = m + p*e (mod Q)
for a short error e. Extraction turns it into a vector r of length n+1 with
r[n] + <r[:n], s> = m[loc] + p*e[loc] (mod Q), so a single coefficient can be
decrypted with a plain inner product.

Correctness needs |m + p*e| < Q/2 for every coefficient. That is a contract on
the parameter choice (error width against Q); decryption does not check it and
returns a wrong value when it is violated.
"""

import logging
import operator

import numpy as np

from .ciphertext import Ciphertext, ExtractedCiphertext, Plaintext
from .context import RingContext
from .errors import IndexOutOfRange, MalformedInput
from .keys import SecretKey
from .params import DEFAULT_PARAMETERS
from .polynomial import as_poly
from .sampling import NumpySampler

logger = logging.getLogger(__name__)


def _key_coefficients(s, ctx):
    poly = s.get_polynomial() if isinstance(s, SecretKey) else as_poly(s)
    if len(poly) != ctx.degree():
        raise MalformedInput(f"secret key has {len(poly)} coefficients, expected {ctx.degree()}")
    return as_poly(poly)


def _message_coefficients(m, ctx):
    poly = m.get_poly() if isinstance(m, Plaintext) else as_poly(m)
    n = ctx.degree()
    if len(poly) > n:
        raise MalformedInput(f"plaintext has {len(poly)} coefficients, ring degree is {n}")
    padded = np.zeros(n, dtype=object)
    padded[:len(poly)] = as_poly(poly)
    return padded % ctx.plaintext_modulus()


def encrypt(m, s, ctx: RingContext, sampler=None) -> Ciphertext:
    """Encrypt the polynomial m under s: returns (c0, c1) mod Q"""
    message = _message_coefficients(m, ctx)
    key = _key_coefficients(s, ctx)
    sampler = sampler if sampler is not None else NumpySampler()
    ring = ctx.poly_ring

    # RLWE instance: c0 + c1*s = p*e
    c1 = sampler.uniform_poly(ctx)
    e = sampler.error_poly(ctx.degree())
    c0 = ring.add(ring.neg(ring.mul(c1, key)),
                  ring.mul_scalar(e, ctx.plaintext_modulus()))

    c0 = ring.add(c0, message)
    logger.debug("encrypted plaintext of degree < %d", ctx.degree())
    return Ciphertext([c0, c1], params=ctx.params())


def extract(c: Ciphertext, loc: int, ctx: RingContext) -> ExtractedCiphertext:
    """
    Build r with r[n] = c0[loc] and r[i] = c1[loc - i], negated when
    loc - i < 0, so that <r[:n], s> is coefficient loc of c1*s.
    """
    n = ctx.degree()
    loc = operator.index(loc)
    if not 0 <= loc < n:
        raise IndexOutOfRange(f"coefficient index {loc} outside [0, {n})")
    if c.size != 2:
        raise MalformedInput(f"ciphertext has {c.size} parts, expected 2")
    c0, c1 = c.get_components()
    if len(c0) != n or len(c1) != n:
        raise MalformedInput(f"ciphertext parts must have {n} coefficients")

    ring = ctx.poly_ring
    ret = np.zeros(n + 1, dtype=object)
    # reversing c1 then multiplying by -X^(loc+1) lines up c1[loc - i] with s[i]
    ret[:n] = ring.neg(ring.rotate(c1[::-1], loc + 1))
    ret[n] = c0[loc]
    logger.debug("extracted coefficient %d", loc)
    return ExtractedCiphertext(ring.reduce(ret), loc, params=ctx.params())


def decrypt(r, s, ctx: RingContext) -> int:
    """Inner-product decryption of an extracted ciphertext, result in [0, p)"""
    coeffs = r.get_coeffs() if isinstance(r, ExtractedCiphertext) else as_poly(r)
    n = ctx.degree()
    if len(coeffs) != n + 1:
        raise MalformedInput(f"extracted ciphertext has {len(coeffs)} coefficients, expected {n + 1}")
    key = _key_coefficients(s, ctx)

    Q = ctx.ciphertext_modulus()
    inner_product = int(coeffs[n]) + int(np.dot(coeffs[:n], key))
    inner_product %= Q
    # centered representative in [-Q/2, Q/2)
    if inner_product >= Q >> 1:
        inner_product -= Q
    return inner_product % ctx.plaintext_modulus()


def decrypt_full(c: Ciphertext, s, ctx: RingContext) -> Plaintext:
    """Decrypt every coefficient at once: c0 + c1*s centered, then mod p"""
    if c.size != 2:
        raise MalformedInput(f"ciphertext has {c.size} parts, expected 2")
    c0, c1 = c.get_components()
    if len(c0) != ctx.degree() or len(c1) != ctx.degree():
        raise MalformedInput(f"ciphertext parts must have {ctx.degree()} coefficients")
    key = _key_coefficients(s, ctx)
    ring = ctx.poly_ring

    noisy = ring.mod_center(ring.add(c0, ring.mul(c1, key)))
    return Plaintext(noisy % ctx.plaintext_modulus(), params=ctx.params())


class CoefficientExtractionScheme:
    """Holds a context, a sampler and the secret key for the encrypt/extract/decrypt flow"""

    def __init__(self, params=None, sampler=None):
        self.params = params if params is not None else DEFAULT_PARAMETERS
        self.context = RingContext.from_parameters(self.params)
        self.sampler = sampler if sampler is not None else NumpySampler(sigma=self.params.sigma)
        self.secret_key = None

    @property
    def N(self):
        return self.context.degree()

    @property
    def p(self):
        return self.context.plaintext_modulus()

    @property
    def Q(self):
        return self.context.ciphertext_modulus()

    def key_generation(self):
        s = self.sampler.hamming_weight_poly(self.N, self.params.hamming_weight)
        self.secret_key = SecretKey(s)
        logger.debug("generated %r", self.secret_key)
        return self.secret_key

    def _require_key(self):
        if self.secret_key is None:
            raise ValueError("No Secret Key")
        return self.secret_key

    def encode(self, values):
        if isinstance(values, int):
            values = [values]
        poly = np.zeros(self.N, dtype=object)
        values = as_poly(values)
        if len(values) > self.N:
            raise MalformedInput(f"{len(values)} values do not fit in {self.N} coefficients")
        poly[:len(values)] = values % self.p
        return Plaintext(poly, params=self.context.params())

    def encrypt(self, plaintext):
        return encrypt(plaintext, self._require_key(), self.context, self.sampler)

    def extract(self, ciphertext, loc):
        return extract(ciphertext, loc, self.context)

    def extract_all(self, ciphertext):
        return [self.extract(ciphertext, loc) for loc in range(self.N)]

    def decrypt(self, extracted):
        return decrypt(extracted, self._require_key(), self.context)

    def decrypt_full(self, ciphertext):
        return decrypt_full(ciphertext, self._require_key(), self.context)
