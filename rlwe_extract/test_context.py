import math

import numpy as np
import pytest
import sympy
from pydantic import ValidationError

from rlwe_extract.core.context import (
    ModulusChain,
    RingContext,
    build_mod_chain,
    check_degree,
    find_ntt_primes,
)
from rlwe_extract.core.errors import InvalidParameters
from rlwe_extract.core.params import DEFAULT_PARAMETERS, RingParameters


def test_default_context_matches_reference_driver():
    ctx = RingContext.from_parameters(DEFAULT_PARAMETERS)
    assert ctx.degree() == 32
    assert ctx.plaintext_modulus() == 101
    assert len(ctx.chain.primes) == 3
    assert ctx.ciphertext_modulus() == math.prod(ctx.chain.primes)
    assert ctx.ciphertext_modulus() > ctx.plaintext_modulus()


def test_chain_primes_are_ntt_friendly():
    chain = build_mod_chain(64, 4, 30)
    assert len(set(chain.primes)) == 4
    for q in chain.primes:
        assert sympy.isprime(q)
        assert q % 128 == 1
        assert q > 1 << 30


def test_chain_is_deterministic():
    assert build_mod_chain(32, 3, 40) == build_mod_chain(32, 3, 40)
    assert find_ntt_primes(1 << 20, 16, 2) == find_ntt_primes(1 << 20, 16, 2)


def test_crt_compose_inverts_reduce():
    chain = build_mod_chain(8, 3, 20)
    Q = chain.product()
    values = np.array([0, 1, Q - 1, Q // 2, 12345678901234567, 7, 99, 3], dtype=object)
    assert chain.crt_compose(chain.reduce(values)).tolist() == values.tolist()


@pytest.mark.parametrize("n", [0, -4, 3, 12, 100])
def test_degree_must_be_power_of_two(n):
    with pytest.raises(InvalidParameters):
        RingContext.build(n, 101)


@pytest.mark.parametrize("p", [1, 0, -7])
def test_plaintext_modulus_must_exceed_one(p):
    with pytest.raises(InvalidParameters):
        RingContext.build(16, p)


def test_ciphertext_modulus_must_exceed_plaintext_modulus():
    with pytest.raises(InvalidParameters):
        RingContext.build(16, 1 << 100, num_primes=1, prime_bits=20)


def test_empty_chain_rejected():
    with pytest.raises(InvalidParameters):
        RingContext(16, 101, ModulusChain(()))
    with pytest.raises(InvalidParameters):
        build_mod_chain(16, 0, 40)


def test_context_is_immutable():
    ctx = RingContext.build(8, 101, num_primes=2, prime_bits=30)
    with pytest.raises(AttributeError):
        ctx.n = 16


def test_parameter_bounds_are_validated():
    with pytest.raises(ValidationError):
        RingParameters(prime_bits=63)
    with pytest.raises(ValidationError):
        RingParameters(num_primes=0)
    with pytest.raises(ValidationError):
        RingParameters(sigma=0)


def test_parameters_from_json():
    params = RingParameters.model_validate_json('{"n": 16, "p": 257, "num_primes": 2}')
    ctx = RingContext.from_parameters(params)
    assert ctx.params()["n"] == 16
    assert ctx.params()["p"] == 257
    assert ctx.params()["Q"] == ctx.ciphertext_modulus()


@pytest.mark.parametrize("n", [0, 6, 24])
def test_direct_construction_checks_degree(n):
    """RingContext(...) and RingContext.build(...) share one degree check"""
    chain = build_mod_chain(8, 2, 30)
    with pytest.raises(InvalidParameters):
        RingContext(n, 101, chain)
    with pytest.raises(InvalidParameters):
        check_degree(n)
    check_degree(8)
