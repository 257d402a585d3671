"""
Tests for negacyclic ring arithmetic.
"""

import numpy as np
import pytest

from rlwe_extract.core.errors import MalformedInput
from rlwe_extract.core.polynomial import DiscreteGaussian, PolynomialRing, as_poly, rotate_negacyclic


def schoolbook_negacyclic(a, b):
    """Reference product in Z[X]/(X^N + 1), no modulus"""
    N = len(a)
    result = [0] * N
    for i in range(N):
        for j in range(N):
            k = i + j
            if k < N:
                result[k] += int(a[i]) * int(b[j])
            else:
                result[k - N] -= int(a[i]) * int(b[j])
    return result


def monomial(N, shift):
    """X^shift written back into degree < N: (-1)^(shift // N) X^(shift mod N)"""
    shift %= 2 * N
    poly = [0] * N
    poly[shift % N] = -1 if shift >= N else 1
    return poly


@pytest.mark.parametrize("N", [1, 2, 4, 8])
def test_rotate_matches_brute_force(N):
    """Rotation equals multiplication by the monomial, for every shift"""
    a = list(range(1, N + 1))
    for shift in range(-2 * N, 3 * N):
        expected = schoolbook_negacyclic(a, monomial(N, shift))
        assert rotate_negacyclic(a, shift).tolist() == expected, shift


def test_rotate_wraps_with_sign_flip():
    assert rotate_negacyclic([1, 2, 3, 4], 1).tolist() == [-4, 1, 2, 3]
    assert rotate_negacyclic([1, 2, 3, 4], 4).tolist() == [-1, -2, -3, -4]
    assert rotate_negacyclic([1, 2, 3, 4], -1).tolist() == [2, 3, 4, -1]


def test_rotate_does_not_modify_input():
    a = np.array([5, 6, 7, 8], dtype=object)
    rotate_negacyclic(a, 3)
    assert a.tolist() == [5, 6, 7, 8]


def test_ring_rotate_reduces():
    ring = PolynomialRing(4, 97)
    assert ring.rotate([1, 2, 3, 4], 1).tolist() == [93, 1, 2, 3]


def test_mul_matches_schoolbook_with_big_modulus():
    """Products of ~2^120 coefficients must not overflow"""
    rng = np.random.default_rng(7)
    q = (1 << 120) + 451
    N = 16
    ring = PolynomialRing(N, q)
    a = [int(x) * (1 << 70) + 3 for x in rng.integers(0, 1 << 40, size=N)]
    b = [int(x) for x in rng.integers(-5, 6, size=N)]
    expected = [x % q for x in schoolbook_negacyclic(a, b)]
    assert ring.mul(a, b).tolist() == expected


def test_add_neg():
    ring = PolynomialRing(4, 17)
    a = [1, 16, 5, 0]
    b = [16, 16, 12, 3]
    assert ring.add(a, b).tolist() == [0, 15, 0, 3]
    assert ring.neg(a).tolist() == [16, 1, 12, 0]
    assert ring.mul_scalar(a, 3).tolist() == [3, 14, 15, 0]


def test_mod_center_range():
    ring = PolynomialRing(4, 10)
    assert ring.mod_center([0, 4, 5, 9]).tolist() == [0, 4, -5, -1]


def test_power_of_two_required():
    with pytest.raises(ValueError):
        PolynomialRing(12, 97)


def test_gaussian_is_bounded():
    gaussian = DiscreteGaussian(3.2, 1024, rng=np.random.default_rng(1))
    samples = gaussian.sample_bounded(bound=18)
    assert samples.shape == (1024,)
    assert np.all(np.abs(samples) <= 18)


def test_ring_reduce():
    ring = PolynomialRing(4, 17)
    assert ring.reduce([-1, 17, 35, 16]).tolist() == [16, 0, 1, 16]


def test_as_poly_keeps_big_integers():
    big = (1 << 100) + 1
    assert as_poly([big, -big, 0]).tolist() == [big, -big, 0]


@pytest.mark.parametrize("bad", [
    np.arange(8).reshape(2, 4),
    np.int64(3),
    7,
    [[1, 2], [3, 4]],
    [1.5, 2],
])
def test_as_poly_rejects_non_flat_integer_input(bad):
    with pytest.raises(MalformedInput):
        as_poly(bad)
