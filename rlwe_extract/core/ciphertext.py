"""Immutable plaintext and ciphertext containers."""

from .polynomial import as_poly


def _frozen(a):
    poly = as_poly(a)
    poly.flags.writeable = False
    return poly


class Plaintext:
    def __init__(self, poly, params=None):
        self._poly = _frozen(poly)
        self.params = dict(params or {})

    def get_poly(self):
        return self._poly

    def tolist(self):
        return [int(x) for x in self._poly]

    def __len__(self):
        return len(self._poly)


class Ciphertext:
    """Full RLWE ciphertext; a well-formed one has exactly two parts (c0, c1)"""

    def __init__(self, components, params=None):
        self._components = tuple(_frozen(c) for c in components)
        self.params = dict(params or {})

    def get_components(self):
        return list(self._components)

    @property
    def size(self):
        return len(self._components)

    def __repr__(self):
        return f"Ciphertext(size={self.size}, params={self.params})"


class ExtractedCiphertext:
    """
    Length n+1 vector r encrypting a single coefficient: decryption is
    r[n] + sum(r[i] * s[i]) centered mod Q, then reduced mod p.
    """

    def __init__(self, coeffs, loc, params=None):
        self._coeffs = _frozen(coeffs)
        self.loc = loc
        self.params = dict(params or {})

    def get_coeffs(self):
        return self._coeffs

    def tolist(self):
        return [int(x) for x in self._coeffs]

    def __len__(self):
        return len(self._coeffs)

    def __eq__(self, other):
        if not isinstance(other, ExtractedCiphertext):
            return NotImplemented
        return self.loc == other.loc and self.tolist() == other.tolist()

    def __hash__(self):
        return hash((self.loc, tuple(self.tolist())))

    def __repr__(self):
        return f"ExtractedCiphertext(loc={self.loc}, length={len(self)})"
