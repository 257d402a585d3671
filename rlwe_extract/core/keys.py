import numpy as np


class SecretKey:
    """Sparse ternary secret polynomial, shared read-only by encrypt and decrypt"""

    def __init__(self, poly):
        self._poly = np.array(poly, dtype=np.int64)
        self._poly.flags.writeable = False

    def get_polynomial(self):
        return self._poly

    @property
    def degree(self):
        return len(self._poly)

    @property
    def hamming_weight(self):
        return int(np.count_nonzero(self._poly))

    def __repr__(self):
        return f"SecretKey(N={self.degree}, hw={self.hamming_weight})"
