"""Error kinds raised by the ring, encryption and extraction layers."""


class FHEError(Exception):
    pass


class InvalidParameters(FHEError, ValueError):
    """Ring or modulus chain cannot be built from the given parameters."""


class MalformedInput(FHEError, ValueError):
    """A ciphertext, plaintext or key has the wrong shape."""


class IndexOutOfRange(FHEError, IndexError):
    """Extraction index outside [0, n)."""
