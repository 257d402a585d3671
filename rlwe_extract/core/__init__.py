"""RLWE symmetric encryption over Z[X]/(X^n + 1) with coefficient extraction."""

from .ciphertext import Ciphertext, ExtractedCiphertext, Plaintext
from .context import ModulusChain, RingContext, build_mod_chain
from .errors import FHEError, IndexOutOfRange, InvalidParameters, MalformedInput
from .keys import SecretKey
from .params import DEFAULT_PARAMETERS, RingParameters
from .polynomial import PolynomialRing, rotate_negacyclic
from .sampling import NumpySampler, Sampler
from .scheme import CoefficientExtractionScheme, decrypt, decrypt_full, encrypt, extract

__all__ = [
    "Ciphertext", "ExtractedCiphertext", "Plaintext",
    "ModulusChain", "RingContext", "build_mod_chain",
    "FHEError", "IndexOutOfRange", "InvalidParameters", "MalformedInput",
    "SecretKey",
    "DEFAULT_PARAMETERS", "RingParameters",
    "PolynomialRing", "rotate_negacyclic",
    "NumpySampler", "Sampler",
    "CoefficientExtractionScheme", "decrypt", "decrypt_full", "encrypt", "extract",
]
