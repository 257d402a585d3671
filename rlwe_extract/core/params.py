"""
Public parameters for the RLWE scheme.

The defaults reproduce the reference driver: cyclotomic index m = 64
(ring degree n = 32), plaintext modulus 101, three ciphertext primes and a
secret key of Hamming weight 16.
"""

from pydantic import BaseModel, ConfigDict, Field


class RingParameters(BaseModel):
    """Public parameters; validated field bounds only, ring checks live in RingContext"""
    model_config = ConfigDict(frozen=True)

    n: int = 32                                 # Ring degree, X^n + 1
    p: int = 101                                # Plaintext modulus
    num_primes: int = Field(3, ge=1)            # Length of the ciphertext prime chain
    prime_bits: int = Field(40, ge=8, le=62)    # Each chain prime is just above 2^prime_bits
    sigma: float = Field(3.2, gt=0)             # Std deviation of the error distribution
    hamming_weight: int = Field(16, ge=1)       # Nonzero coefficients in the secret key


DEFAULT_PARAMETERS = RingParameters()
