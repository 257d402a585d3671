"""
Encrypt a random polynomial once, then extract and decrypt every coefficient.
"""
import argparse
import logging

from rlwe_extract.core.params import RingParameters
from rlwe_extract.core.sampling import NumpySampler
from rlwe_extract.core.scheme import CoefficientExtractionScheme


def run(params, seed=None):
    """Returns the list of coefficient indices that failed to decrypt"""
    sampler = NumpySampler(seed=seed, sigma=params.sigma)
    fhe = CoefficientExtractionScheme(params, sampler=sampler)
    fhe.key_generation()

    message = sampler.rng.integers(0, fhe.p, size=fhe.N)
    ct = fhe.encrypt(fhe.encode(message.tolist()))

    failures = []
    for loc in range(fhe.N):
        if fhe.decrypt(fhe.extract(ct, loc)) != message[loc]:
            print(f"fail at {loc} loc")
            failures.append(loc)
    return failures


def main(argv=None):
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--m", type=int, default=64, help="cyclotomic index; ring degree is m/2")
    parser.add_argument("--p", type=int, default=101, help="plaintext modulus")
    parser.add_argument("--levels", type=int, default=3, help="primes in the ciphertext chain")
    parser.add_argument("--hw", type=int, default=16, help="Hamming weight of the secret key")
    parser.add_argument("--seed", type=int, default=None)
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO)
    params = RingParameters(n=args.m >> 1, p=args.p, num_primes=args.levels,
                            hamming_weight=args.hw)

    print("--- COEFFICIENT EXTRACTION TEST ---")
    failures = run(params, seed=args.seed)
    if failures:
        print(f" FAILED at {len(failures)} of {params.n} coefficients")
        return 1
    print(f" SUCCESS: all {params.n} coefficients recovered")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
