#############################
# Step 1: Build factor base #
#############################

import numpy as np

from qsieve.params import validate_bound

SIGN = -1   # pseudo-prime in column 0, tracks the sign of Q(x)

def primes_up_to(bound: int) -> list[int]:
    """
    Sieve of Eratosthenes.

    :param bound: Inclusive upper limit.
    :return: All primes p <= bound, in increasing order.
    """
    if bound < 2:
        return []
    is_prime = np.ones(bound + 1, dtype=bool)
    is_prime[:2] = False
    for p in range(2, int(bound**0.5) + 1):
        if is_prime[p]:
            # every smaller multiple was already crossed out by a smaller prime
            is_prime[p*p::p] = False
    return [int(p) for p in np.flatnonzero(is_prime)]

def build_factor_base(bound: int) -> tuple[int, ...]:
    """
    Build the factor base for the Quadratic Sieve algorithm.

    Unlike the variants that keep only primes where N is a quadratic residue,
    this factor base contains every prime p <= bound. Primes that can never
    divide Q(x) simply end up with all-zero columns.

    :param bound: The bound for the factor base.
    :return: (-1, 2, 3, 5, ...), the sign pseudo-prime followed by the primes.
    """
    validate_bound(bound)
    return (SIGN, *primes_up_to(bound))
