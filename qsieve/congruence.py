##########################################################################
# Step 6: Turn dependencies into x² ≡ y² (mod N) and split N with gcds   #
##########################################################################

import logging
import math

import gmpy2

logger = logging.getLogger(__name__)

def reconstruct(N: int, dependency) -> set[int]:
    """
    Rebuild x and y from a dependency and extract factors of N.

    x is the product of the sqrt_N + i, and y² the product of the Q(i) for
    the offsets i in the dependency. The Q(i) multiply to a perfect square
    (with positive sign), so y is its exact integer square root.

    :param N: The integer to be factored.
    :param dependency: Offsets i of the relations that multiply to a square.
    :return: Factors of N found, possibly empty.
    """
    sqrt_N = math.isqrt(N)
    X = gmpy2.mpz(1)
    Y2 = gmpy2.mpz(1)
    for i in dependency:
        x_i = sqrt_N + i
        X = (X * x_i) % N
        Y2 *= x_i * x_i - N

    if Y2 < 0 or not gmpy2.is_square(Y2):
        raise ValueError(f"Q(x) product for offsets {list(dependency)} is not a square")
    Y = gmpy2.isqrt(Y2) % N

    return split(N, int(X), int(Y))

def split(N: int, x: int, y: int) -> set[int]:
    """
    Factors of N from a congruence x² ≡ y² (mod N).

    If x ≡ ±y (mod N) the gcds can only be 1 or N, so nothing is returned.
    Otherwise each nontrivial gcd(N, x ± y) is a factor, and so is its cofactor.
    """
    x, y = x % N, y % N
    if x == y or x == (-y) % N:
        logger.debug("Degenerate congruence x ≡ ±y (mod N), x=%s, y=%s", x, y)
        return set()

    factors = set()
    for g in (math.gcd(N, x + y), math.gcd(N, x - y)):
        if 1 < g < N:
            factors.add(g)
            factors.add(N // g)
    return factors

def complete_factors(factors) -> set[int]:
    """
    Divide factors by each other until no new factor appears.

    For every f1 > f2 where f2 divides f1, f1 // f2 is a factor as well.
    Runs to a fixed point: the set only grows, and it stops growing once a
    full scan produces nothing new.
    """
    factors = set(factors)
    while True:
        new = {
            f1 // f2
            for f1 in factors
            for f2 in factors
            if f1 > f2 > 1 and f1 % f2 == 0
        }
        if new <= factors:
            return factors
        factors |= new

def reconstruct_all(N: int, dependencies) -> set[int]:
    """Try every dependency and return the completed set of factors found."""
    factors = set()
    degenerate = 0
    for dependency in dependencies:
        found = reconstruct(N, dependency)
        if not found:
            degenerate += 1
        factors |= found

    logger.debug("%d of %d dependencies gave no factor", degenerate, len(dependencies))
    return complete_factors(factors)

def factor_base_divisors(N: int, factor_base) -> set[int]:
    """
    Factors of N that are primes of the factor base, with their cofactors.

    For N = 2q with q odd, x² ≡ y² (mod N) forces x ≡ ±y (mod N), so no
    dependency can split N. The prime 2 is always in the factor base.
    """
    factors = set()
    for p in factor_base:
        if 1 < p < N and N % p == 0:
            factors.add(p)
            factors.add(N // p)
    return factors
