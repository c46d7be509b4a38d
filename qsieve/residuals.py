####################################################
# Step 3: Strip the factor base out of every Q(x)  #
####################################################

import logging

import numpy as np
import tqdm
from sympy import sqrt_mod

from qsieve.factor_base import SIGN

logger = logging.getLogger(__name__)

def reduce_residuals(N, factor_base, candidates, progress=False) -> list[int]:
    """
    Divide every factor base prime out of every candidate, one sieve pass per prime.

    p divides Q(i) = (sqrt_N + i)² - N exactly when sqrt_N + i ≡ r (mod p)
    for a square root r of N mod p. So for each root we compute the first slot
    of its residue class and walk the interval with stride p, instead of
    testing every candidate against every prime.

    The residual (absolute value of what is left) is written to each
    candidate in place, and also returned in the same order.

    :param N: The integer to be factored.
    :param factor_base: (-1, p1, p2, ...), see factor_base.build_factor_base.
    :param candidates: Candidates for consecutive offsets, see sieving.sieve_candidates.
    :param progress: Show a tqdm progress bar over the primes.
    :return: List of residuals. A residual of 1 means the candidate is smooth.
    """
    if not candidates:
        return []
    _check_consecutive(candidates)

    first_x = candidates[0].x
    values = np.array([c.value for c in candidates], dtype=object)

    for p in tqdm.tqdm(factor_base, desc="Residuals", disable=not progress):
        if p == SIGN:
            continue

        roots = sqrt_mod(N % p, p, all_roots=True) or []
        for r in roots: # won't run if N is not a square mod p
            start = (int(r) - first_x) % p
            indices = np.arange(start, len(values), p)
            # Q(x) = 0 is divisible by everything, leave it alone
            indices = indices[values[indices] != 0]

            while indices.size:
                values[indices] //= p
                indices = indices[values[indices] % p == 0]

    residuals = [abs(int(v)) for v in values]
    for candidate, residual in zip(candidates, residuals):
        candidate.residual = residual

    logger.debug("Residual pass over %d candidates: %d smooth",
                 len(candidates), residuals.count(1))
    return residuals

def _check_consecutive(candidates):
    first = candidates[0].offset
    for k, c in enumerate(candidates):
        if c.offset != first + k:
            raise ValueError(f"candidates must cover consecutive offsets in order, "
                             f"expected offset {first + k} at position {k}, got {c.offset}")
