###########################################
# Step 2: Evaluate Q(x) over the interval #
###########################################

import math
from dataclasses import dataclass

@dataclass
class Candidate:
    """
    One point of the sieving interval.

    :param offset: i, the signed offset from sqrt(N). Identifies the candidate.
    :param x: floor(sqrt(N)) + i
    :param value: Q(i) = x² - N, may be negative or zero.
    :param residual: |value| with every factor base prime divided out,
        None until the residual reducer has run.
    """
    offset: int
    x: int
    value: int
    residual: int | None = None

    @property
    def is_smooth(self) -> bool:
        return self.residual == 1

def candidates_in(N: int, start: int, stop: int, sqrt_N: int | None = None) -> list[Candidate]:
    """Candidates for the offsets start <= i < stop."""
    if sqrt_N is None:
        sqrt_N = math.isqrt(N)
    candidates = []
    for i in range(start, stop):
        x = sqrt_N + i
        candidates.append(Candidate(offset=i, x=x, value=x*x - N))
    return candidates

def sieve_candidates(N: int, sieve_range: int) -> list[Candidate]:
    """
    Evaluate Q(i) = (floor(sqrt(N)) + i)² - N for every i in [-R, R].

    sqrt(N) is math.isqrt, so the values are exact for any size of N.

    :param N: The integer to be factored.
    :param sieve_range: R, the half width of the interval.
    :return: 2R + 1 candidates in increasing offset order.
    """
    return candidates_in(N, -sieve_range, sieve_range + 1)
