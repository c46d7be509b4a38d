"""
The complete pipeline: parameters, sieving, linear algebra and reconstruction,
with logging, timing, progress bars and retries on top.

    factorize(N, bound)          -> set of factors
    quadratic_sieve(N, bound)    -> SieveReport with the factors and run statistics
"""

import logging
import time
from dataclasses import dataclass, field

from qsieve.congruence import (complete_factors, factor_base_divisors,
                               reconstruct_all)
from qsieve.exponents import build_exponent_matrix
from qsieve.factor_base import build_factor_base
from qsieve.linalg import find_sets_of_squares
from qsieve.parallel_sieving import sieve_and_reduce
from qsieve.params import (DEFAULT_BOUND, SIEVE_RANGE, ConfigurationError,
                           resolve_max_relations, validate_parameters)

logger = logging.getLogger(__name__)

@dataclass
class SieveReport:
    """Outcome of one run of the quadratic sieve."""
    N: int
    bound: int
    factor_base_size: int = 0
    candidates: int = 0
    smooth: int = 0
    relations_used: int = 0
    dependencies: int = 0
    factors: set[int] = field(default_factory=set)
    insufficient_relations: bool = False
    timing: list[tuple[str, float]] = field(default_factory=list)
    attempts: list["SieveReport"] = field(default_factory=list)   # earlier runs with smaller bounds

    @property
    def found(self) -> bool:
        return bool(self.factors)

    @property
    def total_time(self) -> float:
        """Seconds recorded over this run and every earlier attempt."""
        return sum(s for run in (*self.attempts, self) for _, s in run.timing)

class _Timer:
    """Records (stage, seconds) pairs if enabled."""
    def __init__(self, enabled: bool):
        self.enabled = enabled
        self.records = []
        self._last = time.perf_counter()

    def mark(self, stage: str):
        if not self.enabled:
            return
        now = time.perf_counter()
        self.records.append((stage, now - self._last))
        self._last = now

def format_timing(report: SieveReport) -> str:
    lines = ["Timing:"]
    for run in (*report.attempts, report):
        if report.attempts:
            lines.append(f"B = {run.bound}")
        for stage, seconds in run.timing:
            lines.append(f"{stage:<16}: {seconds:.3f} s")
    lines.append(f"Total time taken: {report.total_time:.3f} s")
    return "\n".join(lines)

def factorize(N: int, bound: int=DEFAULT_BOUND, **kwargs) -> set[int]:
    """
    Factor N with the quadratic sieve.

    :param N: The integer to be factored (should be a composite number).
    :param bound: The bound for the factor base.
    :param kwargs: Passed on to quadratic_sieve.
    :return: Set of proper divisors of N found. Empty if none was found,
        which means N is prime or the parameters were insufficient.
    """
    return quadratic_sieve(N, bound, **kwargs).factors

def quadratic_sieve(
        N: int,
        bound: int=DEFAULT_BOUND,
        sieve_range: int=SIEVE_RANGE,
        max_relations: int|str|None="auto",
        chunks: int=1,
        jobs: int=1,
        retries: int=0,
        retry_factor: float=1.5,
        progress: bool=False,
        timing: bool=False,
        ) -> SieveReport:
    """
    Quadratic Sieve algorithm

    :param N: The integer to be factored (should be a composite number).
    :param bound: The bound for the factor base.
    :param sieve_range: R, the sieving interval is [-R, R] around sqrt(N).
    :param max_relations: Relations handed to the elimination: "auto" for
        factor base size + RELATION_SURPLUS, None for all of them, or a number.
    :param chunks: The number of chunks to divide the sieving into.
    :param jobs: The number of parallel processes for the chunks.
    :param retries: Number of retries with increased bound if no factor is found.
    :param retry_factor: Factor by which to increase the bound on each retry.
    :param progress: Show tqdm progress bars.
    :param timing: Record the time spent in each stage.
    :return: SieveReport; report.factors is empty if no factor was found.
    :raises ConfigurationError: for unusable parameters, before any work is done.
    """
    validate_parameters(N, bound, sieve_range)
    if chunks < 1 or jobs < 1:
        raise ConfigurationError("chunks and jobs must be at least 1")
    if retries < 0:
        raise ConfigurationError("retries must not be negative")
    if retries and retry_factor <= 1:
        raise ConfigurationError("retry_factor must be greater than 1")
    resolve_max_relations(max_relations, 0)
    # numpy integers would overflow in Q(x)
    N, bound, sieve_range = int(N), int(bound), int(sieve_range)

    report = _run(N, bound, sieve_range, max_relations, chunks, jobs, progress, timing)

    if report.found or retries <= 0:
        return report

    new_bound = max(int(bound * retry_factor), bound + 1)
    logger.info("Retrying with increased bound B = %d (attempts left: %d)", new_bound, retries)
    final = quadratic_sieve(
        N,
        bound=new_bound,
        sieve_range=sieve_range,
        max_relations=max_relations,
        chunks=chunks,
        jobs=jobs,
        retries=retries-1,
        retry_factor=retry_factor,
        progress=progress,
        timing=timing,
        )
    final.attempts.insert(0, report)
    return final

def _run(N, bound, sieve_range, max_relations, chunks, jobs, progress, timing) -> SieveReport:
    timer = _Timer(timing)
    report = SieveReport(N=N, bound=bound)

    ### 1 ###
    factor_base = build_factor_base(bound)
    report.factor_base_size = len(factor_base)
    timer.mark("Factor base")
    logger.info("B = %d, R = %d, size of factor base: %d", bound, sieve_range, len(factor_base))
    logger.debug("Factor base: %s", factor_base)

    ### 2 + 3 ###
    candidates = sieve_and_reduce(N, factor_base, sieve_range, chunks=chunks, jobs=jobs, progress=progress)
    report.candidates = len(candidates)
    timer.mark("Sieving")

    # N = 2q makes every congruence degenerate, so take the base primes dividing N directly
    factors = factor_base_divisors(N, factor_base)
    if factors:
        logger.info("Factors from factor base primes dividing N: %s", sorted(factors))
    # Q(x) = 0 means x² = N
    for c in candidates:
        if c.value == 0 and 1 < abs(c.x) < N:
            logger.info("N is a perfect square of %d", abs(c.x))
            factors.add(abs(c.x))

    ### 4 ###
    relations = build_exponent_matrix(factor_base, candidates)
    report.smooth = len(relations)
    timer.mark("Collection")
    logger.info("Number of relations (fully factored over the factor base): %d", len(relations))

    if len(relations) < len(factor_base):
        report.insufficient_relations = True
        logger.warning("Only %d relations for a factor base of %d primes, "
                       "a dependency is not guaranteed", len(relations), len(factor_base))

    limit = resolve_max_relations(max_relations, len(factor_base))
    if limit is not None and len(relations) > limit:
        # smallest |Q(x)| lies around the middle of the interval
        relations = sorted(relations, key=lambda r: abs(r.offset))[:limit]
    report.relations_used = len(relations)

    ### 5 ###
    dependencies = find_sets_of_squares(relations, progress=progress)
    report.dependencies = len(dependencies)
    timer.mark("Linear algebra")

    ### 6 ###
    factors |= reconstruct_all(N, dependencies)
    report.factors = complete_factors(factors)
    timer.mark("Reconstruction")
    report.timing = timer.records

    if report.found:
        logger.info("Found factors: %s", sorted(report.factors))
    else:
        logger.warning("Tried all %d dependencies, but found no nontrivial factor. "
                       "N is prime or the parameters were insufficient.", len(dependencies))
    return report
