"""
Candidate generation and residual reduction over the whole interval,
optionally split into chunks that run in parallel processes.

Every chunk owns a disjoint slice of the interval, so the workers never
write to the same candidate. Results are put back together in offset order.
"""

import logging
import math

import tqdm

from qsieve.residuals import reduce_residuals
from qsieve.sieving import candidates_in

logger = logging.getLogger(__name__)

def sieve_and_reduce(N, factor_base, sieve_range, chunks=1, jobs=1, progress=False):
    """
    Evaluate Q(i) for i in [-R, R] and reduce every value over the factor base.

    Will only parallelize if chunks > 1.

    :param N: The integer to be factored.
    :param factor_base: (-1, p1, p2, ...).
    :param sieve_range: R, the half width of the interval.
    :param chunks: Number of slices to split the interval into.
    :param jobs: Number of worker processes for the slices.
    :param progress: Show tqdm progress bars.
    :return: All candidates, in increasing offset order, with residuals set.
    """
    if chunks < 1:
        raise ValueError("chunks must be at least 1")
    if jobs < 1:
        raise ValueError("jobs must be at least 1")

    sqrt_N = math.isqrt(N)
    interval_min, interval_max = -sieve_range, sieve_range + 1
    interval_len = interval_max - interval_min
    chunks = min(chunks, interval_len)

    if chunks == 1:     # single-core sieving
        return _sieve_worker(N, sqrt_N, factor_base, interval_min, interval_max, progress)

    chunk_size = interval_len // chunks
    bounds = [
        (i*chunk_size, (i+1)*chunk_size if i != chunks-1 else interval_len)
        for i in range(chunks)
    ]
    inputs = [
        (N, sqrt_N, factor_base, interval_min + start, interval_min + end)
        for start, end in bounds
    ]
    logger.debug("Sieving %d offsets in %d chunks on %d processes", interval_len, chunks, jobs)

    import multiprocessing.pool

    with multiprocessing.pool.Pool(processes=jobs) as pool:
        results = list(tqdm.tqdm(pool.imap(sieve_worker_controller, inputs),
                                 total=len(inputs), desc="Sieving (chunks)", disable=not progress))

    candidates = []
    for chunk in results:
        candidates.extend(chunk)
    return candidates

def sieve_worker_controller(args):
    """Multi-processing compatible helper."""
    return _sieve_worker(*args)

def _sieve_worker(N, sqrt_N, factor_base, start, end, progress=False):
    candidates = candidates_in(N, start, end, sqrt_N=sqrt_N)
    reduce_residuals(N, factor_base, candidates, progress=progress)
    return candidates
