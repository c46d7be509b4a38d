"""
Parameters shared by every stage of the sieve, and the validation of the
values an external driver hands in.
"""

import numbers

DEFAULT_BOUND = 1000    # factor base bound if the caller does not pick one
SIEVE_RANGE = 50000     # the interval [-R, R] around sqrt(N)
RELATION_SURPLUS = 32   # relations kept on top of the factor base size


class ConfigurationError(ValueError):
    """Raised for parameters that make a run meaningless. Nothing is computed."""


def _is_int(value) -> bool:
    # bool is Integral too, but True is not a bound
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)

def validate_parameters(N: int, bound: int, sieve_range: int=SIEVE_RANGE):
    """
    Check the inputs of a factoring run.

    :param N: The integer to be factored.
    :param bound: The factor base bound.
    :param sieve_range: R, the half width of the sieving interval.
    :raises ConfigurationError: if any of the values is unusable.
    """
    if not _is_int(N) or N <= 1:
        raise ConfigurationError(f"N must be an integer greater than 1, got {N!r}")
    validate_bound(bound)
    if not _is_int(sieve_range) or sieve_range < 1:
        raise ConfigurationError(f"sieve range must be a positive integer, got {sieve_range!r}")

def validate_bound(bound: int):
    if not _is_int(bound) or bound < 2:
        raise ConfigurationError(f"factor base bound must be an integer >= 2, got {bound!r}")

def resolve_max_relations(max_relations, factor_base_size: int):
    """
    Translate the max_relations option into a row limit for the elimination.

    "auto" keeps RELATION_SURPLUS relations more than there are columns,
    None keeps every smooth relation.
    """
    if max_relations is None:
        return None
    if max_relations == "auto":
        return factor_base_size + RELATION_SURPLUS
    if not _is_int(max_relations) or max_relations < 1:
        raise ConfigurationError(f"max_relations must be 'auto', None or a positive integer, got {max_relations!r}")
    return max_relations
