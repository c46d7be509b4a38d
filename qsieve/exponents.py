##############################################
# Step 4: Exponent vectors of smooth numbers #
##############################################

from dataclasses import dataclass

from qsieve.factor_base import SIGN

@dataclass(frozen=True)
class Relation:
    """A smooth candidate together with its full factorization over the factor base."""
    offset: int
    x: int
    value: int
    exponents: tuple[int, ...]

def factor_exponents(value: int, factor_base) -> tuple[int, ...] | None:
    """
    Exponent vector of value over the factor base.

    exponents[i] = exponent of factor_base[i] in value, where
    exponents[0] = 1 if value is negative, else 0.

    :return: The exponent vector, or None if value does not factor completely.
    """
    if value == 0:
        return None
    exponents = [0] * len(factor_base)
    if value < 0:
        exponents[0] = 1
        value = -value

    for j, p in enumerate(factor_base):
        if p == SIGN:
            continue
        exp = 0
        while value % p == 0:
            exp += 1
            value //= p
        exponents[j] = exp

        if value == 1:
            break   # remaining primes keep exponent 0

    if value != 1:
        return None
    return tuple(exponents)

def build_exponent_matrix(factor_base, candidates) -> list[Relation]:
    """
    Given reduced candidates, return one Relation per smooth candidate.

    The exponents are recomputed from the original signed value rather than
    taken from the residual pass, which only had to detect smoothness and did
    not count multiplicities.

    :param factor_base: (-1, p1, p2, ...).
    :param candidates: Candidates whose residual has been set by reduce_residuals.
    :return: Relations in the order of the candidates.
    """
    relations = []
    for c in candidates:
        if c.residual is None:
            raise ValueError(f"candidate at offset {c.offset} has not been reduced yet")
        if not c.is_smooth:
            continue

        exponents = factor_exponents(c.value, factor_base)
        if exponents is None:
            raise ValueError(f"Q(x) = {c.value} at offset {c.offset} was marked smooth "
                             "but does not factor over the factor base")
        relations.append(Relation(c.offset, c.x, c.value, exponents))

    return relations
