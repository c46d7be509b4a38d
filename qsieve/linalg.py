#####################################################
# Step 5: Find sets of Q(x) whose product is square #
#####################################################

import logging
from dataclasses import dataclass

import numpy as np
import tqdm

logger = logging.getLogger(__name__)

@dataclass(frozen=True, eq=False)
class GF2Row:
    """
    An exponent vector mod 2, and the relations that were added up to get it.

    :param bits: Read-only boolean vector, one entry per factor base prime.
    :param provenance: Offsets of the relations whose sum this row is.
        The first entry is the offset the row started out as.
    """
    bits: np.ndarray
    provenance: tuple[int, ...]

    def __post_init__(self):
        bits = np.array(self.bits, dtype=bool)
        bits.flags.writeable = False
        object.__setattr__(self, "bits", bits)

    @property
    def is_zero(self) -> bool:
        return not self.bits.any()

    def add(self, other: "GF2Row") -> "GF2Row":
        """
        Row addition over GF(2).

        The bits are XORed. The provenances are added the same way: an offset
        present in both rows cancels out, offsets only in other are appended.
        """
        mine, theirs = set(self.provenance), set(other.provenance)
        provenance = tuple(i for i in self.provenance if i not in theirs) \
            + tuple(i for i in other.provenance if i not in mine)
        return GF2Row(self.bits ^ other.bits, provenance)

def reduce_mod_two(relations) -> list[GF2Row]:
    """Build the exponent matrix mod 2, one row per relation."""
    return [
        GF2Row(np.array(r.exponents, dtype=np.int64) % 2 == 1, (r.offset,))
        for r in relations
    ]

def eliminate(rows, progress=False) -> list[GF2Row]:
    """
    Gaussian elimination mod 2 into row echelon form.

    Column by column: the first row at or below the current pivot row with a
    1 in the column becomes the pivot and is swapped into place, then it is
    added to every row below it that has a 1 in the column. A column without
    a candidate pivot is skipped and the pivot row stays where it is.

    The input rows are not modified, a new list of rows is returned.

    :param rows: GF2Rows of equal width.
    :param progress: Show a tqdm progress bar over the columns.
    :return: The rows after elimination.
    """
    rows = list(rows)   # don't reorder the caller's list
    if not rows:
        return rows

    n_rows, n_cols = len(rows), len(rows[0].bits)
    if any(len(row.bits) != n_cols for row in rows):
        raise ValueError("all rows must have the same number of columns")

    pivot_row = 0
    for j in tqdm.tqdm(range(n_cols), desc="Elimination", disable=not progress):
        if pivot_row == n_rows:
            break

        for i in range(pivot_row, n_rows):
            if rows[i].bits[j]: break
        else: continue # no row left with this prime

        rows[pivot_row], rows[i] = rows[i], rows[pivot_row]
        pivot = rows[pivot_row]

        for i in range(pivot_row + 1, n_rows):
            if rows[i].bits[j]:
                rows[i] = rows[i].add(pivot)

        pivot_row += 1

    logger.debug("Elimination: %d rows, %d columns, rank %d", n_rows, n_cols, pivot_row)
    return rows

def find_dependencies(rows) -> list[tuple[int, ...]]:
    """
    Provenance of every all-zero row.

    Each one is a set of relations whose Q(x) multiply to a square. Rows
    that were zero before elimination are never touched by it, so they are
    reported with their own offset only.
    """
    return [row.provenance for row in rows if row.is_zero]

def find_sets_of_squares(relations, progress=False) -> list[tuple[int, ...]]:
    """
    Given relations, find subsets of them whose Q(x) multiply to a square.

    :param relations: List of exponents.Relation.
    :return: List of dependencies, each a tuple of relation offsets.
    """
    rows = reduce_mod_two(relations)
    dependencies = find_dependencies(eliminate(rows, progress=progress))
    logger.info("Found %d dependencies among %d relations", len(dependencies), len(rows))
    return dependencies
