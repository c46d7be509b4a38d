import unittest

from qsieve.exponents import Relation, build_exponent_matrix, factor_exponents
from qsieve.factor_base import build_factor_base
from qsieve.residuals import reduce_residuals
from qsieve.sieving import sieve_candidates


def recombine(exponents, factor_base):
    value = -1 if exponents[0] % 2 else 1
    for p, e in zip(factor_base[1:], exponents[1:]):
        value *= p ** e
    return value


class TestFactorExponents(unittest.TestCase):

    def setUp(self):
        self.base = build_factor_base(13)   # (-1, 2, 3, 5, 7, 11, 13)

    def test_negative_value(self):
        self.assertEqual(factor_exponents(-130, self.base), (1, 1, 0, 1, 0, 0, 1))

    def test_square(self):
        self.assertEqual(factor_exponents(49, self.base), (0, 0, 0, 0, 2, 0, 0))

    def test_multiplicity(self):
        self.assertEqual(factor_exponents(2**5 * 3**3 * 13, self.base), (0, 5, 3, 0, 0, 0, 1))

    def test_one(self):
        self.assertEqual(factor_exponents(1, self.base), (0,) * 7)
        self.assertEqual(factor_exponents(-1, self.base), (1,) + (0,) * 6)

    def test_not_smooth(self):
        self.assertIsNone(factor_exponents(-307, self.base))
        self.assertIsNone(factor_exponents(2 * 17, self.base))
        self.assertIsNone(factor_exponents(0, self.base))


class TestBuildExponentMatrix(unittest.TestCase):

    def test_relations_for_8051(self):
        N = 8051
        base = build_factor_base(50)
        candidates = sieve_candidates(N, 500)
        reduce_residuals(N, base, candidates)

        relations = build_exponent_matrix(base, candidates)
        smooth_offsets = [c.offset for c in candidates if c.is_smooth]

        self.assertTrue(relations)
        self.assertEqual([r.offset for r in relations], smooth_offsets)
        for r in relations:
            self.assertIsInstance(r, Relation)
            self.assertEqual(len(r.exponents), len(base))
            self.assertEqual(r.exponents[0], 1 if r.value < 0 else 0)
            self.assertEqual(recombine(r.exponents, base), r.value)
            self.assertEqual(r.value, r.x * r.x - N)

    def test_offset_1_is_a_square(self):
        base = build_factor_base(10)
        candidates = sieve_candidates(8051, 1)
        reduce_residuals(8051, base, candidates)
        relations = build_exponent_matrix(base, candidates)
        self.assertIn(Relation(offset=1, x=90, value=49, exponents=(0, 0, 0, 0, 2)), relations)

    def test_unreduced_candidates(self):
        with self.assertRaises(ValueError):
            build_exponent_matrix(build_factor_base(10), sieve_candidates(8051, 1))


if __name__ == '__main__':
    unittest.main()
