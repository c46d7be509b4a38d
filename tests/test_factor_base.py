import unittest

import numpy as np

from qsieve.factor_base import build_factor_base, primes_up_to
from qsieve.params import ConfigurationError


class TestPrimesUpTo(unittest.TestCase):

    def test_small_bounds(self):
        self.assertEqual(primes_up_to(1), [])
        self.assertEqual(primes_up_to(2), [2])
        self.assertEqual(primes_up_to(30), [2, 3, 5, 7, 11, 13, 17, 19, 23, 29])

    def test_prime_count(self):
        """pi(100) = 25, pi(1000) = 168"""
        self.assertEqual(len(primes_up_to(100)), 25)
        self.assertEqual(len(primes_up_to(1000)), 168)

    def test_returns_python_ints(self):
        self.assertTrue(all(type(p) is int for p in primes_up_to(50)))


class TestBuildFactorBase(unittest.TestCase):

    def test_bound_10(self):
        self.assertEqual(build_factor_base(10), (-1, 2, 3, 5, 7))

    def test_prime_bound_is_included(self):
        self.assertEqual(build_factor_base(11)[-1], 11)
        self.assertEqual(build_factor_base(2), (-1, 2))

    def test_sorted_and_signed(self):
        base = build_factor_base(1000)
        self.assertEqual(base[0], -1)
        self.assertEqual(list(base[1:]), sorted(base[1:]))
        self.assertEqual(len(base), 169)

    def test_numpy_bound(self):
        self.assertEqual(build_factor_base(np.int64(10)), (-1, 2, 3, 5, 7))

    def test_invalid_bounds(self):
        for bound in (1, 0, -7, 2.5, "100", None, True):
            with self.assertRaises(ConfigurationError, msg=f"bound={bound!r}"):
                build_factor_base(bound)

    def test_configuration_error_is_value_error(self):
        with self.assertRaises(ValueError):
            build_factor_base(0)


if __name__ == '__main__':
    unittest.main()
