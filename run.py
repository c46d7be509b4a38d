#!/usr/bin/env python3
"""
Entry point for the quadratic sieve.
Run with `python run.py [args]`
i.e. `python run.py -h` for help.
"""

import sys

if __name__ == "__main__":
    from qsieve import quadratic_sieve
    sys.exit(quadratic_sieve.main())
