#!/usr/bin/env python3
"""
Command line interface for the quadratic sieve.

- in command line
>  python run.py 8051 50
>  python -m qsieve.quadratic_sieve -h
- in Python
>  from qsieve.complete import factorize

Exit status: 0 if factors were found, 1 if not, 2 for bad parameters.
"""

import argparse
import logging
import sys

from qsieve.complete import format_timing, quadratic_sieve
from qsieve.params import DEFAULT_BOUND, SIEVE_RANGE, ConfigurationError

def get_composite(bits: int) -> int:
    """Random N = p*q with p, q primes of about bits/2 bits each."""
    import Crypto.Util.number as number

    _validate_bits(bits)

    p = number.getPrime(bits//2)
    q = number.getPrime(bits//2 + (1 if bits % 2 else 0))
    N = p * q
    print(f"Generated {bits}-bit / {len(str(N))}-digit composite\n| {N} = \n| {p} \n|  * \n| {q}")
    return N

def _validate_bits(bits: int):
    if 6 < bits < 64:
        pass  # reasonable
    elif 64 <= bits <= 4096:
        print(f"Warning! {bits} bits are a lot for a single polynomial sieve. "
              "This computation may never complete!", file=sys.stderr)
    else:
        raise ConfigurationError("--gen-composite must be at least 7 bits, and not too large.")

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="qsieve",
        description="Factor a composite integer with the quadratic sieve.")
    parser.add_argument("N", type=int, nargs="?", default=None,
                        help="Composite number to factor (incompatible with --gen-composite).")
    parser.add_argument("B", type=int, nargs="?", default=DEFAULT_BOUND,
                        help=f"Factor base bound (default: {DEFAULT_BOUND}).")
    parser.add_argument("-g", "--gen-composite", type=int, metavar="BITS", default=None,
                        help="Generate a random composite N = p*q of this many bits and factor it.")
    parser.add_argument("-r", "--sieve-range", type=int, default=SIEVE_RANGE,
                        help=f"Sieve over [-R, R] around sqrt(N) (default: {SIEVE_RANGE}).")
    parser.add_argument("-C", "--chunks", type=int, default=1,
                        help="Number of chunks to split the sieving into. Can be larger than -J.")
    parser.add_argument("-J", "--jobs", type=int, default=1,
                        help="Number of processes to sieve the chunks with.")
    parser.add_argument("-R", "--retries", type=int, default=0,
                        help="Number of retries with a larger bound if no factor is found.")
    parser.add_argument("-RF", "--retry-factor", type=float, default=1.5,
                        help="Factor to increase the bound B by on each retry.")
    parser.add_argument("-p", "--progress", action="store_true",
                        help="Show progress bars.")
    parser.add_argument("-t", "--timing", action="store_true",
                        help="Print the time spent in each stage.")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Log stage summaries.")
    parser.add_argument("-vv", "--very-verbose", action="store_true",
                        help="Log everything, including every dependency.")
    return parser

def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    level = logging.DEBUG if args.very_verbose else logging.INFO if args.verbose else logging.WARNING
    logging.basicConfig(level=level, format='[%(asctime)s] %(levelname)s: %(message)s')

    try:
        if args.N is not None and args.gen_composite is not None:
            raise ConfigurationError("N and --gen-composite are mutually exclusive.")
        if args.gen_composite is not None:
            N = get_composite(args.gen_composite)
        elif args.N is not None:
            N = args.N
        else:
            raise ConfigurationError("One of N or --gen-composite must be given.")

        report = quadratic_sieve(
            N,
            args.B,
            sieve_range=args.sieve_range,
            chunks=args.chunks,
            jobs=args.jobs,
            retries=args.retries,
            retry_factor=args.retry_factor,
            progress=args.progress,
            timing=args.timing,
            )
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    if args.timing:
        print(format_timing(report))

    if not report.found:
        print(f"No factors found for {N}. N is prime or the parameters were insufficient, try increasing B.")
        return 1

    print(f"Factors of {N}: {', '.join(str(f) for f in sorted(report.factors))}")
    return 0

if __name__ == "__main__":
    sys.exit(main())
