#!/usr/bin/env python3
"""Synthesize and verify the factorial circuit for a given n.

Builds the public inputs [n, n!], fills an n-row table seeded with n, binds
the last product to the expected output and runs the constraint verifier.

Usage:
    python mock_prove.py --n 6
    python mock_prove.py --n 6 --expected 721          # rejected
    python mock_prove.py --n 6 --export build/factorial.json
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from primitives.field import GOLDILOCKS_PRIME
from protocol.circuit import Circuit, CircuitConfig
from protocol.errors import AssignmentError, SchemaError
from protocol.export import write_export
from witness.factorial import factorial

logger = logging.getLogger("mock_prove")


def setup_logging(level: str = "INFO", format_type: str = "structured") -> logging.Logger:
    """Setup logging for the command line run."""
    level_map = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
    }
    log_level = level_map.get(level.upper(), logging.INFO)

    if format_type == "structured":
        formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    else:
        formatter = logging.Formatter('%(levelname)s - %(message)s')

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()
    root_logger.addHandler(handler)

    return logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Synthesize and verify the factorial circuit'
    )
    parser.add_argument(
        '--n',
        type=int,
        default=6,
        help='Seed and row count; the circuit computes n! (default: 6)'
    )
    parser.add_argument(
        '--expected',
        type=int,
        default=None,
        help='Public output to check against (default: n! computed directly)'
    )
    parser.add_argument(
        '--config',
        type=Path,
        default=None,
        help='Path to a JSON CircuitConfig'
    )
    parser.add_argument(
        '--fail-fast',
        action='store_true',
        help='Stop each gate at its first failing row'
    )
    parser.add_argument(
        '--export',
        type=Path,
        default=None,
        help='Write schema, gates, table and copy constraints as JSON'
    )
    parser.add_argument(
        '--log-level',
        type=str,
        default='INFO',
        help='Logging level (DEBUG, INFO, WARNING, ERROR)'
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    expected = args.expected if args.expected is not None else int(factorial(args.n))
    public_inputs = [args.n % GOLDILOCKS_PRIME, expected % GOLDILOCKS_PRIME]

    try:
        config = CircuitConfig.from_json(args.config) if args.config else CircuitConfig()
        circuit = Circuit(config)
        synthesis, result = circuit.mock_prove(args.n, public_inputs, fail_fast=args.fail_fast)
    except (SchemaError, AssignmentError, KeyError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    if args.export is not None:
        path = write_export(circuit, synthesis.table, args.export)
        logger.info("Written circuit export to %s", path)

    print(f"n = {args.n}")
    print(f"  public inputs: {public_inputs}")
    print(f"  computed output: {int(synthesis.output.value)}")
    if result.accepted:
        print("  verification: accepted")
        return 0

    print(f"  verification: rejected ({len(result.violations)} violation(s))")
    for v in result.violations:
        print(f"    {v}")
    return 1


if __name__ == '__main__':
    sys.exit(main())
