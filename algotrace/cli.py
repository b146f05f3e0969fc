"""Command-line runner: check a learner file against catalog test cases."""

from __future__ import annotations

import argparse
import json
import logging
import sys

from . import constants
from .catalog import ALL_TEST_CASES, get_test_case, get_test_cases
from .orchestrator import run_tests
from .sandbox_types import ExecutionOptions
from .step_types import StructureKind
from .testing_types import Difficulty


def _print_catalog() -> None:
    for case in ALL_TEST_CASES:
        print(f"  {case.id:<36} {case.structure.value:<11} {case.difficulty.value:<7} {case.name}")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Run learner code against instrumented data-structure scenarios"
    )
    parser.add_argument("file", nargs="?", help="Learner source file")
    parser.add_argument("--test", "-t", default=None, help="Catalog test case id")
    parser.add_argument(
        "--structure",
        "-s",
        choices=[k.value for k in StructureKind],
        default=None,
        help="Run every case for this structure",
    )
    parser.add_argument(
        "--difficulty",
        "-d",
        choices=[d.value for d in Difficulty],
        default=None,
        help="Restrict to one difficulty level",
    )
    parser.add_argument(
        "--timeout-ms", type=int, default=constants.DEFAULT_TIMEOUT_MS,
        help="Per-test time budget (default: %(default)s)",
    )
    parser.add_argument(
        "--inline", action="store_true", help="Run in-process instead of a worker"
    )
    parser.add_argument(
        "--steps", action="store_true", help="Print every captured step as JSON"
    )
    parser.add_argument("--list", action="store_true", help="List catalog test cases")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable logging")

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(
            level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s"
        )

    if args.list:
        print("═══ Catalog ═══")
        _print_catalog()
        return 0

    if not args.file:
        parser.error("a learner source file is required unless --list is given")

    with open(args.file) as f:
        source = f.read()

    if args.test:
        try:
            cases = [get_test_case(args.test)]
        except KeyError:
            print(f"Unknown test case: {args.test}")
            return 1
    else:
        cases = get_test_cases(args.structure, args.difficulty)
    if not cases:
        print("No matching test cases.")
        return 1

    options = ExecutionOptions(timeout_ms=args.timeout_ms, isolated=not args.inline)
    results = run_tests(source, cases, options)

    print("═══ Results ═══")
    for result in results:
        status = "PASS" if result.passed else "FAIL"
        print(
            f"  [{status}] {result.test_id}  "
            f"({len(result.steps)} steps, {result.execution_time_ms:.1f}ms)"
        )
        if result.error:
            print(f"         {result.error}")
        for record in result.console_records:
            print(f"         console.{record.level}: {' '.join(map(str, record.args))}")
        if args.steps:
            for step in result.steps:
                print(json.dumps(step.to_dict(), default=repr))

    passed = sum(r.passed for r in results)
    print(f"\n{passed}/{len(results)} passed")
    return 0 if passed == len(results) else 1


if __name__ == "__main__":
    sys.exit(main())
