"""
Main Entry Point for the iCOW City Cost Model.

This module orchestrates an evaluation run:
1. Accepts lever values or reference scenario names
2. Loads model constants (published defaults or a JSON override file)
3. Characterizes the city for each lever configuration
4. Prints a summary and optionally writes key:value report files

THIS IS A DECISION-SUPPORT TOOL.
IT DOES NOT REPLACE COASTAL ENGINEERS OR ECONOMISTS.
"""

import argparse
import logging
import sys

from data_models import CityLevers
from city_characterizer import DomainError, characterize_city
from model_config import load_model_constants
from report_formatter import format_summary, write_reports
from scenarios import get_scenario, list_scenarios

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        description='iCOW City Adaptation Cost Model',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Levers are given in W B R P D order:
  W  withdrawal height (m)
  B  dike base height / setback (m)
  R  resiliency height (m)
  P  resiliency resistance fraction
  D  dike height (m)
A height of 100 marks the lever inactive.

Example usage:
  python main.py --levers 2 1 3 0.8 5
  python main.py --all-scenarios --output-dir outputs
        """
    )

    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        '--levers',
        type=float,
        nargs=5,
        action='append',
        metavar=('W', 'B', 'R', 'P', 'D'),
        help='Lever values (may be repeated)'
    )
    source.add_argument(
        '--scenario',
        type=str,
        action='append',
        help='Reference scenario name (may be repeated)'
    )
    source.add_argument(
        '--all-scenarios',
        action='store_true',
        help='Evaluate every reference scenario'
    )

    parser.add_argument(
        '--constants',
        type=str,
        default=None,
        help='JSON file of model constant overrides'
    )
    parser.add_argument(
        '--output-dir',
        type=str,
        default=None,
        help='Write costs.txt, zones.txt and summary.txt to this directory'
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable debug logging'
    )
    return parser


def collect_runs(args):
    """(name, levers) pairs requested on the command line."""
    if args.all_scenarios:
        return [(s.name, s.levers) for s in list_scenarios()]
    if args.scenario:
        return [(name, get_scenario(name).levers) for name in args.scenario]
    runs = []
    for i, (W, B, R, P, D) in enumerate(args.levers, 1):
        levers = CityLevers(
            withdrawal_height=W,
            dike_base_height=B,
            resiliency_height=R,
            resistance_fraction=P,
            dike_height=D,
        )
        runs.append((f"levers_{i}", levers))
    return runs


def main(argv=None):
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    try:
        constants = load_model_constants(args.constants)
        runs = collect_runs(args)
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    results = []
    failed = 0
    for name, levers in runs:
        try:
            record = characterize_city(levers, constants)
        except DomainError as e:
            failed += 1
            logger.warning(f"{name} rejected: {e}")
            print(f"Error: {name} {levers.as_tuple()} rejected: {e}", file=sys.stderr)
            continue
        results.append((name, levers, record))
        print(f"\n{name}")
        print(format_summary(record))

    if args.output_dir and results:
        paths = write_reports(results, args.output_dir)
        print(f"\nReports written: {', '.join(paths)}")

    return 1 if failed else 0


if __name__ == '__main__':
    sys.exit(main())
