# src/pbcgeom/cli/main.py

"""Main CLI entry point."""

import argparse
import sys
from typing import List

from pbcgeom import __version__
from pbcgeom.utils.logging import setup_logger

logger = setup_logger("pbcgeom.cli")


def main(args: List[str] = None) -> int:
    """Main CLI entry point."""
    if args is None:
        args = sys.argv[1:]
    
    parser = argparse.ArgumentParser(
        description="pbcgeom: internal coordinates in periodic boxes",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    
    parser.add_argument(
        "--version",
        action="version",
        version=f"pbcgeom {__version__}",
    )
    
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    
    subparsers = parser.add_subparsers(
        dest="command",
        title="Commands",
        description="Valid commands",
        help="Additional help",
    )
    
    from pbcgeom.cli.commands.measure import add_parser as add_measure_parser
    
    add_measure_parser(subparsers)
    
    parsed = parser.parse_args(args)
    
    if parsed.verbose:
        setup_logger(level="DEBUG")
    
    if parsed.command == "measure":
        from pbcgeom.cli.commands.measure import run
        return run(parsed)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
