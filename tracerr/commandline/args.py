import sys
from argparse import REMAINDER, ArgumentParser
from typing import List, Optional

import argcomplete

from tracerr import settings
from tracerr.error import TracerrError
from tracerr.logging import logger
from . import subcommands


def parse(argv: Optional[List[str]] = None):
    parser = ArgumentParser(
        prog="tracerr",
        description="Show errors with their stack traces and source code.",
    )
    parser.add_argument(
        "--config", type=str, metavar="FILE", help="Load settings from a YAML file"
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Show debug messages"
    )
    parser.add_argument(
        "--depth",
        type=int,
        metavar="N",
        help="Maximum number of stack frames to capture",
    )

    subparsers = parser.add_subparsers(metavar="action")

    run = subparsers.add_parser(
        "run",
        description="Run a Python script and show uncaught errors with source code.",
        help="Run a Python script",
    )
    run.add_argument("script", type=str, help="Path of the script to run")
    run.add_argument(
        "args", nargs=REMAINDER, help="Arguments passed on to the script"
    )

    output = run.add_argument_group("output options")
    window = output.add_mutually_exclusive_group()
    window.add_argument(
        "--lines",
        type=int,
        metavar="K",
        help="Total number of source lines to show around each frame",
    )
    window.add_argument(
        "--window",
        type=int,
        nargs=2,
        metavar=("BEFORE", "AFTER"),
        help="Number of source lines to show before and after each frame",
    )
    window.add_argument(
        "--no-source", action="store_true", help="Only show the stack trace"
    )
    output.add_argument("--plain", action="store_true", help="Do not use colors")

    run.set_defaults(func=subcommands.run)

    demo = subparsers.add_parser(
        "demo",
        description="Show example output.",
        help="Show example output",
    )
    demo.add_argument(
        "example", choices=sorted(subcommands.EXAMPLES), help="Name of the example"
    )
    demo.set_defaults(func=subcommands.demo)

    argcomplete.autocomplete(parser)
    args = parser.parse_args(argv)

    if "func" not in args:
        parser.print_help()
        sys.exit(1)

    try:
        if args.config is not None:
            settings.load(args.config)
    except TracerrError as e:
        logger.error("Failed to load settings", e)
        sys.exit(1)
    except OSError as e:
        logger.fatal(f"Failed to load settings: {e}")

    if args.verbose:
        settings.setup().verbose()
    if args.depth is not None:
        settings.setup().stack_depth(args.depth)

    args.func(args)
