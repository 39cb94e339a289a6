"""Argument parsing functionality for relscout."""

import argparse

from relscout.constants import Constants


def _positive_int(text):
    value = int(text)
    if value <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {text}")
    return value


def build_parser():
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="relscout",
        description="relscout - latest upstream release finder",
        add_help=True,
    )

    parser.add_argument("PACKAGES",
                        help="Package names to resolve",
                        nargs="*",
                        metavar="PACKAGE")

    action_group = parser.add_mutually_exclusive_group()
    action_group.add_argument("-a", "--all",
                              dest="ALL",
                              help="Resolve every known package",
                              action="store_true")
    action_group.add_argument("-l", "--list",
                              dest="LIST",
                              help="List known package names",
                              action="store_true")
    action_group.add_argument("-e", "--empty",
                              dest="EMPTY",
                              help="List known packages currently resolving to nothing",
                              action="store_true")

    parser.add_argument("-f", "--format",
                        dest="OUTPUT_FORMAT",
                        help="Output format (default: plain)",
                        action="store",
                        type=str.lower,
                        choices=Constants.SUPPORTED_FORMATS,
                        default="plain")
    parser.add_argument("-o", "--output",
                        dest="OUTPUT",
                        help="Write output to this file instead of stdout",
                        action="store",
                        type=str)

    parser.add_argument("-s", "--serial",
                        dest="SERIAL",
                        help="Resolve packages one at a time",
                        action="store_true")
    parser.add_argument("-j", "--jobs",
                        dest="JOBS",
                        help=f"Maximum concurrent resolutions (default: {Constants.MAX_WORKERS})",
                        action="store",
                        type=_positive_int)
    parser.add_argument("--timeout",
                        dest="TIMEOUT",
                        help=f"Per-request timeout in seconds (default: {Constants.REQUEST_TIMEOUT})",
                        action="store",
                        type=_positive_int)

    parser.add_argument("--cache-dir",
                        dest="CACHE_DIR",
                        help="Cache directory (overrides RELSCOUT_CACHE_DIR)",
                        action="store",
                        type=str)
    parser.add_argument("--cache-ttl",
                        dest="CACHE_TTL",
                        help=f"Cache freshness in seconds (default: {Constants.CACHE_TTL_SEC})",
                        action="store",
                        type=_positive_int)
    parser.add_argument("--clear-cache",
                        dest="CLEAR_CACHE",
                        help="Delete cached responses before resolving",
                        action="store_true")

    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to configuration file (YAML, YML, or JSON)",
                        action="store",
                        type=str)
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str.upper,
                        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"])
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)
    parser.add_argument("-q", "--quiet",
                        dest="QUIET",
                        help="Only log errors.",
                        action="store_true")

    return parser


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if not (args.ALL or args.LIST or args.EMPTY or args.PACKAGES or args.CLEAR_CACHE):
        parser.error("name one or more packages, or use --all, --list or --empty")
    if args.PACKAGES and (args.ALL or args.LIST or args.EMPTY):
        parser.error("package names can not be combined with --all, --list or --empty")
    return args
