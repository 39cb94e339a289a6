"""relscout command line entry point."""
import logging
import sys

from relscout.args import parse_args
from relscout.catalog import PackageCatalog, build_registry, uses_git
from relscout.common.cache import CacheStore
from relscout.common.git_client import git_available
from relscout.common.http_client import Fetcher
from relscout.common.logging_utils import configure_logging, extra_context, is_debug_enabled
from relscout.config import apply_cli_overrides, apply_config, load_config
from relscout.constants import Constants, ExitCodes
from relscout.errors import UnknownPackageError
from relscout.export import render, render_names
from relscout.versioning.service import VersionResolutionService

logger = logging.getLogger(__name__)


def setup_logging(args):
    """Configure logging based on CLI arguments."""
    level = "ERROR" if getattr(args, "QUIET", False) else getattr(args, "LOG_LEVEL", None)
    configure_logging(level)

    log_file = getattr(args, "LOG_FILE", None)
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter(Constants.LOG_FILE_FORMAT))
        logging.getLogger().addHandler(file_handler)
        logger.info("Logging to file: %s", log_file)


def write_output(text, path=None):
    """Write rendered output to ``path`` or stdout."""
    if not path:
        sys.stdout.write(text)
        return
    try:
        with open(path, "w", encoding="utf-8") as fh:
            fh.write(text)
        logging.info("Output has been successfully written to: %s", path)
    except OSError as e:
        logging.error("Output file couldn't be written to disk: %s", e)
        sys.exit(ExitCodes.FILE_ERROR.value)


def require_git(registry, packages):
    """Exit with MISSING_TOOL when ``packages`` need git and it is absent."""
    if uses_git(registry, packages) and not git_available():
        logging.error("The 'git' executable is required but was not found on PATH.")
        sys.exit(ExitCodes.MISSING_TOOL.value)


def main(argv=None):
    """Main function of the program."""
    args = parse_args(argv)
    setup_logging(args)
    apply_config(load_config(getattr(args, "CONFIG", None)))
    apply_cli_overrides(args)

    if is_debug_enabled(logger):
        logger.debug(
            "CLI start",
            extra=extra_context(event="function_entry", component="cli", action="main"),
        )

    cache = CacheStore()
    if args.CLEAR_CACHE:
        removed = cache.clear()
        logging.info("Removed %d cached response(s) from %s", removed, cache.directory)
        if not (args.ALL or args.LIST or args.EMPTY or args.PACKAGES):
            sys.exit(ExitCodes.SUCCESS.value)

    fetcher = Fetcher(cache)
    registry = build_registry()
    catalog = PackageCatalog(registry, fetcher)
    service = VersionResolutionService(registry, fetcher)

    try:
        if args.LIST:
            write_output(render_names(catalog.all_names()), args.OUTPUT)
        elif args.EMPTY:
            require_git(registry, catalog.all_names())
            write_output(render_names(service.catalog_diff(catalog)), args.OUTPUT)
        else:
            packages = catalog.all_names() if args.ALL else args.PACKAGES
            require_git(registry, packages)
            results = service.resolve_all(packages, concurrent=not args.SERIAL)
            absent = sum(1 for r in results if r.absent)
            if absent:
                logging.info("%d of %d package(s) resolved to no version.", absent, len(results))
            write_output(render(results, args.OUTPUT_FORMAT), args.OUTPUT)
    except UnknownPackageError as e:
        logging.error("%s", e)
        sys.exit(ExitCodes.UNKNOWN_PACKAGE.value)

    if is_debug_enabled(logger):
        logger.debug(
            "CLI finished",
            extra=extra_context(event="function_exit", component="cli", action="main", outcome="success"),
        )
    sys.exit(ExitCodes.SUCCESS.value)


if __name__ == "__main__":
    main()
