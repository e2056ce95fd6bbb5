"""sling - private package registry on top of an object-storage bucket

    Raises:
        SystemExit: Always, with one of the ExitCodes values.

    Returns:
        int: Exit code
"""
import logging
import sys

from args import parse_args
from cli_config import RuntimeConfig, load_runtime_config
from common.logging_utils import add_file_handler, configure_logging, extra_context, is_debug_enabled
from constants import ExitCodes
from errors import (
    ConfigError,
    IndexLookupError,
    InstallError,
    ParseError,
    PublishError,
    SlingError,
)
from registry.index import Index
from registry.install import install
from registry.publish import identify_package_file, publish
from storage.exceptions import StorageError
from storage.factory import create_storage_driver
from versioning.parser import parse_request, read_packages_from_file

logger = logging.getLogger(__name__)


def exit_code_for(error):
    """Maps an error to the process exit code.

    Args:
        error (SlingError): The error that ended the command.

    Returns:
        ExitCodes: Exit code to report.
    """
    if isinstance(error, StorageError):
        return ExitCodes.STORAGE_ERROR
    if isinstance(error, InstallError):
        return ExitCodes.INSTALLER_ERROR
    if isinstance(error, (IndexLookupError, PublishError, ParseError)):
        return ExitCodes.PACKAGE_ERROR
    return ExitCodes.FILE_ERROR


def collect_packages(args):
    """Builds the list of requested packages from the command line and text files.

    Args:
        args (Namespace): Parsed arguments of the get command.

    Raises:
        ParseError: If any request is malformed.
        ConfigError: If a text file cannot be read or nothing was requested.

    Returns:
        list: PackageIdentity values in request order.
    """
    packages = [parse_request(token) for token in args.PACKAGES]
    for path in args.TEXT_FILES:
        try:
            packages.extend(read_packages_from_file(path))
        except OSError as e:
            raise ConfigError(f"failed to read package file {path}: {e}") from e
    if not packages:
        raise ConfigError("no packages requested")
    return packages


def build_driver(args):
    """Creates the storage driver selected on the command line."""
    return create_storage_driver(
        args.DRIVER,
        region=args.REGION,
        endpoint_url=args.ENDPOINT_URL,
        project=args.PROJECT,
        root=args.ROOT,
    )


def print_catalog(index, names=None, verbose=False):
    """Writes the catalog to stdout, one package per line.

    Args:
        index (Index): Catalog to print.
        names (list, optional): Restrict output to these names.
        verbose (bool, optional): Print every object URL as well.
    """
    for name in names or index.names():
        entries = index.versions(name)
        if not entries:
            logging.warning("Package not found in bucket: %s", name)
            continue
        latest = index.find_latest(name)
        suffix = f" (latest: {latest.version})" if latest else ""
        print(f"{name}: {', '.join(e.version for e in entries)}{suffix}")
        if verbose:
            for entry in entries:
                print(f"  {entry.version}\t{entry.object.url}")


def run(args, runtime: RuntimeConfig):
    """Runs the selected subcommand.

    Raises:
        SlingError: Any failure; the caller maps it to an exit code.
    """
    if args.action == "get":
        packages = collect_packages(args)
        logging.info("Requested packages: %s", ", ".join(str(p) for p in packages))
        driver = build_driver(args)
        installed = install(runtime, driver, packages, strict=args.STRICT_KEYS)
        logging.info("Installed %d package(s).", len(installed))
    elif args.action == "put":
        identify_package_file(args.PACKAGE_PATH)
        driver = build_driver(args)
        ref = publish(runtime, driver, args.PACKAGE_PATH, args.OVERWRITE)
        logging.info("Published %s", ref.url)
    elif args.action == "list":
        if not runtime.bucket:
            raise ConfigError("no bucket was provided")
        driver = build_driver(args)
        index = Index.from_storage_bucket(driver, runtime.bucket, strict=args.STRICT_KEYS)
        print_catalog(index, args.NAMES, args.VERBOSE)


def main(argv=None):
    """Main function of the program."""
    args = parse_args(argv)
    configure_logging(args.LOG_LEVEL)
    if args.LOG_FILE:
        add_file_handler(args.LOG_FILE)

    if is_debug_enabled(logger):
        logger.debug(
            "CLI start",
            extra=extra_context(event="function_entry", component="cli", action=args.action)
        )

    try:
        runtime = load_runtime_config(args, args.CONFIG)
        run(args, runtime)
    except SlingError as e:
        code = exit_code_for(e)
        logging.error("%s failed: %s", args.action, e)
        if isinstance(e, StorageError) and e.cause is not None:
            logger.debug("Storage backend error", exc_info=e.cause)
        sys.exit(code.value)

    sys.exit(ExitCodes.SUCCESS.value)


if __name__ == "__main__":
    main()
