"""Argument parsing functionality for sling."""

import argparse

from constants import Constants


def build_parser():
    """Builds the argument parser with the get, put and list subcommands."""
    parser = argparse.ArgumentParser(
        prog="sling",
        description="sling - install and publish Python packages from a private storage bucket",
        add_help=True,
    )

    parser.add_argument("-d", "--driver",
                        dest="DRIVER",
                        help="Storage backend, i.e: s3, gs, file",
                        action="store",
                        type=str.lower,
                        choices=Constants.SUPPORTED_DRIVERS,
                        required=True)
    parser.add_argument("-b", "--bucket",
                        dest="BUCKET",
                        help="Bucket holding the packages (remembered in the config file)",
                        action="store",
                        type=str)
    parser.add_argument("-p", "--python",
                        dest="PYTHON",
                        help="Python interpreter used to run pip (remembered in the config file)",
                        action="store",
                        type=str)
    parser.add_argument("--pip-args",
                        dest="PIP_ARGS",
                        help="Extra arguments passed to pip install (remembered in the config file)",
                        action="store",
                        type=str)
    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help=f"Path to configuration file (default: ~/{Constants.CONFIG_FILE_NAME})",
                        action="store",
                        type=str)
    parser.add_argument("--strict-keys",
                        dest="STRICT_KEYS",
                        help="Install and list only keys of the legacy form name/name-X.Y.Z.tar.gz",
                        action="store_true")

    # Backend options
    parser.add_argument("--region",
                        dest="REGION",
                        help=f"AWS region for the s3 driver (default: {Constants.DEFAULT_AWS_REGION})",
                        action="store",
                        type=str)
    parser.add_argument("--endpoint-url",
                        dest="ENDPOINT_URL",
                        help="Custom S3 endpoint, e.g. MinIO",
                        action="store",
                        type=str)
    parser.add_argument("--project",
                        dest="PROJECT",
                        help="Google Cloud project for the gs driver",
                        action="store",
                        type=str)
    parser.add_argument("--root",
                        dest="ROOT",
                        help=f"Local directory for the file driver (default: {Constants.DEFAULT_FILE_ROOT})",
                        action="store",
                        type=str)

    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str.upper,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        default=None)
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)

    subparsers = parser.add_subparsers(dest="action", required=True)

    get_parser = subparsers.add_parser("get", help="Install packages from the bucket")
    get_parser.add_argument("-t", "--text-files",
                            dest="TEXT_FILES",
                            help="Read package requests from a file, one per line",
                            action="append",
                            type=str,
                            default=[])
    get_parser.add_argument("PACKAGES",
                            help="Packages to install, as NAME or NAME@VERSION",
                            nargs="*",
                            default=[])

    put_parser = subparsers.add_parser("put", help="Publish a package file to the bucket")
    put_parser.add_argument("-y", "--overwrite",
                            dest="OVERWRITE",
                            help="Replace the package if this version is already published",
                            action="store_true")
    put_parser.add_argument("PACKAGE_PATH",
                            help="Path to the package file (name-version.tar.gz|tgz|zip|whl)")

    list_parser = subparsers.add_parser("list", help="Show the packages available in the bucket")
    list_parser.add_argument("NAMES",
                             help="Only show these package names",
                             nargs="*",
                             default=[])
    list_parser.add_argument("-v", "--verbose",
                             dest="VERBOSE",
                             help="Show the object URL of every version",
                             action="store_true")

    return parser


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    return build_parser().parse_args(argv)
