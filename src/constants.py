"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    STORAGE_ERROR = 2
    PACKAGE_ERROR = 3
    INSTALLER_ERROR = 4


class StorageDrivers(Enum):
    """Storage backends supported by the program.

    Args:
        Enum (string): Driver names accepted on the command line.
    """

    S3 = "s3"
    GS = "gs"
    FILE = "file"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    SUPPORTED_DRIVERS = [
        StorageDrivers.S3.value,
        StorageDrivers.GS.value,
        StorageDrivers.FILE.value,
    ]
    CONFIG_FILE_NAME = ".sling.yml"
    ENV_LOG_LEVEL = "SLING_LOG_LEVEL"
    LOG_FORMAT = "[%(levelname)s] %(message)s"
    LOG_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

    # Uploaded artifacts
    CONTENT_TYPE = "application/octet-stream"
    LATEST_KEYWORD = "latest"

    DEFAULT_AWS_REGION = "us-west-2"
    DEFAULT_FILE_ROOT = ".sling-store"
    TEMP_DIR_PREFIX = "sling-"
