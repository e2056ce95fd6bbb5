"""Compiled grammars for package names, versions and artifact filenames.

The version grammar follows PEP 440 loosely (https://peps.python.org/pep-0440/).
Every pattern is compiled once at import time and matched case-insensitively.
"""

from __future__ import annotations

import re

# Alphanumerics plus "-" and "_"
PACKAGE_NAME_PATTERN = r"(?P<name>[-_a-z0-9]+)"
# ===, ==, ~=, !=, <=, >=, <, >
OP_PATTERN = r"(?P<op>={2,3}|[<>~!]=|[<>])"
# N, N.N, N.N.N, ... with an optional leading "v"
RELEASE_PATTERN = r"v?(?P<release>\d+(?:\.\d+)*)"
# a1, .alpha1, -b10, rc2
PRE_PATTERN = r"(?P<pre>[-._]?(?P<pre_label>alpha|a|beta|b|preview|pre|c|rc)(?P<pre_num>\d*))?"
# post, .rev1, -r10
POST_PATTERN = r"(?P<post>[-._]?(?P<post_label>post|rev|r)(?P<post_num>\d*))?"
# dev, .dev0, -dev10
DEV_PATTERN = r"(?P<dev>[-._]?dev(?P<dev_num>\d*))?"
# +ubuntu-1, +linux.0.10.compat, +10_f
LOCAL_PATTERN = r"(?:\+(?P<local>[a-z0-9]+(?:[-._][a-z0-9]+)*))?"

COMMON_VERSION_PATTERN = RELEASE_PATTERN + PRE_PATTERN + POST_PATTERN + DEV_PATTERN + LOCAL_PATTERN

# Filenames use "1_" where a version string would use "1!"
FILENAME_EPOCH_PATTERN = r"(?:(?P<epoch>\d+)[!_])?"
STANDARD_EPOCH_PATTERN = r"(?:(?P<epoch>\d+)!)?"

FILENAME_EXT_PATTERN = r"\.(?P<ext>tar\.gz|tgz|zip|whl)"

FILENAME_VERSION_PATTERN = FILENAME_EPOCH_PATTERN + COMMON_VERSION_PATTERN
STANDARD_VERSION_PATTERN = STANDARD_EPOCH_PATTERN + COMMON_VERSION_PATTERN


def _insensitive(pattern: str) -> re.Pattern:
    return re.compile(pattern, re.IGNORECASE)


PACKAGE_NAME_RE = _insensitive("^" + PACKAGE_NAME_PATTERN + "$")

# ~=0.6.5, ==1!2.0rc1, 2022.01.01.dev0
SPECIFIER_RE = _insensitive("^" + OP_PATTERN + "?" + STANDARD_VERSION_PATTERN + "$")

# foo-1.0.0.tar.gz, foo_bar-1_0.6.1.zip, foo-90.1-rc3+ubuntu.01.whl
FILENAME_PACKAGE_RE = _insensitive(
    "^" + PACKAGE_NAME_PATTERN + "-" + FILENAME_VERSION_PATTERN + FILENAME_EXT_PATTERN + "$"
)

# foo/foo-1.0.0.tar.gz: the directory must repeat the package name
OBJECT_KEY_RE = _insensitive(
    r"^(?P<prefix>[-_a-z0-9]+)/(?P<filename>[^/]+)$"
)

# Older buckets: three numeric segments and .tar.gz only
LEGACY_OBJECT_KEY_RE = re.compile(
    r"([0-9a-zA-Z_]+)/[0-9a-zA-Z_]+-(\d+\.\d+\.\d+)+\.tar\.gz"
)
