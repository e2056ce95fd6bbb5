"""Parsing of package requests and artifact filenames."""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import List, Optional, Union

from constants import Constants
from errors import InvalidFormatError

from .models import PackageIdentity, Specifier, VersionSpecifier
from .patterns import FILENAME_PACKAGE_RE, PACKAGE_NAME_RE, SPECIFIER_RE

logger = logging.getLogger(__name__)

REQUEST_FORMAT_HINT = "use the format PKG[@(x.y.z|latest)]"

_PRE_LABELS = {
    "a": "a",
    "alpha": "a",
    "b": "b",
    "beta": "b",
    "c": "rc",
    "pre": "rc",
    "preview": "rc",
    "rc": "rc",
}


def _number(text: Optional[str]) -> int:
    return int(text) if text else 0


def _specifier_from_match(match: re.Match) -> Specifier:
    """Build a Specifier from a SPECIFIER_RE or FILENAME_PACKAGE_RE match."""
    groups = match.groupdict()
    pre = None
    if groups.get("pre"):
        pre = (_PRE_LABELS[groups["pre_label"].lower()], _number(groups["pre_num"]))
    return Specifier(
        release=groups["release"],
        op=groups.get("op") or "==",
        epoch=_number(groups.get("epoch")),
        pre=pre,
        post=_number(groups["post_num"]) if groups.get("post") else None,
        dev=_number(groups["dev_num"]) if groups.get("dev") else None,
        local=groups.get("local") or None,
    )


def parse_specifier(text: str) -> Specifier:
    """Parse a single version specifier such as ``~=1.4`` or ``1!2.0rc1``.

    Raises:
        InvalidFormatError: If the text does not follow the version grammar.
    """
    match = SPECIFIER_RE.match(text.strip())
    if match is None:
        raise InvalidFormatError(f"invalid version specifier: {text!r}", value=text)
    return _specifier_from_match(match)


def is_valid_name(name: str) -> bool:
    """True when ``name`` is a non-empty ``[-_a-zA-Z0-9]+`` token."""
    return bool(name) and PACKAGE_NAME_RE.match(name) is not None


def parse_request(text: str) -> PackageIdentity:
    """Parse ``name`` or ``name@version`` into a PackageIdentity.

    A bare name, or ``@latest`` in any case, requests the newest version.
    Any other version text is kept verbatim as a literal; when it follows the
    extended grammar its parsed form rides along on the specifier.

    Raises:
        InvalidFormatError: More than one ``@``, an empty name or version, or
            a name with characters outside ``[-_a-zA-Z0-9]``.
    """
    token = text.strip()
    parts = token.split("@")
    if len(parts) > 2:
        raise InvalidFormatError(f"invalid package {text!r}: {REQUEST_FORMAT_HINT}", value=text)

    name = parts[0]
    if not is_valid_name(name):
        raise InvalidFormatError(f"invalid package name {name!r}: {REQUEST_FORMAT_HINT}", value=text)

    if len(parts) == 1:
        return PackageIdentity(name)

    raw = parts[1]
    if not raw:
        raise InvalidFormatError(f"missing version in {text!r}: {REQUEST_FORMAT_HINT}", value=text)
    if raw.lower() == Constants.LATEST_KEYWORD:
        return PackageIdentity(name)

    match = SPECIFIER_RE.match(raw)
    specifier = _specifier_from_match(match) if match else None
    return PackageIdentity(name, VersionSpecifier.literal(raw, specifier))


def parse_filename(filename: Union[str, os.PathLike]) -> PackageIdentity:
    """Parse an artifact filename (``name-version.ext``) into a PackageIdentity.

    Only the last path component is considered, so full paths and object
    keys are accepted. The literal keeps the version text as written.

    Raises:
        InvalidFormatError: If the filename does not match the artifact grammar.
    """
    basename = Path(filename).name
    match = FILENAME_PACKAGE_RE.match(basename)
    if match is None:
        raise InvalidFormatError(f"not a package filename: {basename!r}", value=basename)

    version_text = basename[match.end("name") + 1:match.start("ext") - 1]
    return PackageIdentity(
        match.group("name"),
        VersionSpecifier.literal(version_text, _specifier_from_match(match)),
    )


def read_packages_from_file(path: Union[str, os.PathLike]) -> List[PackageIdentity]:
    """Read one package request per line.

    Blank lines and ``#`` comments are skipped.

    Raises:
        OSError: If the file cannot be read.
        InvalidFormatError: On the first malformed line; the message names
            the file and line number.
    """
    packages: List[PackageIdentity] = []
    with open(path, encoding="utf-8") as file:
        for lineno, line in enumerate(file, start=1):
            token = line.split("#", 1)[0].strip()
            if not token:
                continue
            try:
                packages.append(parse_request(token))
            except InvalidFormatError as e:
                raise InvalidFormatError(f"{path}:{lineno}: {e}", value=token) from e
    logger.debug("Read %d package(s) from %s", len(packages), path)
    return packages
