"""Numeric ``major.minor.patch`` versions used to pick the newest artifact."""

from __future__ import annotations

import re
from typing import NamedTuple

from errors import InvalidFormatError, NonNumericSegmentError

_SEGMENT_RE = re.compile(r"[0-9]+")


class SemanticVersion(NamedTuple):
    """Ordered ``(major, minor, patch)`` triple.

    Tuple ordering gives numeric comparison, so ``9 < 10``. Pre-release and
    build metadata are not part of this grammar.
    """

    major: int
    minor: int = 0
    patch: int = 0

    @classmethod
    def parse(cls, text: str) -> "SemanticVersion":
        """Parse one to three dot-separated numeric segments.

        Missing trailing segments default to 0.

        Raises:
            InvalidFormatError: More than three segments.
            NonNumericSegmentError: A segment is empty or not all digits.
        """
        segments = text.split(".")
        if len(segments) > 3:
            raise InvalidFormatError(f"too many version segments: {text!r}", value=text)
        numbers = []
        for segment in segments:
            if not _SEGMENT_RE.fullmatch(segment):
                raise NonNumericSegmentError(
                    f"non-numeric version segment {segment!r} in {text!r}", value=text
                )
            numbers.append(int(segment))
        return cls(*numbers)

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"
