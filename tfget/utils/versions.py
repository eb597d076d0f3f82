#!/usr/bin/env python3

import re
from typing import Iterable, List, Tuple, Union

TextKey = Tuple[Tuple[int, Union[int, str]], ...]
SegmentKey = Tuple[int, int, int, TextKey]

_SEGMENT = re.compile(r"^(\d+)(.*)$")


def _text_key(text: str) -> TextKey:
    # "-rc10" -> ((0, "-rc"), (1, 10)) so rc10 sorts after rc2
    return tuple(
        (1, int(part)) if part.isdigit() else (0, part.lower())
        for part in re.split(r"(\d+)", text)
        if part
    )


def _segment_key(segment: str) -> SegmentKey:
    match = _SEGMENT.match(segment)
    if not match:
        return (0, 0, 0, _text_key(segment))
    number, suffix = match.groups()
    # "0-rc1" sorts before the "0" release it precedes
    if suffix:
        return (1, int(number), 0, _text_key(suffix))
    return (1, int(number), 1, ())


def version_key(version: str) -> Tuple[SegmentKey, ...]:
    """
    Sort key comparing dot-separated segments numerically.

    "1.10" > "1.9", "1.0.0" > "1.0.0-rc1" and "1.6.0-rc10" > "1.6.0-rc2".
    Segments that do not start with a digit fall back to comparing their
    text, with any digit runs inside compared as numbers.
    """
    return tuple(_segment_key(segment) for segment in version.split("."))


def sort_versions(versions: Iterable[str], descending: bool = True) -> List[str]:
    """Sort version strings by value, newest first unless told otherwise"""
    return sorted(versions, key=version_key, reverse=descending)
