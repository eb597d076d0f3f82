#!/usr/bin/env python3

from typing import Sequence

from .errors import MissingSelectorError, NotFoundError

LATEST = "latest"


def resolve_version(selector: str, catalog: Sequence[str]) -> str:
    """
    Map a user selector to one version from a newest-first catalog.

    "latest" picks the first entry. Anything else picks the first entry that
    *contains* the selector. Matching is by substring, not equality: "0.12"
    resolves to "0.12.31" whenever that is listed ahead of "0.12.0", and a
    short selector such as "1" matches the newest version containing a 1.
    Pass a full version to be exact.
    """
    if not selector:
        raise MissingSelectorError("No version given. Use a version number or 'latest'")

    if not catalog:
        raise NotFoundError(f"Version not found: {selector} (the release catalog is empty)")

    if selector == LATEST:
        return catalog[0]

    for version in catalog:
        if selector in version:
            return version

    raise NotFoundError(f"Version not found: {selector}")
