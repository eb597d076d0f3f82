#!/usr/bin/env python3

"""
tfget - download Terraform releases and switch between them
Features:
- Release discovery from the public release index
- One cached binary per version, never downloaded twice
- A single symbolic link selecting the active version
- Optional YAML configuration
"""

from .version import __version__
from .core.manager import VersionManager
from .core.operations import (
    list_local,
    list_remote,
    download_version,
    switch_version,
    which_version,
)
from .core.resolver import resolve_version
from .core.scraper import parse_versions
from .utils.config import Settings, load_settings
from .cli.cli import run_cli
