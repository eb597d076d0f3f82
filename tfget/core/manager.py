#!/usr/bin/env python3

import os
from typing import List, Optional

from colorama import Fore, Style

from .errors import ConflictError, FilesystemError
from .extractor import extract_archive
from .fetcher import fetch_archive
from .resolver import resolve_version
from .scraper import list_remote_versions
from ..utils.config import Settings
from ..utils.system import ensure_cache_dir
from ..utils.versions import sort_versions


class VersionManager:
    """Core class for managing cached versions and the active link"""

    def __init__(self, settings: Settings):
        self.settings = settings

    @property
    def cache_dir(self) -> str:
        return self.settings.cache_dir

    @property
    def link_path(self) -> str:
        return self.settings.link_path

    def prepare(self) -> None:
        """Create the cache directory if this is the first run"""
        ensure_cache_dir(self.cache_dir)

    def remote_versions(self) -> List[str]:
        """The release catalog, newest first, fetched fresh every time"""
        return list_remote_versions(
            self.settings.releases_url, self.settings.product, self.settings.timeout
        )

    def resolve(self, selector: str) -> str:
        return resolve_version(selector, self.remote_versions())

    def entry_path(self, version: str) -> str:
        return self.settings.entry_path(version)

    def is_cached(self, version: str) -> bool:
        return os.path.exists(self.entry_path(version))

    def ensure_cached(self, version: str) -> bool:
        """
        Make sure version is present in the cache.

        Returns True when it had to be downloaded, False when it was already
        on disk. A cached version is never downloaded again.
        """
        target = self.entry_path(version)
        archive = fetch_archive(self.settings, version)
        if archive is None:
            print(
                f"{Fore.GREEN}✔ Version {version} already exists on disk at {target}{Style.RESET_ALL}"
            )
            return False

        extract_archive(
            archive, target, self.settings.max_extract_bytes, self.settings.product
        )
        print(f"{Fore.GREEN}✅ Version {version} now on disk at {target}{Style.RESET_ALL}")
        return True

    def check_conflict(self) -> None:
        """Refuse to run next to a system-wide installation"""
        system_path = self.settings.system_install_path
        if os.path.lexists(system_path):
            raise ConflictError(
                f"Detected system-wide installation at {system_path}. Remove it before switching versions"
            )

    def activate(self, version: str) -> str:
        """
        Download version if needed and point the active link at it.

        The new link is created under a temporary name and renamed over the
        old one, so the active link always names an existing cache entry.
        Returns the link path.
        """
        self.check_conflict()

        if not self.is_cached(version):
            print(
                f"{Fore.YELLOW}ℹ️ Version {version} not found locally. Downloading it now{Style.RESET_ALL}"
            )
        self.ensure_cached(version)

        target = self.entry_path(version)
        if not os.path.isfile(target):
            raise FilesystemError(f"Cache entry {target} is missing or not a file")

        self._create_symlink(target, self.link_path)
        return self.link_path

    def _create_symlink(self, source: str, link_name: str) -> None:
        """Create or replace a symbolic link from link_name to source"""
        temp_link = f"{link_name}.new"
        try:
            if os.path.lexists(temp_link):
                os.remove(temp_link)
            os.symlink(source, temp_link)
            os.replace(temp_link, link_name)
        except OSError as e:
            if os.path.lexists(temp_link):
                os.remove(temp_link)
            raise FilesystemError(f"Failed to create symbolic link {link_name}: {e}") from e

    def active_target(self) -> Optional[str]:
        """Path the active link points at, or None when nothing is active"""
        try:
            return os.readlink(self.link_path)
        except FileNotFoundError:
            return None
        except OSError as e:
            raise FilesystemError(f"Failed to read {self.link_path}: {e}") from e

    def version_from_path(self, path: str) -> Optional[str]:
        prefix = f"{self.settings.product}_"
        name = os.path.basename(path)
        if name.startswith(prefix) and len(name) > len(prefix):
            return name[len(prefix):]
        return None

    def current_version(self) -> Optional[str]:
        target = self.active_target()
        if target is None:
            return None
        return self.version_from_path(target)

    def _list_cache(self) -> List[str]:
        try:
            return os.listdir(self.cache_dir)
        except OSError as e:
            raise FilesystemError(f"Failed to list {self.cache_dir}: {e}") from e

    def local_versions(self) -> List[str]:
        """Cached versions, newest first"""
        versions = []
        for name in self._list_cache():
            version = self.version_from_path(name)
            # Archives left behind by an interrupted download are not versions
            if version and not name.endswith(".zip"):
                versions.append(version)
        return sort_versions(versions)

    def local_entries(self) -> List[str]:
        """Every name in the cache directory, cache entries first"""
        entries = [os.path.basename(self.entry_path(v)) for v in self.local_versions()]
        return entries + sorted(n for n in self._list_cache() if n not in entries)
