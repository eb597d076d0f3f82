#!/usr/bin/env python3

from typing import List, Optional

from colorama import Fore, Style

from ..utils.system import path_contains
from .manager import VersionManager


def list_local(manager: VersionManager) -> List[str]:
    """Print the contents of the cache directory"""
    print(f"\n{Fore.CYAN}{Style.BRIGHT}Local versions in {manager.cache_dir}:{Style.RESET_ALL}\n")

    entries = manager.local_entries()
    if not entries:
        print(f"{Fore.YELLOW}No versions downloaded yet.{Style.RESET_ALL}")
        return entries

    current = manager.current_version()
    for name in entries:
        version = manager.version_from_path(name)
        if version is not None and version == current:
            print(f"{Fore.GREEN}* {name} (active){Style.RESET_ALL}")
        else:
            print(f"  {name}")
    return entries


def list_remote(manager: VersionManager) -> List[str]:
    """Print every released version, newest first"""
    versions = manager.remote_versions()
    print(f"\n{Fore.CYAN}{Style.BRIGHT}Remote versions:{Style.RESET_ALL}\n")
    if not versions:
        # An empty listing usually means the index page changed its layout
        print(
            f"{Fore.YELLOW}⚠️ No versions found on {manager.settings.releases_url}{Style.RESET_ALL}"
        )
    for version in versions:
        print(version)
    return versions


def download_version(manager: VersionManager, selector: str) -> str:
    """Resolve selector and make sure that version is in the cache"""
    version = manager.resolve(selector)
    print(f"📦 Downloading {manager.settings.product} version {Fore.CYAN}{version}{Style.RESET_ALL}")
    manager.ensure_cached(version)
    return version


def switch_version(manager: VersionManager, selector: str) -> str:
    """Resolve selector, download it if needed and make it the active version"""
    manager.check_conflict()
    version = manager.resolve(selector)
    link_path = manager.activate(version)

    print(
        f"{Fore.GREEN}✅ Switched to {manager.settings.product} {version} ({link_path}){Style.RESET_ALL}"
    )
    if path_contains(manager.cache_dir):
        print(f"{Fore.GREEN}✔ {manager.cache_dir} is on your PATH{Style.RESET_ALL}")
    else:
        print(
            f"{Fore.YELLOW}ℹ️ To use this version, add {manager.cache_dir} to your PATH:{Style.RESET_ALL}"
        )
        print(f'  export PATH="{manager.cache_dir}:$PATH"')
    return version


def which_version(manager: VersionManager) -> Optional[str]:
    """Print the version the active link points at"""
    target = manager.active_target()
    if target is None:
        print(f"{Fore.YELLOW}ℹ️ No version is active{Style.RESET_ALL}")
        return None

    version = manager.version_from_path(target)
    print(f"{version or 'unknown'} ({target})")
    return version
