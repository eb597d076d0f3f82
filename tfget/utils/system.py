#!/usr/bin/env python3

import os
import platform
import sys

from colorama import Fore, Style

from ..core.errors import FilesystemError

# platform.machine() values mapped to the architecture names used in
# release archive filenames
ARCH_ALIASES = {
    "x86_64": "amd64",
    "amd64": "amd64",
    "x64": "amd64",
    "aarch64": "arm64",
    "arm64": "arm64",
    "i386": "386",
    "i686": "386",
    "x86": "386",
    "armv7l": "arm",
    "armv6l": "arm",
    "arm": "arm",
}


def get_real_home() -> str:
    """Get the real user's home directory even when running with sudo"""
    if "SUDO_USER" in os.environ and os.environ.get("HOME") == "/root":
        real_user = os.environ["SUDO_USER"]
        return os.path.expanduser(f"~{real_user}")
    return os.path.expanduser("~")


def expand_home(path: str) -> str:
    """Replace a literal $HOME or leading ~ with the real user's home"""
    home = get_real_home()
    if "$HOME" in path:
        path = path.replace("$HOME", home)
    if path == "~" or path.startswith("~/"):
        path = home + path[1:]
    return path


def host_os() -> str:
    """Operating system name as it appears in release archive filenames"""
    current_platform = sys.platform
    if current_platform.startswith("linux"):
        return "linux"
    if current_platform.startswith("darwin"):
        return "darwin"
    if current_platform.startswith("win"):
        return "windows"
    if current_platform.startswith("freebsd"):
        return "freebsd"
    if current_platform.startswith("openbsd"):
        return "openbsd"
    return current_platform


def host_platform() -> str:
    """The <os>_<arch> identifier of this machine, e.g. linux_amd64"""
    machine = platform.machine().lower()
    return f"{host_os()}_{ARCH_ALIASES.get(machine, machine)}"


def ensure_cache_dir(cache_dir: str) -> str:
    """Create the version cache directory (mode 0700) if it does not exist"""
    if not os.path.isdir(cache_dir):
        print(
            f"{Fore.YELLOW}📁 Directory not found, creating {cache_dir}{Style.RESET_ALL}"
        )
        try:
            os.makedirs(cache_dir, mode=0o700, exist_ok=True)
        except OSError as e:
            raise FilesystemError(f"Failed to create {cache_dir}: {e}") from e
    return cache_dir


def path_contains(directory: str) -> bool:
    """Check whether a directory is listed on PATH"""
    target = os.path.normpath(directory)
    for entry in os.environ.get("PATH", "").split(os.pathsep):
        if entry and os.path.normpath(expand_home(entry)) == target:
            return True
    return False
