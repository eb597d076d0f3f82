#!/usr/bin/env python3

import os
import sys
import time
from typing import Optional

import requests
from colorama import Fore, Style

from .errors import FilesystemError, TransientNetworkError
from ..utils.config import Settings

BLOCK_SIZE = 64 * 1024
PROGRESS_BAR_LENGTH = 30


def archive_url(settings: Settings, version: str) -> str:
    """<base>/<version>/<product>_<version>_<os>_<arch>.zip"""
    return (
        f"{settings.releases_url}{version}/"
        f"{settings.product}_{version}_{settings.platform}.zip"
    )


def archive_path(settings: Settings, version: str) -> str:
    return settings.entry_path(version) + ".zip"


def _show_progress(downloaded: int, total_size: int) -> None:
    progress = int(PROGRESS_BAR_LENGTH * min(downloaded, total_size) / total_size)
    sys.stdout.write(
        f"\r[{'=' * progress}{' ' * (PROGRESS_BAR_LENGTH - progress)}] {downloaded}/{total_size} bytes "
    )
    sys.stdout.flush()


def iter_with_deadline(response, started: float, timeout: float, chunk_size: int = BLOCK_SIZE):
    """
    Yield body chunks, failing once timeout seconds have passed since started.

    The timeout given to requests only bounds each connect and each read; a
    server trickling bytes would otherwise keep the call alive indefinitely.
    """
    for chunk in response.iter_content(chunk_size):
        if time.monotonic() - started > timeout:
            raise requests.Timeout(f"no complete response within {timeout}s")
        if chunk:
            yield chunk


def download_file(url: str, destination: str, timeout: float) -> int:
    """
    Stream url into destination without holding the body in memory.

    The whole transfer must finish within timeout seconds. Returns the number
    of bytes written. A partially written file is removed before the error is
    raised.
    """
    written = 0
    started = time.monotonic()
    try:
        with requests.get(url, stream=True, timeout=timeout) as response:
            response.raise_for_status()
            total_size = int(response.headers.get("content-length", 0) or 0)
            with open(destination, "wb") as f:
                for chunk in iter_with_deadline(response, started, timeout):
                    f.write(chunk)
                    written += len(chunk)
                    if total_size > 0:
                        _show_progress(written, total_size)
            if total_size > 0:
                print()  # Newline after progress bar
    except requests.RequestException as e:
        _discard(destination)
        raise TransientNetworkError(f"Failed to download {url}: {e}") from e
    except OSError as e:
        _discard(destination)
        raise FilesystemError(f"Failed to write {destination}: {e}") from e
    return written


def _discard(path: str) -> None:
    try:
        os.remove(path)
    except FileNotFoundError:
        pass


def fetch_archive(settings: Settings, version: str) -> Optional[str]:
    """
    Download the archive for version next to its cache entry.

    Returns the archive path, or None without touching the network when the
    version is already cached.
    """
    target = settings.entry_path(version)
    if os.path.exists(target):
        return None

    url = archive_url(settings, version)
    destination = archive_path(settings, version)
    print(f"⬇️  Downloading from {Fore.CYAN}{url}{Style.RESET_ALL}")
    download_file(url, destination, settings.timeout)
    return destination
