#!/usr/bin/env python3

import os
import stat
import tempfile
import zipfile
import zlib
from typing import List, Optional

from colorama import Fore, Style

from .errors import ArchiveTooLargeError, FilesystemError

BLOCK_SIZE = 64 * 1024
DEFAULT_MODE = 0o755


def member_mode(info: zipfile.ZipInfo) -> int:
    """Permission bits recorded for a zip member, 0o755 when none are"""
    mode = stat.S_IMODE(info.external_attr >> 16)
    return mode or DEFAULT_MODE


def select_members(
    archive: zipfile.ZipFile, product: Optional[str] = None
) -> List[zipfile.ZipInfo]:
    """
    File members to write to the cache entry.

    Newer releases ship a LICENSE.txt next to the binary. When a member named
    after the product exists only that one is taken; otherwise every file
    member is.
    """
    files = [info for info in archive.infolist() if not info.is_dir()]
    if product:
        names = {product, f"{product}.exe"}
        binaries = [info for info in files if os.path.basename(info.filename) in names]
        if binaries:
            return binaries
    return files


def _copy_bounded(source, destination, budget: int) -> int:
    copied = 0
    while True:
        chunk = source.read(BLOCK_SIZE)
        if not chunk:
            return copied
        copied += len(chunk)
        if copied > budget:
            raise ArchiveTooLargeError(
                "Archive expands beyond the allowed size; refusing to extract"
            )
        destination.write(chunk)


def _remove_archive(archive_path: str) -> None:
    try:
        os.remove(archive_path)
    except FileNotFoundError:
        pass
    except OSError as e:
        raise FilesystemError(f"Failed to remove {archive_path}: {e}") from e


def _write_member(archive, info, temp_path: str, budget: int) -> int:
    with archive.open(info) as source, open(temp_path, "wb") as destination:
        return _copy_bounded(source, destination, budget)


def _discard(path: Optional[str]) -> None:
    if path and os.path.exists(path):
        os.remove(path)


def extract_archive(
    archive_path: str, target: str, max_bytes: int, product: Optional[str] = None
) -> int:
    """
    Write the contents of a downloaded zip to target, then delete the zip.

    Selected members are written in turn to one temporary file next to
    target, each replacing the previous one, and the result is renamed onto
    target only after every member has been read. Any failure leaves target
    absent, so a partially extracted binary is never cached. More than
    max_bytes of uncompressed output aborts the extraction. The zip is
    removed whether or not extraction succeeded. Returns the number of bytes
    written.
    """
    print(f"📂 Unzipping {Fore.CYAN}{archive_path}{Style.RESET_ALL}")
    total = 0
    temp_path = None
    try:
        with zipfile.ZipFile(archive_path) as archive:
            members = select_members(archive, product)
            if not members:
                raise FilesystemError(f"Archive {archive_path} contains no files")
            fd, temp_path = tempfile.mkstemp(
                prefix=f".{os.path.basename(target)}.",
                suffix=".part",
                dir=os.path.dirname(target) or ".",
            )
            os.close(fd)
            for info in members:
                total += _write_member(archive, info, temp_path, max_bytes - total)
            os.chmod(temp_path, member_mode(members[-1]))
            os.replace(temp_path, target)
            temp_path = None
    except (zipfile.BadZipFile, zipfile.LargeZipFile, zlib.error, EOFError) as e:
        raise FilesystemError(f"Corrupt archive {archive_path}: {e}") from e
    except OSError as e:
        raise FilesystemError(f"Failed to extract {archive_path}: {e}") from e
    finally:
        _discard(temp_path)
        _remove_archive(archive_path)
    return total
