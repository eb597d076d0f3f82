#!/usr/bin/env python3

import argparse
import os
import sys
from typing import List, Optional

from colorama import Fore, Style

from ..core.errors import MissingSelectorError, TfgetError, UsageError
from ..core.manager import VersionManager
from ..core.operations import (
    download_version,
    list_local,
    list_remote,
    switch_version,
    which_version,
)
from ..utils.config import (
    DEFAULT_CONFIG_PATH,
    create_default_config,
    ensure_user_config_dir,
    load_settings,
)
from ..version import __version__

COMMANDS = {
    "list": "list-local",
    "list-local": "list-local",
    "list-remote": "list-remote",
    "download": "download",
    "switch": "switch",
    "use": "switch",
    "which": "which",
    "which-version": "which",
}

USAGE_EPILOG = """commands:
  list, list-local           list downloaded versions
  list-remote                list released versions, newest first
  download <version>         download a version into the cache
  switch, use <version>      download if needed and make it the active version
  which, which-version       show the active version

<version> is a version number or 'latest'. A partial number selects the
newest release containing it, e.g. '0.12' may select 0.12.31.
"""


def parse_args(argv: Optional[List[str]] = None):
    """Parse command-line arguments"""
    parser = argparse.ArgumentParser(
        prog="tfget",
        description=f"tfget v{__version__} - download and switch between Terraform versions",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=USAGE_EPILOG,
    )
    parser.add_argument("command", nargs="?", help="command to run")
    parser.add_argument("selector", nargs="?", help="version number or 'latest'")
    parser.add_argument(
        "--config",
        help=f"Configuration file (default: search for {DEFAULT_CONFIG_PATH})",
    )
    parser.add_argument(
        "--version", action="store_true", help="Show the version and exit"
    )
    parser.add_argument(
        "--init",
        action="store_true",
        help="Initialize a default config file in the user's config directory",
    )
    return parser.parse_args(argv)


def handle_init_command() -> None:
    """Handle the --init command to create a default config file"""
    user_config_path = os.path.join(ensure_user_config_dir(), DEFAULT_CONFIG_PATH)

    if os.path.isfile(user_config_path):
        print(
            f"{Fore.YELLOW}Config file already exists at {user_config_path}{Style.RESET_ALL}"
        )
        return

    create_default_config(user_config_path)
    print(
        f"{Fore.GREEN}✅ Created default config file at {user_config_path}{Style.RESET_ALL}"
    )


def require_selector(selector: Optional[str]) -> str:
    if not selector:
        raise MissingSelectorError("No version given. Use a version number or 'latest'")
    return selector


def dispatch(manager: VersionManager, command: str, selector: Optional[str]) -> None:
    if command == "list-local":
        print("Listing all local versions")
        list_local(manager)
    elif command == "list-remote":
        print("Listing all remote versions")
        list_remote(manager)
    elif command == "download":
        download_version(manager, require_selector(selector))
    elif command == "switch":
        switch_version(manager, require_selector(selector))
    elif command == "which":
        which_version(manager)


def main(argv: Optional[List[str]] = None) -> int:
    """Run one command and return the process exit status"""
    args = parse_args(argv)

    if args.version:
        print(f"tfget v{__version__}")
        return 0

    try:
        if args.init:
            handle_init_command()
            return 0

        command = COMMANDS.get(args.command or "")
        if command is None:
            raise UsageError("Help not implemented yet.")

        manager = VersionManager(load_settings(args.config))
        manager.prepare()
        dispatch(manager, command, args.selector)
    except TfgetError as e:
        print(f"{Fore.RED}❌ {e}{Style.RESET_ALL}", file=sys.stderr)
        return e.exit_code
    except KeyboardInterrupt:
        print(f"\n{Fore.YELLOW}Interrupted{Style.RESET_ALL}", file=sys.stderr)
        return 130
    return 0


def run_cli() -> None:
    """Run the command-line interface"""
    sys.exit(main())


if __name__ == "__main__":
    run_cli()
