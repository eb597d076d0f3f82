#!/usr/bin/env python3

"""
tfget - download Terraform releases and switch between them

Usage:
  tfget <command> [version] [options]

Commands:
  list, list-local         List downloaded versions
  list-remote              List released versions, newest first
  download VERSION         Download a version into the cache
  switch, use VERSION      Download if needed and make VERSION active
  which, which-version     Show the active version

Options:
  --config FILE    Configuration file (default: tfget.yaml)
  --init           Initialize a default config file in ~/.config/tfget/
  --version        Show the version and exit
  --help           Show this help message

Configuration file is searched in the following locations:
1. Specified path via --config
2. Current directory (tfget.yaml)
3. Same directory as the executable
4. User config directory (~/.config/tfget/tfget.yaml)
5. System-wide location (/etc/tfget/tfget.yaml)
Without one, versions live in ~/.tfget/versions and the active binary is
~/.tfget/versions/terraform.
"""

from tfget import run_cli

if __name__ == "__main__":
    run_cli()
