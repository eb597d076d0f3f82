#!/usr/bin/env python3

"""Exceptions raised by tfget. Only the CLI turns them into an exit status."""


class TfgetError(Exception):
    """Base class for all tfget failures"""

    exit_code = 1


class UsageError(TfgetError):
    """Unknown or missing command"""

    exit_code = 2


class ConfigError(TfgetError):
    """The configuration file could not be parsed"""


class TransientNetworkError(TfgetError):
    """Timeout, DNS failure, refused connection or a non-success HTTP status"""


class NotFoundError(TfgetError):
    """The selector matched nothing in the release catalog"""


class MissingSelectorError(TfgetError):
    """A command that needs a version selector was given none"""


class ConflictError(TfgetError):
    """A system-wide installation occupies the reserved install path"""


class FilesystemError(TfgetError):
    """Permission denied, disk full or a corrupt archive"""


class ArchiveTooLargeError(FilesystemError):
    """Extraction would write more bytes than allowed"""
