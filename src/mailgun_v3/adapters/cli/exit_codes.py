"""Exit codes returned by ``mailgun-v3`` commands.

Every ``SystemExit`` raised by a command carries one of these values so shell
scripts can tell a misconfigured installation from a Mailgun outage.

The signal codes (130, 141, 143) are listed for reference only;
``lib_cli_exit_tools`` produces them when the process is interrupted.
"""

from __future__ import annotations

from enum import IntEnum


class ExitCode(IntEnum):
    """Process exit codes, following sysexits.h and errno where one fits.

    Example:
        >>> int(ExitCode.API_FAILURE)
        69
        >>> ExitCode(78).name
        'CONFIG_ERROR'
    """

    SUCCESS = 0
    GENERAL_ERROR = 1
    FILE_NOT_FOUND = 2  # ENOENT: attachment path missing
    INVALID_ARGUMENT = 22  # EINVAL
    DATA_ERROR = 65  # EX_DATAERR: Mailgun answered with something unparseable
    API_FAILURE = 69  # EX_UNAVAILABLE: HTTP error or network failure
    CONFIG_ERROR = 78  # EX_CONFIG
    TIMEOUT = 110  # ETIMEDOUT
    SIGNAL_INT = 130
    BROKEN_PIPE = 141
    SIGNAL_TERM = 143


__all__ = ["ExitCode"]
