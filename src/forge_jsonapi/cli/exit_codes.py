# topmark:header:start
#
#   project      : Forge JSON:API
#   file         : exit_codes.py
#   file_relpath : src/forge_jsonapi/cli/exit_codes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exit codes for the Forge JSON:API CLI.

The CLI aligns with the BSD `sysexits` convention so other tooling can
interpret failures consistently.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Standardized exit codes for the Forge JSON:API CLI.

    Attributes:
        SUCCESS: Successful execution with no errors.
        FAILURE: Generic failure (non-specific error).
        USAGE_ERROR: Command-line invocation error (invalid flags/args). Mirrors
            BSD ``EX_USAGE (64)``.
        ENCODE_ERROR: The target object could not be encoded with its declared
            metadata. Mirrors BSD ``EX_DATAERR (65)``.
        IMPORT_ERROR: A model module or target callable could not be imported.
            Mirrors BSD ``EX_UNAVAILABLE (69)``.
        CONFIG_ERROR: Configuration error (invalid/malformed config). Mirrors
            BSD ``EX_CONFIG (78)``.
        UNEXPECTED_ERROR: Unhandled/unknown error (last-resort).
    """

    SUCCESS = 0
    FAILURE = 1

    # sysexits-aligned values
    USAGE_ERROR = 64  # EX_USAGE
    ENCODE_ERROR = 65  # EX_DATAERR
    IMPORT_ERROR = 69  # EX_UNAVAILABLE
    CONFIG_ERROR = 78  # EX_CONFIG

    UNEXPECTED_ERROR = 255
