"""Process exit codes.

CI runners only distinguish success from failure, so every propagated
failure exits with the same code.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for cikit commands.

    These values are used as process exit codes and should remain stable.
    """

    OK = 0
    FAILURE = 1
