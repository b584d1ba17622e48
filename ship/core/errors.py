"""Error codes for CLI exit status.

These values are used as process exit codes and should remain stable:
- 0: Success
- 1: User error (invalid configuration)
- 2: Environment error (missing tools, not a git repo, not authenticated)
- 3: Deploy error (remote build failed, frontend deploy failed)
- 4: Network error (hosting API unreachable or rejecting calls)
- 5: I/O error (local config artifact could not be written)
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands."""

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    DEPLOY_ERROR = 3
    NETWORK_ERROR = 4
    IO_ERROR = 5
