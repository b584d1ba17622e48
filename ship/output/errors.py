"""Error presentation utilities.

Centralized error formatting and exit code mapping for consistent UX.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ship.core.errors import ErrorCode
from ship.output.console import Style
from ship.services.deploy.errors import DeployError

if TYPE_CHECKING:
    from ship.output.console import ConsoleProtocol

__all__ = ["print_deploy_error", "deploy_error_exit_code"]


def print_deploy_error(error: DeployError, console: ConsoleProtocol) -> None:
    """Print a deploy error and its hint (hints may span several lines)."""
    console.error(error.message)
    if error.hint:
        for line in error.hint.splitlines():
            console.print(f"  {line}", Style.DIM)


def deploy_error_exit_code(error: DeployError) -> int:
    match error.kind:
        case "config_error":
            return int(ErrorCode.USER_ERROR)
        case "not_a_repo" | "tool_missing" | "auth_required" | "service_not_found":
            return int(ErrorCode.ENV_ERROR)
        case "deploy_failed" | "frontend_failed":
            return int(ErrorCode.DEPLOY_ERROR)
        case "api_error":
            return int(ErrorCode.NETWORK_ERROR)
        case "io_error":
            return int(ErrorCode.IO_ERROR)
