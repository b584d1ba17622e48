"""Release failures, one kind per way the workflow can stop."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

DeployErrorKind = Literal[
    "config_error",
    "not_a_repo",
    "tool_missing",
    "auth_required",
    "api_error",
    "service_not_found",
    "deploy_failed",
    "frontend_failed",
    "io_error",
]


@dataclass(frozen=True, slots=True)
class DeployError:
    kind: DeployErrorKind
    message: str
    hint: str | None = None
