"""Deployment target naming.

Maps a git branch to the names used on the hosting platforms. Known branches
get fixed names; anything else is slugged. Every function here is pure and
total: any branch string produces a name.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Literal

__all__ = [
    "DeploymentTarget",
    "FrontendEnvironment",
    "TargetStatus",
    "default_backend_url",
    "is_production_branch",
    "resolve_environment",
    "resolve_project_name",
    "resolve_service_name",
    "resolve_target",
    "slugify_branch",
]

FrontendEnvironment = Literal["production", "preview"]
TargetStatus = Literal["pending", "found", "deploying", "live", "unknown"]

PRODUCTION_BRANCHES = frozenset({"prod", "production", "main"})

_SERVICE_PREFIX = "cicd-demo-backend"
_PROJECT_SUFFIX = "cicd-demo"

_SERVICE_ALIASES: dict[str, str] = {
    **{b: f"{_SERVICE_PREFIX}-prod" for b in PRODUCTION_BRANCHES},
    "gamma": f"{_SERVICE_PREFIX}-gamma",
    "beta": f"{_SERVICE_PREFIX}-beta",
}

_PROJECT_ALIASES: dict[str, str] = {
    **{b: f"prod-{_PROJECT_SUFFIX}" for b in PRODUCTION_BRANCHES},
    "gamma": f"gamma-{_PROJECT_SUFFIX}",
    "beta": f"beta-{_PROJECT_SUFFIX}",
}

_NON_SLUG = re.compile(r"[^a-z0-9]")


@dataclass(frozen=True, slots=True)
class DeploymentTarget:
    """The backend service a branch deploys to.

    Attributes:
        name: Canonical service name derived from the branch
        service_id: Remote identifier, set once the lookup succeeds
        address: Network address of the service, once known
        status: Last known status
    """

    name: str
    service_id: str | None = None
    address: str | None = None
    status: TargetStatus = "pending"

    @property
    def resolved_address(self) -> str:
        """The known address, or the deterministic default for this name."""
        return self.address or default_backend_url(self.name)


def slugify_branch(branch: str) -> str:
    """Lowercase, then replace every char outside [a-z0-9] with '-'."""
    return _NON_SLUG.sub("-", branch.lower())


def is_production_branch(branch: str) -> bool:
    return branch in PRODUCTION_BRANCHES


def resolve_service_name(branch: str) -> str:
    alias = _SERVICE_ALIASES.get(branch)
    if alias is not None:
        return alias
    return f"{_SERVICE_PREFIX}-{slugify_branch(branch)}"


def resolve_project_name(branch: str) -> str:
    alias = _PROJECT_ALIASES.get(branch)
    if alias is not None:
        return alias
    return f"{slugify_branch(branch)}-{_PROJECT_SUFFIX}"


def resolve_environment(branch: str) -> FrontendEnvironment:
    return "production" if is_production_branch(branch) else "preview"


def default_backend_url(service_name: str) -> str:
    return f"https://{service_name}.onrender.com"


def resolve_target(branch: str) -> DeploymentTarget:
    return DeploymentTarget(name=resolve_service_name(branch))
