"""Release workflow: Render backend first, then the Vercel frontend."""

from ship.services.deploy.errors import DeployError
from ship.services.deploy.pipeline import ReleaseSummary, run_release

__all__ = ["DeployError", "ReleaseSummary", "run_release"]
