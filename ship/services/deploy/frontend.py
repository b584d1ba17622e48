"""Frontend stage: deploy the Vercel project wired to the backend address."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ship.core.result import Err, Ok, Result
from ship.core.targets import (
    FrontendEnvironment,
    resolve_environment,
    resolve_project_name,
)
from ship.output.console import ConsoleProtocol, Style
from ship.services.deploy.errors import DeployError
from ship.services.deploy.project_marker import write_project_marker
from ship.services.deploy.vercel import API_URL_VARIABLE, VercelCli, extract_deployment_url


@dataclass(frozen=True, slots=True)
class FrontendRelease:
    project: str
    environment: FrontendEnvironment
    url: str


_ENVIRONMENT_LABELS: dict[str, str] = {
    "gamma": "Deploying to GAMMA (pre-production) environment as a Vercel PREVIEW",
    "beta": "Deploying to BETA (staging) environment as a Vercel PREVIEW",
}


def _announce(branch: str, environment: FrontendEnvironment, console: ConsoleProtocol) -> None:
    if environment == "production":
        console.info("Deploying to PRODUCTION environment")
    else:
        console.info(
            _ENVIRONMENT_LABELS.get(branch, f"Deploying to PREVIEW environment for branch '{branch}'")
        )


def _link_backend_url(
    *,
    vercel: VercelCli,
    project: str,
    environment: FrontendEnvironment,
    backend_url: str,
    console: ConsoleProtocol,
) -> None:
    """Replace the project's API URL variable for this environment.

    Failures here only affect git-triggered deploys, so they are warnings.
    """
    console.info(f"Setting {API_URL_VARIABLE} for Vercel project '{project}'...")
    # rm fails when the variable was never set; that is expected.
    vercel.env_rm(API_URL_VARIABLE, environment=environment, project=project)
    added = vercel.env_add(API_URL_VARIABLE, backend_url, environment=environment, project=project)
    if isinstance(added, Err):
        console.warning("Failed to add environment variable to Vercel project.")
        console.warning(
            "The deployment will proceed, but git-based deployments may not have "
            "the correct backend URL."
        )
        return
    console.success(f"Set {API_URL_VARIABLE} for the '{environment}' environment.")


def release_frontend(
    *,
    branch: str,
    backend_url: str,
    frontend_dir: Path,
    vercel: VercelCli,
    console: ConsoleProtocol,
) -> Result[FrontendRelease, DeployError]:
    """Deploy the frontend, wired to the given backend address.

    vercel.json is restored to its prior state whether the deploy succeeds
    or not.
    """
    environment = resolve_environment(branch)
    project = resolve_project_name(branch)

    console.info("Deploying frontend to Vercel...")
    _announce(branch, environment, console)
    console.info(f"Project name: {project}")

    console.info("Configuring Vercel project name...")
    marker = write_project_marker(frontend_dir, project)
    if isinstance(marker, Err):
        return marker

    try:
        _link_backend_url(
            vercel=vercel,
            project=project,
            environment=environment,
            backend_url=backend_url,
            console=console,
        )

        console.info("Deploying to Vercel...")
        run = vercel.deploy(
            project=project,
            branch=branch,
            backend_url=backend_url,
            production=environment == "production",
            on_line=lambda line: console.print(line, Style.DIM),
        )
    finally:
        marker.value.restore()

    url = extract_deployment_url(run.output)
    if not run.ok or url is None:
        reason = f"exit {run.returncode}" if not run.ok else "no deployment URL in output"
        return Err(
            DeployError(
                kind="frontend_failed",
                message=f"Failed to deploy frontend to Vercel ({reason})",
            )
        )

    console.success(f"Frontend deployed to: {url}")
    return Ok(FrontendRelease(project=project, environment=environment, url=url))
