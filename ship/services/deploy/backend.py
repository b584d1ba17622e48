"""Backend stage: deploy the branch's Render service and wait for it to settle."""

from __future__ import annotations

from dataclasses import dataclass, replace

from ship.core.config import DeployConfig
from ship.core.result import Err, Ok, Result
from ship.core.targets import DeploymentTarget, TargetStatus, resolve_target
from ship.output.console import ConsoleProtocol, Style
from ship.platform.http import HttpClient
from ship.services.deploy.errors import DeployError
from ship.services.deploy.poll import PollOutcome, poll_deploy
from ship.services.deploy.render import RenderClient

RENDER_CREATE_URL = "https://dashboard.render.com/create?type=web"
SOURCE_REPO = "acm-industry/cicd-demo"


@dataclass(frozen=True, slots=True)
class BackendRelease:
    target: DeploymentTarget
    outcome: PollOutcome | None

    @property
    def address(self) -> str:
        return self.target.resolved_address


def provisioning_hint(*, service_name: str, branch: str, backend_dir: str) -> str:
    """Manual one-time setup steps for a missing Render service."""
    lines = [
        "Create the Render service manually from your dashboard:",
        f"  1. Go to: {RENDER_CREATE_URL}",
        f"  2. Connect your GitHub repository: {SOURCE_REPO}",
        "  3. Configure the service with these exact settings:",
        f"     - Name: {service_name}",
        f"     - Branch: {branch}",
        f"     - Root Directory: {backend_dir}",
        "     - Runtime: Python 3",
        "     - Build Command: pip install -r requirements.txt",
        "     - Start Command: python server.py",
        "     - Plan: Free",
        "  4. Add Environment Variables:",
        "     - FLASK_ENV=production",
        "     - PORT=8080",
        "     - PYTHON_VERSION=3.11.0",
        "  5. Set Health Check Path: /get-test",
        "After creating the service, re-run this command to deploy.",
    ]
    return "\n".join(lines)


def skip_backend(*, branch: str, console: ConsoleProtocol) -> BackendRelease:
    target = resolve_target(branch)
    console.warning("Skipping Render deployment")
    console.info(f"Using default backend URL: {target.resolved_address}")
    return BackendRelease(target=target, outcome=None)


def release_backend(
    *,
    branch: str,
    api_key: str,
    config: DeployConfig,
    http: HttpClient,
    console: ConsoleProtocol,
) -> Result[BackendRelease, DeployError]:
    """Locate the branch's Render service, deploy it, and wait for the result."""
    target = resolve_target(branch)
    client = RenderClient(
        http,
        api_key=api_key,
        base_url=config.render_api_base_url,
    )

    console.info("Deploying backend to Render...")
    console.info(f"Service name: {target.name}")
    console.info(f"Checking if Render service '{target.name}' exists...")

    found = client.find_service(target.name)
    if isinstance(found, Err):
        return found
    record = found.value
    if record is None:
        return Err(
            DeployError(
                kind="service_not_found",
                message=f"Service '{target.name}' not found on Render. "
                "Backend service must be created manually (one-time setup).",
                hint=provisioning_hint(
                    service_name=target.name,
                    branch=branch,
                    backend_dir=config.backend_dir,
                ),
            )
        )

    target = replace(target, service_id=record.id, address=record.url, status="found")
    console.success(f"Service '{target.name}' found with ID: {record.id}")
    if record.dashboard_url:
        console.info(f"Dashboard URL: {record.dashboard_url}")

    console.info("Triggering deployment via Render API...")
    triggered = client.trigger_deploy(record.id)
    if isinstance(triggered, Err):
        return triggered
    deploy_id = triggered.value
    console.info(f"Triggered Render deploy (ID: {deploy_id}). Waiting for completion...")
    target = replace(target, status="deploying")

    outcome = poll_deploy(
        source=client,
        service_id=record.id,
        deploy_id=deploy_id,
        timeout=config.deploy_timeout,
        interval=config.poll_interval,
        console=console,
    )
    if outcome.state == "failed":
        return Err(
            DeployError(
                kind="deploy_failed",
                message=f"Render deployment failed (status: {outcome.attempt.status})",
                hint=record.dashboard_url,
            )
        )

    status: TargetStatus = "live" if outcome.state == "succeeded" else "unknown"
    target = replace(target, status=status)
    console.print(f"Backend URL: {target.resolved_address}", Style.DIM)
    return Ok(BackendRelease(target=target, outcome=outcome))
