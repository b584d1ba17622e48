"""The release workflow: backend first, then the frontend pointed at it.

Stages run strictly in order and the first Err stops the run:

    config -> branch -> tools -> auth -> backend -> frontend
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from ship.core.config import DeployConfig, load_deploy_config
from ship.core.result import Err, Ok, Result
from ship.git.repository import Repository
from ship.output.console import ConsoleProtocol
from ship.platform.http import HttpClient
from ship.services.deploy.backend import BackendRelease, release_backend, skip_backend
from ship.services.deploy.errors import DeployError
from ship.services.deploy.frontend import FrontendRelease, release_frontend
from ship.services.deploy.preflight import (
    Confirm,
    check_render_access,
    ensure_tools,
    ensure_vercel_auth,
)
from ship.services.deploy.vercel import VercelCli


@dataclass(frozen=True, slots=True)
class ReleaseSummary:
    branch: str
    backend: BackendRelease
    frontend: FrontendRelease


def load_config_stage(
    root: Path,
    environ: Mapping[str, str],
    console: ConsoleProtocol,
) -> Result[DeployConfig, DeployError]:
    loaded = load_deploy_config(root, environ)
    if isinstance(loaded, Err):
        return Err(
            DeployError(
                kind="config_error",
                message=loaded.error.message,
                hint=str(loaded.error.path) if loaded.error.path else None,
            )
        )
    if loaded.value.env_file is not None:
        console.success(f"Environment variables loaded from {loaded.value.env_file.name}")
    return Ok(loaded.value)


def detect_branch(root: Path, console: ConsoleProtocol) -> Result[str, DeployError]:
    console.info("Detecting current git branch...")
    branch = Repository(root).current_branch()
    if isinstance(branch, Err):
        return Err(
            DeployError(
                kind="not_a_repo",
                message="Failed to detect git branch. Are you in a git repository?",
                hint=branch.error.message,
            )
        )
    console.success(f"Current branch: {branch.value}")
    return Ok(branch.value)


def run_release(
    *,
    root: Path,
    environ: Mapping[str, str],
    http: HttpClient,
    console: ConsoleProtocol,
    confirm: Confirm | None,
) -> Result[ReleaseSummary, DeployError]:
    """Run the full release for the branch checked out at root.

    Args:
        root: Repository root (contains the backend and frontend dirs)
        environ: Process environment, read once into a DeployConfig
        http: Client for the Render API
        console: Output sink
        confirm: Yes/no prompt, or None when running non-interactively

    Returns:
        Ok(ReleaseSummary) with both addresses, or the first stage's error
    """
    config_result = load_config_stage(root, environ, console)
    if isinstance(config_result, Err):
        return config_result
    config = config_result.value

    branch_result = detect_branch(root, console)
    if isinstance(branch_result, Err):
        return branch_result
    branch = branch_result.value

    tools = ensure_tools(console)
    if isinstance(tools, Err):
        return tools

    console.info("Checking authentication...")
    vercel_result = ensure_vercel_auth(
        vercel=VercelCli(config.frontend_path),
        token=config.vercel_token,
        console=console,
    )
    if isinstance(vercel_result, Err):
        return vercel_result
    vercel = vercel_result.value
    if vercel.token is None:
        config = config.without_vercel_token()

    render_key = check_render_access(config=config, console=console, confirm=confirm)
    if isinstance(render_key, Err):
        return render_key

    console.newline()
    if render_key.value is not None:
        backend_result = release_backend(
            branch=branch,
            api_key=render_key.value,
            config=config,
            http=http,
            console=console,
        )
        if isinstance(backend_result, Err):
            return backend_result
        backend = backend_result.value
    else:
        backend = skip_backend(branch=branch, console=console)

    console.info(f"Backend URL for frontend: {backend.address}")
    console.newline()

    frontend_result = release_frontend(
        branch=branch,
        backend_url=backend.address,
        frontend_dir=config.frontend_path,
        vercel=vercel,
        console=console,
    )
    if isinstance(frontend_result, Err):
        return frontend_result

    return Ok(ReleaseSummary(branch=branch, backend=backend, frontend=frontend_result.value))
