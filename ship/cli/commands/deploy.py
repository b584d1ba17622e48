from __future__ import annotations

from ship.cli.commands._helpers import exit_with_code, terminal_confirm
from ship.cli.context import build_context
from ship.core.result import Err
from ship.output.errors import deploy_error_exit_code, print_deploy_error
from ship.platform.http import RealHttpClient
from ship.services.deploy.pipeline import run_release
from ship.services.deploy.timeouts import API_TIMEOUT_SECONDS


def deploy() -> None:
    """Deploy the backend to Render, then the frontend to Vercel.

    The target environment follows the current git branch.
    """
    ctx = build_context()
    console = ctx.console

    console.header("CI/CD Deployment")

    result = run_release(
        root=ctx.root,
        environ=ctx.environ,
        http=RealHttpClient(timeout=API_TIMEOUT_SECONDS),
        console=console,
        confirm=terminal_confirm(),
    )
    if isinstance(result, Err):
        print_deploy_error(result.error, console)
        exit_with_code(deploy_error_exit_code(result.error))

    summary = result.value
    console.header("Deployment Complete!")
    console.info(f"Frontend URL: {summary.frontend.url}")
    console.info(f"Backend URL: {summary.backend.address}")
