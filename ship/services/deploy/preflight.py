"""Precondition checks run before anything is deployed.

Every failure here is fatal and never retried.
"""

from __future__ import annotations

from collections.abc import Callable

from ship.core.config import DeployConfig
from ship.core.result import Err, Ok, Result
from ship.output.console import ConsoleProtocol, Style
from ship.platform.process import which
from ship.services.deploy.errors import DeployError
from ship.services.deploy.vercel import VercelCli

Confirm = Callable[[str], bool]


def ensure_tools(console: ConsoleProtocol) -> Result[None, DeployError]:
    console.info("Checking for required CLI tools...")
    if which("vercel") is None:
        return Err(
            DeployError(
                kind="tool_missing",
                message="Vercel CLI not found",
                hint="npm install -g vercel",
            )
        )
    console.success("Vercel CLI found")

    # The backend is deployed through the REST API; the render CLI is optional.
    if which("render") is None:
        console.warning("Render CLI not found. Render deployments will use the API only.")
    else:
        console.success("Render CLI found")
    return Ok(None)


def ensure_vercel_auth(
    *,
    vercel: VercelCli,
    token: str | None,
    console: ConsoleProtocol,
) -> Result[VercelCli, DeployError]:
    """Pick the Vercel credentials to use.

    A local `vercel login` wins over VERCEL_TOKEN; the token is only used
    (and must then be valid) when there is no local login. With neither, an
    interactive login is started.

    Returns:
        Ok(cli) configured with the token to use (or none)
    """
    console.info("Checking Vercel authentication...")

    local = vercel.with_token(None)
    whoami = local.whoami()
    if isinstance(whoami, Ok):
        console.success(f"Logged in to Vercel as: {whoami.value}")
        console.info("Using local Vercel credentials (not using VERCEL_TOKEN)")
        return Ok(local)

    if token:
        console.info("Found VERCEL_TOKEN, validating...")
        tokened = vercel.with_token(token)
        whoami = tokened.whoami()
        if isinstance(whoami, Err):
            return Err(
                DeployError(
                    kind="auth_required",
                    message="VERCEL_TOKEN is invalid",
                    hint="Run 'vercel login', or update VERCEL_TOKEN in .env with a valid "
                    "token from https://vercel.com/account/tokens",
                )
            )
        console.success(f"VERCEL_TOKEN is valid for user: {whoami.value}")
        return Ok(tokened)

    console.warning("Not authenticated with Vercel")
    console.info("Please login to Vercel...")
    local.login()
    whoami = local.whoami()
    if isinstance(whoami, Err):
        return Err(
            DeployError(
                kind="auth_required",
                message="Failed to authenticate with Vercel",
                hint="Run: vercel login",
            )
        )
    console.success(f"Successfully logged in as: {whoami.value}")
    return Ok(local)


def check_render_access(
    *,
    config: DeployConfig,
    console: ConsoleProtocol,
    confirm: Confirm | None,
) -> Result[str | None, DeployError]:
    """Decide whether the backend is deployed.

    Returns:
        Ok(api_key) to deploy it, Ok(None) if the operator chose to skip
        the backend, Err when there is no key and no one to ask (or the
        operator declined)
    """
    if config.render_api_key is not None:
        console.success("RENDER_API_KEY found")
        return Ok(config.render_api_key)

    console.warning("RENDER_API_KEY not found in environment")
    console.print("  export RENDER_API_KEY=your_api_key_here", Style.DIM)
    console.info("Get your API key from: https://dashboard.render.com/u/settings#api-keys")

    if confirm is not None and confirm("Do you want to continue without deploying to Render?"):
        return Ok(None)

    return Err(
        DeployError(
            kind="auth_required",
            message="RENDER_API_KEY is required to deploy the backend",
            hint="Set RENDER_API_KEY in the environment or in .env",
        )
    )
