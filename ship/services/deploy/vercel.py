"""Vercel (frontend hosting) CLI wrapper.

The vercel CLI offers no structured deploy result, so the deployment URL is
scraped from its output. That scraping lives in extract_deployment_url and
nowhere else.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from pathlib import Path

from ship.core.result import Result
from ship.platform.process import ProcessError, StreamedRun, child_env
from ship.platform.process import run as run_process
from ship.platform.process import run_silent, run_streaming
from ship.services.deploy.timeouts import VERCEL_TIMEOUT_SECONDS

__all__ = ["API_URL_VARIABLE", "VercelCli", "extract_deployment_url"]

API_URL_VARIABLE = "NEXT_PUBLIC_API_URL"

# Linked-project ids in the environment would override --project.
_LINK_VARIABLES = ("VERCEL_PROJECT_ID", "VERCEL_ORG_ID")

_URL_TOKEN = re.compile(r"https://[^\s]+")


def extract_deployment_url(output: str) -> str | None:
    """Return the last https:// token in the deploy output, if any."""
    matches = _URL_TOKEN.findall(output)
    return matches[-1] if matches else None


class VercelCli:
    """Runs the vercel CLI from the frontend directory."""

    def __init__(self, cwd: Path, *, token: str | None = None) -> None:
        self.cwd = cwd
        self.token = token

    def with_token(self, token: str | None) -> VercelCli:
        return VercelCli(self.cwd, token=token)

    def _token_args(self) -> list[str]:
        return ["--token", self.token] if self.token else []

    def whoami(self) -> Result[str, ProcessError]:
        """Logged-in user (first line of `vercel whoami`)."""
        result = run_process(
            ["vercel", "whoami", *self._token_args()],
            cwd=self.cwd,
            timeout=VERCEL_TIMEOUT_SECONDS,
        )
        return result.map(lambda out: (out.strip().splitlines() or [""])[0])

    def login(self) -> Result[None, ProcessError]:
        """Interactive `vercel login`, attached to the terminal."""
        return run_silent(["vercel", "login"], cwd=self.cwd)

    def env_rm(self, name: str, *, environment: str, project: str) -> Result[str, ProcessError]:
        cmd = ["vercel", "env", "rm", name, environment, "--yes", "--project", project]
        return run_process(
            [*cmd, *self._token_args()],
            cwd=self.cwd,
            env=child_env(drop=_LINK_VARIABLES),
            timeout=VERCEL_TIMEOUT_SECONDS,
        )

    def env_add(
        self,
        name: str,
        value: str,
        *,
        environment: str,
        project: str,
    ) -> Result[str, ProcessError]:
        cmd = ["vercel", "env", "add", name, environment, "--yes", "--project", project]
        return run_process(
            [*cmd, *self._token_args()],
            cwd=self.cwd,
            env=child_env(drop=_LINK_VARIABLES),
            timeout=VERCEL_TIMEOUT_SECONDS,
            input_text=value,
        )

    def deploy_command(
        self,
        *,
        project: str,
        branch: str,
        backend_url: str,
        production: bool,
    ) -> list[str]:
        cmd = ["vercel", "deploy"]
        if production:
            cmd.append("--prod")
        cmd.extend(["-m", "githubDeployment=1", "-m", f"githubCommitRef={branch}"])
        cmd.extend(["--project", project])
        cmd.extend(["--build-env", f"{API_URL_VARIABLE}={backend_url}"])
        cmd.extend(["--env", f"{API_URL_VARIABLE}={backend_url}"])
        cmd.extend(self._token_args())
        return cmd

    def deploy(
        self,
        *,
        project: str,
        branch: str,
        backend_url: str,
        production: bool,
        on_line: Callable[[str], None] | None = None,
    ) -> StreamedRun:
        cmd = self.deploy_command(
            project=project,
            branch=branch,
            backend_url=backend_url,
            production=production,
        )
        return run_streaming(cmd, cwd=self.cwd, env=child_env(drop=_LINK_VARIABLES), on_line=on_line)
