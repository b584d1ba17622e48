from __future__ import annotations

from pathlib import Path

import pytest
import typer

from ship.cli.context import CLIContext
from ship.core.errors import ErrorCode
from ship.core.result import Err, Ok
from ship.core.targets import DeploymentTarget
from ship.output.console import MockConsole
from ship.services.deploy.backend import BackendRelease
from ship.services.deploy.errors import DeployError
from ship.services.deploy.frontend import FrontendRelease
from ship.services.deploy.pipeline import ReleaseSummary


def _ctx(tmp_path: Path, console: MockConsole) -> CLIContext:
    return CLIContext(root=tmp_path, environ={}, console=console)


def test_deploy_exits_with_mapped_code(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import ship.cli.commands.deploy as deploy_cmd

    console = MockConsole()
    monkeypatch.setattr(deploy_cmd, "build_context", lambda: _ctx(tmp_path, console))
    monkeypatch.setattr(
        deploy_cmd,
        "run_release",
        lambda **_: Err(
            DeployError(kind="tool_missing", message="Vercel CLI not found", hint="npm install -g vercel")
        ),
    )

    with pytest.raises(typer.Exit) as exc:
        deploy_cmd.deploy()

    assert exc.value.exit_code == int(ErrorCode.ENV_ERROR)
    assert "[ERROR] Vercel CLI not found" in console.messages
    assert "  npm install -g vercel" in console.messages


def test_deploy_prints_summary(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import ship.cli.commands.deploy as deploy_cmd

    console = MockConsole()
    summary = ReleaseSummary(
        branch="beta",
        backend=BackendRelease(target=DeploymentTarget(name="cicd-demo-backend-beta"), outcome=None),
        frontend=FrontendRelease(
            project="beta-cicd-demo", environment="preview", url="https://beta.vercel.app"
        ),
    )
    monkeypatch.setattr(deploy_cmd, "build_context", lambda: _ctx(tmp_path, console))
    monkeypatch.setattr(deploy_cmd, "terminal_confirm", lambda: None)
    monkeypatch.setattr(deploy_cmd, "run_release", lambda **_: Ok(summary))

    deploy_cmd.deploy()

    assert "Deployment Complete!" in console.messages
    assert "[INFO] Frontend URL: https://beta.vercel.app" in console.messages
    assert "[INFO] Backend URL: https://cicd-demo-backend-beta.onrender.com" in console.messages
