"""Typed configuration, built once per command.

The release workflow and the request composer never read the process
environment ad hoc: each command builds one config object up front and
passes it to every stage.

Sources, lowest to highest precedence:
- built-in defaults
- the process environment
- a `.env` credentials file in the working directory (if present)
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from dotenv import dotenv_values

from .result import Err, Ok, Result

__all__ = [
    "ComposerConfig",
    "ConfigError",
    "DeployConfig",
    "load_composer_config",
    "load_deploy_config",
    "read_env_file",
    # Defaults
    "DEFAULT_DEPLOY_TIMEOUT_SECONDS",
    "DEFAULT_POLL_INTERVAL_SECONDS",
    "DEFAULT_PORT",
    "ENV_FILE_NAME",
    "RENDER_API_BASE_URL",
]

# -----------------------------------------------------------------------------
# Defaults
# -----------------------------------------------------------------------------

ENV_FILE_NAME = ".env"

RENDER_API_BASE_URL = "https://api.render.com/v1"
DEFAULT_DEPLOY_TIMEOUT_SECONDS = 900
DEFAULT_POLL_INTERVAL_SECONDS = 5

BACKEND_DIR = "backend"
FRONTEND_DIR = "frontend"

DEFAULT_PORT = "8080"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when configuration values cannot be parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class DeployConfig:
    """Everything the release workflow needs to know up front."""

    root: Path
    render_api_key: str | None = None
    vercel_token: str | None = None
    deploy_timeout: int = DEFAULT_DEPLOY_TIMEOUT_SECONDS
    poll_interval: int = DEFAULT_POLL_INTERVAL_SECONDS
    render_api_base_url: str = RENDER_API_BASE_URL
    backend_dir: str = BACKEND_DIR
    frontend_dir: str = FRONTEND_DIR
    env_file: Path | None = None

    @property
    def frontend_path(self) -> Path:
        return self.root / self.frontend_dir

    def without_vercel_token(self) -> DeployConfig:
        """Copy with the token dropped (local CLI login takes priority)."""
        return DeployConfig(
            root=self.root,
            render_api_key=self.render_api_key,
            vercel_token=None,
            deploy_timeout=self.deploy_timeout,
            poll_interval=self.poll_interval,
            render_api_base_url=self.render_api_base_url,
            backend_dir=self.backend_dir,
            frontend_dir=self.frontend_dir,
            env_file=self.env_file,
        )


@dataclass(frozen=True, slots=True)
class ComposerConfig:
    """Request composer settings."""

    api_url: str | None = None
    default_port: str = DEFAULT_PORT


def read_env_file(path: Path) -> dict[str, str]:
    """Parse a dotenv file, dropping keys without a value."""
    if not path.is_file():
        return {}
    return {k: v for k, v in dotenv_values(path).items() if v is not None}


def _merged_env(root: Path, environ: Mapping[str, str]) -> tuple[dict[str, str], Path | None]:
    env_path = root / ENV_FILE_NAME
    merged = dict(environ)
    if env_path.is_file():
        merged.update(read_env_file(env_path))
        return merged, env_path
    return merged, None


def _non_empty(env: Mapping[str, str], key: str) -> str | None:
    value = env.get(key, "").strip()
    return value or None


def load_deploy_config(root: Path, environ: Mapping[str, str]) -> Result[DeployConfig, ConfigError]:
    """Build the release workflow config.

    Args:
        root: Repository root (working directory of the workflow)
        environ: Process environment (usually os.environ)

    Returns:
        Ok(DeployConfig) on success, Err(ConfigError) if a value is malformed
    """
    env, env_file = _merged_env(root, environ)

    timeout = DEFAULT_DEPLOY_TIMEOUT_SECONDS
    raw_timeout = _non_empty(env, "RENDER_DEPLOY_TIMEOUT")
    if raw_timeout is not None:
        try:
            timeout = int(raw_timeout)
        except ValueError:
            return Err(
                ConfigError(
                    f"RENDER_DEPLOY_TIMEOUT must be an integer, got {raw_timeout!r}",
                    path=env_file,
                )
            )
        if timeout <= 0:
            return Err(
                ConfigError(
                    f"RENDER_DEPLOY_TIMEOUT must be positive, got {timeout}",
                    path=env_file,
                )
            )

    return Ok(
        DeployConfig(
            root=root,
            render_api_key=_non_empty(env, "RENDER_API_KEY"),
            vercel_token=_non_empty(env, "VERCEL_TOKEN"),
            deploy_timeout=timeout,
            env_file=env_file,
        )
    )


def load_composer_config(root: Path, environ: Mapping[str, str]) -> ComposerConfig:
    """Build the request composer config. Never fails."""
    env, _ = _merged_env(root, environ)
    return ComposerConfig(api_url=_non_empty(env, "NEXT_PUBLIC_API_URL"))
