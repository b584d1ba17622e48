"""Core domain types and logic."""

from .config import (
    ComposerConfig,
    ConfigError,
    DeployConfig,
    load_composer_config,
    load_deploy_config,
)
from .errors import ErrorCode
from .result import Err, Ok, Result, is_err, is_ok
from .targets import (
    DeploymentTarget,
    resolve_environment,
    resolve_project_name,
    resolve_service_name,
)

__all__ = [
    # config
    "ComposerConfig",
    "ConfigError",
    "DeployConfig",
    "load_composer_config",
    "load_deploy_config",
    # errors
    "ErrorCode",
    # result
    "Err",
    "Ok",
    "Result",
    "is_err",
    "is_ok",
    # targets
    "DeploymentTarget",
    "resolve_environment",
    "resolve_project_name",
    "resolve_service_name",
]
