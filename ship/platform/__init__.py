"""Platform abstraction layer."""

from .http import (
    HttpClient,
    HttpError,
    HttpResponse,
    MockHttpClient,
    RealHttpClient,
)
from .process import (
    ProcessError,
    StreamedRun,
    child_env,
    run,
    run_silent,
    run_streaming,
    which,
)

__all__ = [
    # http
    "HttpClient",
    "HttpError",
    "HttpResponse",
    "MockHttpClient",
    "RealHttpClient",
    # process
    "ProcessError",
    "StreamedRun",
    "child_env",
    "run",
    "run_silent",
    "run_streaming",
    "which",
]
