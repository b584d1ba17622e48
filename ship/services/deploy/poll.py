"""Deploy status polling.

A deploy attempt is polled on a fixed interval until the remote build reaches
a terminal status or the time budget runs out. Running out of time is not a
failure: the deploy may still finish remotely, so the caller gets an
"abandoned" outcome and decides to carry on.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from time import sleep
from typing import Literal, Protocol

from ship.core.result import Err, Result
from ship.output.console import ConsoleProtocol
from ship.platform.http import HttpError

__all__ = [
    "DeployAttempt",
    "FAILURE_STATUSES",
    "PollOutcome",
    "SUCCESS_STATUSES",
    "poll_deploy",
]

SUCCESS_STATUSES = frozenset({"live", "deployed", "succeeded", "ready"})
FAILURE_STATUSES = frozenset(
    {"build_failed", "failed", "canceled", "cancelled", "timed_out", "deactivated"}
)

PollState = Literal["succeeded", "failed", "abandoned"]


class DeployStatusSource(Protocol):
    def get_deploy_status(self, service_id: str, deploy_id: str) -> Result[str, HttpError]: ...


@dataclass(frozen=True, slots=True)
class DeployAttempt:
    """One polling cycle of a triggered deploy.

    statuses only grows, and nothing is appended after a terminal status.
    """

    id: str
    timeout: int
    elapsed: int = 0
    statuses: tuple[str, ...] = ()

    @property
    def status(self) -> str | None:
        return self.statuses[-1] if self.statuses else None

    @property
    def is_terminal(self) -> bool:
        s = self.status
        return s is not None and (s in SUCCESS_STATUSES or s in FAILURE_STATUSES)

    @property
    def timed_out(self) -> bool:
        return self.elapsed >= self.timeout

    def observe(self, status: str) -> DeployAttempt:
        if self.is_terminal:
            raise ValueError(f"deploy {self.id} already settled as {self.status}")
        return replace(self, statuses=(*self.statuses, status))

    def waited(self, seconds: int) -> DeployAttempt:
        return replace(self, elapsed=self.elapsed + seconds)


@dataclass(frozen=True, slots=True)
class PollOutcome:
    state: PollState
    attempt: DeployAttempt


def poll_deploy(
    *,
    source: DeployStatusSource,
    service_id: str,
    deploy_id: str,
    timeout: int,
    interval: int,
    console: ConsoleProtocol,
) -> PollOutcome:
    """Poll until success, failure, or the time budget is spent.

    Fetch errors are retried on the same interval and only matter if they
    last until the budget runs out.
    """
    attempt = DeployAttempt(id=deploy_id, timeout=timeout)

    while not attempt.timed_out:
        result = source.get_deploy_status(service_id, deploy_id)
        if isinstance(result, Err):
            console.warning(
                f"Could not fetch Render deploy status ({result.error.message}). Retrying..."
            )
            sleep(interval)
            attempt = attempt.waited(interval)
            continue

        status = result.value
        attempt = attempt.observe(status)
        if status in SUCCESS_STATUSES:
            console.success(f"Backend deployed successfully (status: {status})")
            return PollOutcome(state="succeeded", attempt=attempt)
        if status in FAILURE_STATUSES:
            console.error(f"Render deployment failed (status: {status})")
            return PollOutcome(state="failed", attempt=attempt)

        console.info(f"Render deploy status: {status} (waiting...)")
        sleep(interval)
        attempt = attempt.waited(interval)

    console.warning("Timed out waiting for Render deployment to finish.")
    console.warning("Continuing, but verify the backend deployment in the Render dashboard.")
    return PollOutcome(state="abandoned", attempt=attempt)
