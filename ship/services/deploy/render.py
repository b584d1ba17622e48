"""Render (compute hosting) REST client.

Only the three calls the release workflow needs: list services (paginated),
trigger a deploy, read a deploy's status. All calls are bearer-token
authenticated.
"""

from __future__ import annotations

import json
from dataclasses import dataclass

from ship.core.result import Err, Ok, Result
from ship.core.structured import as_obj_list, as_str_dict, get_str, get_table
from ship.platform.http import HttpClient, HttpError, HttpResponse
from ship.services.deploy.errors import DeployError

SERVICES_PAGE_LIMIT = 100

__all__ = ["RenderClient", "ServiceRecord", "SERVICES_PAGE_LIMIT"]


@dataclass(frozen=True, slots=True)
class ServiceRecord:
    id: str
    name: str
    url: str | None
    dashboard_url: str | None = None


def _parse_service(obj: object) -> ServiceRecord | None:
    item = as_str_dict(obj)
    if item is None:
        return None
    service = get_table(item, "service")
    if service is None:
        return None
    service_id = get_str(service, "id")
    name = get_str(service, "name")
    if service_id is None or name is None:
        return None
    details = get_table(service, "serviceDetails") or {}
    return ServiceRecord(
        id=service_id,
        name=name,
        url=get_str(details, "url"),
        dashboard_url=get_str(service, "dashboardUrl"),
    )


def _page_cursor(items: list[object]) -> str | None:
    if not items:
        return None
    last = as_str_dict(items[-1])
    if last is None:
        return None
    return get_str(last, "cursor")


class RenderClient:
    """Thin client over the Render v1 API."""

    def __init__(self, http: HttpClient, *, api_key: str, base_url: str) -> None:
        self._http = http
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")

    def _headers(self, *, json_body: bool = False) -> dict[str, str]:
        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Accept": "application/json",
        }
        if json_body:
            headers["Content-Type"] = "application/json"
        return headers

    def services_url(self, cursor: str | None = None) -> str:
        url = f"{self._base_url}/services?limit={SERVICES_PAGE_LIMIT}"
        if cursor:
            url += f"&cursor={cursor}"
        return url

    def deploys_url(self, service_id: str) -> str:
        return f"{self._base_url}/services/{service_id}/deploys"

    def deploy_url(self, service_id: str, deploy_id: str) -> str:
        return f"{self.deploys_url(service_id)}/{deploy_id}"

    def find_service(self, name: str) -> Result[ServiceRecord | None, DeployError]:
        """Walk the paginated service listing for an exact name match.

        Returns:
            Ok(record) when found, Ok(None) once pages are exhausted,
            Err(DeployError) if a page cannot be fetched or parsed
        """
        cursor: str | None = None
        seen: set[str] = set()
        while True:
            result = self._http.request("GET", self.services_url(cursor), headers=self._headers())
            page = _expect_status(result, expected=200, action="query Render services")
            if isinstance(page, Err):
                return page

            items = as_obj_list(page.value.json())
            if items is None:
                return Err(
                    DeployError(
                        kind="api_error",
                        message="unexpected Render services payload",
                        hint=page.value.text[:500] or None,
                    )
                )

            for obj in items:
                record = _parse_service(obj)
                if record is not None and record.name == name:
                    return Ok(record)

            cursor = _page_cursor(items)
            if cursor is None or cursor in seen:
                return Ok(None)
            seen.add(cursor)

    def trigger_deploy(self, service_id: str) -> Result[str, DeployError]:
        """Start a deploy. Not idempotent: every call creates a new attempt.

        Returns:
            Ok(deploy_id) on success
        """
        result = self._http.request(
            "POST",
            self.deploys_url(service_id),
            headers=self._headers(json_body=True),
            body=json.dumps({"clearCache": "do_not_clear"}),
        )
        response = _expect_status(result, expected=None, action="trigger Render deployment")
        if isinstance(response, Err):
            return response

        payload = as_str_dict(response.value.json())
        deploy_id = get_str(payload, "id") if payload is not None else None
        if deploy_id is None:
            return Err(
                DeployError(
                    kind="api_error",
                    message="Render API response did not include a deploy ID",
                    hint=response.value.text[:500] or None,
                )
            )
        return Ok(deploy_id)

    def get_deploy_status(self, service_id: str, deploy_id: str) -> Result[str, HttpError]:
        """Fetch a deploy's status.

        Any failure is returned as HttpError so the poller can retry it.
        A record without a status reads as "unknown".
        """
        url = self.deploy_url(service_id, deploy_id)
        result = self._http.request("GET", url, headers=self._headers())
        if isinstance(result, Err):
            return result

        response = result.value
        if response.status != 200:
            return Err(HttpError(url=url, message=f"HTTP {response.status}"))

        payload = as_str_dict(response.json())
        if payload is None:
            return Err(HttpError(url=url, message="unexpected deploy payload"))
        return Ok(get_str(payload, "status") or "unknown")


def _expect_status(
    result: Result[HttpResponse, HttpError],
    *,
    expected: int | None,
    action: str,
) -> Result[HttpResponse, DeployError]:
    """Turn a transport error or unexpected status into a DeployError.

    expected=None accepts any 2xx.
    """
    if isinstance(result, Err):
        return Err(
            DeployError(
                kind="api_error",
                message=f"Failed to {action} (HTTP 0)",
                hint=result.error.message,
            )
        )

    response = result.value
    accepted = response.ok if expected is None else response.status == expected
    if not accepted:
        return Err(
            DeployError(
                kind="api_error",
                message=f"Failed to {action} (HTTP {response.status})",
                hint=response.text.strip() or None,
            )
        )
    return Ok(response)
