"""Async client for the console REST API (projects, billing, resources)."""

import logging
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from core.billing import BillingStatus
from core.models import CreateResourcePayload, Project, Resource

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


class ApiError(Exception):
    """Console API call failed. status_code is None for transport errors."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def __str__(self) -> str:
        if self.status_code is None:
            return self.message
        return f"HTTP {self.status_code}: {self.message}"


def _parse(model: type[M], data: Any) -> M:
    """Validate a 2xx body; malformed or empty bodies surface as ApiError."""
    try:
        return model.model_validate(data)
    except ValidationError as e:
        logger.warning("Unexpected %s payload: %s", model.__name__, e)
        raise ApiError("Unexpected response from server") from e


def _error_message(resp: httpx.Response) -> str:
    """Backend errors are {"error": ..., "details": ...}; fall back to the reason phrase."""
    try:
        data = resp.json()
    except ValueError:
        return resp.reason_phrase or "request failed"
    if not isinstance(data, dict):
        return resp.reason_phrase or "request failed"
    message = str(data.get("error") or resp.reason_phrase or "request failed")
    details = data.get("details")
    return f"{message} ({details})" if details else message


class ConsoleClient:
    """Bearer-token client. Each call opens its own httpx.AsyncClient; no retries."""

    def __init__(self, base_url: str, token: str | None = None, timeout: float = 15.0) -> None:
        self._base_url = base_url.rstrip("/")
        self._token = token
        self._timeout = timeout

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    async def _request(self, method: str, path: str, json: Any = None) -> Any:
        url = self._base_url + path
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                resp = await client.request(method, url, headers=self._headers(), json=json)
        except httpx.TimeoutException as e:
            raise ApiError("Connection timeout") from e
        except httpx.HTTPError as e:
            logger.debug("%s %s failed: %s", method, url, e)
            raise ApiError(str(e) or type(e).__name__) from e
        if resp.status_code >= 400:
            message = _error_message(resp)
            logger.warning("%s %s -> %s: %s", method, path, resp.status_code, message)
            raise ApiError(message, status_code=resp.status_code)
        if not resp.content:
            return None
        try:
            return resp.json()
        except ValueError as e:
            raise ApiError("Unexpected response from server", status_code=resp.status_code) from e

    async def list_projects(self) -> list[Project]:
        data = await self._request("GET", "/projects")
        return [_parse(Project, item) for item in data or []]

    async def create_project(self, name: str, description: str = "") -> Project:
        data = await self._request(
            "POST", "/projects", json={"name": name, "description": description}
        )
        return _parse(Project, data)

    async def get_billing_status(self, project_id: str) -> BillingStatus:
        data = await self._request("GET", f"/projects/{project_id}/billing/status")
        return _parse(BillingStatus, data or {})

    async def create_billing_portal(self, project_id: str, return_url: str) -> str:
        """Start a billing portal session; returns the URL the user should open."""
        data = await self._request(
            "POST",
            f"/projects/{project_id}/billing/portal",
            json={"return_url": return_url},
        )
        return (data or {}).get("portal_url", "")

    async def create_resource(
        self, project_id: str, payload: CreateResourcePayload
    ) -> Resource:
        data = await self._request(
            "POST", f"/projects/{project_id}/resources", json=payload.model_dump()
        )
        return _parse(Resource, data)
