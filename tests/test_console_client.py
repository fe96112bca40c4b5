"""Tests for core.api.ConsoleClient."""

import httpx
import pytest

from core.api import ApiError, ConsoleClient
from core.contract import BillingStatusSource, ProjectSource, ResourceCreator
from core.models import CreateResourcePayload

BASE = "https://console.test/api/v1"


def test_client_satisfies_collaborator_protocols() -> None:
    client = ConsoleClient(BASE)
    assert isinstance(client, ResourceCreator)
    assert isinstance(client, BillingStatusSource)
    assert isinstance(client, ProjectSource)


@pytest.mark.asyncio
async def test_list_projects_sends_bearer_token(httpx_mock) -> None:
    httpx_mock.add_response(
        url=f"{BASE}/projects",
        json=[{"project_id": "p1", "name": "Alpha", "status": "active"}],
    )
    projects = await ConsoleClient(BASE + "/", token="tok").list_projects()
    assert [p.project_id for p in projects] == ["p1"]
    request = httpx_mock.get_request()
    assert request.headers["Authorization"] == "Bearer tok"


@pytest.mark.asyncio
async def test_get_billing_status(httpx_mock) -> None:
    httpx_mock.add_response(
        url=f"{BASE}/projects/p1/billing/status",
        json={"hasPaymentMethod": True, "hasStripeCustomer": True},
    )
    status = await ConsoleClient(BASE).get_billing_status("p1")
    assert status.has_payment_method is True


@pytest.mark.asyncio
async def test_create_billing_portal_returns_url(httpx_mock) -> None:
    httpx_mock.add_response(
        method="POST",
        url=f"{BASE}/projects/p1/billing/portal",
        json={"portal_url": "https://billing.example/session"},
    )
    url = await ConsoleClient(BASE).create_billing_portal("p1", "https://back")
    assert url == "https://billing.example/session"
    assert b'"return_url"' in httpx_mock.get_request().content


@pytest.mark.asyncio
async def test_create_resource_posts_payload(httpx_mock) -> None:
    httpx_mock.add_response(
        method="POST",
        url=f"{BASE}/projects/p1/resources",
        json={
            "resource_id": "graph-ab12",
            "project_id": "p1",
            "name": "Graph",
            "type": "Konnektr.Graph",
            "sku": "free",
            "status": "Pending",
            "settings_json": {},
            "created_at": "2026-01-01T00:00:00Z",
        },
    )
    payload = CreateResourcePayload(id="graph-ab12", name="Graph", type="Konnektr.Graph", sku="free")
    resource = await ConsoleClient(BASE).create_resource("p1", payload)
    assert resource.resource_id == "graph-ab12"
    assert resource.status == "Pending"
    body = httpx_mock.get_request().content
    assert b'"settings_json":{}' in body.replace(b" ", b"")


@pytest.mark.asyncio
async def test_create_project(httpx_mock) -> None:
    httpx_mock.add_response(
        method="POST", url=f"{BASE}/projects", json={"project_id": "p2", "name": "Beta"}
    )
    project = await ConsoleClient(BASE).create_project("Beta")
    assert project.project_id == "p2"


@pytest.mark.asyncio
async def test_error_response_raises_api_error(httpx_mock) -> None:
    httpx_mock.add_response(
        method="POST",
        url=f"{BASE}/projects/p1/resources",
        status_code=402,
        json={"error": "Payment required", "details": "no payment method"},
    )
    payload = CreateResourcePayload(id="x-1", name="X", type="Konnektr.Graph", sku="standard")
    with pytest.raises(ApiError) as exc_info:
        await ConsoleClient(BASE).create_resource("p1", payload)
    assert exc_info.value.status_code == 402
    assert "Payment required" in str(exc_info.value)
    assert "no payment method" in str(exc_info.value)


@pytest.mark.asyncio
async def test_non_json_error_uses_reason_phrase(httpx_mock) -> None:
    httpx_mock.add_response(url=f"{BASE}/projects", status_code=500, text="boom")
    with pytest.raises(ApiError) as exc_info:
        await ConsoleClient(BASE).list_projects()
    assert exc_info.value.status_code == 500
    assert exc_info.value.message == "Internal Server Error"


@pytest.mark.asyncio
async def test_timeout_raises_api_error_without_status(httpx_mock) -> None:
    httpx_mock.add_exception(httpx.ReadTimeout("slow"))
    with pytest.raises(ApiError) as exc_info:
        await ConsoleClient(BASE).list_projects()
    assert exc_info.value.status_code is None
    assert str(exc_info.value) == "Connection timeout"


@pytest.mark.asyncio
async def test_empty_success_body_raises_api_error(httpx_mock) -> None:
    httpx_mock.add_response(method="POST", url=f"{BASE}/projects/p1/resources", status_code=201)
    payload = CreateResourcePayload(id="graph-ab12", name="Graph", type="Konnektr.Graph", sku="free")
    with pytest.raises(ApiError) as exc_info:
        await ConsoleClient(BASE).create_resource("p1", payload)
    assert exc_info.value.status_code is None
    assert str(exc_info.value) == "Unexpected response from server"
    assert exc_info.value.__cause__ is not None


@pytest.mark.asyncio
async def test_incomplete_project_list_raises_api_error(httpx_mock) -> None:
    httpx_mock.add_response(url=f"{BASE}/projects", json=[{"name": "no id"}])
    with pytest.raises(ApiError, match="Unexpected response"):
        await ConsoleClient(BASE).list_projects()


@pytest.mark.asyncio
async def test_non_json_success_body_raises_api_error(httpx_mock) -> None:
    httpx_mock.add_response(method="POST", url=f"{BASE}/projects", text="<html>ok</html>")
    with pytest.raises(ApiError) as exc_info:
        await ConsoleClient(BASE).create_project("Beta")
    assert exc_info.value.status_code == 200
