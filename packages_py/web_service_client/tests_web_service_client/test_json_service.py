"""
Tests for json_service.py
Logic testing: Decision/Branch, Path coverage
"""
import json
from datetime import datetime
from typing import List, Optional

import pytest
import pytest_asyncio
from httpx import Response
from pydantic import BaseModel, ConfigDict, Field

from web_service_client.adapters.json_service import JsonService
from web_service_client.exceptions import (
    ArgumentNullError,
    SerializerNotFoundError,
    WebServiceError,
)
from web_service_client.serialization import JsonSerializer, LenientDatetime, SerializerRegistry

ISSUE_URL = "https://api.example.com/rest/issue"


class Issue(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    key: str
    summary: Optional[str] = None
    created: LenientDatetime = None
    assignee_name: Optional[str] = Field(default=None, alias="assigneeName")


class DetailedIssue(Issue):
    severity: Optional[str] = None


class Unregistered(BaseModel):
    name: str


@pytest.fixture
def registry():
    return SerializerRegistry().register_model(Issue, List[Issue]).register(dict, JsonSerializer())


@pytest_asyncio.fixture
async def service(service_config, registry, transport):
    async with JsonService(service_config, registry, transport=transport) as service:
        yield service


class TestJsonService:
    """Tests for JsonService typed verbs."""

    # Happy Path: typed GET
    @pytest.mark.asyncio
    async def test_get_json(self, router, service):
        route = router.get(f"{ISSUE_URL}/A-1").mock(
            return_value=Response(
                200,
                json={
                    "key": "A-1",
                    "summary": "Broken",
                    "created": "2024-10-30T09:05:10.881+0100",
                    "assigneeName": "mm",
                    "extra": 1,
                },
            )
        )

        issue = await service.get_json("rest/issue/A-1", Issue)

        assert issue == Issue(
            key="A-1",
            summary="Broken",
            created=datetime.fromisoformat("2024-10-30T09:05:10.881+01:00"),
            assignee_name="mm",
        )
        assert route.calls.last.request.headers["Accept"] == "application/json"

    @pytest.mark.asyncio
    async def test_get_json_list(self, router, service):
        router.get(ISSUE_URL).mock(return_value=Response(200, json=[{"key": "A-1"}, {"key": "A-2"}]))
        issues = await service.get_json("rest/issue", List[Issue])
        assert [issue.key for issue in issues] == ["A-1", "A-2"]

    # Path: request body serialized with aliases, None fields omitted
    @pytest.mark.asyncio
    async def test_post_json(self, router, service):
        route = router.post(ISSUE_URL).mock(return_value=Response(201, json={"key": "A-3"}))

        created = await service.post_json("rest/issue", Issue(key="new", assignee_name="mm"), Issue)

        assert created.key == "A-3"
        request = route.calls.last.request
        assert request.headers["Content-Type"] == "application/json"
        assert json.loads(request.content) == {"key": "new", "assigneeName": "mm"}

    @pytest.mark.asyncio
    async def test_put_json_dict(self, router, service):
        route = router.put(f"{ISSUE_URL}/A-1").mock(return_value=Response(204))
        result = await service.put_json("rest/issue/A-1", {"fields": {"summary": "x"}})
        assert result is None
        assert json.loads(route.calls.last.request.content) == {"fields": {"summary": "x"}}

    @pytest.mark.asyncio
    async def test_patch_json(self, router, service):
        router.patch(f"{ISSUE_URL}/A-1").mock(return_value=Response(200, json={"key": "A-1", "summary": "y"}))
        issue = await service.patch_json("rest/issue/A-1", {"summary": "y"}, Issue)
        assert issue.summary == "y"

    # Decision: explicit body type overrides type(body)
    @pytest.mark.asyncio
    async def test_body_type(self, router, service):
        route = router.post(ISSUE_URL).mock(return_value=Response(200))
        await service.post_json("rest/issue", DetailedIssue(key="A-9", severity="high"), body_type=Issue)
        assert json.loads(route.calls.last.request.content) == {"key": "A-9"}

    # Decision: empty response body yields None
    @pytest.mark.asyncio
    async def test_empty_response(self, router, service):
        router.get(ISSUE_URL).mock(return_value=Response(200, content=b""))
        assert await service.get_json("rest/issue", Issue) is None

    @pytest.mark.asyncio
    async def test_delete_json(self, router, service):
        router.delete(f"{ISSUE_URL}/A-1").mock(return_value=Response(204))
        assert await service.delete_json("rest/issue/A-1") is None

    # Error Path: unregistered type fails before any I/O
    @pytest.mark.asyncio
    async def test_missing_response_serializer(self, router, service):
        route = router.get(ISSUE_URL).mock(return_value=Response(200, json={"name": "x"}))
        with pytest.raises(SerializerNotFoundError) as exc_info:
            await service.get_json("rest/issue", Unregistered)
        assert exc_info.value.type is Unregistered
        assert not route.called

    @pytest.mark.asyncio
    async def test_missing_body_serializer(self, router, service):
        route = router.post(ISSUE_URL).mock(return_value=Response(200))
        with pytest.raises(SerializerNotFoundError):
            await service.post_json("rest/issue", Unregistered(name="x"))
        assert not route.called

    # Error Path: missing body
    @pytest.mark.asyncio
    async def test_body_required(self, service):
        with pytest.raises(ArgumentNullError):
            await service.put_json("rest/issue", None)

    # Error Path: status failure goes through the shared error check
    @pytest.mark.asyncio
    async def test_error_status(self, router, service):
        router.get(f"{ISSUE_URL}/A-1").mock(
            return_value=Response(404, json={"errorMessages": ["Issue does not exist"]})
        )
        with pytest.raises(WebServiceError) as exc_info:
            await service.get_json("rest/issue/A-1", Issue, label="get_issue")
        assert exc_info.value.status_code == 404
        assert exc_info.value.label == "get_issue"
        assert "Issue does not exist" in exc_info.value.message

    # Error Path: body does not match the declared type
    @pytest.mark.asyncio
    async def test_invalid_response_body(self, router, service):
        router.get(ISSUE_URL).mock(return_value=Response(200, json={"summary": "no key"}))
        with pytest.raises(WebServiceError) as exc_info:
            await service.get_json("rest/issue", Issue)
        assert exc_info.value.status_code == 200
        assert exc_info.value.label == "GET"

    def test_serializers(self, service_config, registry):
        assert JsonService(service_config, registry).serializers is registry
