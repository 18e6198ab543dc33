"""Tests for surveys and survey responses."""

import uuid

import pytest
from httpx import AsyncClient

from app.schemas.surveys import SurveyCreate

SURVEY = {
    "title": "Milk delivery feedback",
    "description": "Two minutes, promise",
    "questions": [
        {"text": "How fresh was the milk?", "required": True},
        {"text": "   ", "required": True},
        {"text": "Anything else?", "required": False},
    ],
}


async def create_survey(client: AsyncClient, headers: dict, **overrides) -> dict:
    response = await client.post("/api/v1/surveys", json={**SURVEY, **overrides}, headers=headers)
    assert response.status_code == 201
    return response.json()


def test_blank_questions_dropped() -> None:
    """Questions with only whitespace are discarded and the rest trimmed."""
    survey = SurveyCreate(title="T", questions=[{"text": " Q1 "}, {"text": ""}, {"text": None}])
    assert [q.text for q in survey.questions] == ["Q1"]


@pytest.mark.asyncio
async def test_create_survey(client: AsyncClient, admin_headers) -> None:
    """Surveys are stored with non-blank questions only."""
    survey = await create_survey(client, admin_headers)

    assert survey["active"] is True
    assert [q["text"] for q in survey["questions"]] == ["How fresh was the milk?", "Anything else?"]


@pytest.mark.asyncio
async def test_survey_admin_endpoints_guarded(client: AsyncClient, staff_headers) -> None:
    """Creating and listing surveys is admin only."""
    response = await client.post("/api/v1/surveys", json=SURVEY, headers=staff_headers("A01"))
    assert response.status_code == 401
    assert (await client.get("/api/v1/surveys")).status_code == 401


@pytest.mark.asyncio
async def test_latest_active_survey(client: AsyncClient, admin_headers) -> None:
    """The newest active survey is public; inactive ones are skipped."""
    empty = await client.get("/api/v1/surveys/latest")
    assert empty.status_code == 200
    assert empty.json() is None

    current = await create_survey(client, admin_headers, title="Current")
    await create_survey(client, admin_headers, title="Paused", active=False)

    response = await client.get("/api/v1/surveys/latest")
    assert response.json()["id"] == current["id"]


@pytest.mark.asyncio
async def test_submit_response(client: AsyncClient, admin_headers) -> None:
    """Answers are stored as strings in question order."""
    survey = await create_survey(client, admin_headers)

    response = await client.post(
        f"/api/v1/surveys/{survey['id']}/responses",
        json={"answers": [5, None], "meta": {"page": "/plans"}},
    )
    assert response.status_code == 201
    data = response.json()
    assert data["answers"] == ["5", ""]
    assert data["meta"] == {"page": "/plans"}

    listing = await client.get(f"/api/v1/surveys/{survey['id']}/responses", headers=admin_headers)
    assert [r["id"] for r in listing.json()] == [data["id"]]


@pytest.mark.asyncio
async def test_required_answers_enforced(client: AsyncClient, admin_headers) -> None:
    """Blank or missing required answers are rejected."""
    survey = await create_survey(client, admin_headers)
    url = f"/api/v1/surveys/{survey['id']}/responses"

    blank = await client.post(url, json={"answers": ["  ", "fine"]})
    assert blank.status_code == 400
    assert blank.json()["message"] == "Please answer all required questions"

    missing = await client.post(url, json={"answers": []})
    assert missing.status_code == 400


@pytest.mark.asyncio
async def test_respond_to_unknown_survey(client: AsyncClient) -> None:
    """Responses to missing surveys are 404."""
    response = await client.post(
        f"/api/v1/surveys/{uuid.uuid4()}/responses", json={"answers": ["x"]}
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_survey_removes_responses(client: AsyncClient, admin_headers) -> None:
    """Deleting a survey deletes its responses too."""
    survey = await create_survey(client, admin_headers)
    await client.post(f"/api/v1/surveys/{survey['id']}/responses", json={"answers": ["Very"]})

    response = await client.delete(f"/api/v1/surveys/{survey['id']}", headers=admin_headers)
    assert response.status_code == 200

    assert (await client.get("/api/v1/surveys", headers=admin_headers)).json() == []
    responses = await client.get(
        f"/api/v1/surveys/{survey['id']}/responses", headers=admin_headers
    )
    assert responses.json() == []

    again = await client.delete(f"/api/v1/surveys/{survey['id']}", headers=admin_headers)
    assert again.status_code == 404
