"""Survey endpoints."""

from uuid import UUID

from fastapi import APIRouter, status

from app.dependencies import AdminPrincipal, DatabaseSession
from app.schemas.common import SuccessResponse
from app.schemas.surveys import (
    SurveyCreate,
    SurveyDetail,
    SurveySubmission,
    SurveySubmissionResponse,
)
from app.services.survey_service import SurveyService

router = APIRouter(prefix="/surveys", tags=["Surveys"])


@router.post(
    "",
    response_model=SurveyDetail,
    status_code=status.HTTP_201_CREATED,
    summary="Create a survey (admin)",
)
async def create_survey(data: SurveyCreate, db: DatabaseSession, admin: AdminPrincipal):
    """Create a survey. Blank questions are dropped."""
    return await SurveyService(db).create_survey(data)


@router.get("", response_model=list[SurveyDetail], summary="List surveys (admin)")
async def list_surveys(db: DatabaseSession, admin: AdminPrincipal):
    """All surveys, newest first."""
    return await SurveyService(db).list_surveys()


@router.get("/latest", response_model=SurveyDetail | None, summary="Current survey")
async def latest_survey(db: DatabaseSession):
    """The most recent active survey, or null when none is running."""
    return await SurveyService(db).latest_active()


@router.delete("/{survey_id}", response_model=SuccessResponse, summary="Delete a survey (admin)")
async def delete_survey(survey_id: UUID, db: DatabaseSession, admin: AdminPrincipal):
    """Delete a survey and every response to it."""
    await SurveyService(db).delete_survey(survey_id)
    return SuccessResponse()


@router.post(
    "/{survey_id}/responses",
    response_model=SurveySubmissionResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Answer a survey",
)
async def submit_survey_response(survey_id: UUID, data: SurveySubmission, db: DatabaseSession):
    """
    Submit answers, one per question in order.

    Raises:
        NotFoundException: If the survey does not exist
        BadRequestException: If a required question is left blank
    """
    return await SurveyService(db).submit_response(survey_id, data)


@router.get(
    "/{survey_id}/responses",
    response_model=list[SurveySubmissionResponse],
    summary="List survey responses (admin)",
)
async def list_survey_responses(survey_id: UUID, db: DatabaseSession, admin: AdminPrincipal):
    """Responses to a survey, newest first."""
    return await SurveyService(db).list_responses(survey_id)
