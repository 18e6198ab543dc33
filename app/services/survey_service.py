"""Survey definition and public response capture."""

from uuid import UUID

from sqlalchemy import delete, insert, select
from sqlalchemy.ext.asyncio import AsyncSession
from structlog import get_logger

from app.core.exceptions import BadRequestException, NotFoundException
from app.models.surveys import survey_responses, surveys
from app.schemas.surveys import (
    SurveyCreate,
    SurveyDetail,
    SurveySubmission,
    SurveySubmissionResponse,
)

logger = get_logger(__name__)


def missing_required_answers(survey: SurveyDetail, answers: list[str]) -> list[int]:
    """Indexes of required questions left blank in ``answers``."""
    missing = []
    for index, question in enumerate(survey.questions):
        answer = answers[index] if index < len(answers) else ""
        if question.required and not answer.strip():
            missing.append(index)
    return missing


class SurveyService:
    """Service for surveys and their responses."""

    def __init__(self, db: AsyncSession):
        """Initialize service with database session."""
        self.db = db

    async def create_survey(self, data: SurveyCreate) -> SurveyDetail:
        """Create a survey."""
        stmt = (
            insert(surveys)
            .values(
                title=data.title,
                description=data.description,
                questions=[question.model_dump() for question in data.questions],
                active=data.active,
            )
            .returning(surveys)
        )
        result = await self.db.execute(stmt)
        row = result.fetchone()
        await self.db.commit()

        logger.info("survey_created", survey_id=str(row.id), questions=len(data.questions))
        return SurveyDetail.model_validate(dict(row._mapping))

    async def list_surveys(self) -> list[SurveyDetail]:
        """List all surveys, newest first."""
        stmt = select(surveys).order_by(surveys.c.created_at.desc())
        result = await self.db.execute(stmt)
        return [SurveyDetail.model_validate(dict(row._mapping)) for row in result.fetchall()]

    async def get_survey(self, survey_id: UUID) -> SurveyDetail:
        """
        Get a survey by id.

        Raises:
            NotFoundException: If the survey does not exist
        """
        result = await self.db.execute(select(surveys).where(surveys.c.id == survey_id))
        row = result.fetchone()
        if not row:
            raise NotFoundException("Survey not found")
        return SurveyDetail.model_validate(dict(row._mapping))

    async def latest_active(self) -> SurveyDetail | None:
        """The most recently created active survey, if any."""
        stmt = (
            select(surveys)
            .where(surveys.c.active.is_(True))
            .order_by(surveys.c.created_at.desc())
            .limit(1)
        )
        result = await self.db.execute(stmt)
        row = result.fetchone()
        return SurveyDetail.model_validate(dict(row._mapping)) if row else None

    async def delete_survey(self, survey_id: UUID) -> None:
        """
        Delete a survey together with its responses.

        Raises:
            NotFoundException: If the survey does not exist
        """
        await self.db.execute(delete(survey_responses).where(survey_responses.c.survey_id == survey_id))
        result = await self.db.execute(delete(surveys).where(surveys.c.id == survey_id))

        if result.rowcount == 0:
            await self.db.rollback()
            raise NotFoundException("Survey not found")

        await self.db.commit()
        logger.info("survey_deleted", survey_id=str(survey_id))

    async def submit_response(
        self,
        survey_id: UUID,
        data: SurveySubmission,
    ) -> SurveySubmissionResponse:
        """
        Store a visitor's answers.

        Raises:
            NotFoundException: If the survey does not exist
            BadRequestException: If a required question is unanswered
        """
        survey = await self.get_survey(survey_id)

        if missing_required_answers(survey, data.answers):
            raise BadRequestException("Please answer all required questions")

        stmt = (
            insert(survey_responses)
            .values(survey_id=survey.id, answers=data.answers, meta=data.meta)
            .returning(survey_responses)
        )
        result = await self.db.execute(stmt)
        row = result.fetchone()
        await self.db.commit()

        return SurveySubmissionResponse.model_validate(dict(row._mapping))

    async def list_responses(self, survey_id: UUID) -> list[SurveySubmissionResponse]:
        """List responses to a survey, newest first."""
        stmt = (
            select(survey_responses)
            .where(survey_responses.c.survey_id == survey_id)
            .order_by(survey_responses.c.created_at.desc())
        )
        result = await self.db.execute(stmt)
        return [
            SurveySubmissionResponse.model_validate(dict(row._mapping)) for row in result.fetchall()
        ]
