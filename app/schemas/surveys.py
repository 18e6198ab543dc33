"""Survey schemas."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field, field_validator


class SurveyQuestion(BaseModel):
    """A single survey question."""

    text: str = ""
    required: bool = False

    @field_validator("text", mode="before")
    @classmethod
    def strip_text(cls, v: Any) -> str:
        """Question text is stored trimmed."""
        return str(v or "").strip()


class SurveyCreate(BaseModel):
    """Schema for defining a survey."""

    title: str = Field(..., min_length=1, max_length=300)
    description: str | None = None
    questions: list[SurveyQuestion] = Field(default_factory=list)
    active: bool = True

    @field_validator("questions")
    @classmethod
    def drop_blank_questions(cls, v: list[SurveyQuestion]) -> list[SurveyQuestion]:
        """Questions without text are discarded."""
        return [question for question in v if question.text]


class SurveyDetail(BaseModel):
    """Schema for survey response."""

    id: UUID
    title: str
    description: str | None = None
    questions: list[SurveyQuestion]
    active: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class SurveySubmission(BaseModel):
    """Answers submitted by a visitor, by question index."""

    answers: list[Any] = Field(default_factory=list)
    meta: dict[str, Any] | None = None

    @field_validator("answers")
    @classmethod
    def stringify_answers(cls, v: list[Any]) -> list[str]:
        """Answers are stored as strings; null becomes empty."""
        return ["" if answer is None else str(answer) for answer in v]


class SurveySubmissionResponse(BaseModel):
    """Stored survey answers."""

    id: UUID
    survey_id: UUID
    answers: list[str]
    meta: dict[str, Any] | None = None
    created_at: datetime

    model_config = {"from_attributes": True}
