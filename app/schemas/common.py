"""Shared response schemas."""

from pydantic import BaseModel


class SuccessResponse(BaseModel):
    """Acknowledgement for operations that return no resource."""

    success: bool = True
