"""Pydantic schemas for API request/response models."""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SubmitStoryRequest(BaseModel):
    """Request schema for story submission and character-name extraction."""

    story: str = Field(min_length=1)

    @field_validator("story")
    @classmethod
    def reject_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value


class AskRequest(BaseModel):
    """Request schema for asking a character a question."""

    model_config = ConfigDict(populate_by_name=True)

    query: str = Field(min_length=1)
    character_name: str = Field(min_length=1, alias="characterName")
    summarized_story: str = Field(min_length=1, alias="summarizedStory")

    @field_validator("query", "character_name", "summarized_story")
    @classmethod
    def reject_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value


class SubmitStoryResponse(BaseModel):
    """Response schema for an accepted story."""

    message: str
    story_id: str = Field(serialization_alias="storyId")


class SummaryResponse(BaseModel):
    """Response schema for a finished summary."""

    summary: str


class TextResponse(BaseModel):
    """Response schema for generated text."""

    response: str


class MessageResponse(BaseModel):
    """Response schema for informational messages."""

    message: str


class ErrorResponse(BaseModel):
    """Response schema for errors."""

    error: str
