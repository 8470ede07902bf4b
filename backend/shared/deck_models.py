"""
Project, slide and AI request/response models.

Wire names are camelCase (``projectId``, ``heroImageUrl``); attributes stay
snake_case and ``populate_by_name`` accepts either spelling on input.
"""

from datetime import datetime
from typing import Any, Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

SlideLayout = Literal["two-column", "full-width", "hero", "list", "grid"]


class CamelModel(BaseModel):
    """Base model serialising field names as camelCase."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def _reject_null(value: Any) -> Any:
    if value is None:
        raise ValueError("may not be null")
    return value


class GeneratedSlide(BaseModel):
    """Slide as produced by the generator, before persistence."""

    position: int | float = Field(..., description="Slide order as returned by the model")
    title: str = Field(..., description="Slide title")
    content: str = Field(..., description="Slide body text")


class SlideOut(CamelModel):
    """Persisted slide."""

    id: int
    project_id: int
    position: int
    title: str
    content: str
    hero_image_url: str | None = None
    layout: str | None = None
    created_at: datetime
    updated_at: datetime | None = None


class SlideCreateRequest(CamelModel):
    """Request model for creating a single slide."""

    project_id: int = Field(..., description="Owning project")
    title: str = Field(..., max_length=500)
    content: str = Field(default="")
    position: int | None = Field(
        None, ge=1, description="Insert position; appended after the last slide when omitted"
    )
    hero_image_url: str | None = Field(None, max_length=1000)
    layout: SlideLayout | None = None


class SlideUpdateRequest(CamelModel):
    """Partial slide update; only fields present in the body are applied."""

    title: str | None = Field(None, max_length=500)
    content: str | None = None
    position: int | None = Field(None, ge=1)
    hero_image_url: str | None = Field(None, max_length=1000)
    layout: SlideLayout | None = None

    @field_validator("title", "content", "position")
    @classmethod
    def reject_null(cls, value: Any) -> Any:
        return _reject_null(value)


class ReorderItem(BaseModel):
    """Requested position for one slide."""

    id: int
    position: int


class ReorderRequest(BaseModel):
    """Batch position reassignment for the slides of a project."""

    slides: list[ReorderItem] = Field(..., min_length=1)


class ProjectCreateRequest(CamelModel):
    """Request model for creating a project."""

    title: str = Field(
        ...,
        min_length=1,
        max_length=255,
        validation_alias=AliasChoices("title", "name"),
    )
    description: str | None = None


class ProjectUpdateRequest(CamelModel):
    """Partial project update."""

    title: str | None = Field(
        None,
        min_length=1,
        max_length=255,
        validation_alias=AliasChoices("title", "name"),
    )
    description: str | None = None

    @field_validator("title")
    @classmethod
    def reject_null(cls, value: Any) -> Any:
        return _reject_null(value)


class ProjectOut(CamelModel):
    """Project summary."""

    id: int
    user_id: int
    title: str
    description: str | None = None
    created_at: datetime
    updated_at: datetime | None = None


class ProjectDetailOut(ProjectOut):
    """Project with its slides in position order."""

    slides: list[SlideOut] = Field(default_factory=list)


class GenerateRequest(BaseModel):
    """Pitch deck generation request. Any prompt value is accepted."""

    prompt: Any = Field(None, description="Business idea or deck outline")


class GenerateResponse(CamelModel):
    """Generated deck, persisted as a new project."""

    slides: list[SlideOut]
    project_id: int | None = None
    project_title: str | None = None


class GenerationTestResponse(CamelModel):
    """Result of a generation smoke test."""

    success: bool
    message: str
    slide_count: int
    used_fallback: bool


class SlideData(CamelModel):
    """Snapshot of the slide being edited, as shown in the client."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    id: str | int | None = None
    title: str = ""
    content: str = ""
    hero_image_url: str | None = None
    layout: str | None = None


class ChatRequest(BaseModel):
    """Chat-edit request for one slide."""

    model_config = ConfigDict(populate_by_name=True)

    prompt: str = Field(..., min_length=1, description="Editing instruction")
    slide_id: int = Field(..., description="Slide the conversation belongs to")
    slide_data: SlideData | None = Field(None, alias="slideData")


class ChatResponse(CamelModel):
    """Chat-edit reply with optional field patch."""

    edit: str
    context: str
    slide_updates: dict[str, Any] | None = None
