"""Pitch deck generation endpoints."""

from functools import lru_cache

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database import get_db
from models.database import User
from services.ai import build_generation_driver
from services.auth import get_current_user
from services.projects import ProjectService
from services.slides import SlideService
from shared.deck_models import GenerateRequest, GenerateResponse, GenerationTestResponse, SlideOut
from shared.utils import setup_logging

from .service import PitchDeckGenerator, derive_project_title

logger = setup_logging("generation-routes")

router = APIRouter(tags=["generation"])

TEST_PROMPT = "Test business idea"


@lru_cache
def get_pitch_deck_generator() -> PitchDeckGenerator:
    """Process-wide generator bound to the configured provider."""
    return PitchDeckGenerator(driver=build_generation_driver())


@router.post(
    "/generate",
    response_model=GenerateResponse,
    summary="Generate Pitch Deck",
    description="Generate slides for a business idea and store them as a new project",
)
async def generate_pitch_deck(
    request: GenerateRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    generator: PitchDeckGenerator = Depends(get_pitch_deck_generator),
):
    result = await generator.run(request.prompt)

    title = derive_project_title(request.prompt)
    description = request.prompt.strip() if isinstance(request.prompt, str) else None
    project = ProjectService(db, current_user).create_project_record(title, description or None)
    slides = SlideService(db, current_user).create_slides_for_project(project, result.slides)
    db.commit()

    logger.info(
        f"Stored project {project.id} with {len(slides)} slides "
        f"(fallback: {result.fallback_reason or 'no'})"
    )
    return GenerateResponse(
        slides=[SlideOut.model_validate(slide) for slide in slides],
        project_id=project.id,
        project_title=project.title,
    )


@router.get(
    "/generate/test",
    response_model=GenerationTestResponse,
    summary="Test Generation",
    description="Run the generator on a canned prompt without storing anything",
)
async def test_generation(generator: PitchDeckGenerator = Depends(get_pitch_deck_generator)):
    result = await generator.run(TEST_PROMPT)
    message = (
        "Generation fell back to template slides"
        if result.used_fallback
        else "Generation completed successfully"
    )
    return GenerationTestResponse(
        success=True,
        message=message,
        slide_count=len(result.slides),
        used_fallback=result.used_fallback,
    )
