"""Slide endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database import get_db
from models.database import User
from services.auth import get_current_user
from shared.deck_models import ReorderRequest, SlideCreateRequest, SlideOut, SlideUpdateRequest

from .service import SlideService

router = APIRouter(prefix="/slides", tags=["slides"])


def get_slide_service(
    db: Session = Depends(get_db), current_user: User = Depends(get_current_user)
) -> SlideService:
    return SlideService(db, current_user)


@router.post("", response_model=SlideOut, status_code=201)
async def create_slide(
    request: SlideCreateRequest, service: SlideService = Depends(get_slide_service)
):
    """Add a slide to one of the caller's projects."""
    return service.create_slide(request)


@router.patch("/reorder/{project_id}", response_model=list[SlideOut])
async def reorder_slides(
    project_id: int,
    request: ReorderRequest,
    service: SlideService = Depends(get_slide_service),
):
    """Reassign slide positions; returns the project's slides in their new order."""
    return service.reorder_slides(project_id, request.slides)


@router.patch("/{slide_id}", response_model=SlideOut)
async def update_slide(
    slide_id: int,
    request: SlideUpdateRequest,
    service: SlideService = Depends(get_slide_service),
):
    return service.update_slide(slide_id, request)
