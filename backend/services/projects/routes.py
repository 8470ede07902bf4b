"""Project endpoints."""

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from database import get_db
from models.database import User
from services.auth import get_current_user
from services.slides import SlideService
from services.theme import generate_gradient_config, generate_theme_tokens
from shared.deck_models import (
    ProjectCreateRequest,
    ProjectDetailOut,
    ProjectOut,
    ProjectUpdateRequest,
    SlideOut,
)
from shared.theme_models import ThemeResponse

from .service import ProjectService

router = APIRouter(prefix="/projects", tags=["projects"])


def get_project_service(
    db: Session = Depends(get_db), current_user: User = Depends(get_current_user)
) -> ProjectService:
    return ProjectService(db, current_user)


def _detail(service: ProjectService, project_id: int) -> ProjectDetailOut:
    project = service.get_project(project_id)
    slides = SlideService(service.db, service.user).list_project_slides(project.id)
    detail = ProjectDetailOut.model_validate(project)
    detail.slides = [SlideOut.model_validate(slide) for slide in slides]
    return detail


@router.get("", response_model=list[ProjectOut])
async def list_projects(service: ProjectService = Depends(get_project_service)):
    """List the caller's projects, newest first."""
    return service.list_projects()


@router.post("", response_model=ProjectOut, status_code=201)
async def create_project(
    request: ProjectCreateRequest, service: ProjectService = Depends(get_project_service)
):
    return service.create_project(request)


@router.get("/{project_id}", response_model=ProjectDetailOut)
async def get_project(project_id: int, service: ProjectService = Depends(get_project_service)):
    """Get a project with its slides in position order."""
    return _detail(service, project_id)


@router.put("/{project_id}", response_model=ProjectDetailOut)
async def update_project(
    project_id: int,
    request: ProjectUpdateRequest,
    service: ProjectService = Depends(get_project_service),
):
    service.update_project(project_id, request)
    return _detail(service, project_id)


@router.delete("/{project_id}", status_code=204)
async def delete_project(project_id: int, service: ProjectService = Depends(get_project_service)):
    """Delete a project and everything under it."""
    service.delete_project(project_id)
    return Response(status_code=204)


@router.get("/{project_id}/theme", response_model=ThemeResponse)
async def get_project_theme(
    project_id: int,
    mobile: bool = Query(False, description="Generate the three-blob mobile variant"),
    service: ProjectService = Depends(get_project_service),
):
    """Deterministic background gradient and theme tokens for a project."""
    project = service.get_project(project_id)
    seed = str(project.id)
    gradient = generate_gradient_config(seed, is_mobile=mobile)
    return ThemeResponse(
        palette=gradient.palette,
        blobs=gradient.blobs,
        noise=gradient.noise,
        seed=seed,
        tokens=generate_theme_tokens(gradient.palette),
    )
