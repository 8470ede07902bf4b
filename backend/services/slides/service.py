"""
Slide persistence.

Positions within a project are kept contiguous from 1: every write that can
move a slide (insert, position patch, reorder) renumbers the whole project.
"""

from collections.abc import Iterable

from fastapi import HTTPException
from sqlalchemy.orm import Session

from models.database import Project, Slide, User
from services.projects import ProjectService
from shared.deck_models import (
    GeneratedSlide,
    ReorderItem,
    SlideCreateRequest,
    SlideUpdateRequest,
)
from shared.utils import setup_logging, utc_now

logger = setup_logging("slide-service")


class SlideService:
    """Slide operations for the slides of projects owned by one user."""

    def __init__(self, db: Session, user: User):
        self.db = db
        self.user = user
        self.projects = ProjectService(db, user)

    def get_slide(self, slide_id: int) -> Slide:
        """
        Load a slide whose project belongs to the current user.

        Raises:
            HTTPException: 404 if the slide does not exist or is not owned
        """
        slide = (
            self.db.query(Slide)
            .join(Project, Slide.project_id == Project.id)
            .filter(Slide.id == slide_id, Project.user_id == self.user.id)
            .first()
        )
        if slide is None:
            raise HTTPException(status_code=404, detail="Slide not found")
        return slide

    def list_project_slides(self, project_id: int) -> list[Slide]:
        return (
            self.db.query(Slide)
            .filter(Slide.project_id == project_id)
            .order_by(Slide.position, Slide.id)
            .all()
        )

    @staticmethod
    def _renumber(slides: Iterable[Slide]) -> list[Slide]:
        ordered = list(slides)
        for position, slide in enumerate(ordered, 1):
            if slide.position != position:
                slide.position = position
        return ordered

    @staticmethod
    def _insert_at(slides: list[Slide], slide: Slide, position: int | None) -> list[Slide]:
        if position is None or position > len(slides):
            return [*slides, slide]
        index = position - 1
        return [*slides[:index], slide, *slides[index:]]

    def create_slide(self, request: SlideCreateRequest) -> Slide:
        """Insert a slide at the requested position, or after the last one."""
        project = self.projects.get_owned_project(request.project_id)
        existing = self.list_project_slides(project.id)

        slide = Slide(
            project_id=project.id,
            position=len(existing) + 1,
            title=request.title,
            content=request.content,
            hero_image_url=request.hero_image_url,
            layout=request.layout,
        )
        self.db.add(slide)
        self._renumber(self._insert_at(existing, slide, request.position))
        project.updated_at = utc_now()
        self.db.commit()
        self.db.refresh(slide)
        logger.info(f"Created slide {slide.id} at position {slide.position} in project {project.id}")
        return slide

    def create_slides_for_project(
        self, project: Project, generated: list[GeneratedSlide]
    ) -> list[Slide]:
        """Add generated slides to the session, numbered 1..N in list order."""
        slides = [
            Slide(
                project_id=project.id,
                position=position,
                title=item.title,
                content=item.content,
            )
            for position, item in enumerate(generated, 1)
        ]
        self.db.add_all(slides)
        self.db.flush()
        return slides

    def update_slide(self, slide_id: int, request: SlideUpdateRequest) -> Slide:
        """Apply the fields present in the patch; a new position moves the slide."""
        slide = self.get_slide(slide_id)
        changes = request.model_dump(exclude_unset=True)
        position = changes.pop("position", None)

        for field, value in changes.items():
            setattr(slide, field, value)

        if position is not None:
            others = [s for s in self.list_project_slides(slide.project_id) if s.id != slide.id]
            self._renumber(self._insert_at(others, slide, position))

        slide.updated_at = utc_now()
        self.db.commit()
        self.db.refresh(slide)
        logger.info(f"Updated slide {slide.id}: {sorted(request.model_fields_set)}")
        return slide

    def reorder_slides(self, project_id: int, items: list[ReorderItem]) -> list[Slide]:
        """
        Reassign slide positions within a project.

        Listed slides are ordered by requested position, ties broken by list
        order; slides not listed follow in their current order. Positions are
        then rewritten as 1..N.

        Raises:
            HTTPException: 404 for an unknown project or slide, 400 for an
                empty list or duplicate slide ids
        """
        project = self.projects.get_owned_project(project_id)
        if not items:
            raise HTTPException(status_code=400, detail="No slides to reorder")

        requested_ids = [item.id for item in items]
        if len(set(requested_ids)) != len(requested_ids):
            raise HTTPException(status_code=400, detail="Duplicate slide ids in reorder request")

        slides = self.list_project_slides(project.id)
        by_id = {slide.id: slide for slide in slides}
        unknown = [slide_id for slide_id in requested_ids if slide_id not in by_id]
        if unknown:
            raise HTTPException(status_code=404, detail="Slide not found")

        ranked = sorted(enumerate(items), key=lambda pair: (pair[1].position, pair[0]))
        listed = [by_id[item.id] for _, item in ranked]
        listed_ids = set(requested_ids)
        rest = [slide for slide in slides if slide.id not in listed_ids]

        ordered = self._renumber(listed + rest)
        project.updated_at = utc_now()
        self.db.commit()
        logger.info(f"Reordered {len(items)} of {len(ordered)} slides in project {project.id}")
        return ordered
