"""Project persistence scoped to the owning user."""

from fastapi import HTTPException
from sqlalchemy.orm import Session

from models.database import Project, User
from shared.deck_models import ProjectCreateRequest, ProjectUpdateRequest
from shared.utils import setup_logging, utc_now

logger = setup_logging("project-service")


class ProjectService:
    """Create, read, update and delete projects owned by one user."""

    def __init__(self, db: Session, user: User):
        self.db = db
        self.user = user

    def get_owned_project(self, project_id: int) -> Project:
        """
        Load a project belonging to the current user.

        Raises:
            HTTPException: 404 if the project does not exist or is owned by someone else
        """
        project = (
            self.db.query(Project)
            .filter(Project.id == project_id, Project.user_id == self.user.id)
            .first()
        )
        if project is None:
            raise HTTPException(status_code=404, detail="Project not found")
        return project

    def list_projects(self) -> list[Project]:
        return (
            self.db.query(Project)
            .filter(Project.user_id == self.user.id)
            .order_by(Project.created_at.desc(), Project.id.desc())
            .all()
        )

    def create_project_record(self, title: str, description: str | None = None) -> Project:
        """Add a project to the session without committing."""
        project = Project(user_id=self.user.id, title=title, description=description)
        self.db.add(project)
        self.db.flush()
        return project

    def create_project(self, request: ProjectCreateRequest) -> Project:
        project = self.create_project_record(request.title, request.description)
        self.db.commit()
        self.db.refresh(project)
        logger.info(f"Created project {project.id} for user {self.user.id}")
        return project

    def get_project(self, project_id: int) -> Project:
        return self.get_owned_project(project_id)

    def update_project(self, project_id: int, request: ProjectUpdateRequest) -> Project:
        project = self.get_owned_project(project_id)
        changes = request.model_dump(exclude_unset=True)
        for field, value in changes.items():
            setattr(project, field, value)
        project.updated_at = utc_now()
        self.db.commit()
        self.db.refresh(project)
        logger.info(f"Updated project {project.id}: {sorted(changes)}")
        return project

    def delete_project(self, project_id: int) -> None:
        """Delete a project together with its slides and their conversations."""
        project = self.get_owned_project(project_id)
        self.db.delete(project)
        self.db.commit()
        logger.info(f"Deleted project {project_id}")
