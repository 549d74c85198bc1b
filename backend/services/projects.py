import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from models.project import Project
from utils.errors import NotFoundError

logger = logging.getLogger(__name__)


def project_not_found(project_id: int) -> NotFoundError:
    return NotFoundError(f"Project with ID {project_id} not found")


# ------------------------------------------
# Reads
# ------------------------------------------
def list_projects(db: Session) -> List[Project]:
    return db.query(Project).order_by(Project.id).all()


def get_project(db: Session, project_id: int, *, for_update: bool = False) -> Project:
    query = db.query(Project).filter(Project.id == project_id)
    if for_update:
        query = query.with_for_update()
    project = query.first()
    if project is None:
        raise project_not_found(project_id)
    return project


# ------------------------------------------
# Writes
# ------------------------------------------
def create_project(db: Session, name: str, description: Optional[str] = None) -> Project:
    project = Project(name=name, description=description)
    db.add(project)
    db.commit()
    # Pick up the timestamps the database filled in
    db.refresh(project)

    logger.info("Project created: id=%s", project.id)
    return project


def update_project(db: Session, project_id: int, name: str, description: Optional[str] = None) -> Project:
    project = get_project(db, project_id, for_update=True)

    project.name = name
    project.description = description
    db.commit()
    db.refresh(project)

    logger.info("Project updated: id=%s", project.id)
    return project


def delete_project(db: Session, project_id: int) -> int:
    """Delete a project together with all of its service orders.

    Returns how many service orders went with it.
    """
    project = get_project(db, project_id, for_update=True)
    removed_orders = len(project.service_orders)

    db.delete(project)
    db.commit()

    logger.info("Project deleted: id=%s, service orders removed: %s", project_id, removed_orders)
    return removed_orders
