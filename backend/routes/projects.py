# backend/routes/projects.py
from typing import List

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.orm import Session

from database import get_db
from schemas.project import ProjectOut, ProjectPayload
from schemas.user import TokenClaims
from services import projects as project_service
from utils.audit import client_ip, write_log
from utils.tokenJWT import get_current_user

# Every route here requires a valid bearer token
router = APIRouter(prefix="/projects", tags=["projects"], dependencies=[Depends(get_current_user)])


@router.get("", response_model=List[ProjectOut])
def list_projects(db: Session = Depends(get_db)):
    return project_service.list_projects(db)


@router.get("/{project_id}", response_model=ProjectOut)
def get_project(project_id: int, db: Session = Depends(get_db)):
    return project_service.get_project(db, project_id)


@router.post("", response_model=ProjectOut, status_code=status.HTTP_201_CREATED)
def create_project(
    payload: ProjectPayload,
    request: Request,
    db: Session = Depends(get_db),
    current_user: TokenClaims = Depends(get_current_user),
):
    project = project_service.create_project(db, payload.name, payload.description)

    write_log(
        db, user_id=current_user.id, action="PROJECT_CREATE", resource="projects",
        status="SUCCESS", ip=client_ip(request), meta={"id": project.id}
    )
    return project


@router.put("/{project_id}", response_model=ProjectOut)
def update_project(
    project_id: int,
    payload: ProjectPayload,
    request: Request,
    db: Session = Depends(get_db),
    current_user: TokenClaims = Depends(get_current_user),
):
    project = project_service.update_project(db, project_id, payload.name, payload.description)

    write_log(
        db, user_id=current_user.id, action="PROJECT_UPDATE", resource="projects",
        status="SUCCESS", ip=client_ip(request), meta={"id": project.id}
    )
    return project


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_project(
    project_id: int,
    request: Request,
    db: Session = Depends(get_db),
    current_user: TokenClaims = Depends(get_current_user),
):
    removed_orders = project_service.delete_project(db, project_id)

    write_log(
        db, user_id=current_user.id, action="PROJECT_DELETE", resource="projects",
        status="SUCCESS", ip=client_ip(request),
        meta={"id": project_id, "service_orders_removed": removed_orders}
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
