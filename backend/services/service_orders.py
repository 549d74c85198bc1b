"""Service order persistence.

Every service order belongs to exactly one existing project. The project is
looked up explicitly before any insert or update, so a bad ``project_id``
surfaces as a 404 naming the project rather than as a constraint error.
"""
import logging
from typing import List, Optional

from sqlalchemy.orm import Session, contains_eager

from models.project import Project
from models.service_order import ServiceOrder
from services.projects import get_project
from utils.errors import NotFoundError

logger = logging.getLogger(__name__)


def service_order_not_found(order_id: int) -> NotFoundError:
    return NotFoundError(f"Service order with ID {order_id} not found")


def _joined_query(db: Session):
    # Inner join so every row comes back with its project's name
    return (
        db.query(ServiceOrder)
        .join(ServiceOrder.project)
        .options(contains_eager(ServiceOrder.project))
    )


def list_service_orders(db: Session, project_id: Optional[int] = None) -> List[ServiceOrder]:
    query = _joined_query(db)
    if project_id is not None:
        query = query.filter(ServiceOrder.project_id == project_id)
    return query.order_by(ServiceOrder.id).all()


def get_service_order(db: Session, order_id: int) -> ServiceOrder:
    order = _joined_query(db).filter(ServiceOrder.id == order_id).first()
    if order is None:
        raise service_order_not_found(order_id)
    return order


def _lock_service_order(db: Session, order_id: int) -> ServiceOrder:
    order = (
        db.query(ServiceOrder)
        .filter(ServiceOrder.id == order_id)
        .with_for_update()
        .first()
    )
    if order is None:
        raise service_order_not_found(order_id)
    return order


def create_service_order(
    db: Session,
    name: str,
    category: str,
    project_id: int,
    description: Optional[str] = None,
    is_approved: bool = False,
) -> ServiceOrder:
    get_project(db, project_id)

    order = ServiceOrder(
        name=name,
        category=category,
        description=description,
        project_id=project_id,
        is_approved=is_approved,
    )
    db.add(order)
    db.commit()

    logger.info("Service order created: id=%s project_id=%s", order.id, project_id)
    return get_service_order(db, order.id)


def update_service_order(
    db: Session,
    order_id: int,
    name: str,
    category: str,
    project_id: int,
    description: Optional[str] = None,
    is_approved: bool = False,
) -> ServiceOrder:
    # Order first, then the (possibly new) project
    order = _lock_service_order(db, order_id)
    get_project(db, project_id)

    order.name = name
    order.category = category
    order.description = description
    order.project_id = project_id
    order.is_approved = is_approved
    db.commit()

    logger.info("Service order updated: id=%s project_id=%s", order_id, project_id)
    return get_service_order(db, order_id)


def delete_service_order(db: Session, order_id: int) -> None:
    order = _lock_service_order(db, order_id)
    db.delete(order)
    db.commit()

    logger.info("Service order deleted: id=%s", order_id)


def toggle_approval(db: Session, order_id: int) -> ServiceOrder:
    """Flip ``is_approved`` based on the value currently stored."""
    order = _lock_service_order(db, order_id)
    order.is_approved = not order.is_approved
    db.commit()

    logger.info("Service order approval toggled: id=%s", order_id)
    return get_service_order(db, order_id)
