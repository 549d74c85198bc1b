# backend/routes/service_orders.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request, Response, status
from sqlalchemy.orm import Session

from database import get_db
from schemas.service_order import ServiceOrderOut, ServiceOrderPayload
from schemas.user import TokenClaims
from services import service_orders as order_service
from utils.audit import client_ip, write_log
from utils.tokenJWT import get_current_user

router = APIRouter(prefix="/service-orders", tags=["service-orders"], dependencies=[Depends(get_current_user)])


# Retrieve service orders, optionally only those of one project
@router.get("", response_model=List[ServiceOrderOut])
def list_service_orders(
    project_id: Optional[int] = Query(None, description="Filter by project ID"),
    db: Session = Depends(get_db),
):
    return order_service.list_service_orders(db, project_id)


@router.get("/{order_id}", response_model=ServiceOrderOut)
def get_service_order(order_id: int, db: Session = Depends(get_db)):
    return order_service.get_service_order(db, order_id)


@router.post("", response_model=ServiceOrderOut, status_code=status.HTTP_201_CREATED)
def create_service_order(
    payload: ServiceOrderPayload,
    request: Request,
    db: Session = Depends(get_db),
    current_user: TokenClaims = Depends(get_current_user),
):
    order = order_service.create_service_order(
        db,
        name=payload.name,
        category=payload.category,
        project_id=payload.project_id,
        description=payload.description,
        is_approved=payload.is_approved,
    )

    write_log(
        db, user_id=current_user.id, action="SERVICE_ORDER_CREATE", resource="service_orders",
        status="SUCCESS", ip=client_ip(request), meta={"id": order.id, "project_id": order.project_id}
    )
    return order


@router.put("/{order_id}", response_model=ServiceOrderOut)
def update_service_order(
    order_id: int,
    payload: ServiceOrderPayload,
    request: Request,
    db: Session = Depends(get_db),
    current_user: TokenClaims = Depends(get_current_user),
):
    order = order_service.update_service_order(
        db,
        order_id,
        name=payload.name,
        category=payload.category,
        project_id=payload.project_id,
        description=payload.description,
        is_approved=payload.is_approved,
    )

    write_log(
        db, user_id=current_user.id, action="SERVICE_ORDER_UPDATE", resource="service_orders",
        status="SUCCESS", ip=client_ip(request), meta={"id": order.id, "project_id": order.project_id}
    )
    return order


@router.delete("/{order_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_service_order(
    order_id: int,
    request: Request,
    db: Session = Depends(get_db),
    current_user: TokenClaims = Depends(get_current_user),
):
    order_service.delete_service_order(db, order_id)

    write_log(
        db, user_id=current_user.id, action="SERVICE_ORDER_DELETE", resource="service_orders",
        status="SUCCESS", ip=client_ip(request), meta={"id": order_id}
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# Flip the approval flag; the new value comes from the stored one, not the client
@router.patch("/{order_id}/approve", response_model=ServiceOrderOut)
def toggle_approval(
    order_id: int,
    request: Request,
    db: Session = Depends(get_db),
    current_user: TokenClaims = Depends(get_current_user),
):
    order = order_service.toggle_approval(db, order_id)

    write_log(
        db, user_id=current_user.id, action="SERVICE_ORDER_APPROVE", resource="service_orders",
        status="SUCCESS", ip=client_ip(request), meta={"id": order.id, "is_approved": order.is_approved}
    )
    return order
