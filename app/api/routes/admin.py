# app/api/routes/admin.py
import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError
from typing import List

from app.db.base import get_db, utcnow
from app.db.models.order import Order
from app.db.models.review import Review
from app.db.models.user import User
from app.schemas.order import OrderNotesUpdate, OrderResponse, OrderStatusUpdate
from app.schemas.review import ReviewResponse
from app.core.security import require_admin

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin", tags=["admin"])

CONFLICT_DETAIL = "Order was modified by another session"


def _get_order(db: Session, order_id: int) -> Order:
    order = db.query(Order).filter(Order.id == order_id).first()
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    return order


def _commit_order(db: Session, order: Order, expected_version: int) -> Order:
    # the check catches stale reads, StaleDataError catches a write racing ours
    if order.version != expected_version:
        db.rollback()
        raise HTTPException(status_code=409, detail=CONFLICT_DETAIL)
    try:
        db.commit()
    except StaleDataError:
        db.rollback()
        raise HTTPException(status_code=409, detail=CONFLICT_DETAIL)
    db.refresh(order)
    return order


# --------------------------------------------------
# 1. Orders: list, status, notes, delete
# --------------------------------------------------
@router.get("/orders", response_model=List[OrderResponse])
def admin_list_orders(db: Session = Depends(get_db), admin: User = Depends(require_admin)):
    return db.query(Order).order_by(Order.created_at.desc(), Order.id.desc()).all()


@router.put("/orders/{order_id}/status", response_model=OrderResponse)
def admin_update_order_status(
    order_id: int,
    update: OrderStatusUpdate,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    order = _get_order(db, order_id)
    # any status may follow any other
    order.status = update.status.value
    order = _commit_order(db, order, update.version)
    logger.info("Order %s marked as %s", order.id, order.status)
    return order


@router.put("/orders/{order_id}/notes", response_model=OrderResponse)
def admin_update_order_notes(
    order_id: int,
    update: OrderNotesUpdate,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    order = _get_order(db, order_id)
    order.admin_notes = update.admin_notes
    return _commit_order(db, order, update.version)


@router.delete("/orders/{order_id}")
def admin_delete_order(
    order_id: int,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    order = _get_order(db, order_id)
    db.delete(order)
    db.commit()
    logger.info("Order %s deleted", order_id)
    return {"ok": True, "deleted_order_id": order_id}


# --------------------------------------------------
# 2. Reviews moderation
# --------------------------------------------------
@router.get("/reviews", response_model=List[ReviewResponse])
def admin_list_reviews(db: Session = Depends(get_db), admin: User = Depends(require_admin)):
    return db.query(Review).order_by(Review.created_at.desc(), Review.id.desc()).all()


@router.put("/reviews/{review_id}/approve", response_model=ReviewResponse)
def admin_approve_review(
    review_id: int,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    r = db.query(Review).filter(Review.id == review_id).first()
    if not r:
        raise HTTPException(status_code=404, detail="Review not found")
    if r.status != "approved":
        r.status = "approved"
        r.approved_at = utcnow()
        db.commit()
        db.refresh(r)
    return r


@router.delete("/reviews/{review_id}")
def admin_delete_review(
    review_id: int,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    r = db.query(Review).filter(Review.id == review_id).first()
    if not r:
        raise HTTPException(status_code=404, detail="Review not found")
    # hard delete, there is no undo
    db.delete(r)
    db.commit()
    logger.info("Review %s deleted", review_id)
    return {"ok": True, "deleted_review_id": review_id}
