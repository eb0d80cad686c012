# app/api/routes/review.py
import logging

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional

from app.core.config import Settings, get_settings
from app.db.base import get_db, utcnow
from app.db.models.review import Review
from app.schemas.review import ReviewPublish, ReviewResponse, PublicReviewItem
from app.services.review_builder import derive_fields

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/reviews", tags=["reviews"])

MAX_TESTIMONIALS = 10


# Publish a generated review (visitor)
@router.post("", response_model=ReviewResponse, status_code=status.HTTP_201_CREATED)
def publish_review(
    review_in: ReviewPublish,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    # categorical fields always come from the rating, never from the client
    fields = derive_fields(review_in.rating)
    now = utcnow()
    approved = settings.auto_approve_reviews

    # no deduplication: publishing twice stores two rows
    review = Review(
        client_name=review_in.client_name,
        client_email=review_in.client_email,
        overall_experience=fields.overall_experience,
        project_type=review_in.project_type,
        delivery=fields.delivery,
        communication=fields.communication,
        optional_comment=review_in.optional_comment or None,
        would_recommend=fields.would_recommend,
        generated_review=review_in.generated_review,
        rating=review_in.rating,
        status="approved" if approved else "pending",
        created_at=now,
        approved_at=now if approved else None,
    )

    db.add(review)
    db.commit()
    db.refresh(review)
    logger.info("Review %s published (status=%s)", review.id, review.status)
    return review


# Most recent approved reviews (public)
@router.get("/testimonials", response_model=List[PublicReviewItem])
def list_testimonials(
    limit: Optional[int] = Query(None, ge=1, le=MAX_TESTIMONIALS),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    page_size = limit or settings.testimonials_page_size
    return (
        db.query(Review)
        .filter(Review.status == "approved")
        .order_by(Review.created_at.desc(), Review.id.desc())
        .limit(page_size)
        .all()
    )
