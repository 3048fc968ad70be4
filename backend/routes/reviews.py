# backend/routes/reviews.py
from typing import List
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from database import get_db
from models.catalog import Service
from models.review import Review
from models.users import User
from utils.tokenJWT import admin_required
from utils.audit import write_log
from utils.errors import NotFoundError
from schemas.review import ReviewCreate, ReviewOut

router = APIRouter(tags=["Reviews"])


def _newest_first(query):
    return query.order_by(Review.created_at.desc(), Review.id.desc())


# Reviews of one service, newest first
@router.get("/services/{service_id}/reviews", response_model=List[ReviewOut])
def list_service_reviews(service_id: int, db: Session = Depends(get_db)):
    return _newest_first(db.query(Review).filter(Review.service_id == service_id)).all()


@router.post("/services/{service_id}/reviews", response_model=ReviewOut)
def create_review(
    service_id: int,
    payload: ReviewCreate,
    request: Request,
    db: Session = Depends(get_db),
):
    if not db.query(Service.id).filter(Service.id == service_id).first():
        raise NotFoundError("Service not found")
    if not db.query(User.id).filter(User.id == payload.user_id).first():
        raise NotFoundError("User not found")

    review = Review(
        service_id=service_id,
        user_id=payload.user_id,
        rating=payload.rating,
        comment=payload.comment or None,
    )
    db.add(review)
    db.commit()
    db.refresh(review)

    write_log(db, user_id=payload.user_id, action="REVIEW_CREATE", resource="reviews",
              request=request, meta={"id": review.id, "service_id": service_id, "rating": review.rating})
    return review


# Every review across the catalog (Admin only)
@router.get("/reviews/all", response_model=List[ReviewOut])
def list_all_reviews(
    db: Session = Depends(get_db),
    current_user: User = Depends(admin_required),
):
    return _newest_first(db.query(Review)).all()


# Remove a review (Admin only)
@router.delete("/reviews/{review_id}", response_model=ReviewOut)
def delete_review(
    review_id: int,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(admin_required),
):
    review = db.query(Review).filter(Review.id == review_id).first()
    if not review:
        raise NotFoundError("Review not found")

    deleted = ReviewOut.model_validate(review)
    db.delete(review)
    db.commit()

    write_log(db, user_id=current_user.id, action="REVIEW_DELETE", resource="reviews",
              request=request, meta={"id": review_id})
    return deleted
