# backend/routes/users.py
from typing import List
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from database import get_db
from models.review import Review
from services.user_service import UserService
from schemas.user import ProfileUpdate, UserResponse
from schemas.review import ReviewOut
from utils.audit import write_log

router = APIRouter(prefix="/users", tags=["Users"])


# Update the caller's own profile; the email must stay unique
@router.put("/profile", response_model=UserResponse)
def update_profile(payload: ProfileUpdate, request: Request, db: Session = Depends(get_db)):
    user = UserService(db).update_profile(payload)
    write_log(
        db, user_id=user.id, action="PROFILE_UPDATE", resource="users", request=request,
        meta={"fields": sorted(payload.model_dump(exclude_none=True, exclude={"user_id"}))},
    )
    return user


# All reviews written by one user, newest first
@router.get("/{user_id}/reviews", response_model=List[ReviewOut])
def list_user_reviews(user_id: int, db: Session = Depends(get_db)):
    return (
        db.query(Review)
        .filter(Review.user_id == user_id)
        .order_by(Review.created_at.desc(), Review.id.desc())
        .all()
    )
