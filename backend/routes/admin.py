# backend/routes/admin.py
from fastapi import APIRouter, Depends, Query, Request
from typing import List, Optional, Literal
from sqlalchemy.orm import Session
from database import get_db
from models.users import User, Role
from utils.tokenJWT import admin_required
from utils.audit import write_log
from utils.errors import NotFoundError, ValidationError
from schemas.user import UserResponse

router = APIRouter(tags=["Admin"])


# Retrieve a list of users with filtering and sorting (Admin only)
@router.get("/users", response_model=List[UserResponse])
def get_all_users(
    q: Optional[str] = Query(None, description="Search by email or name"),
    role: Optional[str] = Query(None, description="Filter by role name"),
    sort_by: Literal["id", "email", "full_name"] = "id",
    order: Literal["asc", "desc"] = "asc",
    db: Session = Depends(get_db),
    current_user: User = Depends(admin_required),
):
    query = db.query(User)

    # Filter by email or full name
    if q:
        like = f"%{q.lower()}%"
        query = query.filter(User.email.ilike(like) | User.full_name.ilike(like))

    # Filter by role
    if role:
        query = query.join(Role, User.role_id == Role.id).filter(Role.name.ilike(role))

    sort_map = {
        "id": User.id,
        "email": User.email,
        "full_name": User.full_name,
    }
    col = sort_map.get(sort_by, User.id)
    return query.order_by(col.asc() if order == "asc" else col.desc()).all()


# Delete a user account together with its cart, orders and reviews (Admin only)
@router.delete("/users/{user_id}", response_model=UserResponse)
def delete_user(
    user_id: int,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(admin_required),
):
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise NotFoundError("User not found")

    # Prevent self-deletion
    if user.id == current_user.id:
        raise ValidationError("You cannot delete your own account")

    deleted = UserResponse.model_validate(user)
    db.delete(user)
    db.commit()

    write_log(db, user_id=current_user.id, action="USER_DELETE", resource="users",
              request=request, meta={"id": user_id, "email": deleted.email})
    return deleted
