# backend/routes/categories.py
from typing import List
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from database import get_db
from models.catalog import Category, Service
from models.users import User
from utils.tokenJWT import admin_required
from utils.audit import write_log
from utils.errors import ConflictError, NotFoundError
from schemas.catalog import CategoryIn, CategoryOut

router = APIRouter(prefix="/categories", tags=["Categories"])


def _get_category(db: Session, category_id: int) -> Category:
    category = db.query(Category).filter(Category.id == category_id).first()
    if not category:
        raise NotFoundError("Category not found")
    return category


@router.get("", response_model=List[CategoryOut])
def list_categories(db: Session = Depends(get_db)):
    return db.query(Category).order_by(Category.id).all()


# Create a category (Admin only)
@router.post("", response_model=CategoryOut)
def create_category(
    payload: CategoryIn,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(admin_required),
):
    category = Category(name=payload.name.strip())
    db.add(category)
    db.commit()
    db.refresh(category)

    write_log(db, user_id=current_user.id, action="CATEGORY_CREATE", resource="categories",
              request=request, meta={"id": category.id})
    return category


# Rename a category (Admin only)
@router.put("/{category_id}", response_model=CategoryOut)
def update_category(
    category_id: int,
    payload: CategoryIn,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(admin_required),
):
    category = _get_category(db, category_id)
    category.name = payload.name.strip()
    db.commit()
    db.refresh(category)

    write_log(db, user_id=current_user.id, action="CATEGORY_UPDATE", resource="categories",
              request=request, meta={"id": category.id})
    return category


# Delete an empty category (Admin only)
@router.delete("/{category_id}", response_model=CategoryOut)
def delete_category(
    category_id: int,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(admin_required),
):
    category = _get_category(db, category_id)

    # Every service must belong to a category
    if db.query(Service.id).filter(Service.category_id == category_id).first():
        raise ConflictError("Category still has services, move or delete them first")

    deleted = CategoryOut.model_validate(category)
    db.delete(category)
    db.commit()

    write_log(db, user_id=current_user.id, action="CATEGORY_DELETE", resource="categories",
              request=request, meta={"id": category_id})
    return deleted
