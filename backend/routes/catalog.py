# backend/routes/catalog.py
from typing import Optional, List
from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from database import get_db, transaction
from utils.tokenJWT import admin_required
from utils.audit import write_log
from utils.errors import NotFoundError
from models.users import User
from models.catalog import Category, Service
from models.cart import CartItem
from models.order import OrderItem
from models.review import Review
import schemas.catalog as catalog_schemas

router = APIRouter(prefix="/services", tags=["Services"])


# ---- HELPERS ----
def _get_service(db: Session, service_id: int) -> Service:
    service = db.query(Service).filter(Service.id == service_id).first()
    if not service:
        raise NotFoundError("Service not found")
    return service

def _ensure_category(db: Session, category_id: int):
    if not db.query(Category.id).filter(Category.id == category_id).first():
        raise NotFoundError("Category not found")


# =========================
# LIST / DETAILS
# =========================
@router.get("", response_model=List[catalog_schemas.ServiceOut])
def list_services(
    category_id: Optional[int] = Query(None, description="Filter by category"),
    db: Session = Depends(get_db),
):
    query = db.query(Service)
    if category_id is not None:
        query = query.filter(Service.category_id == category_id)
    return query.order_by(Service.id).all()


@router.get("/{service_id}", response_model=catalog_schemas.ServiceOut)
def get_service(service_id: int, db: Session = Depends(get_db)):
    return _get_service(db, service_id)


# =========================
# ADMIN: CREATE / UPDATE / DELETE
# =========================
@router.post("", response_model=catalog_schemas.ServiceOut)
def create_service(
    payload: catalog_schemas.ServiceIn,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(admin_required),
):
    _ensure_category(db, payload.category_id)

    new_service = Service(**payload.model_dump())
    db.add(new_service)
    db.commit()
    db.refresh(new_service)

    write_log(
        db, user_id=current_user.id, action="SERVICE_CREATE", resource="services",
        request=request, meta={"id": new_service.id, "name": new_service.name},
    )
    return new_service


# Full update; the new price only affects carts and future orders
@router.put("/{service_id}", response_model=catalog_schemas.ServiceOut)
def update_service(
    service_id: int,
    payload: catalog_schemas.ServiceIn,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(admin_required),
):
    service = _get_service(db, service_id)
    _ensure_category(db, payload.category_id)

    for key, value in payload.model_dump().items():
        setattr(service, key, value)

    db.commit()
    db.refresh(service)

    write_log(
        db, user_id=current_user.id, action="SERVICE_UPDATE", resource="services",
        request=request, meta={"id": service.id},
    )
    return service


@router.delete("/{service_id}", response_model=catalog_schemas.ServiceOut)
def delete_service(
    service_id: int,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(admin_required),
):
    service = _get_service(db, service_id)
    deleted = catalog_schemas.ServiceOut.model_validate(service)

    # Carts and reviews go with the service; past orders keep their lines and prices
    with transaction(db):
        db.query(CartItem).filter(CartItem.service_id == service_id).delete(synchronize_session=False)
        db.query(Review).filter(Review.service_id == service_id).delete(synchronize_session=False)
        db.query(OrderItem).filter(OrderItem.service_id == service_id).update(
            {OrderItem.service_id: None}, synchronize_session=False
        )
        db.delete(service)

    write_log(
        db, user_id=current_user.id, action="SERVICE_DELETE", resource="services",
        request=request, meta={"id": service_id},
    )
    return deleted
