# backend/routes/logs.py
from datetime import datetime, time
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from database import get_db
from models.log import Log
from models.users import User
from schemas.log import LogPage
from utils.tokenJWT import admin_required

router = APIRouter(prefix="/logs", tags=["Logs"])


def _day_bound(value: Optional[datetime], upper: bool) -> Optional[datetime]:
    # A bare date (midnight) used as the upper bound covers the whole day
    if value is None:
        return None
    if upper and value.time() == time.min:
        return datetime.combine(value.date(), time.max)
    return value


def _apply_filters(query, action, user_id, resource, status, date_from, date_to):
    if action:
        query = query.filter(Log.action.ilike(f"%{action}%"))
    if user_id is not None:
        query = query.filter(Log.user_id == user_id)
    if resource:
        query = query.filter(Log.resource.ilike(f"%{resource}%"))
    if status:
        query = query.filter(Log.status == status.upper())

    lower = _day_bound(date_from, upper=False)
    if lower:
        query = query.filter(Log.ts >= lower)
    upper = _day_bound(date_to, upper=True)
    if upper:
        query = query.filter(Log.ts <= upper)
    return query


# Browse the audit trail, newest first (Admin only)
@router.get("", response_model=LogPage)
def get_logs(
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    action: Optional[str] = Query(None, description="Action contains, e.g. CART"),
    user_id: Optional[int] = Query(None),
    resource: Optional[str] = Query(None),
    status: Optional[str] = Query(None, description="SUCCESS or FAIL"),
    date_from: Optional[datetime] = Query(None, description="YYYY-MM-DD or ISO datetime"),
    date_to: Optional[datetime] = Query(None, description="YYYY-MM-DD or ISO datetime, inclusive"),
    db: Session = Depends(get_db),
    current_user: User = Depends(admin_required),
):
    query = _apply_filters(db.query(Log), action, user_id, resource, status, date_from, date_to)

    total = query.count()
    entries = (
        query.order_by(Log.ts.desc(), Log.id.desc())
        .offset((page - 1) * page_size)
        .limit(page_size)
        .all()
    )
    return {"items": entries, "total": total, "page": page, "page_size": page_size}
