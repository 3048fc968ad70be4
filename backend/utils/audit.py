import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from models.log import Log, LOG_STATUS_SUCCESS

logger = logging.getLogger(__name__)


def _client_ip(request):
    if request is None or request.client is None:
        return None
    return request.client.host


# Called after the business transaction has committed, so a failed audit
# write never undoes the action it describes
def write_log(db: Session, *, user_id, action, resource, status=LOG_STATUS_SUCCESS, request=None, ip=None, meta=None):
    entry = Log(
        user_id=user_id, action=action, resource=resource, status=status,
        ip=ip or _client_ip(request), meta=meta or {},
    )
    db.add(entry)
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Audit log write failed for {action}: {e}")
