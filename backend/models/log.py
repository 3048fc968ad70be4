from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, JSON, Index, func
from sqlalchemy.orm import relationship
from database import Base

LOG_STATUS_SUCCESS = "SUCCESS"
LOG_STATUS_FAIL = "FAIL"


# Audit trail entry: who did what to which resource, and whether it worked
class Log(Base):
    __tablename__ = "logs"
    __table_args__ = (
        Index("ix_logs_resource_ts", "resource", "ts"),
    )

    id = Column(Integer, primary_key=True, index=True)
    ts = Column(DateTime(timezone=True), server_default=func.now(), index=True)

    # Kept when the account is deleted, then points nowhere
    user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    action = Column(String(50), nullable=False, index=True)    # e.g. CART_ADD, ORDER_CREATE
    resource = Column(String(50), nullable=False)              # cart, orders, services, ...
    status = Column(String(20), nullable=False, default=LOG_STATUS_SUCCESS, index=True)
    ip = Column(String(64), nullable=True)
    meta = Column(JSON, nullable=True)

    user = relationship("User", lazy="joined")

    @property
    def user_email(self):
        return self.user.email if self.user else None
