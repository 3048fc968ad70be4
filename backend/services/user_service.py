import logging

from sqlalchemy import func
from sqlalchemy.orm import Session

from database import transaction
from models.cart import Cart
from models.users import User, CUSTOMER_ROLE_ID
from schemas.user import UserCreate, ProfileUpdate
from services.cart_service import get_user_or_404
from utils.errors import ConflictError
from utils.hashing import get_password_hash, verify_password

logger = logging.getLogger(__name__)


def _normalize_email(email: str) -> str:
    return email.strip().lower()


def _email_taken(db: Session, email: str, exclude_user_id: int = None) -> bool:
    query = db.query(User.id).filter(func.lower(User.email) == email)
    if exclude_user_id is not None:
        query = query.filter(User.id != exclude_user_id)
    return query.first() is not None


class UserService:
    def __init__(self, db: Session):
        self.db = db

    def register(self, payload: UserCreate) -> User:
        email = _normalize_email(payload.email)

        with transaction(self.db):
            if _email_taken(self.db, email):
                raise ConflictError("Email already registered")

            user = User(
                email=email,
                password_hash=get_password_hash(payload.password),
                full_name=payload.full_name.strip(),
                phone=payload.phone or None,
                default_address=payload.default_address or None,
                role_id=CUSTOMER_ROLE_ID,
            )
            self.db.add(user)
            self.db.flush()

            # Customers get their cart up front
            self.db.add(Cart(user_id=user.id))

        self.db.refresh(user)
        logger.info(f"Registered user {user.id}")
        return user

    def authenticate(self, email: str, password: str):
        user = self.db.query(User).filter(func.lower(User.email) == _normalize_email(email)).first()
        if not user or not verify_password(password, user.password_hash):
            return None
        return user

    def update_profile(self, payload: ProfileUpdate) -> User:
        with transaction(self.db):
            user = get_user_or_404(self.db, payload.user_id)

            if payload.email is not None:
                email = _normalize_email(payload.email)
                if _email_taken(self.db, email, exclude_user_id=user.id):
                    raise ConflictError("Email is already used by another account")
                user.email = email

            if payload.full_name is not None:
                user.full_name = payload.full_name.strip()
            if payload.phone is not None:
                user.phone = payload.phone or None
            if payload.default_address is not None:
                user.default_address = payload.default_address or None

        self.db.refresh(user)
        return user
