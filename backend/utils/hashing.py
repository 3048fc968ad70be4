# backend/utils/hashing.py
from passlib.context import CryptContext

# Salted PBKDF2-SHA256, pure Python so no native bcrypt build is needed
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, password_hash: str) -> bool:
    if not password_hash:
        return False
    return pwd_context.verify(plain_password, password_hash)
