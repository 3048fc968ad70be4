# backend/routes/auth.py
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session
from utils.tokenJWT import create_access_token, get_current_user
from utils.audit import write_log
from utils.errors import AuthError, ConflictError
from services.user_service import UserService
from models.users import User
from schemas import user as schemas
from database import get_db

router = APIRouter(prefix="/auth", tags=["Auth"])

# Register a new customer account together with its cart
@router.post("/register", response_model=schemas.RegisterResponse)
def register(payload: schemas.UserCreate, request: Request, db: Session = Depends(get_db)):
    try:
        new_user = UserService(db).register(payload)
    except ConflictError:
        write_log(
            db, user_id=None, action="REGISTER", resource="auth", status="FAIL", request=request,
            meta={"email": payload.email, "reason": "Email exists"},
        )
        raise

    # Log successful registration event
    write_log(
        db, user_id=new_user.id, action="REGISTER", resource="auth", request=request,
        meta={"email": new_user.email},
    )
    return {"user": new_user}


# Authenticate user and issue JWT token
@router.post("/login", response_model=schemas.Token)
def login(payload: schemas.UserLogin, request: Request, db: Session = Depends(get_db)):
    db_user = UserService(db).authenticate(payload.email, payload.password)

    # Validate credentials and log failure on error
    if not db_user:
        write_log(db, user_id=None, action="LOGIN", resource="auth", status="FAIL",
                  request=request, meta={"email": payload.email})
        raise AuthError("Invalid email or password")

    access_token = create_access_token(data={"sub": db_user.email, "role": db_user.role_name})

    write_log(db, user_id=db_user.id, action="LOGIN", resource="auth",
              request=request, meta={"email": db_user.email})

    return {"access_token": access_token, "token_type": "bearer", "user": db_user}


# Retrieve current authenticated user details
@router.get("/me", response_model=schemas.UserResponse)
def me(current_user: User = Depends(get_current_user)):
    return current_user
