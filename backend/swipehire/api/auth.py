import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from sqlalchemy.orm import Session

from ..database import get_db
from ..services.accounts import auth_session, authenticate, get_user, register_account
from ..utils.dependencies import get_current_user
from ..utils.jwt import create_access_token
from ..utils.validation import validate_email, validate_password, validate_role, validate_string_field

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])


class RegisterRequest(BaseModel):
    email: str
    password: str
    role: str  # candidate / hr
    name: str


class LoginRequest(BaseModel):
    email: str
    password: str
    role: str | None = None  # optional role gate (frontend-selected role)


def _token_for(user) -> str:
    return create_access_token({"sub": str(user.id), "role": user.role})


@router.post("/register")
def register(payload: RegisterRequest, db: Session = Depends(get_db)):
    email = validate_email(payload.email)
    validate_password(payload.password)
    role = validate_role(payload.role)
    name = validate_string_field(payload.name, "Name", max_length=255)

    user = register_account(db, email=email, password=payload.password, name=name, role=role)
    return {
        "message": "User created successfully",
        "user": {"id": user.id, "email": user.email, "role": user.role},
        "access_token": _token_for(user),
        "token_type": "bearer",
    }


@router.post("/login")
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    email = validate_email(payload.email)
    if not payload.password:
        raise HTTPException(status_code=400, detail="Password is required")
    role = validate_role(payload.role) if payload.role else None

    user = authenticate(db, email=email, password=payload.password, role=role)
    return {
        "access_token": _token_for(user),
        "token_type": "bearer",
        "user": {"id": user.id, "email": user.email, "role": user.role},
    }


@router.post("/logout")
def logout():
    return {"message": "Logged out successfully"}


@router.get("/me")
def me(db: Session = Depends(get_db), user=Depends(get_current_user)):
    account = get_user(db, int(user.get("sub")))
    return {"success": True, "session": auth_session(account).model_dump(mode="json")}
