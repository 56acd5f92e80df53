# clinic_booking/routers/auth.py

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ..config import settings
from ..database import get_db
from ..schemas.users import TokenResponse, UserCreate, UserLogin, UserRead, UserRegistered
from ..services.security import issue_token
from ..services.users import authenticate, identity_of, register

router = APIRouter(tags=["auth"])


@router.post("/register", response_model=UserRegistered, status_code=status.HTTP_201_CREATED)
def register_user(data: UserCreate, db: Session = Depends(get_db)):
    user = register(db, data.name, data.email, data.password)
    return UserRegistered(
        message="User registered successfully",
        user=UserRead.model_validate(user),
    )


@router.post("/login", response_model=TokenResponse)
def login(data: UserLogin, db: Session = Depends(get_db)):
    user = authenticate(db, data.email, data.password)
    token = issue_token(identity_of(user), settings.auth_secret)
    return TokenResponse(token=token, user=UserRead.model_validate(user))
