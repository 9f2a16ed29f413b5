import logging
from uuid import UUID

from fastapi import APIRouter, HTTPException, Depends, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlmodel import Session, select

from finance_ledger.core.security import (
    get_pin_hash,
    verify_pin,
    create_access_token,
    get_current_user,
)
from finance_ledger.database import get_session
from finance_ledger.models.user import User
from finance_ledger.schemas.user import Token, UserCreate, UserRead

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def register(user_create: UserCreate, session: Session = Depends(get_session)):
    username = user_create.username.strip()
    if not username or not user_create.pin:
        raise HTTPException(status_code=400, detail="Username and PIN are required")

    user_exists = session.exec(select(User).where(User.username == username)).first()
    if user_exists:
        raise HTTPException(status_code=400, detail="Username already registered")

    user = User(username=username, hashed_pin=get_pin_hash(user_create.pin))
    session.add(user)
    session.commit()
    session.refresh(user)
    logger.info("Registered user %s", user.id)
    return UserRead.model_validate(user, from_attributes=True)


@router.post("/login", response_model=Token)
def login(form_data: OAuth2PasswordRequestForm = Depends(), session: Session = Depends(get_session)):
    user = session.exec(select(User).where(User.username == form_data.username)).first()
    if not user or not verify_pin(form_data.password, user.hashed_pin):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    access_token = create_access_token(data={"sub": str(user.id)})
    return Token(access_token=access_token)


@router.get("/me", response_model=UserRead)
def read_users_me(user_id: UUID = Depends(get_current_user), session: Session = Depends(get_session)):
    return UserRead.model_validate(session.get(User, user_id), from_attributes=True)
