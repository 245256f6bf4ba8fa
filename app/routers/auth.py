import logging
from datetime import datetime, timedelta, timezone

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.access_policy import bind_identity
from app.database import get_db
from app.models.profile import Profile
from app.models.user import User, UserSession
from app.routers.auth_deps import get_current_user
from app.schemas.auth import LoginRequest, RefreshRequest, SignupRequest, Token, UserResponse
from app.services import auth as auth_service

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/auth",
    tags=["auth"]
)


def _issue_tokens(db: Session, user: User) -> dict:
    """Create an access/refresh pair and persist the refresh session."""
    access_token = auth_service.create_access_token(data={"sub": user.id, "email": user.email})
    refresh_token = auth_service.create_refresh_token(data={"sub": user.id})

    expires_at = datetime.now(timezone.utc) + timedelta(days=auth_service.REFRESH_TOKEN_EXPIRE_DAYS)
    db.add(UserSession(user_id=user.id, refresh_token=refresh_token, expires_at=expires_at))
    db.commit()

    return {
        "access_token": access_token,
        "refresh_token": refresh_token,
        "token_type": "bearer",
        "user": UserResponse.model_validate(user),
    }


@router.post("/signup", response_model=Token, status_code=status.HTTP_201_CREATED)
def signup(signup_data: SignupRequest, db: Session = Depends(get_db)):
    """Create the identity and its profile in one transaction."""
    if db.query(User).filter(User.email == signup_data.email).first():
        raise HTTPException(status_code=400, detail="Email already registered")

    user = User(
        email=signup_data.email,
        hashed_password=auth_service.get_password_hash(signup_data.password),
    )
    db.add(user)
    db.flush()

    bind_identity(db, user.id)
    db.add(Profile(user_id=user.id, email=user.email, full_name=signup_data.full_name))
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=400, detail="Email already registered")
    db.refresh(user)

    logger.info(f"New user signed up: {user.id}")
    return _issue_tokens(db, user)


@router.post("/login", response_model=Token)
def login(login_data: LoginRequest, db: Session = Depends(get_db)):
    user = db.query(User).filter(User.email == login_data.email).first()
    if not user or not auth_service.verify_password(login_data.password, user.hashed_password):
        logger.info(f"Failed login for {login_data.email}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )
    if not user.is_active:
        raise HTTPException(status_code=400, detail="User is inactive")

    return _issue_tokens(db, user)


@router.post("/refresh", response_model=Token)
def refresh_token(data: RefreshRequest, db: Session = Depends(get_db)):
    payload = auth_service.decode_access_token(data.refresh_token)
    if payload is None or payload.get("type") != "refresh":
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid refresh token")

    db_session = db.query(UserSession).filter(
        UserSession.refresh_token == data.refresh_token,
        UserSession.is_revoked == False,  # noqa: E712
    ).first()

    if not db_session or _as_utc(db_session.expires_at) <= datetime.now(timezone.utc):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Session expired or revoked")

    user = db_session.user
    if not user or not user.is_active:
        raise HTTPException(status_code=401, detail="User inactive or not found")

    # Rotation: Revoke old, create new
    db_session.is_revoked = True
    return _issue_tokens(db, user)


@router.post("/logout")
def logout(data: RefreshRequest, db: Session = Depends(get_db)):
    db_session = db.query(UserSession).filter(UserSession.refresh_token == data.refresh_token).first()
    if db_session:
        db_session.is_revoked = True
        db.commit()
    return {"success": True, "message": "Successfully logged out"}


@router.get("/me", response_model=UserResponse)
def get_me(current_user: User = Depends(get_current_user)):
    return current_user


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
