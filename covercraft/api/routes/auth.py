import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from covercraft.db.models.user import User
from covercraft.db.models.profile import Profile
from covercraft.core.auth_dependency import get_db, get_current_user_obj
from covercraft.core.security import hash_password, verify_password, create_access_token
from covercraft.schemas.auth import SignupRequest, SignupResponse, TokenResponse, MeResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])


# ✅ USER SIGNUP
@router.post("/signup", status_code=status.HTTP_201_CREATED, response_model=SignupResponse)
def signup(payload: SignupRequest, db: Session = Depends(get_db)):
    email = payload.email.lower()

    existing_user = db.query(User).filter(User.email == email).first()
    if existing_user:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email already registered")

    try:
        hashed = hash_password(payload.password)
    except ValueError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid password")

    try:
        user = User(email=email, password_hash=hashed)
        db.add(user)
        db.flush()

        # Display profile row created alongside the account
        db.add(Profile(id=user.id, full_name=payload.full_name, email=email))
        db.commit()
        db.refresh(user)
    except Exception as e:
        db.rollback()
        logger.error(f"Signup failed: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to create account")

    logger.info(f"User signed up: user_id={user.id}")
    return SignupResponse(message="User created successfully", user_id=user.id)


# ✅ OAUTH2 LOGIN (username field carries the email)
@router.post("/login", response_model=TokenResponse)
def login(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db)
):
    user = db.query(User).filter(User.email == form_data.username.lower()).first()

    if not user or not verify_password(form_data.password, user.password_hash):
        logger.info("Login rejected")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    token = create_access_token({"sub": user.email})
    return TokenResponse(access_token=token)


@router.get("/me", response_model=MeResponse)
def me(user: User = Depends(get_current_user_obj)):
    return MeResponse(id=user.id, email=user.email)
