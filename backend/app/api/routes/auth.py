"""
Authentication routes for signup, login and the current user.
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from app.db.session import get_db
from app.schemas.user import UserCreate, UserLogin, Token, UserResponse
from app.models.user import User
from app.core.security import verify_password, get_password_hash, issue_token
from app.api.dependencies import CurrentIdentity, get_current_identity
from app.services.entity_store import EntityStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/signup", response_model=Token, status_code=status.HTTP_201_CREATED)
async def signup(user_data: UserCreate, db: Session = Depends(get_db)):
    """Register a new user and return a token."""
    email = user_data.email.lower()
    store = EntityStore(db)

    existing_user = store.with_schema_retry(
        "check email",
        lambda: db.query(User).filter(User.email == email).first()
    )
    if existing_user:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User with this email already exists"
        )

    def create_user():
        user = User(
            email=email,
            password_hash=get_password_hash(user_data.password),
            name=user_data.name
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    new_user = store.with_schema_retry("create user", create_user)
    logger.info("Registered user %s", new_user.id)

    return Token(
        token=issue_token(new_user.id, new_user.email),
        user=UserResponse.model_validate(new_user)
    )


@router.post("/login", response_model=Token)
async def login(credentials: UserLogin, db: Session = Depends(get_db)):
    """Login and get a token."""
    email = credentials.email.lower()
    user = db.query(User).filter(User.email == email).first()

    if not user or not verify_password(credentials.password, user.password_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password"
        )

    return Token(token=issue_token(user.id, user.email), user=UserResponse.model_validate(user))


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(
    identity: CurrentIdentity = Depends(get_current_identity),
    db: Session = Depends(get_db)
):
    """Get current user information."""
    user = db.query(User).filter(User.id == identity.user_id).first()
    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )
    return user
