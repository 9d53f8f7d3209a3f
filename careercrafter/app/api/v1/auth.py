"""
Authentication endpoints - Login, Register, Get Current User, and Token Refresh
"""
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from careercrafter.app.core.config import settings
from careercrafter.app.core.dependencies import get_current_user, get_db, security
from careercrafter.app.core.logging_config import get_logger
from careercrafter.app.models.user import User
from careercrafter.app.schemas.user import UserRegister, UserLogin, TokenResponse, UserResponse
from careercrafter.app.services.auth_service import AuthService

logger = get_logger("api.auth")
router = APIRouter()


def _user_response(user: User) -> UserResponse:
    return UserResponse(
        id=user.id,
        first_name=user.first_name or "",
        last_name=user.last_name or "",
        email=user.email or "",
    )


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
def register(user_data: UserRegister, db: Session = Depends(get_db)):
    """
    Register a new user account. Returns an access token (user is logged in after register).

    - **first_name**: User's first name
    - **last_name**: User's last name
    - **email**: User's email address (must be unique)
    - **password**: User's password
    """
    logger.info("Registration attempt for email=%s", user_data.email)
    result = AuthService.register_user(db, user_data)

    if not result["success"]:
        logger.warning(
            "Registration failed email=%s reason=%s",
            user_data.email,
            result["message"],
        )
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=result["message"],
        )

    user = result["user"]
    logger.info("User registered successfully user_id=%s", user.id)
    return TokenResponse(
        access_token=result["access_token"],
        token_type=result["token_type"],
        user=_user_response(user),
        message=result["message"],
    )


@router.post("/login", response_model=TokenResponse)
def login(login_data: UserLogin, db: Session = Depends(get_db)):
    """
    Login user and get access token

    - **email**: User's email address
    - **password**: User's password
    """
    result = AuthService.login_user(db, login_data)

    if not result["success"]:
        logger.warning(
            "Login failed email=%s reason=%s",
            login_data.email,
            result["message"],
        )
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=result["message"],
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = result["user"]
    logger.info("User logged in successfully user_id=%s", user.id)
    return TokenResponse(
        access_token=result["access_token"],
        token_type=result["token_type"],
        user=_user_response(user),
        message=result["message"],
    )


@router.get("/user", response_model=UserResponse)
def get_current_user_profile(
    current_user: User = Depends(get_current_user),
):
    """Current authenticated user. Used to refresh auth state on app load."""
    return _user_response(current_user)


@router.post("/refresh", response_model=TokenResponse)
def refresh_access_token(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    db: Session = Depends(get_db),
):
    """
    Refresh access token. Accepts current token (even if expired) and returns a new token.
    """
    if not credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        payload = jwt.decode(
            credentials.credentials,
            settings.secret_key,
            algorithms=[settings.algorithm],
            options={"verify_exp": False},
        )
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    user_id = payload.get("sub")
    if not user_id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")
    user = db.query(User).filter(User.id == int(user_id)).first()
    if not user or not user.is_active:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found")
    return TokenResponse(
        access_token=AuthService.issue_token(user),
        token_type="bearer",
        user=_user_response(user),
    )
