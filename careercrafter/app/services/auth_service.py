"""
Authentication service business logic
"""
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from careercrafter.app.models.user import User
from careercrafter.app.schemas.user import UserRegister, UserLogin
from careercrafter.app.core.config import settings
from careercrafter.app.core.security import verify_password, get_password_hash, create_access_token
from datetime import timedelta


class AuthService:
    """Service for authentication operations"""

    @staticmethod
    def issue_token(user: User) -> str:
        return create_access_token(
            data={"sub": str(user.id), "email": user.email},
            expires_delta=timedelta(minutes=settings.access_token_expire_minutes),
        )

    @staticmethod
    def register_user(db: Session, user_data: UserRegister):
        """Register a new user"""
        email = user_data.email.strip().lower()
        try:
            existing_user = db.query(User).filter(User.email == email).first()
            if existing_user:
                return {"success": False, "message": "Email already registered"}

            new_user = User(
                first_name=user_data.first_name,
                last_name=user_data.last_name,
                email=email,
                hashed_password=get_password_hash(user_data.password),
            )

            db.add(new_user)
            db.commit()
            db.refresh(new_user)

            # User is logged in after register
            return {
                "success": True,
                "user": new_user,
                "message": "User registered successfully",
                "access_token": AuthService.issue_token(new_user),
                "token_type": "bearer",
            }
        except IntegrityError:
            db.rollback()
            return {"success": False, "message": "Error registering user"}

    @staticmethod
    def login_user(db: Session, login_data: UserLogin):
        """Authenticate user and return access token"""
        user = db.query(User).filter(User.email == login_data.email.strip().lower()).first()

        if not user:
            return {"success": False, "message": "Invalid email or password"}

        if not verify_password(login_data.password, user.hashed_password):
            return {"success": False, "message": "Invalid email or password"}

        if not user.is_active:
            return {"success": False, "message": "User account is inactive"}

        return {
            "success": True,
            "access_token": AuthService.issue_token(user),
            "token_type": "bearer",
            "user": user,
            "message": "Login successful",
        }
