"""
Authentication routes for register, login, current user and logout.
"""
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session
from app.api.dependencies import get_current_user, get_session, get_settings, issue_session_cookie
from app.core.config import Settings
from app.core.sessions import Session as UserSession
from app.db.session import get_db
from app.schemas.user import UserCreate, UserLogin, UserResponse
from app.services import auth_service

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def register(user_data: UserCreate, db: Session = Depends(get_db)):
    """Register a new user."""
    return auth_service.register_user(db, user_data.username, user_data.password)


@router.post("/login", response_model=UserResponse)
def login(
    credentials: UserLogin,
    response: Response,
    db: Session = Depends(get_db),
    session: UserSession = Depends(get_session),
    settings: Settings = Depends(get_settings),
):
    """Check credentials and establish a session."""
    user = auth_service.authenticate_user(db, credentials.username, credentials.password)
    auth_service.login(session, user)
    issue_session_cookie(response, session, settings)
    return user


@router.get("/me", response_model=UserResponse)
def me(current_user: UserResponse = Depends(get_current_user)):
    """Get current user information."""
    return current_user


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout(
    session: UserSession = Depends(get_session),
    settings: Settings = Depends(get_settings),
):
    """Clear the session. Succeeds whether or not anyone was logged in."""
    auth_service.logout(session)
    response = Response(status_code=status.HTTP_204_NO_CONTENT)
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return response
