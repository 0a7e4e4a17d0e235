"""
Request dependencies: settings, sessions, the current user and their store.
"""
from fastapi import Depends, Request, Response
from app.core.config import Settings
from app.core.security import sign_session_id, unsign_session_id
from app.core.sessions import Session, SessionStore
from app.db.store import StoreProvisioner, UserStore
from app.schemas.user import UserResponse
from app.services import auth_service


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_session(request: Request, settings: Settings = Depends(get_settings)) -> Session:
    """Load the session named by the signed cookie, or an empty one."""
    store: SessionStore = request.app.state.session_store
    token = request.cookies.get(settings.SESSION_COOKIE_NAME)
    if token:
        session_id = unsign_session_id(token, settings.SESSION_SECRET, settings.SESSION_ALGORITHM)
        if session_id:
            data = store.load(session_id)
            if data is not None:
                return Session(store, session_id, data)
    return Session(store)


def issue_session_cookie(response: Response, session: Session, settings: Settings) -> None:
    """Attach the signed session cookie when the handler started a new session."""
    if not session.is_new or session.session_id is None:
        return
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=sign_session_id(session.session_id, settings.SESSION_SECRET, settings.SESSION_ALGORITHM),
        max_age=settings.SESSION_EXPIRY_DAYS * 24 * 60 * 60,
        httponly=True,
        secure=settings.PRODUCTION,
        samesite="lax",
    )


def get_current_user(session: Session = Depends(get_session)) -> UserResponse:
    """Resolve the authenticated user or fail with 401."""
    return auth_service.current_user(session)


def get_user_store(
    request: Request,
    current_user: UserResponse = Depends(get_current_user),
) -> UserStore:
    """Open the current user's store, provisioning it on first use."""
    provisioner: StoreProvisioner = request.app.state.provisioner
    return provisioner.open_store(current_user.id)
