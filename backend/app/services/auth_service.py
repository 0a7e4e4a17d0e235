"""
Identity service: registration, credential checks and session lookups.
"""
import logging
import uuid
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from app.core.errors import BadInput, DuplicateUsername, InvalidCredentials, Unauthenticated
from app.core.security import get_password_hash, verify_password
from app.core.sessions import Session as UserSession
from app.core.validation import validate_password, validate_username
from app.models.user import User
from app.schemas.user import UserResponse

logger = logging.getLogger(__name__)

SESSION_USER_ID = "user_id"
SESSION_USERNAME = "username"


def register_user(db: Session, username: str, password: str) -> UserResponse:
    """Register a new user and return its public view."""
    validate_username(username)
    validate_password(password)

    if db.query(User).filter(User.username == username).first():
        raise DuplicateUsername()

    user = User(
        id=uuid.uuid4().hex,
        username=username,
        password_hash=get_password_hash(password),
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race with a concurrent registration of the same name
        db.rollback()
        raise DuplicateUsername()

    logger.info(f"Registered user {user.username} ({user.id})")
    return UserResponse(id=user.id, username=user.username)


def authenticate_user(db: Session, username: str, password: str) -> UserResponse:
    """Check credentials. Unknown users and wrong passwords look the same to the caller."""
    if not username or not password:
        raise BadInput("Username and password are required")

    user = db.query(User).filter(User.username == username).first()
    if not user or not verify_password(password, user.password_hash):
        logger.warning(f"Failed login attempt for {username!r}")
        raise InvalidCredentials()

    return UserResponse(id=user.id, username=user.username)


def login(session: UserSession, user: UserResponse) -> None:
    """Record the authenticated user in a freshly issued session."""
    session.clear()
    session.set(SESSION_USER_ID, user.id)
    session.set(SESSION_USERNAME, user.username)
    logger.info(f"User {user.username} logged in")


def current_user(session: UserSession) -> UserResponse:
    """Return the session's user or raise Unauthenticated."""
    user_id = session.get(SESSION_USER_ID)
    username = session.get(SESSION_USERNAME)
    if not isinstance(user_id, str) or not isinstance(username, str):
        raise Unauthenticated()
    return UserResponse(id=user_id, username=username)


def logout(session: UserSession) -> None:
    session.clear()
