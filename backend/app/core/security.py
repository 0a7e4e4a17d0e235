"""
Security utilities for password hashing and session cookie signing.
"""
from typing import Optional
import hashlib
import bcrypt
from jose import JWTError, jwt


def _pre_hash_password(password: str) -> bytes:
    """
    Pre-hash password with SHA256 to support passwords longer than 72 bytes.
    Returns bytes (32 bytes) which is well under bcrypt's 72-byte limit.
    """
    return hashlib.sha256(password.encode('utf-8')).digest()


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    pre_hashed = _pre_hash_password(plain_password)
    try:
        return bcrypt.checkpw(pre_hashed, hashed_password.encode('utf-8'))
    except ValueError:
        # Stored hash is not a bcrypt hash
        return False


def get_password_hash(password: str) -> str:
    """Hash a password with a fresh bcrypt salt."""
    pre_hashed = _pre_hash_password(password)
    salt = bcrypt.gensalt()
    hashed = bcrypt.hashpw(pre_hashed, salt)
    return hashed.decode('utf-8')


def sign_session_id(session_id: str, secret_key: str, algorithm: str = "HS256") -> str:
    """Sign an opaque session id for use as a cookie value."""
    return jwt.encode({"sid": session_id}, secret_key, algorithm=algorithm)


def unsign_session_id(token: str, secret_key: str, algorithm: str = "HS256") -> Optional[str]:
    """Return the session id carried by a signed cookie, or None if tampered."""
    try:
        payload = jwt.decode(token, secret_key, algorithms=[algorithm])
    except JWTError:
        return None
    session_id = payload.get("sid")
    return session_id if isinstance(session_id, str) else None
