"""Password hashing and opaque token helpers for the auth domain."""
import secrets

from passlib.context import CryptContext

password_context = CryptContext(schemes=["argon2"], deprecated="auto")

# Verified against when the account is unknown so the failure path costs the
# same as a wrong password.
_DUMMY_HASH = password_context.hash(secrets.token_urlsafe(16))


def hash_password(password: str) -> str:
    return password_context.hash(password)


def verify_password(plain: str, hashed: str | None) -> bool:
    if hashed is None:
        password_context.verify(plain, _DUMMY_HASH)
        return False
    return password_context.verify(plain, hashed)


def generate_verification_token() -> str:
    """Unguessable URL-safe token for email verification links."""
    return secrets.token_urlsafe(32)
