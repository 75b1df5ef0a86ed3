"""
EasyBuk API: domain-specific HTTP exceptions.

The category classes carry the status code; the concrete subclasses preset
the detail message so call sites never spell out either.  FastAPI renders
every one of them as ``{"detail": "..."}``.  Anything that is not an
HTTPException reaches error_envelope_middleware, is logged, and becomes a
generic 500.
"""
from fastapi import HTTPException, status


class ConfigurationError(RuntimeError):
    """Required server configuration is missing; raised at boot or on first use."""


# ── Categories ────────────────────────────────────────────────────────────────

class ValidationError(HTTPException):
    def __init__(self, detail: str = "The request is invalid.") -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class AuthenticationError(HTTPException):
    def __init__(self, detail: str = "Not authenticated.") -> None:
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


class AuthorizationError(HTTPException):
    def __init__(
        self, detail: str = "You do not have permission to perform this action."
    ) -> None:
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class NotFoundError(HTTPException):
    def __init__(self, resource: str = "Resource") -> None:
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{resource} not found.",
        )


class ConflictError(HTTPException):
    def __init__(
        self,
        detail: str = "Resource already exists.",
        status_code: int = status.HTTP_409_CONFLICT,
    ) -> None:
        super().__init__(status_code=status_code, detail=detail)


# ── Authentication ────────────────────────────────────────────────────────────

class InvalidCredentials(AuthenticationError):
    def __init__(self) -> None:
        super().__init__("Invalid email or password.")


class NotAuthenticated(AuthenticationError):
    def __init__(self) -> None:
        super().__init__("Not authenticated.")
        self.headers = {"WWW-Authenticate": "Bearer"}


class SessionExpired(AuthenticationError):
    """Refresh token missing, invalid, expired, or its user no longer exists."""

    def __init__(self) -> None:
        super().__init__("Session has expired. Please log in again.")


class AccountSuspended(AuthorizationError):
    def __init__(self) -> None:
        super().__init__("This account has been suspended.")


class AccountBanned(AuthorizationError):
    def __init__(self) -> None:
        super().__init__("This account has been banned.")


# ── Email verification tokens ─────────────────────────────────────────────────

class InvalidToken(ValidationError):
    def __init__(self) -> None:
        super().__init__("Invalid verification token.")


class TokenExpired(ValidationError):
    def __init__(self) -> None:
        super().__init__("Verification token has expired.")


class TokenAlreadyUsed(ConflictError):
    def __init__(self) -> None:
        super().__init__(
            "Verification token has already been used.",
            status_code=status.HTTP_400_BAD_REQUEST,
        )


class EmailRequired(ValidationError):
    def __init__(self) -> None:
        super().__init__("Email address is required.")


# ── Accounts & roles ──────────────────────────────────────────────────────────

class UserAlreadyExists(ConflictError):
    def __init__(self) -> None:
        super().__init__("A user with this email already exists.")


class UserNotFound(NotFoundError):
    def __init__(self) -> None:
        super().__init__("User")


class RoleAlreadyHeld(ValidationError):
    def __init__(self, role: str) -> None:
        super().__init__(f"You already have the {role} role.")


# ── Notifications ─────────────────────────────────────────────────────────────

class NotificationNotFound(NotFoundError):
    def __init__(self) -> None:
        super().__init__("Notification")


class NotificationForbidden(AuthorizationError):
    def __init__(self) -> None:
        super().__init__("You can only modify your own notifications.")


# ── Provider services ─────────────────────────────────────────────────────────

class ProviderProfileNotFound(NotFoundError):
    def __init__(self) -> None:
        super().__init__("Provider profile")


class ServiceNotFound(NotFoundError):
    """Also raised for services owned by another provider."""

    def __init__(self) -> None:
        super().__init__("Service")


# ── Admin grants ──────────────────────────────────────────────────────────────

class AdminRequired(AuthorizationError):
    def __init__(self) -> None:
        super().__init__("Administrator access required.")


class AlreadyAdmin(ValidationError):
    def __init__(self) -> None:
        super().__init__("User already has admin privileges.")


class NotAdmin(ValidationError):
    def __init__(self) -> None:
        super().__init__("User does not have the admin role.")


class CannotRevokeSelf(ValidationError):
    def __init__(self) -> None:
        super().__init__("You cannot remove your own admin privileges.")
