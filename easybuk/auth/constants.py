import enum

# ── Session cookies ──────────────────────────────────────────────────────────
ACCESS_TOKEN_COOKIE: str = "auth-token"
REFRESH_TOKEN_COOKIE: str = "refresh-token"

# ── Token types carried in the JWT "type" claim ──────────────────────────────
TOKEN_TYPE_ACCESS: str = "access"
TOKEN_TYPE_REFRESH: str = "refresh"

VERIFICATION_TOKEN_TYPE: str = "EMAIL_VERIFICATION"

MIN_PASSWORD_LENGTH: int = 6

# Default country stamped on new client/provider profiles.
DEFAULT_COUNTRY: str = "Ghana"


class UserStatus(str, enum.Enum):
    ACTIVE = "ACTIVE"
    SUSPENDED = "SUSPENDED"
    PENDING_VERIFICATION = "PENDING_VERIFICATION"
    BANNED = "BANNED"
    UNDER_REVIEW = "UNDER_REVIEW"


class ProviderVerificationStatus(str, enum.Enum):
    PENDING = "PENDING"
    VERIFIED = "VERIFIED"
    REJECTED = "REJECTED"


class ServiceCategory(str, enum.Enum):
    HOME_SERVICES = "HOME_SERVICES"
    HEALTHCARE = "HEALTHCARE"
    EDUCATION = "EDUCATION"
    TECHNICAL_SERVICES = "TECHNICAL_SERVICES"
    CREATIVE_SERVICES = "CREATIVE_SERVICES"
    PROFESSIONAL_SERVICES = "PROFESSIONAL_SERVICES"
    AUTOMOTIVE = "AUTOMOTIVE"
    BEAUTY_WELLNESS = "BEAUTY_WELLNESS"
    EVENTS_ENTERTAINMENT = "EVENTS_ENTERTAINMENT"
    AGRICULTURE = "AGRICULTURE"
    SECURITY = "SECURITY"
    DELIVERY_LOGISTICS = "DELIVERY_LOGISTICS"
