import enum

# Every admin gets the full permission set; there is no per-admin editing.
ADMIN_PERMISSIONS: tuple[str, ...] = (
    "USER_MANAGEMENT",
    "BOOKING_MANAGEMENT",
    "PAYMENT_MANAGEMENT",
    "REVIEW_MODERATION",
    "VERIFICATION_MANAGEMENT",
    "ANALYTICS_ACCESS",
    "SYSTEM_SETTINGS",
)


class AdminActionType(str, enum.Enum):
    GRANT_ADMIN_ROLE = "GRANT_ADMIN_ROLE"
    REVOKE_ADMIN_ROLE = "REVOKE_ADMIN_ROLE"


TARGET_TYPE_USER: str = "USER"
