import enum

DEFAULT_LIST_LIMIT: int = 20
MAX_LIST_LIMIT: int = 100


class NotificationType(str, enum.Enum):
    BOOKING_REQUEST = "BOOKING_REQUEST"
    BOOKING_CONFIRMED = "BOOKING_CONFIRMED"
    BOOKING_CANCELLED = "BOOKING_CANCELLED"
    PAYMENT_RECEIVED = "PAYMENT_RECEIVED"
    REVIEW_RECEIVED = "REVIEW_RECEIVED"
    MESSAGE_RECEIVED = "MESSAGE_RECEIVED"
    PROFILE_VERIFIED = "PROFILE_VERIFIED"
    SYSTEM_ANNOUNCEMENT = "SYSTEM_ANNOUNCEMENT"
