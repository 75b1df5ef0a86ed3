import enum

DEFAULT_CURRENCY: str = "GHS"


class ServiceStatus(str, enum.Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
