"""Import every ORM module so Base.metadata knows all tables."""
from easybuk.admin.models import AdminAction
from easybuk.auth.models import (
    AdminProfile,
    ClientProfile,
    ProviderProfile,
    User,
    VerificationToken,
)
from easybuk.notifications.models import Notification
from easybuk.provider.models import Service

__all__ = [
    "AdminAction",
    "AdminProfile",
    "ClientProfile",
    "Notification",
    "ProviderProfile",
    "Service",
    "User",
    "VerificationToken",
]
