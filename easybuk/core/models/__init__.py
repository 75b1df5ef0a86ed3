from easybuk.core.models.user import CurrentUser

__all__ = ["CurrentUser"]
