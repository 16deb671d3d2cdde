from .lookup import NotificationLookupClient

__all__ = ["NotificationLookupClient"]
