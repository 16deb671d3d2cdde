from .settings import DEFAULT_NOTIFICATIONS_URL, RelayConfig

__all__ = ["RelayConfig", "DEFAULT_NOTIFICATIONS_URL"]
