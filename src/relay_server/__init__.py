from .server import PaymentRelayServer

__all__ = ["PaymentRelayServer"]
