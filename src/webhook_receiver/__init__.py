from .dispatcher import SIGNATURE_HEADER, WebhookDispatcher
from .handlers import PaymentEventHandler

__all__ = ["WebhookDispatcher", "PaymentEventHandler", "SIGNATURE_HEADER"]
