from .payment import Order, OrderStatus, PaymentRequest, PaymentSignaturePayload
from .webhook import WebhookAck, WebhookEvent, WebhookEventType
from .delivery import DeliveryAttempt
from .errors import (
    ConfigError,
    InternalFault,
    InvalidBody,
    InvalidSignature,
    RelayError,
    UpstreamError,
)

__all__ = [
    "Order", "OrderStatus", "PaymentRequest", "PaymentSignaturePayload",
    "WebhookAck", "WebhookEvent", "WebhookEventType",
    "DeliveryAttempt",
    "RelayError", "InvalidBody", "InvalidSignature", "ConfigError",
    "UpstreamError", "InternalFault",
]
