import logging

from src.models.errors import ConfigError, InternalFault, InvalidBody, InvalidSignature
from src.models.webhook import WebhookAck, WebhookEvent, WebhookEventType
from src.utils.crypto import loads_json_body, verify_webhook_signature
from src.webhook_receiver.handlers import PaymentEventHandler

logger = logging.getLogger(__name__)

SIGNATURE_HEADER = "x-bold-signature"


class WebhookDispatcher:
    """Verifies Bold webhook notifications and routes them to a handler."""

    def __init__(self, secret: str, handler: PaymentEventHandler | None = None):
        self.secret = secret
        self.handler = handler or PaymentEventHandler()
        self._routes = {
            WebhookEventType.SALE_APPROVED: self.handler.on_sale_approved,
            WebhookEventType.SALE_REJECTED: self.handler.on_sale_rejected,
            WebhookEventType.VOID_APPROVED: self.handler.on_void_approved,
            WebhookEventType.VOID_REJECTED: self.handler.on_void_rejected,
        }

    def parse(self, raw_body: bytes) -> dict:
        try:
            body = loads_json_body(raw_body)
        except ValueError:  # JSONDecodeError and UnicodeDecodeError included
            logger.error("Invalid JSON body on webhook")
            raise InvalidBody("Invalid JSON") from None
        if not isinstance(body, dict):
            logger.error("Webhook body is not a JSON object")
            raise InvalidBody("Invalid JSON")
        return body

    def verify(self, body: dict, signature: str | None) -> None:
        if not self.secret:
            raise ConfigError("Bold secret key not configured")
        if not verify_webhook_signature(body, self.secret, signature):
            logger.error("Invalid webhook signature")
            raise InvalidSignature("Invalid signature")

    def dispatch(self, event: WebhookEvent) -> None:
        route = self._routes.get(event.event_type)
        if route is None:
            logger.warning("Unknown webhook type: %s", event.type)
            return
        route(event.user_id, event.data)

    def process(self, raw_body: bytes, signature: str | None) -> WebhookAck:
        """Run the parse and signature gates, then dispatch.

        Raises InvalidBody or InvalidSignature when a gate fails; any other
        failure is reported as InternalFault.
        """
        body = self.parse(raw_body)
        try:
            event = WebhookEvent.from_dict(body)
            logger.info("Webhook received: %s", event.summary())
            self.verify(body, signature)
            self.dispatch(event)
        except (InvalidSignature, ConfigError):
            raise
        except Exception:
            logger.exception("Webhook error")
            raise InternalFault() from None

        return WebhookAck(payment_id=event.payment_id, type=event.type, user_id=event.user_id)
