import logging

from src.models.errors import ConfigError
from src.models.payment import (
    DEFAULT_CURRENCY,
    Order,
    PaymentRequest,
    PaymentSignaturePayload,
)
from src.utils.crypto import generate_payment_signature
from src.utils.references import build_user_reference

logger = logging.getLogger(__name__)


class PaymentRequestSigner:
    """Builds signed payment-initiation payloads for the Bold checkout."""

    def __init__(self, secret: str):
        self.secret = secret

    def sign(
        self,
        amount,
        reference: str,
        currency: str = DEFAULT_CURRENCY,
        user_id: str | None = None,
    ) -> tuple[str, str]:
        """Return ``(user_reference, signature)`` for a payment.

        The hash covers ``{user_reference}{amount}{currency}{secret}`` in that
        order, which is the integrity scheme Bold documents for its checkout.
        """
        if not self.secret:
            raise ConfigError("Bold secret key not configured")
        user_reference = build_user_reference(reference, user_id)
        signature = generate_payment_signature(
            user_reference, amount, currency or DEFAULT_CURRENCY, self.secret
        )
        return user_reference, signature

    def create_payment(self, request: PaymentRequest) -> PaymentSignaturePayload:
        user_reference, signature = self.sign(
            request.amount, request.reference, request.currency, request.user_id
        )

        order = Order(
            id=user_reference,
            user_id=request.user_id,
            amount=request.amount,
            description=request.description,
        )
        logger.info("Order created: %s", order.to_dict())

        return PaymentSignaturePayload(
            amount=request.amount,
            reference=user_reference,
            description=request.description,
            currency=request.currency,
            signature=signature,
            order_id=user_reference,
        )
