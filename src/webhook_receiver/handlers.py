import logging

logger = logging.getLogger(__name__)


class PaymentEventHandler:
    """Reacts to verified Bold webhook events.

    Each method receives the user id embedded in the payment reference (or
    None) and the event's ``data`` object. The defaults only log; subclass
    and override to update orders, notify customers or process refunds.
    """

    def on_sale_approved(self, user_id: str | None, data: dict) -> None:
        logger.info("Payment %s approved for user %s", data.get("payment_id"), user_id)

    def on_sale_rejected(self, user_id: str | None, data: dict) -> None:
        logger.info("Payment %s rejected for user %s", data.get("payment_id"), user_id)

    def on_void_approved(self, user_id: str | None, data: dict) -> None:
        logger.info("Void of %s approved for user %s", data.get("payment_id"), user_id)

    def on_void_rejected(self, user_id: str | None, data: dict) -> None:
        logger.warning("Void of %s rejected for user %s", data.get("payment_id"), user_id)
