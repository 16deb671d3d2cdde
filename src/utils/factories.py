import uuid
from datetime import datetime, timezone

from src.models.payment import PaymentRequest
from src.utils.references import build_user_reference


class PaymentRequestFactory:
    """Factory for creating PaymentRequest instances with sensible defaults."""

    @staticmethod
    def create(**overrides) -> PaymentRequest:
        defaults = {
            "amount": 59900,
            "reference": f"order-{uuid.uuid4().hex[:12]}",
            "description": "Test purchase",
            "currency": "COP",
            "user_id": None,
        }
        defaults.update(overrides)
        return PaymentRequest(**defaults)

    @staticmethod
    def create_body(**overrides) -> dict:
        """JSON body for POST /api/create-payment."""
        body = {
            "amount": 59900,
            "reference": f"order-{uuid.uuid4().hex[:12]}",
            "description": "Test purchase",
        }
        body.update(overrides)
        return body


class WebhookFactory:
    """Factory for creating Bold webhook bodies with sensible defaults."""

    @staticmethod
    def create_body(event_type: str = "SALE_APPROVED", **overrides) -> dict:
        payment_id = overrides.pop("payment_id", uuid.uuid4().hex[:12].upper())
        user_id = overrides.pop("user_id", None)
        reference = overrides.pop(
            "reference", build_user_reference(f"order-{uuid.uuid4().hex[:8]}", user_id)
        )
        now = datetime.now(timezone.utc)

        body = {
            "id": overrides.pop("id", str(uuid.uuid4())),
            "type": event_type,
            "subject": payment_id,
            "source": "/payments",
            "spec_version": "1.0",
            "time": int(now.timestamp() * 1_000_000_000),
            "data": WebhookFactory._build_data(event_type, payment_id, reference, now, **overrides),
            "datacontenttype": "application/json",
        }
        data_overrides = overrides.pop("data", None)
        if data_overrides:
            body["data"].update(data_overrides)
        # Allow overriding remaining top-level fields
        for key in list(overrides):
            if key in body:
                body[key] = overrides.pop(key)
        return body

    @staticmethod
    def _build_data(
        event_type: str, payment_id: str, reference: str | None, timestamp: datetime, **kwargs
    ) -> dict:
        data = {
            "payment_id": payment_id,
            "merchant_id": kwargs.get("merchant_id", "MERCHANT01"),
            "created_at": timestamp.isoformat(),
            "amount": {
                "currency": kwargs.get("currency", "COP"),
                "total": kwargs.get("amount", 59900),
                "taxes": [],
                "tip": 0,
            },
            "user_id": kwargs.get("payer_id", "payer-1"),
            "metadata": {"reference": reference},
            "bold_code": kwargs.get("bold_code", "XYZ123"),
            "payer_email": kwargs.get("payer_email", "buyer@example.com"),
            "payment_method": kwargs.get("payment_method", "CARD"),
            "card": {
                "capture_mode": "CHIP",
                "franchise": "VISA",
                "cardholder_name": "Compra Segura",
                "terminal_id": "T0001",
            },
        }
        if event_type in ("SALE_REJECTED", "VOID_REJECTED"):
            data["rejection_reason"] = kwargs.get("rejection_reason", "Transacción rechazada")
        return data
