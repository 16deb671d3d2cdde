from dataclasses import dataclass, field
from enum import Enum

from src.utils.references import extract_user_id_from_reference

ACK_MESSAGE = "Webhook received successfully"


class WebhookEventType(Enum):
    SALE_APPROVED = "SALE_APPROVED"
    SALE_REJECTED = "SALE_REJECTED"
    VOID_APPROVED = "VOID_APPROVED"
    VOID_REJECTED = "VOID_REJECTED"

    @classmethod
    def parse(cls, value) -> "WebhookEventType | None":
        """Map a raw ``type`` value to a known event type, None if unknown."""
        try:
            return cls(value)
        except ValueError:
            return None


@dataclass
class WebhookEvent:
    id: str | None
    type: str | None  # raw value, may be outside WebhookEventType
    subject: str | None
    data: dict = field(default_factory=dict)

    @classmethod
    def from_dict(cls, body: dict) -> "WebhookEvent":
        data = body.get("data")
        return cls(
            id=body.get("id"),
            type=body.get("type"),
            subject=body.get("subject"),
            data=data if isinstance(data, dict) else {},
        )

    @property
    def event_type(self) -> WebhookEventType | None:
        return WebhookEventType.parse(self.type)

    @property
    def payment_id(self):
        return self.data.get("payment_id")

    @property
    def amount_total(self):
        amount = self.data.get("amount")
        return amount.get("total") if isinstance(amount, dict) else None

    @property
    def reference(self):
        metadata = self.data.get("metadata")
        return metadata.get("reference") if isinstance(metadata, dict) else None

    @property
    def user_id(self) -> str | None:
        return extract_user_id_from_reference(self.reference)

    def summary(self) -> dict:
        return {
            "id": self.id,
            "type": self.type,
            "subject": self.subject,
            "payment_id": self.payment_id,
            "amount": self.amount_total,
            "reference": self.reference,
            "userId": self.user_id,
        }


@dataclass
class WebhookAck:
    payment_id: str | None
    type: str | None
    user_id: str | None
    message: str = ACK_MESSAGE

    def to_dict(self) -> dict:
        return {
            "message": self.message,
            "payment_id": self.payment_id,
            "type": self.type,
            "userId": self.user_id,
        }
