from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
import math
from typing import Any

from src.models.errors import InvalidBody
from src.utils.crypto import format_amount
from src.utils.references import build_user_reference

DEFAULT_CURRENCY = "COP"


class OrderStatus(Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    VOIDED = "voided"


@dataclass
class PaymentRequest:
    amount: Any  # forwarded as received, never validated
    reference: str
    description: str | None = None
    currency: str = DEFAULT_CURRENCY
    user_id: str | None = None

    @property
    def user_reference(self) -> str:
        return build_user_reference(self.reference, self.user_id)

    @classmethod
    def from_dict(cls, body: dict) -> "PaymentRequest":
        """Build a request from the JSON body of a create-payment call."""
        if not isinstance(body, dict):
            raise InvalidBody("request body must be a JSON object")
        reference = body.get("reference")
        if reference is None or reference == "":
            raise InvalidBody("reference is required")
        user_id = body.get("userId")
        return cls(
            amount=body.get("amount"),
            reference=str(reference),
            description=body.get("description"),
            currency=body.get("currency") or DEFAULT_CURRENCY,
            user_id=_user_id_text(user_id),
        )


@dataclass
class PaymentSignaturePayload:
    amount: Any
    reference: str
    description: str | None
    currency: str
    signature: str
    order_id: str

    def to_dict(self) -> dict:
        return {
            "amount": self.amount,
            "reference": self.reference,
            "description": self.description,
            "currency": self.currency,
            "signature": self.signature,
            "orderId": self.order_id,
        }


@dataclass
class Order:
    """Order record emitted on payment creation. Logged only, never stored."""

    id: str
    user_id: str | None
    amount: Any
    description: str | None
    status: OrderStatus = OrderStatus.PENDING
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "userId": self.user_id,
            "amount": self.amount,
            "description": self.description,
            "status": self.status.value,
            "createdAt": self.created_at.isoformat(),
        }


def _user_id_text(value) -> str | None:
    """Render a userId as a JS template literal would; falsy values mean no user."""
    if not value or (isinstance(value, float) and math.isnan(value)):
        return None
    return format_amount(value)
