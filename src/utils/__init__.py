from .crypto import (
    generate_payment_signature,
    generate_webhook_signature,
    verify_webhook_signature,
)
from .references import build_user_reference, extract_user_id_from_reference

__all__ = [
    "generate_payment_signature", "generate_webhook_signature", "verify_webhook_signature",
    "build_user_reference", "extract_user_id_from_reference",
]
