from .sender import WebhookSender
from .signer import BoldWebhookSigner

__all__ = [
    "WebhookSender",
    "BoldWebhookSigner",
]
