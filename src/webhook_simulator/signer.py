from src.utils.crypto import encode_webhook_body, generate_webhook_signature, verify_webhook_signature


class BoldWebhookSigner:
    """Signs webhook bodies the way Bold does: HMAC-SHA256 over base64(JSON)."""

    def __init__(self, secret: str):
        self.secret = secret

    def sign(self, body: dict) -> str:
        return generate_webhook_signature(body, self.secret)

    def verify(self, body: dict, signature: str | None) -> bool:
        return verify_webhook_signature(body, self.secret, signature)

    def encode(self, body: dict) -> bytes:
        """Exact bytes that match the signature returned by ``sign``."""
        return encode_webhook_body(body)
