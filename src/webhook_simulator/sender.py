import time
import uuid
from datetime import datetime, timezone

import requests

from src.models.delivery import DeliveryAttempt
from src.webhook_receiver.dispatcher import SIGNATURE_HEADER
from src.webhook_simulator.signer import BoldWebhookSigner


class WebhookSender:
    """Delivers signed Bold-style webhook notifications to a relay endpoint."""

    def __init__(self, signer: BoldWebhookSigner, timeout_seconds: float = 30):
        self.signer = signer
        self.timeout_seconds = timeout_seconds

    def deliver(
        self,
        body: dict,
        url: str,
        signature: str | None = None,
        include_signature: bool = True,
    ) -> DeliveryAttempt:
        """Deliver a single webhook body. Returns the delivery attempt result.

        Args:
            body: Webhook body as Bold would send it.
            url: The relay webhook URL.
            signature: Override the computed signature (to simulate tampering).
            include_signature: Send without the signature header when False.
        """
        headers = {"Content-Type": "application/json"}
        if include_signature:
            headers[SIGNATURE_HEADER] = signature if signature is not None else self.signer.sign(body)

        start = time.monotonic()
        status_code = None
        response_body = None
        error = None

        try:
            resp = requests.post(
                url,
                data=self.signer.encode(body),
                headers=headers,
                timeout=self.timeout_seconds,
            )
            status_code = resp.status_code
            try:
                response_body = resp.json()
            except ValueError:
                response_body = None
        except requests.exceptions.Timeout:
            error = "timeout"
        except requests.exceptions.ConnectionError:
            error = "connection_error"
        except requests.exceptions.RequestException as e:
            error = str(e)

        elapsed_ms = (time.monotonic() - start) * 1000

        return DeliveryAttempt(
            attempt_id=f"att_{uuid.uuid4().hex[:16]}",
            event_id=body.get("id"),
            url=url,
            status_code=status_code,
            timestamp=datetime.now(timezone.utc),
            response_time_ms=elapsed_ms,
            response_body=response_body,
            error=error,
        )
