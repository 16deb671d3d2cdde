import logging
from urllib.parse import quote

import requests

from src.config.settings import DEFAULT_NOTIFICATIONS_URL
from src.models.errors import ConfigError, UpstreamError

logger = logging.getLogger(__name__)


class NotificationLookupClient:
    """Fetches webhook notifications from Bold's fallback lookup service."""

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_NOTIFICATIONS_URL,
        timeout_seconds: float = 10,
        session: requests.Session | None = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.session = session or requests.Session()

    def build_url(self, payment_id: str, is_external_reference: str | None = None) -> str:
        url = f"{self.base_url}/{quote(str(payment_id), safe='')}"
        if is_external_reference == "true":
            url += "?is_external_reference=true"
        return url

    def lookup(self, payment_id: str, is_external_reference: str | None = None):
        """Return the notifications Bold holds for a payment.

        Args:
            payment_id: Bold payment id, or the merchant reference when
                ``is_external_reference`` is the string ``"true"``.
            is_external_reference: Raw query flag; any value other than
                ``"true"`` is ignored.

        Returns:
            The upstream JSON body, unchanged.
        """
        if not self.api_key:
            raise ConfigError("Bold API key not configured")

        url = self.build_url(payment_id, is_external_reference)
        headers = {
            "Authorization": f"x-api-key {self.api_key}",
            "Content-Type": "application/json",
        }

        try:
            resp = self.session.get(url, headers=headers, timeout=self.timeout_seconds)
        except requests.exceptions.Timeout:
            logger.error("Bold notification lookup timed out for %s", payment_id)
            raise UpstreamError("Bold API error: timeout") from None
        except requests.exceptions.ConnectionError:
            logger.error("Bold notification lookup could not connect for %s", payment_id)
            raise UpstreamError("Bold API error: connection_error") from None
        except requests.exceptions.RequestException as e:
            logger.error("Bold notification lookup failed for %s: %s", payment_id, e)
            raise UpstreamError(f"Bold API error: {e}") from None

        if not 200 <= resp.status_code < 300:
            logger.error("Bold API error %s for %s", resp.status_code, payment_id)
            raise UpstreamError(
                f"Bold API error: {resp.status_code}", upstream_status=resp.status_code
            )

        try:
            return resp.json()
        except ValueError:
            raise UpstreamError("Bold API error: invalid JSON response") from None
