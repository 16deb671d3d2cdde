"""Integration tests for the notification lookup client against a stub upstream."""

import pytest
import requests

from src.models.errors import ConfigError, UpstreamError
from src.notifications.lookup import NotificationLookupClient


pytestmark = pytest.mark.integration


class TestNotificationLookup:

    def test_relays_upstream_json(self, lookup_client, notification_service):
        upstream = {"notifications": [{"type": "SALE_APPROVED", "payment_id": "PAY1"}]}
        notification_service.respond_with(200, upstream)

        assert lookup_client.lookup("PAY1") == upstream

    def test_sends_api_key_header(self, lookup_client, notification_service):
        lookup_client.lookup("PAY1")

        sent = notification_service.requests[0]
        assert sent["path"].endswith("/PAY1")
        assert sent["headers"]["Authorization"] == "x-api-key test-api-key"

    def test_external_reference_flag_only_for_exact_true(self, lookup_client, notification_service):
        lookup_client.lookup("USER_1_order", "true")
        lookup_client.lookup("USER_1_order", "True")
        lookup_client.lookup("USER_1_order", "1")
        lookup_client.lookup("USER_1_order")

        paths = [r["path"] for r in notification_service.requests]
        assert paths[0].endswith("/USER_1_order?is_external_reference=true")
        assert all("?" not in p for p in paths[1:])

    def test_missing_api_key_makes_no_request(self, notification_service):
        client = NotificationLookupClient(api_key="", base_url=notification_service.url)

        with pytest.raises(ConfigError):
            client.lookup("PAY1")
        assert notification_service.requests == []

    @pytest.mark.parametrize("status", [401, 404, 500, 503])
    def test_non_2xx_is_upstream_error(self, lookup_client, notification_service, status):
        notification_service.respond_with(status, {"error": "nope"})

        with pytest.raises(UpstreamError) as exc_info:
            lookup_client.lookup("PAY1")
        assert exc_info.value.upstream_status == status
        assert exc_info.value.message == f"Bold API error: {status}"
        assert exc_info.value.status_code == 500

    def test_non_json_body_is_upstream_error(self, lookup_client, notification_service):
        notification_service.respond_with(200, b"<html>maintenance</html>")

        with pytest.raises(UpstreamError):
            lookup_client.lookup("PAY1")

    def test_unreachable_upstream_is_upstream_error(self):
        client = NotificationLookupClient(
            api_key="k", base_url="http://127.0.0.1:1/notifications", timeout_seconds=1
        )
        with pytest.raises(UpstreamError) as exc_info:
            client.lookup("PAY1")
        assert exc_info.value.upstream_status is None

    def test_uses_injected_session(self, notification_service):
        session = requests.Session()
        session.headers["X-Trace"] = "abc"
        client = NotificationLookupClient(
            api_key="k", base_url=notification_service.url, session=session
        )

        client.lookup("PAY1")

        assert notification_service.requests[0]["headers"]["X-Trace"] == "abc"
