"""Integration tests for POST /api/create-payment."""

import dataclasses

import pytest
import requests

from src.payment_signer.signer import PaymentRequestSigner
from src.relay_server.server import PaymentRelayServer


pytestmark = pytest.mark.integration


class TestCreatePaymentEndpoint:

    def test_returns_signed_payload(self, relay_server, payment_factory, webhook_secret):
        body = payment_factory.create_body(reference="order-77", userId="42", amount=59900)

        resp = requests.post(relay_server.create_payment_url, json=body, timeout=5)

        assert resp.status_code == 200
        data = resp.json()
        _, expected = PaymentRequestSigner(webhook_secret).sign(59900, "order-77", "COP", "42")
        assert data == {
            "amount": 59900,
            "reference": "USER_42_order-77",
            "description": body["description"],
            "currency": "COP",
            "signature": expected,
            "orderId": "USER_42_order-77",
        }

    def test_without_user_keeps_reference(self, relay_server, payment_factory):
        body = payment_factory.create_body(reference="order-78", currency="USD")

        resp = requests.post(relay_server.create_payment_url, json=body, timeout=5)

        assert resp.status_code == 200
        assert resp.json()["reference"] == "order-78"
        assert resp.json()["orderId"] == "order-78"
        assert resp.json()["currency"] == "USD"

    def test_identical_requests_sign_identically(self, relay_server, payment_factory):
        body = payment_factory.create_body(reference="order-79")

        first = requests.post(relay_server.create_payment_url, json=body, timeout=5).json()
        second = requests.post(relay_server.create_payment_url, json=body, timeout=5).json()

        assert first["signature"] == second["signature"]

    def test_missing_reference_returns_400(self, relay_server):
        resp = requests.post(relay_server.create_payment_url, json={"amount": 100}, timeout=5)

        assert resp.status_code == 400
        assert "reference" in resp.json()["error"]

    def test_malformed_json_returns_400(self, relay_server):
        resp = requests.post(
            relay_server.create_payment_url,
            data="not json",
            headers={"Content-Type": "application/json"},
            timeout=5,
        )

        assert resp.status_code == 400
        assert resp.json() == {"error": "Invalid JSON"}

    def test_missing_secret_returns_400(self, relay_config, payment_factory):
        server = PaymentRelayServer(dataclasses.replace(relay_config, secret_key=""))
        server.start()
        try:
            resp = requests.post(
                server.create_payment_url, json=payment_factory.create_body(), timeout=5
            )
        finally:
            server.stop()

        assert resp.status_code == 400
        assert resp.json() == {"error": "Bold secret key not configured"}

    def test_unknown_path_returns_404(self, relay_server):
        resp = requests.post(f"{relay_server.base_url}/api/nope", json={}, timeout=5)
        assert resp.status_code == 404

    def test_trailing_slash_is_accepted(self, relay_server, payment_factory):
        resp = requests.post(
            f"{relay_server.create_payment_url}/",
            json=payment_factory.create_body(reference="order-80"),
            timeout=5,
        )

        assert resp.status_code == 200
        assert resp.json()["orderId"] == "order-80"
