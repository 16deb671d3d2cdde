import json
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest

from src.config.settings import RelayConfig
from src.notifications.lookup import NotificationLookupClient
from src.payment_signer.signer import PaymentRequestSigner
from src.relay_server.server import PaymentRelayServer
from src.utils.factories import PaymentRequestFactory, WebhookFactory
from src.webhook_receiver.dispatcher import WebhookDispatcher
from src.webhook_receiver.handlers import PaymentEventHandler
from src.webhook_simulator.sender import WebhookSender
from src.webhook_simulator.signer import BoldWebhookSigner


WEBHOOK_SECRET = "test-secret-key-for-hmac"
API_KEY = "test-api-key"


class RecordingEventHandler(PaymentEventHandler):
    """Event handler that records every call instead of acting on it."""

    def __init__(self):
        self.calls: list[tuple[str, str | None, dict]] = []
        self._lock = threading.Lock()

    def _record(self, name, user_id, data):
        with self._lock:
            self.calls.append((name, user_id, data))

    def on_sale_approved(self, user_id, data):
        self._record("sale_approved", user_id, data)

    def on_sale_rejected(self, user_id, data):
        self._record("sale_rejected", user_id, data)

    def on_void_approved(self, user_id, data):
        self._record("void_approved", user_id, data)

    def on_void_rejected(self, user_id, data):
        self._record("void_rejected", user_id, data)


class _UpstreamHandler(BaseHTTPRequestHandler):
    def do_GET(self):
        state = self.server.state  # type: ignore[attr-defined]
        with state["lock"]:
            state["requests"].append({"path": self.path, "headers": dict(self.headers)})
        code = state["response_code"]
        body = state["response_body"]
        data = body if isinstance(body, bytes) else json.dumps(body).encode()
        self.send_response(code)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(data)))
        self.end_headers()
        self.wfile.write(data)

    def log_message(self, format, *args):
        pass


class StubNotificationService:
    """Local stand-in for Bold's notification lookup service."""

    def __init__(self):
        self._state = {
            "response_code": 200,
            "response_body": {"notifications": []},
            "requests": [],
            "lock": threading.Lock(),
        }
        self._server: ThreadingHTTPServer | None = None
        self._thread: threading.Thread | None = None

    def respond_with(self, code: int, body) -> "StubNotificationService":
        self._state["response_code"] = code
        self._state["response_body"] = body
        return self

    def start(self) -> None:
        self._server = ThreadingHTTPServer(("127.0.0.1", 0), _UpstreamHandler)
        self._server.state = self._state  # type: ignore[attr-defined]
        self._thread = threading.Thread(target=self._server.serve_forever, daemon=True)
        self._thread.start()

    def stop(self) -> None:
        if self._server:
            self._server.shutdown()
            self._server.server_close()
            self._server = None
        if self._thread:
            self._thread.join(timeout=5)
            self._thread = None

    @property
    def url(self) -> str:
        return f"http://127.0.0.1:{self._server.server_address[1]}/payments/webhook/notifications"

    @property
    def requests(self) -> list[dict]:
        with self._state["lock"]:
            return list(self._state["requests"])


@pytest.fixture
def webhook_secret():
    return WEBHOOK_SECRET


@pytest.fixture
def notification_service():
    service = StubNotificationService()
    service.start()
    yield service
    service.stop()


@pytest.fixture
def relay_config(notification_service):
    return RelayConfig(
        secret_key=WEBHOOK_SECRET,
        api_key=API_KEY,
        host="127.0.0.1",
        port=0,
        notifications_url=notification_service.url,
        lookup_timeout_seconds=5,
    )


@pytest.fixture
def payment_signer():
    return PaymentRequestSigner(WEBHOOK_SECRET)


@pytest.fixture
def event_handler():
    return RecordingEventHandler()


@pytest.fixture
def dispatcher(event_handler):
    return WebhookDispatcher(WEBHOOK_SECRET, event_handler)


@pytest.fixture
def bold_signer():
    return BoldWebhookSigner(WEBHOOK_SECRET)


@pytest.fixture
def sender(bold_signer):
    return WebhookSender(bold_signer, timeout_seconds=5)


@pytest.fixture
def lookup_client(notification_service):
    return NotificationLookupClient(
        api_key=API_KEY, base_url=notification_service.url, timeout_seconds=5
    )


@pytest.fixture
def relay_server(relay_config, event_handler):
    server = PaymentRelayServer(relay_config, handler=event_handler)
    server.start()
    yield server
    server.stop()


@pytest.fixture
def payment_factory():
    return PaymentRequestFactory


@pytest.fixture
def webhook_factory():
    return WebhookFactory
