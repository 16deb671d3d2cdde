import json
import logging
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from urllib.parse import parse_qs, unquote, urlsplit

from src.config.settings import RelayConfig
from src.models.errors import InvalidBody, NotFound, RelayError
from src.models.payment import PaymentRequest
from src.notifications.lookup import NotificationLookupClient
from src.payment_signer.signer import PaymentRequestSigner
from src.utils.crypto import loads_json_body
from src.webhook_receiver.dispatcher import SIGNATURE_HEADER, WebhookDispatcher
from src.webhook_receiver.handlers import PaymentEventHandler

logger = logging.getLogger(__name__)

CREATE_PAYMENT_PATH = "/api/create-payment"
WEBHOOK_PATH = "/api/webhook"
NOTIFICATIONS_PREFIX = "/api/webhook/notifications/"


def _route_path(raw_path: str) -> str:
    """Request path without query string or a single trailing slash."""
    path = urlsplit(raw_path).path
    if len(path) > 1 and path.endswith("/"):
        path = path[:-1]
    return path


class _RelayHandler(BaseHTTPRequestHandler):
    """HTTP request handler for the payment relay endpoints."""

    def do_POST(self):
        path = _route_path(self.path)

        if path == CREATE_PAYMENT_PATH:
            self._handle(self._create_payment)
        elif path == WEBHOOK_PATH:
            self._handle(self._webhook)
        else:
            self._handle(self._not_found)

    def do_GET(self):
        path = _route_path(self.path)
        if path.startswith(NOTIFICATIONS_PREFIX):
            payment_id = unquote(path[len(NOTIFICATIONS_PREFIX):])
            if payment_id and "/" not in payment_id:
                query = parse_qs(urlsplit(self.path).query)
                flag = query.get("is_external_reference", [None])[0]
                self._handle(self._notifications, payment_id, flag)
                return
        self._send_json(404, {"error": "not found"})

    def _read_body(self) -> bytes:
        try:
            content_length = int(self.headers.get("Content-Length", 0))
        except ValueError:
            raise InvalidBody("Invalid Content-Length") from None
        if content_length < 0:
            raise InvalidBody("Invalid Content-Length")
        return self.rfile.read(content_length)

    def _create_payment(self) -> dict:
        body = self._read_body()
        try:
            data = loads_json_body(body)
        except ValueError:
            raise InvalidBody("Invalid JSON") from None
        request = PaymentRequest.from_dict(data)
        return self.server.signer.create_payment(request).to_dict()  # type: ignore[attr-defined]

    def _webhook(self) -> dict:
        body = self._read_body()
        signature = self.headers.get(SIGNATURE_HEADER)
        return self.server.dispatcher.process(body, signature).to_dict()  # type: ignore[attr-defined]

    def _not_found(self):
        self._read_body()
        raise NotFound("not found")

    def _notifications(self, payment_id: str, flag: str | None):
        return self.server.lookup_client.lookup(payment_id, flag)  # type: ignore[attr-defined]

    def _handle(self, action, *args) -> None:
        try:
            result = action(*args)
        except RelayError as e:
            logger.warning("%s %s -> %s: %s", self.command, self.path, e.status_code, e.message)
            self._send_json(e.status_code, e.to_dict())
            return
        except Exception:
            logger.exception("Unhandled error on %s %s", self.command, self.path)
            self._send_json(500, {"error": "Internal server error"})
            return
        self._send_json(200, result)

    def _send_json(self, code: int, payload) -> None:
        data = json.dumps(payload, default=str).encode()
        self.send_response(code)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(data)))
        self.end_headers()
        self.wfile.write(data)

    def log_message(self, format, *args):
        logger.debug("%s - %s", self.address_string(), format % args)


class PaymentRelayServer:
    """HTTP server exposing payment signing, webhook intake and notification lookup."""

    def __init__(
        self,
        config: RelayConfig,
        handler: PaymentEventHandler | None = None,
        lookup_client: NotificationLookupClient | None = None,
    ):
        self.config = config
        self._host = config.host
        self._port = config.port
        self.signer = PaymentRequestSigner(config.secret_key)
        self.dispatcher = WebhookDispatcher(config.secret_key, handler)
        self.lookup_client = lookup_client or NotificationLookupClient(
            api_key=config.api_key,
            base_url=config.notifications_url,
            timeout_seconds=config.lookup_timeout_seconds,
        )
        self._server: ThreadingHTTPServer | None = None
        self._thread: threading.Thread | None = None

    def _bind(self) -> ThreadingHTTPServer:
        server = ThreadingHTTPServer((self._host, self._port), _RelayHandler)
        server.signer = self.signer  # type: ignore[attr-defined]
        server.dispatcher = self.dispatcher  # type: ignore[attr-defined]
        server.lookup_client = self.lookup_client  # type: ignore[attr-defined]
        # Get the actual port (useful when port=0)
        self._port = server.server_address[1]
        return server

    def start(self) -> None:
        """Serve in a background thread."""
        self._server = self._bind()
        self._thread = threading.Thread(target=self._server.serve_forever, daemon=True)
        self._thread.start()

    def serve_forever(self) -> None:
        """Serve in the calling thread until interrupted."""
        self._server = self._bind()
        logger.info("Backend running on %s", self.base_url)
        logger.info("Webhook endpoint: %s", self.webhook_url)
        try:
            self._server.serve_forever()
        finally:
            self._server.server_close()
            self._server = None

    def stop(self) -> None:
        if self._server:
            self._server.shutdown()
            self._server.server_close()
            self._server = None
        if self._thread:
            self._thread.join(timeout=5)
            self._thread = None

    @property
    def port(self) -> int:
        return self._port

    @property
    def base_url(self) -> str:
        return f"http://{self._host}:{self._port}"

    @property
    def webhook_url(self) -> str:
        return f"{self.base_url}{WEBHOOK_PATH}"

    @property
    def create_payment_url(self) -> str:
        return f"{self.base_url}{CREATE_PAYMENT_PATH}"

    def notifications_url(self, payment_id: str) -> str:
        return f"{self.base_url}{NOTIFICATIONS_PREFIX}{payment_id}"
