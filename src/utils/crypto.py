import base64
import hashlib
import hmac
import json
import math
import re
from decimal import Decimal

MAX_SAFE_INTEGER = 2**53
_ARRAY_INDEX = re.compile(r"0|[1-9][0-9]*")
_LONE_SURROGATE = re.compile("[\ud800-\udfff]")


def format_js_number(value) -> str:
    """Render a number as JavaScript's ``Number.prototype.toString`` does.

    Integers beyond 2**53 lose precision exactly as they would after
    ``JSON.parse``; digits are the shortest round-trip form and exponent
    notation starts at 1e21 and below 1e-6.
    """
    if isinstance(value, int):
        if abs(value) <= MAX_SAFE_INTEGER:
            return str(value)
        try:
            value = float(value)
        except OverflowError:
            value = math.inf if value > 0 else -math.inf
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"

    sign = "-" if value < 0 else ""
    _, digit_tuple, exponent = Decimal(repr(abs(value))).normalize().as_tuple()
    digits = "".join(map(str, digit_tuple))
    k = len(digits)
    n = exponent + k  # position of the decimal point relative to the digits

    if k <= n <= 21:
        text = digits + "0" * (n - k)
    elif 0 < n <= 21:
        text = f"{digits[:n]}.{digits[n:]}"
    elif -6 < n <= 0:
        text = "0." + "0" * -n + digits
    else:
        e = n - 1
        mantissa = digits[0] + (f".{digits[1:]}" if k > 1 else "")
        text = f"{mantissa}e{'+' if e >= 0 else '-'}{abs(e)}"
    return sign + text


def format_amount(amount) -> str:
    """Render an amount the way a JavaScript template literal would."""
    if amount is None:
        return "undefined"
    if isinstance(amount, bool):
        return "true" if amount else "false"
    if isinstance(amount, (int, float)):
        return format_js_number(amount)
    return str(amount)


def generate_payment_signature(
    user_reference: str, amount, currency: str, secret: str
) -> str:
    """SHA-256 integrity hash over ``{reference}{amount}{currency}{secret}``."""
    message = f"{user_reference}{format_amount(amount)}{currency}{secret}"
    return hashlib.sha256(message.encode("utf-8")).hexdigest()


def parse_json_number(text: str):
    """Parse a JSON float the way JavaScript does: integral values become ints."""
    value = float(text)
    if value.is_integer():
        return int(value)
    return value


def loads_json_body(raw_body: bytes):
    return json.loads(raw_body.decode("utf-8"), parse_float=parse_json_number)


def _is_array_index(key) -> bool:
    return (
        isinstance(key, str)
        and _ARRAY_INDEX.fullmatch(key) is not None
        and int(key) < 2**32 - 1
    )


def _js_key_order(obj: dict) -> list:
    """Integer-like keys first in ascending order, then the rest in insertion order."""
    index_keys = sorted((k for k in obj if _is_array_index(k)), key=int)
    other_keys = [k for k in obj if not _is_array_index(k)]
    return [(k, obj[k]) for k in index_keys + other_keys]


def _encode_string(text: str) -> str:
    encoded = json.dumps(text, ensure_ascii=False)
    return _LONE_SURROGATE.sub(lambda m: f"\\u{ord(m.group()):04x}", encoded)


def _encode_value(value) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        text = format_js_number(value)
        return "null" if text in ("NaN", "Infinity", "-Infinity") else text
    if isinstance(value, str):
        return _encode_string(value)
    if isinstance(value, dict):
        members = ",".join(
            f"{_encode_string(str(k))}:{_encode_value(v)}" for k, v in _js_key_order(value)
        )
        return "{" + members + "}"
    if isinstance(value, (list, tuple)):
        return "[" + ",".join(_encode_value(v) for v in value) + "]"
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def encode_webhook_body(body) -> bytes:
    """Re-serialize a parsed webhook body as ``JSON.stringify`` would."""
    return _encode_value(body).encode("utf-8")


def generate_webhook_signature(body, secret: str) -> str:
    """HMAC-SHA256 hex digest over the base64 of the re-encoded body."""
    encoded = base64.b64encode(encode_webhook_body(body))
    return hmac.new(secret.encode("utf-8"), encoded, hashlib.sha256).hexdigest()


def constant_time_equals(expected: str, received: str) -> bool:
    """Compare two strings without leaking where or whether their lengths differ."""
    expected_digest = hashlib.sha256(expected.encode("utf-8")).digest()
    received_digest = hashlib.sha256(received.encode("utf-8")).digest()
    return hmac.compare_digest(expected_digest, received_digest)


def verify_webhook_signature(body, secret: str, signature: str | None) -> bool:
    """Verify an ``x-bold-signature`` header against a parsed webhook body."""
    if not signature:
        return False
    expected = generate_webhook_signature(body, secret)
    return constant_time_equals(expected, signature)
