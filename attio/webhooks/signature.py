"""
Attio webhook signature verification.

Attio signs each delivery with HMAC-SHA256 over "{timestamp}.{raw body}" and
sends the result as "v1=<hex>" in the X-Attio-Signature header, with the unix
timestamp in X-Attio-Timestamp. Verification must run on the raw body bytes:
re-serialized JSON is not guaranteed to match what was signed.
"""

import hashlib
import hmac
import json
import re
import time
from collections.abc import Mapping
from typing import Any, NamedTuple

from attio.errors import InvalidArgumentError, SignatureVerificationError
from attio.utils.logging import get_logger
from attio.webhooks.events import WebhookPayload

logger = get_logger(__name__)

SIGNATURE_HEADER = "x-attio-signature"
TIMESTAMP_HEADER = "x-attio-timestamp"
TOLERANCE_SECONDS = 300  # 5 minutes
SIGNATURE_PREFIX = "v1="

_HEADER_SEPARATORS = re.compile(r"[,\s]+")


class SignatureHeaders(NamedTuple):
    signature: str
    timestamp: str


def _canonical_payload(payload: Any) -> bytes:
    if isinstance(payload, bytes):
        return payload
    if isinstance(payload, str):
        return payload.encode("utf-8")
    return json.dumps(payload, separators=(",", ":"), ensure_ascii=False).encode("utf-8")


def calculate_signature(payload: Any, timestamp: int | str, secret: str) -> str:
    """Compute the "v1=<hex>" signature Attio would send for this payload.

    Mappings and lists are JSON-encoded compactly with key order preserved;
    str and bytes payloads are signed as-is.
    """
    signed_payload = f"{timestamp}.".encode() + _canonical_payload(payload)
    digest = hmac.new(secret.encode("utf-8"), signed_payload, hashlib.sha256).hexdigest()
    return f"{SIGNATURE_PREFIX}{digest}"


def secure_compare(a: str, b: str) -> bool:
    """Constant-time string comparison."""
    a_bytes = a.encode("utf-8")
    b_bytes = b.encode("utf-8")
    if len(a_bytes) != len(b_bytes):
        return False
    return hmac.compare_digest(a_bytes, b_bytes)


def _fail(reason: str) -> SignatureVerificationError:
    return SignatureVerificationError(f"Webhook signature verification failed: {reason}")


def _validate_inputs(payload: Any, signature: Any, timestamp: Any, secret: Any, tolerance: Any) -> None:
    if payload is None:
        raise _fail("Payload cannot be nil")
    if not signature:
        raise _fail("Signature cannot be nil or empty")
    if timestamp is None or str(timestamp) == "":
        raise _fail("Timestamp cannot be nil or empty")
    if not secret:
        raise _fail("Secret cannot be nil or empty")
    if tolerance is None:
        raise _fail("Tolerance cannot be nil")


def _parse_timestamp(timestamp: Any) -> int:
    if isinstance(timestamp, bool):
        raise _fail(f"Invalid timestamp: {timestamp!r}")
    if isinstance(timestamp, int):
        return timestamp
    try:
        return int(str(timestamp).strip())
    except ValueError:
        raise _fail(f"Invalid timestamp: {timestamp!r}") from None


def verify_signature(
    payload: Any,
    signature: str | None,
    timestamp: int | str | None,
    secret: str | None,
    tolerance: int | None = TOLERANCE_SECONDS,
    now: int | None = None,
) -> bool:
    """Verify a webhook signature, raising on any failure.

    Args:
        payload: Raw request body (bytes or str), or a decoded mapping
        signature: Value of the X-Attio-Signature header ("v1=<hex>")
        timestamp: Value of the X-Attio-Timestamp header (unix seconds)
        secret: Webhook secret from the webhook creation response
        tolerance: Allowed clock skew in seconds, applied in both directions
        now: Current unix time, for tests

    Returns:
        True

    Raises:
        SignatureVerificationError: With the failing reason in the message
    """
    _validate_inputs(payload, signature, timestamp, secret, tolerance)
    timestamp_int = _parse_timestamp(timestamp)
    current_time = int(time.time()) if now is None else now

    if timestamp_int < current_time - tolerance:
        raise _fail("Timestamp too old")
    if timestamp_int > current_time + tolerance:
        raise _fail("Timestamp too far in the future")

    # Sign the header value as sent; the parsed int only drives the tolerance window
    expected = calculate_signature(payload, timestamp, secret)
    if not secure_compare(str(signature), expected):
        raise _fail("Invalid signature")
    return True


def is_valid_signature(
    payload: Any,
    signature: str | None,
    timestamp: int | str | None,
    secret: str | None,
    tolerance: int | None = TOLERANCE_SECONDS,
    now: int | None = None,
) -> bool:
    """Boolean form of verify_signature."""
    try:
        return verify_signature(payload, signature, timestamp, secret, tolerance=tolerance, now=now)
    except SignatureVerificationError:
        return False


def parse_signature_header(header: str | None) -> tuple[str | None, str | None]:
    """Parse "t=<unix> v1=<hex>" (space or comma separated) into (timestamp, hex signature)."""
    if not header:
        return None, None

    timestamp = None
    signature = None
    for element in _HEADER_SEPARATORS.split(header.strip()):
        key, _, value = element.partition("=")
        if key == "t":
            timestamp = value
        elif key == "v1":
            signature = value
    return timestamp, signature


def _normalize_header_name(name: Any) -> str:
    normalized = str(name).lower().replace("_", "-")
    if normalized.startswith("http-"):
        normalized = normalized[len("http-") :]
    return normalized


def extract_from_headers(headers: Mapping[str, Any]) -> SignatureHeaders:
    """Find the signature and timestamp headers, ignoring case and -/_ separators.

    Raises:
        SignatureVerificationError: If either header is missing
    """
    normalized = {_normalize_header_name(key): value for key, value in headers.items()}
    signature = normalized.get(SIGNATURE_HEADER)
    timestamp = normalized.get(TIMESTAMP_HEADER)

    if signature and "t=" in str(signature) and "v1=" in str(signature):
        header_timestamp, header_signature = parse_signature_header(str(signature))
        if header_signature:
            signature = f"{SIGNATURE_PREFIX}{header_signature}"
        timestamp = timestamp or header_timestamp

    if not signature:
        raise SignatureVerificationError(f"Missing signature header: {SIGNATURE_HEADER}")
    if not timestamp:
        raise SignatureVerificationError(f"Missing timestamp header: {TIMESTAMP_HEADER}")

    return SignatureHeaders(signature=str(signature), timestamp=str(timestamp))


class WebhookHandler:
    """Verifies incoming webhook requests against one secret.

    Accepts a mapping with "headers" and "body" keys, or a framework request:
    anything with `get_data()` (Flask/Werkzeug) or a `body` attribute (Django,
    requests.PreparedRequest), with headers from `headers` or Django's `META`.
    """

    def __init__(self, secret: str, tolerance: int = TOLERANCE_SECONDS):
        if not secret:
            raise InvalidArgumentError("Webhook secret is required")
        self.secret = secret
        self.tolerance = tolerance

    def verify_request(self, request: Any) -> bool:
        headers = self._extract_headers(request)
        body = self._extract_body(request)
        signature_headers = extract_from_headers(headers)
        try:
            return verify_signature(
                body,
                signature_headers.signature,
                signature_headers.timestamp,
                self.secret,
                tolerance=self.tolerance,
            )
        except SignatureVerificationError as e:
            logger.warning("Attio webhook verification failed", reason=str(e))
            raise

    def parse_and_verify(self, request: Any) -> Any:
        """Verify the request, then decode its JSON body. An already-decoded body is returned as-is."""
        self.verify_request(request)
        body = self._extract_body(request)
        if isinstance(body, (Mapping, list)):
            return body
        try:
            if isinstance(body, bytes):
                body = body.decode("utf-8")
            return json.loads(body)
        except (TypeError, ValueError) as e:
            raise SignatureVerificationError(f"Invalid JSON payload: {e}") from e

    def parse_event_payload(self, request: Any) -> WebhookPayload:
        return WebhookPayload.model_validate(self.parse_and_verify(request))

    def _extract_headers(self, request: Any) -> Mapping[str, Any]:
        if isinstance(request, Mapping):
            return request.get("headers") or {}
        headers = getattr(request, "headers", None)
        if headers is not None:
            return headers
        meta = getattr(request, "META", None)
        if meta is not None:
            return meta
        raise InvalidArgumentError(f"Unsupported request type: {type(request).__name__}")

    def _extract_body(self, request: Any) -> Any:
        if isinstance(request, Mapping):
            body = request.get("body")
            return "" if body is None else body
        get_data = getattr(request, "get_data", None)
        if callable(get_data):
            return get_data()
        if hasattr(request, "body"):
            body = request.body
            return b"" if body is None else body
        raise InvalidArgumentError(f"Unsupported request type: {type(request).__name__}")
