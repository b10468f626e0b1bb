from attio.webhooks.events import WebhookEvent, WebhookPayload, extract_webhook_metadata
from attio.webhooks.signature import (
    SIGNATURE_HEADER,
    TIMESTAMP_HEADER,
    TOLERANCE_SECONDS,
    SignatureHeaders,
    WebhookHandler,
    calculate_signature,
    extract_from_headers,
    is_valid_signature,
    parse_signature_header,
    secure_compare,
    verify_signature,
)

__all__ = [
    "SIGNATURE_HEADER",
    "TIMESTAMP_HEADER",
    "TOLERANCE_SECONDS",
    "SignatureHeaders",
    "WebhookEvent",
    "WebhookHandler",
    "WebhookPayload",
    "calculate_signature",
    "extract_from_headers",
    "extract_webhook_metadata",
    "is_valid_signature",
    "parse_signature_header",
    "secure_compare",
    "verify_signature",
]
