"""Python client for the Attio REST API (v2)."""

from attio.client import AttioClient
from attio.config import AttioConfig
from attio.errors import (
    APIError,
    AttioError,
    AuthenticationError,
    BadGatewayError,
    ClientError,
    ConfigurationError,
    ConflictError,
    ConnectionError,
    ForbiddenError,
    GatewayTimeoutError,
    InternalServerError,
    InvalidArgumentError,
    InvalidOperationError,
    InvalidRequestError,
    InvalidResponseError,
    NotFoundError,
    RateLimitError,
    ServerError,
    ServiceUnavailableError,
    SignatureVerificationError,
    SSLError,
    TimeoutError,
    UnprocessableEntityError,
    ValidationError,
)
from attio.resources import (
    Attribute,
    AttioList,
    AttioObject,
    Comment,
    Company,
    Deal,
    ListEntry,
    ListObject,
    Meta,
    Note,
    Person,
    Record,
    Task,
    Thread,
    Webhook,
    WorkspaceMember,
)
from attio.version import __version__
from attio.webhooks import WebhookEvent, WebhookHandler, WebhookPayload, verify_signature

__all__ = [
    "APIError",
    "Attribute",
    "AttioClient",
    "AttioConfig",
    "AttioError",
    "AttioList",
    "AttioObject",
    "AuthenticationError",
    "BadGatewayError",
    "ClientError",
    "Comment",
    "Company",
    "ConfigurationError",
    "ConflictError",
    "ConnectionError",
    "Deal",
    "ForbiddenError",
    "GatewayTimeoutError",
    "InternalServerError",
    "InvalidArgumentError",
    "InvalidOperationError",
    "InvalidRequestError",
    "InvalidResponseError",
    "ListEntry",
    "ListObject",
    "Meta",
    "Note",
    "NotFoundError",
    "Person",
    "RateLimitError",
    "Record",
    "SSLError",
    "ServerError",
    "ServiceUnavailableError",
    "SignatureVerificationError",
    "Task",
    "Thread",
    "TimeoutError",
    "UnprocessableEntityError",
    "ValidationError",
    "Webhook",
    "WebhookEvent",
    "WebhookHandler",
    "WebhookPayload",
    "WorkspaceMember",
    "__version__",
    "verify_signature",
]
